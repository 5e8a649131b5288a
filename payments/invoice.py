"""
Invoices.

Statements of what a customer owes for a billing period, including
subscriptions, invoice items and proration adjustments.

see https://stripe.com/docs/api#invoice_object
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import JsonValue

from payments.optional import Int64, String
from payments.resource import (
    DEFAULT_COUNT,
    DEFAULT_OFFSET,
    ListResponse,
    ResourceClient,
    StripeObject,
    escape_id,
    invalid_params,
    page_values,
)


class Period(StripeObject):
    start: int
    end: int


class Plan(StripeObject):
    id: str
    amount: int
    currency: str
    interval: str
    interval_count: int = 1
    name: String = String.absent()
    trial_period_days: Int64 = Int64.absent()
    livemode: bool = False


class Discount(StripeObject):
    id: String = String.absent()
    coupon: dict[str, JsonValue] = {}
    customer: String = String.absent()
    start: Int64 = Int64.absent()
    end: Int64 = Int64.absent()


class InvoiceLine(StripeObject):
    type: str
    description: String = String.absent()
    amount: int
    period: Optional[Period] = None
    plan: Optional[Plan] = None


class InvoiceLines(StripeObject):
    data: list[InvoiceLine] = []


class Invoice(StripeObject):
    id: str
    amount_due: int
    attempt_count: int
    attempted: bool
    closed: bool
    paid: bool
    period_end: int
    period_start: int
    subtotal: int
    total: int
    charge: String = String.absent()
    customer: str
    date: int
    discount: Optional[Discount] = None
    lines: Optional[InvoiceLines] = None
    starting_balance: int
    ending_balance: Int64 = Int64.absent()
    next_payment_attempt: Int64 = Int64.absent()
    livemode: bool
    application_fee: Int64 = Int64.absent()
    metadata: dict[str, JsonValue] = {}


Metadata = Union[str, tuple[str, str]]


@dataclass(frozen=True)
class InvoiceParams:
    """Form values for creating or updating an invoice."""

    customer: str = ""

    # A fee in cents applied to the invoice and transferred to the application
    # owner's Stripe account. Requires an OAuth key. Zero means "not set".
    application_fee: int = 0

    # A single metadata entry, either "key=value" or ("key", "value")
    metadata: Optional[Metadata] = None

    def metadata_pair(self) -> Optional[tuple[str, str]]:
        if self.metadata is None:
            return None
        if isinstance(self.metadata, str):
            if self.metadata.count("=") != 1:
                raise invalid_params(
                    f"metadata must be a single key=value pair, got {self.metadata!r}"
                )
            key, value = self.metadata.split("=")
        elif (
            isinstance(self.metadata, tuple)
            and len(self.metadata) == 2
            and all(isinstance(part, str) for part in self.metadata)
        ):
            key, value = self.metadata
        else:
            raise invalid_params(
                f"metadata must be a (key, value) pair of strings, got {self.metadata!r}"
            )
        if not key:
            raise invalid_params("metadata key must not be empty")
        return key, value

    def form_values(self, creating: bool) -> list[tuple[str, str]]:
        """Encode the params; raises ParameterError before anything is sent."""
        values = []
        if creating:
            if not self.customer:
                raise invalid_params("customer is required to create an invoice")
            values.append(("customer", self.customer))
        elif self.customer:
            raise invalid_params("customer cannot be changed on an existing invoice")

        # bool is an int subclass; True must not be sent as a fee
        if isinstance(self.application_fee, bool) or not isinstance(
            self.application_fee, int
        ):
            raise invalid_params(
                f"application_fee must be an integer, got {self.application_fee!r}"
            )

        pair = self.metadata_pair()
        if pair is not None:
            values.append((f"metadata[{pair[0]}]", pair[1]))

        if self.application_fee != 0:
            values.append(("application_fee", str(self.application_fee)))
        return values


class InvoiceClient(ResourceClient):
    """Invoice operations."""

    PATH = "/v1/invoices"

    def retrieve(self, id: str) -> Invoice:
        """
        Retrieve the invoice with the given id.

        see https://stripe.com/docs/api#retrieve_invoice
        """
        return self._client.query("GET", f"{self.PATH}/{escape_id(id)}", None, Invoice)

    def retrieve_customer(self, customer_id: str) -> Invoice:
        """
        Retrieve the upcoming invoice for a customer.

        see https://stripe.com/docs/api#retrieve_customer_invoice
        """
        if not customer_id:
            raise invalid_params("customer id must not be empty")
        return self._client.query(
            "GET", f"{self.PATH}/upcoming", [("customer", customer_id)], Invoice
        )

    def create(self, params: InvoiceParams) -> Invoice:
        """
        see https://stripe.com/docs/api#create_invoice
        """
        values = params.form_values(creating=True)
        return self._client.query("POST", self.PATH, values, Invoice)

    def update(self, id: str, params: InvoiceParams) -> Invoice:
        """
        Update the mutable fields of an invoice.

        see https://stripe.com/docs/api#update_invoice
        """
        path = f"{self.PATH}/{escape_id(id)}"
        values = params.form_values(creating=False)
        return self._client.query("POST", path, values, Invoice)

    def pay(self, id: str) -> Invoice:
        """
        Attempt to collect payment outside the normal retry schedule.

        see https://stripe.com/docs/api#pay_invoice
        """
        return self._client.query(
            "POST", f"{self.PATH}/{escape_id(id)}/pay", None, Invoice
        )

    def list(
        self,
        customer: Optional[str] = None,
        count: int = DEFAULT_COUNT,
        offset: int = DEFAULT_OFFSET,
    ) -> List[Invoice]:
        """
        Return one page of invoices, optionally for a single customer.

        see https://stripe.com/docs/api#list_customer_invoices
        """
        values = page_values(count, offset)
        if customer:
            values.append(("customer", customer))
        resp = self._client.query("GET", self.PATH, values, ListResponse[Invoice])
        return list(resp.data)

    def list_n(self, count: int, offset: int) -> List[Invoice]:
        return self.list(count=count, offset=offset)

    def customer_list(self, customer_id: str) -> List[Invoice]:
        return self.customer_list_n(customer_id, DEFAULT_COUNT, DEFAULT_OFFSET)

    def customer_list_n(
        self, customer_id: str, count: int, offset: int
    ) -> List[Invoice]:
        if not customer_id:
            raise invalid_params("customer id must not be empty")
        return self.list(customer=customer_id, count=count, offset=offset)
