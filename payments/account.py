from payments.optional import String
from payments.resource import ResourceClient, StripeObject


class Account(StripeObject):
    """
    The Stripe account the API key belongs to.

    see https://stripe.com/docs/api#account
    """

    id: str
    email: String = String.absent()
    statement_descriptor: String = String.absent()
    display_name: String = String.absent()
    timezone: str
    details_submitted: bool
    charge_enabled: bool
    transfer_enabled: bool


class AccountClient(ResourceClient):
    """Account lookups."""

    PATH = "/v1/account"

    def retrieve(self) -> Account:
        """Retrieve the account linked to the API key."""
        return self._client.query("GET", self.PATH, None, Account)
