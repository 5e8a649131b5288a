"""
Events.

Only the structured payload shape is supported: ``data`` is an object with
the affected resource under ``object`` and, for ``*.updated`` events, the
changed fields' old values under ``previous_attributes``. Older payloads with
a flat ``data`` map are rejected with a DecodeError.

see https://stripe.com/docs/api#event_object
"""

from typing import List, Optional, Union

import structlog
from pydantic import JsonValue, ValidationError

from core.logging import RequestEvents
from payments.errors import DecodeError
from payments.optional import String
from payments.resource import (
    DEFAULT_COUNT,
    DEFAULT_OFFSET,
    ListResponse,
    ResourceClient,
    StripeObject,
    escape_id,
    page_values,
)

log = structlog.get_logger(__name__)


class EventType:
    """Event type names this package knows about"""

    ACCOUNT_UPDATED = "account.updated"
    INVOICE_CREATED = "invoice.created"
    INVOICE_UPDATED = "invoice.updated"
    INVOICE_PAYMENT_SUCCEEDED = "invoice.payment_succeeded"
    INVOICE_PAYMENT_FAILED = "invoice.payment_failed"


class EventData(StripeObject):
    object: dict[str, JsonValue]
    previous_attributes: Optional[dict[str, JsonValue]] = None


class Event(StripeObject):
    id: str
    livemode: bool
    created: int
    data: EventData
    pending_webhooks: int
    type: str
    request: String
    user_id: String = String.absent()  # Stripe Connect


def parse_event(payload: Union[bytes, str, dict]) -> Event:
    """Decode a raw event body, e.g. one delivered to a webhook endpoint."""
    try:
        if isinstance(payload, dict):
            return Event.model_validate(payload)
        return Event.model_validate_json(payload)
    except ValidationError as e:
        log.error(RequestEvents.DECODE_FAILED, model="Event", error_count=e.error_count())
        raise DecodeError(f"could not decode Event: {e}") from e


class EventClient(ResourceClient):
    """Event lookups."""

    PATH = "/v1/events"

    def retrieve(self, id: str) -> Event:
        return self._client.query("GET", f"{self.PATH}/{escape_id(id)}", None, Event)

    def list(
        self,
        count: int = DEFAULT_COUNT,
        offset: int = DEFAULT_OFFSET,
        type: Optional[str] = None,
    ) -> List[Event]:
        """Return one page of events, optionally of a single type."""
        values = page_values(count, offset)
        if type:
            values.append(("type", type))
        resp = self._client.query("GET", self.PATH, values, ListResponse[Event])
        return list(resp.data)
