"""
Stripe REST bindings for accounts, invoices and events.
"""

from .account import Account, AccountClient
from .errors import (
    APIConnectionError,
    APIError,
    DecodeError,
    ParameterError,
    StripeError,
)
from .event import Event, EventClient, EventData, EventType, parse_event
from .invoice import (
    Discount,
    Invoice,
    InvoiceClient,
    InvoiceLine,
    InvoiceLines,
    InvoiceParams,
    Period,
    Plan,
)
from .optional import Int64, OptionalScalar, String
from .stripe_client import StripeClient
from .transport import BaseClient

__all__ = [
    "Account",
    "AccountClient",
    "APIConnectionError",
    "APIError",
    "BaseClient",
    "DecodeError",
    "Discount",
    "Event",
    "EventClient",
    "EventData",
    "EventType",
    "Int64",
    "Invoice",
    "InvoiceClient",
    "InvoiceLine",
    "InvoiceLines",
    "InvoiceParams",
    "OptionalScalar",
    "ParameterError",
    "Period",
    "Plan",
    "StripeClient",
    "StripeError",
    "String",
    "parse_event",
]
