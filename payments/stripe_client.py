from typing import Optional

import requests
import structlog

from core.dependencies import get_settings
from core.settings import Settings
from payments.account import AccountClient
from payments.errors import StripeError
from payments.event import EventClient
from payments.invoice import InvoiceClient
from payments.transport import BaseClient

log = structlog.get_logger(__name__)


class StripeClient:
    """Entry point bundling every resource client over one transport."""

    def __init__(self, base: BaseClient):
        self.base = base
        self.accounts = AccountClient(base)
        self.invoices = InvoiceClient(base)
        self.events = EventClient(base)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> "StripeClient":
        """Build a client from settings, defaulting to the process settings."""
        settings = settings or get_settings()
        return cls(BaseClient.from_settings(settings, session=session))

    def test_connection(self) -> bool:
        """Test the Stripe API connection."""
        try:
            self.accounts.retrieve()
            return True
        except StripeError as e:
            log.warning("stripe.connection_check_failed", error=str(e))
            return False

    def close(self):
        self.base.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
