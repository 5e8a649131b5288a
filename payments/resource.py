"""
Pieces shared by every resource client.
"""

from typing import Generic, TypeVar
from urllib.parse import quote

import structlog
from pydantic import BaseModel, ConfigDict

from core.logging import RequestEvents
from payments.errors import ParameterError
from payments.transport import BaseClient

log = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_COUNT = 10
DEFAULT_OFFSET = 0


class StripeObject(BaseModel):
    """Base for decoded Stripe entities: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ListResponse(BaseModel, Generic[T]):
    """The `{"data": [...]}` envelope of list endpoints."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    data: list[T]


def escape_id(value: str) -> str:
    """Escape an object id so it stays a single path segment."""
    if not value:
        raise invalid_params("id must not be empty")
    return quote(value, safe="")


def page_values(count: int, offset: int) -> list[tuple[str, str]]:
    if count < 0 or offset < 0:
        raise invalid_params(
            f"count and offset must be non-negative, got count={count} offset={offset}"
        )
    return [("count", str(count)), ("offset", str(offset))]


def invalid_params(message: str) -> ParameterError:
    log.warning(RequestEvents.INVALID_PARAMS, error=message)
    return ParameterError(message)


class ResourceClient:
    """A client for one Stripe resource, issuing requests through ``client``."""

    def __init__(self, client: BaseClient):
        self._client = client

    @property
    def client(self) -> BaseClient:
        return self._client
