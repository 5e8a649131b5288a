"""
Stripe transport.

``BaseClient`` is the one place that talks HTTP. Resource clients hand it a
method, a path and form values, and get back a decoded pydantic model or an
exception from ``payments.errors``.
"""

from typing import Any, Mapping, Optional, Sequence, TypeVar, Union

import requests
import structlog
from pydantic import BaseModel, ValidationError

from core.logging import RequestEvents
from core.settings import Settings
from payments.errors import APIConnectionError, APIError, DecodeError

log = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

FormValues = Union[Mapping[str, Any], Sequence[tuple[str, Any]]]

USER_AGENT = "stripe-bindings/0.1.0"


class BaseClient:
    """Authenticated request issuer shared by every resource client."""

    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.stripe.com",
        api_version: Optional[str] = None,
        account: Optional[str] = None,
        timeout: float = 80.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("api_key must not be empty")
        self.api_base = api_base.rstrip("/")
        self.api_version = api_version
        self.account = account
        self.timeout = timeout
        self._api_key = api_key
        self._session = session or requests.Session()

    @classmethod
    def from_settings(
        cls, settings: Settings, session: Optional[requests.Session] = None
    ) -> "BaseClient":
        return cls(
            api_key=settings.STRIPE_API_KEY,
            api_base=settings.STRIPE_API_BASE,
            api_version=settings.STRIPE_API_VERSION,
            account=settings.STRIPE_ACCOUNT,
            timeout=settings.STRIPE_TIMEOUT,
            session=session,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if self.api_version:
            headers["Stripe-Version"] = self.api_version
        if self.account:
            headers["Stripe-Account"] = self.account
        return headers

    def query(
        self,
        method: str,
        path: str,
        params: Optional[FormValues],
        model: type[M],
    ) -> M:
        """
        Issue one request and decode the JSON body into ``model``.

        Args:
            method: HTTP verb, "GET" or "POST"
            path: API path starting with /v1, ids already escaped
            params: query string values on GET, form body on POST
            model: pydantic model the response body is decoded into

        Returns:
            An instance of ``model``

        Raises:
            APIConnectionError: no HTTP response was received
            APIError: Stripe answered with a non-2xx status
            DecodeError: the body is not JSON or does not fit ``model``
        """
        method = method.upper()
        url = self.api_base + path
        kwargs: dict[str, Any] = {
            "headers": self._headers(),
            "auth": (self._api_key, ""),
            "timeout": self.timeout,
        }
        if params:
            if method == "GET":
                kwargs["params"] = params
            else:
                kwargs["data"] = params

        log.debug(RequestEvents.REQUEST, method=method, path=path)

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            log.error(
                RequestEvents.REQUEST_FAILED, method=method, path=path, error=str(e)
            )
            raise APIConnectionError(
                f"could not reach Stripe at {self.api_base}: {e}"
            ) from e

        request_id = response.headers.get("Request-Id")
        log.debug(
            RequestEvents.RESPONSE,
            method=method,
            path=path,
            status=response.status_code,
            request_id=request_id,
        )

        if not 200 <= response.status_code < 300:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            err = APIError.from_response(response.status_code, body)
            log.error(
                RequestEvents.REQUEST_FAILED,
                method=method,
                path=path,
                status=response.status_code,
                request_id=request_id,
                error_type=err.error_type,
                error=str(err),
            )
            raise err

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            log.error(
                RequestEvents.DECODE_FAILED,
                method=method,
                path=path,
                model=model.__name__,
                request_id=request_id,
                error_count=e.error_count(),
            )
            raise DecodeError(
                f"could not decode {model.__name__} from {method} {path}: {e}"
            ) from e

    def close(self):
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
