"""
Stripe client errors.

Every failed call raises exactly one of these. Nothing is retried here;
callers decide what to do with each failure.
"""

from typing import Any, Optional


class StripeError(Exception):
    pass


class APIConnectionError(StripeError):
    """The request never produced an HTTP response (DNS, TLS, timeout...)."""


class APIError(StripeError):
    """Stripe answered with a non-success status."""

    def __init__(
        self,
        message: str,
        http_status: int,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
        param: Optional[str] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.http_status = http_status
        self.error_type = error_type
        self.code = code
        self.param = param
        self.body = body

    @classmethod
    def from_response(cls, status: int, body: Any) -> "APIError":
        """Build an APIError from the `{"error": {...}}` envelope Stripe returns."""
        err = body.get("error") if isinstance(body, dict) else None
        if not isinstance(err, dict):
            return cls(f"Stripe returned HTTP {status}", http_status=status, body=body)
        return cls(
            err.get("message") or f"Stripe returned HTTP {status}",
            http_status=status,
            error_type=err.get("type"),
            code=err.get("code"),
            param=err.get("param"),
            body=body,
        )

    def __repr__(self):
        return (
            f"APIError(http_status={self.http_status!r}, "
            f"error_type={self.error_type!r}, message={str(self)!r})"
        )


class DecodeError(StripeError):
    """The response body is not JSON or does not match the expected shape."""


class ParameterError(StripeError, ValueError):
    """Caller input was rejected before any request was sent."""
