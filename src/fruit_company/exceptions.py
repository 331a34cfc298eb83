"""Custom exception hierarchy for the fruit-company client."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class FruitError(RuntimeError):
    """Base error for fruit-company failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        status_text: str | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.details = details


class AuthorityError(FruitError):
    """Raised when an authority cannot produce or apply a valid credential."""


class RESTError(FruitError):
    """Raised when a service answers with a non-success status."""


class RetryLimitExceededError(RESTError):
    """Raised when every attempt of a request was rejected as unauthorized."""

    def __init__(self) -> None:
        super().__init__(
            "Retry limit exceeded",
            status_code=401,
            status_text="Unauthorized",
        )


class UnexpectedResponseError(FruitError):
    """Raised when the API returns an unexpected payload structure."""


class TransportError(FruitError):
    """Raised when an HTTP exchange cannot be completed."""


class PerformCancelledError(FruitError):
    """Raised when a deadline passes or cancellation is requested mid-request."""


def format_error_message(message: str | None, details: Sequence[str] | None = None) -> str:
    """Combine a service error message with its detail strings."""

    text = message or ""
    if details:
        return f"{text} ({', '.join(str(detail) for detail in details)})"
    return text
