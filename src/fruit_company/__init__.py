"""Typed clients for Apple's maps, music and weather REST services."""
from .auth import Authority, Credential, StaticBearerToken
from .config import ClientConfig, Credentials, credentials_from_env
from .events import Event, Observer, logging_observer, no_observer
from .exceptions import (
    AuthorityError,
    FruitError,
    PerformCancelledError,
    RESTError,
    RetryLimitExceededError,
)
from .http import HttpResponse, OutboundRequest, RequestsTransport, Transport
from .perform import perform
from .request import Request

__all__ = [
    "Authority",
    "AuthorityError",
    "ClientConfig",
    "Credential",
    "Credentials",
    "Event",
    "FruitError",
    "HttpResponse",
    "Observer",
    "OutboundRequest",
    "PerformCancelledError",
    "RESTError",
    "Request",
    "RequestsTransport",
    "RetryLimitExceededError",
    "StaticBearerToken",
    "Transport",
    "credentials_from_env",
    "logging_observer",
    "no_observer",
    "perform",
]
