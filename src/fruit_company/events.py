"""Events emitted by `perform` while it works through a request."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from .auth.base import Authority
    from .http import HttpResponse, OutboundRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WillRefreshAuthority:
    """The authority is about to be refreshed.

    `retry` is the attempt number that was rejected as unauthorized, or None
    for the initial refresh of an invalid authority.
    """

    authority: Authority
    retry: int | None = None


@dataclass(frozen=True, slots=True)
class WillAuthenticate:
    authority: Authority
    request: OutboundRequest


@dataclass(frozen=True, slots=True)
class WillSend:
    request: OutboundRequest


@dataclass(frozen=True, slots=True)
class WillParse:
    response: HttpResponse


Event = Union[WillRefreshAuthority, WillAuthenticate, WillSend, WillParse]
Observer = Callable[[Event], None]


def no_observer(event: Event) -> None:
    """Default observer; ignores every event."""


def describe(event: Event) -> str:
    """Render a one-line, token-free description of an event."""

    if isinstance(event, WillRefreshAuthority):
        if event.retry is None:
            return f"refreshing {event.authority!r}"
        return f"refreshing {event.authority!r} after rejected attempt {event.retry}"
    if isinstance(event, WillAuthenticate):
        return f"authenticating {event.request.method.upper()} {event.request.url} with {event.authority!r}"
    if isinstance(event, WillSend):
        return f"sending {event.request.method.upper()} {event.request.url}"
    if isinstance(event, WillParse):
        return f"parsing {event.response.status_code} {event.response.status_text} from {event.response.url}"
    raise TypeError(f"Unknown event {event!r}")


def logging_observer(event: Event) -> None:
    """Record every event at DEBUG level."""

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s", describe(event))


__all__ = [
    "Event",
    "Observer",
    "WillAuthenticate",
    "WillParse",
    "WillRefreshAuthority",
    "WillSend",
    "describe",
    "logging_observer",
    "no_observer",
]
