"""Execute a request against a service on behalf of an authority."""

from __future__ import annotations

import logging
import threading
import time
from typing import TypeVar

from .auth.base import Authority
from .events import (
    Observer,
    WillAuthenticate,
    WillParse,
    WillRefreshAuthority,
    WillSend,
    no_observer,
)
from .exceptions import PerformCancelledError, RetryLimitExceededError
from .http import HttpResponse, OutboundRequest, RequestsTransport, Transport
from .request import Request

logger = logging.getLogger(__name__)

A = TypeVar("A", bound=Authority)
R = TypeVar("R")

UNAUTHORIZED = 401


def perform(
    authority: A,
    request: Request[A, R],
    *,
    transport: Transport | None = None,
    observer: Observer = no_observer,
    deadline: float | None = None,
    cancel: threading.Event | None = None,
) -> R:
    """Authenticate and send `request`, returning its parsed result.

    An invalid authority is refreshed before anything is sent. Each attempt
    answered with 401 refreshes the authority and tries again, up to
    ``authority.retry_limit`` extra attempts; after that
    `RetryLimitExceededError` is raised. Every other failure, including the
    typed errors raised by ``request.parse``, propagates immediately.

    Args:
        authority: Credential used to authenticate the call.
        request: The operation to perform.
        transport: Callable performing the network exchange. A
            `RequestsTransport` is created (and closed) for the call when omitted.
        observer: Receives an event before every refresh, authentication,
            send and parse. Exceptions it raises abort the call.
        deadline: Absolute `time.monotonic()` value after which the call is
            abandoned with `PerformCancelledError`. Also bounds the timeout of
            every exchange, including the authority's own.
        cancel: Event that, once set, abandons the call between steps.
    """

    if transport is None:
        with RequestsTransport() as owned_transport:
            return _perform(authority, request, owned_transport, observer, deadline, cancel)
    return _perform(authority, request, transport, observer, deadline, cancel)


def _perform(
    authority: A,
    request: Request[A, R],
    transport: Transport,
    observer: Observer,
    deadline: float | None,
    cancel: threading.Event | None,
) -> R:
    send = _bounded(transport, deadline, cancel)

    if not authority.is_valid:
        _ensure_not_cancelled(deadline, cancel)
        observer(WillRefreshAuthority(authority))
        authority.refresh(send)

    retry_limit = authority.retry_limit
    for attempt in range(retry_limit + 1):
        _ensure_not_cancelled(deadline, cancel)
        logger.debug("Attempt %d of %d for %r", attempt + 1, retry_limit + 1, request)
        outbound = request.prepare(authority)
        observer(WillAuthenticate(authority, outbound))
        outbound = authority.authenticate(outbound)
        observer(WillSend(outbound))
        response = send(outbound)
        if not response.ok and response.status_code == UNAUTHORIZED:
            observer(WillRefreshAuthority(authority, retry=attempt))
            authority.refresh(send)
            continue
        observer(WillParse(response))
        return request.parse(authority, response)

    logger.warning(
        "Giving up on %r after %d unauthorized attempts", request, retry_limit + 1
    )
    raise RetryLimitExceededError()


def _bounded(
    transport: Transport,
    deadline: float | None,
    cancel: threading.Event | None,
) -> Transport:
    if deadline is None and cancel is None:
        return transport

    def send(outbound: OutboundRequest) -> HttpResponse:
        _ensure_not_cancelled(deadline, cancel)
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if outbound.timeout is None or outbound.timeout > remaining:
                outbound.timeout = remaining
        return transport(outbound)

    return send


def _ensure_not_cancelled(deadline: float | None, cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise PerformCancelledError("Request was cancelled")
    if deadline is not None and time.monotonic() >= deadline:
        raise PerformCancelledError("Request deadline exceeded")
