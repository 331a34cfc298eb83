"""Base abstractions for authorities."""
from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

from ..exceptions import AuthorityError
from ..http import OutboundRequest, Transport

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class Credential:
    """A bearer token together with the epoch second it stops being usable."""

    token: str
    expires_at: float

    def is_live(self, now: float) -> bool:
        return bool(self.token) and now < self.expires_at


class Authority(ABC):
    """Interface each credential type must implement.

    An authority starts out invalid and only becomes valid through `refresh`.
    Refreshes are serialized per instance: a caller that waited on the lock
    while another caller produced a fresh credential reuses that credential
    instead of issuing a second one. The credential itself is replaced with a
    single assignment, so `is_valid` and `authenticate` never see a
    half-applied refresh.
    """

    retry_limit: ClassVar[int] = 1

    def __init__(self, *, clock: Clock = time.time) -> None:
        self._clock = clock
        self._credential: Credential | None = None
        self._generation = 0
        self._refresh_lock = threading.Lock()

    @property
    def is_valid(self) -> bool:
        credential = self._credential
        return credential is not None and credential.is_live(self._clock())

    @property
    def expires_at(self) -> float | None:
        credential = self._credential
        return credential.expires_at if credential else None

    def refresh(self, transport: Transport) -> None:
        """Obtain a fresh credential, using `transport` for any network exchange."""

        observed = self._generation
        with self._refresh_lock:
            if self._generation != observed and self.is_valid:
                logger.debug("%r was refreshed by a concurrent caller", self)
                return
            credential = self._issue(transport)
            if not credential.token:
                raise AuthorityError(f"{type(self).__name__} produced an empty credential.")
            self._credential = credential
            self._generation += 1
        logger.debug("Refreshed %r", self)

    def authenticate(self, request: OutboundRequest) -> OutboundRequest:
        """Attach credentials to `request` in place and return it."""

        credential = self._credential
        if credential is None or not credential.is_live(self._clock()):
            raise AuthorityError(
                f"Invalid {type(self).__name__} cannot be used to authenticate requests.",
                status_code=401,
                status_text="Unauthorized",
            )
        request.headers["Authorization"] = f"Bearer {credential.token}"
        return request

    @abstractmethod
    def _issue(self, transport: Transport) -> Credential:
        """Produce a new credential or raise `AuthorityError`."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_valid={self.is_valid}, expires_at={self.expires_at})"
