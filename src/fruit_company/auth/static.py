"""Bearer token authority for tokens issued elsewhere."""

from __future__ import annotations

import math
import time

from ..exceptions import AuthorityError
from ..http import Transport
from .base import Authority, Clock, Credential
from .signing import token_expiry


class StaticBearerToken(Authority):
    """Apply an already issued bearer token.

    The expiry is read from the token's ``exp`` claim unless given explicitly;
    opaque tokens without either never expire. Refreshing cannot mint a new
    token, so it fails once the token has expired.
    """

    retry_limit = 0

    def __init__(
        self,
        token: str,
        *,
        expires_at: float | None = None,
        clock: Clock = time.time,
    ) -> None:
        super().__init__(clock=clock)
        self._token = token
        if expires_at is None:
            expires_at = token_expiry(token)
        self._token_expires_at = math.inf if expires_at is None else expires_at

    def update_token(self, token: str, *, expires_at: float | None = None) -> None:
        """Swap in a token obtained out of band; takes effect on the next refresh."""

        self._token = token
        if expires_at is None:
            expires_at = token_expiry(token)
        self._token_expires_at = math.inf if expires_at is None else expires_at

    def _issue(self, transport: Transport) -> Credential:
        credential = Credential(token=self._token, expires_at=self._token_expires_at)
        if not credential.is_live(self._clock()):
            raise AuthorityError(
                "StaticBearerToken holds an empty or expired token and cannot refresh it.",
                status_code=401,
                status_text="Unauthorized",
            )
        return credential
