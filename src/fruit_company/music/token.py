"""Developer tokens for the music catalog service."""

from __future__ import annotations

import time

from ..auth.base import Authority, Clock, Credential
from ..auth.signing import sign_developer_token
from ..config import Credentials
from ..http import Transport

DEVELOPER_TOKEN_LIFETIME = 24 * 60 * 60


class MusicDeveloperToken(Authority):
    """Locally signed ES256 developer token; refreshing never touches the network."""

    retry_limit = 1

    def __init__(self, credentials: Credentials, *, clock: Clock = time.time) -> None:
        super().__init__(clock=clock)
        self._credentials = credentials

    @property
    def bearer_token(self) -> str | None:
        """The current token, or None while the authority is invalid."""

        credential = self._credential
        if credential is None or not credential.is_live(self._clock()):
            return None
        return credential.token

    def _issue(self, transport: Transport) -> Credential:
        now = self._clock()
        token = sign_developer_token(
            self._credentials,
            lifetime=DEVELOPER_TOKEN_LIFETIME,
            now=now,
        )
        return Credential(token=token, expires_at=int(now) + DEVELOPER_TOKEN_LIFETIME)
