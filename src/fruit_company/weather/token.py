"""Developer tokens for the weather service."""

from __future__ import annotations

import time

from ..auth.base import Authority, Clock, Credential
from ..auth.signing import sign_developer_token
from ..config import Credentials
from ..http import Transport

WEATHER_TOKEN_LIFETIME = 24 * 60 * 60


class WeatherToken(Authority):
    """Locally signed ES256 token identifying the team and service id."""

    retry_limit = 1

    def __init__(self, credentials: Credentials, *, clock: Clock = time.time) -> None:
        super().__init__(clock=clock)
        self._credentials = credentials

    def _issue(self, transport: Transport) -> Credential:
        creds = self._credentials
        now = self._clock()
        token = sign_developer_token(
            creds,
            lifetime=WEATHER_TOKEN_LIFETIME,
            now=now,
            extra_headers={"id": f"{creds.team_id}.{creds.app_id}"},
        )
        return Credential(token=token, expires_at=int(now) + WEATHER_TOKEN_LIFETIME)
