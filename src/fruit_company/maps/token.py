"""Access tokens for the maps service."""

from __future__ import annotations

import time
from collections.abc import Mapping

from ..auth.base import Authority, Clock, Credential
from ..auth.signing import sign_developer_token
from ..config import Credentials
from ..exceptions import AuthorityError, UnexpectedResponseError, format_error_message
from ..http import HttpResponse, OutboundRequest, Transport, error_body
from .models import MAPKIT_API_URL

# Lifetime of the self-signed token exchanged for an access token.
EXCHANGE_TOKEN_LIFETIME = 60


class MapsToken(Authority):
    """Exchange a self-signed ES256 token for a short-lived maps access token."""

    retry_limit = 2

    def __init__(self, credentials: Credentials, *, clock: Clock = time.time) -> None:
        super().__init__(clock=clock)
        self._credentials = credentials

    def _issue(self, transport: Transport) -> Credential:
        creds = self._credentials
        signed = sign_developer_token(
            creds,
            lifetime=EXCHANGE_TOKEN_LIFETIME,
            now=self._clock(),
            extra_headers={"id": f"{creds.team_id}.{creds.app_id}"},
        )
        response = transport(
            OutboundRequest(
                url=f"{MAPKIT_API_URL}/token",
                headers={"Authorization": f"Bearer {signed}"},
            )
        )
        if not response.ok:
            raise _token_error(response)
        try:
            payload = response.json()
        except UnexpectedResponseError as exc:
            raise AuthorityError(
                "Maps token endpoint returned malformed JSON",
                status_code=response.status_code,
                status_text=response.status_text,
            ) from exc
        if not isinstance(payload, Mapping):
            raise AuthorityError("Maps token endpoint returned an unexpected payload")
        access_token = payload.get("accessToken")
        expires_in = payload.get("expiresInSeconds")
        if not isinstance(access_token, str) or not isinstance(expires_in, (int, float)):
            raise AuthorityError("Maps token response is missing accessToken or expiresInSeconds")
        return Credential(token=access_token, expires_at=self._clock() + float(expires_in))


def _token_error(response: HttpResponse) -> AuthorityError:
    message, details = error_body(response)
    return AuthorityError(
        format_error_message(message, details) if message else f"<{response.url}>",
        status_code=response.status_code,
        status_text=response.status_text,
        details=details,
    )
