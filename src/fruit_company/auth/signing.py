"""ES256 developer token signing."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import jwt

from ..config import Credentials
from ..exceptions import AuthorityError

ALGORITHM = "ES256"


def sign_developer_token(
    credentials: Credentials,
    *,
    lifetime: float,
    now: float,
    extra_headers: Mapping[str, Any] | None = None,
) -> str:
    """Return a compact JWT issued by the team for the app, valid for `lifetime` seconds."""

    issued_at = int(now)
    claims = {
        "iss": credentials.team_id,
        "sub": credentials.app_id,
        "iat": issued_at,
        "exp": issued_at + int(lifetime),
    }
    headers: dict[str, Any] = {"kid": credentials.key_id, "typ": "JWT"}
    if extra_headers:
        headers.update(extra_headers)
    try:
        return jwt.encode(claims, credentials.private_key, algorithm=ALGORITHM, headers=headers)
    except (jwt.PyJWTError, ValueError, TypeError) as exc:
        raise AuthorityError(f"Unable to sign developer token: {exc}") from exc


def token_expiry(token: str) -> float | None:
    """Read the ``exp`` claim of a JWT without verifying its signature."""

    if not token:
        return None
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    raw = claims.get("exp")
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    return None
