"""Configuration helpers for fruit-company clients."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .exceptions import AuthorityError

DEFAULT_USER_AGENT = "fruit-company-python"


@dataclass(slots=True)
class ClientConfig:
    """Typed configuration for `RequestsTransport`."""

    timeout: float = 30.0
    verify_ssl: bool | str = True
    default_headers: Mapping[str, str] | None = None
    user_agent: str = DEFAULT_USER_AGENT

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.default_headers:
            headers.update(self.default_headers)
        return headers


@dataclass(slots=True, frozen=True)
class Credentials:
    """Identifiers and key material used to sign developer tokens."""

    app_id: str
    team_id: str
    key_id: str
    private_key: str

    @classmethod
    def from_key_file(cls, app_id: str, team_id: str, key_id: str, path: str | Path) -> Credentials:
        key_path = Path(path).expanduser()
        if not key_path.is_file():
            raise AuthorityError(f"Private key file not found: {key_path}")
        return cls(
            app_id=app_id,
            team_id=team_id,
            key_id=key_id,
            private_key=key_path.read_text(encoding="utf-8"),
        )

    def __repr__(self) -> str:
        return (
            f"Credentials(app_id={self.app_id!r}, team_id={self.team_id!r}, "
            f"key_id={self.key_id!r}, private_key=<redacted>)"
        )


def credentials_from_env(prefix: str, environ: Mapping[str, str] | None = None) -> Credentials:
    """Load credentials from ``<PREFIX>_APP_ID``-style environment variables.

    The private key is read from ``<PREFIX>_PRIVATE_KEY`` when set, otherwise
    from the file named by ``<PREFIX>_KEY_FILE``.
    """

    env = os.environ if environ is None else environ
    prefix = prefix.rstrip("_").upper()

    def _require(name: str) -> str:
        key = f"{prefix}_{name}"
        value = (env.get(key) or "").strip()
        if not value:
            raise AuthorityError(f"Missing required environment variable {key}.")
        return value

    app_id = _require("APP_ID")
    team_id = _require("TEAM_ID")
    key_id = _require("KEY_ID")
    inline_key = env.get(f"{prefix}_PRIVATE_KEY")
    if inline_key:
        return Credentials(app_id=app_id, team_id=team_id, key_id=key_id, private_key=inline_key)
    return Credentials.from_key_file(app_id, team_id, key_id, _require("KEY_FILE"))
