"""HTTP utilities shared by every fruit-company service."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Any

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .config import ClientConfig
from .exceptions import RESTError, TransportError, UnexpectedResponseError, format_error_message

logger = logging.getLogger(__name__)

QueryParams = list[tuple[str, str]]


@dataclass(slots=True)
class OutboundRequest:
    """Transport-agnostic description of a call about to be sent."""

    url: str
    method: str = "GET"
    params: QueryParams = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    json_payload: Mapping[str, Any] | None = None
    timeout: float | None = None

    def copy(self) -> OutboundRequest:
        return replace(self, params=list(self.params), headers=dict(self.headers))

    def with_header(self, name: str, value: str) -> OutboundRequest:
        duplicate = self.copy()
        duplicate.headers[name] = value
        return duplicate


@dataclass(slots=True)
class HttpResponse:
    """Typed response wrapper with helper accessors."""

    status_code: int
    status_text: str
    text: str
    headers: Mapping[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse JSON with helpful error context."""

        try:
            return json.loads(self.text)
        except ValueError as exc:
            raise UnexpectedResponseError(
                f"Response from <{self.url}> did not contain valid JSON",
                status_code=self.status_code,
                status_text=self.status_text,
            ) from exc


Transport = Callable[[OutboundRequest], HttpResponse]


def error_body(response: HttpResponse) -> tuple[str | None, list[str] | None]:
    """Read ``(message, details)`` from a ``{"message": ..., "details": [...]}`` body.

    Both are None when the body is not JSON or carries no message. A
    ``details`` value that is a single string becomes a one-item list.
    """

    try:
        body = response.json()
    except UnexpectedResponseError:
        return None, None
    if not isinstance(body, Mapping) or not body.get("message"):
        return None, None
    raw_details = body.get("details")
    details: list[str] | None = None
    if isinstance(raw_details, str):
        details = [raw_details]
    elif isinstance(raw_details, Sequence):
        details = [str(item) for item in raw_details]
    return str(body["message"]), details


def status_text_for(status_code: int, reason: str | None) -> str:
    """Prefer the server's reason phrase, falling back to the standard one."""

    if reason:
        return reason
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def raise_for_status(response: HttpResponse) -> None:
    """Raise `RESTError` if the response signals a failure.

    Services that describe failures with a ``{"message": ..., "details": [...]}``
    body get that text in the error; anything else falls back to the URL.
    """

    if response.ok:
        return
    message, details = error_body(response)
    if message is None:
        raise RESTError(
            f"<{response.url}>",
            status_code=response.status_code,
            status_text=response.status_text,
        )
    raise RESTError(
        format_error_message(message, details),
        status_code=response.status_code,
        status_text=response.status_text,
        details=details,
    )


class RequestsTransport:
    """Send `OutboundRequest` objects through a `requests.Session`."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._session = session or requests.Session()
        self._suppress_insecure_warning_if_needed()

    def __call__(self, request: OutboundRequest) -> HttpResponse:
        headers = self.config.resolved_headers()
        headers.update(request.headers)
        timeout = request.timeout if request.timeout is not None else self.config.timeout
        logger.info("fruit-company request %s %s", request.method.upper(), request.url)
        try:
            response = self._session.request(
                method=request.method,
                url=request.url,
                params=request.params or None,
                headers=headers,
                json=request.json_payload,
                timeout=timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            raise TransportError(
                f"Failed to communicate with {request.url}: {reason}", details=reason
            ) from exc
        logger.info(
            "fruit-company response %s %s -> %s",
            request.method.upper(),
            request.url,
            response.status_code,
        )
        return HttpResponse(
            status_code=response.status_code,
            status_text=status_text_for(response.status_code, response.reason),
            text=response.text,
            headers=response.headers,
            url=response.url or request.url,
        )

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    def close(self) -> None:
        self._session.close()

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
