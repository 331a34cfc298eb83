"""Shared doubles for the test-suite."""
import json
from http import HTTPStatus

from fruit_company.http import HttpResponse

APP_ID = "com.fruit-company.tests"
TEAM_ID = "fruit-company team"
KEY_ID = "8675309"


class FakeClock:
    """Manually advanced replacement for `time.time`."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedTransport:
    """Transport returning canned responses and recording what was sent."""

    def __init__(self, *responses: HttpResponse) -> None:
        self.responses = list(responses)
        self.sent = []

    def __call__(self, request):
        self.sent.append(request.copy())
        if not self.responses:
            raise AssertionError(f"Unexpected request to {request.url}")
        return self.responses.pop(0)


def make_response(status: int, body=None, *, url: str = "https://service.test/thing") -> HttpResponse:
    return HttpResponse(
        status_code=status,
        status_text=HTTPStatus(status).phrase,
        text="" if body is None else json.dumps(body),
        url=url,
    )


