import threading
import time

import pytest

from fruit_company.auth.base import Authority, Credential
from fruit_company.events import (
    WillAuthenticate,
    WillParse,
    WillRefreshAuthority,
    WillSend,
    logging_observer,
)
from fruit_company.exceptions import (
    AuthorityError,
    PerformCancelledError,
    RESTError,
    RetryLimitExceededError,
    UnexpectedResponseError,
)
from fruit_company.http import OutboundRequest, raise_for_status
from fruit_company.perform import perform
from fruit_company.request import Request
from helpers import FakeClock, ScriptedTransport, make_response


class CountingAuthority(Authority):
    def __init__(self, *, retry_limit: int = 2, clock=None, fail_refresh: bool = False) -> None:
        super().__init__(clock=clock or FakeClock())
        self.retry_limit = retry_limit
        self.fail_refresh = fail_refresh
        self.refresh_count = 0
        self.authenticate_count = 0

    def _issue(self, transport):
        self.refresh_count += 1
        if self.fail_refresh:
            raise AuthorityError("token endpoint said no", status_code=403)
        return Credential(token=f"token-{self.refresh_count}", expires_at=self._clock() + 60)

    def authenticate(self, request):
        self.authenticate_count += 1
        return super().authenticate(request)


class EchoRequest(Request[CountingAuthority, dict]):
    def __init__(self) -> None:
        self.prepare_count = 0
        self.parse_count = 0

    def prepare(self, authority):
        self.prepare_count += 1
        return OutboundRequest(url="https://service.test/thing", params=[("q", "apple")])

    def parse(self, authority, response):
        self.parse_count += 1
        raise_for_status(response)
        return {"status": response.status_code, "body": response.json()}


def test_invalid_authority_is_refreshed_before_first_send():
    authority = CountingAuthority()
    transport = ScriptedTransport(make_response(200, {"ok": True}))
    seen_valid: list[bool] = []

    def observer(event):
        if isinstance(event, WillSend):
            seen_valid.append(authority.is_valid)

    result = perform(authority, EchoRequest(), transport=transport, observer=observer)

    assert result == {"status": 200, "body": {"ok": True}}
    assert authority.refresh_count == 1
    assert seen_valid == [True]
    assert transport.sent[0].headers["Authorization"] == "Bearer token-1"


def test_valid_authority_is_not_refreshed():
    authority = CountingAuthority()
    authority.refresh(ScriptedTransport())
    transport = ScriptedTransport(make_response(200, {"ok": True}))

    perform(authority, EchoRequest(), transport=transport)

    assert authority.refresh_count == 1
    assert len(transport.sent) == 1


@pytest.mark.parametrize("retry_limit", [0, 1, 2, 3])
def test_persistent_unauthorized_sends_retry_limit_plus_one_attempts(retry_limit):
    authority = CountingAuthority(retry_limit=retry_limit)
    transport = ScriptedTransport(*[make_response(401) for _ in range(retry_limit + 1)])
    request = EchoRequest()

    with pytest.raises(RetryLimitExceededError) as excinfo:
        perform(authority, request, transport=transport)

    assert len(transport.sent) == retry_limit + 1
    assert excinfo.value.status_code == 401
    assert excinfo.value.status_text == "Unauthorized"
    assert str(excinfo.value) == "Retry limit exceeded"
    assert request.parse_count == 0


def test_non_unauthorized_failure_is_parsed_once_without_retry():
    authority = CountingAuthority()
    transport = ScriptedTransport(make_response(404, {"message": "missing", "details": []}))
    request = EchoRequest()

    with pytest.raises(RESTError) as excinfo:
        perform(authority, request, transport=transport)

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "missing"
    assert request.parse_count == 1
    assert len(transport.sent) == 1
    assert authority.refresh_count == 1


def test_success_after_rejections_returns_that_attempts_result():
    authority = CountingAuthority(retry_limit=3)
    transport = ScriptedTransport(
        make_response(401),
        make_response(200, {"attempt": 2}),
    )

    result = perform(authority, EchoRequest(), transport=transport)

    assert result == {"status": 200, "body": {"attempt": 2}}
    # One refresh up front plus one per rejected attempt.
    assert authority.refresh_count == 2
    assert transport.sent[0].headers["Authorization"] == "Bearer token-1"
    assert transport.sent[1].headers["Authorization"] == "Bearer token-2"


def test_two_rejections_then_success_refreshes_three_times():
    authority = CountingAuthority(retry_limit=2)
    transport = ScriptedTransport(
        make_response(401),
        make_response(401),
        make_response(200, {"value": "sunny"}),
    )

    result = perform(authority, EchoRequest(), transport=transport)

    assert result["body"] == {"value": "sunny"}
    assert authority.refresh_count == 3


def test_two_rejections_with_single_retry_exhausts():
    authority = CountingAuthority(retry_limit=1)
    transport = ScriptedTransport(make_response(401), make_response(401))

    with pytest.raises(RetryLimitExceededError, match="Retry limit exceeded"):
        perform(authority, EchoRequest(), transport=transport)

    assert len(transport.sent) == 2


def test_server_error_body_is_surfaced():
    authority = CountingAuthority()
    authority.refresh(ScriptedTransport())
    transport = ScriptedTransport(make_response(500, {"message": "boom", "details": ["x"]}))

    with pytest.raises(RESTError) as excinfo:
        perform(authority, EchoRequest(), transport=transport)

    assert excinfo.value.status_code == 500
    assert excinfo.value.status_text == "Internal Server Error"
    assert "boom (x)" in str(excinfo.value)
    assert excinfo.value.details == ["x"]


def test_failed_initial_refresh_propagates_without_sending():
    authority = CountingAuthority(fail_refresh=True)
    transport = ScriptedTransport(make_response(200, {}))

    with pytest.raises(AuthorityError, match="token endpoint said no"):
        perform(authority, EchoRequest(), transport=transport)

    assert transport.sent == []
    assert authority.authenticate_count == 0
    assert not authority.is_valid


def test_failed_refresh_after_rejection_propagates():
    authority = CountingAuthority(retry_limit=2)
    authority.refresh(ScriptedTransport())
    authority.fail_refresh = True
    transport = ScriptedTransport(make_response(401), make_response(200, {}))

    with pytest.raises(AuthorityError):
        perform(authority, EchoRequest(), transport=transport)

    assert len(transport.sent) == 1


def test_malformed_success_body_propagates_as_is():
    authority = CountingAuthority()
    transport = ScriptedTransport(make_response(200))
    transport.responses[0].text = "not json"

    with pytest.raises(UnexpectedResponseError):
        perform(authority, EchoRequest(), transport=transport)

    assert len(transport.sent) == 1


def test_observer_sees_every_phase_in_order():
    authority = CountingAuthority(retry_limit=1)
    transport = ScriptedTransport(make_response(401), make_response(200, {}))
    events = []

    perform(authority, EchoRequest(), transport=transport, observer=events.append)

    assert [type(event) for event in events] == [
        WillRefreshAuthority,
        WillAuthenticate,
        WillSend,
        WillRefreshAuthority,
        WillAuthenticate,
        WillSend,
        WillParse,
    ]
    assert events[0].retry is None
    assert events[3].retry == 0
    assert events[6].response.status_code == 200


def test_observer_exception_aborts_the_call():
    authority = CountingAuthority()
    transport = ScriptedTransport(make_response(200, {}))

    def observer(event):
        if isinstance(event, WillSend):
            raise RuntimeError("observer failed")

    with pytest.raises(RuntimeError, match="observer failed"):
        perform(authority, EchoRequest(), transport=transport, observer=observer)

    assert transport.sent == []


def test_each_attempt_prepares_a_fresh_call():
    authority = CountingAuthority(retry_limit=1)
    transport = ScriptedTransport(make_response(401), make_response(200, {}))
    request = EchoRequest()

    perform(authority, request, transport=transport)

    assert request.prepare_count == 2


def test_passed_deadline_cancels_before_refresh():
    authority = CountingAuthority()
    transport = ScriptedTransport(make_response(200, {}))

    with pytest.raises(PerformCancelledError):
        perform(authority, EchoRequest(), transport=transport, deadline=time.monotonic() - 1)

    assert authority.refresh_count == 0
    assert transport.sent == []


def test_deadline_bounds_the_request_timeout():
    authority = CountingAuthority()
    transport = ScriptedTransport(make_response(200, {}))

    perform(authority, EchoRequest(), transport=transport, deadline=time.monotonic() + 5)

    assert 0 < transport.sent[0].timeout <= 5


def test_cancel_between_attempts_stops_the_loop():
    authority = CountingAuthority(retry_limit=2)
    cancel = threading.Event()
    responses = ScriptedTransport(make_response(401), make_response(200, {}))

    def transport(request):
        response = responses(request)
        cancel.set()
        return response

    with pytest.raises(PerformCancelledError, match="cancelled"):
        perform(authority, EchoRequest(), transport=transport, cancel=cancel)

    assert len(responses.sent) == 1


def test_default_transport_uses_requests(requests_mock):
    authority = CountingAuthority()
    matcher = requests_mock.get("https://service.test/thing", json={"via": "requests"})

    result = perform(authority, EchoRequest())

    assert result == {"status": 200, "body": {"via": "requests"}}
    assert matcher.last_request.headers["Authorization"] == "Bearer token-1"


def test_logging_observer_records_each_phase(caplog):
    authority = CountingAuthority()
    transport = ScriptedTransport(make_response(200, {"ok": True}))

    with caplog.at_level("DEBUG", logger="fruit_company.events"):
        perform(authority, EchoRequest(), transport=transport, observer=logging_observer)

    messages = [
        record.getMessage() for record in caplog.records if record.name == "fruit_company.events"
    ]
    assert messages[0].startswith("refreshing CountingAuthority(is_valid=False")
    assert messages[1].startswith("authenticating GET https://service.test/thing")
    assert messages[2] == "sending GET https://service.test/thing"
    assert messages[3] == "parsing 200 OK from https://service.test/thing"
    assert all("token-1" not in message for message in messages)


def test_logging_observer_is_silent_above_debug(caplog):
    transport = ScriptedTransport(make_response(200, {"ok": True}))

    with caplog.at_level("INFO", logger="fruit_company.events"):
        perform(CountingAuthority(), EchoRequest(), transport=transport, observer=logging_observer)

    assert not [record for record in caplog.records if record.name == "fruit_company.events"]


def test_exhausted_retries_log_a_warning(caplog):
    authority = CountingAuthority(retry_limit=1)
    transport = ScriptedTransport(make_response(401), make_response(401))

    with caplog.at_level("WARNING", logger="fruit_company.perform"):
        with pytest.raises(RetryLimitExceededError):
            perform(authority, EchoRequest(), transport=transport)

    warnings = [record for record in caplog.records if record.name == "fruit_company.perform"]
    assert len(warnings) == 1
    assert warnings[0].levelname == "WARNING"
    assert "after 2 unauthorized attempts" in warnings[0].getMessage()
