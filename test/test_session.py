from __future__ import annotations

import asyncio

import pytest

from url_analyser.errors import TransportError, UrlAnalyserError
from url_analyser.models import (
    AnalysisRequest,
    Failed,
    FailureDescriptor,
    Idle,
    Mode,
    Submitting,
    Succeeded,
)
from url_analyser.session import AnalysisSession

# --- helpers ---------------------------------------------------------------

PAYLOAD = {
    "url": "http://www.test.com",
    "pageTitle": "T",
    "linksByType": {"Internal": 1, "External": 2},
    "inaccessibleLinks": 0,
    "loginForm": False,
    "headings": {"H1": 1, "H2": 0, "H3": 0, "H4": 0, "H5": 0, "H6": 0},
}


class FakeService:
    """Stands in for AnalysisClient.analyse and records every dispatch."""

    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = PAYLOAD if payload is None else payload
        self.error = error
        self.requests: list[AnalysisRequest] = []

    async def __call__(self, request: AnalysisRequest):
        self.requests.append(request)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.payload


def _submit_and_wait(session: AnalysisSession, url: str):
    async def scenario():
        session.on_input_change(url)
        session.on_submit()
        return await session.wait()

    return asyncio.run(scenario())


# --- tests ----------------------------------------------------------------


def test_initial_state_is_empty_idle():
    session = AnalysisSession(FakeService())
    assert session.state == Idle("")
    assert session.state.mode is Mode.IDLE


def test_input_change_replaces_input():
    session = AnalysisSession(FakeService())
    session.on_input_change("http://")
    session.on_input_change("http://www.test.com")
    assert session.state == Idle("http://www.test.com")


def test_end_to_end_success():
    service = FakeService()
    session = AnalysisSession(service)

    async def scenario():
        session.on_input_change("http://www.test.com")
        task = session.on_submit()
        assert task is not None
        assert session.state == Submitting(AnalysisRequest("http://www.test.com"))
        return await session.wait()

    state = asyncio.run(scenario())

    assert isinstance(state, Succeeded)
    assert state.report.links_by_type.internal == 1
    assert state.report.links_by_type.external == 2
    assert state.report.total_links == 3
    assert service.requests == [AnalysisRequest("http://www.test.com")]


def test_double_submit_dispatches_once():
    service = FakeService()
    session = AnalysisSession(service)

    async def scenario():
        session.on_input_change("http://www.test.com")
        first = session.on_submit()
        second = session.on_submit()
        assert first is not None
        assert second is None
        return await session.wait()

    state = asyncio.run(scenario())
    assert isinstance(state, Succeeded)
    assert len(service.requests) == 1


@pytest.mark.parametrize("text", ["", "example.com", "http://ex ample.com", " http://a.com"])
def test_submit_of_unsubmittable_input_is_a_noop(text):
    service = FakeService()
    session = AnalysisSession(service)

    async def scenario():
        session.on_input_change(text)
        return session.on_submit()

    assert asyncio.run(scenario()) is None
    assert session.state == Idle(text)
    assert service.requests == []


def test_missing_field_lands_in_failed():
    payload = {k: v for k, v in PAYLOAD.items() if k != "pageTitle"}
    session = AnalysisSession(FakeService(payload=payload))

    state = _submit_and_wait(session, "http://www.test.com")

    assert isinstance(state, Failed)
    assert state.descriptor.kind == "missing_field"
    assert state.descriptor.field == "pageTitle"


def test_type_mismatch_lands_in_failed():
    payload = dict(PAYLOAD, inaccessibleLinks=-4)
    session = AnalysisSession(FakeService(payload=payload))

    state = _submit_and_wait(session, "http://www.test.com")

    assert isinstance(state, Failed)
    assert state.descriptor.kind == "type_mismatch"


def test_http_status_failure_lands_in_failed_with_status():
    error = TransportError(
        "Analysis service answered 500 Internal Server Error",
        status_code=500,
        status_text="Internal Server Error",
    )
    session = AnalysisSession(FakeService(error=error))

    state = _submit_and_wait(session, "http://www.test.com")

    assert isinstance(state, Failed)
    assert state.descriptor.kind == "transport"
    assert state.descriptor.status_code == 500
    assert state.descriptor.status_text == "Internal Server Error"


def test_network_failure_lands_in_failed_without_status():
    session = AnalysisSession(FakeService(error=TransportError("connection refused")))

    state = _submit_and_wait(session, "http://www.test.com")

    assert isinstance(state, Failed)
    assert state.descriptor.kind == "transport"
    assert state.descriptor.status_code is None


def test_unexpected_error_fails_the_session_and_propagates():
    session = AnalysisSession(FakeService(error=RuntimeError("bug")))

    with pytest.raises(RuntimeError):
        _submit_and_wait(session, "http://www.test.com")

    assert isinstance(session.state, Failed)
    session.on_dismiss()
    assert session.state == Idle("")


@pytest.mark.parametrize(
    "service",
    [FakeService(), FakeService(error=TransportError("down"))],
    ids=["succeeded", "failed"],
)
def test_dismiss_returns_to_empty_idle(service):
    session = AnalysisSession(service)
    _submit_and_wait(session, "http://www.test.com")
    assert session.state.mode in (Mode.SUCCEEDED, Mode.FAILED)

    session.on_dismiss()
    assert session.state == Idle("")

    session.on_dismiss()
    assert session.state == Idle("")


def test_new_attempt_after_dismiss():
    service = FakeService()
    session = AnalysisSession(service)
    _submit_and_wait(session, "http://www.test.com")
    session.on_dismiss()

    state = _submit_and_wait(session, "https://example.co")

    assert isinstance(state, Succeeded)
    assert [r.url for r in service.requests] == ["http://www.test.com", "https://example.co"]


def test_submitting_ignores_input_dismiss_and_resubmit():
    async def scenario():
        gate = asyncio.get_running_loop().create_future()

        async def slow_dispatch(request):
            return await gate

        session = AnalysisSession(slow_dispatch)
        session.on_input_change("http://www.test.com")
        session.on_submit()

        session.on_input_change("http://other.com")
        session.on_dismiss()
        assert session.on_submit() is None
        assert isinstance(session.state, Submitting)
        assert session.state.request.url == "http://www.test.com"

        gate.set_result(PAYLOAD)
        return await session.wait()

    state = asyncio.run(scenario())
    assert isinstance(state, Succeeded)


def test_completion_events_outside_submitting_are_dropped():
    session = AnalysisSession(FakeService())
    session.on_response(PAYLOAD)
    session.on_transport_error(TransportError("late"))
    assert session.state == Idle("")


def test_listeners_observe_every_transition():
    session = AnalysisSession(FakeService())
    seen = []
    unsubscribe = session.subscribe(lambda state: seen.append(state.mode))

    _submit_and_wait(session, "http://www.test.com")
    session.on_dismiss()
    unsubscribe()
    session.on_input_change("ignored by the listener")

    assert seen == [Mode.IDLE, Mode.SUBMITTING, Mode.SUCCEEDED, Mode.IDLE]


def test_wait_without_pending_request_returns_state():
    session = AnalysisSession(FakeService())
    assert asyncio.run(session.wait()) == Idle("")


def test_wait_follows_a_request_submitted_from_a_listener():
    service = FakeService()
    session = AnalysisSession(service)

    def resubmit_once(state):
        if isinstance(state, Succeeded) and len(service.requests) == 1:
            session.on_dismiss()
            session.on_input_change("https://example.co")
            session.on_submit()

    session.subscribe(resubmit_once)
    state = _submit_and_wait(session, "http://www.test.com")

    assert isinstance(state, Succeeded)
    assert [r.url for r in service.requests] == ["http://www.test.com", "https://example.co"]
    assert asyncio.run(session.wait()) is state


def test_listener_error_on_submit_still_leaves_the_request_running():
    session = AnalysisSession(FakeService())

    def explode_on_submitting(state):
        if isinstance(state, Submitting):
            raise RuntimeError("render failed")

    session.subscribe(explode_on_submitting)

    async def scenario():
        session.on_input_change("http://www.test.com")
        with pytest.raises(RuntimeError):
            session.on_submit()
        return await session.wait()

    state = asyncio.run(scenario())
    assert isinstance(state, Succeeded)


def test_state_mode_is_fixed_by_its_class():
    assert Idle("x").mode is Mode.IDLE
    assert Failed(FailureDescriptor(kind="transport", message="down")).mode is Mode.FAILED
    with pytest.raises(TypeError):
        Idle("x", Mode.FAILED)  # type: ignore[call-arg]


def test_base_error_has_a_generic_descriptor():
    descriptor = UrlAnalyserError("something broke").to_descriptor()
    assert descriptor.kind == "transport"
    assert descriptor.message == "something broke"
