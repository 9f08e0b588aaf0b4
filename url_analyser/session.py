# url_analyser/session.py
"""
The interaction state machine behind the client.

    Idle(input) --submit--> Submitting(request) --response--> Succeeded(report)
         ^                         |                                |
         |                         +------error-----> Failed(desc)  |
         +-------------------dismiss------------------+-------------+

The session lives on one asyncio event loop. ``on_submit`` schedules the single
transport call as a task; when it settles, its outcome is fed back through
``on_response`` / ``on_transport_error`` on the same loop. At most one call is
outstanding because ``on_submit`` only acts from Idle. There is no timeout,
retry or cancel here: a submitted request is waited on until it settles.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

from url_analyser.errors import ParseError, TransportError
from url_analyser.models import (
    AnalysisRequest,
    Failed,
    Idle,
    SessionState,
    Submitting,
    Succeeded,
)
from url_analyser.report import parse_report
from url_analyser.validator import is_submittable

log = logging.getLogger(__name__)

Dispatch = Callable[[AnalysisRequest], Awaitable[Any]]
Listener = Callable[[SessionState], None]


class AnalysisSession:
    """
    One user's attempt at analysing a URL, from typing through to dismissal.

    Args:
        dispatch: coroutine function sending a request and returning the
            decoded response body, raising TransportError on failure.
            ``AnalysisClient.analyse`` fits.
    """

    def __init__(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch
        self._state: SessionState = Idle("")
        self._pending: Optional[asyncio.Task] = None
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with the new state after every transition. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, new_state: SessionState) -> None:
        log.debug("Session %s -> %s", self._state.mode.value, new_state.mode.value)
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    # --- user events ----------------------------------------------------------

    def on_input_change(self, text: str) -> None:
        if not isinstance(self._state, Idle):
            log.debug("Ignoring input change while %s", self._state.mode.value)
            return
        self._transition(Idle(text))

    def on_submit(self) -> Optional[asyncio.Task]:
        """
        Submit the current input if it is submittable.

        Returns the task carrying the transport call, or None when nothing was
        dispatched (not Idle, or input rejected by the validator). Must be
        called from a running event loop.
        """
        state = self._state
        if not isinstance(state, Idle):
            log.debug("Ignoring submit while %s", state.mode.value)
            return None
        if not is_submittable(state.input):
            log.debug("Ignoring submit of unsubmittable input %r", state.input)
            return None

        request = AnalysisRequest(url=state.input)
        log.info("Submitting %s for analysis", request.url)
        # The task only starts at the next await, after the state is Submitting.
        task = asyncio.create_task(self._run(request))
        self._pending = task
        self._transition(Submitting(request))
        return task

    def on_dismiss(self) -> None:
        """Close a result or error view and return to an empty input form."""
        if isinstance(self._state, (Succeeded, Failed)):
            self._transition(Idle(""))
        else:
            log.debug("Ignoring dismiss while %s", self._state.mode.value)

    # --- completion events ----------------------------------------------------

    def on_response(self, payload: Any) -> None:
        if not isinstance(self._state, Submitting):
            log.warning("Dropping response that arrived while %s", self._state.mode.value)
            return
        try:
            report = parse_report(payload)
        except ParseError as e:
            log.warning("Malformed analysis response: %s", e)
            self._transition(Failed(e.to_descriptor()))
            return
        self._transition(Succeeded(report))

    def on_transport_error(self, error: TransportError) -> None:
        if not isinstance(self._state, Submitting):
            log.warning("Dropping transport error that arrived while %s", self._state.mode.value)
            return
        self._transition(Failed(error.to_descriptor()))

    # --- plumbing -------------------------------------------------------------

    async def _run(self, request: AnalysisRequest) -> None:
        try:
            payload = await self._dispatch(request)
        except TransportError as e:
            self.on_transport_error(e)
        except Exception as e:
            log.exception("Unexpected error while analysing %s", request.url)
            self.on_transport_error(TransportError(f"Unexpected client error: {e}"))
            raise
        else:
            self.on_response(payload)
        finally:
            # A listener may already have submitted the next request.
            if self._pending is asyncio.current_task():
                self._pending = None

    async def wait(self) -> SessionState:
        """Wait for the outstanding request, if any, and return the resulting state."""
        while self._pending is not None:
            pending = self._pending
            await pending
            if self._pending is pending:
                break
        return self._state
