# url_analyser/view.py
# Maps session state to what should be on screen. Pure: no I/O, no mutation.

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from url_analyser.models import (
    AnalysisReport,
    Failed,
    FailureDescriptor,
    Idle,
    SessionState,
    Submitting,
    Succeeded,
)
from url_analyser.validator import is_submittable


@dataclass(frozen=True)
class ShowInputForm:
    input: str
    submit_enabled: bool


@dataclass(frozen=True)
class ShowLoading:
    url: str


@dataclass(frozen=True)
class ShowResult:
    report: AnalysisReport


@dataclass(frozen=True)
class ShowError:
    descriptor: FailureDescriptor


DisplayMode = Union[ShowInputForm, ShowLoading, ShowResult, ShowError]


def project(state: SessionState) -> DisplayMode:
    """Return the single display mode for `state`."""
    if isinstance(state, Submitting):
        return ShowLoading(url=state.request.url)
    if isinstance(state, Succeeded):
        return ShowResult(report=state.report)
    if isinstance(state, Failed):
        return ShowError(descriptor=state.descriptor)
    if isinstance(state, Idle):
        return ShowInputForm(input=state.input, submit_enabled=is_submittable(state.input))
    raise TypeError(f"Not a session state: {state!r}")
