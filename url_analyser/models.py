# Defines the data structures shared by the session, the view and the transport.

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Literal, Optional, Union

# Kinds of failure a session can end in.
FailureKind = Literal["transport", "missing_field", "type_mismatch"]

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")


@dataclass(frozen=True)
class AnalysisRequest:
    """A single submission to the analysis service."""

    url: str

    def to_wire(self) -> dict[str, str]:
        return {"url": self.url}


@dataclass(frozen=True)
class LinkCounts:
    """Links on the analysed page, split by whether they leave its host."""

    internal: int = 0
    external: int = 0

    @property
    def total(self) -> int:
        return self.internal + self.external


@dataclass(frozen=True)
class HeadingCounts:
    """Number of heading elements per level."""

    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0

    def as_dict(self) -> dict[str, int]:
        return {level: getattr(self, level) for level in HEADING_LEVELS}


@dataclass(frozen=True)
class AnalysisReport:
    """
    The analysis of one page, as returned by the service.

    Only ever built by `url_analyser.report.parse_report`, so every count is
    a non-negative int.
    """

    url: str
    page_title: str
    links_by_type: LinkCounts
    inaccessible_links: int
    login_form_present: bool
    heading_counts: HeadingCounts
    html_version: Optional[str] = None

    @property
    def total_links(self) -> int:
        return self.links_by_type.total


@dataclass(frozen=True)
class FailureDescriptor:
    """What went wrong with an attempt, in a form fit for display and tests."""

    kind: FailureKind
    message: str
    status_code: Optional[int] = None
    status_text: Optional[str] = None
    field: Optional[str] = None


class Mode(enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Idle:
    input: str = ""
    mode: ClassVar[Mode] = Mode.IDLE


@dataclass(frozen=True)
class Submitting:
    request: AnalysisRequest
    mode: ClassVar[Mode] = Mode.SUBMITTING


@dataclass(frozen=True)
class Succeeded:
    report: AnalysisReport
    mode: ClassVar[Mode] = Mode.SUCCEEDED


@dataclass(frozen=True)
class Failed:
    descriptor: FailureDescriptor
    mode: ClassVar[Mode] = Mode.FAILED


SessionState = Union[Idle, Submitting, Succeeded, Failed]
