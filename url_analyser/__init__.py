# Entrypoint for the url_analyser package.
# This file makes the public API available to programmers.

from __future__ import annotations

from url_analyser.__about__ import __version__
from url_analyser.api import analyse_url
from url_analyser.errors import (
    MissingFieldError,
    ParseError,
    TransportError,
    TypeMismatchError,
    UrlAnalyserError,
)
from url_analyser.models import AnalysisReport, AnalysisRequest, FailureDescriptor, Mode
from url_analyser.report import parse_report
from url_analyser.session import AnalysisSession
from url_analyser.validator import is_submittable
from url_analyser.view import project

# The __all__ variable defines the public API of the package.
# When a user writes `from url_analyser import *`, only these names will be imported.
__all__ = [
    "analyse_url",
    "AnalysisReport",
    "AnalysisRequest",
    "AnalysisSession",
    "FailureDescriptor",
    "is_submittable",
    "MissingFieldError",
    "Mode",
    "parse_report",
    "ParseError",
    "project",
    "TransportError",
    "TypeMismatchError",
    "UrlAnalyserError",
    "__version__",
]
