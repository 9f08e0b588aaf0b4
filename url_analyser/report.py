# url_analyser/report.py
"""
Turns the decoded JSON body of a successful /analyseUrl response into an
AnalysisReport.

The service speaks in its own key names (``pageTitle``, ``linksByType.Internal``,
``headings.H1`` ...). They are case-sensitive and mapped here and nowhere else.
HTTP and JSON decoding happen in the transport; this module only checks shape.
"""
from __future__ import annotations

from typing import Any, Mapping

from url_analyser.errors import MissingFieldError, TypeMismatchError
from url_analyser.models import (
    HEADING_LEVELS,
    AnalysisReport,
    HeadingCounts,
    LinkCounts,
)

_LINK_KEYS = {"internal": "Internal", "external": "External"}
_HEADING_KEYS = {level: level.upper() for level in HEADING_LEVELS}


def _require(payload: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in payload:
        raise MissingFieldError(path)
    return payload[key]


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(path, "a string", value)
    return value


def _as_count(value: Any, path: str) -> int:
    # bool is an int subclass; a true/false count is still malformed.
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TypeMismatchError(path, "a non-negative integer", value)
    return value


def _as_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeMismatchError(path, "an object", value)
    return value


def _parse_links(raw: Any) -> LinkCounts:
    links = _as_mapping(raw, "linksByType")
    counts = {
        attr: _as_count(
            _require(links, key, f"linksByType.{key}"), f"linksByType.{key}"
        )
        for attr, key in _LINK_KEYS.items()
    }
    return LinkCounts(**counts)


def _parse_headings(raw: Any) -> HeadingCounts:
    headings = _as_mapping(raw, "headings")
    counts = {
        attr: _as_count(_require(headings, key, f"headings.{key}"), f"headings.{key}")
        for attr, key in _HEADING_KEYS.items()
    }
    return HeadingCounts(**counts)


def parse_report(payload: Any) -> AnalysisReport:
    """
    Build an AnalysisReport from a decoded response body.

    Raises:
        MissingFieldError: a required key is absent.
        TypeMismatchError: a key is present with the wrong shape.
    """
    body = _as_mapping(payload, "<body>")

    url = _as_str(_require(body, "url", "url"), "url")
    page_title = _as_str(_require(body, "pageTitle", "pageTitle"), "pageTitle")
    links = _parse_links(_require(body, "linksByType", "linksByType"))
    inaccessible = _as_count(
        _require(body, "inaccessibleLinks", "inaccessibleLinks"), "inaccessibleLinks"
    )
    login_form = _require(body, "loginForm", "loginForm")
    if not isinstance(login_form, bool):
        raise TypeMismatchError("loginForm", "a boolean", login_form)
    headings = _parse_headings(_require(body, "headings", "headings"))

    html_version = body.get("htmlVersion")
    if html_version is not None:
        html_version = _as_str(html_version, "htmlVersion")

    return AnalysisReport(
        url=url,
        page_title=page_title,
        links_by_type=links,
        inaccessible_links=inaccessible,
        login_form_present=login_form,
        heading_counts=headings,
        html_version=html_version or None,
    )


def report_to_wire(report: AnalysisReport) -> dict[str, Any]:
    """The inverse of parse_report: a dict shaped like the service's response."""
    wire: dict[str, Any] = {
        "url": report.url,
        "pageTitle": report.page_title,
        "linksByType": {
            key: getattr(report.links_by_type, attr) for attr, key in _LINK_KEYS.items()
        },
        "inaccessibleLinks": report.inaccessible_links,
        "loginForm": report.login_form_present,
        "headings": {
            key: getattr(report.heading_counts, attr)
            for attr, key in _HEADING_KEYS.items()
        },
    }
    if report.html_version:
        wire["htmlVersion"] = report.html_version
    return wire
