# url_analyser/ui.py
# Presentation-only utilities for CLI output.
from __future__ import annotations

from typing import IO

from url_analyser.models import AnalysisReport, FailureDescriptor
from url_analyser.view import (
    DisplayMode,
    ShowError,
    ShowInputForm,
    ShowLoading,
    ShowResult,
)


def _writeln(text: str = "", *, file: IO[str]) -> None:
    file.write(text + "\n")


def render_prompt(*, file: IO[str]) -> None:
    _writeln("Enter URL (blank line to quit):", file=file)


def render_input_form(mode: ShowInputForm, *, file: IO[str]) -> None:
    if mode.input and not mode.submit_enabled:
        _writeln(f"Not a URL that can be analysed: {mode.input}", file=file)


def render_loading(url: str, *, file: IO[str]) -> None:
    _writeln(f"Analysing URL: {url}", file=file)
    _writeln("This can take some time if the page contains lots of links...", file=file)


def render_report(report: AnalysisReport, *, file: IO[str]) -> None:
    links = report.links_by_type
    _writeln("\n--- URL Analysis ---", file=file)
    _writeln(f"URL: {report.url}", file=file)
    _writeln(f"Page Title: {report.page_title}", file=file)
    if report.html_version:
        _writeln(f"HTML Version: {report.html_version}", file=file)
    _writeln("Links:", file=file)
    _writeln(f"- Total: {report.total_links}", file=file)
    _writeln(f"- Internal: {links.internal}", file=file)
    _writeln(f"- External: {links.external}", file=file)
    _writeln(f"- Inaccessible: {report.inaccessible_links}", file=file)
    _writeln(
        f"Contains Login Form: {'true' if report.login_form_present else 'false'}",
        file=file,
    )
    _writeln("Headings:", file=file)
    for level, count in report.heading_counts.as_dict().items():
        _writeln(f"- {level}: {count}", file=file)


def render_error(descriptor: FailureDescriptor, *, file: IO[str]) -> None:
    _writeln("\n--- Analysis Failed ---", file=file)
    if descriptor.status_code is not None:
        status = f"{descriptor.status_code} {descriptor.status_text or ''}".rstrip()
        _writeln(f"Status: {status}", file=file)
    _writeln(f"- {descriptor.message}", file=file)


def render(mode: DisplayMode, *, file: IO[str]) -> None:
    """Write the text view of a display mode."""
    if isinstance(mode, ShowInputForm):
        render_input_form(mode, file=file)
    elif isinstance(mode, ShowLoading):
        render_loading(mode.url, file=file)
    elif isinstance(mode, ShowResult):
        render_report(mode.report, file=file)
    elif isinstance(mode, ShowError):
        render_error(mode.descriptor, file=file)


def render_dismiss_hint(*, file: IO[str]) -> None:
    _writeln("\nPress Enter to analyse another URL.", file=file)
