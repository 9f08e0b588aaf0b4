# url_analyser/cli.py
# Defines the command-line interface using argparse.

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import IO, Any, Sequence

from url_analyser import __version__
from url_analyser.api import analyse_url, apply_overrides
from url_analyser.config import load_config
from url_analyser.models import Failed, SessionState, Succeeded
from url_analyser.report import report_to_wire
from url_analyser.session import AnalysisSession
from url_analyser.transport import AnalysisClient
from url_analyser.ui import render, render_dismiss_hint, render_prompt
from url_analyser.validator import is_submittable
from url_analyser.view import project

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_SUBMITTABLE = 2


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _renderer(stdout: IO[str]):
    def on_state(state: SessionState) -> None:
        render(project(state), file=stdout)

    return on_state


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Submit URLs to the analysis service and show the report.",
        prog="url_analyser",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging output to stderr.",
    )
    parser.add_argument(
        "--server",
        metavar="URL",
        default=None,
        help="Base URL of the analysis service (default: from config).",
    )
    parser.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=float,
        default=None,
        help="Give up on the service after this many seconds (default: wait).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- analyse ---
    analyse_parser = subparsers.add_parser(
        "analyse", help="Analyse one URL and print the report."
    )
    analyse_parser.add_argument("url", help="The URL to analyse.")
    analyse_parser.add_argument(
        "--json",
        dest="json_output",
        metavar="FILEPATH",
        help="Also write the report as JSON to this path.",
    )

    # --- check ---
    check_parser = subparsers.add_parser(
        "check", help="Say whether a URL would be accepted, without sending it."
    )
    check_parser.add_argument("url", help="The URL to check.")

    # --- interactive ---
    subparsers.add_parser(
        "interactive", help="Prompt for URLs and analyse them one at a time."
    )
    return parser


def _write_json(path: str, data: Any) -> None:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


async def _run_interactive(
    config: dict[str, Any], stdin: IO[str], stdout: IO[str]
) -> int:
    loop = asyncio.get_running_loop()

    async def read_line() -> str:
        return await loop.run_in_executor(None, stdin.readline)

    async with AnalysisClient(config) as client:
        session = AnalysisSession(client.analyse)
        session.subscribe(_renderer(stdout))
        while True:
            render_prompt(file=stdout)
            line = await read_line()
            text = line.rstrip("\r\n")
            if not text:
                break

            session.on_input_change(text)
            if session.on_submit() is None:
                continue
            await session.wait()

            render_dismiss_hint(file=stdout)
            line = await read_line()
            session.on_dismiss()
            if not line:
                break
    return EXIT_OK


async def async_main(
    argv: Sequence[str] | None = None,
    stdout: IO[str] | None = None,
    stdin: IO[str] | None = None,
) -> int:
    """Async entry point for the command-line interface."""
    stdout = stdout or sys.stdout
    stdin = stdin or sys.stdin

    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "check":
        ok = is_submittable(args.url)
        print(f"{'ok' if ok else 'rejected'}: {args.url}", file=stdout)
        return EXIT_OK if ok else EXIT_NOT_SUBMITTABLE

    config = apply_overrides(load_config(), base_url=args.server, timeout=args.timeout)

    if args.command == "interactive":
        return await _run_interactive(config, stdin, stdout)

    # args.command == "analyse"
    state = await analyse_url(args.url, config=config, listener=_renderer(stdout))

    if isinstance(state, Succeeded):
        if args.json_output:
            _write_json(args.json_output, report_to_wire(state.report))
            print(f"Report written to {args.json_output}", file=stdout)
        return EXIT_OK
    if isinstance(state, Failed):
        return EXIT_FAILED
    return EXIT_NOT_SUBMITTABLE


def main(argv: Sequence[str] | None = None) -> int:
    """Synchronous wrapper for the CLI entry point."""
    return asyncio.run(async_main(argv))


if __name__ == "__main__":
    sys.exit(main())
