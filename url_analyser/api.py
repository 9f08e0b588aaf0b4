# url_analyser/api.py
# The primary, programmer-facing API for the library.

from __future__ import annotations

import copy
import logging
from typing import Any

from url_analyser.config import load_config
from url_analyser.models import SessionState
from url_analyser.session import AnalysisSession, Listener
from url_analyser.transport import AnalysisClient

log = logging.getLogger(__name__)


def apply_overrides(
    config: dict[str, Any],
    *,
    base_url: str | None = None,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Apply runtime overrides on top of a loaded config, in place."""
    if base_url is not None:
        config["base_url"] = base_url
        log.info("Applied override - base_url set to: %s", base_url)
    if timeout is not None:
        config["timeout"] = timeout
        log.info("Applied override - timeout set to: %s", timeout)
    return config


async def analyse_url(
    url: str,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    config: dict[str, Any] | None = None,
    listener: Listener | None = None,
) -> SessionState:
    """
    Run one analysis session for `url` against the analysis service.

    Args:
        url: The URL to analyse, exactly as typed.
        base_url: Override the service base URL from config.
        timeout: Override the transport timeout in seconds.
        config: A preloaded config dict; loaded from defaults and
            pyproject.toml when omitted.
        listener: Called with the new state after each transition.

    Returns:
        The session state once it settles: Succeeded or Failed. If `url` is
        not submittable nothing is sent and the Idle state holding `url` is
        returned.
    """
    log.info("Starting analysis session for: %s", url)
    if config is None:
        config = load_config()
    else:
        config = copy.deepcopy(config)
    apply_overrides(config, base_url=base_url, timeout=timeout)

    async with AnalysisClient(config) as client:
        session = AnalysisSession(client.analyse)
        if listener is not None:
            session.subscribe(listener)
        session.on_input_change(url)
        if session.on_submit() is None:
            log.warning("Not submitting %r: it is not a URL that can be analysed", url)
            return session.state
        state = await session.wait()

    log.info("Analysis session finished in state: %s", state.mode.value)
    return state
