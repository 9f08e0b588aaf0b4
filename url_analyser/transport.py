# url_analyser/transport.py
"""
HTTPX-based client for the analysis service.

Responsibilities:
- POST an AnalysisRequest to the analysis endpoint as JSON.
- Turn non-2xx statuses and network failures into TransportError.
- Hand the decoded JSON body back untouched; shape checks live in report.py.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

import httpx

from url_analyser.errors import TransportError
from url_analyser.models import AnalysisRequest

log = logging.getLogger(__name__)

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


@dataclass
class AnalysisClient:
    """
    Async client for ``POST /analyseUrl``.

    Config keys consumed:
      - base_url: str
      - endpoint: str
      - timeout: float | None (None waits indefinitely)
      - user_agent: str

    Use as an async context manager; the underlying httpx client lives for the
    duration of the ``async with`` block.
    """

    config: Dict[str, Any]

    _client: httpx.AsyncClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> "AnalysisClient":
        headers = dict(JSON_HEADERS)
        headers["User-Agent"] = self.config.get("user_agent", "url_analyser")
        self._client = httpx.AsyncClient(
            base_url=self.config["base_url"],
            timeout=self.config.get("timeout"),
            headers=headers,
        )
        log.info("httpx session initialized. Service: %s", self.config["base_url"])
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        log.info("httpx session closed.")

    async def analyse(self, request: AnalysisRequest) -> Any:
        """
        Send one analysis request and return the decoded JSON body.

        Raises:
            TransportError: no response, a non-2xx status, or a body that is
                not JSON.
        """
        if self._client is None:
            raise RuntimeError("AnalysisClient used outside of 'async with'")

        endpoint = self.config.get("endpoint", "/analyseUrl")
        log.info("Sending analysis request for %s to %s", request.url, endpoint)
        try:
            resp = await self._client.post(endpoint, json=request.to_wire())
        except httpx.RequestError as e:
            msg = f"Network error contacting analysis service: {e}"
            log.error(msg)
            raise TransportError(msg) from e

        if not resp.is_success:
            log.warning(
                "Analysis service answered %d %s for %s",
                resp.status_code,
                resp.reason_phrase,
                request.url,
            )
            raise TransportError(
                f"Analysis service answered {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
                status_text=resp.reason_phrase,
            )

        try:
            body = resp.json()
        except ValueError as e:
            msg = f"Analysis service sent a body that is not JSON: {e}"
            log.error(msg)
            raise TransportError(
                msg, status_code=resp.status_code, status_text=resp.reason_phrase
            ) from e

        log.info("Received analysis response for %s", request.url)
        return body
