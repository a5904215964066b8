"""
Hub delivery transport.

Performs one HTTP POST of a serialized envelope, bounded by a timeout.
Every outcome (success, HTTP failure, network failure, timeout) is
returned as an AttemptOutcome; nothing is raised to the caller.
"""

import asyncio
import logging
import time

import httpx

from mcop_hub.delivery.config import HubConfig
from mcop_hub.delivery.result import AttemptOutcome

logger = logging.getLogger(__name__)


def build_headers(config: HubConfig) -> dict[str, str]:
    """Build request headers, adding the bearer token only when configured."""
    headers = {"Content-Type": "application/json"}
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return headers


class HubTransport:
    """
    Sends serialized envelopes to the Hub.

    A caller-supplied httpx.AsyncClient is reused across attempts and left
    open; without one, a short-lived client is created for each attempt.

    Example:
        transport = HubTransport()
        outcome = await transport.post(config.events_url, body, config)
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def post(
        self,
        url: str,
        body: str,
        config: HubConfig,
        timeout: float | None = None,
    ) -> AttemptOutcome:
        """
        POST a JSON body once.

        Args:
            url: Target URL
            body: Serialized JSON body
            config: Hub configuration (token, default timeout)
            timeout: Seconds before the attempt is aborted

        Returns:
            AttemptOutcome describing the attempt
        """
        timeout = config.timeout_seconds if timeout is None else timeout
        headers = build_headers(config)
        start_time = time.monotonic()

        try:
            # wait_for also bounds clients that never honour their own timeout
            response = await asyncio.wait_for(
                self._send(url, body, headers, timeout),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            error = f"Request timed out after {timeout}s"
            logger.warning(f"Hub request timed out: {url}")
            return AttemptOutcome(ok=False, error=error)
        except httpx.RequestError as e:
            error = str(e) or type(e).__name__
            logger.warning(f"Hub request error: {error}")
            return AttemptOutcome(ok=False, error=error)
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.error(f"Hub delivery error: {error}")
            return AttemptOutcome(ok=False, error=error)

        response_time_ms = int((time.monotonic() - start_time) * 1000)
        status = response.status_code

        if 200 <= status < 300:
            logger.debug(f"Hub accepted POST {url} (status={status}, time={response_time_ms}ms)")
            return AttemptOutcome(ok=True, status=status)

        error = f"HTTP {status} - {self._body_text(response)}"
        logger.warning(f"Hub error response: {error}")
        return AttemptOutcome(ok=False, status=status, error=error)

    async def _send(
        self,
        url: str,
        body: str,
        headers: dict[str, str],
        timeout: float,
    ) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(
                url, content=body, headers=headers, timeout=timeout
            )

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=False,
        ) as client:
            return await client.post(url, content=body, headers=headers)

    @staticmethod
    def _body_text(response: httpx.Response) -> str:
        """Response body text, best effort."""
        try:
            return response.text
        except Exception as e:
            logger.debug(f"Could not read Hub response body: {e}")
            return ""
