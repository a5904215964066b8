"""
Retry/backoff controller.

Drives the transport up to ``max_attempts`` times with exponential
backoff between attempts:

    ATTEMPT(n) -> success: DONE(ok)
               -> failure: n < max ? WAIT(backoff(n)) -> ATTEMPT(n + 1)
                                   : DONE(not ok)

Exhausting the attempts is a normal return value, never an exception.
No jitter is applied.
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from mcop_hub.delivery.config import HubConfig
from mcop_hub.delivery.result import DeliveryResult
from mcop_hub.delivery.transport import HubTransport

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


def serialize_body(body: Any) -> str:
    """Serialize a request body to JSON."""
    return json.dumps(body, default=str)


async def post_with_retry(
    url: str,
    body: Any,
    config: HubConfig,
    transport: HubTransport | None = None,
    *,
    timeout: float | None = None,
    sleep: SleepFunc = asyncio.sleep,
) -> DeliveryResult:
    """
    POST a body to the Hub with bounded retries.

    Args:
        url: Target URL
        body: JSON-serializable body (an envelope dict or list of them)
        config: Hub configuration (retry policy, token, timeout)
        transport: Transport to use (a fresh HubTransport by default)
        timeout: Per-attempt timeout override in seconds
        sleep: Awaitable sleep used for backoff

    Returns:
        DeliveryResult with the true attempt count, last status and last error
    """
    transport = transport or HubTransport()
    policy = config.retry_policy
    try:
        payload = serialize_body(body)
    except (TypeError, ValueError) as e:
        logger.error(f"Could not serialize Hub request body: {e}")
        return DeliveryResult.failure(attempts=0, error=f"invalid body: {e}")

    attempts = 0
    last_status: int | None = None
    last_error: str | None = None

    while attempts < policy.max_attempts:
        attempts += 1

        outcome = await transport.post(url, payload, config, timeout=timeout)
        if outcome.status is not None:
            last_status = outcome.status

        if outcome.ok:
            return DeliveryResult.success(attempts=attempts, status=outcome.status)

        last_error = outcome.error

        if attempts < policy.max_attempts:
            delay = policy.backoff(attempts)
            logger.debug(
                f"Attempt {attempts}/{policy.max_attempts} failed, "
                f"retrying in {delay:.3f}s"
            )
            await sleep(delay)

    return DeliveryResult.failure(
        attempts=attempts,
        status=last_status,
        error=last_error,
    )
