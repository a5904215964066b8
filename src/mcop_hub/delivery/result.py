"""
Delivery results and outcome reporting.

Every send returns a DeliveryResult; failures are values, never
exceptions. report_result() logs the outcome without affecting control
flow.
"""

import logging
from dataclasses import dataclass
from typing import Any

from mcop_hub.delivery.config import CONFIG_MISSING_ERROR, ENV_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AttemptOutcome:
    """Outcome of a single network attempt."""

    ok: bool
    status: int | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """
    Uniform outcome of a send operation.

    Attributes:
        ok: True if the Hub accepted the event
        attempts: Number of network attempts made (0 when skipped)
        status: Last HTTP status observed, if any
        error: Last error message, if any
    """

    ok: bool
    attempts: int
    status: int | None = None
    error: str | None = None

    @classmethod
    def success(cls, attempts: int, status: int | None = None) -> "DeliveryResult":
        return cls(ok=True, attempts=attempts, status=status)

    @classmethod
    def failure(
        cls,
        attempts: int,
        status: int | None = None,
        error: str | None = None,
    ) -> "DeliveryResult":
        return cls(ok=False, attempts=attempts, status=status, error=error)

    @classmethod
    def skipped(cls, error: str = CONFIG_MISSING_ERROR) -> "DeliveryResult":
        """Result for a send that never reached the network."""
        return cls(ok=False, attempts=0, error=error)

    @property
    def was_skipped(self) -> bool:
        return not self.ok and self.attempts == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting unset fields."""
        result: dict[str, Any] = {"ok": self.ok, "attempts": self.attempts}
        if self.status is not None:
            result["status"] = self.status
        if self.error is not None:
            result["error"] = self.error
        return result


def report_result(event_type: Any, result: DeliveryResult) -> None:
    """
    Log a delivery outcome at a severity matching the result.

    This is the single place send outcomes are logged, including sends
    skipped before any network attempt.
    """
    event_name = getattr(event_type, "value", event_type)

    if result.ok:
        logger.info(f"Event sent: {event_name} ({result.attempts} attempt(s))")
    elif result.error == CONFIG_MISSING_ERROR:
        logger.warning(f"{ENV_URL} is not defined, skipping event: {event_name}")
    elif result.was_skipped:
        logger.error(f"Event rejected before delivery: {event_name} ({result.error})")
    else:
        logger.error(
            f"Event delivery failed: {event_name} "
            f"(attempts={result.attempts}, status={result.status}, "
            f"error={result.error})"
        )
