"""
Hub delivery: configuration, transport, retry and result reporting.
"""

from mcop_hub.delivery.config import (
    CONFIG_MISSING_ERROR,
    DEFAULT_TIMEOUT_SECONDS,
    EVENTS_PATH,
    INITIAL_BACKOFF_SECONDS,
    MAX_ATTEMPTS,
    HubConfig,
    HubConfigError,
    RetryPolicy,
)
from mcop_hub.delivery.result import AttemptOutcome, DeliveryResult, report_result
from mcop_hub.delivery.retry import post_with_retry, serialize_body
from mcop_hub.delivery.transport import HubTransport, build_headers

__all__ = [
    # Config
    "HubConfig",
    "HubConfigError",
    "RetryPolicy",
    "CONFIG_MISSING_ERROR",
    "DEFAULT_TIMEOUT_SECONDS",
    "EVENTS_PATH",
    "INITIAL_BACKOFF_SECONDS",
    "MAX_ATTEMPTS",
    # Results
    "AttemptOutcome",
    "DeliveryResult",
    "report_result",
    # Transport
    "HubTransport",
    "build_headers",
    # Retry
    "post_with_retry",
    "serialize_body",
]
