"""
Hub client - generic event delivery.

Provides:
- send_event: Deliver one typed event with retries
- send_batch: Deliver several events as one JSON array
- ping_hub: Connectivity check using a technical ping event

None of these raise: configuration problems, payload mismatches,
network failures and HTTP errors all come back as a DeliveryResult.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

from mcop_hub.delivery.config import (
    CONFIG_MISSING_ERROR,
    HubConfig,
    HubConfigError,
)
from mcop_hub.delivery.result import DeliveryResult, report_result
from mcop_hub.delivery.retry import post_with_retry
from mcop_hub.delivery.transport import HubTransport
from mcop_hub.events.envelope import SOURCE_TAG, build_envelope
from mcop_hub.events.models import (
    PAYLOAD_TYPES,
    SYSTEM_PING,
    HubEventType,
    HubPayload,
)

PayloadLike = Union[HubPayload, Mapping[str, Any]]
BatchItem = Union[
    HubPayload,
    tuple[Union[HubEventType, str], PayloadLike],
    Mapping[str, Any],
]


@dataclass(frozen=True, slots=True)
class SendOptions:
    """Per-call overrides.

    Attributes:
        timeout_seconds: Per-attempt timeout (defaults to the config value)
        source_version: Version tag for the envelope (defaults to the config value)
    """

    timeout_seconds: float | None = None
    source_version: str | None = None


def _resolve_config(
    config: HubConfig | None,
) -> tuple[HubConfig | None, DeliveryResult | None]:
    """Return the config to use, or a skipped result when it is unusable."""
    if config is None:
        try:
            config = HubConfig.from_env()
        except HubConfigError as e:
            return None, DeliveryResult.skipped(error=str(e))

    if not config.is_configured:
        return None, DeliveryResult.skipped(error=CONFIG_MISSING_ERROR)

    return config, None


def _check_payload(
    event_type: HubEventType | str,
    payload: Any,
) -> tuple[HubEventType | None, str | None]:
    """Resolve the event type and check the payload matches its registered shape."""
    parsed = HubEventType.parse(event_type)
    if parsed is None:
        return None, f"unknown event type: {event_type}"

    if isinstance(payload, HubPayload):
        expected = PAYLOAD_TYPES[parsed]
        if not isinstance(payload, expected):
            return parsed, (
                f"payload type mismatch: {type(payload).__name__} "
                f"is not {expected.__name__} ({parsed.value})"
            )
    elif not isinstance(payload, Mapping):
        return parsed, (
            f"payload must be a HubPayload or a mapping, "
            f"got {type(payload).__name__}"
        )

    return parsed, None


def _unpack_batch_item(item: Any) -> tuple[Any, Any] | None:
    """Split a batch item into (event_type, payload), or None if malformed."""
    if isinstance(item, HubPayload):
        return item.event_type, item
    if isinstance(item, Mapping):
        if "type" not in item or "payload" not in item:
            return None
        return item["type"], item["payload"]
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return item[0], item[1]
    return None


def _build_batch(
    events: Sequence[Any],
    source_version: str | None,
) -> tuple[list[dict[str, Any]], str | None]:
    """Build the envelope array for a batch, stopping at the first bad item."""
    envelopes = []
    for index, item in enumerate(events):
        unpacked = _unpack_batch_item(item)
        if unpacked is None:
            return [], f"invalid batch item at index {index}: {item!r:.80}"

        event_type, payload = unpacked
        parsed, problem = _check_payload(event_type, payload)
        if problem is not None:
            return [], f"batch item {index}: {problem}"

        envelopes.append(
            build_envelope(parsed, payload, source_version=source_version).to_dict()
        )
    return envelopes, None


async def send_event(
    event_type: HubEventType | str,
    payload: PayloadLike,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    """
    Deliver one event to the Hub.

    Args:
        event_type: Registered event type
        payload: Payload instance matching the event type, or a raw mapping
        config: Hub configuration (read from the environment when omitted)
        options: Per-call overrides
        transport: Transport to use (mainly for tests)

    Returns:
        DeliveryResult; never raises
    """
    options = options or SendOptions()

    config, skipped = _resolve_config(config)
    if skipped is None:
        parsed, problem = _check_payload(event_type, payload)
        if problem is not None:
            skipped = DeliveryResult.skipped(error=problem)
    if skipped is not None:
        report_result(event_type, skipped)
        return skipped

    envelope = build_envelope(
        parsed,
        payload,
        source_version=options.source_version or config.source_version,
    )

    result = await post_with_retry(
        config.events_url,
        envelope.to_dict(),
        config,
        transport,
        timeout=options.timeout_seconds,
    )
    report_result(parsed.value, result)
    return result


async def send_batch(
    events: Sequence[BatchItem],
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    """
    Deliver several events as a single JSON array of envelopes.

    Items are ``(event_type, payload)`` pairs, ``{"type": ..., "payload": ...}``
    mappings, or typed payloads (whose event type is taken from the payload
    class). A malformed item fails the whole batch before any I/O; otherwise
    the batch succeeds or fails as a whole.

    Returns:
        DeliveryResult; never raises
    """
    options = options or SendOptions()

    config, skipped = _resolve_config(config)
    if skipped is None and events:
        envelopes, problem = _build_batch(
            events, options.source_version or config.source_version
        )
        if problem is not None:
            skipped = DeliveryResult.skipped(error=problem)
    if skipped is not None:
        report_result("batch", skipped)
        return skipped

    if not events:
        return DeliveryResult.success(attempts=0)

    result = await post_with_retry(
        config.events_url,
        envelopes,
        config,
        transport,
        timeout=options.timeout_seconds,
    )
    report_result(f"batch of {len(envelopes)}", result)
    return result


async def ping_hub(
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    """
    Check connectivity by delivering a minimal ``system.ping`` event.

    Returns:
        DeliveryResult; never raises
    """
    options = options or SendOptions()

    config, skipped = _resolve_config(config)
    if skipped is not None:
        report_result(SYSTEM_PING, skipped)
        return skipped

    payload = {
        "message": f"ping from {SOURCE_TAG}",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    envelope = build_envelope(
        SYSTEM_PING,
        payload,
        source_version=options.source_version or config.source_version,
    )

    result = await post_with_retry(
        config.events_url,
        envelope.to_dict(),
        config,
        transport,
        timeout=options.timeout_seconds,
    )
    report_result(SYSTEM_PING, result)
    return result
