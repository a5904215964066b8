"""
Outbound envelope wrapping a payload with delivery metadata.

The envelope timestamp is captured when the envelope is built, not when
the network attempt happens, so every retry of the same envelope carries
the time the domain event became known.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from mcop_hub.events.models import HubEventType, HubPayload

# Fixed tag identifying this system to the Hub
SOURCE_TAG = "CODEX"


def _utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def payload_to_dict(payload: HubPayload | Mapping[str, Any]) -> dict[str, Any]:
    """Convert a typed payload or raw mapping to its wire dictionary."""
    if isinstance(payload, HubPayload):
        return payload.to_dict()
    return dict(payload)


@dataclass(frozen=True, slots=True)
class OutboundEnvelope:
    """
    Wire-format wrapper sent to the Hub.

    Constructed fresh per send and never mutated.
    """

    type: str
    payload: dict[str, Any]
    received_at: str
    source: str = SOURCE_TAG
    source_version: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "type": self.type,
            "source": self.source,
        }
        if self.source_version is not None:
            result["source_version"] = self.source_version
        result["received_at"] = self.received_at
        result["payload"] = self.payload
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutboundEnvelope":
        """Create from dictionary (as received on the Hub side)."""
        return cls(
            type=data["type"],
            payload=data.get("payload", {}),
            received_at=data["received_at"],
            source=data.get("source", SOURCE_TAG),
            source_version=data.get("source_version"),
        )


def build_envelope(
    event_type: HubEventType | str,
    payload: HubPayload | Mapping[str, Any],
    source_version: str | None = None,
) -> OutboundEnvelope:
    """
    Wrap a payload in an outbound envelope.

    Args:
        event_type: Event type tag
        payload: Typed payload or raw JSON-serializable mapping
        source_version: Optional version of the emitting system

    Returns:
        New OutboundEnvelope stamped with the current UTC time
    """
    type_value = (
        event_type.value if isinstance(event_type, HubEventType) else str(event_type)
    )
    return OutboundEnvelope(
        type=type_value,
        payload=payload_to_dict(payload),
        received_at=_utc_now_iso(),
        source_version=source_version,
    )
