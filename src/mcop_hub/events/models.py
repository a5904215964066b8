"""
Hub event models.

Provides:
- HubEventType: The closed set of event kinds delivered to the Hub
- One frozen payload dataclass per event kind
- PAYLOAD_TYPES: Registry mapping each event kind to its payload class

Payload attributes are snake_case; ``to_dict()`` produces the camelCase
keys the Hub expects and omits optional fields left as ``None``.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar


class HubEventType(str, Enum):
    """Events that can be delivered to the Hub."""

    # Observations
    OBSERVATION_CREATED = "observation.created"
    OBSERVATION_UPDATED = "observation.updated"

    # Incidents
    INCIDENT_CREATED = "incident.created"

    # Care
    CARE_TASK_CREATED = "care_task.created"
    CARE_TASK_STATUS_CHANGED = "care_task.status_changed"
    CARE_TASK_COMPLETED = "care_task.completed"
    CARE_EXECUTION_LOGGED = "care_execution.logged"

    # Sensors
    SENSOR_ALERT_TRIGGERED = "sensor_alert.triggered"

    # Billing
    INVOICE_SENT = "invoice.sent"
    PAYMENT_COMPLETED = "payment.completed"

    # Staff
    STAFF_CLOCK_IN = "staff.clock_in"

    # Maintenance
    MAINTENANCE_TICKET_CREATED = "maintenance_ticket.created"
    MAINTENANCE_TICKET_STATUS_CHANGED = "maintenance_ticket.status_changed"
    MAINTENANCE_TICKET_COMPLETED = "maintenance_ticket.completed"

    @classmethod
    def parse(cls, value: "str | HubEventType") -> "HubEventType | None":
        """Parse an event type string, returning None if unknown."""
        if isinstance(value, HubEventType):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            # Accept the enum name as well (e.g. OBSERVATION_CREATED)
            return cls.__members__.get(value.upper())


# Technical event used only by the connectivity ping
SYSTEM_PING = "system.ping"


# =============================================================================
# ENUMERATED FIELDS
# =============================================================================


class ObservationType(str, Enum):
    CLINICAL = "CLINICAL"
    BEHAVIORAL = "BEHAVIORAL"
    SOCIAL = "SOCIAL"
    NUTRITION = "NUTRITION"
    MOBILITY = "MOBILITY"
    GENERAL = "GENERAL"


class ObservationSeverity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    URGENT = "URGENT"
    CRITICAL = "CRITICAL"


class IncidentType(str, Enum):
    FALL = "FALL"
    MEDICATION_ERROR = "MEDICATION_ERROR"
    BEHAVIOR = "BEHAVIOR"
    INJURY = "INJURY"
    ELOPEMENT = "ELOPEMENT"
    OTHER = "OTHER"


class IncidentSeverity(str, Enum):
    MINOR = "MINOR"
    MODERATE = "MODERATE"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"


class CareTaskPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class CareTaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    PARTIAL = "PARTIAL"
    SKIPPED = "SKIPPED"
    CANCELLED = "CANCELLED"


class CareExecutionStatus(str, Enum):
    COMPLETED = "COMPLETED"
    PARTIAL = "PARTIAL"
    REFUSED = "REFUSED"
    UNABLE = "UNABLE"


class SensorAlertSeverity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    EMERGENCY = "EMERGENCY"


class InvoiceStatus(str, Enum):
    SENT = "SENT"
    PAID = "PAID"
    PARTIAL = "PARTIAL"
    OVERDUE = "OVERDUE"


class PaymentStatus(str, Enum):
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class TimeEntryType(str, Enum):
    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"


class TimeEntrySource(str, Enum):
    MANUAL = "MANUAL"
    BIOMETRIC = "BIOMETRIC"
    APP = "APP"
    ADMIN = "ADMIN"


class MaintenanceCategory(str, Enum):
    PLUMBING = "PLUMBING"
    ELECTRICAL = "ELECTRICAL"
    HVAC = "HVAC"
    APPLIANCE = "APPLIANCE"
    STRUCTURAL = "STRUCTURAL"
    SAFETY = "SAFETY"
    CLEANING = "CLEANING"
    GROUNDS = "GROUNDS"
    OTHER = "OTHER"


class MaintenancePriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"
    EMERGENCY = "EMERGENCY"


class MaintenanceTicketStatus(str, Enum):
    OPEN = "OPEN"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# =============================================================================
# SERIALIZATION HELPERS
# =============================================================================


def _camel(name: str) -> str:
    """Convert a snake_case attribute name to its camelCase wire key."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _wire_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, WireRecord):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_wire_value(v) for v in value]
    # Open maps (metadata, vital signs, metrics) pass through untouched
    return value


class WireRecord:
    """Mixin for dataclasses serialized with camelCase keys."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the Hub wire format, dropping unset optional fields."""
        result: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            result[_camel(f.name)] = _wire_value(value)
        return result


class HubPayload(WireRecord):
    """Base class for event payloads. ``event_type`` binds the registry."""

    event_type: ClassVar[HubEventType]


# =============================================================================
# PAYLOADS
# =============================================================================


@dataclass(frozen=True, slots=True)
class ObservationCreatedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.OBSERVATION_CREATED

    observation_id: str
    resident_id: str
    residence_id: str
    observation_type: ObservationType
    severity: ObservationSeverity
    content: str
    created_at: str  # ISO
    visible_to_family: bool
    author_employee_id: str | None = None
    title: str | None = None


@dataclass(frozen=True, slots=True)
class ObservationSnapshot(WireRecord):
    """Partial snapshot of an observation's key fields, for diffs."""

    observation_type: ObservationType | None = None
    severity: ObservationSeverity | None = None
    title: str | None = None
    content: str | None = None
    visible_to_family: bool | None = None
    requires_follow_up: bool | None = None
    follow_up_notes: str | None = None
    follow_up_completed: bool | None = None
    vital_signs: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ObservationUpdatedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.OBSERVATION_UPDATED

    observation_id: str
    resident_id: str
    residence_id: str
    updated_at: str  # ISO
    changed_fields: list[str] = field(default_factory=list)
    previous: ObservationSnapshot = field(default_factory=ObservationSnapshot)
    current: ObservationSnapshot = field(default_factory=ObservationSnapshot)


@dataclass(frozen=True, slots=True)
class IncidentCreatedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.INCIDENT_CREATED

    incident_id: str
    residence_id: str
    incident_type: IncidentType
    severity: IncidentSeverity
    occurred_at: str  # ISO
    title: str
    description: str
    reported_by_employee_id: str
    family_notified: bool
    resident_id: str | None = None
    unit_id: str | None = None
    incident_number: str | None = None
    location: str | None = None


@dataclass(frozen=True, slots=True)
class CareTaskCreatedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.CARE_TASK_CREATED

    care_task_id: str
    resident_id: str
    residence_id: str
    category: str
    title: str
    scheduled_date: str  # YYYY-MM-DD
    priority: CareTaskPriority
    created_at: str  # ISO
    care_plan_item_id: str | None = None
    scheduled_time: str | None = None  # HH:MM:SS
    assigned_employee_id: str | None = None


@dataclass(frozen=True, slots=True)
class CareTaskStatusChangedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.CARE_TASK_STATUS_CHANGED

    care_task_id: str
    resident_id: str
    residence_id: str
    category: str
    title: str
    previous_status: str
    new_status: CareTaskStatus
    changed_at: str  # ISO
    care_plan_item_id: str | None = None
    changed_by_employee_id: str | None = None


@dataclass(frozen=True, slots=True)
class CareTaskCompletedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.CARE_TASK_COMPLETED

    care_task_id: str
    resident_id: str
    residence_id: str
    category: str
    title: str
    scheduled_date: str  # YYYY-MM-DD
    status: CareTaskStatus  # COMPLETED, PARTIAL or SKIPPED
    completed_at: str  # ISO
    care_plan_item_id: str | None = None
    scheduled_time: str | None = None
    assigned_employee_id: str | None = None
    executed_by_employee_id: str | None = None


@dataclass(frozen=True, slots=True)
class CareExecutionLoggedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.CARE_EXECUTION_LOGGED

    care_execution_id: str
    care_task_id: str
    resident_id: str
    residence_id: str
    executed_by_employee_id: str
    started_at: str  # ISO
    status: CareExecutionStatus
    completed_at: str | None = None
    notes: str | None = None
    metrics: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class SensorAlertTriggeredPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.SENSOR_ALERT_TRIGGERED

    sensor_alert_id: str
    sensor_id: str
    residence_id: str
    alert_type: str
    severity: SensorAlertSeverity
    triggered_at: str  # ISO
    message_title: str
    unit_id: str | None = None
    resident_id: str | None = None
    trigger_value: float | None = None
    threshold_value: float | None = None
    message_description: str | None = None


@dataclass(frozen=True, slots=True)
class InvoiceSentPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.INVOICE_SENT

    invoice_id: str
    residence_id: str
    lease_id: str
    resident_id: str
    invoice_number: str
    issue_date: str  # YYYY-MM-DD
    due_date: str  # YYYY-MM-DD
    total: float
    balance_due: float
    status: InvoiceStatus


@dataclass(frozen=True, slots=True)
class PaymentCompletedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.PAYMENT_COMPLETED

    payment_id: str
    residence_id: str
    amount: float
    payment_method: str
    payment_date: str  # YYYY-MM-DD
    status: PaymentStatus
    payment_number: str | None = None
    lease_party_id: str | None = None
    payer_name: str | None = None


@dataclass(frozen=True, slots=True)
class StaffClockInPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.STAFF_CLOCK_IN

    time_entry_id: str
    employee_id: str
    residence_id: str
    entry_type: TimeEntryType
    timestamp: str  # ISO
    source: TimeEntrySource
    shift_assignment_id: str | None = None


@dataclass(frozen=True, slots=True)
class MaintenanceTicketCreatedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.MAINTENANCE_TICKET_CREATED

    ticket_id: str
    ticket_number: str
    residence_id: str
    category: MaintenanceCategory
    priority: MaintenancePriority
    title: str
    description: str
    created_at: str  # ISO
    location: str | None = None
    reported_by_employee_id: str | None = None
    reported_by_resident_id: str | None = None


@dataclass(frozen=True, slots=True)
class MaintenanceTicketStatusChangedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = (
        HubEventType.MAINTENANCE_TICKET_STATUS_CHANGED
    )

    ticket_id: str
    residence_id: str
    previous_status: str
    new_status: MaintenanceTicketStatus
    changed_at: str  # ISO
    ticket_number: str | None = None
    assigned_employee_id: str | None = None
    assigned_vendor_id: str | None = None


@dataclass(frozen=True, slots=True)
class MaintenanceTicketCompletedPayload(HubPayload):
    event_type: ClassVar[HubEventType] = HubEventType.MAINTENANCE_TICKET_COMPLETED

    ticket_id: str
    residence_id: str
    category: str
    priority: str
    title: str
    ticket_number: str | None = None
    completed_by_employee_id: str | None = None
    resolution_notes: str | None = None
    actual_cost: float | None = None
    actual_duration_minutes: int | None = None
    completed_at: str | None = None  # ISO


# =============================================================================
# REGISTRY
# =============================================================================

PAYLOAD_TYPES: dict[HubEventType, type[HubPayload]] = {
    cls.event_type: cls
    for cls in (
        ObservationCreatedPayload,
        ObservationUpdatedPayload,
        IncidentCreatedPayload,
        CareTaskCreatedPayload,
        CareTaskStatusChangedPayload,
        CareTaskCompletedPayload,
        CareExecutionLoggedPayload,
        SensorAlertTriggeredPayload,
        InvoiceSentPayload,
        PaymentCompletedPayload,
        StaffClockInPayload,
        MaintenanceTicketCreatedPayload,
        MaintenanceTicketStatusChangedPayload,
        MaintenanceTicketCompletedPayload,
    )
}


def payload_type_for(event_type: HubEventType) -> type[HubPayload]:
    """Get the payload class registered for an event type."""
    return PAYLOAD_TYPES[HubEventType(event_type)]
