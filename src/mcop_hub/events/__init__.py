"""
Hub event taxonomy and envelope format.

Example:
    from mcop_hub.events import ObservationCreatedPayload, build_envelope

    envelope = build_envelope(
        HubEventType.OBSERVATION_CREATED,
        ObservationCreatedPayload(...),
    )
"""

from mcop_hub.events.envelope import (
    SOURCE_TAG,
    OutboundEnvelope,
    build_envelope,
    payload_to_dict,
)
from mcop_hub.events.models import (
    PAYLOAD_TYPES,
    SYSTEM_PING,
    CareExecutionLoggedPayload,
    CareExecutionStatus,
    CareTaskCompletedPayload,
    CareTaskCreatedPayload,
    CareTaskPriority,
    CareTaskStatus,
    CareTaskStatusChangedPayload,
    HubEventType,
    HubPayload,
    IncidentCreatedPayload,
    IncidentSeverity,
    IncidentType,
    InvoiceSentPayload,
    InvoiceStatus,
    MaintenanceCategory,
    MaintenancePriority,
    MaintenanceTicketCompletedPayload,
    MaintenanceTicketCreatedPayload,
    MaintenanceTicketStatus,
    MaintenanceTicketStatusChangedPayload,
    ObservationCreatedPayload,
    ObservationSeverity,
    ObservationSnapshot,
    ObservationType,
    ObservationUpdatedPayload,
    PaymentCompletedPayload,
    PaymentStatus,
    SensorAlertSeverity,
    SensorAlertTriggeredPayload,
    StaffClockInPayload,
    TimeEntrySource,
    TimeEntryType,
    payload_type_for,
)

__all__ = [
    # Registry
    "HubEventType",
    "HubPayload",
    "PAYLOAD_TYPES",
    "SYSTEM_PING",
    "payload_type_for",
    # Payloads
    "ObservationCreatedPayload",
    "ObservationUpdatedPayload",
    "ObservationSnapshot",
    "IncidentCreatedPayload",
    "CareTaskCreatedPayload",
    "CareTaskStatusChangedPayload",
    "CareTaskCompletedPayload",
    "CareExecutionLoggedPayload",
    "SensorAlertTriggeredPayload",
    "InvoiceSentPayload",
    "PaymentCompletedPayload",
    "StaffClockInPayload",
    "MaintenanceTicketCreatedPayload",
    "MaintenanceTicketStatusChangedPayload",
    "MaintenanceTicketCompletedPayload",
    # Enumerated fields
    "ObservationType",
    "ObservationSeverity",
    "IncidentType",
    "IncidentSeverity",
    "CareTaskPriority",
    "CareTaskStatus",
    "CareExecutionStatus",
    "SensorAlertSeverity",
    "InvoiceStatus",
    "PaymentStatus",
    "TimeEntryType",
    "TimeEntrySource",
    "MaintenanceCategory",
    "MaintenancePriority",
    "MaintenanceTicketStatus",
    # Envelope
    "OutboundEnvelope",
    "SOURCE_TAG",
    "build_envelope",
    "payload_to_dict",
]
