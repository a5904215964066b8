"""
Typed send helpers, one per Hub event type.

Each helper is equivalent to calling send_event() with its event type;
the payload class pins the shape so a mismatch is caught before any
network I/O.

Example:
    result = await send_observation_created(
        ObservationCreatedPayload(...),
        HubConfig.from_env(),
    )
"""

from mcop_hub.client import SendOptions, send_event
from mcop_hub.delivery.config import HubConfig
from mcop_hub.delivery.result import DeliveryResult
from mcop_hub.delivery.transport import HubTransport
from mcop_hub.events.models import (
    CareExecutionLoggedPayload,
    CareTaskCompletedPayload,
    CareTaskCreatedPayload,
    CareTaskStatusChangedPayload,
    HubEventType,
    IncidentCreatedPayload,
    InvoiceSentPayload,
    MaintenanceTicketCompletedPayload,
    MaintenanceTicketCreatedPayload,
    MaintenanceTicketStatusChangedPayload,
    ObservationCreatedPayload,
    ObservationUpdatedPayload,
    PaymentCompletedPayload,
    SensorAlertTriggeredPayload,
    StaffClockInPayload,
)


async def send_observation_created(
    payload: ObservationCreatedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    """Send an ``observation.created`` event after the observation is stored."""
    return await send_event(
        HubEventType.OBSERVATION_CREATED, payload, config, options, transport=transport
    )


async def send_observation_updated(
    payload: ObservationUpdatedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    """Send an ``observation.updated`` event carrying the previous/current diff."""
    return await send_event(
        HubEventType.OBSERVATION_UPDATED, payload, config, options, transport=transport
    )


async def send_incident_created(
    payload: IncidentCreatedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.INCIDENT_CREATED, payload, config, options, transport=transport
    )


async def send_care_task_created(
    payload: CareTaskCreatedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.CARE_TASK_CREATED, payload, config, options, transport=transport
    )


async def send_care_task_status_changed(
    payload: CareTaskStatusChangedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.CARE_TASK_STATUS_CHANGED, payload, config, options, transport=transport
    )


async def send_care_task_completed(
    payload: CareTaskCompletedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.CARE_TASK_COMPLETED, payload, config, options, transport=transport
    )


async def send_care_execution_logged(
    payload: CareExecutionLoggedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.CARE_EXECUTION_LOGGED, payload, config, options, transport=transport
    )


async def send_sensor_alert_triggered(
    payload: SensorAlertTriggeredPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.SENSOR_ALERT_TRIGGERED, payload, config, options, transport=transport
    )


async def send_invoice_sent(
    payload: InvoiceSentPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.INVOICE_SENT, payload, config, options, transport=transport
    )


async def send_payment_completed(
    payload: PaymentCompletedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.PAYMENT_COMPLETED, payload, config, options, transport=transport
    )


async def send_staff_clock_in(
    payload: StaffClockInPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.STAFF_CLOCK_IN, payload, config, options, transport=transport
    )


async def send_maintenance_ticket_created(
    payload: MaintenanceTicketCreatedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.MAINTENANCE_TICKET_CREATED, payload, config, options, transport=transport
    )


async def send_maintenance_ticket_status_changed(
    payload: MaintenanceTicketStatusChangedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.MAINTENANCE_TICKET_STATUS_CHANGED, payload, config, options, transport=transport
    )


async def send_maintenance_ticket_completed(
    payload: MaintenanceTicketCompletedPayload,
    config: HubConfig | None = None,
    options: SendOptions | None = None,
    *,
    transport: HubTransport | None = None,
) -> DeliveryResult:
    return await send_event(
        HubEventType.MAINTENANCE_TICKET_COMPLETED, payload, config, options, transport=transport
    )


# Event type -> typed helper
SENDERS = {
    HubEventType.OBSERVATION_CREATED: send_observation_created,
    HubEventType.OBSERVATION_UPDATED: send_observation_updated,
    HubEventType.INCIDENT_CREATED: send_incident_created,
    HubEventType.CARE_TASK_CREATED: send_care_task_created,
    HubEventType.CARE_TASK_STATUS_CHANGED: send_care_task_status_changed,
    HubEventType.CARE_TASK_COMPLETED: send_care_task_completed,
    HubEventType.CARE_EXECUTION_LOGGED: send_care_execution_logged,
    HubEventType.SENSOR_ALERT_TRIGGERED: send_sensor_alert_triggered,
    HubEventType.INVOICE_SENT: send_invoice_sent,
    HubEventType.PAYMENT_COMPLETED: send_payment_completed,
    HubEventType.STAFF_CLOCK_IN: send_staff_clock_in,
    HubEventType.MAINTENANCE_TICKET_CREATED: send_maintenance_ticket_created,
    HubEventType.MAINTENANCE_TICKET_STATUS_CHANGED: send_maintenance_ticket_status_changed,
    HubEventType.MAINTENANCE_TICKET_COMPLETED: send_maintenance_ticket_completed,
}
