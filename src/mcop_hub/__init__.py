"""
MCOP Hub - Outbound event delivery to the integration Hub.

Delivers domain events (observations, incidents, care tasks,
maintenance tickets, ...) with bounded retries, without ever blocking
or failing the request that produced them.
"""

__version__ = "1.2026.10.0"
__version_tuple__ = (1, 2026, 10, 0)

from mcop_hub.client import SendOptions, ping_hub, send_batch, send_event
from mcop_hub.delivery import DeliveryResult, HubConfig, HubConfigError, HubTransport
from mcop_hub.dispatch import EventDispatcher, get_event_dispatcher
from mcop_hub.events import HubEventType, OutboundEnvelope, build_envelope
from mcop_hub.senders import (
    SENDERS,
    send_care_execution_logged,
    send_care_task_completed,
    send_care_task_created,
    send_care_task_status_changed,
    send_incident_created,
    send_invoice_sent,
    send_maintenance_ticket_completed,
    send_maintenance_ticket_created,
    send_maintenance_ticket_status_changed,
    send_observation_created,
    send_observation_updated,
    send_payment_completed,
    send_sensor_alert_triggered,
    send_staff_clock_in,
)

__all__ = [
    "__version__",
    "__version_tuple__",
    "HubConfig",
    "HubConfigError",
    "HubTransport",
    "DeliveryResult",
    "HubEventType",
    "OutboundEnvelope",
    "build_envelope",
    "SendOptions",
    "send_event",
    "send_batch",
    "ping_hub",
    # Typed helpers
    "SENDERS",
    "send_observation_created",
    "send_observation_updated",
    "send_incident_created",
    "send_care_task_created",
    "send_care_task_status_changed",
    "send_care_task_completed",
    "send_care_execution_logged",
    "send_sensor_alert_triggered",
    "send_invoice_sent",
    "send_payment_completed",
    "send_staff_clock_in",
    "send_maintenance_ticket_created",
    "send_maintenance_ticket_status_changed",
    "send_maintenance_ticket_completed",
    "EventDispatcher",
    "get_event_dispatcher",
]
