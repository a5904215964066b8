"""Shared fixtures for Hub delivery tests."""

import asyncio
import json
import time

import httpx
import pytest

from mcop_hub.delivery.config import HubConfig
from mcop_hub.delivery.transport import HubTransport
from mcop_hub.events.models import (
    CareExecutionLoggedPayload,
    CareExecutionStatus,
    CareTaskCompletedPayload,
    CareTaskCreatedPayload,
    CareTaskPriority,
    CareTaskStatus,
    CareTaskStatusChangedPayload,
    HubEventType,
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
)

HUB_URL = "https://hub.example.test"


class MockHub:
    """In-process Hub built on httpx.MockTransport.

    ``responses`` is consumed one item per request; the last item repeats.
    An item is either an HTTP status code or an exception to raise.
    """

    def __init__(self, responses=(200,), body: str = '{"ok": true}'):
        self.responses = list(responses)
        self.body = body
        self.requests: list[httpx.Request] = []
        self.call_times: list[float] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.call_times.append(time.monotonic())

        index = min(len(self.requests), len(self.responses)) - 1
        outcome = self.responses[index]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome, text=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_bodies(self) -> list:
        return [json.loads(r.content) for r in self.requests]

    def transport(self) -> HubTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return HubTransport(client=client)


class HangingClient:
    """AsyncClient stand-in whose POST never resolves."""

    def __init__(self):
        self.calls = 0

    async def post(self, *args, **kwargs):
        self.calls += 1
        await asyncio.Event().wait()


@pytest.fixture
def hub_config():
    """Configured Hub with a token and a fast backoff."""
    return HubConfig(
        base_url=HUB_URL,
        token="secret-token",
        timeout_seconds=1.0,
        initial_backoff_seconds=0.01,
    )


@pytest.fixture
def unconfigured():
    return HubConfig(base_url="")


@pytest.fixture
def mock_hub():
    return MockHub()


@pytest.fixture
def observation_payload():
    return ObservationCreatedPayload(
        observation_id="obs-1",
        resident_id="res-1",
        residence_id="resid-1",
        observation_type=ObservationType.CLINICAL,
        severity=ObservationSeverity.INFO,
        content="BP stable",
        created_at="2024-01-01T10:00:00.000Z",
        visible_to_family=False,
    )


@pytest.fixture
def sample_payloads(observation_payload):
    """One valid payload per event type."""
    return {
        HubEventType.OBSERVATION_CREATED: observation_payload,
        HubEventType.OBSERVATION_UPDATED: ObservationUpdatedPayload(
            observation_id="obs-1",
            resident_id="res-1",
            residence_id="resid-1",
            updated_at="2024-01-01T11:00:00.000Z",
            changed_fields=["severity"],
            previous=ObservationSnapshot(severity=ObservationSeverity.INFO),
            current=ObservationSnapshot(severity=ObservationSeverity.WARNING),
        ),
        HubEventType.INCIDENT_CREATED: IncidentCreatedPayload(
            incident_id="inc-1",
            residence_id="resid-1",
            incident_type=IncidentType.FALL,
            severity=IncidentSeverity.MODERATE,
            occurred_at="2024-01-01T09:30:00.000Z",
            title="Fall in hallway",
            description="Resident slipped near room 12",
            reported_by_employee_id="emp-1",
            family_notified=True,
            resident_id="res-1",
        ),
        HubEventType.CARE_TASK_CREATED: CareTaskCreatedPayload(
            care_task_id="task-1",
            resident_id="res-1",
            residence_id="resid-1",
            category="HYGIENE",
            title="Morning bath",
            scheduled_date="2024-01-02",
            priority=CareTaskPriority.NORMAL,
            created_at="2024-01-01T12:00:00.000Z",
        ),
        HubEventType.CARE_TASK_STATUS_CHANGED: CareTaskStatusChangedPayload(
            care_task_id="task-1",
            resident_id="res-1",
            residence_id="resid-1",
            category="HYGIENE",
            title="Morning bath",
            previous_status="PENDING",
            new_status=CareTaskStatus.IN_PROGRESS,
            changed_at="2024-01-02T08:00:00.000Z",
        ),
        HubEventType.CARE_TASK_COMPLETED: CareTaskCompletedPayload(
            care_task_id="task-1",
            resident_id="res-1",
            residence_id="resid-1",
            category="HYGIENE",
            title="Morning bath",
            scheduled_date="2024-01-02",
            status=CareTaskStatus.COMPLETED,
            completed_at="2024-01-02T08:30:00.000Z",
        ),
        HubEventType.CARE_EXECUTION_LOGGED: CareExecutionLoggedPayload(
            care_execution_id="exec-1",
            care_task_id="task-1",
            resident_id="res-1",
            residence_id="resid-1",
            executed_by_employee_id="emp-2",
            started_at="2024-01-02T08:00:00.000Z",
            status=CareExecutionStatus.COMPLETED,
            metrics={"durationMinutes": 25},
        ),
        HubEventType.SENSOR_ALERT_TRIGGERED: SensorAlertTriggeredPayload(
            sensor_alert_id="alert-1",
            sensor_id="sensor-1",
            residence_id="resid-1",
            alert_type="DOOR_OPEN",
            severity=SensorAlertSeverity.WARNING,
            triggered_at="2024-01-02T03:00:00.000Z",
            message_title="Door open at night",
        ),
        HubEventType.INVOICE_SENT: InvoiceSentPayload(
            invoice_id="inv-1",
            residence_id="resid-1",
            lease_id="lease-1",
            resident_id="res-1",
            invoice_number="INV-2024-001",
            issue_date="2024-01-01",
            due_date="2024-01-31",
            total=2450.0,
            balance_due=2450.0,
            status=InvoiceStatus.SENT,
        ),
        HubEventType.PAYMENT_COMPLETED: PaymentCompletedPayload(
            payment_id="pay-1",
            residence_id="resid-1",
            amount=2450.0,
            payment_method="BANK_TRANSFER",
            payment_date="2024-01-15",
            status=PaymentStatus.COMPLETED,
        ),
        HubEventType.STAFF_CLOCK_IN: StaffClockInPayload(
            time_entry_id="time-1",
            employee_id="emp-1",
            residence_id="resid-1",
            entry_type=TimeEntryType.CLOCK_IN,
            timestamp="2024-01-02T07:00:00.000Z",
            source=TimeEntrySource.APP,
        ),
        HubEventType.MAINTENANCE_TICKET_CREATED: MaintenanceTicketCreatedPayload(
            ticket_id="mt-1",
            ticket_number="MT-001",
            residence_id="resid-1",
            category=MaintenanceCategory.PLUMBING,
            priority=MaintenancePriority.HIGH,
            title="Leaking sink",
            description="Sink in room 4 is leaking",
            created_at="2024-01-02T10:00:00.000Z",
        ),
        HubEventType.MAINTENANCE_TICKET_STATUS_CHANGED: MaintenanceTicketStatusChangedPayload(
            ticket_id="mt-1",
            residence_id="resid-1",
            previous_status="OPEN",
            new_status=MaintenanceTicketStatus.ASSIGNED,
            changed_at="2024-01-02T11:00:00.000Z",
            assigned_employee_id="emp-3",
        ),
        HubEventType.MAINTENANCE_TICKET_COMPLETED: MaintenanceTicketCompletedPayload(
            ticket_id="mt-1",
            residence_id="resid-1",
            category="PLUMBING",
            priority="HIGH",
            title="Leaking sink",
            resolution_notes="Replaced washer",
            actual_cost=35.5,
            actual_duration_minutes=40,
        ),
    }
