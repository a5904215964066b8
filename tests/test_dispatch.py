"""Tests for the fire-and-forget event dispatcher."""

import asyncio
import logging
from unittest.mock import AsyncMock, patch

import pytest
from conftest import HangingClient, MockHub

from mcop_hub.delivery.config import HubConfig
from mcop_hub.delivery.transport import HubTransport
from mcop_hub.dispatch import (
    EventDispatcher,
    get_event_dispatcher,
    reset_event_dispatcher,
)
from mcop_hub.events.models import HubEventType


@pytest.fixture(autouse=True)
def reset_global_dispatcher():
    reset_event_dispatcher()
    yield
    reset_event_dispatcher()


class TestEmit:
    @pytest.mark.asyncio
    async def test_emit_returns_before_delivery(self, hub_config, observation_payload):
        client = HangingClient()
        dispatcher = EventDispatcher(hub_config, HubTransport(client=client))

        task = dispatcher.emit(HubEventType.OBSERVATION_CREATED, observation_payload)

        assert isinstance(task, asyncio.Task)
        assert task.done() is False
        assert task.get_name() == "hub:observation.created"
        assert dispatcher.pending == 1

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_drain_waits_for_delivery(self, hub_config, observation_payload):
        hub = MockHub()
        dispatcher = EventDispatcher(hub_config, hub.transport())

        dispatcher.emit(HubEventType.OBSERVATION_CREATED, observation_payload)
        dispatcher.emit("incident.created", {"incidentId": "inc-1"})
        remaining = await dispatcher.drain(timeout=5)

        assert remaining == 0
        assert hub.calls == 2
        assert dispatcher.stats == {"pending": 0, "dispatched": 2, "failed": 0}

    @pytest.mark.asyncio
    async def test_drain_timeout_reports_pending(self, hub_config, observation_payload):
        dispatcher = EventDispatcher(hub_config, HubTransport(client=HangingClient()))

        task = dispatcher.emit(HubEventType.OBSERVATION_CREATED, observation_payload)
        remaining = await dispatcher.drain(timeout=0.05)

        assert remaining == 1
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    @pytest.mark.asyncio
    async def test_drain_with_nothing_pending(self):
        assert await EventDispatcher().drain() == 0

    @pytest.mark.asyncio
    async def test_failed_delivery_is_counted_not_raised(
        self, hub_config, observation_payload
    ):
        hub = MockHub(responses=[500])
        dispatcher = EventDispatcher(hub_config, hub.transport())

        task = dispatcher.emit(HubEventType.OBSERVATION_CREATED, observation_payload)
        await dispatcher.drain()

        assert task.result().ok is False
        assert dispatcher.stats["failed"] == 1

    @pytest.mark.asyncio
    async def test_unconfigured_emit_makes_no_request(
        self, unconfigured, observation_payload
    ):
        hub = MockHub()
        dispatcher = EventDispatcher(unconfigured, hub.transport())

        task = dispatcher.emit(HubEventType.OBSERVATION_CREATED, observation_payload)
        await dispatcher.drain()

        assert task.result().attempts == 0
        assert hub.calls == 0

    @pytest.mark.asyncio
    async def test_task_exception_is_logged(self, hub_config, caplog):
        dispatcher = EventDispatcher(hub_config)

        with patch(
            "mcop_hub.dispatch.send_event",
            new=AsyncMock(side_effect=RuntimeError("encoder crashed")),
        ):
            with caplog.at_level(logging.ERROR, logger="mcop_hub.dispatch"):
                task = dispatcher.emit("incident.created", {})
                await dispatcher.drain()

        assert isinstance(task.exception(), RuntimeError)
        assert "encoder crashed" in caplog.text
        assert dispatcher.stats["failed"] == 1

    def test_emit_without_running_loop(self, hub_config, observation_payload):
        dispatcher = EventDispatcher(hub_config)

        with pytest.raises(RuntimeError):
            dispatcher.emit(HubEventType.OBSERVATION_CREATED, observation_payload)

        assert dispatcher.pending == 0


class TestEmitBatch:
    @pytest.mark.asyncio
    async def test_emit_batch(self, hub_config, sample_payloads):
        hub = MockHub()
        dispatcher = EventDispatcher(hub_config, hub.transport())

        task = dispatcher.emit_batch(list(sample_payloads.values()))
        await dispatcher.drain()

        assert task.get_name() == "hub:batch[14]"
        assert task.result().ok is True
        assert hub.calls == 1
        assert len(hub.json_bodies()[0]) == 14


class TestGlobalDispatcher:
    def test_singleton(self):
        first = get_event_dispatcher()
        assert get_event_dispatcher() is first

    def test_first_call_config_wins(self):
        config = HubConfig(base_url="https://hub.test")

        dispatcher = get_event_dispatcher(config)

        assert dispatcher.config is config
        assert get_event_dispatcher(HubConfig()).config is config

    def test_reset(self):
        first = get_event_dispatcher()
        reset_event_dispatcher()
        assert get_event_dispatcher() is not first
