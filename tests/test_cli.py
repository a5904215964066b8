"""Tests for the mcop-hub CLI."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from mcop_hub import __version__
from mcop_hub.cli import app
from mcop_hub.delivery.config import HubConfig
from mcop_hub.delivery.result import DeliveryResult

runner = CliRunner()


@pytest.fixture
def no_hub_env(monkeypatch):
    for name in (
        "MCOP_HUB_URL",
        "MCOP_HUB_TOKEN",
        "MCOP_HUB_TIMEOUT_MS",
        "MCOP_HUB_MAX_ATTEMPTS",
        "MCOP_HUB_INITIAL_BACKOFF_MS",
        "CODEX_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)


class TestCliBasics:
    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("events", "config", "ping", "send"):
            assert command in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_events_lists_all_types(self):
        result = runner.invoke(app, ["events"])

        assert result.exit_code == 0
        assert "observation.created" in result.output
        assert "maintenance_ticket.completed" in result.output
        assert "14 event type(s)" in result.output


class TestConfigCommand:
    def test_unconfigured_warning(self, tmp_path, no_hub_env):
        result = runner.invoke(app, ["config", "-p", str(tmp_path)])

        assert result.exit_code == 0
        assert "events will be skipped" in result.output

    def test_token_is_masked(self, tmp_path, no_hub_env):
        HubConfig(base_url="https://hub.test", token="super-secret-token").save(
            tmp_path / ".mcop" / "config.yaml"
        )

        result = runner.invoke(app, ["config", "-p", str(tmp_path)])

        assert result.exit_code == 0
        assert "supe****" in result.output
        assert "super-secret-token" not in result.output

    def test_invalid_environment(self, tmp_path, no_hub_env, monkeypatch):
        monkeypatch.setenv("MCOP_HUB_MAX_ATTEMPTS", "lots")

        result = runner.invoke(app, ["config", "-p", str(tmp_path)])

        assert result.exit_code == 2


class TestSendCommand:
    def test_unknown_event_type(self, tmp_path):
        result = runner.invoke(
            app, ["send", "resident.deleted", "-d", "{}", "-p", str(tmp_path)]
        )

        assert result.exit_code == 2
        assert "unknown event type" in result.output

    def test_requires_one_payload_source(self, tmp_path):
        result = runner.invoke(app, ["send", "incident.created", "-p", str(tmp_path)])

        assert result.exit_code == 2

    def test_invalid_json(self, tmp_path):
        result = runner.invoke(
            app, ["send", "incident.created", "-d", "{not json", "-p", str(tmp_path)]
        )

        assert result.exit_code == 2
        assert "could not read payload" in result.output

    def test_payload_must_be_object(self, tmp_path):
        result = runner.invoke(
            app, ["send", "incident.created", "-d", "[1, 2]", "-p", str(tmp_path)]
        )

        assert result.exit_code == 2

    def test_unconfigured_is_skipped(self, tmp_path, no_hub_env):
        result = runner.invoke(
            app,
            ["send", "incident.created", "-d", '{"incidentId": "inc-1"}', "-p", str(tmp_path)],
        )

        assert result.exit_code == 1
        assert "Skipped" in result.output
        assert "MCOP_HUB_URL missing" in result.output

    def test_successful_send(self, tmp_path, no_hub_env, monkeypatch):
        monkeypatch.setenv("MCOP_HUB_URL", "https://hub.test")
        payload_file = tmp_path / "incident.json"
        payload_file.write_text(json.dumps({"incidentId": "inc-1"}))

        with patch(
            "mcop_hub.client.post_with_retry",
            new=AsyncMock(return_value=DeliveryResult.success(1, 200)),
        ) as post:
            result = runner.invoke(
                app,
                [
                    "send",
                    "incident.created",
                    "-f",
                    str(payload_file),
                    "--source-version",
                    "9.9.9",
                    "-p",
                    str(tmp_path),
                ],
            )

        assert result.exit_code == 0
        assert "Delivered" in result.output
        url, body = post.call_args.args[:2]
        assert url == "https://hub.test/api/events"
        assert body["type"] == "incident.created"
        assert body["payload"] == {"incidentId": "inc-1"}
        assert body["source_version"] == "9.9.9"

    def test_failed_send_exits_nonzero(self, tmp_path, no_hub_env, monkeypatch):
        monkeypatch.setenv("MCOP_HUB_URL", "https://hub.test")

        with patch(
            "mcop_hub.client.post_with_retry",
            new=AsyncMock(
                return_value=DeliveryResult.failure(2, 500, "HTTP 500 - down")
            ),
        ):
            result = runner.invoke(
                app, ["send", "incident.created", "-d", "{}", "-p", str(tmp_path)]
            )

        assert result.exit_code == 1
        assert "Failed" in result.output


class TestPingCommand:
    def test_ping_unconfigured(self, tmp_path, no_hub_env):
        result = runner.invoke(app, ["ping", "-p", str(tmp_path)])

        assert result.exit_code == 1
        assert "Skipped" in result.output

    def test_ping_success(self, tmp_path, no_hub_env, monkeypatch):
        monkeypatch.setenv("MCOP_HUB_URL", "https://hub.test")

        with patch(
            "mcop_hub.client.post_with_retry",
            new=AsyncMock(return_value=DeliveryResult.success(1, 200)),
        ):
            result = runner.invoke(app, ["ping", "-p", str(tmp_path)])

        assert result.exit_code == 0
        assert "https://hub.test/api/events" in result.output
