# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from servicebus_console import cli
from servicebus_console.config import BrokerConfig, LoggingConfigFile, ServiceBusConsoleConfig
from servicebus_console.core.registry import BrokerRegistry
from tests.fixtures.servicebus import CONNECTION_STRING, FakeReceiver

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from servicebus_console.core.registry import ClientHandlePair
    from tests.fixtures.servicebus import FakeDataClient


@pytest.fixture
def cli_env(
    tmp_path: Path,
    clients: ClientHandlePair,
    monkeypatch: pytest.MonkeyPatch,
) -> list[BrokerRegistry]:
    config = ServiceBusConsoleConfig(
        logging=LoggingConfigFile(log_dir=tmp_path),
        brokers=[BrokerConfig(name="primary", connection_string=CONNECTION_STRING)],
    )
    built: list[BrokerRegistry] = []

    def _registry(brokers: Iterable[BrokerConfig]) -> BrokerRegistry:
        registry = BrokerRegistry(brokers, client_factory=lambda _config: clients)
        built.append(registry)
        return registry

    monkeypatch.setattr(cli, "get_settings", lambda: config)
    monkeypatch.setattr(cli, "BrokerRegistry", _registry)
    monkeypatch.setattr(cli, "configure_process_logging", lambda *_args, **_kwargs: tmp_path / "cli.log")
    return built


def test_purge_queue(cli_env: list[BrokerRegistry], fake_data: FakeDataClient) -> None:
    receiver = fake_data.add_queue_receiver("orders", FakeReceiver(depth=42))

    result = CliRunner().invoke(cli.main, ["purge", "--queue", "orders"])

    assert result.exit_code == 0, result.output
    assert "Purged 42 messages from queue orders [active]." in result.output
    assert receiver.close_count == 1
    assert fake_data.closed is True
    assert len(cli_env) == 1


def test_purge_subscription_dead_letters(cli_env: list[BrokerRegistry], fake_data: FakeDataClient) -> None:
    fake_data.add_subscription_receiver("events", "audit", FakeReceiver(depth=3), dead_letter=True)

    result = CliRunner().invoke(
        cli.main,
        ["purge", "--broker", "primary", "--topic", "events", "--subscription", "audit", "--dead-letter"],
    )

    assert result.exit_code == 0, result.output
    assert "Purged 3 messages from subscription events/audit [deadletter]." in result.output
    assert cli_env


@pytest.mark.parametrize(
    "args",
    [
        ["purge"],
        ["purge", "--topic", "events"],
        ["purge", "--queue", "orders", "--topic", "events", "--subscription", "audit"],
    ],
)
def test_purge_rejects_ambiguous_targets(cli_env: list[BrokerRegistry], args: list[str]) -> None:
    result = CliRunner().invoke(cli.main, args)

    assert result.exit_code == 2
    assert "Pass either --queue" in result.output
    assert cli_env == []


def test_purge_unknown_broker(cli_env: list[BrokerRegistry]) -> None:
    result = CliRunner().invoke(cli.main, ["purge", "--broker", "elsewhere", "--queue", "orders"])

    assert result.exit_code == 1
    assert "NOT_FOUND: Unknown broker: elsewhere" in result.output
    assert cli_env


def test_purge_broker_failure(cli_env: list[BrokerRegistry], fake_data: FakeDataClient) -> None:
    receiver = fake_data.add_queue_receiver("orders", FakeReceiver(depth=300, fail_on_call=2))

    result = CliRunner().invoke(cli.main, ["purge", "--queue", "orders"])

    assert result.exit_code == 1
    assert "BROKER_ERROR" in result.output
    assert receiver.close_count == 1
    assert fake_data.closed is True
    assert cli_env


def test_brokers_lists_configured_brokers(cli_env: list[BrokerRegistry]) -> None:
    result = CliRunner().invoke(cli.main, ["brokers"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "primary\tprimary.servicebus.windows.net\tconnection_string"
    assert cli_env


def test_serve_applies_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = ServiceBusConsoleConfig(logging=LoggingConfigFile(log_dir=tmp_path))
    applied: list[ServiceBusConsoleConfig] = []
    served: list[tuple[str, int]] = []

    monkeypatch.setattr(cli, "get_settings", lambda: config)
    monkeypatch.setattr(cli, "set_settings", applied.append)
    monkeypatch.setattr(cli, "configure_process_logging", lambda *_args, **_kwargs: tmp_path / "web.log")
    monkeypatch.setattr(cli, "serve_http", lambda host, port: served.append((host, port)))

    result = CliRunner().invoke(cli.main, ["serve", "--host", "0.0.0.0", "--port", "8080", "--debug"])  # noqa: S104

    assert result.exit_code == 0, result.output
    assert served == [("0.0.0.0", 8080)]  # noqa: S104
    assert applied[0].frontend.debug is True
    assert "no Service Bus brokers configured" in result.output
    assert f"Logging to {tmp_path / 'web.log'}" in result.output


def test_serve_rejects_invalid_port() -> None:
    result = CliRunner().invoke(cli.main, ["serve", "--port", "70000"])

    assert result.exit_code == 2
