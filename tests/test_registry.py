# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import threading
import time

import pytest

from servicebus_console.config import BrokerConfig
from servicebus_console.core import registry as registry_module
from servicebus_console.core.errors import NotFoundError
from servicebus_console.core.registry import BrokerRegistry, ClientHandlePair, build_clients
from tests.fixtures.servicebus import CONNECTION_STRING, FakeAdminClient, FakeDataClient


class _CountingFactory:
    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.built: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, config: BrokerConfig) -> ClientHandlePair:
        time.sleep(self.delay)
        with self._lock:
            self.built.append(config.name)
        return ClientHandlePair(admin=FakeAdminClient(), data=FakeDataClient())


def _brokers() -> list[BrokerConfig]:
    return [
        BrokerConfig(name="primary", connection_string=CONNECTION_STRING),
        BrokerConfig(name="secondary", fully_qualified_namespace="secondary"),
    ]


def test_resolve_returns_cached_pair() -> None:
    factory = _CountingFactory()
    registry = BrokerRegistry(_brokers(), client_factory=factory)

    first = registry.resolve("primary")
    second = registry.resolve("primary")

    assert first is second
    assert factory.built == ["primary"]


def test_resolve_keeps_brokers_separate() -> None:
    factory = _CountingFactory()
    registry = BrokerRegistry(_brokers(), client_factory=factory)

    assert registry.resolve("primary") is not registry.resolve("secondary")
    assert sorted(factory.built) == ["primary", "secondary"]


def test_concurrent_resolve_constructs_once() -> None:
    factory = _CountingFactory(delay=0.05)
    registry = BrokerRegistry(_brokers(), client_factory=factory)
    barrier = threading.Barrier(8)
    results: list[ClientHandlePair] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        pair = registry.resolve("primary")
        with results_lock:
            results.append(pair)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert factory.built == ["primary"]
    assert len(results) == 8
    assert all(pair is results[0] for pair in results)


def test_resolve_unknown_broker_raises_not_found() -> None:
    factory = _CountingFactory()
    registry = BrokerRegistry(_brokers(), client_factory=factory)

    with pytest.raises(NotFoundError, match="Unknown broker: missing"):
        registry.resolve("missing")
    assert factory.built == []


def test_duplicate_broker_names_are_rejected() -> None:
    broker = BrokerConfig(name="primary", connection_string=CONNECTION_STRING)
    with pytest.raises(ValueError, match="Duplicate broker name"):
        BrokerRegistry([broker, broker])


def test_describe_redacts_credentials() -> None:
    registry = BrokerRegistry(_brokers(), client_factory=_CountingFactory())
    registry.resolve("primary")

    rows = {row["name"]: row for row in registry.describe()}

    primary = rows["primary"]
    assert primary["host"] == "primary.servicebus.windows.net"
    assert primary["authMode"] == "connection_string"
    assert primary["connected"] is True
    assert "c2VjcmV0LWtleQ" not in str(primary["connectionString"])
    assert "SharedAccessKey=***" in str(primary["connectionString"])

    secondary = rows["secondary"]
    assert secondary["host"] == "secondary.servicebus.windows.net"
    assert secondary["authMode"] == "azure_identity"
    assert secondary["connectionString"] is None
    assert secondary["connected"] is False


def test_close_closes_every_handle() -> None:
    factory = _CountingFactory()
    registry = BrokerRegistry(_brokers(), client_factory=factory)
    pair = registry.resolve("primary")

    registry.close()

    assert pair.admin.closed is True
    assert pair.data.closed is True
    assert registry.resolve("primary") is not pair


def test_build_clients_uses_connection_string(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, str]] = []

    class _AdminStub:
        @classmethod
        def from_connection_string(cls, value: str) -> str:
            seen.append(("admin", value))
            return "admin"

    class _DataStub:
        @classmethod
        def from_connection_string(cls, value: str) -> str:
            seen.append(("data", value))
            return "data"

    monkeypatch.setattr(registry_module, "ServiceBusAdministrationClient", _AdminStub)
    monkeypatch.setattr(registry_module, "ServiceBusClient", _DataStub)

    pair = build_clients(BrokerConfig(name="primary", connection_string=CONNECTION_STRING))

    assert pair == ClientHandlePair(admin="admin", data="data")
    assert seen == [("admin", CONNECTION_STRING), ("data", CONNECTION_STRING)]


def test_build_clients_uses_identity_for_namespace(monkeypatch: pytest.MonkeyPatch) -> None:
    credential = object()
    seen: list[dict[str, object]] = []

    def _client(**kwargs: object) -> dict[str, object]:
        seen.append(kwargs)
        return kwargs

    monkeypatch.setattr(registry_module, "DefaultAzureCredential", lambda: credential)
    monkeypatch.setattr(registry_module, "ServiceBusAdministrationClient", _client)
    monkeypatch.setattr(registry_module, "ServiceBusClient", _client)

    build_clients(BrokerConfig(name="secondary", fully_qualified_namespace="sb://secondary.servicebus.windows.net/"))

    assert seen == [
        {"fully_qualified_namespace": "secondary.servicebus.windows.net", "credential": credential},
        {"fully_qualified_namespace": "secondary.servicebus.windows.net", "credential": credential},
    ]
