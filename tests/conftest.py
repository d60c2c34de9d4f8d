# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import os
import secrets
from typing import TYPE_CHECKING

import django
import pytest
from django.test import Client

from servicebus_console.components.web.services import reset_registry, set_registry
from servicebus_console.config import (
    BrokerConfig,
    FrontendConfig,
    LoggingConfigFile,
    ServiceBusConsoleConfig,
    reset_settings,
    set_settings,
)
from servicebus_console.core.registry import BrokerRegistry, ClientHandlePair
from tests.fixtures.servicebus import CONNECTION_STRING, FakeAdminClient, FakeDataClient

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(scope="session", autouse=True)
def _console_settings(tmp_path_factory: pytest.TempPathFactory) -> None:
    log_dir = tmp_path_factory.mktemp("servicebus_console_logs")
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "servicebus_console.components.web.settings")
    reset_settings()
    set_settings(
        ServiceBusConsoleConfig(
            logging=LoggingConfigFile(log_dir=log_dir),
            frontend=FrontendConfig(secret_key=secrets.token_urlsafe(32), debug=False),
        ),
    )
    if not django.apps.apps.ready:
        django.setup()


@pytest.fixture
def primary_broker() -> BrokerConfig:
    return BrokerConfig(name="primary", connection_string=CONNECTION_STRING)


@pytest.fixture
def fake_admin() -> FakeAdminClient:
    return FakeAdminClient()


@pytest.fixture
def fake_data() -> FakeDataClient:
    return FakeDataClient()


@pytest.fixture
def clients(fake_admin: FakeAdminClient, fake_data: FakeDataClient) -> ClientHandlePair:
    return ClientHandlePair(admin=fake_admin, data=fake_data)


@pytest.fixture
def registry(primary_broker: BrokerConfig, clients: ClientHandlePair) -> BrokerRegistry:
    return BrokerRegistry([primary_broker], client_factory=lambda _config: clients)


@pytest.fixture
def web_client(registry: BrokerRegistry) -> Generator[Client, None, None]:
    set_registry(registry)
    try:
        yield Client()
    finally:
        reset_registry()
