# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Registry resolving broker names to Service Bus client handles."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from azure.identity import DefaultAzureCredential
from azure.servicebus import ServiceBusClient
from azure.servicebus.management import ServiceBusAdministrationClient

from servicebus_console.core.errors import NotFoundError
from servicebus_console.shared.redaction import redact_connection_string

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from servicebus_console.config import BrokerConfig

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientHandlePair:
    """Administrative and data-plane handles for one broker."""

    admin: Any
    data: Any


def build_clients(config: BrokerConfig) -> ClientHandlePair:
    """Construct SDK clients for a broker; no network I/O happens until first use."""
    if config.connection_string:
        admin = ServiceBusAdministrationClient.from_connection_string(config.connection_string)
        data = ServiceBusClient.from_connection_string(config.connection_string)
        return ClientHandlePair(admin=admin, data=data)
    credential = DefaultAzureCredential()
    namespace = str(config.fully_qualified_namespace)
    admin = ServiceBusAdministrationClient(fully_qualified_namespace=namespace, credential=credential)
    data = ServiceBusClient(fully_qualified_namespace=namespace, credential=credential)
    return ClientHandlePair(admin=admin, data=data)


class BrokerRegistry:
    """Registry for configured brokers and their lazily built client handles."""

    def __init__(
        self,
        brokers: Iterable[BrokerConfig] = (),
        *,
        client_factory: Callable[[BrokerConfig], ClientHandlePair] = build_clients,
    ) -> None:
        """Create a registry for the given broker configurations."""
        self._configs: dict[str, BrokerConfig] = {}
        for broker in brokers:
            if broker.name in self._configs:
                message = f"Duplicate broker name registered: {broker.name}"
                raise ValueError(message)
            self._configs[broker.name] = broker
        self._client_factory = client_factory
        self._handles: dict[str, ClientHandlePair] = {}
        self._lock = threading.Lock()

    def names(self) -> list[str]:
        """Return configured broker names in configuration order."""
        return list(self._configs)

    def get_config(self, name: str) -> BrokerConfig:
        """Return the configuration for a broker name."""
        try:
            return self._configs[name]
        except KeyError as exc:
            message = f"Unknown broker: {name}"
            raise NotFoundError(message) from exc

    def resolve(self, name: str) -> ClientHandlePair:
        """Return the cached client pair for a broker, constructing it on first use."""
        handles = self._handles.get(name)
        if handles is not None:
            return handles
        config = self.get_config(name)
        with self._lock:
            handles = self._handles.get(name)
            if handles is None:
                _LOGGER.info("Building Service Bus clients for broker %s (%s).", name, config.host or "unknown host")
                handles = self._client_factory(config)
                self._handles[name] = handles
        return handles

    def describe(self) -> list[dict[str, object]]:
        """Return redacted broker descriptors for display."""
        return [
            {
                "name": config.name,
                "host": config.host,
                "authMode": config.auth_mode,
                "connectionString": redact_connection_string(config.connection_string),
                "connected": config.name in self._handles,
            }
            for config in self._configs.values()
        ]

    def close(self) -> None:
        """Close every constructed client handle."""
        with self._lock:
            handles = list(self._handles.items())
            self._handles.clear()
        for name, pair in handles:
            for client in (pair.admin, pair.data):
                close = getattr(client, "close", None)
                if callable(close):
                    close()
            _LOGGER.debug("Closed Service Bus clients for broker %s.", name)
