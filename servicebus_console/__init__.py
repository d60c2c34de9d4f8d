# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Management console for Azure Service Bus namespaces."""

from __future__ import annotations

from servicebus_console.config import BrokerConfig, ServiceBusConsoleConfig
from servicebus_console.core.engine.purge import PurgeResult, QueueTarget, SubQueue, SubscriptionTarget, purge
from servicebus_console.core.errors import BrokerOperationError, ConsoleError, NotFoundError, ValidationError
from servicebus_console.core.registry import BrokerRegistry, ClientHandlePair

__version__ = "0.1.0"

__all__ = [
    "BrokerConfig",
    "BrokerOperationError",
    "BrokerRegistry",
    "ClientHandlePair",
    "ConsoleError",
    "NotFoundError",
    "PurgeResult",
    "QueueTarget",
    "ServiceBusConsoleConfig",
    "SubQueue",
    "SubscriptionTarget",
    "ValidationError",
    "__version__",
    "purge",
]
