# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Convenience helpers for console operations."""

from .entities import (
    EntityStatus,
    create_queue,
    create_subscription,
    create_topic,
    delete_queue,
    delete_subscription,
    list_queues,
    list_subscriptions,
    list_topics,
    parse_status,
    set_queue_status,
    set_subscription_status,
)
from .listing import ListQuery, Page, apply_query
from .purge import PurgeResult, PurgeTarget, QueueTarget, SubQueue, SubscriptionTarget, purge

__all__ = [
    "EntityStatus",
    "ListQuery",
    "Page",
    "PurgeResult",
    "PurgeTarget",
    "QueueTarget",
    "SubQueue",
    "SubscriptionTarget",
    "apply_query",
    "create_queue",
    "create_subscription",
    "create_topic",
    "delete_queue",
    "delete_subscription",
    "list_queues",
    "list_subscriptions",
    "list_topics",
    "parse_status",
    "purge",
    "set_queue_status",
    "set_subscription_status",
]
