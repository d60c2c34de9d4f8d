# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Entity listing and lifecycle helpers on top of the administration client."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from enum import Enum, StrEnum
from typing import TYPE_CHECKING, Any

from azure.servicebus.management import EntityStatus as SdkEntityStatus

from servicebus_console.core.errors import ValidationError, broker_call

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "EntityStatus",
    "create_queue",
    "create_subscription",
    "create_topic",
    "delete_queue",
    "delete_subscription",
    "list_queues",
    "list_subscriptions",
    "list_topics",
    "parse_status",
    "require_name",
    "serialize_properties",
    "set_queue_status",
    "set_subscription_status",
]

_LOGGER = logging.getLogger(__name__)
_CAMEL_RE = re.compile(r"_([a-z0-9])")
_MAX_DEPTH = 4


class EntityStatus(StrEnum):
    """Statuses the console accepts for queues and subscriptions."""

    ACTIVE = "Active"
    DISABLED = "Disabled"


def parse_status(value: object) -> EntityStatus:
    """Validate a requested status without touching the broker."""
    for status in EntityStatus:
        if value == status.value:
            return status
    message = f"Invalid status {value!r}; expected one of: {', '.join(s.value for s in EntityStatus)}."
    raise ValidationError(message)


def require_name(value: str | None, label: str) -> str:
    """Return a stripped, non-empty entity name."""
    cleaned = (value or "").strip()
    if not cleaned:
        message = f"{label} is required."
        raise ValidationError(message)
    return cleaned


def _camelize(key: str) -> str:
    return _CAMEL_RE.sub(lambda match: match.group(1).upper(), key)


def _iso_duration(value: timedelta) -> str:
    seconds = int(value.total_seconds())
    days, remainder = divmod(seconds, 86_400)
    hours, remainder = divmod(remainder, 3_600)
    minutes, seconds = divmod(remainder, 60)
    date_part = f"{days}D" if days else ""
    time_part = "".join(
        f"{amount}{unit}" for amount, unit in ((hours, "H"), (minutes, "M"), (seconds, "S")) if amount
    )
    if not date_part and not time_part:
        return "PT0S"
    return f"P{date_part}T{time_part}" if time_part else f"P{date_part}"


def _public_fields(obj: object) -> dict[str, Any]:
    items = getattr(obj, "items", None)
    if callable(items):
        fields = dict(items())
    else:
        fields = {key: value for key, value in getattr(obj, "__dict__", {}).items() if not key.startswith("_")}
    owner = type(obj)
    for attr in dir(owner):
        if attr.startswith("_") or attr in fields:
            continue
        if isinstance(getattr(owner, attr, None), property):
            fields[attr] = getattr(obj, attr)
    return fields


def _jsonable(value: object, depth: int = 0) -> object:  # noqa: PLR0911
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, timedelta):
        return _iso_duration(value)
    if isinstance(value, dict):
        return {_camelize(str(key)): _jsonable(item, depth + 1) for key, item in value.items()}
    if isinstance(value, list | tuple | set):
        return [_jsonable(item, depth + 1) for item in value]
    if depth >= _MAX_DEPTH:
        return str(value)
    return serialize_properties(value, depth=depth + 1)


def serialize_properties(*sources: object, depth: int = 0) -> dict[str, Any]:
    """Merge SDK property objects into one JSON-ready dict with camelCase keys."""
    merged: dict[str, Any] = {}
    for source in sources:
        for key, value in _public_fields(source).items():
            merged[_camelize(key)] = _jsonable(value, depth)
    return merged


def list_queues(admin: Any) -> list[dict[str, Any]]:
    """Return every queue merged with its runtime counters."""
    rows: list[dict[str, Any]] = []
    with broker_call("Listing queues"):
        for props in admin.list_queues():
            runtime = admin.get_queue_runtime_properties(props.name)
            rows.append(serialize_properties(props, runtime))
    _LOGGER.debug("Found %d queues.", len(rows))
    return rows


def _subscription_rows(admin: Any, topic_name: str) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for props in admin.list_subscriptions(topic_name):
        runtime = admin.get_subscription_runtime_properties(topic_name, props.name)
        row = serialize_properties(props, runtime)
        row["topicName"] = topic_name
        row["subscriptionName"] = props.name
        rows.append(row)
    return rows


def list_topics(admin: Any, *, include_subscriptions: bool = False) -> list[dict[str, Any]]:
    """Return every topic merged with its runtime counters, optionally with subscriptions."""
    rows: list[dict[str, Any]] = []
    with broker_call("Listing topics"):
        for props in admin.list_topics():
            runtime = admin.get_topic_runtime_properties(props.name)
            row = serialize_properties(props, runtime)
            if include_subscriptions:
                row["subscriptions"] = _subscription_rows(admin, props.name)
            rows.append(row)
    _LOGGER.debug("Found %d topics.", len(rows))
    return rows


def list_subscriptions(admin: Any, topic_name: str | None = None) -> list[dict[str, Any]]:
    """Return subscriptions for one topic, or flattened across every topic."""
    with broker_call("Listing subscriptions"):
        topic_names: Iterable[str] = (
            [topic_name] if topic_name is not None else [props.name for props in admin.list_topics()]
        )
        rows: list[dict[str, Any]] = []
        for name in topic_names:
            rows.extend(_subscription_rows(admin, name))
    return rows


def create_queue(admin: Any, name: str) -> str:
    """Create a queue with default properties."""
    queue_name = require_name(name, "Queue name")
    with broker_call(f"Creating queue {queue_name}"):
        admin.create_queue(queue_name)
    _LOGGER.info("Created queue %s.", queue_name)
    return queue_name


def create_topic(admin: Any, name: str) -> str:
    """Create a topic with default properties."""
    topic_name = require_name(name, "Topic name")
    with broker_call(f"Creating topic {topic_name}"):
        admin.create_topic(topic_name)
    _LOGGER.info("Created topic %s.", topic_name)
    return topic_name


def create_subscription(admin: Any, topic_name: str, subscription_name: str) -> tuple[str, str]:
    """Create a subscription on an existing topic."""
    topic = require_name(topic_name, "Topic name")
    subscription = require_name(subscription_name, "Subscription name")
    with broker_call(f"Looking up topic {topic}"):
        admin.get_topic(topic)
    with broker_call(f"Creating subscription {topic}/{subscription}"):
        admin.create_subscription(topic, subscription)
    _LOGGER.info("Created subscription %s/%s.", topic, subscription)
    return topic, subscription


def delete_queue(admin: Any, name: str) -> str:
    """Delete a queue; a missing queue raises ``NotFoundError``."""
    queue_name = require_name(name, "Queue name")
    with broker_call(f"Deleting queue {queue_name}"):
        admin.delete_queue(queue_name)
    _LOGGER.info("Deleted queue %s.", queue_name)
    return queue_name


def delete_subscription(admin: Any, topic_name: str, subscription_name: str) -> tuple[str, str]:
    """Delete a subscription; a missing entity raises ``NotFoundError``."""
    topic = require_name(topic_name, "Topic name")
    subscription = require_name(subscription_name, "Subscription name")
    with broker_call(f"Deleting subscription {topic}/{subscription}"):
        admin.delete_subscription(topic, subscription)
    _LOGGER.info("Deleted subscription %s/%s.", topic, subscription)
    return topic, subscription


def set_queue_status(admin: Any, name: str, status: object) -> EntityStatus:
    """Set a queue's status via get, mutate, update (last write wins)."""
    new_status = parse_status(status)
    queue_name = require_name(name, "Queue name")
    with broker_call(f"Updating status of queue {queue_name}"):
        props = admin.get_queue(queue_name)
        props.status = SdkEntityStatus(new_status.value)
        admin.update_queue(props)
    _LOGGER.info("Set queue %s status to %s.", queue_name, new_status)
    return new_status


def set_subscription_status(
    admin: Any,
    topic_name: str,
    subscription_name: str,
    status: object,
) -> EntityStatus:
    """Set a subscription's status via get, mutate, update (last write wins)."""
    new_status = parse_status(status)
    topic = require_name(topic_name, "Topic name")
    subscription = require_name(subscription_name, "Subscription name")
    with broker_call(f"Updating status of subscription {topic}/{subscription}"):
        props = admin.get_subscription(topic, subscription)
        props.status = SdkEntityStatus(new_status.value)
        admin.update_subscription(topic, props)
    _LOGGER.info("Set subscription %s/%s status to %s.", topic, subscription, new_status)
    return new_status
