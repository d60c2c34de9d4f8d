# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Request schemas for the console's JSON API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _required(value: str, label: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        message = f"{label} is required."
        raise ValueError(message)
    return cleaned


class _BaseSchema(BaseModel):
    """Base schema with shared configuration."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    broker: str | None = None


class ListQuery(_BaseSchema):
    """Pagination, filter and sort parameters for entity listings."""

    skip: int = Field(default=0, ge=0)
    top: int = Field(default=25, ge=0)
    name_filter: str = Field(default="", alias="nameFilter")
    secondary_filter: str = Field(default="", alias="subscriptionNameFilter")
    order_by: str | None = Field(default=None, alias="orderBy")
    order: Literal["asc", "desc"] = "asc"

    @field_validator("order", mode="before")
    @classmethod
    def _normalize_order(cls, value: object) -> object:
        if value is None or value == "":
            return "asc"
        return value.lower() if isinstance(value, str) else value

    @field_validator("order_by", mode="before")
    @classmethod
    def _blank_order_by(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CreateEntityRequest(_BaseSchema):
    """Create a queue or a topic."""

    name: str = ""

    @field_validator("name", mode="after")
    @classmethod
    def _name_required(cls, value: str) -> str:
        return _required(value, "Name")


class QueueRequest(_BaseSchema):
    """Act on a single queue."""

    queue_name: str = Field(default="", alias="queueName")

    @field_validator("queue_name", mode="after")
    @classmethod
    def _queue_required(cls, value: str) -> str:
        return _required(value, "Queue name")


class SubscriptionRequest(_BaseSchema):
    """Act on a single topic subscription."""

    topic_name: str = Field(default="", alias="topicName")
    subscription_name: str = Field(default="", alias="subscriptionName")

    @field_validator("topic_name", mode="after")
    @classmethod
    def _topic_required(cls, value: str) -> str:
        return _required(value, "Topic name")

    @field_validator("subscription_name", mode="after")
    @classmethod
    def _subscription_required(cls, value: str) -> str:
        return _required(value, "Subscription name")


class QueueStatusRequest(QueueRequest):
    """Set a queue's status; the value itself is checked by the engine."""

    status: object = None


class SubscriptionStatusRequest(SubscriptionRequest):
    """Set a subscription's status; the value itself is checked by the engine."""

    status: object = None


__all__ = [
    "CreateEntityRequest",
    "ListQuery",
    "QueueRequest",
    "QueueStatusRequest",
    "SubscriptionRequest",
    "SubscriptionStatusRequest",
]
