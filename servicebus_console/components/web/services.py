# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Shared request helpers for the Django web app."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.conf import settings
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from servicebus_console.config import get_settings
from servicebus_console.core.errors import NotFoundError, ValidationError
from servicebus_console.core.registry import BrokerRegistry

if TYPE_CHECKING:
    from django.http import HttpRequest

    from servicebus_console.core.registry import ClientHandlePair

_LOGGER = logging.getLogger(__name__)


@dataclass
class _RegistryState:
    registry: BrokerRegistry | None = None


_STATE = _RegistryState()
_STATE_LOCK = threading.Lock()


def get_registry() -> BrokerRegistry:
    """Return the process-wide broker registry, building it from settings on first use."""
    registry = _STATE.registry
    if registry is not None:
        return registry
    with _STATE_LOCK:
        if _STATE.registry is None:
            brokers = get_settings().brokers
            _LOGGER.info("Configured brokers: %s", ", ".join(b.name for b in brokers) or "none")
            _STATE.registry = BrokerRegistry(brokers)
        return _STATE.registry


def set_registry(registry: BrokerRegistry) -> None:
    """Override the process-wide registry."""
    _STATE.registry = registry


def reset_registry() -> None:
    """Drop the process-wide registry so the next lookup rebuilds it."""
    _STATE.registry = None


def resolve_broker_name(registry: BrokerRegistry, requested: str | None) -> str:
    """Pick the broker a request targets; the name may be omitted when only one is configured."""
    if requested:
        return requested
    names = registry.names()
    if len(names) == 1:
        return names[0]
    if not names:
        message = "No Service Bus brokers are configured."
        raise NotFoundError(message)
    message = f"broker is required; configured brokers: {', '.join(names)}"
    raise ValidationError(message)


def clients_for(requested: str | None) -> ClientHandlePair:
    """Resolve the client handles for the requested broker."""
    registry = get_registry()
    return registry.resolve(resolve_broker_name(registry, requested))


def purge_batch_size() -> int:
    """Return the configured number of messages received per batch."""
    return int(getattr(settings, "SERVICEBUS_CONSOLE_PURGE_BATCH_SIZE", 100))


def purge_max_wait_seconds() -> float:
    """Return the configured wait bound for each receive call."""
    return float(getattr(settings, "SERVICEBUS_CONSOLE_PURGE_MAX_WAIT_SECONDS", 2.0))


def default_top() -> int:
    """Return the default page size for listings."""
    return int(getattr(settings, "SERVICEBUS_CONSOLE_DEFAULT_TOP", 25))


def json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a JSON object request body."""
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        message = f"Request body is not valid JSON: {exc}"
        raise ValidationError(message) from exc
    if not isinstance(payload, dict):
        message = "Request body must be a JSON object."
        raise ValidationError(message)
    return payload


def validate_payload[SchemaT: BaseModel](schema: type[SchemaT], data: dict[str, Any]) -> SchemaT:
    """Validate request data against a schema, raising the console's ValidationError."""
    try:
        return schema.model_validate(data)
    except SchemaValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        first = errors[0] if errors else None
        message = str(first["msg"]).removeprefix("Value error, ") if first else "Invalid request."
        raise ValidationError(message, details={"errors": errors}) from exc
