# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Error taxonomy shared by the engine, the CLI and the web layer."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ClassVar

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.servicebus.exceptions import MessagingEntityNotFoundError

from servicebus_console.shared.redaction import redact_connection_string

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    "BrokerOperationError",
    "ConsoleError",
    "NotFoundError",
    "ValidationError",
    "broker_call",
]


class ConsoleError(Exception):
    """Base error carrying a machine-readable code and a human-readable message."""

    code: ClassVar[str] = "SERVER_ERROR"
    status: ClassVar[int] = 500

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def as_dict(self) -> dict[str, Any]:
        """Return the structured error payload."""
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(ConsoleError):
    """Malformed or missing input, rejected before any broker call."""

    code = "VALIDATION_ERROR"
    status = 400


class NotFoundError(ConsoleError):
    """Unknown broker name or a broker-side missing entity."""

    code = "NOT_FOUND"
    status = 404


class BrokerOperationError(ConsoleError):
    """Failure surfaced by the administrative or data-plane client."""

    code = "BROKER_ERROR"
    status = 502


def _sdk_message(exc: AzureError) -> str:
    return str(redact_connection_string(str(getattr(exc, "message", None) or exc)))


@contextmanager
def broker_call(action: str) -> Iterator[None]:
    """Translate Service Bus SDK failures into console errors.

    Nothing is retried; the SDK message is kept for diagnostics.
    """
    try:
        yield
    except (ResourceNotFoundError, MessagingEntityNotFoundError) as exc:
        message = f"{action}: {_sdk_message(exc)}"
        raise NotFoundError(message) from exc
    except ResourceExistsError as exc:
        message = f"{action}: {_sdk_message(exc)}"
        raise ValidationError(message) from exc
    except AzureError as exc:
        message = f"{action} failed: {_sdk_message(exc)}"
        raise BrokerOperationError(message) from exc
