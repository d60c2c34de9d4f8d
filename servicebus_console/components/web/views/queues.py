# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Queue listing and administration views."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.http import JsonResponse

from servicebus_console.components.web.services import (
    clients_for,
    default_top,
    json_body,
    purge_batch_size,
    purge_max_wait_seconds,
    validate_payload,
)
from servicebus_console.core.engine import (
    QueueTarget,
    SubQueue,
    apply_query,
    create_queue,
    delete_queue,
    list_queues,
    parse_status,
    purge,
    set_queue_status,
)
from servicebus_console.shared.schemas.requests import (
    CreateEntityRequest,
    ListQuery,
    QueueRequest,
    QueueStatusRequest,
)

from .decorators import json_errors, require_methods

if TYPE_CHECKING:
    from django.http import HttpRequest


@require_methods("GET", "POST")
@json_errors
def queues(request: HttpRequest) -> JsonResponse:
    """List queues (GET) or create one (POST)."""
    if request.method == "POST":
        payload = validate_payload(CreateEntityRequest, json_body(request))
        name = create_queue(clients_for(payload.broker).admin, payload.name)
        return JsonResponse({"name": name, "created": True}, status=201)
    query = validate_payload(ListQuery, {"top": default_top(), **request.GET.dict()})
    rows = list_queues(clients_for(query.broker).admin)
    return JsonResponse(apply_query(rows, query).as_dict())


def _purge_queue(request: HttpRequest, sub_queue: SubQueue) -> JsonResponse:
    payload = validate_payload(QueueRequest, json_body(request))
    result = purge(
        clients_for(payload.broker),
        QueueTarget(payload.queue_name, sub_queue),
        batch_size=purge_batch_size(),
        max_wait_seconds=purge_max_wait_seconds(),
    )
    return JsonResponse(result.as_dict())


@require_methods("POST")
@json_errors
def queue_purge_active(request: HttpRequest) -> JsonResponse:
    """Drain active messages from a queue."""
    return _purge_queue(request, SubQueue.NONE)


@require_methods("POST")
@json_errors
def queue_purge_dlq(request: HttpRequest) -> JsonResponse:
    """Drain the dead-letter sub-queue of a queue."""
    return _purge_queue(request, SubQueue.DEAD_LETTER)


@require_methods("POST")
@json_errors
def queue_status(request: HttpRequest) -> JsonResponse:
    """Set a queue to Active or Disabled."""
    payload = validate_payload(QueueStatusRequest, json_body(request))
    requested = parse_status(payload.status)
    status = set_queue_status(clients_for(payload.broker).admin, payload.queue_name, requested)
    return JsonResponse({"name": payload.queue_name, "status": status.value})


@require_methods("DELETE")
@json_errors
def queue_delete(request: HttpRequest) -> JsonResponse:
    """Delete a queue."""
    payload = validate_payload(QueueRequest, json_body(request))
    name = delete_queue(clients_for(payload.broker).admin, payload.queue_name)
    return JsonResponse({"name": name, "deleted": True})
