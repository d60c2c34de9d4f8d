# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Topic listing and creation views."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.http import JsonResponse

from servicebus_console.components.web.services import clients_for, default_top, json_body, validate_payload
from servicebus_console.core.engine import apply_query, create_topic, list_topics
from servicebus_console.shared.schemas.requests import CreateEntityRequest, ListQuery

from .decorators import json_errors, require_methods

if TYPE_CHECKING:
    from django.http import HttpRequest


@require_methods("GET", "POST")
@json_errors
def topics(request: HttpRequest) -> JsonResponse:
    """List topics (GET) or create one (POST)."""
    if request.method == "POST":
        payload = validate_payload(CreateEntityRequest, json_body(request))
        name = create_topic(clients_for(payload.broker).admin, payload.name)
        return JsonResponse({"name": name, "created": True}, status=201)
    query = validate_payload(ListQuery, {"top": default_top(), **request.GET.dict()})
    rows = list_topics(clients_for(query.broker).admin)
    return JsonResponse(apply_query(rows, query).as_dict())
