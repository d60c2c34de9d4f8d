# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Broker discovery views."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.http import JsonResponse

from servicebus_console.components.web.services import clients_for, get_registry
from servicebus_console.core.engine import list_queues, list_topics

from .decorators import json_errors, require_methods

if TYPE_CHECKING:
    from django.http import HttpRequest

_LOGGER = logging.getLogger(__name__)


@require_methods("GET")
@json_errors
def broker_list(_request: HttpRequest) -> JsonResponse:
    """Return the configured brokers with credentials redacted."""
    return JsonResponse({"brokers": get_registry().describe()})


@require_methods("GET")
@json_errors
def entities(request: HttpRequest) -> JsonResponse:
    """Return every queue and every topic, with subscriptions nested under topics."""
    admin = clients_for(request.GET.get("broker")).admin
    queues = list_queues(admin)
    topics = list_topics(admin, include_subscriptions=True)
    _LOGGER.info("Found %d queues and %d topics.", len(queues), len(topics))
    return JsonResponse({"queues": queues, "topics": topics})
