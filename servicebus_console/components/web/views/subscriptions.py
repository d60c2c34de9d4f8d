# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Subscription listing and administration views."""

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
    SubQueue,
    SubscriptionTarget,
    apply_query,
    create_subscription,
    delete_subscription,
    list_subscriptions,
    parse_status,
    purge,
    set_subscription_status,
)
from servicebus_console.shared.schemas.requests import (
    ListQuery,
    SubscriptionRequest,
    SubscriptionStatusRequest,
)

from .decorators import json_errors, require_methods

if TYPE_CHECKING:
    from django.http import HttpRequest


@require_methods("GET", "POST")
@json_errors
def subscriptions(request: HttpRequest) -> JsonResponse:
    """List subscriptions across topics (GET) or create one (POST).

    The listing's nameFilter matches the topic name and subscriptionNameFilter
    matches the subscription name.
    """
    if request.method == "POST":
        payload = validate_payload(SubscriptionRequest, json_body(request))
        topic, subscription = create_subscription(
            clients_for(payload.broker).admin,
            payload.topic_name,
            payload.subscription_name,
        )
        return JsonResponse({"topicName": topic, "subscriptionName": subscription, "created": True}, status=201)
    query = validate_payload(ListQuery, {"top": default_top(), **request.GET.dict()})
    rows = list_subscriptions(clients_for(query.broker).admin)
    page = apply_query(rows, query, name_field="topicName", secondary_field="subscriptionName")
    return JsonResponse(page.as_dict())


def _purge_subscription(request: HttpRequest, sub_queue: SubQueue) -> JsonResponse:
    payload = validate_payload(SubscriptionRequest, json_body(request))
    result = purge(
        clients_for(payload.broker),
        SubscriptionTarget(payload.topic_name, payload.subscription_name, sub_queue),
        batch_size=purge_batch_size(),
        max_wait_seconds=purge_max_wait_seconds(),
    )
    return JsonResponse(result.as_dict())


@require_methods("POST")
@json_errors
def subscription_purge_active(request: HttpRequest) -> JsonResponse:
    """Drain active messages from a subscription."""
    return _purge_subscription(request, SubQueue.NONE)


@require_methods("POST")
@json_errors
def subscription_purge_dlq(request: HttpRequest) -> JsonResponse:
    """Drain the dead-letter sub-queue of a subscription."""
    return _purge_subscription(request, SubQueue.DEAD_LETTER)


@require_methods("POST")
@json_errors
def subscription_status(request: HttpRequest) -> JsonResponse:
    """Set a subscription to Active or Disabled."""
    payload = validate_payload(SubscriptionStatusRequest, json_body(request))
    requested = parse_status(payload.status)
    status = set_subscription_status(
        clients_for(payload.broker).admin,
        payload.topic_name,
        payload.subscription_name,
        requested,
    )
    return JsonResponse(
        {"topicName": payload.topic_name, "subscriptionName": payload.subscription_name, "status": status.value},
    )


@require_methods("DELETE")
@json_errors
def subscription_delete(request: HttpRequest) -> JsonResponse:
    """Delete a subscription."""
    payload = validate_payload(SubscriptionRequest, json_body(request))
    topic, subscription = delete_subscription(
        clients_for(payload.broker).admin,
        payload.topic_name,
        payload.subscription_name,
    )
    return JsonResponse({"topicName": topic, "subscriptionName": subscription, "deleted": True})
