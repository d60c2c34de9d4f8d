# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Django URL patterns for the Service Bus console."""

from __future__ import annotations

from django.urls import path

from .views import brokers, errors, queues, subscriptions, system, topics

urlpatterns = [
    path("healthcheck", system.healthcheck, name="healthcheck"),
    path("api/brokers", brokers.broker_list, name="api-brokers"),
    path("api/entities", brokers.entities, name="api-entities"),
    path("api/queues", queues.queues, name="api-queues"),
    path("api/queues/purge-active", queues.queue_purge_active, name="api-queue-purge-active"),
    path("api/queues/purge-dlq", queues.queue_purge_dlq, name="api-queue-purge-dlq"),
    path("api/queues/status", queues.queue_status, name="api-queue-status"),
    path("api/queues/delete", queues.queue_delete, name="api-queue-delete"),
    path("api/topics", topics.topics, name="api-topics"),
    path("api/subscriptions", subscriptions.subscriptions, name="api-subscriptions"),
    path(
        "api/subscriptions/purge-active",
        subscriptions.subscription_purge_active,
        name="api-subscription-purge-active",
    ),
    path("api/subscriptions/purge-dlq", subscriptions.subscription_purge_dlq, name="api-subscription-purge-dlq"),
    path("api/subscriptions/status", subscriptions.subscription_status, name="api-subscription-status"),
    path("api/subscriptions/delete", subscriptions.subscription_delete, name="api-subscription-delete"),
]

handler404 = errors.handler404
handler500 = errors.handler500
