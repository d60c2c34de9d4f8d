# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""System endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.http import JsonResponse

from servicebus_console import __version__
from servicebus_console.components.web.services import get_registry

if TYPE_CHECKING:
    from django.http import HttpRequest


def healthcheck(_request: HttpRequest) -> JsonResponse:
    """Report liveness and the number of configured brokers."""
    return JsonResponse({"status": "ok", "version": __version__, "brokers": len(get_registry().names())})
