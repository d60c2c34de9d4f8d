# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Custom error handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.http import JsonResponse

if TYPE_CHECKING:
    from django.http import HttpRequest


def handler404(request: HttpRequest, exception: Exception) -> JsonResponse:  # noqa: ARG001
    """Return a JSON 404 for unknown paths."""
    return JsonResponse({"error": "NOT_FOUND", "message": f"No route for {request.path}"}, status=404)


def handler500(request: HttpRequest) -> JsonResponse:  # noqa: ARG001
    """Return a JSON 500 for unhandled errors."""
    return JsonResponse({"error": "SERVER_ERROR", "message": "Internal server error."}, status=500)
