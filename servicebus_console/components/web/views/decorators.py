# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Typed wrappers for Django view decorators."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_http_methods

from servicebus_console.core.errors import BrokerOperationError, ConsoleError
from servicebus_console.shared.redaction import redact_access_data

_LOGGER = logging.getLogger(__name__)


def require_methods[ViewFuncT: Callable[..., HttpResponse]](*methods: str) -> Callable[[ViewFuncT], ViewFuncT]:
    """Typed alias for Django's require_http_methods decorator."""
    return require_http_methods(list(methods))


def json_errors[ViewFuncT: Callable[..., HttpResponse]](view_func: ViewFuncT) -> ViewFuncT:
    """Render console errors as structured JSON responses."""

    @functools.wraps(view_func)
    def _wrapped(request: HttpRequest, *args: object, **kwargs: object) -> HttpResponse:
        try:
            return view_func(request, *args, **kwargs)
        except ConsoleError as exc:
            level = logging.WARNING if isinstance(exc, BrokerOperationError) else logging.INFO
            _LOGGER.log(level, "%s %s -> %s: %s", request.method, request.path, exc.code, exc.message)
            return JsonResponse(redact_access_data(exc.as_dict()), status=exc.status)

    return _wrapped  # type: ignore[return-value]
