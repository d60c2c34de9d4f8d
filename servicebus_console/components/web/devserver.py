# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Threaded WSGI server for the Service Bus console."""

from __future__ import annotations

import logging
import os
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from django.core.wsgi import get_wsgi_application

_LOGGER = logging.getLogger(__name__)


class _ThreadedWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _QuietRequestHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        _LOGGER.info("%s - %s", self.address_string(), format % args)


def frontend_url(host: str, port: int) -> str:
    """Return a browsable URL for the bound address."""
    display_host = host
    if host in {"0.0.0.0", "::"}:  # noqa: S104
        display_host = "127.0.0.1"
    if ":" in display_host and not display_host.startswith("["):
        display_host = f"[{display_host}]"
    return f"http://{display_host}:{port}/"


def serve(host: str, port: int) -> None:
    """Serve the Django WSGI app until interrupted; each request runs on its own thread."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "servicebus_console.components.web.settings")
    httpd = make_server(
        host,
        port,
        get_wsgi_application(),
        server_class=_ThreadedWSGIServer,
        handler_class=_QuietRequestHandler,
    )
    _LOGGER.info("Backend server listening on %s", frontend_url(host, port))
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        _LOGGER.info("Server interrupted; shutting down.")
    finally:
        httpd.server_close()
