# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Django settings for the Service Bus console web app."""

from __future__ import annotations

from servicebus_console.config import get_settings

CONFIG = get_settings()
FRONTEND = CONFIG.frontend

SECRET_KEY = FRONTEND.secret_key
DEBUG = FRONTEND.debug
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS: list[str] = []

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "servicebus_console.components.web.urls"

TEMPLATES: list[dict[str, object]] = []

WSGI_APPLICATION = "servicebus_console.components.web.wsgi.application"

DATABASES: dict[str, dict[str, object]] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

APPEND_SLASH = False

LOGGING_CONFIG = None

SERVICEBUS_CONSOLE_PURGE_BATCH_SIZE = CONFIG.purge.batch_size
SERVICEBUS_CONSOLE_PURGE_MAX_WAIT_SECONDS = CONFIG.purge.max_wait_seconds
SERVICEBUS_CONSOLE_DEFAULT_TOP = CONFIG.listing.default_top
