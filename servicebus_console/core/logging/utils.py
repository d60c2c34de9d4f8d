# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Log file naming, level parsing and secret scrubbing."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from servicebus_console.shared.redaction import redact_connection_string

if TYPE_CHECKING:
    from pathlib import Path

LOG_FILE_PREFIX = "servicebus_console"
LOG_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"

_COMPONENT_RE = re.compile(r"[^a-zA-Z0-9._-]+")


def sanitize_component(component: str) -> str:
    """Return a filesystem-safe component identifier."""
    return _COMPONENT_RE.sub("_", component).strip("._-") or "app"


def log_file_name(component: str | None) -> str:
    """Return ``servicebus_console.log`` or ``servicebus_console-<component>.log``."""
    suffix = f"-{sanitize_component(component)}" if component else ""
    return f"{LOG_FILE_PREFIX}{suffix}.log"


def log_file_path(log_dir: Path, component: str | None) -> Path:
    """Return the full log path for a component."""
    return log_dir / log_file_name(component)


def resolve_log_level(value: str | int | None) -> int:
    """Map a level name, a numeric string or an int to a logging level; unknown values mean INFO."""
    if isinstance(value, int):
        return value
    normalized = (value or "").strip().upper()
    if normalized.isdigit():
        return int(normalized)
    return logging.getLevelNamesMapping().get(normalized, logging.INFO)


class SecretRedactingFilter(logging.Filter):
    """Scrub access keys and signatures from formatted log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_connection_string(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
