# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Logging setup for console processes."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from servicebus_console.config import LoggingConfigFile, ServiceBusConsoleConfig, get_settings
from servicebus_console.core.logging.utils import (
    LOG_FORMAT,
    SecretRedactingFilter,
    log_file_path,
    resolve_log_level,
)

# The AMQP transport logs every frame at INFO.
_QUIET_LOGGERS = ("azure", "uamqp", "azure.servicebus._pyamqp")
_BACKUP_COUNT = 7


def _find_handler(logger: logging.Logger, log_file: Path) -> TimedRotatingFileHandler | None:
    log_path = log_file.resolve()
    for handler in logger.handlers:
        if isinstance(handler, TimedRotatingFileHandler) and Path(handler.baseFilename).resolve() == log_path:
            return handler
    return None


def _new_handler(log_file: Path, rotation_hours: int) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(log_file, when="h", interval=rotation_hours, backupCount=_BACKUP_COUNT)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SecretRedactingFilter())
    return handler


def configure_process_logging(
    config: ServiceBusConsoleConfig | LoggingConfigFile | None = None,
    *,
    component: str | None = None,
) -> Path:
    """Attach a rotating file handler to the root logger once and return the log file path.

    Calling this again for the same file only re-applies the level.
    """
    resolved = config or get_settings()
    log_config = resolved.logging if isinstance(resolved, ServiceBusConsoleConfig) else resolved
    log_dir = Path(log_config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_file_path(log_dir, component)
    level = resolve_log_level(log_config.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    handler = _find_handler(root_logger, log_file)
    if handler is None:
        handler = _new_handler(log_file, int(log_config.log_rotation_hours))
        root_logger.addHandler(handler)
    handler.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return log_file
