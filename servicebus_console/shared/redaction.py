# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Helpers for redacting Service Bus credentials."""

from __future__ import annotations

import re
from collections.abc import Mapping

REDACTED_VALUE = "***"

_SECRET_KEYS = ("sharedaccesskey", "sharedaccesssignature", "password", "connection_string")
_SAS_SEGMENT_RE = re.compile(r"(?i)(SharedAccessSignature)=([^;]+)")
_SECRET_SEGMENT_RE = re.compile(r"(?i)(SharedAccessKey|password|passwd|pwd)=([^;&\s]+)")
_URL_CREDENTIAL_RE = re.compile(r"(?i)([a-z][a-z0-9+.-]*://)([^\s/@:]*):([^\s/@]*)@")


def redact_connection_string(value: str | None) -> str | None:
    """Mask access keys, signatures and URL passwords in a connection string."""
    if value is None:
        return None
    text = str(value)
    if not text:
        return text
    text = _URL_CREDENTIAL_RE.sub(lambda match: f"{match.group(1)}{match.group(2)}:{REDACTED_VALUE}@", text)
    text = _SAS_SEGMENT_RE.sub(lambda match: f"{match.group(1)}={REDACTED_VALUE}", text)
    return _SECRET_SEGMENT_RE.sub(lambda match: f"{match.group(1)}={REDACTED_VALUE}", text)


def redact_access_data(value: object) -> object:
    """Recursively redact secret fields and connection strings."""
    result: object = value
    if isinstance(value, str):
        result = redact_connection_string(value)
    elif isinstance(value, Mapping):
        result = {
            key: REDACTED_VALUE if isinstance(key, str) and _is_secret_key(key) and item else redact_access_data(item)
            for key, item in value.items()
        }
    elif isinstance(value, list | tuple):
        result = [redact_access_data(item) for item in value]
    return result


def _is_secret_key(key: str) -> bool:
    normalized = key.strip().lower().replace("-", "_")
    return any(normalized.endswith(suffix) for suffix in _SECRET_KEYS)
