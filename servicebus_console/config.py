# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Configuration settings for the Service Bus console."""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from shutil import rmtree
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

if TYPE_CHECKING:
    from collections.abc import Mapping

MAX_PORT = 65_535
DEFAULT_BROKER_NAME = "default"
LEGACY_CONNECTION_ENV = "SERVICEBUS_CONNECTION_STRING_MANAGE"
BROKER_ENV_PREFIX = "SERVICEBUS_"
SETTINGS_ENV_PREFIX = "SERVICEBUS_CONSOLE_"


class LoggingConfigFile(BaseModel):
    """File-based logging configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    log_dir: Path = Path("./logs")
    log_rotation_hours: int = Field(default=24, gt=0)
    log_level: str = "INFO"
    delete_on_boot: bool = False

    @field_validator("log_dir", mode="after")
    @classmethod
    def _expand_log_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @model_validator(mode="after")
    def _ensure_log_dir(self) -> LoggingConfigFile:
        if self.delete_on_boot and self.log_dir.exists():
            for entry in self.log_dir.iterdir():
                if entry.is_dir():
                    rmtree(entry)
                else:
                    entry.unlink(missing_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        return self


class BrokerConfig(BaseModel):
    """A named Service Bus namespace and the credential used to reach it."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    connection_string: str | None = None
    fully_qualified_namespace: str | None = None

    @field_validator("name", mode="after")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            message = "Broker name must not be blank"
            raise ValueError(message)
        return cleaned

    @field_validator("fully_qualified_namespace", mode="after")
    @classmethod
    def _normalize_namespace(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip().removeprefix("sb://").rstrip("/")
        if not cleaned:
            return None
        return cleaned if "." in cleaned else f"{cleaned}.servicebus.windows.net"

    @model_validator(mode="after")
    def _require_credential(self) -> BrokerConfig:
        if bool(self.connection_string) == bool(self.fully_qualified_namespace):
            message = f"Broker {self.name!r} needs exactly one of connection_string or fully_qualified_namespace"
            raise ValueError(message)
        return self

    @property
    def auth_mode(self) -> str:
        """Return how the broker authenticates."""
        return "connection_string" if self.connection_string else "azure_identity"

    @property
    def host(self) -> str:
        """Return the namespace host name, taken from the endpoint when a connection string is used."""
        if self.fully_qualified_namespace:
            return self.fully_qualified_namespace
        for part in (self.connection_string or "").split(";"):
            key, _, value = part.partition("=")
            if key.strip().lower() == "endpoint":
                return value.strip().removeprefix("sb://").rstrip("/")
        return ""


class FrontendConfig(BaseModel):
    """Web frontend configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=MAX_PORT)
    debug: bool = False
    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(32))


class PurgeConfig(BaseModel):
    """Tuning for the drain loop used by purge operations."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    batch_size: int = Field(default=100, gt=0)
    max_wait_seconds: float = Field(default=2.0, gt=0)


class ListingConfig(BaseModel):
    """Defaults for paginated entity listings."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    default_top: int = Field(default=25, ge=0)


class ServiceBusConsoleConfig(BaseModel):
    """Central configuration for the Service Bus console."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    logging: LoggingConfigFile = Field(default_factory=LoggingConfigFile)
    frontend: FrontendConfig = Field(default_factory=FrontendConfig)
    purge: PurgeConfig = Field(default_factory=PurgeConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)
    brokers: list[BrokerConfig] = Field(default_factory=list)

    @field_validator("brokers", mode="after")
    @classmethod
    def _unique_broker_names(cls, value: list[BrokerConfig]) -> list[BrokerConfig]:
        seen: set[str] = set()
        for broker in value:
            if broker.name in seen:
                message = f"Duplicate broker name configured: {broker.name}"
                raise ValueError(message)
            seen.add(broker.name)
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServiceBusConsoleConfig:
        """Build a configuration from environment variables."""
        env = os.environ if environ is None else environ
        logging_updates: dict[str, object] = {}
        if log_dir := env.get(f"{SETTINGS_ENV_PREFIX}LOG_DIR"):
            logging_updates["log_dir"] = Path(log_dir)
        if log_level := env.get(f"{SETTINGS_ENV_PREFIX}LOG_LEVEL"):
            logging_updates["log_level"] = log_level
        frontend_updates: dict[str, object] = {}
        if host := env.get(f"{SETTINGS_ENV_PREFIX}HOST"):
            frontend_updates["host"] = host
        if port := env.get(f"{SETTINGS_ENV_PREFIX}PORT"):
            frontend_updates["port"] = port
        return cls(
            logging=LoggingConfigFile(**logging_updates),
            frontend=FrontendConfig(**frontend_updates),
            brokers=brokers_from_env(env),
        )


def _enumerated_brokers(env: Mapping[str, str]) -> list[BrokerConfig]:
    brokers: list[BrokerConfig] = []
    index = 1
    while True:
        prefix = f"{BROKER_ENV_PREFIX}{index}_"
        name = env.get(f"{prefix}NAME", "").strip()
        if not name:
            break
        brokers.append(
            BrokerConfig(
                name=name,
                connection_string=env.get(f"{prefix}CONNECTION_STRING") or None,
                fully_qualified_namespace=env.get(f"{prefix}NAMESPACE") or None,
            ),
        )
        index += 1
    return brokers


def brokers_from_env(environ: Mapping[str, str] | None = None) -> list[BrokerConfig]:
    """Return brokers declared in the environment.

    Enumerated brokers (``SERVICEBUS_1_NAME``, ``SERVICEBUS_1_CONNECTION_STRING``, ...)
    are scanned from index 1 until the first missing name. When none are declared the
    single legacy ``SERVICEBUS_CONNECTION_STRING_MANAGE`` broker is used under the
    implicit name ``default``.
    """
    env = os.environ if environ is None else environ
    brokers = _enumerated_brokers(env)
    if brokers:
        return brokers
    legacy = env.get(LEGACY_CONNECTION_ENV, "").strip()
    if legacy:
        return [BrokerConfig(name=DEFAULT_BROKER_NAME, connection_string=legacy)]
    return []


@dataclass
class _SettingsState:
    cache: ServiceBusConsoleConfig | None = None
    runtime: ServiceBusConsoleConfig | None = None


_STATE = _SettingsState()


def get_settings() -> ServiceBusConsoleConfig:
    """Return the active configuration, reading the environment if needed."""
    if _STATE.runtime is not None:
        return _STATE.runtime
    if _STATE.cache is None:
        _STATE.cache = ServiceBusConsoleConfig.from_env()
    return _STATE.cache


def set_settings(config: ServiceBusConsoleConfig) -> None:
    """Override the global settings for the current process."""
    _STATE.runtime = config


def reset_settings() -> None:
    """Clear cached settings."""
    _STATE.cache = None
    _STATE.runtime = None


__all__ = [
    "DEFAULT_BROKER_NAME",
    "LEGACY_CONNECTION_ENV",
    "MAX_PORT",
    "BrokerConfig",
    "FrontendConfig",
    "ListingConfig",
    "LoggingConfigFile",
    "PurgeConfig",
    "ServiceBusConsoleConfig",
    "brokers_from_env",
    "get_settings",
    "reset_settings",
    "set_settings",
]
