# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI entrypoints for the Service Bus console."""

from __future__ import annotations

import click
from dotenv import load_dotenv

from servicebus_console.components.web.devserver import serve as serve_http
from servicebus_console.config import MAX_PORT, ServiceBusConsoleConfig, get_settings, set_settings
from servicebus_console.core.engine.purge import QueueTarget, SubQueue, SubscriptionTarget, purge
from servicebus_console.core.errors import ConsoleError, ValidationError
from servicebus_console.core.logging.setup import configure_process_logging
from servicebus_console.core.registry import BrokerRegistry


def _apply_frontend_overrides(
    config: ServiceBusConsoleConfig,
    host: str | None,
    port: int | None,
    *,
    debug: bool | None,
) -> ServiceBusConsoleConfig:
    if host is None and port is None and debug is None:
        return config
    updates: dict[str, object] = {}
    if host is not None:
        updates["host"] = host
    if port is not None:
        updates["port"] = port
    if debug is not None:
        updates["debug"] = debug
    frontend = config.frontend.model_copy(update=updates)
    return config.model_copy(update={"frontend": frontend})


def _resolve_broker(registry: BrokerRegistry, broker: str | None) -> str:
    if broker:
        return broker
    names = registry.names()
    if len(names) != 1:
        message = "Pass --broker; configured brokers: " + (", ".join(names) or "none")
        raise click.UsageError(message)
    return names[0]


def _build_target(
    queue: str | None,
    topic: str | None,
    subscription: str | None,
    *,
    dead_letter: bool,
) -> QueueTarget | SubscriptionTarget:
    sub_queue = SubQueue.DEAD_LETTER if dead_letter else SubQueue.NONE
    if queue and not (topic or subscription):
        return QueueTarget(queue, sub_queue)
    if topic and subscription and not queue:
        return SubscriptionTarget(topic, subscription, sub_queue)
    message = "Pass either --queue, or both --topic and --subscription."
    raise click.UsageError(message)


@click.group(help="Manage Azure Service Bus queues, topics and subscriptions.")
def main() -> None:
    """Load ``.env`` before any settings are read."""
    load_dotenv()


@main.command(help="Run the console's JSON API server.")
@click.option("--host", default=None, help="Bind the server to this host.")
@click.option(
    "--port",
    default=None,
    type=click.IntRange(1, MAX_PORT),
    help="Bind the server to this port.",
)
@click.option(
    "--debug/--no-debug",
    default=None,
    help="Enable or disable Django debug mode.",
)
def serve(host: str | None, port: int | None, *, debug: bool | None) -> None:
    """Start the web server."""
    config = _apply_frontend_overrides(get_settings(), host, port, debug=debug)
    set_settings(config)
    log_file = configure_process_logging(config, component="web")
    if not config.brokers:
        click.echo("Warning: no Service Bus brokers configured.", err=True)
    click.echo(f"Logging to {log_file}")
    serve_http(config.frontend.host, config.frontend.port)


@main.command(name="brokers", help="List configured brokers.")
def brokers() -> None:
    """Print configured broker names and hosts."""
    registry = BrokerRegistry(get_settings().brokers)
    for entry in registry.describe():
        click.echo(f"{entry['name']}\t{entry['host']}\t{entry['authMode']}")


@main.command(name="purge", help="Remove every message from a queue or subscription.")
@click.option("--broker", default=None, help="Broker name (optional when only one is configured).")
@click.option("--queue", default=None, help="Queue to purge.")
@click.option("--topic", default=None, help="Topic of the subscription to purge.")
@click.option("--subscription", default=None, help="Subscription to purge.")
@click.option("--dead-letter", is_flag=True, default=False, help="Purge the dead-letter sub-queue instead.")
def purge_command(
    broker: str | None,
    queue: str | None,
    topic: str | None,
    subscription: str | None,
    *,
    dead_letter: bool,
) -> None:
    """Drain a target once and print the number of messages removed."""
    config = get_settings()
    configure_process_logging(config, component="cli")
    target = _build_target(queue, topic, subscription, dead_letter=dead_letter)
    registry = BrokerRegistry(config.brokers)
    try:
        clients = registry.resolve(_resolve_broker(registry, broker))
        result = purge(
            clients,
            target,
            batch_size=config.purge.batch_size,
            max_wait_seconds=config.purge.max_wait_seconds,
        )
    except ValidationError as exc:
        raise click.UsageError(exc.message) from exc
    except ConsoleError as exc:
        raise click.ClickException(f"{exc.code}: {exc.message}") from exc
    finally:
        registry.close()
    click.echo(f"Purged {result.purged_count} messages from {target.label()}.")
