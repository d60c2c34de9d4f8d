# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""Purge engine draining queues and subscriptions in bounded batches."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, assert_never

from azure.servicebus import ServiceBusReceiveMode, ServiceBusSubQueue

from servicebus_console.core.errors import broker_call

if TYPE_CHECKING:
    from collections.abc import Callable, Sized

    from servicebus_console.core.registry import ClientHandlePair

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_MAX_WAIT_SECONDS",
    "PurgeResult",
    "PurgeRun",
    "PurgeState",
    "PurgeTarget",
    "QueueTarget",
    "SubQueue",
    "SubscriptionTarget",
    "check_batch_settings",
    "drain",
    "open_receiver",
    "purge",
]

DEFAULT_BATCH_SIZE = 100
DEFAULT_MAX_WAIT_SECONDS = 2.0

_LOGGER = logging.getLogger(__name__)


class SubQueue(StrEnum):
    """Which part of an entity a purge drains."""

    NONE = "active"
    DEAD_LETTER = "deadletter"


class PurgeState(StrEnum):
    """Lifecycle of a single purge invocation."""

    IDLE = "idle"
    DRAINING = "draining"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class QueueTarget:
    """A queue, or its dead-letter sub-queue."""

    name: str
    sub_queue: SubQueue = SubQueue.NONE

    def label(self) -> str:
        """Return a display label for logs."""
        return f"queue {self.name} [{self.sub_queue}]"


@dataclass(frozen=True, slots=True)
class SubscriptionTarget:
    """A topic subscription, or its dead-letter sub-queue."""

    topic_name: str
    subscription_name: str
    sub_queue: SubQueue = SubQueue.NONE

    def label(self) -> str:
        """Return a display label for logs."""
        return f"subscription {self.topic_name}/{self.subscription_name} [{self.sub_queue}]"


type PurgeTarget = QueueTarget | SubscriptionTarget


@dataclass(frozen=True, slots=True)
class PurgeResult:
    """Number of messages removed by a purge."""

    purged_count: int

    def as_dict(self) -> dict[str, int]:
        """Return the wire representation."""
        return {"purgedCount": self.purged_count}


class _Receiver(Protocol):
    def receive_messages(
        self,
        max_message_count: int | None = None,
        max_wait_time: float | None = None,
    ) -> Sized: ...

    def close(self) -> None: ...


def _sdk_sub_queue(sub_queue: SubQueue) -> ServiceBusSubQueue | None:
    if sub_queue is SubQueue.DEAD_LETTER:
        return ServiceBusSubQueue.DEAD_LETTER
    return None


def open_receiver(data_client: object, target: PurgeTarget) -> _Receiver:
    """Open a destructive (receive-and-delete) receiver scoped to the target."""
    sub_queue = _sdk_sub_queue(target.sub_queue)
    match target:
        case QueueTarget(name=name):
            with broker_call(f"Opening receiver for {target.label()}"):
                return data_client.get_queue_receiver(  # type: ignore[attr-defined]
                    queue_name=name,
                    sub_queue=sub_queue,
                    receive_mode=ServiceBusReceiveMode.RECEIVE_AND_DELETE,
                )
        case SubscriptionTarget(topic_name=topic_name, subscription_name=subscription_name):
            with broker_call(f"Opening receiver for {target.label()}"):
                return data_client.get_subscription_receiver(  # type: ignore[attr-defined]
                    topic_name=topic_name,
                    subscription_name=subscription_name,
                    sub_queue=sub_queue,
                    receive_mode=ServiceBusReceiveMode.RECEIVE_AND_DELETE,
                )
        case _:
            assert_never(target)


def drain(receive_batch: Callable[[int, float], Sized], batch_size: int, max_wait_seconds: float) -> int:
    """Call ``receive_batch`` until it returns an empty batch and return the total received.

    An empty batch is the only termination condition; an error raised by
    ``receive_batch`` ends the loop and propagates unchanged.
    """
    total = 0
    for count in iter(lambda: len(receive_batch(batch_size, max_wait_seconds)), 0):
        total += count
    return total


def check_batch_settings(batch_size: int, max_wait_seconds: float) -> None:
    """Reject non-positive batch sizes and wait bounds."""
    if batch_size <= 0:
        message = "batch_size must be positive"
        raise ValueError(message)
    if max_wait_seconds <= 0:
        message = "max_wait_seconds must be positive"
        raise ValueError(message)


class PurgeRun:
    """Single-use drain of one receiver, closing it on every exit path."""

    def __init__(
        self,
        receiver: _Receiver,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
        label: str = "target",
    ) -> None:
        """Wrap an open receiver."""
        check_batch_settings(batch_size, max_wait_seconds)
        self._receiver = receiver
        self._batch_size = batch_size
        self._max_wait_seconds = max_wait_seconds
        self._label = label
        self.state = PurgeState.IDLE
        self.receive_calls = 0

    def _receive_batch(self, batch_size: int, max_wait_seconds: float) -> Sized:
        self.receive_calls += 1
        with broker_call(f"Receiving from {self._label}"):
            return self._receiver.receive_messages(max_message_count=batch_size, max_wait_time=max_wait_seconds)

    def run(self) -> PurgeResult:
        """Drain the receiver and return the number of messages removed."""
        if self.state is not PurgeState.IDLE:
            message = f"Purge run already {self.state}"
            raise RuntimeError(message)
        self.state = PurgeState.DRAINING
        try:
            total = drain(self._receive_batch, self._batch_size, self._max_wait_seconds)
        except BaseException:
            self._close(primary_error=True)
            raise
        self._close(primary_error=False)
        return PurgeResult(purged_count=total)

    def _close(self, *, primary_error: bool) -> None:
        self.state = PurgeState.CLOSING
        try:
            with broker_call(f"Closing receiver for {self._label}"):
                self._receiver.close()
        except Exception:
            if not primary_error:
                raise
            # The receive failure is what the caller needs to see.
            _LOGGER.warning("Closing receiver for %s failed after an aborted drain.", self._label, exc_info=True)
        finally:
            self.state = PurgeState.CLOSED


def purge(
    clients: ClientHandlePair,
    target: PurgeTarget,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
) -> PurgeResult:
    """Remove every message currently retrievable from the target.

    Messages enqueued concurrently may or may not be drained; the call returns once a
    receive comes back empty.
    """
    check_batch_settings(batch_size, max_wait_seconds)
    label = target.label()
    receiver = open_receiver(clients.data, target)
    run = PurgeRun(receiver, batch_size=batch_size, max_wait_seconds=max_wait_seconds, label=label)
    _LOGGER.info("Purging %s.", label)
    start = time.monotonic()
    try:
        result = run.run()
    except Exception:
        _LOGGER.warning(
            "Purge of %s aborted after %d receive calls.",
            label,
            run.receive_calls,
            exc_info=True,
        )
        raise
    duration_ms = (time.monotonic() - start) * 1000.0
    _LOGGER.info(
        "Purged %d messages from %s in %d receive calls duration_ms=%.1f",
        result.purged_count,
        label,
        run.receive_calls,
        duration_ms,
    )
    return result
