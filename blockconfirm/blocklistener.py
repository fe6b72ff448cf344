"""Decouples block hash delivery from consumers that may stop draining."""

from __future__ import annotations

import dataclasses
import logging
import queue
import threading
from typing import Protocol

from blockconfirm.chaintypes import BlockHashEvent

log = logging.getLogger(__name__)

_POLL_INTERVAL = 0.01


class BlockHashConsumer(Protocol):
    """Anything that accepts new block hash events on a queue."""

    def new_block_hashes(self) -> queue.Queue:
        """Return the queue new block hash events are delivered to."""
        ...


class BlockBuffer:
    """Always accepts block events, even when the downstream consumer is blocked.

    While the consumer's queue is full the most recent undelivered event is held,
    and any further events are discarded with the held event marked as having a
    potential gap. This keeps one blocked consumer from holding up the producer
    without storing an unbounded backlog.
    """

    def __init__(self, target: BlockHashConsumer | None, cancelled: threading.Event) -> None:
        self._target = target
        self._cancelled = cancelled
        self._inbox: queue.Queue = queue.Queue()
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._run, name="block-listener", daemon=True)
        self._thread.start()

    def put(self, event: BlockHashEvent) -> bool:
        """Hand an event to the listener, waiting until it has been taken.

        Returns False if the listener has exited and the event was not taken.
        """
        if self._done.is_set():
            return False
        taken = threading.Event()
        self._inbox.put((event, taken))
        while not taken.wait(_POLL_INTERVAL):
            if self._done.is_set():
                return taken.is_set()
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the listener to exit; True if it has."""
        return self._done.wait(timeout)

    def _receive(self) -> tuple[BlockHashEvent, threading.Event] | None:
        try:
            return self._inbox.get(timeout=_POLL_INTERVAL)
        except queue.Empty:
            return None

    def _run(self) -> None:
        blocked: BlockHashEvent | None = None
        try:
            while not self._cancelled.is_set():
                if blocked is not None:
                    try:
                        self._target.new_block_hashes().put_nowait(blocked)
                    except queue.Full:
                        pass
                    else:
                        log.info("Event stream block-listener unblocked")
                        blocked = None
                        continue
                    received = self._receive()
                    if received is None:
                        continue
                    event, taken = received
                    blocked.gap_potential = True
                    taken.set()
                    log.debug("Blocked event stream missed new block event: %s", event.block_hashes)
                    continue

                received = self._receive()
                if received is None:
                    continue
                event, taken = received
                try:
                    log.debug("Received block event: %s", event.block_hashes)
                    if self._target is not None:
                        try:
                            self._target.new_block_hashes().put_nowait(event)
                        except queue.Full:
                            log.info("Event stream block-listener became blocked")
                            # A private copy, so marking a gap does not affect other streams
                            blocked = dataclasses.replace(
                                event, block_hashes=list(event.block_hashes)
                            )
                finally:
                    taken.set()
            log.debug(
                "Block listener exiting%s", " (previously blocked)" if blocked is not None else ""
            )
        finally:
            self._done.set()


def buffer_channel(target: BlockHashConsumer | None, cancelled: threading.Event) -> BlockBuffer:
    """Start a listener that forwards block events to ``target`` until ``cancelled`` is set."""
    return BlockBuffer(target, cancelled)