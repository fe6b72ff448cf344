import queue
import threading

import pytest

from blockconfirm.blocklistener import buffer_channel
from blockconfirm.chaintypes import BlockHashEvent


class _Consumer:
    def __init__(self, maxsize):
        self.q = queue.Queue(maxsize=maxsize)

    def new_block_hashes(self):
        return self.q


@pytest.mark.timeout(30)
def test_block_listener_does_not_block():
    consumer = _Consumer(1)
    cancelled = threading.Event()
    buffered = buffer_channel(consumer, cancelled)

    for _ in range(100):
        assert buffered.put(BlockHashEvent())

    # The one that was stuck in the pipe
    bhe = consumer.q.get(timeout=5)
    assert bhe.gap_potential is False

    # The unblocking one, with a gap marked
    bhe = consumer.q.get(timeout=5)
    assert bhe.gap_potential is True

    # Block it again
    for _ in range(100):
        assert buffered.put(BlockHashEvent())

    # And check we can exit while blocked
    cancelled.set()
    assert buffered.wait(5)


@pytest.mark.timeout(10)
def test_exit_on_cancel():
    consumer = _Consumer(0)
    cancelled = threading.Event()
    cancelled.set()
    buffered = buffer_channel(consumer, cancelled)
    assert buffered.wait(5)


@pytest.mark.timeout(10)
def test_put_after_exit_is_refused():
    cancelled = threading.Event()
    cancelled.set()
    buffered = buffer_channel(_Consumer(1), cancelled)
    assert buffered.wait(5)
    assert buffered.put(BlockHashEvent(block_hashes=["0xaa"])) is False


@pytest.mark.timeout(10)
def test_no_target_discards_events():
    cancelled = threading.Event()
    buffered = buffer_channel(None, cancelled)
    assert buffered.put(BlockHashEvent(block_hashes=["0xaa"])) is True
    cancelled.set()
    assert buffered.wait(5)


@pytest.mark.timeout(10)
def test_events_delivered_in_order_when_not_blocked():
    consumer = _Consumer(0)
    cancelled = threading.Event()
    buffered = buffer_channel(consumer, cancelled)
    events = [BlockHashEvent(block_hashes=[f"0x{i:02x}"]) for i in range(5)]
    for event in events:
        assert buffered.put(event)
    received = [consumer.q.get(timeout=5) for _ in events]
    assert received == events
    assert all(not e.gap_potential for e in received)
    cancelled.set()
    assert buffered.wait(5)


@pytest.mark.timeout(10)
def test_blocked_copy_leaves_original_untouched():
    consumer = _Consumer(1)
    cancelled = threading.Event()
    buffered = buffer_channel(consumer, cancelled)

    first = BlockHashEvent(block_hashes=["0x01"])
    second = BlockHashEvent(block_hashes=["0x02"])
    third = BlockHashEvent(block_hashes=["0x03"])
    for event in (first, second, third):
        assert buffered.put(event)

    assert consumer.q.get(timeout=5) is first
    delivered = consumer.q.get(timeout=5)
    assert delivered is not second
    assert delivered.block_hashes == ["0x02"]
    assert delivered.gap_potential is True
    assert second.gap_potential is False

    cancelled.set()
    assert buffered.wait(5)