"""Tests for the mutual-exclusion wrapper around a queue backend."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from event_proxy.services.capability import Enqueue, EnqueueError
from event_proxy.services.memory_queue import MemoryQueue
from event_proxy.services.shared_queue import QueueLockError, SharedQueue


class OverlapDetector:
    """Backend that records whether two calls were ever inside perform at once."""

    def __init__(self):
        self.inside = 0
        self.max_inside = 0
        self.count = 0
        self._guard = threading.Lock()

    def perform(self, op):
        with self._guard:
            self.inside += 1
            self.max_inside = max(self.max_inside, self.inside)
        time.sleep(0.002)
        with self._guard:
            self.inside -= 1
            self.count += 1


class BlockingQueue:
    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()

    def perform(self, op):
        self.entered.set()
        self.release.wait(5)


def test_delegates_and_returns_result():
    q = MemoryQueue()
    assert SharedQueue(q).perform(Enqueue({"a": 1})) is None
    assert len(q.messages) == 1


def test_calls_never_overlap():
    backend = OverlapDetector()
    shared = SharedQueue(backend)
    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(lambda i: shared.perform(Enqueue(i)), range(64)))
    assert backend.count == 64
    assert backend.max_inside == 1


def test_lock_released_after_backend_error(failing_queue):
    shared = SharedQueue(failing_queue, lock_timeout=0.5)
    for _ in range(3):
        with pytest.raises(EnqueueError):
            shared.perform(Enqueue({}))
    assert failing_queue.calls == 3


def test_lock_timeout_raises_distinct_error():
    backend = BlockingQueue()
    shared = SharedQueue(backend, lock_timeout=0.05)
    holder = threading.Thread(target=shared.perform, args=(Enqueue({}),))
    holder.start()
    try:
        assert backend.entered.wait(5)
        with pytest.raises(QueueLockError) as exc_info:
            shared.perform(Enqueue({}))
        assert not isinstance(exc_info.value, EnqueueError)
    finally:
        backend.release.set()
        holder.join(5)

    # usable again once the holder is done
    shared.perform(Enqueue({}))


@pytest.mark.parametrize("timeout", [-1, float("inf"), float("nan"), threading.TIMEOUT_MAX * 2])
def test_rejects_unusable_lock_timeout(timeout):
    with pytest.raises(ValueError):
        SharedQueue(MemoryQueue(), lock_timeout=timeout)
