import threading
from typing import Any, Optional

from event_proxy.services.capability import Capability


class QueueLockError(RuntimeError):
    """The shared queue handle could not be acquired."""


class SharedQueue:
    """
    Serializes access to one queue capability so a single backend client
    can be shared by concurrently running request handlers.

    ``lock_timeout`` of None waits as long as it takes; a number of seconds
    bounds the wait and raises QueueLockError when it runs out.
    """

    def __init__(self, capability: Capability[Any, Any], lock_timeout: Optional[float] = None):
        if lock_timeout is not None and not 0 <= lock_timeout <= threading.TIMEOUT_MAX:
            raise ValueError(f"lock_timeout must be between 0 and {threading.TIMEOUT_MAX}")
        self._capability = capability
        self._lock = threading.Lock()
        self._timeout = -1 if lock_timeout is None else lock_timeout

    def perform(self, op: Any) -> Any:
        if not self._lock.acquire(timeout=self._timeout):
            raise QueueLockError(f"queue handle not acquired within {self._timeout}s")
        try:
            return self._capability.perform(op)
        finally:
            self._lock.release()
