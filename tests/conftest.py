import pytest
from fastapi.testclient import TestClient

from event_proxy.core.config import Settings
from event_proxy.main import create_app
from event_proxy.services.capability import Enqueue, EnqueueError
from event_proxy.services.memory_queue import MemoryQueue
from event_proxy.services.proxy import Proxy
from event_proxy.services.shared_queue import SharedQueue

SOURCE = "test-proxy"


class FailingQueue:
    """Backend that always reports a delivery failure."""

    def __init__(self):
        self.calls = 0

    def perform(self, op: Enqueue) -> None:
        self.calls += 1
        raise EnqueueError("send failed", cause=ConnectionError("secret-backend-detail: 10.0.0.7 refused"))


@pytest.fixture
def valid_event():
    return {
        "category": "authentication",
        "hostname": "web-01.internal",
        "severity": "WARNING",
        "process": "sshd",
        "summary": "Repeated failed logins for root",
        "tags": ["ssh", "bruteforce"],
        "details": {"attempts": 12, "src_ip": "203.0.113.9", "users": ["root"], "geo": {"cc": "NL"}},
    }


@pytest.fixture
def memory_queue():
    return MemoryQueue(queue="test-queue")


@pytest.fixture
def failing_queue():
    return FailingQueue()


@pytest.fixture
def proxy(memory_queue):
    return Proxy(SharedQueue(memory_queue), source=SOURCE)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        QUEUE_BACKEND="discard",
        EVENT_SOURCE=SOURCE,
        INGEST_API_KEY="",
    )


@pytest.fixture
def client(settings, memory_queue):
    return TestClient(create_app(settings, queue=memory_queue))
