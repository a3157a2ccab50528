from dataclasses import dataclass
from typing import List

from event_proxy.services.capability import Enqueue, encode_payload


@dataclass(frozen=True)
class Message:
    body: str
    queue: str


class MemoryQueue:
    """Keeps encoded messages in a list instead of sending them anywhere."""

    def __init__(self, queue: str = "memory"):
        self.queue = queue
        self.messages: List[Message] = []

    def perform(self, op: Enqueue) -> None:
        self.messages.append(Message(body=encode_payload(op.payload), queue=self.queue))


class DiscardQueue:
    def perform(self, op: Enqueue) -> None:
        return None
