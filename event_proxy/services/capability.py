"""
Capabilities name a piece of functionality that touches external state
(a queue, a database) so callers can depend on "can enqueue" instead of a
concrete client.  Any object with a matching ``perform`` method qualifies.
"""
import json
from dataclasses import dataclass
from typing import Any, Generic, Optional, Protocol, TypeVar

from pydantic import BaseModel

Op = TypeVar("Op", contravariant=True)
Out = TypeVar("Out", covariant=True)
T = TypeVar("T")


class Capability(Protocol[Op, Out]):
    def perform(self, op: Op) -> Out:
        ...


@dataclass(frozen=True)
class Enqueue(Generic[T]):
    """Operation: place one serializable payload on a queue."""

    payload: T


class EnqueueError(RuntimeError):
    """
    The backend refused or failed to take a message.
    ``cause`` is the backend's own exception, untouched.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


def encode_payload(payload: Any) -> str:
    """Canonical JSON text for a pydantic model or a JSON-compatible value."""
    if isinstance(payload, BaseModel):
        return payload.model_dump_json()
    return json.dumps(payload, ensure_ascii=False)
