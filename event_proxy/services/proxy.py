import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from event_proxy.schemas.event import ClientEvent
from event_proxy.services.capability import Capability, Enqueue, EnqueueError
from event_proxy.services.normalizer import transform
from event_proxy.services.shared_queue import QueueLockError

logger = logging.getLogger(__name__)

MSG_SUCCESS = "Success"
MSG_INVALID = "Invalid request data"
MSG_SERVER_ERROR = "An error occurred in the server"


@dataclass(frozen=True)
class ProxyResponse:
    status_code: int
    text: str


class Proxy:
    """
    Validates client events, converts them to the downstream schema and
    enqueues each one exactly once.

    ``queue`` is normally a SharedQueue; ``handle`` keeps no state of its
    own, so it can be called from any number of threads at once.
    """

    def __init__(self, queue: Capability[Enqueue, Any], source: str):
        self._queue = queue
        self._source = source

    def handle(self, body: bytes) -> ProxyResponse:
        try:
            event = ClientEvent.model_validate_json(body)
        except ValidationError as ex:
            logger.debug("rejected event: %d validation error(s)", ex.error_count())
            return ProxyResponse(400, MSG_INVALID)

        outbound = transform(event, self._source)

        try:
            self._queue.perform(Enqueue(outbound))
        except QueueLockError as ex:
            logger.error("queue handle unavailable: %s", ex)
            return ProxyResponse(500, MSG_SERVER_ERROR)
        except EnqueueError as ex:
            logger.error("failed to enqueue event category=%s: %r", outbound.category, ex.cause or ex)
            return ProxyResponse(500, MSG_SERVER_ERROR)

        logger.debug("queued event category=%s severity=%s", outbound.category, outbound.severity.value)
        return ProxyResponse(200, MSG_SUCCESS)
