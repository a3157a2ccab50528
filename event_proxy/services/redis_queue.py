import redis

from event_proxy.services.capability import Enqueue, EnqueueError, encode_payload


class RedisQueue:
    """Enqueues payloads by RPUSH onto a Redis list."""

    def __init__(self, client: redis.Redis, key: str):
        self._client = client
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def perform(self, op: Enqueue) -> None:
        body = encode_payload(op.payload)
        try:
            self._client.rpush(self._key, body)
        except redis.RedisError as ex:
            raise EnqueueError(f"Redis RPUSH failed: {ex}", cause=ex) from ex


def build_redis_client(url: str) -> redis.Redis:
    return redis.Redis.from_url(url, decode_responses=True)
