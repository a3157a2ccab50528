from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from event_proxy.services.capability import Enqueue, EnqueueError, encode_payload


class SQSQueue:
    """Enqueues payloads to one Amazon SQS queue."""

    def __init__(self, client: Any, queue_url: str):
        self._client = client
        self._queue_url = queue_url

    @property
    def queue_url(self) -> str:
        return self._queue_url

    def perform(self, op: Enqueue) -> None:
        body = encode_payload(op.payload)
        try:
            self._client.send_message(QueueUrl=self._queue_url, MessageBody=body)
        except (ClientError, BotoCoreError) as ex:
            raise EnqueueError(f"SQS send_message failed: {ex}", cause=ex) from ex


def build_sqs_client(region: Optional[str] = None, endpoint_url: Optional[str] = None):
    return boto3.client("sqs", region_name=region, endpoint_url=endpoint_url)
