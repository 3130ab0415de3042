"""Queue sink: publishes `NewOrder` messages for the order-items reserver.

A producer connection is opened for each publish and always closed before
returning. Any failure is logged and reported in the result.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass

from aiokafka import AIOKafkaProducer

from storefront.common.errors import PublishError
from storefront.common.logging import logger
from storefront.services.checkout.payload import NotificationPayload
from storefront.services.checkout.schemas import NotificationResult


NEW_ORDER_SUBJECT = "NewOrder"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class QueueConfig:
    connection: str
    queue_name: str

    @classmethod
    def from_settings(cls, settings) -> "QueueConfig":
        return cls(connection=settings.servicebus_connection, queue_name=settings.servicebus_queue_name)


class QueuePublisher:
    """Serializes payloads and submits them to the configured queue."""

    sink = "queue"

    def __init__(self, config: QueueConfig) -> None:
        self.config = config

    @asynccontextmanager
    async def _connection(self):
        producer = AIOKafkaProducer(bootstrap_servers=self.config.connection)
        try:
            await producer.start()
            yield producer
        finally:
            await producer.stop()

    def _encode(self, payload: NotificationPayload) -> bytes:
        try:
            return payload.to_json().encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise PublishError(f"payload serialization failed: {exc}") from exc

    async def _send(self, payload: NotificationPayload) -> None:
        if not self.config.connection:
            raise PublishError("queue connection is not configured")
        body = self._encode(payload)
        async with self._connection() as producer:
            await producer.send_and_wait(
                self.config.queue_name,
                value=body,
                key=payload.id.encode("utf-8"),
                headers=[
                    ("content-type", JSON_CONTENT_TYPE.encode("utf-8")),
                    ("subject", NEW_ORDER_SUBJECT.encode("utf-8")),
                    ("message-id", payload.id.encode("utf-8")),
                ],
            )

    async def publish(self, payload: NotificationPayload) -> NotificationResult:
        try:
            await self._send(payload)
        except Exception as exc:
            logger.warning(
                "queue_publish_failed queue=%s message_id=%s order_id=%s error=%s",
                self.config.queue_name,
                payload.id,
                payload.order_id,
                exc,
            )
            return NotificationResult(sink=self.sink, message_id=payload.id, ok=False, error=str(exc))
        logger.info(
            "queue_published queue=%s message_id=%s order_id=%s",
            self.config.queue_name,
            payload.id,
            payload.order_id,
        )
        return NotificationResult(sink=self.sink, message_id=payload.id, ok=True)
