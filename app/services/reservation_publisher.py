"""
Reservation queue publisher.

Publishes one message per new order to a Redis stream that the
inventory/reservation service consumes.

Message format:
    stream: RESERVATIONS_STREAM (default "reservations")
    fields: {"body": <UTF-8 JSON {"OrderId": int, "Items": [{"Id": int, "Units": int}]}>}
"""
import json
import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.core.interfaces import IReservationPublisher
from app.domain.entities import Order, QueueSendError
from app.services.order_payloads import build_reservation_payload

logger = logging.getLogger(__name__)

MESSAGE_BODY_FIELD = "body"


def create_redis_client(redis_url: str) -> redis.Redis:
    """
    Create the process-wide Redis client.

    The connection pool is lazy - nothing connects until the first command.
    """
    return redis.from_url(
        redis_url,
        decode_responses=True,
        socket_timeout=5,
    )


class ReservationPublisher(IReservationPublisher):
    """
    Publishes reservation messages to a Redis stream.

    One XADD per order: no batching, no deduplication key. Delivery
    confirmation is the entry id Redis returns.
    """

    def __init__(self, client: redis.Redis, stream: str = "reservations"):
        """
        Args:
            client: Long-lived Redis client (owned by the app)
            stream: Stream name of the reservation channel
        """
        self._client = client
        self.stream = stream

    async def publish(self, order: Order) -> str:
        """
        Publish the reservation message for a persisted order.

        Returns:
            Stream entry id

        Raises:
            QueueSendError: If Redis rejects the message or is unreachable
        """
        body = json.dumps(build_reservation_payload(order))

        try:
            entry_id = await self._client.xadd(self.stream, {MESSAGE_BODY_FIELD: body})
        except RedisError as e:
            logger.warning(
                f"⚠️ Failed to publish reservation - "
                f"order_id: {order.id}, stream: {self.stream}, error: {e}"
            )
            raise QueueSendError(order.id, str(e)) from e

        if isinstance(entry_id, bytes):
            entry_id = entry_id.decode("utf-8")

        logger.info(
            f"📨 Reservation published - "
            f"order_id: {order.id}, stream: {self.stream}, entry: {entry_id}"
        )
        return entry_id
