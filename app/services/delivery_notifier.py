"""
Delivery webhook notifier.

Tells the delivery-scheduling service about each new order with a single
JSON POST to the configured URL.
"""
import logging
from typing import Optional

import httpx

from app.config import settings
from app.core.interfaces import IDeliveryNotifier
from app.domain.entities import Order, WebhookSendError
from app.services.order_payloads import build_delivery_payload


logger = logging.getLogger(__name__)


class DeliveryNotifier(IDeliveryNotifier):
    """
    Service for notifying the delivery-scheduling webhook.

    Responsibilities:
    - Construct the delivery payload (OrderId, Address, Items)
    - Send POST request with a JSON body
    - Raise WebhookSendError on timeout, transport error or non-2xx status

    The response body is never parsed. No retries - one call per order.

    Usage:
        notifier = DeliveryNotifier(http_client, settings.delivery_webhook_url)
        status_code = await notifier.notify(order)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        webhook_url: str,
        timeout: Optional[float] = None
    ):
        """
        Initialize delivery notifier.

        Args:
            http_client: Long-lived async HTTP client (owned by the app)
            webhook_url: Absolute URL of the delivery webhook
            timeout: Request timeout in seconds (default: DELIVERY_WEBHOOK_TIMEOUT)
        """
        self.http_client = http_client
        self.webhook_url = webhook_url
        self.timeout = timeout if timeout is not None else settings.delivery_webhook_timeout

    async def notify(self, order: Order) -> int:
        """
        POST the delivery payload for a persisted order.

        Args:
            order: Persisted order (must carry its id)

        Returns:
            HTTP status code of the (2xx) response

        Raises:
            WebhookSendError: If the call failed or returned a non-2xx status
        """
        payload = build_delivery_payload(order)

        # Never log the address
        logger.info(
            f"📤 Sending delivery webhook - "
            f"order_id: {order.id}, items: {order.item_count}"
        )

        try:
            response = await self.http_client.post(
                self.webhook_url,
                json=payload,
                timeout=self.timeout
            )

        except httpx.TimeoutException as e:
            logger.warning(
                f"⚠️ Delivery webhook timeout - "
                f"order_id: {order.id}, url: {self.webhook_url}"
            )
            raise WebhookSendError(order.id, "request timed out") from e

        except httpx.RequestError as e:
            logger.warning(
                f"⚠️ Failed to send delivery webhook - "
                f"order_id: {order.id}, error: {e}"
            )
            raise WebhookSendError(order.id, f"request failed: {e}") from e

        if not response.is_success:
            logger.warning(
                f"⚠️ Delivery webhook returned non-2xx status - "
                f"order_id: {order.id}, status: {response.status_code}"
            )
            raise WebhookSendError(
                order.id,
                f"webhook returned HTTP {response.status_code}",
                status_code=response.status_code
            )

        logger.info(
            f"✅ Delivery webhook accepted - "
            f"order_id: {order.id}, status: {response.status_code}"
        )
        return response.status_code
