"""
Order Service - Checkout orchestration.

Turns a basket into a persisted order and tells downstream systems about it:

1. Assembly     - load basket + catalog items, build an immutable Order
2. Persistence  - write the order (identity assigned, committed)
3. Fan-out      - reservation queue first, then delivery webhook

Order creation is successful once persisted. Notification is best-effort:
a failure never rolls the order back, but is raised to the caller as a
NotificationError that names the failed channel(s).
"""

from typing import Dict, Optional, Tuple
import logging

from app.core.interfaces import IDeliveryNotifier, IReservationPublisher, IUriComposer
from app.domain.unit_of_work import AbstractUnitOfWork
from app.domain.entities import (
    CatalogItem,
    CatalogItemNotFoundError,
    EmptyBasketError,
    BasketNotFoundError,
    NotificationError,
    Order,
    OrderItem,
)
from app.domain.value_objects import Address, CatalogItemOrdered

logger = logging.getLogger(__name__)


class OrderService:
    """
    Application service for checkout.

    Orchestrates:
    - Domain logic (order invariants live in Order/OrderItem)
    - Infrastructure (repositories via Unit of Work, queue, webhook)

    The queue and webhook clients are long-lived and injected; one
    OrderService is shared by all requests. A Unit of Work is passed
    per call.
    """

    def __init__(
        self,
        uri_composer: IUriComposer,
        reservation_publisher: IReservationPublisher,
        delivery_notifier: IDeliveryNotifier
    ):
        self._uri_composer = uri_composer
        self._reservation_publisher = reservation_publisher
        self._delivery_notifier = delivery_notifier

    async def create_order(
        self,
        uow: AbstractUnitOfWork,
        basket_id: int,
        shipping_address: Address
    ) -> Order:
        """
        Check out a basket.

        Args:
            uow: Unit of Work for the basket/catalog reads and the order write
            basket_id: Basket to check out
            shipping_address: Where to ship the order

        Returns:
            Persisted order (with identity)

        Raises:
            BasketNotFoundError: If the basket doesn't exist (nothing written)
            EmptyBasketError: If the basket has no items (nothing written)
            CatalogItemNotFoundError: If basket items reference missing catalog items
            OrderPersistenceError: If the order couldn't be saved (nothing sent)
            NotificationError: If the order was saved but a notification failed
        """
        async with uow:
            order = await self.assemble_order(uow, basket_id, shipping_address)
            order = await self.persist_order(uow, order)
            # Commit happens on context exit

        await self.notify_downstream(order)
        return order

    async def assemble_order(
        self,
        uow: AbstractUnitOfWork,
        basket_id: int,
        shipping_address: Address
    ) -> Order:
        """
        Build an order snapshot from a basket.

        Prices and quantities come from the basket (captured at add-to-basket
        time), never from the catalog's current price. Item order follows
        basket order.
        """
        # 1. Load basket
        basket = await uow.baskets.get_with_items(basket_id)
        if basket is None:
            logger.warning(f"Checkout for unknown basket {basket_id}")
            raise BasketNotFoundError(basket_id)

        # 2. Validate
        if basket.is_empty:
            logger.warning(f"Checkout for empty basket {basket_id}")
            raise EmptyBasketError(basket_id)

        # 3. Batch catalog lookup
        catalog_items: Dict[int, CatalogItem] = {
            item.id: item
            for item in await uow.catalog_items.list_by_ids(basket.catalog_item_ids)
        }

        missing = basket.catalog_item_ids - set(catalog_items)
        if missing:
            logger.error(
                f"Basket {basket_id} references missing catalog items: {sorted(missing)}"
            )
            raise CatalogItemNotFoundError(basket_id, missing)

        # 4. Snapshot each line
        order_items = []
        for basket_item in basket.items:
            catalog_item = catalog_items[basket_item.catalog_item_id]
            item_ordered = CatalogItemOrdered(
                catalog_item_id=catalog_item.id,
                product_name=catalog_item.name,
                picture_uri=self._uri_composer.compose_picture_uri(catalog_item.picture_uri)
            )
            order_items.append(
                OrderItem(
                    item_ordered=item_ordered,
                    unit_price=basket_item.unit_price,
                    units=basket_item.quantity
                )
            )

        # 5. Build aggregate
        order = Order(
            buyer_id=basket.buyer_id,
            ship_to_address=shipping_address,
            order_items=order_items
        )
        logger.info(
            f"🧾 Assembled order from basket {basket_id}: "
            f"{order.item_count} item(s), total {order.total()}"
        )
        return order

    async def persist_order(self, uow: AbstractUnitOfWork, order: Order) -> Order:
        """Write the order through the order repository (identity assigned)"""
        return await uow.orders.add(order)

    async def notify_downstream(
        self,
        order: Order
    ) -> Tuple[Optional[str], Optional[int]]:
        """
        Notify the reservation queue, then the delivery webhook.

        Both sends are always attempted - a queue failure doesn't skip the
        webhook.

        Returns:
            (queue entry id, webhook HTTP status)

        Raises:
            NotificationError: If either send failed, after both were attempted
        """
        queue_result = None
        webhook_result = None
        queue_error = None
        webhook_error = None

        try:
            queue_result = await self._reservation_publisher.publish(order)
        except Exception as e:
            logger.error(
                f"❌ Reservation notification failed for order {order.id}: {e}",
                exc_info=not isinstance(e, NotificationError)
            )
            queue_error = e

        try:
            webhook_result = await self._delivery_notifier.notify(order)
        except Exception as e:
            logger.error(
                f"❌ Delivery notification failed for order {order.id}: {e}",
                exc_info=not isinstance(e, NotificationError)
            )
            webhook_error = e

        if queue_error is not None or webhook_error is not None:
            error = NotificationError(
                order.id,
                f"Order {order.id} was saved but downstream notification failed",
                queue_error=queue_error,
                webhook_error=webhook_error
            )
            logger.warning(
                f"⚠️ Order {order.id} persisted with failed notification(s): "
                f"{', '.join(error.failed_channels)}"
            )
            raise error from (queue_error or webhook_error)

        logger.info(f"✅ Order {order.id} submitted and downstream notified")
        return queue_result, webhook_result
