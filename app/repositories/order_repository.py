"""
Order Repository implementation using SQLAlchemy.

Handles conversion between:
- Domain entities (Order, OrderItem) → ORM models (OrderModel, OrderItemModel)
- ORM models → Domain entities
"""

from datetime import timezone
from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from app.core.interfaces import IOrderRepository
from app.db.models import OrderModel, OrderItemModel
from app.domain.entities import Order, OrderItem, OrderPersistenceError
from app.domain.value_objects import Address, CatalogItemOrdered

logger = logging.getLogger(__name__)


class OrderRepository(IOrderRepository):
    """
    SQLAlchemy implementation of IOrderRepository.

    Orders are write-once: there is no update or delete.
    """

    def __init__(self, db_session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            db_session: SQLAlchemy async session
        """
        self._db = db_session

    async def add(self, order: Order) -> Order:
        """
        Add an order and its items, assigning identity.

        The write is flushed (ids assigned) but committed by the Unit of Work.

        Args:
            order: Domain Order without identity

        Returns:
            Order carrying the assigned order and item ids

        Raises:
            OrderPersistenceError: If the database rejects the write
        """
        if order.is_persisted:
            raise OrderPersistenceError(f"Order {order.id} is already persisted")

        try:
            db_order = self._to_orm(order)
            self._db.add(db_order)
            await self._db.flush()

        except SQLAlchemyError as e:
            logger.error(f"Failed to save order for buyer {order.buyer_id}: {e}")
            raise OrderPersistenceError(f"Failed to save order: {e}") from e

        persisted = order.with_identity(
            db_order.id,
            [db_item.id for db_item in db_order.items]
        )
        logger.info(
            f"💾 Saved order {persisted.id} with {persisted.item_count} item(s)"
        )
        return persisted

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """
        Retrieve order by ID with items.

        Args:
            order_id: Order identifier

        Returns:
            Order with items if found, None otherwise
        """
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items))
        )
        result = await self._db.execute(stmt)
        db_order = result.scalar_one_or_none()

        if db_order is None:
            return None

        return self._to_domain(db_order)

    # Conversion helpers

    def _to_orm(self, order: Order) -> OrderModel:
        """Convert domain Order to ORM model"""
        address = order.ship_to_address
        return OrderModel(
            buyer_id=order.buyer_id,
            order_date=order.order_date,
            ship_to_street=address.street,
            ship_to_city=address.city,
            ship_to_state=address.state,
            ship_to_country=address.country,
            ship_to_zip_code=address.zip_code,
            items=[
                OrderItemModel(
                    position=position,
                    catalog_item_id=item.item_ordered.catalog_item_id,
                    product_name=item.item_ordered.product_name,
                    picture_uri=item.item_ordered.picture_uri,
                    unit_price=item.unit_price,
                    units=item.units,
                )
                for position, item in enumerate(order.order_items)
            ],
        )

    def _to_domain(self, db_order: OrderModel) -> Order:
        """Convert ORM model to domain Order"""
        order_date = db_order.order_date
        if order_date.tzinfo is None:
            # SQLite drops the offset - stored values are always UTC
            order_date = order_date.replace(tzinfo=timezone.utc)

        return Order(
            id=db_order.id,
            buyer_id=db_order.buyer_id,
            order_date=order_date,
            ship_to_address=Address(
                street=db_order.ship_to_street,
                city=db_order.ship_to_city,
                state=db_order.ship_to_state or "",
                country=db_order.ship_to_country,
                zip_code=db_order.ship_to_zip_code,
            ),
            order_items=tuple(
                OrderItem(
                    id=db_item.id,
                    item_ordered=CatalogItemOrdered(
                        catalog_item_id=db_item.catalog_item_id,
                        product_name=db_item.product_name,
                        picture_uri=db_item.picture_uri or "",
                    ),
                    unit_price=db_item.unit_price,
                    units=db_item.units,
                )
                for db_item in db_order.items
            ),
        )
