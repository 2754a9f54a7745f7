"""
Unit of Work pattern for transaction management.

The Unit of Work pattern ensures:
1. Basket/catalog reads and the order write happen in one session
2. Atomic commit (all or nothing)
3. Proper resource cleanup

Downstream notifications are NOT run from here. OrderService sends them
after the unit of work has committed, so a notification failure can never
roll back a persisted order and is never silently swallowed.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.domain.entities import OrderPersistenceError

if TYPE_CHECKING:
    from app.core.interfaces import (
        IBasketRepository,
        ICatalogItemRepository,
        IOrderRepository,
    )

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """
    Abstract Unit of Work for transaction management.

    Provides:
    - Transaction boundaries (commit/rollback)
    - Repository access (baskets, catalog_items, orders)
    """

    baskets: 'IBasketRepository'
    catalog_items: 'ICatalogItemRepository'
    orders: 'IOrderRepository'

    async def __aenter__(self):
        """Enter async context"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit async context.

        On success: commits
        On exception: rolls back
        """
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.close()

    @abstractmethod
    async def commit(self):
        """Commit transaction"""
        pass

    @abstractmethod
    async def rollback(self):
        """Rollback transaction"""
        pass

    @abstractmethod
    async def close(self):
        """Close resources"""
        pass


class SQLAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work.

    Features:
    - Transaction management via SQLAlchemy session
    - Repository initialization
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Unit of Work.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

        # Import here to avoid circular dependencies
        from app.repositories.basket_repository import BasketRepository
        from app.repositories.catalog_repository import CatalogItemRepository
        from app.repositories.order_repository import OrderRepository

        self.baskets = BasketRepository(session)
        self.catalog_items = CatalogItemRepository(session)
        self.orders = OrderRepository(session)

    async def commit(self):
        """Commit transaction. Failures surface as OrderPersistenceError."""
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            logger.error(f"❌ Transaction commit failed: {e}")
            raise OrderPersistenceError(f"Commit failed: {e}") from e
        logger.debug("✅ Transaction committed")

    async def rollback(self):
        """Discard all pending changes"""
        await self._session.rollback()
        logger.debug("↩️  Transaction rolled back")

    async def close(self):
        """Close session and release resources"""
        await self._session.close()


def get_unit_of_work(session: AsyncSession) -> AbstractUnitOfWork:
    """
    Factory function for Unit of Work.

    Args:
        session: SQLAlchemy async session

    Returns:
        Configured Unit of Work instance

    Usage in FastAPI:
        async def endpoint(
            db: AsyncSession = Depends(get_db_session)
        ):
            async with get_unit_of_work(db) as uow:
                basket = await uow.baskets.get_with_items(basket_id)
                # Commit happens on context exit
    """
    return SQLAlchemyUnitOfWork(session)
