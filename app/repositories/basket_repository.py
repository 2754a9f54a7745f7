"""
Basket repository for data access.

Read-only: baskets are created and edited by the storefront, checkout
only loads a snapshot.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.core.interfaces import IBasketRepository
from app.db.models import BasketModel
from app.domain.entities import Basket, BasketItem


class BasketRepository(IBasketRepository):
    """Repository for Basket aggregate"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def get_with_items(self, basket_id: int) -> Optional[Basket]:
        """Get basket by ID with items eagerly loaded"""
        stmt = (
            select(BasketModel)
            .where(BasketModel.id == basket_id)
            .options(joinedload(BasketModel.items))
        )
        result = await self._db.execute(stmt)
        db_basket = result.unique().scalar_one_or_none()

        if db_basket is None:
            return None

        return Basket(
            id=db_basket.id,
            buyer_id=db_basket.buyer_id,
            items=[
                BasketItem(
                    id=db_item.id,
                    catalog_item_id=db_item.catalog_item_id,
                    unit_price=db_item.unit_price,
                    quantity=db_item.quantity,
                )
                for db_item in db_basket.items
            ],
        )
