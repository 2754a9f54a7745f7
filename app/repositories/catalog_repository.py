"""
Catalog item repository for data access.
"""

from typing import List, Set
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.interfaces import ICatalogItemRepository
from app.db.models import CatalogItemModel
from app.domain.entities import CatalogItem


class CatalogItemRepository(ICatalogItemRepository):
    """Repository for CatalogItem entity"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def list_by_ids(self, ids: Set[int]) -> List[CatalogItem]:
        """Get catalog items by ID in one query"""
        if not ids:
            return []

        result = await self._db.execute(
            select(CatalogItemModel).where(CatalogItemModel.id.in_(ids))
        )
        return [
            CatalogItem(
                id=db_item.id,
                name=db_item.name,
                picture_uri=db_item.picture_uri or "",
                price=db_item.price,
            )
            for db_item in result.scalars().all()
        ]
