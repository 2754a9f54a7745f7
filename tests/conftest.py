"""
Pytest configuration and shared fixtures.
"""
from decimal import Decimal

import pytest
import pytest_asyncio

from app.db.connection import init_db, close_db
from app.domain.entities import Basket, BasketItem, CatalogItem
from app.domain.value_objects import Address

IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def database():
    """
    Fresh in-memory database for each test.

    Tables are created by init_db and dropped with the engine on close.
    """
    await init_db(IN_MEMORY_DATABASE_URL)

    yield

    await close_db()


@pytest.fixture
def shipping_address() -> Address:
    return Address(
        street="123 Main St.",
        city="Kent",
        state="OH",
        country="United States",
        zip_code="44240"
    )


@pytest.fixture
def catalog_items() -> dict:
    """Catalog where current prices differ from the prices captured in baskets"""
    return {
        1: CatalogItem(
            id=1,
            name="Widget",
            picture_uri="images/products/1.png",
            price=Decimal("12.00")
        ),
        2: CatalogItem(
            id=2,
            name="Gadget",
            picture_uri="images/products/2.png",
            price=Decimal("5.00")
        ),
    }


@pytest.fixture
def basket_42() -> Basket:
    return Basket(
        id=42,
        buyer_id="buyer-42",
        items=[
            BasketItem(catalog_item_id=1, unit_price=Decimal("9.99"), quantity=2),
            BasketItem(catalog_item_id=2, unit_price=Decimal("4.50"), quantity=1),
        ]
    )


@pytest.fixture
def empty_basket_7() -> Basket:
    return Basket(id=7, buyer_id="buyer-7", items=[])
