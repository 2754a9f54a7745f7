"""
Tests for the Order aggregate and ordering value objects.
"""
import dataclasses
from decimal import Decimal

import pytest

from app.domain.entities import (
    BasketNotFoundError,
    EmptyBasketError,
    InvalidOrderError,
    NotificationError,
    Order,
    OrderAssemblyError,
    OrderItem,
    QueueSendError,
    WebhookSendError,
)
from app.domain.value_objects import Address, CatalogItemOrdered


def make_item(catalog_item_id=1, unit_price="9.99", units=2) -> OrderItem:
    return OrderItem(
        item_ordered=CatalogItemOrdered(
            catalog_item_id=catalog_item_id,
            product_name=f"Product {catalog_item_id}",
            picture_uri=f"https://cdn.example.com/{catalog_item_id}.png"
        ),
        unit_price=Decimal(unit_price),
        units=units
    )


class TestOrderItem:
    def test_rejects_zero_units(self):
        with pytest.raises(InvalidOrderError):
            make_item(units=0)

    def test_rejects_negative_price(self):
        with pytest.raises(InvalidOrderError):
            make_item(unit_price="-0.01")

    def test_allows_free_item(self):
        item = make_item(unit_price="0", units=1)
        assert item.line_total == Decimal("0")


class TestOrder:
    def test_requires_items(self, shipping_address):
        with pytest.raises(InvalidOrderError):
            Order(buyer_id="buyer-1", ship_to_address=shipping_address, order_items=[])

    def test_requires_buyer(self, shipping_address):
        with pytest.raises(InvalidOrderError):
            Order(buyer_id="", ship_to_address=shipping_address, order_items=[make_item()])

    def test_total_uses_captured_prices(self, shipping_address):
        order = Order(
            buyer_id="buyer-1",
            ship_to_address=shipping_address,
            order_items=[make_item(1, "9.99", 2), make_item(2, "4.50", 1)]
        )
        assert order.total() == Decimal("24.48")

    def test_is_immutable(self, shipping_address):
        order = Order(
            buyer_id="buyer-1",
            ship_to_address=shipping_address,
            order_items=[make_item()]
        )

        with pytest.raises(dataclasses.FrozenInstanceError):
            order.buyer_id = "someone-else"
        assert isinstance(order.order_items, tuple)
        with pytest.raises(AttributeError):
            order.order_items.append(make_item(2))

    def test_list_passed_in_is_copied(self, shipping_address):
        items = [make_item()]
        order = Order(buyer_id="buyer-1", ship_to_address=shipping_address, order_items=items)

        items.append(make_item(2))

        assert order.item_count == 1

    def test_with_identity_returns_new_order(self, shipping_address):
        order = Order(
            buyer_id="buyer-1",
            ship_to_address=shipping_address,
            order_items=[make_item(1), make_item(2)]
        )

        persisted = order.with_identity(10, [100, 101])

        assert order.id is None
        assert not order.is_persisted
        assert persisted.id == 10
        assert [item.id for item in persisted.order_items] == [100, 101]
        assert persisted.order_date == order.order_date
        assert persisted.total() == order.total()

    def test_with_identity_checks_item_id_count(self, shipping_address):
        order = Order(
            buyer_id="buyer-1",
            ship_to_address=shipping_address,
            order_items=[make_item()]
        )

        with pytest.raises(InvalidOrderError):
            order.with_identity(10, [100, 101])


class TestAddress:
    def test_requires_street(self):
        with pytest.raises(ValueError):
            Address(street="", city="Kent", state="OH", country="US", zip_code="44240")

    def test_state_is_optional(self):
        address = Address(street="1 Rue", city="Paris", state="", country="FR", zip_code="75001")
        assert address.to_payload()["State"] == ""

    def test_payload_field_names(self, shipping_address):
        assert shipping_address.to_payload() == {
            "Street": "123 Main St.",
            "City": "Kent",
            "State": "OH",
            "Country": "United States",
            "ZipCode": "44240",
        }

    def test_repr_hides_street(self, shipping_address):
        assert "Main St" not in repr(shipping_address)


def test_catalog_item_ordered_requires_name():
    with pytest.raises(ValueError):
        CatalogItemOrdered(catalog_item_id=1, product_name="", picture_uri="")


def test_error_hierarchy():
    assert issubclass(BasketNotFoundError, OrderAssemblyError)
    assert issubclass(EmptyBasketError, OrderAssemblyError)
    assert issubclass(QueueSendError, NotificationError)
    assert issubclass(WebhookSendError, NotificationError)

    error = NotificationError(5, "failed", webhook_error=RuntimeError("boom"))
    assert error.failed_channels == ["webhook"]
    assert BasketNotFoundError(3).basket_id == 3
