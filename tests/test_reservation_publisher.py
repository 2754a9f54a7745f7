"""
Tests for ReservationPublisher (Redis stream) and UriComposer.
"""
import json
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.domain.entities import Order, OrderItem, QueueSendError
from app.domain.value_objects import CatalogItemOrdered
from app.services.reservation_publisher import ReservationPublisher
from app.services.uri_composer import UriComposer


@pytest.fixture
def persisted_order(shipping_address) -> Order:
    order = Order(
        buyer_id="buyer-42",
        ship_to_address=shipping_address,
        order_items=[
            OrderItem(CatalogItemOrdered(1, "Widget", ""), Decimal("9.99"), 2),
            OrderItem(CatalogItemOrdered(2, "Gadget", ""), Decimal("4.50"), 1),
        ]
    )
    return order.with_identity(1001, [301, 302])


@pytest.mark.asyncio
async def test_publishes_one_message_to_stream(persisted_order):
    client = AsyncMock()
    client.xadd.return_value = "1700000000000-0"
    publisher = ReservationPublisher(client, stream="reservations")

    entry_id = await publisher.publish(persisted_order)

    assert entry_id == "1700000000000-0"
    client.xadd.assert_awaited_once()
    stream, fields = client.xadd.await_args.args
    assert stream == "reservations"
    assert json.loads(fields["body"]) == {
        "OrderId": 1001,
        "Items": [{"Id": 301, "Units": 2}, {"Id": 302, "Units": 1}],
    }


@pytest.mark.asyncio
async def test_message_has_no_address(persisted_order):
    client = AsyncMock()
    client.xadd.return_value = b"1-0"
    publisher = ReservationPublisher(client)

    entry_id = await publisher.publish(persisted_order)

    assert entry_id == "1-0"
    body = client.xadd.await_args.args[1]["body"]
    assert "Address" not in json.loads(body)


@pytest.mark.asyncio
async def test_redis_error_raises_queue_send_error(persisted_order):
    client = AsyncMock()
    client.xadd.side_effect = RedisConnectionError("Connection refused")
    publisher = ReservationPublisher(client)

    with pytest.raises(QueueSendError) as exc_info:
        await publisher.publish(persisted_order)

    assert exc_info.value.order_id == 1001
    assert isinstance(exc_info.value.__cause__, RedisConnectionError)


class TestUriComposer:
    def test_replaces_placeholder_host(self):
        composer = UriComposer("https://shop.example.com/")
        assert (
            composer.compose_picture_uri("http://catalogbaseurltobereplaced/images/products/1.png")
            == "https://shop.example.com/images/products/1.png"
        )

    def test_joins_relative_paths(self):
        composer = UriComposer("https://shop.example.com")
        assert composer.compose_picture_uri("/images/1.png") == "https://shop.example.com/images/1.png"
        assert composer.compose_picture_uri("images/1.png") == "https://shop.example.com/images/1.png"

    def test_keeps_foreign_absolute_uris(self):
        composer = UriComposer("https://shop.example.com")
        assert composer.compose_picture_uri("https://cdn.other.com/x.png") == "https://cdn.other.com/x.png"

    def test_empty_reference(self):
        assert UriComposer("https://shop.example.com").compose_picture_uri("") == ""
