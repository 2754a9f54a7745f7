"""
Tests for the checkout endpoint (POST /api/orders).

The database session and OrderService are replaced through FastAPI
dependency overrides; the lifespan (real Redis/httpx clients) is not run.
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.api.orders import get_order_service, get_uow
from app.application.order_service import OrderService
from app.domain.entities import Basket, BasketItem, CatalogItem, QueueSendError
from app.main import app
from tests.fakes import (
    FakeDeliveryNotifier,
    FakeReservationPublisher,
    FakeUnitOfWork,
    FakeUriComposer,
)

ADDRESS = {
    "street": "123 Main St.",
    "city": "Kent",
    "state": "OH",
    "country": "United States",
    "zip_code": "44240",
}

BASKETS = {
    42: Basket(
        id=42,
        buyer_id="buyer-42",
        items=[
            BasketItem(catalog_item_id=1, unit_price=Decimal("9.99"), quantity=2),
            BasketItem(catalog_item_id=2, unit_price=Decimal("4.50"), quantity=1),
        ]
    ),
    7: Basket(id=7, buyer_id="buyer-7", items=[]),
}

CATALOG = {
    1: CatalogItem(id=1, name="Widget", picture_uri="1.png", price=Decimal("12.00")),
    2: CatalogItem(id=2, name="Gadget", picture_uri="2.png", price=Decimal("5.00")),
}


@pytest.fixture
def checkout():
    """Wire the app with fakes; yields (client, uow, publisher, notifier)"""
    uow = FakeUnitOfWork(BASKETS, CATALOG)
    publisher = FakeReservationPublisher(uow.calls)
    notifier = FakeDeliveryNotifier(uow.calls)
    service = OrderService(FakeUriComposer(), publisher, notifier)

    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_order_service] = lambda: service

    yield TestClient(app), uow, publisher, notifier

    app.dependency_overrides.clear()


def test_create_order(checkout):
    client, uow, publisher, notifier = checkout

    response = client.post("/api/orders", json={"basket_id": 42, "shipping_address": ADDRESS})

    assert response.status_code == 201
    data = response.json()
    assert data["order_id"] == 1001
    assert data["buyer_id"] == "buyer-42"
    assert Decimal(str(data["total"])) == Decimal("24.48")
    assert [(i["catalog_item_id"], i["units"]) for i in data["items"]] == [(1, 2), (2, 1)]
    assert len(publisher.published) == 1
    assert len(notifier.notified) == 1


def test_unknown_basket_returns_404(checkout):
    client, uow, publisher, _ = checkout

    response = client.post("/api/orders", json={"basket_id": 999, "shipping_address": ADDRESS})

    assert response.status_code == 404
    assert "999" in response.json()["detail"]
    assert publisher.published == []


def test_empty_basket_returns_400(checkout):
    client, uow, _, _ = checkout

    response = client.post("/api/orders", json={"basket_id": 7, "shipping_address": ADDRESS})

    assert response.status_code == 400
    assert uow.orders.added == []


def test_invalid_request_returns_422(checkout):
    client, _, _, _ = checkout

    response = client.post(
        "/api/orders",
        json={"basket_id": 42, "shipping_address": {**ADDRESS, "street": ""}}
    )

    assert response.status_code == 422


def test_notification_failure_returns_502_with_order_id(checkout):
    client, uow, _, notifier = checkout
    publisher = FakeReservationPublisher(uow.calls, fail_with=QueueSendError(None, "down"))
    service = OrderService(FakeUriComposer(), publisher, notifier)
    app.dependency_overrides[get_order_service] = lambda: service

    response = client.post("/api/orders", json={"basket_id": 42, "shipping_address": ADDRESS})

    assert response.status_code == 502
    body = response.json()
    assert body["order_id"] == 1001
    assert body["failed_channels"] == ["queue"]
    assert "was saved" in body["detail"]
    assert len(uow.orders.added) == 1


def test_root_and_health():
    client = TestClient(app)

    assert client.get("/").json()["checkout_url"] == "/api/orders"
    assert client.get("/health").json()["status"] == "healthy"
