"""
Wire payloads describing a new order for downstream systems.

Both payloads are built from the persisted order only, so they always
carry the assigned OrderId and the same Id/Units pairs in item order.
"""
from typing import List

from app.domain.entities import Order


def build_items_payload(order: Order) -> List[dict]:
    """Item list shared by both payloads: persisted order item id + units"""
    return [
        {"Id": item.id, "Units": item.units}
        for item in order.order_items
    ]


def build_reservation_payload(order: Order) -> dict:
    """
    Payload for the reservation queue.

    Schema: {"OrderId": int, "Items": [{"Id": int, "Units": int}]}
    """
    return {
        "OrderId": order.id,
        "Items": build_items_payload(order),
    }


def build_delivery_payload(order: Order) -> dict:
    """
    Payload for the delivery-scheduling webhook.

    Schema: {"OrderId": int, "Address": {...}, "Items": [{"Id": int, "Units": int}]}
    """
    return {
        "OrderId": order.id,
        "Address": order.ship_to_address.to_payload(),
        "Items": build_items_payload(order),
    }
