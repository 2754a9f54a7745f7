"""Core module containing interfaces."""

from app.core.interfaces import (
    IBasketRepository,
    ICatalogItemRepository,
    IOrderRepository,
    IUriComposer,
    IReservationPublisher,
    IDeliveryNotifier,
)

__all__ = [
    "IBasketRepository",
    "ICatalogItemRepository",
    "IOrderRepository",
    "IUriComposer",
    "IReservationPublisher",
    "IDeliveryNotifier",
]
