"""
Domain Entities - Business objects with identity.

Basket and CatalogItem are read-only snapshots loaded for checkout.
Order is the aggregate root produced by checkout - it owns its OrderItems,
which in turn own a CatalogItemOrdered snapshot.

Unlike baskets, orders are immutable once constructed. Identity assignment
at persistence produces a new Order instead of mutating the existing one.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from .value_objects import Address, CatalogItemOrdered


@dataclass
class BasketItem:
    """Line item in a basket - price captured when added to the basket"""

    catalog_item_id: int
    unit_price: Decimal
    quantity: int
    id: Optional[int] = None


@dataclass
class Basket:
    """
    Shopping basket snapshot.

    Created and mutated elsewhere; checkout only reads it.
    """

    id: int
    buyer_id: str
    items: List[BasketItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0

    @property
    def catalog_item_ids(self) -> set:
        """Distinct catalog item ids referenced by the basket"""
        return {item.catalog_item_id for item in self.items}

    def __repr__(self) -> str:
        return f"Basket(id={self.id}, buyer={self.buyer_id}, items={len(self.items)})"


@dataclass
class CatalogItem:
    """Catalog reference data (read-only for checkout)"""

    id: int
    name: str
    picture_uri: str
    price: Decimal = Decimal("0")


@dataclass(frozen=True)
class OrderItem:
    """
    OrderItem entity - part of Order aggregate.

    Unit price and units are the values captured from the basket at
    checkout, never re-read from the catalog.
    """

    item_ordered: CatalogItemOrdered
    unit_price: Decimal
    units: int
    id: Optional[int] = None

    def __post_init__(self):
        if self.units <= 0:
            raise InvalidOrderError(f"Order item units must be > 0, got {self.units}")
        if self.unit_price < 0:
            raise InvalidOrderError(
                f"Order item unit price must be >= 0, got {self.unit_price}"
            )

    @property
    def catalog_item_id(self) -> int:
        return self.item_ordered.catalog_item_id

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.units


@dataclass(frozen=True)
class Order:
    """
    Order aggregate root.

    Invariants (enforced at construction):
    1. Has a buyer and a shipping address
    2. Has at least one OrderItem
    3. Items keep checkout order
    4. Never mutated after construction (frozen, items held as a tuple)
    """

    buyer_id: str
    ship_to_address: Address
    order_items: Tuple[OrderItem, ...]
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Assigned by the order repository
    id: Optional[int] = None

    def __post_init__(self):
        if not self.buyer_id:
            raise InvalidOrderError("Order must have a buyer_id")
        if self.ship_to_address is None:
            raise InvalidOrderError("Order must have a shipping address")

        # Accept any sequence but always store an immutable tuple
        object.__setattr__(self, "order_items", tuple(self.order_items))
        if not self.order_items:
            raise InvalidOrderError("Order must contain at least one item")

    def with_identity(
        self,
        order_id: int,
        item_ids: Optional[Sequence[int]] = None
    ) -> "Order":
        """
        Return a copy of this order carrying its persisted identity.

        Args:
            order_id: Identity assigned by the order store
            item_ids: Identities for each OrderItem, in item order

        Raises:
            InvalidOrderError: If item_ids doesn't match the item count
        """
        items = self.order_items
        if item_ids is not None:
            if len(item_ids) != len(items):
                raise InvalidOrderError(
                    f"Got {len(item_ids)} item ids for {len(items)} order items"
                )
            items = tuple(
                replace(item, id=item_id) for item, item_id in zip(items, item_ids)
            )
        return replace(self, id=order_id, order_items=items)

    def total(self) -> Decimal:
        """Sum of captured unit price x units over all items"""
        return sum((item.line_total for item in self.order_items), Decimal("0"))

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def item_count(self) -> int:
        return len(self.order_items)

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id}, buyer={self.buyer_id}, "
            f"items={self.item_count}, total={self.total()})"
        )


# Domain exceptions

class DomainError(Exception):
    """Base exception for domain layer errors"""
    pass


class InvalidOrderError(DomainError):
    """Raised when an order violates business rules"""
    pass


class OrderAssemblyError(DomainError):
    """Raised when an order cannot be assembled from a basket"""

    def __init__(self, basket_id: int, message: str):
        self.basket_id = basket_id
        super().__init__(message)


class BasketNotFoundError(OrderAssemblyError):
    """Raised when basket doesn't exist"""

    def __init__(self, basket_id: int):
        super().__init__(basket_id, f"Basket {basket_id} not found")


class EmptyBasketError(OrderAssemblyError):
    """Raised when checking out a basket with no items"""

    def __init__(self, basket_id: int):
        super().__init__(basket_id, f"Basket {basket_id} has no items - cannot check out")


class CatalogItemNotFoundError(OrderAssemblyError):
    """Raised when a basket references catalog items that no longer exist"""

    def __init__(self, basket_id: int, missing_ids: Sequence[int]):
        self.missing_ids = sorted(missing_ids)
        super().__init__(
            basket_id,
            f"Basket {basket_id} references unknown catalog items: {self.missing_ids}"
        )


class OrderPersistenceError(DomainError):
    """Raised when the order store fails to save an order"""
    pass


class NotificationError(DomainError):
    """
    Raised when downstream notification fails for a persisted order.

    The order already exists when this is raised. queue_error and
    webhook_error tell which channel(s) failed.
    """

    def __init__(
        self,
        order_id: Optional[int],
        message: str,
        queue_error: Optional[Exception] = None,
        webhook_error: Optional[Exception] = None
    ):
        self.order_id = order_id
        self.queue_error = queue_error
        self.webhook_error = webhook_error
        super().__init__(message)

    @property
    def failed_channels(self) -> List[str]:
        channels = []
        if self.queue_error is not None:
            channels.append("queue")
        if self.webhook_error is not None:
            channels.append("webhook")
        return channels


class QueueSendError(NotificationError):
    """Raised when the reservation message can't be published"""

    def __init__(self, order_id: Optional[int], reason: str):
        super().__init__(
            order_id,
            f"Failed to publish reservation for order {order_id}: {reason}"
        )


class WebhookSendError(NotificationError):
    """Raised when the delivery webhook call fails"""

    def __init__(
        self,
        order_id: Optional[int],
        reason: str,
        status_code: Optional[int] = None
    ):
        self.status_code = status_code
        super().__init__(
            order_id,
            f"Failed to notify delivery service for order {order_id}: {reason}"
        )
