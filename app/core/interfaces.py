"""
Core interfaces for order submission.

Collaborators consumed by OrderService. Concrete implementations live in
app/repositories (SQLAlchemy) and app/services (URI composer, Redis,
delivery webhook).
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.entities import Basket, CatalogItem, Order


class IBasketRepository(ABC):
    """Interface for basket retrieval (read-only for checkout)"""

    @abstractmethod
    async def get_with_items(self, basket_id: int) -> Optional['Basket']:
        """
        Get basket by ID with its line items loaded.

        Args:
            basket_id: Basket identifier

        Returns:
            Basket if found, None otherwise
        """
        pass


class ICatalogItemRepository(ABC):
    """Interface for catalog item retrieval"""

    @abstractmethod
    async def list_by_ids(self, ids: Set[int]) -> List['CatalogItem']:
        """
        Get catalog items in a single batch lookup.

        Unknown ids are silently absent from the result.
        """
        pass


class IOrderRepository(ABC):
    """
    Interface for order storage.

    Implementations must:
    - Store the order and all of its items atomically
    - Assign identity to the order and its items
    """

    @abstractmethod
    async def add(self, order: 'Order') -> 'Order':
        """
        Add a new order.

        Args:
            order: Order without identity

        Returns:
            The same order carrying its assigned identity

        Raises:
            OrderPersistenceError: If the order could not be written
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional['Order']:
        """Get order by ID with its items"""
        pass


class IUriComposer(ABC):
    """Resolves stored picture references into public absolute URIs"""

    @abstractmethod
    def compose_picture_uri(self, raw_uri: str) -> str:
        pass


class IReservationPublisher(ABC):
    """Publishes new orders to the reservation queue"""

    @abstractmethod
    async def publish(self, order: 'Order') -> str:
        """
        Publish a reservation message for a persisted order.

        Returns:
            Queue-assigned message id

        Raises:
            QueueSendError: If the message could not be published
        """
        pass


class IDeliveryNotifier(ABC):
    """Notifies the delivery-scheduling service of new orders"""

    @abstractmethod
    async def notify(self, order: 'Order') -> int:
        """
        Send the delivery webhook for a persisted order.

        Returns:
            HTTP status code of the webhook response

        Raises:
            WebhookSendError: If the call failed or was rejected
        """
        pass
