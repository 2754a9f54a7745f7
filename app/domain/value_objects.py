"""
Value Objects for the ordering domain.

Value objects are immutable, self-validating, and compared by value.
They are copied into an Order at checkout so later edits elsewhere
(address book, catalog) never change a historical order.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    """
    Shipping destination value object.

    Opaque to the ordering flow beyond being attached to the order and
    forwarded to the delivery webhook.
    """

    street: str
    city: str
    state: str
    country: str
    zip_code: str

    def __post_init__(self):
        for name in ("street", "city", "country", "zip_code"):
            if not getattr(self, name):
                raise ValueError(f"Address {name} cannot be empty")

    def to_payload(self) -> dict:
        """Wire representation used by the delivery webhook"""
        return {
            "Street": self.street,
            "City": self.city,
            "State": self.state,
            "Country": self.country,
            "ZipCode": self.zip_code,
        }

    def __repr__(self) -> str:
        # City/country only - never put full addresses in logs
        return f"Address(city='{self.city}', country='{self.country}')"


@dataclass(frozen=True)
class CatalogItemOrdered:
    """
    Snapshot of a catalog item at purchase time.

    Lives only inside an OrderItem. Holds the resolved (absolute)
    picture URI, not the raw catalog reference.
    """

    catalog_item_id: int
    product_name: str
    picture_uri: str

    def __post_init__(self):
        if self.catalog_item_id <= 0:
            raise ValueError(
                f"catalog_item_id must be > 0, got {self.catalog_item_id}"
            )
        if not self.product_name:
            raise ValueError("product_name cannot be empty")

    def __repr__(self) -> str:
        return (
            f"CatalogItemOrdered(id={self.catalog_item_id}, "
            f"name='{self.product_name}')"
        )
