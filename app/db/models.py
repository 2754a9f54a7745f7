"""
SQLAlchemy ORM models for database tables.

Baskets and catalog items are owned by other parts of the shop - checkout
only reads them. Orders and order items are written once at checkout.
"""
from sqlalchemy import Column, String, Text, DateTime, Index, ForeignKey, Integer, Numeric
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class CatalogItemModel(Base):
    """Catalog items table - product reference data"""
    __tablename__ = "catalog_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    price = Column(Numeric(18, 2), nullable=False)
    picture_uri = Column(Text)  # Raw reference, resolved by UriComposer


class BasketModel(Base):
    """Baskets table - one open basket per buyer"""
    __tablename__ = "baskets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    buyer_id = Column(String(256), nullable=False)

    __table_args__ = (
        Index('idx_baskets_buyer_id', 'buyer_id'),
    )

    # Relationships
    items = relationship(
        "BasketItemModel",
        back_populates="basket",
        cascade="all, delete-orphan",
        order_by="BasketItemModel.id",
    )


class BasketItemModel(Base):
    """
    Basket line items.

    unit_price is captured when the item is added to the basket and is the
    price the order is placed at.
    """
    __tablename__ = "basket_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    basket_id = Column(Integer, ForeignKey('baskets.id', ondelete='CASCADE'), nullable=False)
    catalog_item_id = Column(Integer, nullable=False)
    unit_price = Column(Numeric(18, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        Index('idx_basket_items_basket_id', 'basket_id'),
    )

    basket = relationship("BasketModel", back_populates="items")


class OrderModel(Base):
    """
    Orders table.

    The shipping address is stored inline (owned value object) so later
    address-book edits never change an existing order.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    buyer_id = Column(String(256), nullable=False)
    order_date = Column(DateTime(timezone=True), nullable=False)

    # Address (owned)
    ship_to_street = Column(String(180), nullable=False)
    ship_to_city = Column(String(100), nullable=False)
    ship_to_state = Column(String(60))
    ship_to_country = Column(String(90), nullable=False)
    ship_to_zip_code = Column(String(18), nullable=False)

    __table_args__ = (
        Index('idx_orders_buyer_id', 'buyer_id'),
    )

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )


class OrderItemModel(Base):
    """
    Order items - one row per line, with the catalog snapshot inline.

    position preserves checkout order (0, 1, 2...).
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False)

    # CatalogItemOrdered (owned)
    catalog_item_id = Column(Integer, nullable=False)
    product_name = Column(String(50), nullable=False)
    picture_uri = Column(Text)

    unit_price = Column(Numeric(18, 2), nullable=False)
    units = Column(Integer, nullable=False)

    __table_args__ = (
        Index('idx_order_items_order_id', 'order_id'),
    )

    order = relationship("OrderModel", back_populates="items")
