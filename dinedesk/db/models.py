"""Database models."""
from datetime import datetime
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class DeliveryZone(Base):
    """Delivery zone model."""

    __tablename__ = "delivery_zones"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    postcodes = Column(JSON, nullable=False, default=list)  # List of prefix strings
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    min_order = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_time = Column(Integer, nullable=False, default=30)  # minutes
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Voucher(Base):
    """Voucher model."""

    __tablename__ = "vouchers"
    __table_args__ = (UniqueConstraint("tenant_id", "code", name="uq_vouchers_tenant_code"),)

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    code = Column(String, nullable=False)  # Stored upper case
    type = Column(String, nullable=False)  # amount, percentage
    value = Column(Numeric(10, 2), nullable=False)
    min_order = Column(Numeric(10, 2), nullable=False, default=0)
    max_discount = Column(Numeric(10, 2), nullable=True)
    expiry_date = Column(DateTime, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    usage_limit = Column(Integer, nullable=True)
    used_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Order(Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    order_number = Column(String, index=True, nullable=True)
    status = Column(String, default="pending", nullable=False)
    order_type = Column(String, nullable=False)  # delivery, collection, advance
    fulfilment_type = Column(String, nullable=True)  # advance orders only
    scheduled_time = Column(DateTime, nullable=True)
    customer_name = Column(String, nullable=True)
    customer_phone = Column(String, nullable=True)
    customer_email = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    postcode = Column(String, nullable=True)
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)
    voucher_code = Column(String, nullable=True)
    payment_method = Column(String, nullable=False, default="cash")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    """Order item model."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    item_name = Column(String, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False, default=0)
    quantity = Column(Integer, default=1, nullable=False)
    addons = Column(JSON, nullable=True)  # List of {"name", "price"}
    special_instructions = Column(Text, nullable=True)

    # Relationships
    order = relationship("Order", back_populates="items")


class EmailMessageCounter(Base):
    """Per-tenant counter driving the rotating email greeting."""

    __tablename__ = "tenant_email_message_counter"

    tenant_id = Column(String, primary_key=True)
    message_counter = Column(Integer, nullable=False, default=0)
