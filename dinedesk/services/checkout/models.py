"""Checkout request and result models."""
from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from dinedesk.db.models import Order
from dinedesk.services.pricing.models import (
    FulfilmentType,
    OrderItem,
    OrderType,
    PaymentMethod,
)


class CheckoutError(ValueError):
    """Checkout was rejected; the message is safe to show to the customer."""


class CheckoutRequest(BaseModel):
    """Cart and customer details submitted at checkout."""

    order_type: OrderType
    fulfilment_type: FulfilmentType = FulfilmentType.DELIVERY  # advance orders only
    items: List[OrderItem] = []
    postcode: Optional[str] = None
    voucher_code: Optional[str] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None  # HH:MM, one of the generated slots
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    address: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CASH

    @property
    def requires_delivery(self) -> bool:
        return self.order_type == OrderType.DELIVERY or (
            self.order_type == OrderType.ADVANCE
            and self.fulfilment_type == FulfilmentType.DELIVERY
        )


class CheckoutQuote(BaseModel):
    """Priced cart before submission."""

    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    total: Decimal
    tax_rate: Decimal
    delivery_available: Optional[bool] = None  # None when no delivery needed
    delivery_time: Optional[int] = None
    delivery_error: Optional[str] = None
    voucher_code: Optional[str] = None  # Set only when the voucher applies
    voucher_error: Optional[str] = None
    item_count: int = 0


class PlacedOrder:
    """Stored order plus the confirmation text shown to the customer."""

    def __init__(self, order: Order, greeting: str):
        self.order = order
        self.greeting = greeting

    @property
    def confirmation_message(self) -> str:
        return (
            f"{self.greeting} We have received your order "
            f"{self.order.order_number} and it is being processed."
        )
