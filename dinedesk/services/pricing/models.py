"""Checkout pricing models."""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class OrderType(str, Enum):
    """How the customer receives the order."""

    DELIVERY = "delivery"
    COLLECTION = "collection"
    ADVANCE = "advance"  # Scheduled for a later time slot

    def __str__(self) -> str:
        return self.value


class FulfilmentType(str, Enum):
    """Hand-over method for advance orders."""

    DELIVERY = "delivery"
    COLLECTION = "collection"

    def __str__(self) -> str:
        return self.value


class VoucherType(str, Enum):
    """Voucher discount kinds."""

    AMOUNT = "amount"  # Fixed amount off
    PERCENTAGE = "percentage"  # Percent of the subtotal

    def __str__(self) -> str:
        return self.value


class TimeMode(str, Enum):
    """Opening hours layout for a single day."""

    SINGLE = "single"
    SPLIT = "split"  # Morning and evening windows

    def __str__(self) -> str:
        return self.value


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    CASH = "cash"
    CARD = "card"
    VOUCHER = "voucher"

    def __str__(self) -> str:
        return self.value


class Addon(BaseModel):
    """Priced modifier attached to an item."""

    name: str
    price: Optional[Decimal] = Field(default=None, ge=0)


class OrderItem(BaseModel):
    """Cart line: menu item snapshot taken when it was added to the cart."""

    name: str
    price: Optional[Decimal] = Field(default=None, ge=0)
    quantity: int = Field(default=1, ge=1)
    selected_addons: List[Addon] = []
    special_instructions: Optional[str] = None


class DeliveryZone(BaseModel):
    """Postcode-prefix keyed delivery fee bucket."""

    id: Optional[int] = None
    name: str = ""
    postcodes: List[str] = []
    delivery_fee: Decimal = Field(default=Decimal("0"), ge=0)
    min_order: Decimal = Field(default=Decimal("0"), ge=0)
    delivery_time: int = 30  # minutes

    model_config = {"from_attributes": True}


class Voucher(BaseModel):
    """Discount voucher."""

    id: Optional[int] = None
    code: str
    type: VoucherType
    value: Decimal = Field(ge=0)
    min_order: Decimal = Field(default=Decimal("0"), ge=0)
    max_discount: Optional[Decimal] = Field(default=None, ge=0)
    expiry_date: Optional[datetime] = None
    active: bool = True
    usage_limit: Optional[int] = Field(default=None, ge=0)
    used_count: int = Field(default=0, ge=0)

    model_config = {"from_attributes": True}


class OpeningHoursPerDay(BaseModel):
    """Opening hours for one weekday.

    Times are ``HH:MM`` strings. Only the fields of the active ``time_mode``
    are meaningful; the admin UI can leave the others half filled.
    """

    closed: bool = False
    time_mode: TimeMode = TimeMode.SINGLE
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    morning_open: Optional[str] = None
    morning_close: Optional[str] = None
    evening_open: Optional[str] = None
    evening_close: Optional[str] = None


class OrderTotals(BaseModel):
    """Computed order amounts, unrounded."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal
