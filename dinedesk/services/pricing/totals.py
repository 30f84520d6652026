"""Order total calculation."""
from decimal import Decimal
from typing import Iterable, Optional

from dinedesk.services.pricing.models import OrderItem, OrderTotals


def _amount(value: Optional[Decimal]) -> Decimal:
    return value if value is not None else Decimal("0")


def line_total(item: OrderItem) -> Decimal:
    """Price of one cart line including its addons."""
    unit = _amount(item.price) + sum(
        (_amount(addon.price) for addon in item.selected_addons), Decimal("0")
    )
    return unit * item.quantity


def compute_subtotal(items: Iterable[OrderItem]) -> Decimal:
    """Sum of all cart lines."""
    return sum((line_total(item) for item in items), Decimal("0"))


def compute_total(
    items: Iterable[OrderItem],
    tax_rate: Decimal,
    delivery_fee: Decimal,
    discount: Decimal,
) -> OrderTotals:
    """
    Compose subtotal, tax, delivery fee and discount into the payable total.

    tax_rate is a fraction (0.2 for 20%). Nothing is rounded here and the
    total is not clamped at zero.
    """
    subtotal = compute_subtotal(items)
    tax = subtotal * _amount(tax_rate)
    total = subtotal + tax + _amount(delivery_fee) - _amount(discount)
    return OrderTotals(subtotal=subtotal, tax=tax, total=total)
