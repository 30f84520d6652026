"""Voucher validation and discount calculation."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel

from dinedesk.services.pricing.models import Voucher, VoucherType


class VoucherCheck(BaseModel):
    """Result of checking a voucher code against a subtotal."""

    voucher: Optional[Voucher] = None
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.voucher is not None


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def check_voucher(
    code: Optional[str],
    vouchers: Iterable[Voucher],
    subtotal: Decimal,
    now: Optional[datetime] = None,
) -> VoucherCheck:
    """
    Check a voucher code.

    Args:
        code: Code as typed by the customer (case-insensitive)
        vouchers: Tenant vouchers; inactive ones are ignored
        subtotal: Order subtotal the voucher would apply to
        now: Evaluation time, defaults to the current UTC time

    Returns:
        VoucherCheck with the matched voucher, or a user-facing error
    """
    wanted = (code or "").strip().upper()
    if not wanted:
        return VoucherCheck(error="Please enter a voucher code")

    voucher = next(
        (v for v in vouchers if v.active and v.code.strip().upper() == wanted),
        None,
    )
    if voucher is None:
        return VoucherCheck(error="Invalid voucher code")

    now = _naive_utc(now or datetime.now(timezone.utc))
    if voucher.expiry_date is not None and now > _naive_utc(voucher.expiry_date):
        return VoucherCheck(error="Voucher has expired")

    if voucher.usage_limit is not None and voucher.used_count >= voucher.usage_limit:
        return VoucherCheck(error="Voucher usage limit reached")

    if subtotal < voucher.min_order:
        return VoucherCheck(error=f"Minimum order value is {voucher.min_order:.2f}")

    return VoucherCheck(voucher=voucher)


def validate_voucher(
    code: Optional[str],
    vouchers: Iterable[Voucher],
    subtotal: Decimal,
    now: Optional[datetime] = None,
) -> Optional[Voucher]:
    """Return the matching usable voucher, or None."""
    return check_voucher(code, vouchers, subtotal, now=now).voucher


def compute_discount(voucher: Voucher, subtotal: Decimal) -> Decimal:
    """Discount for a voucher, bounded by its cap and by the subtotal."""
    if subtotal <= 0 or subtotal < voucher.min_order:
        return Decimal("0")

    if voucher.type == VoucherType.PERCENTAGE:
        discount = subtotal * voucher.value / Decimal(100)
    else:
        discount = voucher.value

    if voucher.max_discount is not None:
        discount = min(discount, voucher.max_discount)
    return max(min(discount, subtotal), Decimal("0"))
