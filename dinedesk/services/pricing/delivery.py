"""Delivery zone resolution."""
import re
from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel

from dinedesk.services.pricing.models import DeliveryZone

_WHITESPACE = re.compile(r"\s+")

NO_POSTCODE_ERROR = "Please enter a postcode"
NO_ZONE_ERROR = "Delivery not available to this postcode"


class DeliveryQuote(BaseModel):
    """Outcome of a delivery lookup for checkout."""

    available: bool
    fee: Decimal = Decimal("0")
    zone: Optional[DeliveryZone] = None
    delivery_time: Optional[int] = None
    error: Optional[str] = None


def normalize_postcode(postcode: Optional[str]) -> str:
    """Upper-case a postcode and strip all whitespace."""
    return _WHITESPACE.sub("", postcode or "").upper()


def find_zone(
    postcode: Optional[str], zones: Iterable[DeliveryZone]
) -> Optional[DeliveryZone]:
    """Return the first zone with a prefix the postcode starts with."""
    normalized = normalize_postcode(postcode)
    if not normalized:
        return None

    for zone in zones:
        for prefix in zone.postcodes:
            normalized_prefix = normalize_postcode(prefix)
            if normalized_prefix and normalized.startswith(normalized_prefix):
                return zone
    return None


def resolve_fee(postcode: Optional[str], zones: Iterable[DeliveryZone]) -> Decimal:
    """
    Delivery fee for a postcode.

    Returns 0 when no zone matches. Callers must not read that as free
    delivery; use quote_delivery to tell the two apart.
    """
    zone = find_zone(postcode, zones)
    return zone.delivery_fee if zone else Decimal("0")


def quote_delivery(
    postcode: Optional[str],
    zones: Iterable[DeliveryZone],
    subtotal: Decimal,
) -> DeliveryQuote:
    """Resolve delivery availability, fee and zone minimum order."""
    if not normalize_postcode(postcode):
        return DeliveryQuote(available=False, error=NO_POSTCODE_ERROR)

    zone = find_zone(postcode, zones)
    if zone is None:
        return DeliveryQuote(available=False, error=NO_ZONE_ERROR)

    if subtotal < zone.min_order:
        return DeliveryQuote(
            available=False,
            zone=zone,
            error=f"Minimum order value for this area is {zone.min_order:.2f}",
        )

    return DeliveryQuote(
        available=True,
        fee=zone.delivery_fee,
        zone=zone,
        delivery_time=zone.delivery_time,
    )
