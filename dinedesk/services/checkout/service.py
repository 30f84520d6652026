"""Checkout orchestration: pricing a cart and placing the order."""
import logging
import random
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.services.checkout.models import (
    CheckoutError,
    CheckoutQuote,
    CheckoutRequest,
    PlacedOrder,
)
from dinedesk.services.email.greeting import GREETING_MESSAGES, GreetingService
from dinedesk.services.persistence.orders import OrderPersistenceService
from dinedesk.services.persistence.vouchers import VoucherStore
from dinedesk.services.persistence.zones import DeliveryZoneStore
from dinedesk.services.pricing.delivery import quote_delivery
from dinedesk.services.pricing.models import Addon, OrderItem, OrderType, Voucher
from dinedesk.services.pricing.time_slots import slots_for_date
from dinedesk.services.pricing.totals import compute_subtotal, compute_total
from dinedesk.services.pricing.vouchers import check_voucher, compute_discount
from dinedesk.services.restaurant.base import RestaurantSettings
from dinedesk.services.restaurant.repository import RestaurantRepository

logger = logging.getLogger(__name__)

USAGE_LIMIT_ERROR = "Voucher usage limit reached"


def _local_wall_clock(now: datetime) -> datetime:
    """Naive local time, the clock opening hours and slots are written in."""
    if now.tzinfo is None:
        return now
    return now.astimezone().replace(tzinfo=None)


class CheckoutService:
    """Prices carts and places orders for a tenant."""

    def __init__(self, db: AsyncSession, restaurant_repository: RestaurantRepository):
        self.db = db
        self.restaurants = restaurant_repository
        self.vouchers = VoucherStore(db)
        self.zones = DeliveryZoneStore(db)
        self.orders = OrderPersistenceService(db)
        self.greetings = GreetingService(db)

    async def quote(
        self, tenant: str, request: CheckoutRequest, now: Optional[datetime] = None
    ) -> CheckoutQuote:
        """
        Price a cart without placing it.

        Delivery and voucher problems are reported on the quote. Items that
        are not on the tenant's menu raise CheckoutError.
        """
        now = now or datetime.now(timezone.utc)
        restaurant = await self.restaurants.require_settings(tenant)
        items = await self._menu_priced_items(tenant, request.items)
        quote, _ = await self._price(tenant, restaurant, request, items, now)
        return quote

    async def _menu_priced_items(self, tenant: str, items: List[OrderItem]) -> List[OrderItem]:
        """Replace client-sent prices with the tenant's menu prices."""
        priced = []
        for item in items:
            menu_item = await self.restaurants.get_menu_item(tenant, item.name)
            if menu_item is None:
                raise CheckoutError(f"{item.name} is not on the menu")

            menu_addons = {addon.name.lower(): addon for addon in menu_item.addons}
            addons = []
            for addon in item.selected_addons:
                menu_addon = menu_addons.get(addon.name.lower().strip())
                if menu_addon is None:
                    raise CheckoutError(f"{addon.name} is not available for {menu_item.name}")
                addons.append(Addon(name=menu_addon.name, price=menu_addon.price))

            priced.append(
                item.model_copy(
                    update={
                        "name": menu_item.name,
                        "price": menu_item.price,
                        "selected_addons": addons,
                    }
                )
            )
        return priced

    async def _price(
        self,
        tenant: str,
        restaurant: RestaurantSettings,
        request: CheckoutRequest,
        items: List[OrderItem],
        now: datetime,
    ) -> Tuple[CheckoutQuote, Optional[Voucher]]:
        subtotal = compute_subtotal(items)

        delivery_fee = None
        delivery = None
        if request.requires_delivery:
            delivery = quote_delivery(
                request.postcode, await self.zones.list_zones(tenant), subtotal
            )
            delivery_fee = delivery.fee if delivery.available else None

        voucher = None
        voucher_error = None
        discount = None
        if request.voucher_code and request.voucher_code.strip():
            check = check_voucher(
                request.voucher_code,
                await self.vouchers.list_vouchers(tenant, active_only=True),
                subtotal,
                now=now,
            )
            voucher, voucher_error = check.voucher, check.error
            if voucher is not None:
                discount = compute_discount(voucher, subtotal)

        tax_rate = RestaurantRepository.tax_rate(restaurant)
        totals = compute_total(items, tax_rate, delivery_fee, discount)
        quote = CheckoutQuote(
            subtotal=totals.subtotal,
            tax=totals.tax,
            delivery_fee=delivery_fee or 0,
            discount=discount or 0,
            total=totals.total,
            tax_rate=tax_rate,
            delivery_available=delivery.available if delivery else None,
            delivery_time=delivery.delivery_time if delivery else None,
            delivery_error=delivery.error if delivery else None,
            voucher_code=voucher.code if voucher else None,
            voucher_error=voucher_error,
            item_count=sum(item.quantity for item in items),
        )
        return quote, voucher

    def _check_order_type(self, restaurant: RestaurantSettings, order_type: OrderType) -> None:
        enabled = {
            OrderType.DELIVERY: restaurant.order_types.delivery_enabled,
            OrderType.COLLECTION: restaurant.order_types.collection_enabled,
            OrderType.ADVANCE: restaurant.order_types.advance_order_enabled,
        }
        if not enabled[order_type]:
            raise CheckoutError(f"{order_type.value.title()} orders are not available")

    def _scheduled_time(
        self, restaurant: RestaurantSettings, request: CheckoutRequest, now: datetime
    ) -> datetime:
        if request.scheduled_date is None or not request.scheduled_time:
            raise CheckoutError("Please select a date and time for your advance order")

        slots = slots_for_date(
            restaurant.opening_hours,
            request.scheduled_date,
            restaurant.time_slot_interval,
        )
        slot = request.scheduled_time.strip()
        if slot not in slots:
            raise CheckoutError("Please choose an available time slot")

        scheduled = datetime.combine(
            request.scheduled_date, datetime.strptime(slot, "%H:%M").time()
        )
        if scheduled <= _local_wall_clock(now):
            raise CheckoutError("Scheduled time must be in the future")
        return scheduled

    async def _greeting(self, tenant: str) -> str:
        try:
            return await self.greetings.greeting_for(tenant)
        except Exception as e:
            # The order is already committed; a counter failure must not fail it
            logger.error(
                f"[CHECKOUT] Greeting counter failed for tenant {tenant} - "
                f"{type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            await self.db.rollback()
            return random.choice(GREETING_MESSAGES)

    async def place_order(
        self, tenant: str, request: CheckoutRequest, now: Optional[datetime] = None
    ) -> PlacedOrder:
        """
        Validate and store an order.

        ``now`` is the evaluation instant. Naive values are read as UTC for
        voucher expiry and as local time for the slot check; the default is
        the current aware UTC time.

        Raises:
            CheckoutError: if the order cannot be accepted as submitted
            TenantNotFoundError: if the tenant is unknown
        """
        now = now or datetime.now(timezone.utc)
        restaurant = await self.restaurants.require_settings(tenant)

        if not request.items:
            raise CheckoutError("Your order is empty")
        self._check_order_type(restaurant, request.order_type)

        scheduled_time = None
        if request.order_type == OrderType.ADVANCE:
            scheduled_time = self._scheduled_time(restaurant, request, now)

        items = await self._menu_priced_items(tenant, request.items)
        quote, voucher = await self._price(tenant, restaurant, request, items, now)
        if request.requires_delivery and not quote.delivery_available:
            raise CheckoutError(quote.delivery_error)
        if quote.voucher_error:
            raise CheckoutError(quote.voucher_error)

        prefix = (
            restaurant.advance_order_prefix
            if request.order_type == OrderType.ADVANCE
            else restaurant.order_prefix
        )
        order = await self.orders.create_order(
            tenant,
            {
                "order_type": request.order_type.value,
                "fulfilment_type": (
                    request.fulfilment_type.value
                    if request.order_type == OrderType.ADVANCE
                    else None
                ),
                "scheduled_time": scheduled_time,
                "customer_name": request.customer_name,
                "customer_phone": request.customer_phone,
                "customer_email": request.customer_email,
                "address": request.address,
                "postcode": request.postcode.strip().upper() if request.postcode else None,
                "subtotal": quote.subtotal,
                "tax": quote.tax,
                "delivery_fee": quote.delivery_fee,
                "discount": quote.discount,
                "total": quote.total,
                "voucher_code": quote.voucher_code,
                "payment_method": request.payment_method.value,
            },
            items,
            order_prefix=prefix,
            commit=False,
        )
        if voucher is not None and not await self.vouchers.increment_usage(
            tenant, voucher.id, commit=False
        ):
            # Redeemed up to its limit since it was checked
            await self.db.rollback()
            raise CheckoutError(USAGE_LIMIT_ERROR)
        await self.db.commit()

        logger.info(
            f"[CHECKOUT] Order {order.order_number} placed for tenant {tenant} - "
            f"type: {order.order_type}, total: {quote.total:.2f}"
        )

        greeting = await self._greeting(tenant)
        stored = await self.orders.get_order_by_id(tenant, order.id)
        return PlacedOrder(order=stored, greeting=greeting)
