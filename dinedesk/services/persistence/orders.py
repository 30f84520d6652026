"""Order persistence service."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Dict, Any, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.orm import selectinload

from dinedesk.db.models import Order, OrderItem
from dinedesk.services.pricing.models import OrderItem as CartItem

CENTS = Decimal("0.01")
MONEY_FIELDS = ("subtotal", "tax", "delivery_fee", "discount", "total")


def to_money(value: Optional[Decimal]) -> Decimal:
    """Round a currency amount to two places for storage."""
    return (value or Decimal("0")).quantize(CENTS, rounding=ROUND_HALF_UP)


class OrderPersistenceService:
    """Service for persisting order data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(
        self,
        tenant_id: str,
        order_data: Dict[str, Any],
        items: List[CartItem],
        order_prefix: str = "ORD",
        commit: bool = True,
    ) -> Order:
        """
        Create a new order with its items and assign the order number.

        Args:
            tenant_id: Owning tenant
            order_data: Order column values (amounts are rounded here,
                missing amounts are stored as 0.00)
            items: Cart lines to snapshot into order_items
            order_prefix: Prefix for the generated order number
            commit: Commit the session, or only flush so the caller can
                group further writes into the same transaction
        """
        values = dict(order_data)
        for field in MONEY_FIELDS:
            values[field] = to_money(values.get(field))

        order = Order(tenant_id=tenant_id, status="pending", **values)
        order.items = [
            OrderItem(
                item_name=item.name,
                unit_price=to_money(item.price),
                quantity=item.quantity,
                addons=[
                    {"name": addon.name, "price": str(to_money(addon.price))}
                    for addon in item.selected_addons
                ],
                special_instructions=item.special_instructions,
            )
            for item in items
        ]
        self.db.add(order)
        await self.db.flush()

        order.order_number = f"{order_prefix}-{order.id:04d}"
        if commit:
            await self.db.commit()
        else:
            await self.db.flush()
        return order

    async def get_order_by_id(self, tenant_id: str, order_id: int) -> Optional[Order]:
        """Get order by ID with items."""
        result = await self.db.execute(
            select(Order)
            .where(Order.tenant_id == tenant_id, Order.id == order_id)
            .options(selectinload(Order.items))
        )
        return result.scalar_one_or_none()

    async def list_orders(self, tenant_id: str, limit: int = 100) -> List[Order]:
        """Get a tenant's most recent orders with items."""
        result = await self.db.execute(
            select(Order)
            .where(Order.tenant_id == tenant_id)
            .options(selectinload(Order.items))
            .order_by(desc(Order.created_at), desc(Order.id))
            .limit(limit)
        )
        return list(result.scalars().all())
