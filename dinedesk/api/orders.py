"""Order history API endpoints."""
import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.core.dependencies import get_tenant
from dinedesk.db.database import get_db
from dinedesk.db.models import Order
from dinedesk.services.persistence.orders import OrderPersistenceService

router = APIRouter()
logger = logging.getLogger(__name__)


class OrderItemResponse(BaseModel):
    """Order item response model."""
    id: int
    item_name: str
    unit_price: Decimal
    quantity: int
    addons: list[dict] | None = None
    special_instructions: str | None = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Order response model."""
    id: int
    order_number: str | None = None
    status: str
    order_type: str
    fulfilment_type: str | None = None
    scheduled_time: str | None = None
    customer_name: str | None = None
    postcode: str | None = None
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    discount: Decimal
    total: Decimal
    voucher_code: str | None = None
    payment_method: str
    created_at: str
    items: List[OrderItemResponse] = []

    @classmethod
    def from_record(cls, order: Order) -> "OrderResponse":
        """Build the response from an ORM order with items loaded."""
        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            order_type=order.order_type,
            fulfilment_type=order.fulfilment_type,
            scheduled_time=order.scheduled_time.isoformat() if order.scheduled_time else None,
            customer_name=order.customer_name,
            postcode=order.postcode,
            subtotal=order.subtotal,
            tax=order.tax,
            delivery_fee=order.delivery_fee,
            discount=order.discount,
            total=order.total,
            voucher_code=order.voucher_code,
            payment_method=order.payment_method,
            created_at=order.created_at.isoformat() if order.created_at else "",
            items=[OrderItemResponse.model_validate(item) for item in order.items],
        )


@router.get("/api/{tenant}/orders", response_model=List[OrderResponse])
async def get_order_history(
    request: Request,
    limit: int = 100,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Get a tenant's most recent orders."""
    logger.info(
        f"[ORDERS HISTORY] Request received - tenant: {tenant}, limit: {limit}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        orders = await OrderPersistenceService(db).list_orders(tenant, limit=limit)
        logger.info(f"[ORDERS HISTORY] Found {len(orders)} orders for tenant {tenant}")
        return [OrderResponse.from_record(order) for order in orders]
    except Exception as e:
        logger.error(
            f"[ORDERS HISTORY] Error fetching order history - "
            f"tenant: {tenant}, limit: {limit}, Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error fetching order history: {str(e)}")


@router.get("/api/{tenant}/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Get one order by ID."""
    order: Optional[Order] = await OrderPersistenceService(db).get_order_by_id(tenant, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return OrderResponse.from_record(order)
