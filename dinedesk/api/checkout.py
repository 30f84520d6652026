"""Checkout API endpoints."""
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from dinedesk.api.orders import OrderResponse
from dinedesk.core.dependencies import (
    get_checkout_service,
    get_restaurant_repository,
    get_tenant,
)
from dinedesk.services.checkout.models import CheckoutError, CheckoutQuote, CheckoutRequest
from dinedesk.services.checkout.service import CheckoutService
from dinedesk.services.pricing.time_slots import slots_for_date
from dinedesk.services.restaurant.repository import RestaurantRepository

router = APIRouter()
logger = logging.getLogger(__name__)


class TimeSlotsResponse(BaseModel):
    """Bookable advance-order slots for one date."""
    date: date
    interval: int
    slots: List[str]


class PlacedOrderResponse(BaseModel):
    """Response for a newly placed order."""
    order: OrderResponse
    greeting: str
    message: str


@router.get("/api/{tenant}/time-slots", response_model=TimeSlotsResponse)
async def get_time_slots(
    on_date: date = Query(..., alias="date"),
    tenant: str = Depends(get_tenant),
    restaurant_repository: RestaurantRepository = Depends(get_restaurant_repository),
):
    """List advance-order time slots for a date."""
    restaurant = await restaurant_repository.require_settings(tenant)
    slots = slots_for_date(restaurant.opening_hours, on_date, restaurant.time_slot_interval)
    logger.debug(f"[TIME SLOTS] tenant: {tenant}, date: {on_date}, {len(slots)} slots")
    return TimeSlotsResponse(date=on_date, interval=restaurant.time_slot_interval, slots=slots)


@router.post("/api/{tenant}/checkout/quote", response_model=CheckoutQuote)
async def quote_checkout(
    checkout: CheckoutRequest,
    tenant: str = Depends(get_tenant),
    checkout_service: CheckoutService = Depends(get_checkout_service),
):
    """Price a cart: subtotal, tax, delivery fee, voucher discount and total."""
    try:
        return await checkout_service.quote(tenant, checkout)
    except CheckoutError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/api/{tenant}/orders", response_model=PlacedOrderResponse, status_code=201)
async def place_order(
    request: Request,
    checkout: CheckoutRequest,
    tenant: str = Depends(get_tenant),
    checkout_service: CheckoutService = Depends(get_checkout_service),
):
    """Validate, price and store an order."""
    logger.info(
        f"[CHECKOUT] Order submitted - tenant: {tenant}, type: {checkout.order_type}, "
        f"items: {len(checkout.items)}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        placed = await checkout_service.place_order(tenant, checkout)
    except CheckoutError as e:
        logger.info(f"[CHECKOUT] Order rejected - tenant: {tenant}, reason: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(
            f"[CHECKOUT] Error placing order - tenant: {tenant}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail="Error placing order")

    return PlacedOrderResponse(
        order=OrderResponse.from_record(placed.order),
        greeting=placed.greeting,
        message=placed.confirmation_message,
    )
