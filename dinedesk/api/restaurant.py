"""Restaurant read-model API endpoints."""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from dinedesk.core.dependencies import get_restaurant_repository, get_tenant
from dinedesk.services.pricing.models import Addon, OpeningHoursPerDay
from dinedesk.services.pricing.opening_hours import RestaurantStatus, restaurant_status
from dinedesk.services.restaurant.base import OrderTypeSettings
from dinedesk.services.restaurant.repository import RestaurantRepository

router = APIRouter()
logger = logging.getLogger(__name__)


class MenuItemResponse(BaseModel):
    """Menu item response model."""
    name: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    category: Optional[str] = None
    addons: List[Addon] = []

    class Config:
        from_attributes = True


class MenuResponse(BaseModel):
    """Menu response model."""
    items: List[MenuItemResponse]
    categories: List[str] = []


class SettingsResponse(BaseModel):
    """Public restaurant settings."""
    name: str
    currency: str
    tax_rate: Decimal
    time_slot_interval: int
    order_types: OrderTypeSettings
    opening_hours: Dict[str, OpeningHoursPerDay]


@router.get("/api/{tenant}/menu", response_model=MenuResponse)
async def get_menu(
    request: Request,
    tenant: str = Depends(get_tenant),
    restaurant_repository: RestaurantRepository = Depends(get_restaurant_repository),
):
    """Get a tenant's menu."""
    logger.info(
        f"[MENU] Request received - tenant: {tenant}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    menu = await restaurant_repository.get_menu(tenant)
    logger.debug(f"[MENU] Menu loaded - {len(menu.items)} items, {len(menu.categories)} categories")
    return MenuResponse(
        items=[MenuItemResponse.model_validate(item) for item in menu.items],
        categories=menu.categories,
    )


@router.get("/api/{tenant}/settings", response_model=SettingsResponse)
async def get_settings(
    tenant: str = Depends(get_tenant),
    restaurant_repository: RestaurantRepository = Depends(get_restaurant_repository),
):
    """Get the settings checkout pages need."""
    restaurant = await restaurant_repository.require_settings(tenant)
    return SettingsResponse(
        name=restaurant.name,
        currency=restaurant.currency,
        tax_rate=RestaurantRepository.tax_rate(restaurant),
        time_slot_interval=restaurant.time_slot_interval,
        order_types=restaurant.order_types,
        opening_hours=restaurant.opening_hours,
    )


@router.get("/api/{tenant}/status", response_model=RestaurantStatus)
async def get_status(
    tenant: str = Depends(get_tenant),
    restaurant_repository: RestaurantRepository = Depends(get_restaurant_repository),
):
    """Whether the restaurant is open right now."""
    restaurant = await restaurant_repository.require_settings(tenant)
    return restaurant_status(restaurant.opening_hours, datetime.now())
