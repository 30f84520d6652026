"""FastAPI dependencies."""
from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.core.config import settings
from dinedesk.db.database import get_db
from dinedesk.services.checkout.service import CheckoutService
from dinedesk.services.restaurant.in_memory_restaurant import InMemoryRestaurantProvider
from dinedesk.services.restaurant.repository import RestaurantRepository

_restaurant_repository: Optional[RestaurantRepository] = None


def get_restaurant_repository() -> RestaurantRepository:
    """Get the shared restaurant repository instance."""
    global _restaurant_repository
    if _restaurant_repository is None:
        _restaurant_repository = RestaurantRepository(
            provider=InMemoryRestaurantProvider(restaurants_file=settings.restaurants_file)
        )
    return _restaurant_repository


async def get_tenant(
    tenant: str,
    restaurant_repository: RestaurantRepository = Depends(get_restaurant_repository),
) -> str:
    """Resolve the ``{tenant}`` path segment, 404 if unknown."""
    if await restaurant_repository.get_settings(tenant) is None:
        raise HTTPException(status_code=404, detail=f"Restaurant '{tenant}' not found")
    return tenant


def get_checkout_service(
    db: AsyncSession = Depends(get_db),
    restaurant_repository: RestaurantRepository = Depends(get_restaurant_repository),
) -> CheckoutService:
    """Get a checkout service bound to the request's session."""
    return CheckoutService(db=db, restaurant_repository=restaurant_repository)
