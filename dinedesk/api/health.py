"""Health check endpoint."""
import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.core.dependencies import get_restaurant_repository
from dinedesk.db.database import get_db
from dinedesk.services.restaurant.repository import RestaurantRepository

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(
    request: Request,
    db: AsyncSession = Depends(get_db),
    restaurant_repository: RestaurantRepository = Depends(get_restaurant_repository),
):
    """Report database reachability and how many tenants are configured."""
    logger.debug(
        f"[HEALTH] Health check requested - Client: {request.client.host if request.client else 'unknown'}"
    )
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"[HEALTH] Database check failed - {type(e).__name__}: {str(e)}")
        database = "unavailable"

    tenants = await restaurant_repository.list_tenants()
    return {
        "status": "healthy" if database == "ok" else "degraded",
        "database": database,
        "tenants": len(tenants),
    }
