"""Delivery zone API endpoints."""
import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.core.dependencies import get_tenant
from dinedesk.db.database import get_db
from dinedesk.services.persistence.zones import DeliveryZoneStore
from dinedesk.services.pricing.delivery import DeliveryQuote, quote_delivery
from dinedesk.services.pricing.models import DeliveryZone

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/{tenant}/zones", response_model=List[DeliveryZone])
async def list_zones(
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """List a tenant's delivery zones in resolution order."""
    return await DeliveryZoneStore(db).list_zones(tenant)


@router.post("/api/{tenant}/zones", response_model=DeliveryZone, status_code=201)
async def create_zone(
    zone: DeliveryZone,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Create a delivery zone."""
    created = await DeliveryZoneStore(db).create_zone(tenant, zone)
    logger.info(f"[ZONES] Created zone {created.name!r} for tenant {tenant}: {created.postcodes}")
    return created


@router.get("/api/{tenant}/zones/resolve", response_model=DeliveryQuote)
async def resolve_zone(
    postcode: str,
    subtotal: Decimal = Decimal("0"),
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delivery availability and fee for a postcode."""
    zones = await DeliveryZoneStore(db).list_zones(tenant)
    return quote_delivery(postcode, zones, subtotal)


@router.put("/api/{tenant}/zones/{zone_id}", response_model=DeliveryZone)
async def update_zone(
    zone_id: int,
    zone: DeliveryZone,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Edit a delivery zone without moving it in resolution order."""
    updated = await DeliveryZoneStore(db).update_zone(tenant, zone_id, zone)
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Zone {zone_id} not found")
    logger.info(f"[ZONES] Updated zone {updated.name!r} for tenant {tenant}: {updated.postcodes}")
    return updated


@router.delete("/api/{tenant}/zones/{zone_id}", status_code=204)
async def delete_zone(
    zone_id: int,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delete a delivery zone."""
    if not await DeliveryZoneStore(db).delete_zone(tenant, zone_id):
        raise HTTPException(status_code=404, detail=f"Zone {zone_id} not found")
