"""Delivery zone persistence service."""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.db.models import DeliveryZone as DeliveryZoneRecord
from dinedesk.services.pricing.models import DeliveryZone


def _prefixes(postcodes: List[str]) -> List[str]:
    return [prefix.strip().upper() for prefix in postcodes if prefix.strip()]


class DeliveryZoneStore:
    """Service for persisting tenant delivery zones."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_zones(self, tenant_id: str) -> List[DeliveryZone]:
        """Get a tenant's zones in resolution order (oldest first)."""
        result = await self.db.execute(
            select(DeliveryZoneRecord)
            .where(DeliveryZoneRecord.tenant_id == tenant_id)
            .order_by(DeliveryZoneRecord.id)
            .execution_options(populate_existing=True)
        )
        return [DeliveryZone.model_validate(row) for row in result.scalars().all()]

    async def get_zone(self, tenant_id: str, zone_id: int) -> Optional[DeliveryZoneRecord]:
        """Get a delivery zone record by ID."""
        result = await self.db.execute(
            select(DeliveryZoneRecord).where(
                DeliveryZoneRecord.tenant_id == tenant_id,
                DeliveryZoneRecord.id == zone_id,
            )
        )
        return result.scalar_one_or_none()

    async def create_zone(self, tenant_id: str, zone: DeliveryZone) -> DeliveryZone:
        """Create a delivery zone."""
        record = DeliveryZoneRecord(
            tenant_id=tenant_id,
            name=zone.name,
            postcodes=_prefixes(zone.postcodes),
            delivery_fee=zone.delivery_fee,
            min_order=zone.min_order,
            delivery_time=zone.delivery_time,
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return DeliveryZone.model_validate(record)

    async def update_zone(
        self, tenant_id: str, zone_id: int, zone: DeliveryZone
    ) -> Optional[DeliveryZone]:
        """Edit a zone in place, keeping its position in resolution order."""
        record = await self.get_zone(tenant_id, zone_id)
        if record is None:
            return None
        record.name = zone.name
        record.postcodes = _prefixes(zone.postcodes)
        record.delivery_fee = zone.delivery_fee
        record.min_order = zone.min_order
        record.delivery_time = zone.delivery_time
        await self.db.commit()
        await self.db.refresh(record)
        return DeliveryZone.model_validate(record)

    async def delete_zone(self, tenant_id: str, zone_id: int) -> bool:
        """Delete a delivery zone."""
        record = await self.get_zone(tenant_id, zone_id)
        if not record:
            return False
        await self.db.delete(record)
        await self.db.commit()
        return True
