"""Voucher persistence service."""
from typing import List, Optional
from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.db.models import Voucher as VoucherRecord
from dinedesk.services.pricing.models import Voucher


class VoucherStore:
    """Service for persisting tenant vouchers."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_vouchers(self, tenant_id: str, active_only: bool = False) -> List[Voucher]:
        """Get a tenant's vouchers."""
        query = select(VoucherRecord).where(VoucherRecord.tenant_id == tenant_id)
        if active_only:
            query = query.where(VoucherRecord.active.is_(True))
        result = await self.db.execute(
            query.order_by(VoucherRecord.id).execution_options(populate_existing=True)
        )
        return [Voucher.model_validate(row) for row in result.scalars().all()]

    async def get_voucher(self, tenant_id: str, voucher_id: int) -> Optional[VoucherRecord]:
        """Get a voucher record by ID."""
        result = await self.db.execute(
            select(VoucherRecord).where(
                VoucherRecord.tenant_id == tenant_id,
                VoucherRecord.id == voucher_id,
            ).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _commit_code(self, record: VoucherRecord) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValueError(f"Voucher code '{record.code}' already exists") from e
        await self.db.refresh(record)

    async def create_voucher(self, tenant_id: str, voucher: Voucher) -> Voucher:
        """Create a voucher. Codes are unique per tenant, ignoring case."""
        record = VoucherRecord(
            tenant_id=tenant_id,
            code=voucher.code.strip().upper(),
            type=voucher.type.value,
            value=voucher.value,
            min_order=voucher.min_order,
            max_discount=voucher.max_discount,
            expiry_date=voucher.expiry_date,
            active=voucher.active,
            usage_limit=voucher.usage_limit,
            used_count=voucher.used_count,
        )
        self.db.add(record)
        await self._commit_code(record)
        return Voucher.model_validate(record)

    async def update_voucher(
        self, tenant_id: str, voucher_id: int, voucher: Voucher
    ) -> Optional[Voucher]:
        """
        Replace a voucher's editable fields.

        The redemption count is kept; raises ValueError when the new code
        clashes with another voucher of the tenant.
        """
        record = await self.get_voucher(tenant_id, voucher_id)
        if record is None:
            return None
        record.code = voucher.code.strip().upper()
        record.type = voucher.type.value
        record.value = voucher.value
        record.min_order = voucher.min_order
        record.max_discount = voucher.max_discount
        record.expiry_date = voucher.expiry_date
        record.active = voucher.active
        record.usage_limit = voucher.usage_limit
        await self._commit_code(record)
        return Voucher.model_validate(record)

    async def set_active(self, tenant_id: str, voucher_id: int, active: bool) -> Optional[Voucher]:
        """Enable or disable a voucher."""
        record = await self.get_voucher(tenant_id, voucher_id)
        if record:
            record.active = active
            await self.db.commit()
            await self.db.refresh(record)
            return Voucher.model_validate(record)
        return None

    async def delete_voucher(self, tenant_id: str, voucher_id: int) -> bool:
        """Delete a voucher."""
        record = await self.get_voucher(tenant_id, voucher_id)
        if not record:
            return False
        await self.db.delete(record)
        await self.db.commit()
        return True

    async def increment_usage(self, tenant_id: str, voucher_id: int, commit: bool = True) -> bool:
        """
        Count one redemption with a single conditional UPDATE.

        Returns False, changing nothing, when the voucher has already been
        used ``usage_limit`` times.
        """
        result = await self.db.execute(
            update(VoucherRecord)
            .where(
                VoucherRecord.tenant_id == tenant_id,
                VoucherRecord.id == voucher_id,
                or_(
                    VoucherRecord.usage_limit.is_(None),
                    VoucherRecord.used_count < VoucherRecord.usage_limit,
                ),
            )
            .values(used_count=VoucherRecord.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        if commit:
            await self.db.commit()
        return result.rowcount > 0
