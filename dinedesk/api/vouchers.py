"""Voucher API endpoints."""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.core.dependencies import get_tenant
from dinedesk.db.database import get_db
from dinedesk.services.persistence.vouchers import VoucherStore
from dinedesk.services.pricing.models import Voucher, VoucherType
from dinedesk.services.pricing.vouchers import check_voucher, compute_discount

router = APIRouter()
logger = logging.getLogger(__name__)


class VoucherRequest(BaseModel):
    """Admin-editable voucher fields; id and redemption count are server-owned."""
    code: str = Field(min_length=1)
    type: VoucherType
    value: Decimal = Field(ge=0)
    min_order: Decimal = Field(default=Decimal("0"), ge=0)
    max_discount: Optional[Decimal] = Field(default=None, ge=0)
    expiry_date: Optional[datetime] = None
    active: bool = True
    usage_limit: Optional[int] = Field(default=None, ge=0)

    def to_voucher(self) -> Voucher:
        return Voucher(**self.model_dump())


class VoucherValidationRequest(BaseModel):
    """Voucher code typed at checkout plus the current subtotal."""
    code: str
    subtotal: Decimal


class VoucherValidationResponse(BaseModel):
    """Voucher check result."""
    valid: bool
    code: Optional[str] = None
    discount: Decimal = Decimal("0")
    error: Optional[str] = None


@router.get("/api/{tenant}/vouchers", response_model=List[Voucher])
async def list_vouchers(
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """List a tenant's vouchers."""
    return await VoucherStore(db).list_vouchers(tenant)


@router.post("/api/{tenant}/vouchers", response_model=Voucher, status_code=201)
async def create_voucher(
    voucher: VoucherRequest,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Create a voucher."""
    try:
        created = await VoucherStore(db).create_voucher(tenant, voucher.to_voucher())
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    logger.info(f"[VOUCHERS] Created voucher {created.code} for tenant {tenant}")
    return created


@router.post("/api/{tenant}/vouchers/validate", response_model=VoucherValidationResponse)
async def validate_voucher(
    validation: VoucherValidationRequest,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Check a voucher code against a subtotal and report the discount."""
    vouchers = await VoucherStore(db).list_vouchers(tenant, active_only=True)
    check = check_voucher(validation.code, vouchers, validation.subtotal)
    if not check.valid:
        logger.debug(f"[VOUCHERS] Rejected code for tenant {tenant}: {check.error}")
        return VoucherValidationResponse(valid=False, error=check.error)
    return VoucherValidationResponse(
        valid=True,
        code=check.voucher.code,
        discount=compute_discount(check.voucher, validation.subtotal),
    )


@router.put("/api/{tenant}/vouchers/{voucher_id}", response_model=Voucher)
async def update_voucher(
    voucher_id: int,
    voucher: VoucherRequest,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Edit a voucher. The redemption count is kept."""
    try:
        updated = await VoucherStore(db).update_voucher(tenant, voucher_id, voucher.to_voucher())
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Voucher {voucher_id} not found")
    logger.info(f"[VOUCHERS] Updated voucher {updated.code} for tenant {tenant}")
    return updated


@router.post("/api/{tenant}/vouchers/{voucher_id}/toggle", response_model=Voucher)
async def toggle_voucher(
    voucher_id: int,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Flip a voucher between active and inactive."""
    store = VoucherStore(db)
    record = await store.get_voucher(tenant, voucher_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Voucher {voucher_id} not found")
    return await store.set_active(tenant, voucher_id, not record.active)


@router.delete("/api/{tenant}/vouchers/{voucher_id}", status_code=204)
async def delete_voucher(
    voucher_id: int,
    tenant: str = Depends(get_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delete a voucher."""
    if not await VoucherStore(db).delete_voucher(tenant, voucher_id):
        raise HTTPException(status_code=404, detail=f"Voucher {voucher_id} not found")
