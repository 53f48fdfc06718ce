"""
Payment router - API endpoints for payments.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import (
    get_current_user,
    get_registry,
    get_tenant_id,
    require_tenant_id,
    resolve_tenant_id,
    tenant_session,
)
from app.db.session import get_db
from app.db.tenant_registry import TenantStoreRegistry
from app.schemas.payment import PaymentCreate, PaymentListItem, PaymentRecorded
from app.schemas.user import TokenData
from app.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("", response_model=List[PaymentListItem])
async def list_payments(
    tenant_id: Optional[int] = Depends(get_tenant_id),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """List payments with the number and description of the commitment each one settles."""
    tenant_id = require_tenant_id(tenant_id)

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = PaymentService(tenant_db)
        return await service.list_payments()


@router.post("", response_model=PaymentRecorded, status_code=status.HTTP_201_CREATED)
async def record_payment(
    data: PaymentCreate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """
    Record a payment against a commitment.

    The commitment is marked completed once its payments cover its amount.
    """
    tenant_id = require_tenant_id(await resolve_tenant_id(db, current_user, data.company_id))

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = PaymentService(tenant_db)
        return await service.record_payment(data)
