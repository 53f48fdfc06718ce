"""Report router."""

from typing import Optional

from fastapi import APIRouter, Depends

from app.core.dependencies import get_registry, get_tenant_id, require_tenant_id, tenant_session
from app.db.tenant_registry import TenantStoreRegistry
from app.schemas.report import CommitmentStats
from app.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/stats", response_model=CommitmentStats)
async def commitment_stats(
    tenant_id: Optional[int] = Depends(get_tenant_id),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """Commitment counts per status and total amounts for one company."""
    tenant_id = require_tenant_id(tenant_id)

    async with tenant_session(registry, tenant_id) as tenant_db:
        return await ReportService(tenant_db).commitment_stats()
