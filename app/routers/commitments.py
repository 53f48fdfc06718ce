"""
Commitment router - API endpoints for commitments.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
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
from app.schemas.commitment import (
    CommitmentCreate,
    CommitmentRead,
    CommitmentSearchResult,
    CommitmentUpdate,
)
from app.schemas.user import TokenData
from app.services.commitment_service import CommitmentService

router = APIRouter(prefix="/commitments", tags=["commitments"])


@router.get("", response_model=List[CommitmentRead])
async def list_commitments(
    tenant_id: Optional[int] = Depends(get_tenant_id),
    registry: TenantStoreRegistry = Depends(get_registry),
    status: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = None,
):
    """
    List commitments of the caller's company.

    sortBy accepts due_date, created_at, amount, description or status;
    anything else sorts by created_at descending. A system admin that does
    not pass company_id gets an empty list.
    """
    if tenant_id is None:
        return []

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = CommitmentService(tenant_db)
        return await service.list_commitments(status=status, sort_by=sort_by, order=order)


@router.post("", response_model=CommitmentRead, status_code=status.HTTP_201_CREATED)
async def create_commitment(
    data: CommitmentCreate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """Create a commitment. Its reference number is generated from due_date."""
    tenant_id = require_tenant_id(await resolve_tenant_id(db, current_user, data.company_id))

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = CommitmentService(tenant_db)
        return await service.create_commitment(data)


@router.get("/search/{commit_number}", response_model=CommitmentSearchResult)
async def search_commitment(
    commit_number: str,
    tenant_id: Optional[int] = Depends(get_tenant_id),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """Find a commitment by reference number, with its payments and remaining balance."""
    tenant_id = require_tenant_id(tenant_id)

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = CommitmentService(tenant_db)
        return await service.search_by_number(commit_number)


@router.get("/{commitment_id}", response_model=CommitmentRead)
async def get_commitment(
    commitment_id: int,
    tenant_id: Optional[int] = Depends(get_tenant_id),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """Get a commitment by ID."""
    tenant_id = require_tenant_id(tenant_id)

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = CommitmentService(tenant_db)
        return await service.get_commitment(commitment_id)


@router.put("/{commitment_id}", response_model=CommitmentRead)
async def update_commitment(
    commitment_id: int,
    data: CommitmentUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """Update a commitment. The reference number never changes."""
    tenant_id = require_tenant_id(await resolve_tenant_id(db, current_user, data.company_id))

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = CommitmentService(tenant_db)
        return await service.update_commitment(commitment_id, data)


@router.delete("/{commitment_id}")
async def delete_commitment(
    commitment_id: int,
    tenant_id: Optional[int] = Depends(get_tenant_id),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """Delete a commitment. Refused with 409 when it has payments."""
    tenant_id = require_tenant_id(tenant_id)

    async with tenant_session(registry, tenant_id) as tenant_db:
        service = CommitmentService(tenant_db)
        await service.delete_commitment(commitment_id)

    return {"success": True}
