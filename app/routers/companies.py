"""
Company router - master directory management of tenants.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.dependencies import get_current_user, get_settings, require_system_admin
from app.core.permissions import check_is_system_admin
from app.db.session import get_db
from app.errors import AuthorizationError
from app.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate
from app.schemas.user import TokenData
from app.services.company_service import CompanyService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=List[CompanyRead])
async def list_companies(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: TokenData = Depends(require_system_admin),
):
    """List all companies, newest first, with their currency symbol."""
    return await CompanyService(db, settings).list_companies()


@router.get("/{company_id}", response_model=CompanyRead)
async def get_company(
    company_id: int,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: TokenData = Depends(get_current_user),
):
    """
    Get a company by ID.

    Company accounts may only read their own company.
    """
    if not check_is_system_admin(current_user.role, current_user.company_id) and current_user.company_id != company_id:
        raise AuthorizationError("Cannot read another company")
    return await CompanyService(db, settings).get_company(company_id)


@router.post("", response_model=CompanyRead, status_code=status.HTTP_201_CREATED)
async def create_company(
    data: CompanyCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: TokenData = Depends(require_system_admin),
):
    """Create a company."""
    return await CompanyService(db, settings).create_company(data)


@router.put("/{company_id}", response_model=CompanyRead)
async def update_company(
    company_id: int,
    data: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: TokenData = Depends(require_system_admin),
):
    """Update a company's profile or currency."""
    return await CompanyService(db, settings).update_company(company_id, data)


@router.delete("/{company_id}")
async def delete_company(
    company_id: int,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: TokenData = Depends(require_system_admin),
):
    """Delete a company. Refused with 409 while users belong to it."""
    await CompanyService(db, settings).delete_company(company_id)
    return {"success": True}
