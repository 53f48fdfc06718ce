"""
Currency router.

Any signed-in account can read currencies; only the system administrator
changes them.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, require_system_admin
from app.db.session import get_db
from app.schemas.currency import CurrencyCreate, CurrencyRead, CurrencyUpdate
from app.schemas.user import TokenData
from app.services.currency_service import CurrencyService

router = APIRouter(prefix="/currencies", tags=["currencies"])


@router.get("", response_model=List[CurrencyRead])
async def list_currencies(
    db: AsyncSession = Depends(get_db),
    _: TokenData = Depends(get_current_user),
):
    return await CurrencyService(db).list_currencies()


@router.post("", response_model=CurrencyRead, status_code=status.HTTP_201_CREATED)
async def create_currency(
    data: CurrencyCreate,
    db: AsyncSession = Depends(get_db),
    _: TokenData = Depends(require_system_admin),
):
    return await CurrencyService(db).create_currency(data)


@router.put("/{code}", response_model=CurrencyRead)
async def update_currency(
    code: str,
    data: CurrencyUpdate,
    db: AsyncSession = Depends(get_db),
    _: TokenData = Depends(require_system_admin),
):
    return await CurrencyService(db).update_currency(code, data)


@router.delete("/{code}")
async def delete_currency(
    code: str,
    db: AsyncSession = Depends(get_db),
    _: TokenData = Depends(require_system_admin),
):
    """Delete a currency. Refused with 409 while a company uses it."""
    await CurrencyService(db).delete_currency(code)
    return {"success": True}
