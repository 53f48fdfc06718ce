"""
User router - account management for the system administrator.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.dependencies import get_settings, require_system_admin
from app.db.session import get_db
from app.schemas.user import TokenData, UserCreate, UserListItem, UserRead, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserListItem])
async def list_users(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: TokenData = Depends(require_system_admin),
):
    """List every account with its company name."""
    return await UserService(db, settings).list_users()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: TokenData = Depends(require_system_admin),
):
    """Create an account, optionally bound to a company."""
    return await UserService(db, settings).create_user(data)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: TokenData = Depends(require_system_admin),
):
    """
    Update an account.

    Sending is_active=false disables login without deleting the account.
    """
    return await UserService(db, settings).update_user(user_id, data)


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: TokenData = Depends(require_system_admin),
):
    """Delete an account. Your own account and the main admin cannot be deleted."""
    await UserService(db, settings).delete_user(user_id, current_user)
    return {"success": True}
