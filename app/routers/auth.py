"""
Authentication router for login, registration and the current user.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.dependencies import get_current_user, get_settings
from app.db.session import get_db
from app.schemas.company import RegistrationRequest, RegistrationResponse
from app.schemas.user import LoginRequest, LoginResponse, TokenData
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Authenticate user and return JWT access token.

    The token carries the user's company, which decides the tenant store
    every later request works on.
    """
    auth_service = AuthService(db, settings)
    return await auth_service.login(credentials)


@router.post("/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegistrationRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Register a new company together with its first account.

    Either both are created or neither is.
    """
    auth_service = AuthService(db, settings)
    return await auth_service.register(data)


@router.get("/me", response_model=TokenData)
async def get_current_user_info(
    current_user: TokenData = Depends(get_current_user),
):
    """
    Get information about the currently authenticated user.
    """
    return current_user
