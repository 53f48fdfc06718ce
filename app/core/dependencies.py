"""
FastAPI dependencies for the application.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.jwt import decode_access_token
from app.core.permissions import Roles, raise_if_not_system_admin
from app.db.session import get_db
from app.db.tenant_registry import TenantStoreRegistry
from app.errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from app.repositories.company_repository import CompanyRepository
from app.repositories.user_repository import UserRepository
from app.schemas.user import TokenData

# Security scheme for JWT bearer tokens
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> TenantStoreRegistry:
    """The tenant store registry built in the app lifespan."""
    return request.app.state.registry


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenData:
    """
    Get the current authenticated user from JWT token.

    Validates the JWT token, loads the user from the master directory,
    and ensures the user is active. Role and company come from the stored
    user, not from the token, so admin edits apply immediately.

    Raises:
        AuthenticationError (401): If token is missing/invalid or user not found
        AuthorizationError (403): If user is not active
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_access_token(credentials.credentials, settings)
    if not payload:
        raise AuthenticationError("Invalid authentication credentials")

    user_id = payload.get("user_id")
    if not isinstance(user_id, int):
        raise AuthenticationError("Invalid token payload")

    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthorizationError("User account is inactive")

    return TokenData(
        user_id=user.id,
        username=user.username,
        role=user.role,
        company_id=user.company_id,
    )


async def require_system_admin(
    current_user: TokenData = Depends(get_current_user),
) -> TokenData:
    """Dependency for routes that manage companies, users and currencies."""
    raise_if_not_system_admin(current_user.role, current_user.company_id, "manage the master directory")
    return current_user


async def resolve_tenant_id(
    db: AsyncSession,
    current_user: TokenData,
    requested_company_id: Optional[int],
) -> Optional[int]:
    """
    Work out which company's store a request acts on.

    - A user bound to a company always gets that company; a company_id
      sent by the client is ignored.
    - A system admin gets the company_id it sent, which must exist, or
      None when it sent nothing.
    - Anyone else has no tenant and is refused.
    """
    if current_user.company_id is not None:
        return current_user.company_id

    if current_user.role != Roles.ADMIN:
        raise AuthorizationError("No company linked to this user")

    if requested_company_id is None:
        return None

    if not await CompanyRepository(db).get_by_id(requested_company_id):
        raise NotFoundError(f"Company {requested_company_id} not found")
    return requested_company_id


def require_tenant_id(tenant_id: Optional[int]) -> int:
    if tenant_id is None:
        raise ValidationError("company_id is required", {"company_id": None})
    return tenant_id


async def get_tenant_id(
    company_id: Optional[int] = Query(None, gt=0),
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Optional[int]:
    """Tenant for GET/DELETE routes, where an admin names the company in the query."""
    return await resolve_tenant_id(db, current_user, company_id)


@asynccontextmanager
async def tenant_session(registry: TenantStoreRegistry, tenant_id: int) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on a company's store; rolls back anything left uncommitted."""
    store = await registry.resolve(tenant_id)
    async with store.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
