"""
Authentication service for login, registration and token management.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.jwt import create_access_token
from app.core.permissions import Roles
from app.core.security import verify_password
from app.db.session import atomic
from app.errors import AuthenticationError, AuthorizationError, ConflictError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.company import RegistrationRequest, RegistrationResponse
from app.schemas.user import LoginRequest, LoginResponse, UserRead
from app.services.company_service import CompanyService

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.user_repository = UserRepository(db)

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """
        Authenticate a user by username and password.

        Returns:
            User object if the credentials match, None otherwise
        """
        user = await self.user_repository.get_by_username(username)

        if not user:
            return None

        if not verify_password(password, user.password):
            return None

        return user

    def create_token_for_user(self, user: User) -> str:
        """Create a JWT access token carrying the user's identity and tenant."""
        token_data = {
            "user_id": user.id,
            "username": user.username,
            "role": user.role,
            "company_id": user.company_id,
        }
        return create_access_token(token_data, self.settings)

    async def login(self, credentials: LoginRequest) -> LoginResponse:
        """
        Perform user login.

        Raises:
            AuthenticationError: wrong username or password
            AuthorizationError: the account is disabled
        """
        user = await self.authenticate_user(credentials.username, credentials.password)

        if not user:
            raise AuthenticationError("Invalid username or password")

        if not user.is_active:
            raise AuthorizationError("Account is inactive")

        return LoginResponse(
            access_token=self.create_token_for_user(user),
            token_type="bearer",
            user=UserRead.model_validate(user),
        )

    async def register(self, data: RegistrationRequest) -> RegistrationResponse:
        """
        Create a company and its first account in one transaction.

        If the account cannot be created (e.g. the username is taken) the
        company is rolled back too.

        Raises:
            ValidationError: unknown currency code
            ConflictError: username already taken
        """
        company_service = CompanyService(self.db, self.settings)
        try:
            async with atomic(self.db):
                company = await company_service.add_company(data)
                if await self.user_repository.get_by_username(data.username):
                    raise ConflictError("Username already exists", {"username": data.username})
                user = await self.user_repository.create(
                    username=data.username,
                    password=data.password,
                    company_id=company.id,
                    role=Roles.ADMIN,
                )
        except IntegrityError as exc:
            raise ConflictError("Username already exists", {"username": data.username}) from exc

        logger.info("Registered company %s with first user %s", company.id, user.username)
        return RegistrationResponse(company_id=company.id, user_id=user.id)
