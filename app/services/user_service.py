"""
User management service (system administrator only).
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.db.session import atomic
from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.user import User
from app.repositories.company_repository import CompanyRepository
from app.repositories.user_repository import UserRepository
from app.schemas.user import TokenData, UserCreate, UserListItem, UserRead, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user business logic."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.repository = UserRepository(db)
        self.companies = CompanyRepository(db)

    async def _check_company(self, company_id) -> None:
        if company_id is not None and not await self.companies.get_by_id(company_id):
            raise ValidationError(f"Company {company_id} does not exist", {"company_id": company_id})

    async def list_users(self) -> List[UserListItem]:
        rows = await self.repository.list_with_company_name()
        return [
            UserListItem(**UserRead.model_validate(user).model_dump(), company_name=company_name)
            for user, company_name in rows
        ]

    async def get_user(self, user_id: int) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def create_user(self, data: UserCreate) -> User:
        try:
            async with atomic(self.db):
                await self._check_company(data.company_id)
                if await self.repository.get_by_username(data.username):
                    raise ConflictError("Username already exists", {"username": data.username})
                user = await self.repository.create(
                    username=data.username,
                    password=data.password,
                    company_id=data.company_id,
                    role=data.role,
                )
        except IntegrityError as exc:
            raise ConflictError("Username already exists", {"username": data.username}) from exc
        logger.info("Created user %s (company=%s, role=%s)", user.username, user.company_id, user.role)
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        update_data = data.model_dump(exclude_unset=True)
        for required in ("username", "role", "is_active"):
            if required in update_data and update_data[required] is None:
                update_data.pop(required)

        try:
            async with atomic(self.db):
                user = await self.get_user(user_id)
                if "company_id" in update_data:
                    await self._check_company(update_data["company_id"])
                new_username = update_data.get("username")
                if new_username and new_username.strip() != user.username:
                    if await self.repository.get_by_username(new_username):
                        raise ConflictError("Username already exists", {"username": new_username})
                user = await self.repository.update(user, update_data)
        except IntegrityError as exc:
            raise ConflictError("Username already exists") from exc
        return user

    async def delete_user(self, user_id: int, current_user: TokenData) -> None:
        """
        Raises:
            ValidationError: deleting yourself or the bootstrap admin
            NotFoundError: if the user does not exist
        """
        if current_user.user_id == user_id:
            raise ValidationError("You cannot delete your own account")

        async with atomic(self.db):
            user = await self.get_user(user_id)
            if user.username == self.settings.DEFAULT_ADMIN_USERNAME:
                raise ValidationError("The main administrator account cannot be deleted")
            await self.repository.delete(user)

        logger.info("Deleted user %s (id=%s) on behalf of %s", user.username, user_id, current_user.username)
