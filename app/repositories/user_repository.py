"""
User repository - database operations for User.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.user import User
from app.core.security import hash_password


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username (exact match after trimming)."""
        if not username or not username.strip():
            return None
        result = await self.db.execute(
            select(User).where(User.username == username.strip())
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        username: str,
        password: str,
        company_id: Optional[int] = None,
        role: str = "user",
        is_active: bool = True,
    ) -> User:
        """Create a new user, hashing the password."""
        user = User(
            username=username.strip(),
            password=hash_password(password),
            company_id=company_id,
            role=role,
            is_active=is_active,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def list_with_company_name(self) -> List[Tuple[User, Optional[str]]]:
        """All users, newest first, each paired with its company's English name."""
        result = await self.db.execute(
            select(User, Company.name_en)
            .outerjoin(Company, Company.id == User.company_id)
            .order_by(User.id.desc())
        )
        return [(user, company_name) for user, company_name in result.all()]

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return int(result.scalar_one())

    async def update(self, user: User, update_data: dict) -> User:
        """Update a user's information."""
        # Hash password if it's being updated
        if update_data.get("password"):
            update_data["password"] = hash_password(update_data["password"])
        else:
            update_data.pop("password", None)

        if "username" in update_data and update_data["username"]:
            update_data["username"] = update_data["username"].strip()

        for field, value in update_data.items():
            setattr(user, field, value)

        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await self.db.flush()
