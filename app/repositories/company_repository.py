"""
Company repository - database operations for Company.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.currency import Currency
from app.models.user import User


class CompanyRepository:
    """Repository for Company database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _with_symbol(self):
        # Outer join: a company whose currency row is missing still comes back
        return select(Company, Currency.symbol).outerjoin(
            Currency, Currency.code == Company.currency_code
        )

    async def list_with_symbol(self) -> List[Tuple[Company, Optional[str]]]:
        """All companies, newest first, each paired with its currency symbol."""
        result = await self.db.execute(
            self._with_symbol().order_by(Company.created_at.desc(), Company.id.desc())
        )
        return [(company, symbol) for company, symbol in result.all()]

    async def get_with_symbol(self, company_id: int) -> Optional[Tuple[Company, Optional[str]]]:
        result = await self.db.execute(self._with_symbol().where(Company.id == company_id))
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def get_by_id(self, company_id: int) -> Optional[Company]:
        result = await self.db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    async def count_users(self, company_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(User).where(User.company_id == company_id)
        )
        return int(result.scalar_one())

    async def create(self, **fields) -> Company:
        company = Company(**fields)
        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def update(self, company: Company, update_data: dict) -> Company:
        for field, value in update_data.items():
            setattr(company, field, value)
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def delete(self, company: Company) -> None:
        await self.db.delete(company)
        await self.db.flush()
