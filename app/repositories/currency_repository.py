"""
Currency repository - database operations for Currency.
"""

from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.currency import Currency
from app.schemas.currency import CurrencyCreate, CurrencyUpdate


class CurrencyRepository:
    """Repository for Currency database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[Currency]:
        result = await self.db.execute(select(Currency).order_by(Currency.code.asc()))
        return list(result.scalars().all())

    async def get_by_code(self, code: str) -> Optional[Currency]:
        result = await self.db.execute(select(Currency).where(Currency.code == code))
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Currency))
        return int(result.scalar_one())

    async def count_companies_using(self, code: str) -> int:
        """Number of companies whose currency_code points at this currency."""
        result = await self.db.execute(
            select(func.count()).select_from(Company).where(Company.currency_code == code)
        )
        return int(result.scalar_one())

    async def create(self, data: CurrencyCreate) -> Currency:
        currency = Currency(**data.model_dump())
        self.db.add(currency)
        await self.db.flush()
        return currency

    async def update(self, currency: Currency, data: CurrencyUpdate) -> Currency:
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(currency, field, value)
        await self.db.flush()
        return currency

    async def delete(self, currency: Currency) -> None:
        await self.db.delete(currency)
        await self.db.flush()
