"""
Currency business logic service.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import atomic
from app.errors import ConflictError, NotFoundError
from app.models.currency import Currency
from app.repositories.currency_repository import CurrencyRepository
from app.schemas.currency import CurrencyCreate, CurrencyUpdate

logger = logging.getLogger(__name__)


class CurrencyService:
    """Service for currency business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CurrencyRepository(db)

    async def list_currencies(self) -> List[Currency]:
        return await self.repository.list()

    async def get_currency(self, code: str) -> Currency:
        currency = await self.repository.get_by_code(code.strip().upper())
        if not currency:
            raise NotFoundError(f"Currency {code} not found")
        return currency

    async def create_currency(self, data: CurrencyCreate) -> Currency:
        if await self.repository.get_by_code(data.code):
            raise ConflictError(f"Currency {data.code} already exists", {"code": data.code})
        try:
            async with atomic(self.db):
                currency = await self.repository.create(data)
        except IntegrityError as exc:
            raise ConflictError(f"Currency {data.code} already exists", {"code": data.code}) from exc
        logger.info("Created currency %s", currency.code)
        return currency

    async def update_currency(self, code: str, data: CurrencyUpdate) -> Currency:
        async with atomic(self.db):
            currency = await self.get_currency(code)
            currency = await self.repository.update(currency, data)
        return currency

    async def delete_currency(self, code: str) -> None:
        """
        Raises:
            NotFoundError: if the currency does not exist
            ConflictError: if any company uses it
        """
        async with atomic(self.db):
            currency = await self.get_currency(code)
            in_use = await self.repository.count_companies_using(currency.code)
            if in_use > 0:
                raise ConflictError(
                    "Cannot delete a currency that companies are using",
                    {"code": currency.code, "company_count": in_use},
                )
            await self.repository.delete(currency)
        logger.info("Deleted currency %s", currency.code)
