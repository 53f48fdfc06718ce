"""
Company business logic service.

Companies live in the master directory. Their commitments live in
per-company stores that the tenant registry opens on first use.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.db.session import atomic
from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.company import Company
from app.repositories.company_repository import CompanyRepository
from app.repositories.currency_repository import CurrencyRepository
from app.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate

logger = logging.getLogger(__name__)


def to_company_read(company: Company, currency_symbol: Optional[str]) -> CompanyRead:
    read = CompanyRead.model_validate(company)
    read.currency_symbol = currency_symbol
    return read


class CompanyService:
    """Service for company business logic."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.repository = CompanyRepository(db)
        self.currencies = CurrencyRepository(db)

    async def _check_currency(self, code: str) -> None:
        if not await self.currencies.get_by_code(code):
            raise ValidationError(f"Unknown currency code {code}", {"currency_code": code})

    async def list_companies(self) -> List[CompanyRead]:
        rows = await self.repository.list_with_symbol()
        return [to_company_read(company, symbol) for company, symbol in rows]

    async def get_company(self, company_id: int) -> CompanyRead:
        row = await self.repository.get_with_symbol(company_id)
        if not row:
            raise NotFoundError(f"Company {company_id} not found")
        return to_company_read(*row)

    async def add_company(self, data: CompanyCreate) -> Company:
        """
        Insert a company inside the caller's transaction (flush only).

        Used on its own by create_company and together with the first user
        by registration.
        """
        fields = data.model_dump(include=set(CompanyCreate.model_fields))
        fields["currency_code"] = data.currency_code or self.settings.DEFAULT_CURRENCY
        await self._check_currency(fields["currency_code"])
        return await self.repository.create(**fields)

    async def create_company(self, data: CompanyCreate) -> CompanyRead:
        async with atomic(self.db):
            company = await self.add_company(data)
        logger.info("Created company %s (%s)", company.id, company.name_en)
        return await self.get_company(company.id)

    async def update_company(self, company_id: int, data: CompanyUpdate) -> CompanyRead:
        update_data = data.model_dump(exclude_unset=True)
        for required in ("name_en", "name_ar", "currency_code"):
            if required in update_data and update_data[required] is None:
                update_data.pop(required)

        async with atomic(self.db):
            company = await self.repository.get_by_id(company_id)
            if not company:
                raise NotFoundError(f"Company {company_id} not found")
            if "currency_code" in update_data:
                await self._check_currency(update_data["currency_code"])
            await self.repository.update(company, update_data)

        return await self.get_company(company_id)

    async def delete_company(self, company_id: int) -> None:
        """
        Delete a company that no user belongs to.

        The company's tenant store file is left on disk.

        Raises:
            NotFoundError: if the company does not exist
            ConflictError: if users still belong to it
        """
        async with atomic(self.db):
            company = await self.repository.get_by_id(company_id)
            if not company:
                raise NotFoundError(f"Company {company_id} not found")
            user_count = await self.repository.count_users(company_id)
            if user_count > 0:
                raise ConflictError(
                    "Cannot delete a company that still has users. Delete its users first.",
                    {"company_id": company_id, "user_count": user_count},
                )
            await self.repository.delete(company)
        logger.info("Deleted company %s", company_id)
