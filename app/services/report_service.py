"""
Report service - aggregate numbers for one company's store.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.commitment_repository import CommitmentRepository
from app.repositories.payment_repository import PaymentRepository
from app.schemas.report import CommitmentStats


class ReportService:

    def __init__(self, db: AsyncSession):
        self.commitments = CommitmentRepository(db)
        self.payments = PaymentRepository(db)

    async def commitment_stats(self) -> CommitmentStats:
        stats = await self.commitments.stats()
        return CommitmentStats(**stats, total_paid=await self.payments.total_paid())
