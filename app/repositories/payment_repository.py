"""
Payment repository - database operations for Payment.

There is no update or delete: payments are append-only.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.commitment import Commitment
from app.models.payment import Payment


def _as_decimal(value) -> Decimal:
    # SQLite hands SUM() back as int/float; keep money in Decimal
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value)).quantize(Decimal("0.01"))


class PaymentRepository:
    """Repository for Payment database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        commitment_id: int,
        amount: Decimal,
        method: str,
        payment_date: date,
    ) -> Payment:
        payment = Payment(
            commitment_id=commitment_id,
            amount=amount,
            method=method,
            payment_date=payment_date,
        )
        self.db.add(payment)
        await self.db.flush()
        await self.db.refresh(payment)
        return payment

    async def total_for_commitment(self, commitment_id: int) -> Decimal:
        result = await self.db.execute(
            select(func.sum(Payment.amount)).where(Payment.commitment_id == commitment_id)
        )
        return _as_decimal(result.scalar_one_or_none())

    async def total_paid(self) -> Decimal:
        result = await self.db.execute(select(func.sum(Payment.amount)))
        return _as_decimal(result.scalar_one_or_none())

    async def count_for_commitment(self, commitment_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Payment).where(Payment.commitment_id == commitment_id)
        )
        return int(result.scalar_one())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Payment))
        return int(result.scalar_one())

    async def list_for_commitment(self, commitment_id: int) -> List[Payment]:
        """Payments of one commitment, newest first."""
        result = await self.db.execute(
            select(Payment)
            .where(Payment.commitment_id == commitment_id)
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
        )
        return list(result.scalars().all())

    async def list_with_commitment(self) -> List[Tuple[Payment, str, Optional[str]]]:
        """Every payment in the store with its commitment's number and description."""
        result = await self.db.execute(
            select(Payment, Commitment.commit_number, Commitment.description)
            .join(Commitment, Commitment.id == Payment.commitment_id)
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
        )
        return [(payment, number, description) for payment, number, description in result.all()]
