"""
Payment business logic service.

Recording a payment is one transaction: insert the payment, re-read the
commitment and the sum of its payments, and mark the commitment completed
once the sum reaches its amount. If any step fails nothing is kept.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import atomic
from app.errors import NotFoundError, ValidationError
from app.models.commitment import CommitmentStatus
from app.repositories.commitment_repository import CommitmentRepository
from app.repositories.payment_repository import PaymentRepository
from app.schemas.payment import PaymentCreate, PaymentListItem, PaymentRead, PaymentRecorded

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for payment business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = PaymentRepository(db)
        self.commitments = CommitmentRepository(db)

    async def list_payments(self) -> List[PaymentListItem]:
        """All payments in the store, newest payment date first."""
        rows = await self.repository.list_with_commitment()
        return [
            PaymentListItem(
                **PaymentRead.model_validate(payment).model_dump(),
                commit_number=commit_number,
                commitment_description=description,
            )
            for payment, commit_number, description in rows
        ]

    async def record_payment(self, data: PaymentCreate) -> PaymentRecorded:
        """
        Record a payment against a commitment.

        Raises:
            NotFoundError: if the commitment does not exist
            ValidationError: if the commitment is cancelled or the amount
                exceeds what remains to be paid
        """
        async with atomic(self.db):
            commitment = await self.commitments.get_by_id(data.commitment_id)
            if not commitment:
                raise NotFoundError(f"Commitment {data.commitment_id} not found")

            if commitment.status == CommitmentStatus.CANCELLED.value:
                raise ValidationError(
                    "Cannot record a payment against a cancelled commitment",
                    {"commitment_id": commitment.id},
                )

            paid_before = await self.repository.total_for_commitment(commitment.id)
            remaining = commitment.amount - paid_before
            if data.amount > remaining:
                raise ValidationError(
                    "Payment amount exceeds the remaining balance",
                    {"amount": float(data.amount), "remaining_amount": float(remaining)},
                )

            payment = await self.repository.create(
                commitment_id=commitment.id,
                amount=data.amount,
                method=data.method,
                payment_date=data.payment_date,
            )

            # Re-read amount and total inside the same transaction
            commitment = await self.commitments.get_by_id(commitment.id)
            total_paid = await self.repository.total_for_commitment(commitment.id)

            if total_paid >= commitment.amount and commitment.status != CommitmentStatus.COMPLETED.value:
                await self.commitments.set_status(commitment, CommitmentStatus.COMPLETED)
                logger.info("Commitment %s fully paid, marked completed", commitment.commit_number)

        logger.info(
            "Recorded payment %s of %s against commitment %s",
            payment.id, payment.amount, commitment.commit_number,
        )
        return PaymentRecorded(
            payment=PaymentRead.model_validate(payment),
            commitment_status=commitment.status,
            total_paid=total_paid,
            remaining_amount=commitment.amount - total_paid,
        )
