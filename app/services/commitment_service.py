"""
Commitment business logic service.

Works on one tenant store: the session handed in belongs to a single
company, so nothing here can see another company's rows.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import atomic
from app.errors import ConflictError, NotFoundError
from app.models.commitment import Commitment, CommitmentStatus
from app.repositories.commitment_repository import CommitmentRepository, CommitmentSortField
from app.repositories.payment_repository import PaymentRepository
from app.schemas.commitment import CommitmentCreate, CommitmentSearchResult, CommitmentUpdate
from app.schemas.payment import PaymentRead
from app.services.commitment_numbering import next_commit_number

logger = logging.getLogger(__name__)


def resolve_sort(sort_by: Optional[str], order: Optional[str]) -> tuple[CommitmentSortField, bool]:
    """
    Map request sort parameters to a known field and direction.

    No sortBy means created_at in the requested order. An unknown sortBy
    falls back to created_at descending without complaint. Direction is
    ascending only for "ASC" (any case).
    """
    descending = (order or "DESC").strip().upper() != "ASC"
    if not sort_by:
        return CommitmentSortField.CREATED_AT, descending

    try:
        return CommitmentSortField(sort_by), descending
    except ValueError:
        return CommitmentSortField.CREATED_AT, True



def completion_status(current: str, amount: Decimal, total_paid: Decimal) -> str:
    """Status a commitment should have given what has been paid against it."""
    if current == CommitmentStatus.CANCELLED.value:
        return current
    if total_paid >= amount:
        return CommitmentStatus.COMPLETED.value
    return CommitmentStatus.ACTIVE.value


class CommitmentService:
    """Service for commitment business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CommitmentRepository(db)
        self.payments = PaymentRepository(db)

    async def list_commitments(
        self,
        status: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> List[Commitment]:
        """List commitments, optionally filtered by status."""
        field, descending = resolve_sort(sort_by, order)
        return await self.repository.list(
            status=status or None,
            sort_field=field,
            descending=descending,
        )

    async def get_commitment(self, commitment_id: int) -> Commitment:
        commitment = await self.repository.get_by_id(commitment_id)
        if not commitment:
            raise NotFoundError(f"Commitment {commitment_id} not found")
        return commitment

    async def create_commitment(self, data: CommitmentCreate) -> Commitment:
        """
        Create a commitment with the next reference number for its due month.

        Raises:
            ValidationError: if due_date is not a valid date (nothing is written)
            ConflictError: if a concurrent request took the same number, or
                the store stayed locked by other writers past the timeout
        """
        commit_number = None
        try:
            # Write lock held from the max-number read through the insert
            async with atomic(self.db, immediate=True):
                commit_number = await next_commit_number(self.repository, data.due_date)
                commitment = await self.repository.create(
                    commit_number=commit_number,
                    due_date=data.due_date,
                    account=data.account,
                    description=data.description,
                    amount=data.amount,
                    status=(data.status or CommitmentStatus.ACTIVE).value,
                )
        except IntegrityError as exc:
            raise ConflictError(
                "Commitment number was taken by a concurrent request, please retry",
                {"commit_number": commit_number},
            ) from exc
        except OperationalError as exc:
            if "locked" not in str(exc.orig):
                raise
            raise ConflictError(
                "Commitment store is busy with other writes, please retry",
                {"commit_number": commit_number},
            ) from exc

        logger.info("Created commitment %s (id=%s)", commitment.commit_number, commitment.id)
        return commitment

    async def update_commitment(self, commitment_id: int, data: CommitmentUpdate) -> Commitment:
        """
        Update a commitment's editable fields.

        When the amount changes and no status is sent, completion is
        re-evaluated against the payments already recorded.
        """
        update_data = data.model_dump(exclude_unset=True, exclude={"company_id"})
        if update_data.get("status") is not None:
            update_data["status"] = update_data["status"].value
        else:
            update_data.pop("status", None)
        for required in ("due_date", "account", "amount"):
            if required in update_data and update_data[required] is None:
                update_data.pop(required)

        async with atomic(self.db):
            commitment = await self.get_commitment(commitment_id)
            commitment = await self.repository.update(commitment, update_data)

            if "amount" in update_data and "status" not in update_data:
                total_paid = await self.payments.total_for_commitment(commitment.id)
                if total_paid > 0:
                    new_status = completion_status(commitment.status, commitment.amount, total_paid)
                    if new_status != commitment.status:
                        await self.repository.set_status(commitment, CommitmentStatus(new_status))

        logger.info("Updated commitment %s (fields: %s)", commitment.commit_number, sorted(update_data))
        return commitment

    async def delete_commitment(self, commitment_id: int) -> None:
        """
        Delete a commitment that has no payments.

        Raises:
            NotFoundError: if the commitment does not exist
            ConflictError: if any payment references it
        """
        async with atomic(self.db):
            commitment = await self.get_commitment(commitment_id)
            payment_count = await self.payments.count_for_commitment(commitment_id)
            if payment_count > 0:
                raise ConflictError(
                    "Cannot delete a commitment that has payments",
                    {"commitment_id": commitment_id, "payment_count": payment_count},
                )
            await self.repository.delete(commitment)

        logger.info("Deleted commitment %s (id=%s)", commitment.commit_number, commitment_id)

    async def search_by_number(self, commit_number: str) -> CommitmentSearchResult:
        """
        Find a commitment by reference number with its payments and balance.

        Raises:
            NotFoundError: if no commitment has this number
        """
        commitment = await self.repository.get_by_number(commit_number.strip())
        if not commitment:
            raise NotFoundError(f"Commitment {commit_number} not found")

        payments = await self.payments.list_for_commitment(commitment.id)
        total_paid = sum((p.amount for p in payments), Decimal("0"))

        return CommitmentSearchResult(
            id=commitment.id,
            commit_number=commitment.commit_number,
            due_date=commitment.due_date,
            account=commitment.account,
            description=commitment.description,
            amount=commitment.amount,
            status=commitment.status,
            created_at=commitment.created_at,
            payments=[PaymentRead.model_validate(p) for p in payments],
            total_paid=total_paid,
            remaining_amount=commitment.amount - total_paid,
        )
