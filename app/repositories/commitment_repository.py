"""
Commitment repository - database operations for Commitment.

Every method works on one tenant store; the session passed in decides
which company's data is visible.
"""

from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.commitment import Commitment, CommitmentStatus


class CommitmentSortField(str, Enum):
    """Fields a commitment listing may be ordered by."""

    DUE_DATE = "due_date"
    CREATED_AT = "created_at"
    AMOUNT = "amount"
    DESCRIPTION = "description"
    STATUS = "status"


# Request values never reach the query; only these columns do
SORT_COLUMNS: Dict[CommitmentSortField, object] = {
    CommitmentSortField.DUE_DATE: Commitment.due_date,
    CommitmentSortField.CREATED_AT: Commitment.created_at,
    CommitmentSortField.AMOUNT: Commitment.amount,
    CommitmentSortField.DESCRIPTION: Commitment.description,
    CommitmentSortField.STATUS: Commitment.status,
}


class CommitmentRepository:
    """Repository for Commitment database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self,
        status: Optional[str] = None,
        sort_field: CommitmentSortField = CommitmentSortField.CREATED_AT,
        descending: bool = True,
    ) -> List[Commitment]:
        """List commitments with an optional status filter."""
        query = select(Commitment)

        if status is not None:
            query = query.where(Commitment.status == status)

        column = SORT_COLUMNS[sort_field]
        if descending:
            query = query.order_by(column.desc(), Commitment.id.desc())
        else:
            query = query.order_by(column.asc(), Commitment.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, commitment_id: int) -> Optional[Commitment]:
        result = await self.db.execute(
            select(Commitment).where(Commitment.id == commitment_id)
        )
        return result.scalar_one_or_none()

    async def get_by_number(self, commit_number: str) -> Optional[Commitment]:
        result = await self.db.execute(
            select(Commitment).where(Commitment.commit_number == commit_number)
        )
        return result.scalar_one_or_none()

    async def max_number_with_prefix(self, prefix: str) -> Optional[str]:
        """
        Highest commit_number starting with prefix, or None.

        The numeric suffix is zero-padded to a fixed width, so the
        lexicographic max is also the numeric max.
        """
        result = await self.db.execute(
            select(func.max(Commitment.commit_number)).where(
                Commitment.commit_number.like(f"{prefix}%")
            )
        )
        return result.scalar_one_or_none()

    async def create(self, **fields) -> Commitment:
        commitment = Commitment(**fields)
        self.db.add(commitment)
        await self.db.flush()
        await self.db.refresh(commitment)
        return commitment

    async def update(self, commitment: Commitment, update_data: dict) -> Commitment:
        for field, value in update_data.items():
            setattr(commitment, field, value)
        await self.db.flush()
        await self.db.refresh(commitment)
        return commitment

    async def set_status(self, commitment: Commitment, status: CommitmentStatus) -> None:
        commitment.status = status.value
        await self.db.flush()

    async def delete(self, commitment: Commitment) -> None:
        await self.db.delete(commitment)
        await self.db.flush()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Commitment))
        return int(result.scalar_one())

    async def stats(self) -> dict:
        """Counts per status and the total committed amount."""
        def _count_status(status: CommitmentStatus):
            return func.coalesce(
                func.sum(case((Commitment.status == status.value, 1), else_=0)), 0
            )

        result = await self.db.execute(
            select(
                func.count(Commitment.id),
                _count_status(CommitmentStatus.ACTIVE),
                _count_status(CommitmentStatus.COMPLETED),
                _count_status(CommitmentStatus.CANCELLED),
                func.coalesce(func.sum(Commitment.amount), 0),
            )
        )
        total, active, completed, cancelled, total_amount = result.one()
        return {
            "total_count": int(total or 0),
            "active_count": int(active or 0),
            "completed_count": int(completed or 0),
            "cancelled_count": int(cancelled or 0),
            "total_amount": total_amount,
        }
