"""
Commitment Pydantic schemas.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from app.models.commitment import CommitmentStatus
from app.schemas.base import CompanyScopedBase, Money, ORMRead, PositiveMoney
from app.schemas.payment import PaymentRead


class CommitmentCreate(CompanyScopedBase):
    """
    Schema for creating a commitment.

    commit_number is never accepted from the client; it is generated from
    due_date.
    """

    due_date: date
    account: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    amount: PositiveMoney
    status: Optional[CommitmentStatus] = None


class CommitmentUpdate(CompanyScopedBase):
    """Partial update. commit_number is immutable once assigned."""

    due_date: Optional[date] = None
    account: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    amount: Optional[PositiveMoney] = None
    status: Optional[CommitmentStatus] = None


class CommitmentRead(ORMRead):
    id: int
    commit_number: str
    due_date: date
    account: str
    description: Optional[str] = None
    amount: Money
    status: str
    created_at: datetime


class CommitmentSearchResult(CommitmentRead):
    """
    A commitment found by reference number, with its payments newest first.

    remainingAmount goes negative when payments exceed the amount.
    """

    payments: List[PaymentRead] = []
    total_paid: Money = Field(alias="totalPaid")
    remaining_amount: Money = Field(alias="remainingAmount")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
