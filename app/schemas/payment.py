"""
Payment Pydantic schemas.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.base import CompanyScopedBase, Money, ORMRead, PositiveMoney


class PaymentCreate(CompanyScopedBase):
    commitment_id: int = Field(gt=0)
    amount: PositiveMoney
    method: str = Field(min_length=1, max_length=50)
    payment_date: date


class PaymentRead(ORMRead):
    id: int
    commitment_id: int
    method: str
    amount: Money
    payment_date: date
    created_at: datetime


class PaymentListItem(PaymentRead):
    """Payment joined with the commitment it settles."""

    commit_number: str
    commitment_description: Optional[str] = None


class PaymentRecorded(BaseModel):
    """Result of recording a payment, including the commitment's new state."""

    payment: PaymentRead
    commitment_status: str
    total_paid: Money
    remaining_amount: Money
