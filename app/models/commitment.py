"""
Commitment model.

A financial obligation with a due date and an amount, tracked until
payments cover it. Lives in the owning company's tenant store.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import String, Text, Date, DateTime, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import TenantBase
from app.utils.time import utc_now


class CommitmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Commitment(TenantBase):
    """
    Commitment table - one row per obligation.
    """

    __tablename__ = "commitments"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Reference number, YYYY-MM-NNN from the due date's month
    commit_number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
    )

    due_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )

    account: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CommitmentStatus.ACTIVE.value,
        index=True,
    )  # active, completed, cancelled

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
