"""
User model for authentication and authorization.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import MasterBase
from app.utils.time import utc_now


class User(MasterBase):
    """
    User table - represents accounts that can log in.

    company_id is null for the system administrator; every other account
    belongs to exactly one company.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    username: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        nullable=False,
    )

    # bcrypt hash, never the plain password
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    company_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("companies.id"),
        nullable=True,
        index=True,
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="user",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
