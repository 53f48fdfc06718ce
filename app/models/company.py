"""
Company model.

A Company is a tenant of the ledger. Its profile lives in the master
directory; its commitments and payments live in its own tenant store.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import MasterBase
from app.utils.time import utc_now


class Company(MasterBase):
    """
    Company table - one row per registered tenant.
    """

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Names
    name_en: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    name_ar: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Profile
    company_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    sectors: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # comma-separated

    # Address
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    street: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    building_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    building_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    floor: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    office_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Contact
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    signatory_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    signatory_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Branding (URLs or data URIs)
    logo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    favicon: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    currency_code: Mapped[str] = mapped_column(
        String(10),
        ForeignKey("currencies.code"),
        nullable=False,
        default="SAR",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
