"""
Currency model.

Lives in the master directory. Companies reference a currency by code.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import MasterBase


class Currency(MasterBase):
    """
    Currency table - keyed by ISO code (e.g. "SAR").
    """

    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(
        String(10),
        primary_key=True,
    )

    name_ar: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    name_en: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    symbol: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
