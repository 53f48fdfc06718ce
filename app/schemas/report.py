"""
Report schemas.
"""

from pydantic import BaseModel

from app.schemas.base import Money


class CommitmentStats(BaseModel):
    """Headline numbers for one company's commitments."""

    total_count: int = 0
    active_count: int = 0
    completed_count: int = 0
    cancelled_count: int = 0
    total_amount: Money = 0
    total_paid: Money = 0
