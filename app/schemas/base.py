"""
Base Pydantic schemas and shared field types.

These are templates that other schemas inherit from.
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Money travels as a JSON number, is held as Decimal in Python
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

PositiveMoney = Annotated[
    Decimal,
    Field(gt=0, max_digits=12, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CompanyScopedBase(BaseModel):
    """
    Base schema for request bodies that act on a tenant store.

    Company accounts always act on their own company; company_id is only
    read when the system administrator sends the request.
    """

    company_id: Optional[int] = Field(default=None, gt=0)


class ORMRead(BaseModel):
    """
    Base schema for reading rows.

    This tells Pydantic to work with SQLAlchemy models.
    """

    model_config = ConfigDict(from_attributes=True)
