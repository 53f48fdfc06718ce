"""
Currency Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CurrencyCreate(BaseModel):
    code: str = Field(min_length=1, max_length=10)
    name_ar: str = Field(min_length=1)
    name_en: str = Field(min_length=1)
    symbol: str = Field(min_length=1)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()


class CurrencyUpdate(BaseModel):
    name_ar: Optional[str] = Field(default=None, min_length=1)
    name_en: Optional[str] = Field(default=None, min_length=1)
    symbol: Optional[str] = Field(default=None, min_length=1)


class CurrencyRead(BaseModel):
    code: str
    name_ar: str
    name_en: str
    symbol: str

    model_config = ConfigDict(from_attributes=True)
