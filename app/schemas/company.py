"""
Company Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompanyProfile(BaseModel):
    """Optional profile fields shared by create, update and read."""

    company_type: Optional[str] = None
    sectors: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None
    building_name: Optional[str] = None
    building_number: Optional[str] = None
    floor: Optional[str] = None
    office_number: Optional[str] = None
    phone: Optional[str] = None
    signatory_name: Optional[str] = None
    signatory_phone: Optional[str] = None
    logo: Optional[str] = None
    favicon: Optional[str] = None


class CompanyCreate(CompanyProfile):
    """Schema for creating a company. currency_code defaults to the configured currency."""

    name_en: str = Field(min_length=1, max_length=255)
    name_ar: str = Field(min_length=1, max_length=255)
    currency_code: Optional[str] = None

    @field_validator("currency_code")
    @classmethod
    def normalize_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None


class CompanyUpdate(CompanyProfile):
    """Schema for updating a company. Only fields that are sent are changed."""

    name_en: Optional[str] = Field(default=None, min_length=1, max_length=255)
    name_ar: Optional[str] = Field(default=None, min_length=1, max_length=255)
    currency_code: Optional[str] = None

    @field_validator("currency_code")
    @classmethod
    def normalize_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None


class CompanyRead(CompanyProfile):
    """Company row enriched with its currency symbol (null when the currency is gone)."""

    id: int
    name_en: str
    name_ar: str
    currency_code: str
    currency_symbol: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegistrationRequest(CompanyCreate):
    """Self-service signup: the company profile plus its first account."""

    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)


class RegistrationResponse(BaseModel):
    company_id: int
    user_id: int
