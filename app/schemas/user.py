"""
User Pydantic schemas.
"""

from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.permissions import Roles

ROLE_PATTERN = f"^({'|'.join(Roles.ALL)})$"


class UserCreate(BaseModel):
    """Schema for creating a new user."""

    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)
    company_id: Optional[int] = None
    role: str = Field(default=Roles.USER, pattern=ROLE_PATTERN)


class UserUpdate(BaseModel):
    """Schema for updating a user. A blank or missing password keeps the old one."""

    username: Optional[str] = Field(default=None, min_length=1, max_length=150)
    password: Optional[str] = None
    company_id: Optional[int] = None
    role: Optional[str] = Field(default=None, pattern=ROLE_PATTERN)
    is_active: Optional[bool] = None


class UserRead(BaseModel):
    """Schema for reading user data (API response)."""

    id: int
    username: str
    company_id: Optional[int]
    role: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserListItem(UserRead):
    """User row joined with its company's English name."""

    company_name: Optional[str] = None


class LoginRequest(BaseModel):
    """Schema for login request."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Schema for login response."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead


class TokenData(BaseModel):
    """
    Schema for token payload data.

    This is the resolved identity every ledger request carries.
    """

    user_id: int
    username: str
    role: str
    company_id: Optional[int] = None
