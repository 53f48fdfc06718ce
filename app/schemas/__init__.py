"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyRead,
    RegistrationRequest,
    RegistrationResponse,
)
from app.schemas.currency import CurrencyCreate, CurrencyUpdate, CurrencyRead
from app.schemas.user import (
    UserCreate,
    UserUpdate,
    UserRead,
    UserListItem,
    LoginRequest,
    LoginResponse,
    TokenData,
)
from app.schemas.payment import PaymentCreate, PaymentRead, PaymentListItem, PaymentRecorded
from app.schemas.commitment import (
    CommitmentCreate,
    CommitmentUpdate,
    CommitmentRead,
    CommitmentSearchResult,
)
from app.schemas.report import CommitmentStats

__all__ = [
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyRead",
    "RegistrationRequest",
    "RegistrationResponse",
    "CurrencyCreate",
    "CurrencyUpdate",
    "CurrencyRead",
    "UserCreate",
    "UserUpdate",
    "UserRead",
    "UserListItem",
    "LoginRequest",
    "LoginResponse",
    "TokenData",
    "PaymentCreate",
    "PaymentRead",
    "PaymentListItem",
    "PaymentRecorded",
    "CommitmentCreate",
    "CommitmentUpdate",
    "CommitmentRead",
    "CommitmentSearchResult",
    "CommitmentStats",
]
