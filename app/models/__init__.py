"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.

Master directory tables (MasterBase): Company, User, Currency
Tenant store tables (TenantBase): Commitment, Payment
"""

from app.models.currency import Currency
from app.models.company import Company
from app.models.user import User
from app.models.commitment import Commitment, CommitmentStatus
from app.models.payment import Payment

# Export all models
__all__ = [
    "Currency",
    "Company",
    "User",
    "Commitment",
    "CommitmentStatus",
    "Payment",
]
