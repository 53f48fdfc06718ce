"""
SQLAlchemy declarative bases.

There are two physical kinds of store, so there are two bases with
separate metadata:

- MasterBase: the single cross-tenant directory (companies, users, currencies)
- TenantBase: the per-company store (commitments, payments)

Creating TenantBase.metadata on a tenant file never touches master tables,
and the other way round.
"""

from sqlalchemy.orm import DeclarativeBase


class MasterBase(DeclarativeBase):
    """Base class for tables that live in master.db."""
    pass


class TenantBase(DeclarativeBase):
    """Base class for tables that live in every tenant_<id>.db."""
    pass
