"""
Role-based permission helpers for the ledger.

Defines roles and the checks used by request dependencies.
"""

from typing import Optional

from app.errors import AuthorizationError


class Roles:
    """Standard roles in the ledger."""
    ADMIN = "admin"
    USER = "user"

    # All roles list for validation
    ALL = [ADMIN, USER]

    # admin without a company: system administrator (companies, users, currencies)
    # admin with a company: the company's first account, created at registration
    # user: works inside its company's commitments and payments


def check_is_system_admin(user_role: str, company_id: Optional[int]) -> bool:
    """A system admin is an admin that is not bound to any company."""
    return user_role == Roles.ADMIN and company_id is None


def raise_if_not_system_admin(user_role: str, company_id: Optional[int], action: str = "perform this action") -> None:
    """
    Raise 403 error if the caller is not a system admin.

    Raises:
        AuthorizationError: if the caller is a company account
    """
    if not check_is_system_admin(user_role, company_id):
        raise AuthorizationError(f"Access denied. Only the system administrator can {action}.")
