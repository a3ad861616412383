"""
Security guards for role-based and ownership-based access control.

Provides dependencies for protecting endpoints and the single owner-scoping
rule shared by every list query.
"""

from typing import Optional
from fastapi import Depends
from sqlalchemy import Select
from sqlalchemy.orm import InstrumentedAttribute
from backend.app.core.dependencies import get_current_user
from backend.app.core.exceptions import InsufficientRoleError, ResourceNotFoundError
from backend.app.schemas.auth import Identity


def require_admin(current_user: Identity = Depends(get_current_user)) -> Identity:
    """
    Dependency for admin-only endpoints.

    Usage:
        @router.post("/shifts")
        async def create_shift(
            payload: ShiftCreate,
            admin: Identity = Depends(require_admin)
        ):
            ...

    Raises:
        InsufficientRoleError: 403 if the caller is not an admin
    """
    if not current_user.is_admin:
        raise InsufficientRoleError()

    return current_user


def owner_filter(identity: Identity) -> Optional[int]:
    """
    Get the owner_id to filter database queries by.

    For admins: Returns None (no filtering needed)
    For everyone else: Returns their own user id
    """
    if identity.is_admin:
        return None
    return identity.id


def scope_to_owner(query: Select, owner_column: InstrumentedAttribute, identity: Identity) -> Select:
    """
    Restrict a query to rows the caller may see.

    Applied to the SQL statement itself so the database bounds the result.

    Usage:
        query = scope_to_owner(select(Report), Report.user_id, current_user)
    """
    owner_id = owner_filter(identity)
    if owner_id is None:
        return query
    return query.where(owner_column == owner_id)


def can_access(identity: Identity, resource_owner_id: int) -> bool:
    """Admins can access everything, others only what they own."""
    owner_id = owner_filter(identity)
    return owner_id is None or owner_id == resource_owner_id


class OwnershipGuard:
    """
    Class-based ownership guard for single-record access.

    Usage:
        ownership_guard = OwnershipGuard()
        ownership_guard.enforce(report.user_id, current_user, "Report")
    """

    def enforce(self, resource_owner_id: int, identity: Identity, resource_name: str = "Resource"):
        """
        Hide records the caller does not own.

        A foreign record is reported as missing rather than forbidden so its
        existence is not disclosed.

        Raises:
            ResourceNotFoundError: 404 if the ownership check fails
        """
        if not can_access(identity, resource_owner_id):
            raise ResourceNotFoundError(resource_name)
