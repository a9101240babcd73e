# app/core/permissions.py
"""
Capability matrix: the single source of truth binding roles to permissions.

Endpoints and services refer to permissions by name only. No other module
lists roles to decide access.
"""

from enum import Enum as PyEnum
from types import MappingProxyType
from typing import Mapping

from app.core.errors import UnknownRoleError


class Role(str, PyEnum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    DISPATCH = "DISPATCH"
    TECH = "TECH"
    VIEW_ONLY = "VIEW_ONLY"


class Permission(str, PyEnum):
    VIEW_SCHEDULER = "view-scheduler"
    CREATE_APPOINTMENT = "create-appointment"
    MANAGE_TECHS = "manage-techs"
    MANAGE_USERS = "manage-users"
    VIEW_HR = "view-hr"


# Role to permission mappings. Every role must have an entry, even if empty.
ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType(
    {
        Role.ADMIN: frozenset(Permission),
        Role.MANAGER: frozenset(
            {
                Permission.VIEW_SCHEDULER,
                Permission.CREATE_APPOINTMENT,
                Permission.MANAGE_TECHS,
                Permission.MANAGE_USERS,
                Permission.VIEW_HR,
            }
        ),
        Role.DISPATCH: frozenset(
            {
                Permission.VIEW_SCHEDULER,
                Permission.CREATE_APPOINTMENT,
            }
        ),
        Role.TECH: frozenset({Permission.VIEW_SCHEDULER}),
        Role.VIEW_ONLY: frozenset({Permission.VIEW_SCHEDULER}),
    }
)

_missing = set(Role) - set(ROLE_PERMISSIONS)
if _missing:
    raise RuntimeError(f"Capability matrix has no entry for roles: {sorted(r.value for r in _missing)}")


def _coerce_role(role: Role | str) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise UnknownRoleError(f"Unknown role: {role!r}") from None


def permissions_for(role: Role | str) -> frozenset[Permission]:
    """
    Return the permissions granted to a role.

    Raises UnknownRoleError for anything outside the closed role set rather
    than defaulting to an empty set, so a typo never silently strips access.
    """
    return ROLE_PERMISSIONS[_coerce_role(role)]


def has_permission(role: Role | str, permission: Permission | str) -> bool:
    try:
        code = Permission(permission)
    except ValueError:
        # Unknown permission names are never granted
        return False
    return code in permissions_for(role)
