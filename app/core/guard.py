# app/core/guard.py
"""
Principal guard: allow/deny decisions for an already-authenticated principal.

The guard never touches storage and holds no state. Tenant isolation is the
caller's job (see app.core.tenant_db.tenant_query).
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from app.core.errors import Forbidden, Unauthenticated
from app.core.permissions import Permission, Role, has_permission, permissions_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a single request."""

    id: UUID
    role: Role
    tenant_id: UUID

    @property
    def permissions(self) -> frozenset[Permission]:
        return permissions_for(self.role)


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    role: Role
    # A Permission member, or the raw name when it is not a known permission
    required_permission: Permission | str
    reason: str | None = None

    @property
    def permission_code(self) -> str:
        if isinstance(self.required_permission, Permission):
            return self.required_permission.value
        return self.required_permission

    def raise_for_denial(self) -> None:
        if not self.allowed:
            raise Forbidden(role=self.role.value, required_permission=self.permission_code)


def authorize(principal: Principal | None, required_permission: Permission | str) -> AccessDecision:
    """
    Decide whether the principal may perform an action.

    - No principal: raises Unauthenticated (distinct from a denial).
    - Unknown permission name: returns a Deny decision carrying the raw name.
    - Role lacks the permission: returns a Deny decision naming role and permission.
    """
    if principal is None:
        raise Unauthenticated()

    try:
        permission = Permission(required_permission)
    except ValueError:
        return AccessDecision(
            allowed=False,
            role=principal.role,
            required_permission=str(required_permission),
            reason=f"Unknown permission {required_permission!r}",
        )

    if has_permission(principal.role, permission):
        return AccessDecision(allowed=True, role=principal.role, required_permission=permission)

    return AccessDecision(
        allowed=False,
        role=principal.role,
        required_permission=permission,
        reason=f"Role {principal.role.value} lacks permission {permission.value}",
    )


def ensure_authorized(principal: Principal | None, required_permission: Permission | str) -> Principal:
    """
    Same as authorize() but raises Forbidden on denial and returns the principal on success.
    """
    decision = authorize(principal, required_permission)
    if not decision.allowed:
        logger.info(
            "Denied user=%s role=%s permission=%s",
            principal.id,
            decision.role.value,
            decision.permission_code,
        )
    decision.raise_for_denial()
    return principal
