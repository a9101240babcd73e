# app/dependencies/authz.py
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.guard import Principal, ensure_authorized
from app.core.permissions import Permission
from app.services.auth_service import resolve_principal

settings = get_settings()

# auto_error=False so a missing header reaches resolve_principal and
# surfaces as Unauthenticated through the app's own handler.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_v1_prefix}/auth/login", auto_error=False)


def get_current_principal(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Principal:
    """
    Dependency resolving the bearer token into a Principal.
    """
    return resolve_principal(db, token)


def require_permission(permission: Permission):
    """
    Dependency factory for permission-based access control.

    Usage:

    @router.get("/techs")
    def list_techs(principal: Principal = Depends(require_permission(Permission.VIEW_SCHEDULER))):
        ...

    Returns the Principal if its role grants the permission. Every query the
    endpoint makes afterwards must still be filtered by principal.tenant_id.
    """

    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        return ensure_authorized(principal, permission)

    return dependency
