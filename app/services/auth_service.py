import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import Unauthenticated
from app.core.guard import Principal
from app.core.permissions import permissions_for
from app.core.security import create_access_token, decode_token, verify_password
from app.models.user import User
from app.schemas.auth import AuthUser, LoginRequest

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    pass


def authenticate_user(db: Session, login_data: LoginRequest) -> User:
    """
    Authenticate a user by email and password.
    """
    from app.services.user_service import get_user_by_email

    user = get_user_by_email(db, email=login_data.email)
    if not user:
        raise AuthenticationError("Invalid email or password")

    if not verify_password(login_data.password, user.hashed_password):
        raise AuthenticationError("Invalid email or password")

    return user


def issue_access_token_for_user(user: User) -> str:
    return create_access_token(
        subject=str(user.id),
        tenant_id=str(user.tenant_id),
        role=user.role.value,
    )


def to_auth_user(user: User) -> AuthUser:
    return AuthUser(
        id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=user.tenant_id,
        permissions=sorted(p.value for p in permissions_for(user.role)),
    )


def resolve_principal(db: Session, token: str | None) -> Principal:
    """
    Turn a bearer token into a Principal.

    The user row is re-read so a deleted user loses access immediately, and
    role/tenant come from the database rather than the token claims.
    """
    if not token:
        raise Unauthenticated("Missing or invalid Authorization header")

    try:
        payload = decode_token(token)
    except ValueError as exc:
        raise Unauthenticated(str(exc)) from exc

    user_id = payload.get("sub")
    try:
        user_uuid = UUID(str(user_id))
    except ValueError:
        raise Unauthenticated("Invalid token payload") from None

    user = db.get(User, user_uuid)
    if not user:
        raise Unauthenticated("User no longer exists")

    return Principal(id=user.id, role=user.role, tenant_id=user.tenant_id)
