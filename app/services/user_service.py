# app/services/user_service.py
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.security import get_password_hash
from app.core.tenant_db import tenant_query
from app.models.user import User
from app.schemas.user import UserCreate


class DuplicateEmailError(Exception):
    pass


def get_user_by_email(db: Session, email: str) -> User | None:
    """
    Login lookup. Emails are unique across tenants, so this is the one
    user query that is not tenant-filtered.
    """
    return db.query(User).filter(User.email == email.lower()).first()


def list_users(db: Session, *, tenant_id: UUID) -> list[User]:
    return tenant_query(db, User, tenant_id).order_by(User.email).all()


def create_user(db: Session, *, tenant_id: UUID, user_in: UserCreate) -> User:
    """
    Create a user inside the given tenant.

    Note: the role is taken as given; callers must already hold manage-users.
    """
    email = user_in.email.lower()
    if get_user_by_email(db, email):
        raise DuplicateEmailError(f"A user with email {email} already exists")

    user = User(
        tenant_id=tenant_id,
        email=email,
        hashed_password=get_password_hash(user_in.password),
        role=user_in.role,
    )
    db.add(user)
    db.flush()
    return user
