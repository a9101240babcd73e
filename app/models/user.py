import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.permissions import Role
from app.models.base import Base, TenantScopedMixin


class User(TenantScopedMixin, Base):
    """
    A staff login. Every user belongs to exactly one tenant and holds one role.
    """

    __tablename__ = "users"

    # Primary Key
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Authentication
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role_enum"),
        nullable=False,
        default=Role.VIEW_ONLY,
        server_default=text("'VIEW_ONLY'"),
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
