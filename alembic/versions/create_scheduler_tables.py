"""create_scheduler_tables

Revision ID: create_scheduler_tables
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "create_scheduler_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = ("ADMIN", "MANAGER", "DISPATCH", "TECH", "VIEW_ONLY")
APPOINTMENT_STATUSES = ("SCHEDULED", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "NO_SHOW", "CANCELLED")
APPOINTMENT_SOURCES = ("STAFF", "PHONE", "ONLINE", "WALK_IN")


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def _tenant_id() -> sa.Column:
    return sa.Column("tenant_id", sa.Uuid(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        _tenant_id(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum(*ROLES, name="user_role_enum"),
            nullable=False,
            server_default=sa.text("'VIEW_ONLY'"),
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_tenant_id", "users", ["tenant_id"])

    op.create_table(
        "skills",
        sa.Column("id", sa.Uuid(), nullable=False),
        _tenant_id(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "name", name="uq_skills_tenant_name"),
    )
    op.create_index("ix_skills_tenant_id", "skills", ["tenant_id"])

    op.create_table(
        "techs",
        sa.Column("id", sa.Uuid(), nullable=False),
        _tenant_id(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_techs_tenant_id", "techs", ["tenant_id"])
    op.create_index("ix_techs_name", "techs", ["name"])

    op.create_table(
        "tech_skills",
        sa.Column("tech_id", sa.Uuid(), sa.ForeignKey("techs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("skill_id", sa.Uuid(), sa.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("tech_id", "skill_id"),
    )

    op.create_table(
        "services",
        sa.Column("id", sa.Uuid(), nullable=False),
        _tenant_id(),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_services_tenant_id", "services", ["tenant_id"])

    op.create_table(
        "service_required_skills",
        sa.Column("service_id", sa.Uuid(), sa.ForeignKey("services.id", ondelete="CASCADE"), nullable=False),
        sa.Column("skill_id", sa.Uuid(), sa.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("service_id", "skill_id"),
    )

    op.create_table(
        "appointments",
        sa.Column("id", sa.Uuid(), nullable=False),
        _tenant_id(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("tech_id", sa.Uuid(), sa.ForeignKey("techs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("service_id", sa.Uuid(), sa.ForeignKey("services.id", ondelete="SET NULL"), nullable=True),
        sa.Column("bay_id", sa.Uuid(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*APPOINTMENT_STATUSES, name="appointment_status_enum"),
            nullable=False,
            server_default=sa.text("'SCHEDULED'"),
        ),
        sa.Column(
            "source",
            sa.Enum(*APPOINTMENT_SOURCES, name="appointment_source_enum"),
            nullable=False,
            server_default=sa.text("'STAFF'"),
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("end_time > start_time", name="ck_appointments_end_after_start"),
    )
    op.create_index("ix_appointments_tenant_id", "appointments", ["tenant_id"])
    op.create_index("ix_appointments_start_time", "appointments", ["start_time"])
    op.create_index("ix_appointments_tech_id", "appointments", ["tech_id"])


def downgrade() -> None:
    op.drop_table("appointments")
    op.drop_table("service_required_skills")
    op.drop_table("services")
    op.drop_table("tech_skills")
    op.drop_table("techs")
    op.drop_table("skills")
    op.drop_table("users")
    op.drop_table("tenants")
    sa.Enum(name="appointment_source_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="appointment_status_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="user_role_enum").drop(op.get_bind(), checkfirst=True)
