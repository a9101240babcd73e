import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TenantScopedMixin
from app.models.tech import Skill

service_required_skills = Table(
    "service_required_skills",
    Base.metadata,
    Column("service_id", Uuid, ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Uuid, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class Service(TenantScopedMixin, Base):
    """
    A bookable shop service (oil change, brake job, ...).
    Required skills are stored for display only; nothing matches them against techs.
    """

    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    required_skills: Mapped[list["Skill"]] = relationship(
        Skill,
        secondary=service_required_skills,
        lazy="selectin",
        order_by="Skill.name",
    )
