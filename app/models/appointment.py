# app/models/appointment.py
import uuid
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    String,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TenantScopedMixin
from app.models.service import Service
from app.models.tech import Tech
from app.utils.datetime_utils import utc_now


class AppointmentStatus(str, PyEnum):
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"
    CANCELLED = "CANCELLED"


class AppointmentSource(str, PyEnum):
    STAFF = "STAFF"
    PHONE = "PHONE"
    ONLINE = "ONLINE"
    WALK_IN = "WALK_IN"


class Appointment(TenantScopedMixin, Base):
    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_appointments_end_after_start"),
    )

    # Primary Key
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    # Time range
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    end_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Foreign Keys
    tech_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("techs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Technician (grid column) this appointment is booked on",
    )
    service_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("services.id", ondelete="SET NULL"),
        nullable=True,
    )
    bay_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        nullable=True,
        doc="Service bay; bays are not modelled as their own table yet",
    )

    status: Mapped[AppointmentStatus] = mapped_column(
        Enum(AppointmentStatus, name="appointment_status_enum"),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
        server_default=text("'SCHEDULED'"),
    )
    source: Mapped[AppointmentSource] = mapped_column(
        Enum(AppointmentSource, name="appointment_source_enum"),
        nullable=False,
        default=AppointmentSource.STAFF,
        server_default=text("'STAFF'"),
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,  # sub-second precision keeps same-start bookings in booking order
        server_default=text("CURRENT_TIMESTAMP"),
    )

    tech: Mapped["Tech"] = relationship("Tech")
    service: Mapped["Service | None"] = relationship("Service")
