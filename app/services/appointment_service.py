# app/services/appointment_service.py
import logging
from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import InvalidRange, ResourceNotFound
from app.core.tenant_db import tenant_query
from app.models.appointment import Appointment
from app.schemas.appointment import AppointmentCreate
from app.services.tech_service import get_service, get_tech
from app.utils.datetime_utils import day_range_utc, days_between

logger = logging.getLogger(__name__)


def validate_date_range(start: date | None, end: date | None, *, max_days: int) -> tuple[date, date]:
    """
    Check an inclusive calendar-date range before anything touches storage.
    """
    if start is None or end is None:
        raise InvalidRange("Both start and end dates are required")
    if end < start:
        raise InvalidRange(f"End date {end.isoformat()} is before start date {start.isoformat()}")
    if days_between(start, end) > max_days:
        raise InvalidRange(f"Date range may cover at most {max_days} days")
    return start, end


def list_appointments(
    db: Session,
    *,
    tenant_id: UUID,
    start_date: date,
    end_date: date,
    tz_name: str,
    tech_id: UUID | None = None,
) -> list[Appointment]:
    """
    Appointments starting within [start_date 00:00:00.000, end_date 23:59:59.999]
    in the shop timezone, oldest first. Creation order breaks ties so that
    grid stacking is stable.
    """
    range_start, range_end = day_range_utc(start_date, end_date, tz_name)

    query = tenant_query(db, Appointment, tenant_id).filter(
        Appointment.start_time >= range_start,
        Appointment.start_time <= range_end,
    )
    if tech_id is not None:
        query = query.filter(Appointment.tech_id == tech_id)

    return query.order_by(Appointment.start_time, Appointment.created_at, Appointment.id).all()


def create_appointment(db: Session, *, tenant_id: UUID, appointment_in: AppointmentCreate) -> Appointment:
    """
    Book an appointment for a tech in the given tenant.

    The tech (and service, when given) must belong to the same tenant.
    Overlapping bookings for a tech are accepted as-is.
    """
    if get_tech(db, tenant_id=tenant_id, tech_id=appointment_in.tech_id) is None:
        raise ResourceNotFound("Tech", appointment_in.tech_id)

    if appointment_in.service_id is not None:
        if get_service(db, tenant_id=tenant_id, service_id=appointment_in.service_id) is None:
            raise ResourceNotFound("Service", appointment_in.service_id)

    appointment = Appointment(
        tenant_id=tenant_id,
        title=appointment_in.title,
        start_time=appointment_in.start_time,
        end_time=appointment_in.end_time,
        tech_id=appointment_in.tech_id,
        service_id=appointment_in.service_id,
        bay_id=appointment_in.bay_id,
        status=appointment_in.status,
        source=appointment_in.source,
    )
    db.add(appointment)
    db.flush()
    logger.info("Created appointment %s for tech %s", appointment.id, appointment.tech_id)
    return appointment
