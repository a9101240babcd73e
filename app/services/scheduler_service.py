# app/services/scheduler_service.py
"""
Day grid composition: techs + appointments + business hours -> PlacedGrid.

Storage reads happen here; the grid engine itself (app.scheduling) never
touches the database.
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.models.appointment import Appointment
from app.models.tech import Tech
from app.scheduling.grid import Resource, build_grid
from app.scheduling.placement import AppointmentSnapshot, PlacedGrid, place_appointments
from app.scheduling.slots import BusinessHoursConfig
from app.services.appointment_service import list_appointments
from app.services.tech_service import list_techs
from app.utils.datetime_utils import to_local

logger = logging.getLogger(__name__)


def business_hours_from_settings(settings: Settings) -> BusinessHoursConfig:
    return BusinessHoursConfig.from_clock(
        settings.business_day_start,
        settings.business_day_end,
        settings.slot_duration_minutes,
    )


def tech_to_resource(tech: Tech) -> Resource:
    return Resource(id=tech.id, display_name=tech.name)


def appointment_to_snapshot(appointment: Appointment, tz_name: str) -> AppointmentSnapshot:
    """Freeze an ORM row into the grid's read-only view, in shop wall-clock time."""
    return AppointmentSnapshot(
        id=appointment.id,
        tenant_id=appointment.tenant_id,
        title=appointment.title,
        start_time=to_local(appointment.start_time, tz_name),
        end_time=to_local(appointment.end_time, tz_name),
        resource_id=appointment.tech_id,
        status=appointment.status.value,
        service_id=appointment.service_id,
        bay_id=appointment.bay_id,
    )


def build_day_grid(
    db: Session,
    *,
    tenant_id: UUID,
    day: date,
    config: BusinessHoursConfig,
    tz_name: str,
) -> PlacedGrid:
    techs = list_techs(db, tenant_id=tenant_id)
    appointments = list_appointments(
        db,
        tenant_id=tenant_id,
        start_date=day,
        end_date=day,
        tz_name=tz_name,
    )

    grid = build_grid((tech_to_resource(t) for t in techs), config, tenant_id=tenant_id)
    placed = place_appointments(grid, (appointment_to_snapshot(a, tz_name) for a in appointments))

    if placed.skipped:
        logger.info(
            "Day grid %s tenant=%s: %d placed, %d skipped",
            day.isoformat(),
            tenant_id,
            placed.placed_count,
            len(placed.skipped),
        )
    return placed
