# app/api/v1/endpoints/appointments.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.guard import Principal
from app.core.permissions import Permission
from app.dependencies.authz import require_permission
from app.schemas.appointment import AppointmentCreate, AppointmentListResponse, AppointmentResponse
from app.services.appointment_service import (
    create_appointment,
    list_appointments,
    validate_date_range,
)

router = APIRouter()
logger = logging.getLogger(__name__)
settings = get_settings()


@router.get("", response_model=AppointmentListResponse, tags=["appointments"])
def get_appointments(
    start: Optional[date] = Query(None, description="First calendar day (inclusive), YYYY-MM-DD"),
    end: Optional[date] = Query(None, description="Last calendar day (inclusive), YYYY-MM-DD"),
    tech_id: Optional[UUID] = Query(None),
    principal: Principal = Depends(require_permission(Permission.VIEW_SCHEDULER)),
    db: Session = Depends(get_db),
) -> AppointmentListResponse:
    """
    Appointments whose start falls within the inclusive date range, in the shop timezone.
    """
    start, end = validate_date_range(start, end, max_days=settings.max_range_days)

    appointments = list_appointments(
        db,
        tenant_id=principal.tenant_id,
        start_date=start,
        end_date=end,
        tz_name=settings.shop_timezone,
        tech_id=tech_id,
    )
    return AppointmentListResponse(
        appointments=[AppointmentResponse.model_validate(a) for a in appointments],
    )


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED, tags=["appointments"])
def post_appointment(
    appointment_in: AppointmentCreate,
    principal: Principal = Depends(require_permission(Permission.CREATE_APPOINTMENT)),
    db: Session = Depends(get_db),
) -> AppointmentResponse:
    """
    Book an appointment. Status defaults to SCHEDULED.

    Double-booking a tech is not rejected.
    """
    try:
        appointment = create_appointment(db, tenant_id=principal.tenant_id, appointment_in=appointment_in)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create appointment for tenant=%s", principal.tenant_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create appointment.",
        ) from exc

    db.refresh(appointment)
    return AppointmentResponse.model_validate(appointment)
