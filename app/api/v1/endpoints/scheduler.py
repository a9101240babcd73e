from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import InvalidRange
from app.core.guard import Principal
from app.core.permissions import Permission
from app.dependencies.authz import require_permission
from app.scheduling.placement import PlacedGrid
from app.scheduling.slots import format_time
from app.schemas.scheduler import (
    BusinessHoursResponse,
    DayGridResponse,
    GridBlock,
    GridCellResponse,
    GridColumn,
    SkippedAppointmentResponse,
)
from app.services.scheduler_service import build_day_grid, business_hours_from_settings

router = APIRouter()
settings = get_settings()


def _parse_day(value: str | None) -> date:
    if not value:
        raise InvalidRange("A date is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidRange(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def _to_response(day: date, placed: PlacedGrid) -> DayGridResponse:
    grid = placed.grid
    config = grid.config
    return DayGridResponse(
        date=day,
        timezone=settings.shop_timezone,
        business_hours=BusinessHoursResponse(
            day_start=format_time(config.day_start_minutes),
            day_end=format_time(config.day_end_minutes),
            slot_duration_minutes=config.slot_duration_minutes,
            slot_count=grid.slot_count,
            has_partial_last_slot=grid.has_partial_last_slot,
        ),
        columns=[GridColumn(id=c.id, name=c.display_name) for c in grid.columns],
        rows=list(grid.row_labels),
        cells=[
            GridCellResponse(
                tech_id=cell.resource_id,
                slot_index=cell.slot_index,
                time_label=grid.row_labels[cell.slot_index],
                blocks=[
                    GridBlock(
                        appointment_id=block.appointment.id,
                        title=block.appointment.title,
                        status=block.appointment.status,
                        start_index=block.start_index,
                        end_index=block.end_index,
                        span_slots=block.span_slots,
                        stack_index=block.stack_index,
                    )
                    for block in cell.blocks
                ],
            )
            for cell in placed.cells
        ],
        skipped=[
            SkippedAppointmentResponse(
                appointment_id=s.appointment_id,
                tech_id=s.resource_id,
                reason=s.reason,
            )
            for s in placed.skipped
        ],
        appointment_count=placed.placed_count + len(placed.skipped),
    )


@router.get("/day", response_model=DayGridResponse, tags=["scheduler"])
def get_day_grid(
    day_param: str | None = Query(None, alias="date", description="Calendar day, YYYY-MM-DD"),
    principal: Principal = Depends(require_permission(Permission.VIEW_SCHEDULER)),
    db: Session = Depends(get_db),
) -> DayGridResponse:
    """
    Techs x time-slot grid for one day with appointments placed on it.

    An empty `columns` list means the shop has no active techs yet.
    """
    day = _parse_day(day_param)

    placed = build_day_grid(
        db,
        tenant_id=principal.tenant_id,
        day=day,
        config=business_hours_from_settings(settings),
        tz_name=settings.shop_timezone,
    )
    return _to_response(day, placed)
