from datetime import date
from uuid import UUID

from pydantic import BaseModel

from app.scheduling.placement import SkipReason


class BusinessHoursResponse(BaseModel):
    day_start: str
    day_end: str
    slot_duration_minutes: int
    slot_count: int
    has_partial_last_slot: bool


class GridColumn(BaseModel):
    id: UUID
    name: str


class GridBlock(BaseModel):
    appointment_id: UUID
    title: str
    status: str
    start_index: int
    end_index: int
    span_slots: int
    stack_index: int


class GridCellResponse(BaseModel):
    tech_id: UUID
    slot_index: int
    time_label: str
    blocks: list[GridBlock]


class SkippedAppointmentResponse(BaseModel):
    appointment_id: UUID
    tech_id: UUID
    reason: SkipReason


class DayGridResponse(BaseModel):
    ok: bool = True
    date: date
    timezone: str
    business_hours: BusinessHoursResponse
    columns: list[GridColumn]
    rows: list[str]
    cells: list[GridCellResponse]
    skipped: list[SkippedAppointmentResponse]
    appointment_count: int
