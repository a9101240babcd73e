from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from app.models.appointment import AppointmentSource, AppointmentStatus
from app.utils.datetime_utils import as_utc


class AppointmentCreate(BaseModel):
    title: str
    start_time: datetime
    end_time: datetime
    tech_id: UUID
    service_id: UUID | None = None
    bay_id: UUID | None = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    source: AppointmentSource = AppointmentSource.STAFF

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v_trimmed = v.strip()
        if not v_trimmed:
            raise ValueError("Title is required")
        if len(v_trimmed) > 200:
            raise ValueError("Title must be at most 200 characters long")
        return v_trimmed

    @model_validator(mode="after")
    def validate_time_range(self) -> "AppointmentCreate":
        # Naive timestamps are taken as UTC; everything is stored in UTC
        self.start_time = as_utc(self.start_time)
        self.end_time = as_utc(self.end_time)
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class AppointmentResponse(BaseModel):
    id: UUID
    tenant_id: UUID
    title: str
    start_time: datetime
    end_time: datetime
    tech_id: UUID
    service_id: UUID | None = None
    bay_id: UUID | None = None
    status: AppointmentStatus
    source: AppointmentSource
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("start_time", "end_time", "created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class AppointmentListResponse(BaseModel):
    ok: bool = True
    appointments: list[AppointmentResponse]
