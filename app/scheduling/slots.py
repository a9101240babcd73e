"""
Slot mapping for the day scheduler grid.

Business hours are split into fixed-duration slots; an appointment's
start/end timestamps are turned into a half-open range of slot indices,
clipped to the working day.

All arithmetic is in whole minutes from midnight:

    raw_start = floor((start - day_start) / slot)
    raw_end   = ceil((end - day_start) / slot)

Anything that starts before opening is pinned to the first slot. This is a
rendering approximation only: the stored appointment is not touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.core.errors import OutOfRange

MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str) -> int:
    """
    Parse "HH:MM" into minutes from midnight. "24:00" is accepted as end of day.
    """
    try:
        hours_str, minutes_str = value.strip().split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except ValueError:
        raise ValueError(f"Invalid clock time {value!r}, expected HH:MM") from None

    total = hours * 60 + minutes
    if not (0 <= minutes < 60) or not (0 <= total <= MINUTES_PER_DAY):
        raise ValueError(f"Invalid clock time {value!r}")
    return total


def format_time(minutes_from_midnight: int) -> str:
    hours, minutes = divmod(minutes_from_midnight, 60)
    return f"{hours:02d}:{minutes:02d}"


def minutes_from_midnight(dt: datetime) -> int:
    """Wall-clock minutes of dt on its own calendar day; seconds are dropped."""
    return dt.hour * 60 + dt.minute


def _ceil_div(numerator: int, denominator: int) -> int:
    return -((-numerator) // denominator)


@dataclass(frozen=True)
class BusinessHoursConfig:
    """
    Working day window and slot size, in minutes from midnight.

    When the window is not a whole number of slots, the final row is a
    partial slot: it is kept (slot_count rounds up) and reported through
    has_partial_last_slot.
    """

    day_start_minutes: int
    day_end_minutes: int
    slot_duration_minutes: int

    def __post_init__(self) -> None:
        if self.slot_duration_minutes <= 0:
            raise ValueError("slot_duration_minutes must be positive")
        if not (0 <= self.day_start_minutes < self.day_end_minutes <= MINUTES_PER_DAY):
            raise ValueError(
                f"Business hours must satisfy 0 <= start < end <= {MINUTES_PER_DAY}, "
                f"got {self.day_start_minutes}-{self.day_end_minutes}"
            )

    @classmethod
    def from_clock(cls, day_start: str, day_end: str, slot_duration_minutes: int) -> "BusinessHoursConfig":
        return cls(
            day_start_minutes=parse_clock(day_start),
            day_end_minutes=parse_clock(day_end),
            slot_duration_minutes=slot_duration_minutes,
        )

    @property
    def day_length_minutes(self) -> int:
        return self.day_end_minutes - self.day_start_minutes

    @property
    def slot_count(self) -> int:
        return _ceil_div(self.day_length_minutes, self.slot_duration_minutes)

    @property
    def has_partial_last_slot(self) -> bool:
        return self.day_length_minutes % self.slot_duration_minutes != 0

    def slot_start_minutes(self, index: int) -> int:
        return self.day_start_minutes + index * self.slot_duration_minutes

    def row_labels(self) -> tuple[str, ...]:
        return tuple(format_time(self.slot_start_minutes(i)) for i in range(self.slot_count))


# Reference deployment: 08:00-17:00 in 30 minute slots (18 rows)
DEFAULT_BUSINESS_HOURS = BusinessHoursConfig(
    day_start_minutes=8 * 60,
    day_end_minutes=17 * 60,
    slot_duration_minutes=30,
)


@dataclass(frozen=True)
class SlotRange:
    """Half-open range of slot indices, end_index exclusive."""

    start_index: int
    end_index: int

    @property
    def span_slots(self) -> int:
        return self.end_index - self.start_index

    def __contains__(self, index: int) -> bool:
        return self.start_index <= index < self.end_index


def map_interval(start: datetime, end: datetime, config: BusinessHoursConfig) -> SlotRange:
    """
    Map a start/end pair onto the grid's slot indices.

    - Clipped to [0, slot_count).
    - Always at least one slot wide, even for zero-length or pre-opening intervals.
    - Raises OutOfRange when the interval starts at or past the last slot row.
      With a partial last slot, a start shortly after closing time can still
      fall inside that row and is placed there.
    """
    slot = config.slot_duration_minutes
    slot_count = config.slot_count

    start_offset = minutes_from_midnight(start) - config.day_start_minutes
    end_offset = minutes_from_midnight(end) - config.day_start_minutes

    start_index = max(start_offset // slot, 0)
    end_index = min(_ceil_div(end_offset, slot), slot_count)

    if start_index >= slot_count:
        raise OutOfRange(
            f"Interval starting {format_time(minutes_from_midnight(start))} is after "
            f"closing time {format_time(config.day_end_minutes)}"
        )

    if end_index <= start_index:
        end_index = start_index + 1

    return SlotRange(start_index=start_index, end_index=end_index)
