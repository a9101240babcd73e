"""
Places appointments onto a grid built by app.scheduling.grid.

Each appointment becomes one block anchored at its start cell
(tech, start slot) and spanning span_slots rows. Blocks that share a start
cell are stacked in input order. Overlapping bookings are not detected or
rejected; the renderer decides how to lay stacked blocks out.

Appointments that cannot be placed are skipped and reported, never fatal:
techs and appointments are fetched separately and may briefly disagree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum as PyEnum
from typing import Hashable, Iterable
from uuid import UUID

from app.core.errors import OutOfRange
from app.scheduling.grid import Grid
from app.scheduling.slots import SlotRange, map_interval

logger = logging.getLogger(__name__)


class SkipReason(str, PyEnum):
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    TENANT_MISMATCH = "TENANT_MISMATCH"
    INVALID_INTERVAL = "INVALID_INTERVAL"


@dataclass(frozen=True)
class AppointmentSnapshot:
    """
    Read-only view of an appointment as the grid sees it.

    start_time/end_time are wall-clock times in the shop's timezone.
    """

    id: Hashable
    tenant_id: UUID | None
    title: str
    start_time: datetime
    end_time: datetime
    resource_id: Hashable
    status: str
    service_id: Hashable | None = None
    bay_id: Hashable | None = None


@dataclass(frozen=True)
class PlacedBlock:
    appointment: AppointmentSnapshot
    slot_range: SlotRange
    stack_index: int

    @property
    def resource_id(self) -> Hashable:
        return self.appointment.resource_id

    @property
    def start_index(self) -> int:
        return self.slot_range.start_index

    @property
    def end_index(self) -> int:
        return self.slot_range.end_index

    @property
    def span_slots(self) -> int:
        return self.slot_range.span_slots

    def height(self, row_height: int) -> int:
        return self.span_slots * row_height


@dataclass(frozen=True)
class GridCell:
    resource_id: Hashable
    slot_index: int
    blocks: tuple[PlacedBlock, ...]


@dataclass(frozen=True)
class SkippedAppointment:
    appointment_id: Hashable
    resource_id: Hashable
    reason: SkipReason


@dataclass(frozen=True)
class PlacedGrid:
    grid: Grid
    cells: tuple[GridCell, ...]
    skipped: tuple[SkippedAppointment, ...]

    def blocks_at(self, resource_id: Hashable, slot_index: int) -> tuple[PlacedBlock, ...]:
        for cell in self.cells:
            if cell.resource_id == resource_id and cell.slot_index == slot_index:
                return cell.blocks
        return ()

    @property
    def placed_count(self) -> int:
        return sum(len(cell.blocks) for cell in self.cells)


def _skip(appointment: AppointmentSnapshot, reason: SkipReason) -> SkippedAppointment:
    return SkippedAppointment(
        appointment_id=appointment.id,
        resource_id=appointment.resource_id,
        reason=reason,
    )


def place_appointments(grid: Grid, appointments: Iterable[AppointmentSnapshot]) -> PlacedGrid:
    """
    Place appointments onto the grid.

    Neither the grid nor the appointments are mutated; the same inputs always
    give an equal PlacedGrid.
    """
    cell_blocks: dict[tuple[int, int], list[PlacedBlock]] = {}
    skipped: list[SkippedAppointment] = []

    for appointment in appointments:
        if appointment.tenant_id != grid.tenant_id:
            # Never render another tenant's booking, even if ids collide
            logger.warning("Skipping appointment %s: belongs to a different tenant", appointment.id)
            skipped.append(_skip(appointment, SkipReason.TENANT_MISMATCH))
            continue

        column = grid.column_index(appointment.resource_id)
        if column is None:
            logger.debug(
                "Skipping appointment %s: tech %s is not a grid column",
                appointment.id,
                appointment.resource_id,
            )
            skipped.append(_skip(appointment, SkipReason.RESOURCE_NOT_FOUND))
            continue

        if appointment.end_time < appointment.start_time:
            logger.debug("Skipping appointment %s: ends before it starts", appointment.id)
            skipped.append(_skip(appointment, SkipReason.INVALID_INTERVAL))
            continue

        try:
            slot_range = map_interval(appointment.start_time, appointment.end_time, grid.config)
        except OutOfRange as exc:
            logger.debug("Skipping appointment %s: %s", appointment.id, exc)
            skipped.append(_skip(appointment, SkipReason.OUT_OF_RANGE))
            continue

        stack = cell_blocks.setdefault((column, slot_range.start_index), [])
        stack.append(PlacedBlock(appointment=appointment, slot_range=slot_range, stack_index=len(stack)))

    if skipped:
        logger.debug("Placed %d appointment(s), skipped %d", sum(map(len, cell_blocks.values())), len(skipped))

    cells = tuple(
        GridCell(
            resource_id=grid.columns[column].id,
            slot_index=slot_index,
            blocks=tuple(blocks),
        )
        for (column, slot_index), blocks in sorted(cell_blocks.items())
    )
    return PlacedGrid(grid=grid, cells=cells, skipped=tuple(skipped))
