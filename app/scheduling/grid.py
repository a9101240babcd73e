"""
Empty grid skeleton: time rows x resource (tech) columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable
from uuid import UUID

from app.scheduling.slots import BusinessHoursConfig


@dataclass(frozen=True)
class Resource:
    """A grid column: a technician (or bay)."""

    id: Hashable
    display_name: str


@dataclass(frozen=True)
class Grid:
    config: BusinessHoursConfig
    columns: tuple[Resource, ...]
    row_labels: tuple[str, ...]
    tenant_id: UUID

    @property
    def slot_count(self) -> int:
        return len(self.row_labels)

    @property
    def has_partial_last_slot(self) -> bool:
        return self.config.has_partial_last_slot

    @property
    def is_empty(self) -> bool:
        """No columns. Callers render a "no techs" message instead of a grid."""
        return not self.columns

    def column_index(self, resource_id: Hashable) -> int | None:
        for index, column in enumerate(self.columns):
            if column.id == resource_id:
                return index
        return None


def build_grid(
    resources: Iterable[Resource],
    config: BusinessHoursConfig,
    tenant_id: UUID,
) -> Grid:
    """
    Build the grid skeleton.

    Column order is the caller's order; nothing is sorted here. An empty
    resource list gives a valid grid with zero columns. Only appointments of
    tenant_id are ever placed on it.
    """
    columns = tuple(resources)

    seen: set[Hashable] = set()
    for column in columns:
        if column.id in seen:
            raise ValueError(f"Duplicate resource column {column.id!r}")
        seen.add(column.id)

    return Grid(
        config=config,
        columns=columns,
        row_labels=config.row_labels(),
        tenant_id=tenant_id,
    )
