from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Generic, Sequence, TypeVar

from .column import ColumnDescriptor
from .filters import FilterInputState, apply_filters
from .sorting import apply_sort

LOGGER = logging.getLogger(__name__)
T = TypeVar("T")


@dataclass(frozen=True)
class ViewState(Generic[T]):
    sort_column_index: int
    sort_ascending: bool
    view_data: tuple[T, ...] = ()

    def __len__(self) -> int:
        return len(self.view_data)

    def record_at(self, index: int | None) -> T | None:
        if index is None or not 0 <= index < len(self.view_data):
            return None
        return self.view_data[index]


def recompute(
    source: Sequence[T],
    columns: Sequence[ColumnDescriptor[T]],
    inputs: FilterInputState,
    sort_column_index: int,
    sort_ascending: bool,
) -> ViewState[T]:
    """Derive the filtered-and-sorted view from the full source collection.

    Always starts from a fresh copy of ``source``; the sort only applies when
    the column at ``sort_column_index`` exists and is sortable.
    """

    rows = apply_filters(source, columns, inputs)
    if 0 <= sort_column_index < len(columns) and columns[sort_column_index].sortable:
        rows = apply_sort(rows, columns[sort_column_index], sort_ascending)
    LOGGER.debug(
        "recomputed view: source=%d view=%d sort=%d:%s",
        len(source),
        len(rows),
        sort_column_index,
        "asc" if sort_ascending else "desc",
    )
    return ViewState(sort_column_index=sort_column_index, sort_ascending=sort_ascending, view_data=rows)
