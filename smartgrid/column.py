from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Callable, Generic, Literal, TypeVar

T = TypeVar("T")

FilterKind = Literal["none", "text", "number_range", "date_range", "select"]
FILTER_KINDS: tuple[str, ...] = ("none", "text", "number_range", "date_range", "select")


@dataclass(frozen=True)
class ColumnDescriptor(Generic[T]):
    """Declarative description of how one column reads a record.

    Every behavior is supplied from the outside through accessors so the grid
    stays generic over the record type. A filter kind without its matching
    accessor is inert.
    """

    label: str
    numeric: bool = False
    sortable: bool = False
    sort_key: Callable[[T], Any] | None = None
    csv_value: Callable[[T], str | None] | None = None
    filter_kind: FilterKind = "none"
    filter_text: Callable[[T], str] | None = None
    filter_number: Callable[[T], float] | None = None
    filter_date: Callable[[T], dt.date] | None = None
    filter_select: Callable[[T], str] | None = None
    options: tuple[str, ...] = ()
    display: Callable[[T], str] | None = None

    def __post_init__(self) -> None:
        if not self.label.strip():
            raise ValueError("column label must be non-empty")
        if self.filter_kind not in FILTER_KINDS:
            raise ValueError(f"Unsupported filter kind: {self.filter_kind}")
        object.__setattr__(self, "options", tuple(self.options))

    @property
    def filter_accessor(self) -> Callable[[T], Any] | None:
        if self.filter_kind == "text":
            return self.filter_text
        if self.filter_kind == "number_range":
            return self.filter_number
        if self.filter_kind == "date_range":
            return self.filter_date
        if self.filter_kind == "select":
            return self.filter_select
        return None

    @property
    def filterable(self) -> bool:
        return self.filter_accessor is not None

    @property
    def can_sort(self) -> bool:
        return self.sortable and self.sort_key is not None

    def resolve_csv(self, record: T) -> str:
        """Resolve the export text for ``record``.

        Resolution order: ``csv_value``, then the stringified ``sort_key``
        result, then the empty string. A tier returning ``None`` falls through.
        """

        if self.csv_value is not None:
            value = self.csv_value(record)
            if value is not None:
                return value
        if self.sort_key is not None:
            key = self.sort_key(record)
            if key is not None:
                return str(key)
        return ""

    def cell_text(self, record: T) -> str:
        if self.display is not None:
            return self.display(record)
        return self.resolve_csv(record)
