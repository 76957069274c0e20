from __future__ import annotations

import dataclasses
import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence, TypeVar

from .column import ColumnDescriptor

T = TypeVar("T")


@dataclass(frozen=True)
class FilterInput:
    """Raw, uninterpreted input for one column's filter control.

    ``text`` backs the ``text`` and ``select`` kinds; ``minimum`` and
    ``maximum`` back the range kinds.
    """

    text: str = ""
    minimum: str | None = None
    maximum: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.minimum and not self.maximum


EMPTY_INPUT = FilterInput()


class FilterInputState:
    """Raw filter input slots keyed by column index."""

    def __init__(self) -> None:
        self._slots: dict[int, FilterInput] = {}

    def get(self, index: int) -> FilterInput:
        return self._slots.get(index, EMPTY_INPUT)

    def set_text(self, index: int, raw: str) -> bool:
        return self._put(index, dataclasses.replace(self.get(index), text=raw))

    def set_range(self, index: int, minimum: str | None, maximum: str | None) -> bool:
        return self._put(index, dataclasses.replace(self.get(index), minimum=minimum, maximum=maximum))

    def clear(self, index: int) -> bool:
        return self._slots.pop(index, EMPTY_INPUT) != EMPTY_INPUT

    def clear_all(self) -> bool:
        changed = any(not slot.is_empty for slot in self._slots.values())
        self._slots.clear()
        return changed

    def active_indices(self) -> tuple[int, ...]:
        return tuple(sorted(i for i, slot in self._slots.items() if not slot.is_empty))

    def _put(self, index: int, slot: FilterInput) -> bool:
        if index < 0:
            raise ValueError("filter column index must be >= 0")
        previous = self.get(index)
        if slot.is_empty:
            self._slots.pop(index, None)
        else:
            self._slots[index] = slot
        return previous != slot


def parse_number_bound(raw: str | None) -> float | None:
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_date_bound(raw: str | None) -> dt.date | None:
    """Parse a ``YYYY-MM-DD`` bound; anything else is treated as no bound."""

    text = (raw or "").strip()
    parts = text.split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None
    try:
        return dt.date(int(parts[0]), int(parts[1]), int(parts[2]))
    except ValueError:
        return None


def build_predicate(column: ColumnDescriptor[T], slot: FilterInput) -> Callable[[T], bool] | None:
    """Derive the predicate for one column, or ``None`` when it is inert."""

    accessor = column.filter_accessor
    if accessor is None:
        return None
    kind = column.filter_kind
    if kind == "text":
        query = slot.text.strip().casefold()
        if not query:
            return None
        return lambda record: query in str(accessor(record) or "").casefold()
    if kind == "select":
        wanted = slot.text
        if not wanted:
            return None
        return lambda record: accessor(record) == wanted
    if kind == "number_range":
        low = parse_number_bound(slot.minimum)
        high = parse_number_bound(slot.maximum)
        if low is None and high is None:
            return None
        return lambda record: _within(accessor(record), low, high)
    if kind == "date_range":
        start = parse_date_bound(slot.minimum)
        end = parse_date_bound(slot.maximum)
        if start is None and end is None:
            return None
        return lambda record: _within_dates(accessor(record), start, end)
    return None


def apply_filters(
    source: Sequence[T],
    columns: Sequence[ColumnDescriptor[T]],
    inputs: FilterInputState,
) -> tuple[T, ...]:
    """Narrow ``source`` column by column; all active predicates are ANDed."""

    out = tuple(source)
    for index, column in enumerate(columns):
        predicate = build_predicate(column, inputs.get(index))
        if predicate is None:
            continue
        out = tuple(record for record in out if predicate(record))
    return out


def _within(value: Any, low: Any, high: Any) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _within_dates(value: dt.date, start: dt.date | None, end: dt.date | None) -> bool:
    if isinstance(value, dt.datetime):
        return _within(value, _midnight(start, value), _midnight(end, value))
    return _within(value, start, end)


def _midnight(day: dt.date | None, like: dt.datetime) -> dt.datetime | None:
    if day is None:
        return None
    return dt.datetime.combine(day, dt.time(), tzinfo=like.tzinfo)
