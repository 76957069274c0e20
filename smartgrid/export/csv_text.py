from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from ..column import ColumnDescriptor

T = TypeVar("T")

_NEEDS_QUOTES = (",", '"', "\n")


def escape_csv_field(value: str) -> str:
    escaped = value.replace('"', '""')
    if any(ch in value for ch in _NEEDS_QUOTES):
        return f'"{escaped}"'
    return escaped


def csv_line(fields: Iterable[str]) -> str:
    return ",".join(escape_csv_field(field) for field in fields) + "\n"


def serialize_csv(view: Sequence[T], columns: Sequence[ColumnDescriptor[T]]) -> str:
    """Render ``view`` as CSV text over exactly the supplied ``columns``.

    The first line holds the labels. Every line, the last included, ends with
    ``\\n``; an empty view yields the header line alone.
    """

    lines = [csv_line(column.label for column in columns)]
    for record in view:
        lines.append(csv_line(column.resolve_csv(record) for column in columns))
    return "".join(lines)
