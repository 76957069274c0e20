from __future__ import annotations

import datetime as dt
from decimal import Decimal
from fractions import Fraction
import math
from typing import Any, Sequence, TypeVar

from .column import ColumnDescriptor

T = TypeVar("T")


def apply_sort(view: Sequence[T], column: ColumnDescriptor[T], ascending: bool) -> tuple[T, ...]:
    """Stable single-key sort of ``view`` by ``column.sort_key``.

    Records whose key is ``None`` or NaN keep their relative order after every
    keyed record, whichever the direction.
    """

    rows = tuple(view)
    if not column.can_sort:
        return rows
    get_key = column.sort_key
    keyed: list[tuple[tuple[Any, ...], T]] = []
    missing: list[T] = []
    for record in rows:
        value = get_key(record)
        if value is None or _is_nan(value):
            missing.append(record)
        else:
            keyed.append((_sort_key(value), record))
    try:
        ordered = sorted(keyed, key=lambda pair: pair[0], reverse=not ascending)
    except TypeError:
        # same-rank keys that do not compare with each other
        ordered = sorted(keyed, key=lambda pair: _fallback_key(pair[0]), reverse=not ascending)
    return tuple(record for _, record in ordered) + tuple(missing)


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def _sort_key(value: Any) -> tuple[Any, ...]:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float, Decimal, Fraction)):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    if isinstance(value, dt.datetime):
        return (2, _naive_utc(value))
    if isinstance(value, dt.date):
        return (2, dt.datetime.combine(value, dt.time()))
    return (3, type(value).__name__, value)


def _naive_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=None)
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)


def _fallback_key(key: tuple[Any, ...]) -> tuple[Any, ...]:
    return key[:-1] + (str(key[-1]),)
