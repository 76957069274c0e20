from __future__ import annotations

from typing import Collection, Iterable, Sequence, TypeVar

from .column import ColumnDescriptor

T = TypeVar("T")


def visible_columns(
    columns: Sequence[ColumnDescriptor[T]], visible_labels: Collection[str]
) -> tuple[ColumnDescriptor[T], ...]:
    return tuple(column for column in columns if column.label in visible_labels)


class ColumnVisibility:
    """User-toggled set of visible column labels.

    Only affects what is handed to rendering; filtering, sorting and export
    keep working over the full column list.
    """

    def __init__(self, labels: Iterable[str]) -> None:
        self._all = tuple(dict.fromkeys(labels))
        self._visible = set(self._all)

    @property
    def labels(self) -> frozenset[str]:
        return frozenset(self._visible)

    def is_visible(self, label: str) -> bool:
        return label in self._visible

    def toggle(self, label: str) -> bool:
        if label not in self._all:
            return False
        if label in self._visible:
            self._visible.discard(label)
        else:
            self._visible.add(label)
        return True

    def set_visible(self, labels: Iterable[str]) -> None:
        self._visible = {label for label in labels if label in self._all}

    def show_all(self) -> None:
        self._visible = set(self._all)

    def reset(self, labels: Iterable[str]) -> None:
        """Adopt a new column set, keeping hidden labels that still exist hidden."""

        hidden = set(self._all) - self._visible
        self._all = tuple(dict.fromkeys(labels))
        self._visible = {label for label in self._all if label not in hidden}

    def apply(self, columns: Sequence[ColumnDescriptor[T]]) -> tuple[ColumnDescriptor[T], ...]:
        return visible_columns(columns, self._visible)
