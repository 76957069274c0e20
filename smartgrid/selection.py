from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Hashable, Literal, Protocol, Sequence

SelectionModeName = Literal["single", "multi"]
TapOutcome = Literal["activate", "selected", "deselected", "ignored"]
IdentityFn = Callable[[object], Hashable]


class SelectionMode(Protocol):
    @property
    def selected_count(self) -> int:
        ...

    def is_selected(self, index: int) -> bool:
        ...

    def selected_indices(self) -> tuple[int, ...]:
        ...

    def toggle(self, index: int) -> TapOutcome:
        ...

    def tap(self, index: int) -> TapOutcome:
        ...

    def clear(self) -> None:
        ...

    def remap(self, previous_view: Sequence[object], new_view: Sequence[object]) -> None:
        ...


@dataclass
class SingleSelection:
    """At most one selected row; a second tap on it activates the row."""

    identity: IdentityFn | None = None
    selected: int | None = None

    @property
    def selected_count(self) -> int:
        return 0 if self.selected is None else 1

    def is_selected(self, index: int) -> bool:
        return self.selected == index

    def selected_indices(self) -> tuple[int, ...]:
        return () if self.selected is None else (self.selected,)

    def select(self, index: int | None) -> None:
        self.selected = index

    def toggle(self, index: int) -> TapOutcome:
        if self.selected == index:
            self.selected = None
            return "deselected"
        self.selected = index
        return "selected"

    def tap(self, index: int) -> TapOutcome:
        if self.selected == index:
            return "activate"
        self.selected = index
        return "selected"

    def clear(self) -> None:
        self.selected = None

    def remap(self, previous_view: Sequence[object], new_view: Sequence[object]) -> None:
        if self.selected is None:
            return
        remapped = _remap_indices((self.selected,), previous_view, new_view, self.identity)
        self.selected = remapped[0] if remapped else None


@dataclass
class MultiSelection:
    """Zero or more selected rows driven by per-row checkbox toggles."""

    identity: IdentityFn | None = None
    selected: frozenset[int] = field(default_factory=frozenset)

    @property
    def selected_count(self) -> int:
        return len(self.selected)

    def is_selected(self, index: int) -> bool:
        return index in self.selected

    def selected_indices(self) -> tuple[int, ...]:
        return tuple(sorted(self.selected))

    def toggle(self, index: int) -> TapOutcome:
        if index in self.selected:
            self.selected = self.selected - {index}
            return "deselected"
        self.selected = self.selected | {index}
        return "selected"

    def tap(self, index: int) -> TapOutcome:
        if index in self.selected:
            return "activate"
        self.selected = self.selected | {index}
        return "selected"

    def clear(self) -> None:
        self.selected = frozenset()

    def remap(self, previous_view: Sequence[object], new_view: Sequence[object]) -> None:
        if not self.selected:
            return
        self.selected = frozenset(_remap_indices(self.selected_indices(), previous_view, new_view, self.identity))


def make_selection(mode: SelectionModeName, identity: IdentityFn | None = None) -> SelectionMode:
    if mode == "single":
        return SingleSelection(identity=identity)
    if mode == "multi":
        return MultiSelection(identity=identity)
    raise ValueError(f"Unsupported selection mode: {mode}")


def _remap_indices(
    indices: Sequence[int],
    previous_view: Sequence[object],
    new_view: Sequence[object],
    identity: IdentityFn | None,
) -> tuple[int, ...]:
    """Translate view positions across a recompute.

    With an identity extractor each selected record is followed to its new
    position and dropped when it left the view. Without one, positions are
    kept as-is but anything past the new view length is dropped.
    """

    if identity is None:
        return tuple(i for i in indices if 0 <= i < len(new_view))
    positions: dict[Hashable, int] = {}
    for position, record in enumerate(new_view):
        positions.setdefault(identity(record), position)
    out: list[int] = []
    for index in indices:
        if not 0 <= index < len(previous_view):
            continue
        position = positions.get(identity(previous_view[index]))
        if position is not None:
            out.append(position)
    return tuple(sorted(set(out)))
