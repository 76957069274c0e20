from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence, TypeVar

T = TypeVar("T")

NavCommand = Literal["up", "down", "page_up", "page_down", "activate"]


@dataclass(frozen=True)
class KeyboardNavigator:
    """Index math for arrow/page keys under single selection.

    Every result is clamped into the view; an empty view makes every command
    a no-op. Paging lands on the first row of the page holding the candidate.
    """

    page_size: int = 10

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be > 0")

    def move(self, command: NavCommand, selected: int | None, length: int) -> int | None:
        if length <= 0:
            return selected
        current = 0 if selected is None else selected
        last = length - 1
        if command == "down":
            return _clamp(current + 1, last)
        if command == "up":
            return _clamp(current - 1, last)
        if command == "page_down":
            return self.page_start(_clamp(current + self.page_size, last))
        if command == "page_up":
            return self.page_start(_clamp(current - self.page_size, last))
        return selected

    def activate(self, selected: int | None, view: Sequence[T]) -> T | None:
        if selected is None or not 0 <= selected < len(view):
            return None
        return view[selected]

    def page_start(self, index: int) -> int:
        return (index // self.page_size) * self.page_size

    def page_of(self, index: int) -> int:
        return index // self.page_size


def _clamp(value: int, last: int) -> int:
    return min(max(0, value), last)
