from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Callable, Generic, Hashable, Sequence, TypeVar

from .column import ColumnDescriptor
from .config import DEFAULT_CONFIG, ROW_HEIGHTS, GridConfig, RowDensity
from .export.csv_text import serialize_csv
from .filters import FilterInputState
from .keys import KeyPressEvent, command_for_key
from .navigation import KeyboardNavigator, NavCommand
from .selection import SelectionMode, SingleSelection, TapOutcome, make_selection
from .view import ViewState, recompute
from .visibility import ColumnVisibility

LOGGER = logging.getLogger(__name__)
T = TypeVar("T")


@dataclass(frozen=True)
class GridState:
    sort_column_index: int
    sort_ascending: bool
    page_index: int
    page_size: int
    source_count: int
    view_count: int
    selected: tuple[int, ...]
    active_filters: tuple[int, ...]
    visible_labels: tuple[str, ...]
    density: RowDensity


@dataclass
class SmartGrid(Generic[T]):
    """One interactive grid session over an in-memory collection.

    Owns the filter inputs, sort state, selection and column visibility, and
    recomputes the view synchronously whenever one of its inputs changes.
    """

    columns: tuple[ColumnDescriptor[T], ...] = ()
    source: Sequence[T] = ()
    config: GridConfig = DEFAULT_CONFIG
    identity: Callable[[T], Hashable] | None = None
    on_activate: Callable[[T], None] | None = None
    sort_column_index: int = 0
    sort_ascending: bool = True
    page_index: int = 0
    inputs: FilterInputState = field(default_factory=FilterInputState, init=False, repr=False)
    view: ViewState[T] = field(default_factory=lambda: ViewState(0, True), init=False, repr=False)
    selection: SelectionMode = field(init=False, repr=False)
    visibility: ColumnVisibility = field(init=False, repr=False)
    navigator: KeyboardNavigator = field(init=False, repr=False)
    density: RowDensity = field(init=False)

    def __post_init__(self) -> None:
        self.columns = tuple(self.columns)
        if not self.columns:
            raise ValueError("grid requires at least one column")
        self.navigator = KeyboardNavigator(page_size=self.config.page_size)
        self.selection = make_selection(self.config.selection_mode, self.identity)
        self.visibility = ColumnVisibility(column.label for column in self.columns)
        self.density = self.config.density
        self._recompute()

    @property
    def view_data(self) -> tuple[T, ...]:
        return self.view.view_data

    @property
    def page_size(self) -> int:
        return self.config.page_size

    def set_source(self, source: Sequence[T]) -> bool:
        if source is self.source:
            return False
        self.source = source
        self._recompute()
        return True

    def refresh(self) -> None:
        """Recompute after the caller mutated ``source`` in place."""

        self._recompute()

    def set_columns(self, columns: Sequence[ColumnDescriptor[T]]) -> None:
        columns = tuple(columns)
        if not columns:
            raise ValueError("grid requires at least one column")
        self.columns = columns
        self.inputs.clear_all()
        self.visibility.reset(column.label for column in columns)
        if self.sort_column_index >= len(columns):
            self.sort_column_index = 0
            self.sort_ascending = True
        self._recompute()

    def set_text_filter(self, column_index: int, raw: str) -> bool:
        if not self._has_column(column_index):
            return False
        return self._after_input(self.inputs.set_text(column_index, raw))

    def set_select_filter(self, column_index: int, option: str | None) -> bool:
        if not self._has_column(column_index):
            return False
        return self._after_input(self.inputs.set_text(column_index, option or ""))

    def set_number_range(self, column_index: int, minimum: str | None, maximum: str | None) -> bool:
        if not self._has_column(column_index):
            return False
        return self._after_input(self.inputs.set_range(column_index, minimum, maximum))

    def set_date_range(self, column_index: int, start: str | None, end: str | None) -> bool:
        return self.set_number_range(column_index, start, end)

    def clear_filter(self, column_index: int) -> bool:
        return self._after_input(self.inputs.clear(column_index))

    def clear_filters(self) -> bool:
        return self._after_input(self.inputs.clear_all())

    def sort_by(self, column_index: int, *, ascending: bool | None = None) -> bool:
        """Activate a sort header.

        Re-activating the current column flips the direction; a new column
        starts ascending unless ``ascending`` is given.
        """

        if not self._has_column(column_index) or not self.columns[column_index].can_sort:
            return False
        if ascending is not None:
            self.sort_ascending = ascending
        elif self.sort_column_index == column_index:
            self.sort_ascending = not self.sort_ascending
        else:
            self.sort_ascending = True
        self.sort_column_index = column_index
        LOGGER.debug("sort by %s (%s)", self.columns[column_index].label, "asc" if self.sort_ascending else "desc")
        self._recompute()
        return True

    def tap_row(self, index: int) -> TapOutcome:
        """Row content tap: activates an already selected row, else selects it."""

        if not 0 <= index < len(self.view_data):
            return "ignored"
        outcome = self.selection.tap(index)
        if outcome == "activate":
            self._activate(self.view_data[index])
        return outcome

    def toggle_row(self, index: int) -> TapOutcome:
        """Row selection-control (checkbox) toggle."""

        if not 0 <= index < len(self.view_data):
            return "ignored"
        return self.selection.toggle(index)

    def clear_selection(self) -> None:
        self.selection.clear()

    def selected_records(self) -> tuple[T, ...]:
        return tuple(self.view_data[i] for i in self.selection.selected_indices() if i < len(self.view_data))

    def handle_command(self, command: NavCommand) -> bool:
        if not self.config.enable_keyboard_navigation:
            return False
        if not isinstance(self.selection, SingleSelection):
            return False
        if command == "activate":
            return self.activate_selected()
        if not self.view_data:
            return False
        target = self.navigator.move(command, self.selection.selected, len(self.view_data))
        self.selection.select(target)
        if target is not None:
            self.page_index = self.navigator.page_of(target)
        return True

    def handle_key(self, key: str) -> bool:
        command = command_for_key(key)
        if command is None:
            return False
        return self.handle_command(command)

    def handle_key_event(self, event: KeyPressEvent | None) -> bool:
        if event is None or not event.triggers:
            return False
        return self.handle_key(event.key)

    def activate_selected(self) -> bool:
        if not isinstance(self.selection, SingleSelection):
            return False
        record = self.navigator.activate(self.selection.selected, self.view_data)
        if record is None:
            return False
        self._activate(record)
        return True

    def page_count(self) -> int:
        return max(1, math.ceil(len(self.view_data) / self.page_size))

    def set_page(self, page_index: int) -> None:
        self.page_index = min(max(0, int(page_index)), self.page_count() - 1)

    def page_rows(self, page_index: int | None = None) -> tuple[T, ...]:
        page = self.page_index if page_index is None else page_index
        start = page * self.page_size
        return self.view_data[start : start + self.page_size]

    def toggle_column(self, label: str) -> bool:
        changed = self.visibility.toggle(label)
        if changed:
            LOGGER.debug("column %s visible=%s", label, self.visibility.is_visible(label))
        return changed

    def visible_columns(self) -> tuple[ColumnDescriptor[T], ...]:
        return self.visibility.apply(self.columns)

    def export_csv(self, *, visible_only: bool = False) -> str:
        columns = self.visible_columns() if visible_only else self.columns
        return serialize_csv(self.view_data, columns)

    def set_density(self, density: RowDensity) -> None:
        if density not in ROW_HEIGHTS:
            raise ValueError(f"Unsupported row density: {density}")
        self.density = density

    @property
    def row_height(self) -> float:
        return ROW_HEIGHTS[self.density]

    def snapshot_state(self) -> GridState:
        return GridState(
            sort_column_index=self.sort_column_index,
            sort_ascending=self.sort_ascending,
            page_index=self.page_index,
            page_size=self.page_size,
            source_count=len(self.source),
            view_count=len(self.view_data),
            selected=self.selection.selected_indices(),
            active_filters=self.inputs.active_indices(),
            visible_labels=tuple(column.label for column in self.visible_columns()),
            density=self.density,
        )

    def render_ascii(self) -> str:
        shown = self.visible_headers()
        columns = [column for column, _ in shown]
        start = self.page_index * self.page_size
        rows = self.page_rows()
        headers = [label for _, label in shown]
        cells = [[column.cell_text(record) for column in columns] for record in rows]
        widths = []
        for col_idx, header in enumerate(headers):
            body_max = max((len(row[col_idx]) for row in cells), default=0)
            widths.append(min(28, max(4, len(header), body_max)))

        def _clip(value: str, width: int, right: bool) -> str:
            if len(value) <= width:
                return value.rjust(width) if right else value.ljust(width)
            if width <= 3:
                return value[:width]
            return value[: width - 3] + "..."

        border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        header_line = "  | " + " | ".join(_clip(headers[i], widths[i], False) for i in range(len(widths))) + " |"
        sort_label = "-"
        if 0 <= self.sort_column_index < len(self.columns) and self.columns[self.sort_column_index].can_sort:
            sort_label = self.columns[self.sort_column_index].label
        lines = [
            f"sort={sort_label}:{'asc' if self.sort_ascending else 'desc'} rows={len(self.view_data)}/{len(self.source)}",
            f"page={self.page_index + 1}/{self.page_count()} selected={self.selection.selected_count}",
            "  " + border,
            header_line,
            "  " + border,
        ]
        for offset, row in enumerate(cells):
            marker = "*" if self.selection.is_selected(start + offset) else " "
            lines.append(
                marker
                + " | "
                + " | ".join(_clip(row[i], widths[i], columns[i].numeric) for i in range(len(widths)))
                + " |"
            )
        lines.append("  " + border)
        return "\n".join(lines)

    def visible_headers(self) -> tuple[tuple[ColumnDescriptor[T], str], ...]:
        """Visible columns paired with their header text, sort indicator included."""

        return tuple(
            (column, self._header_label(i, column))
            for i, column in enumerate(self.columns)
            if self.visibility.is_visible(column.label)
        )

    def _header_label(self, index: int, column: ColumnDescriptor[T]) -> str:
        indicator = ""
        if index == self.sort_column_index and column.can_sort:
            indicator = "^" if self.sort_ascending else "v"
        return f"{column.label}{indicator}"

    def _has_column(self, column_index: int) -> bool:
        return 0 <= column_index < len(self.columns)

    def _after_input(self, changed: bool) -> bool:
        if changed:
            self._recompute()
        return changed

    def _activate(self, record: T) -> None:
        if self.on_activate is not None:
            self.on_activate(record)

    def _recompute(self) -> None:
        previous = self.view.view_data
        self.view = recompute(self.source, self.columns, self.inputs, self.sort_column_index, self.sort_ascending)
        self.selection.remap(previous, self.view.view_data)
        self.set_page(self.page_index)
