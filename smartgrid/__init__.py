"""Render-agnostic view, selection and export engine for interactive data grids."""

from .column import FILTER_KINDS, ColumnDescriptor, FilterKind
from .config import GridConfig, RowDensity, load_grid_config, validate_grid_config
from .export import ExportResult, GridExportBundle, export_grid_bundle, save_csv, serialize_csv
from .filters import FilterInput, FilterInputState, apply_filters, parse_date_bound, parse_number_bound
from .grid import GridState, SmartGrid
from .keys import KeyPressEvent, command_for_key, parse_key_event
from .navigation import KeyboardNavigator, NavCommand
from .selection import MultiSelection, SelectionMode, SingleSelection, TapOutcome, make_selection
from .sorting import apply_sort
from .view import ViewState, recompute
from .visibility import ColumnVisibility, visible_columns

__all__ = [
    "ColumnDescriptor",
    "ColumnVisibility",
    "ExportResult",
    "FILTER_KINDS",
    "FilterInput",
    "FilterInputState",
    "FilterKind",
    "GridConfig",
    "GridExportBundle",
    "GridState",
    "KeyPressEvent",
    "KeyboardNavigator",
    "MultiSelection",
    "NavCommand",
    "RowDensity",
    "SelectionMode",
    "SingleSelection",
    "SmartGrid",
    "TapOutcome",
    "ViewState",
    "apply_filters",
    "apply_sort",
    "command_for_key",
    "export_grid_bundle",
    "load_grid_config",
    "make_selection",
    "parse_date_bound",
    "parse_key_event",
    "parse_number_bound",
    "recompute",
    "save_csv",
    "serialize_csv",
    "validate_grid_config",
    "visible_columns",
]
