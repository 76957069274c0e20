"""CSV serialization of grid views and file export collaborators."""

from .csv_text import csv_line, escape_csv_field, serialize_csv
from .files import (
    ExportResult,
    GridExportBundle,
    default_export_dir,
    export_filename,
    export_grid_bundle,
    render_grid_png,
    save_csv,
)

__all__ = [
    "ExportResult",
    "GridExportBundle",
    "csv_line",
    "default_export_dir",
    "escape_csv_field",
    "export_filename",
    "export_grid_bundle",
    "render_grid_png",
    "save_csv",
    "serialize_csv",
]
