from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
import logging
from pathlib import Path
import tempfile
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

if TYPE_CHECKING:
    from ..grid import SmartGrid

LOGGER = logging.getLogger(__name__)

HEADER_FILL: tuple[int, int, int] = (31, 41, 55)
SELECTED_FILL: tuple[int, int, int] = (30, 64, 175)
LINE_COLOR: tuple[int, int, int] = (71, 85, 105)


@dataclass(frozen=True)
class ExportResult:
    ok: bool
    message: str
    path: Path | None = None


@dataclass(frozen=True)
class GridExportBundle:
    csv: Path
    ascii_preview: Path
    png_preview: Path | None = None

    def as_dict(self) -> dict[str, str]:
        out = {"csv": str(self.csv), "ascii_preview": str(self.ascii_preview)}
        if self.png_preview is not None:
            out["png_preview"] = str(self.png_preview)
        return out


def default_export_dir() -> Path:
    downloads = Path.home() / "Downloads"
    if downloads.is_dir():
        return downloads
    return Path(tempfile.gettempdir())


def export_filename(prefix: str, now: dt.datetime | None = None) -> str:
    stamp = (now or dt.datetime.now()).isoformat().replace(":", "-")
    return f"{prefix}_{stamp}.csv"


def save_csv(
    text: str,
    *,
    directory: str | Path | None = None,
    prefix: str = "table_export",
    now: dt.datetime | None = None,
) -> ExportResult:
    """Write CSV text to a timestamped file and describe the outcome.

    Write failures are reported through the result instead of raising so the
    caller can show the message to the user.
    """

    folder = Path(directory) if directory is not None else default_export_dir()
    path = folder / export_filename(prefix, now)
    try:
        folder.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("CSV export to %s failed: %s", path, exc)
        return ExportResult(ok=False, message=f"Failed to save CSV: {exc}")
    return ExportResult(ok=True, message=f"Saved CSV to {path}", path=path)


def export_grid_bundle(
    grid: "SmartGrid",
    *,
    out_dir: str | Path,
    prefix: str | None = None,
    visible_only: bool = False,
    include_png: bool = True,
) -> GridExportBundle:
    root = Path(out_dir)
    root.mkdir(parents=True, exist_ok=True)
    name = prefix or grid.config.export_prefix

    path_csv = root / f"{name}.csv"
    path_ascii = root / f"{name}_preview.txt"
    preview = grid.render_ascii()
    path_csv.write_text(grid.export_csv(visible_only=visible_only), encoding="utf-8")
    path_ascii.write_text(preview, encoding="utf-8")

    path_png = None
    if include_png:
        path_png = root / f"{name}_preview.png"
        render_grid_png(grid, path_png)
    return GridExportBundle(csv=path_csv, ascii_preview=path_ascii, png_preview=path_png)


def render_grid_png(
    grid: "SmartGrid",
    out_path: str | Path,
    *,
    padding: int = 16,
    cell_padding: int = 8,
    bg: tuple[int, int, int] = (17, 24, 39),
    fg: tuple[int, int, int] = (226, 232, 240),
) -> Path:
    """Draw the current page of ``grid`` as a table image.

    The header row carries the sort indicator, numeric columns are
    right-aligned and selected rows are filled with ``SELECTED_FILL``.
    """

    shown = grid.visible_headers()
    rows = grid.page_rows()
    start = grid.page_index * grid.page_size
    headers = [label for _, label in shown]
    cells = [[column.cell_text(record) for column, _ in shown] for record in rows]

    font = ImageFont.load_default()
    scratch = ImageDraw.Draw(Image.new("RGB", (8, 8), color=bg))

    def _text_size(value: str) -> tuple[int, int]:
        x0, y0, x1, y1 = scratch.textbbox((0, 0), value, font=font)
        return x1 - x0, y1 - y0

    line_height = 12
    widths = []
    for col_idx, header in enumerate(headers):
        texts = [header] + [row[col_idx] for row in cells]
        sizes = [_text_size(text) for text in texts]
        line_height = max(line_height, *(h for _, h in sizes))
        widths.append(max(40, max(w for w, _ in sizes) + cell_padding * 2))
    row_px = line_height + cell_padding * 2

    width = padding * 2 + sum(widths)
    height = padding * 2 + row_px * (len(cells) + 1)
    image = Image.new("RGB", (width, height), color=bg)
    draw = ImageDraw.Draw(image)
    right = padding + sum(widths)

    draw.rectangle((padding, padding, right, padding + row_px), fill=HEADER_FILL)
    for offset in range(len(cells)):
        if grid.selection.is_selected(start + offset):
            top = padding + row_px * (offset + 1)
            draw.rectangle((padding, top, right, top + row_px), fill=SELECTED_FILL)

    for line_idx, texts in enumerate([headers] + cells):
        y = padding + row_px * line_idx + cell_padding
        x = padding
        for col_idx, text in enumerate(texts):
            if line_idx > 0 and shown[col_idx][0].numeric:
                draw.text((x + widths[col_idx] - cell_padding - _text_size(text)[0], y), text, fill=fg, font=font)
            else:
                draw.text((x + cell_padding, y), text, fill=fg, font=font)
            x += widths[col_idx]

    bottom = padding + row_px * (len(cells) + 1)
    for line_idx in range(len(cells) + 2):
        y = padding + row_px * line_idx
        draw.line((padding, y, right, y), fill=LINE_COLOR)
    x = padding
    for col_width in [0] + widths:
        x += col_width
        draw.line((x, padding, x, bottom), fill=LINE_COLOR)

    path = Path(out_path)
    image.save(path)
    LOGGER.debug("rendered %d rows x %d columns to %s", len(cells), len(widths), path)
    return path
