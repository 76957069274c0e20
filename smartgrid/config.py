from __future__ import annotations

from dataclasses import asdict, dataclass
import logging
import math
from pathlib import Path
import tomllib
from typing import Any, Literal, Mapping

LOGGER = logging.getLogger(__name__)

RowDensity = Literal["compact", "comfy", "spacious"]

ROW_HEIGHTS: dict[str, float] = {"compact": 36.0, "comfy": 48.0, "spacious": 56.0}
HEADING_HEIGHTS: dict[str, float] = {"compact": 40.0, "comfy": 52.0, "spacious": 60.0}


@dataclass(frozen=True)
class GridConfig:
    """Presentation-independent settings for one grid instance."""

    page_size: int = 10
    min_col_width: float = 160.0
    density: RowDensity = "comfy"
    selection_mode: str = "single"
    enable_keyboard_navigation: bool = False
    export_prefix: str = "table_export"

    def __post_init__(self) -> None:
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size <= 0:
            raise ValueError("page_size must be a positive integer")
        if not isinstance(self.min_col_width, (int, float)) or float(self.min_col_width) <= 0:
            raise ValueError("min_col_width must be a positive number")
        if self.density not in ROW_HEIGHTS:
            raise ValueError(f"Unsupported row density: {self.density}")
        if self.selection_mode not in ("single", "multi"):
            raise ValueError(f"Unsupported selection mode: {self.selection_mode}")
        if not isinstance(self.export_prefix, str) or not self.export_prefix.strip():
            raise ValueError("export_prefix must be a non-empty string")

    @property
    def row_height(self) -> float:
        return ROW_HEIGHTS[self.density]

    @property
    def heading_height(self) -> float:
        return HEADING_HEIGHTS[self.density]

    def table_width(self, column_count: int, viewport: float | None = None) -> float:
        """Width that never drops below ``column_count * min_col_width``."""

        minimum = column_count * float(self.min_col_width)
        if viewport is None or not math.isfinite(viewport) or viewport <= 0:
            return minimum
        return max(float(viewport), minimum)


DEFAULT_CONFIG = GridConfig()


def validate_grid_config(overrides: Mapping[str, Any] | None = None) -> GridConfig:
    """Merge ``overrides`` over the defaults, rejecting unknown keys."""

    raw: dict[str, Any] = asdict(DEFAULT_CONFIG)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown grid setting: {key}")
            raw[key] = value
    if not isinstance(raw["enable_keyboard_navigation"], bool):
        raise ValueError("Setting `enable_keyboard_navigation` must be a boolean")
    return GridConfig(**raw)


def load_grid_config(path: str | Path) -> GridConfig:
    """Load settings from a TOML file, optionally nested under ``[grid]``."""

    config_path = Path(path)
    try:
        with config_path.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"invalid grid config {config_path}: {exc}") from exc
    section = raw.get("grid", raw)
    if not isinstance(section, Mapping):
        raise ValueError("grid config section must be a table")
    config = validate_grid_config(section)
    LOGGER.debug("loaded grid config from %s", config_path)
    return config
