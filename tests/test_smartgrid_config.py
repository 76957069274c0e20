from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from smartgrid.config import GridConfig, load_grid_config, validate_grid_config


class GridConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = GridConfig()
        self.assertEqual(config.page_size, 10)
        self.assertEqual(config.density, "comfy")
        self.assertEqual(config.row_height, 48.0)
        self.assertEqual(config.heading_height, 52.0)
        self.assertFalse(config.enable_keyboard_navigation)

    def test_invalid_values_raise(self) -> None:
        with self.assertRaises(ValueError):
            GridConfig(page_size=0)
        with self.assertRaises(ValueError):
            GridConfig(density="roomy")  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            GridConfig(selection_mode="many")
        with self.assertRaises(ValueError):
            GridConfig(export_prefix=" ")

    def test_table_width_never_below_minimum(self) -> None:
        config = GridConfig(min_col_width=100)
        self.assertEqual(config.table_width(4, 250.0), 400.0)
        self.assertEqual(config.table_width(4, 900.0), 900.0)
        self.assertEqual(config.table_width(4, float("inf")), 400.0)
        self.assertEqual(config.table_width(4), 400.0)

    def test_validate_overrides(self) -> None:
        config = validate_grid_config({"page_size": 5, "density": "spacious"})
        self.assertEqual(config.page_size, 5)
        self.assertEqual(config.row_height, 56.0)
        with self.assertRaises(ValueError):
            validate_grid_config({"rows_per_page": 5})
        with self.assertRaises(ValueError):
            validate_grid_config({"enable_keyboard_navigation": "yes"})

    def test_load_from_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "grid.toml"
            path.write_text(
                '[grid]\npage_size = 5\nselection_mode = "multi"\nenable_keyboard_navigation = true\n',
                encoding="utf-8",
            )
            config = load_grid_config(path)
            self.assertEqual(config.page_size, 5)
            self.assertEqual(config.selection_mode, "multi")
            self.assertTrue(config.enable_keyboard_navigation)

            flat = Path(tmp) / "flat.toml"
            flat.write_text('density = "compact"\n', encoding="utf-8")
            self.assertEqual(load_grid_config(flat).density, "compact")

            broken = Path(tmp) / "broken.toml"
            broken.write_text("page_size = \n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_grid_config(broken)


if __name__ == "__main__":
    unittest.main()
