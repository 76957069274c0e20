from __future__ import annotations

import unittest

from smartgrid.column import ColumnDescriptor
from smartgrid.visibility import ColumnVisibility, visible_columns


class ColumnDescriptorTests(unittest.TestCase):
    def test_label_must_be_non_empty(self) -> None:
        with self.assertRaises(ValueError):
            ColumnDescriptor(label="  ")

    def test_unknown_filter_kind_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ColumnDescriptor(label="X", filter_kind="fuzzy")  # type: ignore[arg-type]

    def test_csv_resolution_order(self) -> None:
        both = ColumnDescriptor(label="A", sort_key=lambda r: r * 2, csv_value=lambda r: f"#{r}")
        key_only = ColumnDescriptor(label="B", sort_key=lambda r: r * 2)
        empty = ColumnDescriptor(label="C")
        csv_none = ColumnDescriptor(label="D", sort_key=lambda r: r, csv_value=lambda r: None)
        key_none = ColumnDescriptor(label="E", sort_key=lambda r: None)
        self.assertEqual(both.resolve_csv(3), "#3")
        self.assertEqual(key_only.resolve_csv(3), "6")
        self.assertEqual(empty.resolve_csv(3), "")
        self.assertEqual(csv_none.resolve_csv(3), "3")
        self.assertEqual(key_none.resolve_csv(3), "")

    def test_filter_accessor_matches_kind(self) -> None:
        text = ColumnDescriptor(label="T", filter_kind="text", filter_text=str, filter_number=float)
        inert = ColumnDescriptor(label="N", filter_kind="number_range", filter_text=str)
        self.assertIs(text.filter_accessor, str)
        self.assertTrue(text.filterable)
        self.assertFalse(inert.filterable)
        self.assertFalse(ColumnDescriptor(label="Z").filterable)

    def test_can_sort_needs_flag_and_key(self) -> None:
        self.assertFalse(ColumnDescriptor(label="A", sortable=True).can_sort)
        self.assertFalse(ColumnDescriptor(label="B", sort_key=str).can_sort)
        self.assertTrue(ColumnDescriptor(label="C", sortable=True, sort_key=str).can_sort)


class ColumnVisibilityTests(unittest.TestCase):
    def _columns(self) -> tuple[ColumnDescriptor[object], ...]:
        return tuple(ColumnDescriptor(label=label) for label in ("ID", "Title", "Priority", "Created"))

    def test_visible_columns_preserve_order(self) -> None:
        shown = visible_columns(self._columns(), {"Created", "ID"})
        self.assertEqual([c.label for c in shown], ["ID", "Created"])

    def test_toggle_and_show_all(self) -> None:
        columns = self._columns()
        visibility = ColumnVisibility(c.label for c in columns)
        self.assertTrue(visibility.toggle("Title"))
        self.assertFalse(visibility.is_visible("Title"))
        self.assertFalse(visibility.toggle("Unknown"))
        self.assertEqual([c.label for c in visibility.apply(columns)], ["ID", "Priority", "Created"])
        self.assertEqual(len(columns), 4)
        visibility.toggle("Title")
        self.assertEqual(len(visibility.apply(columns)), 4)
        visibility.set_visible(["Priority", "Bogus"])
        self.assertEqual(visibility.labels, frozenset({"Priority"}))
        visibility.show_all()
        self.assertEqual(len(visibility.labels), 4)

    def test_reset_keeps_hidden_labels_hidden(self) -> None:
        visibility = ColumnVisibility(["ID", "Title"])
        visibility.toggle("Title")
        visibility.reset(["Title", "Owner"])
        self.assertEqual(visibility.labels, frozenset({"Owner"}))


if __name__ == "__main__":
    unittest.main()
