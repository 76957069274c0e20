from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
import unittest

from smartgrid.column import ColumnDescriptor
from smartgrid.filters import FilterInputState, apply_filters, parse_date_bound, parse_number_bound


@dataclass(frozen=True)
class _Task:
    name: str
    priority: int
    created: dt.date
    status: str = "Open"


def _tasks() -> tuple[_Task, ...]:
    return (
        _Task("Alpha", 1, dt.date(2024, 1, 10), "Open"),
        _Task("Beta", 2, dt.date(2024, 2, 10), "Done"),
        _Task("Gamma", 3, dt.date(2024, 3, 10), "Open"),
    )


def _columns() -> tuple[ColumnDescriptor[_Task], ...]:
    return (
        ColumnDescriptor(label="Name", filter_kind="text", filter_text=lambda t: t.name),
        ColumnDescriptor(label="Priority", filter_kind="number_range", filter_number=lambda t: t.priority),
        ColumnDescriptor(label="Created", filter_kind="date_range", filter_date=lambda t: t.created),
        ColumnDescriptor(
            label="Status",
            filter_kind="select",
            filter_select=lambda t: t.status,
            options=("Open", "Done"),
        ),
        ColumnDescriptor(label="Notes"),
    )


def _names(rows) -> list[str]:
    return [row.name for row in rows]


class FilterInputStateTests(unittest.TestCase):
    def test_set_and_clear_report_changes(self) -> None:
        inputs = FilterInputState()
        self.assertTrue(inputs.set_text(0, "al"))
        self.assertFalse(inputs.set_text(0, "al"))
        self.assertTrue(inputs.set_range(1, "2", None))
        self.assertEqual(inputs.active_indices(), (0, 1))
        self.assertTrue(inputs.clear(0))
        self.assertFalse(inputs.clear(0))
        self.assertEqual(inputs.active_indices(), (1,))

    def test_clear_all_reports_whether_anything_was_set(self) -> None:
        inputs = FilterInputState()
        self.assertFalse(inputs.clear_all())
        inputs.set_range(2, "2024-01-01", "")
        self.assertTrue(inputs.clear_all())
        self.assertEqual(inputs.active_indices(), ())


class BoundParsingTests(unittest.TestCase):
    def test_number_bounds(self) -> None:
        self.assertEqual(parse_number_bound(" 2 "), 2.0)
        self.assertEqual(parse_number_bound("-1.5"), -1.5)
        self.assertIsNone(parse_number_bound(""))
        self.assertIsNone(parse_number_bound(None))
        self.assertIsNone(parse_number_bound("abc"))
        self.assertIsNone(parse_number_bound("nan"))
        self.assertIsNone(parse_number_bound("inf"))

    def test_date_bounds(self) -> None:
        self.assertEqual(parse_date_bound("2024-02-10"), dt.date(2024, 2, 10))
        self.assertIsNone(parse_date_bound("2024-13-01"))
        self.assertIsNone(parse_date_bound("2024/02/10"))
        self.assertIsNone(parse_date_bound("20240210"))
        self.assertIsNone(parse_date_bound("yesterday"))
        self.assertIsNone(parse_date_bound(""))


class ApplyFiltersTests(unittest.TestCase):
    def test_text_filter_is_case_insensitive_substring(self) -> None:
        inputs = FilterInputState()
        inputs.set_text(0, "  AL ")
        self.assertEqual(_names(apply_filters(_tasks(), _columns(), inputs)), ["Alpha"])

    def test_number_range_min_keeps_original_order(self) -> None:
        inputs = FilterInputState()
        inputs.set_range(1, "2", None)
        self.assertEqual(_names(apply_filters(_tasks(), _columns(), inputs)), ["Beta", "Gamma"])

    def test_number_range_unparsable_bound_is_ignored(self) -> None:
        inputs = FilterInputState()
        inputs.set_range(1, "oops", "2")
        self.assertEqual(_names(apply_filters(_tasks(), _columns(), inputs)), ["Alpha", "Beta"])
        inputs.set_range(1, "oops", "nope")
        self.assertEqual(len(apply_filters(_tasks(), _columns(), inputs)), 3)

    def test_date_range_bounds_are_inclusive(self) -> None:
        inputs = FilterInputState()
        inputs.set_range(2, "2024-01-10", "2024-02-10")
        self.assertEqual(_names(apply_filters(_tasks(), _columns(), inputs)), ["Alpha", "Beta"])

    def test_malformed_date_bound_is_unset(self) -> None:
        inputs = FilterInputState()
        inputs.set_range(2, "not-a-date", "2024-01-31")
        self.assertEqual(_names(apply_filters(_tasks(), _columns(), inputs)), ["Alpha"])

    def test_date_range_against_datetime_values(self) -> None:
        rows = (dt.datetime(2024, 1, 10, 0, 0), dt.datetime(2024, 1, 10, 15, 30), dt.datetime(2024, 1, 11))
        column = ColumnDescriptor(label="At", filter_kind="date_range", filter_date=lambda v: v)
        inputs = FilterInputState()
        inputs.set_range(0, "2024-01-10", "2024-01-10")
        self.assertEqual(apply_filters(rows, (column,), inputs), (rows[0],))

    def test_select_filter_is_exact_match(self) -> None:
        inputs = FilterInputState()
        inputs.set_text(3, "Done")
        self.assertEqual(_names(apply_filters(_tasks(), _columns(), inputs)), ["Beta"])
        inputs.set_text(3, "Don")
        self.assertEqual(apply_filters(_tasks(), _columns(), inputs), ())

    def test_text_filter_treats_none_as_empty(self) -> None:
        rows = ({"owner": None}, {"owner": "Nora"})
        column = ColumnDescriptor(label="Owner", filter_kind="text", filter_text=lambda r: r["owner"])
        inputs = FilterInputState()
        inputs.set_text(0, "no")
        self.assertEqual(apply_filters(rows, (column,), inputs), ({"owner": "Nora"},))

    def test_missing_accessor_makes_filter_inert(self) -> None:
        columns = (ColumnDescriptor(label="Name", filter_kind="text"),)
        inputs = FilterInputState()
        inputs.set_text(0, "zzz")
        self.assertEqual(len(apply_filters(_tasks(), columns, inputs)), 3)

    def test_none_kind_ignores_input(self) -> None:
        inputs = FilterInputState()
        inputs.set_text(4, "anything")
        self.assertEqual(len(apply_filters(_tasks(), _columns(), inputs)), 3)

    def test_source_is_not_mutated(self) -> None:
        source = list(_tasks())
        inputs = FilterInputState()
        inputs.set_text(0, "beta")
        apply_filters(source, _columns(), inputs)
        self.assertEqual(_names(source), ["Alpha", "Beta", "Gamma"])

    def test_composition_matches_intersection(self) -> None:
        source = _tasks()
        only_name = FilterInputState()
        only_name.set_text(0, "a")
        only_status = FilterInputState()
        only_status.set_text(3, "Open")
        both = FilterInputState()
        both.set_text(0, "a")
        both.set_text(3, "Open")

        by_name = set(apply_filters(source, _columns(), only_name))
        by_status = set(apply_filters(source, _columns(), only_status))
        self.assertEqual(set(apply_filters(source, _columns(), both)), by_name & by_status)

    def test_narrowing_never_grows_the_view(self) -> None:
        source = _tasks()
        previous = len(source)
        for minimum in ("0", "1", "2", "3", "4"):
            inputs = FilterInputState()
            inputs.set_range(1, minimum, None)
            size = len(apply_filters(source, _columns(), inputs))
            self.assertLessEqual(size, previous)
            previous = size
        previous = len(source)
        for query in ("a", "am", "amm", "gamma"):
            inputs = FilterInputState()
            inputs.set_text(0, query)
            size = len(apply_filters(source, _columns(), inputs))
            self.assertLessEqual(size, previous)
            previous = size


if __name__ == "__main__":
    unittest.main()
