from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from .column import ColumnDescriptor

PRIORITY_LABELS: dict[int, str] = {1: "High", 2: "Medium", 3: "Low"}


@dataclass(frozen=True)
class ExampleTask:
    task_id: int
    title: str
    priority: int
    created_at: dt.date

    @property
    def priority_label(self) -> str:
        return PRIORITY_LABELS.get(self.priority, str(self.priority))


def _task(task_id: int, title: str, priority: int, year: int, month: int, day: int) -> ExampleTask:
    return ExampleTask(task_id=task_id, title=title, priority=priority, created_at=dt.date(year, month, day))


EXAMPLE_TASKS: tuple[ExampleTask, ...] = (
    _task(1, "Prepare quarterly report", 1, 2024, 1, 10),
    _task(2, "Fix login bug", 2, 2024, 1, 14),
    _task(3, "Refactor data layer", 3, 2024, 2, 1),
    _task(4, "Design new dashboard", 2, 2024, 2, 5),
    _task(5, "Write API documentation", 1, 2024, 2, 20),
    _task(6, "Prepare release notes", 2, 2024, 3, 1),
    _task(7, "Review pull requests", 3, 2024, 3, 3),
    _task(8, "Optimize database indexes", 2, 2024, 3, 5),
    _task(9, "Customer onboarding call", 1, 2024, 3, 8),
    _task(10, "Security audit follow-up", 3, 2024, 3, 12),
    _task(11, "Build analytics dashboard", 2, 2024, 3, 15),
    _task(12, "Migrate legacy reports", 2, 2024, 3, 20),
    _task(13, "Team retrospective meeting", 1, 2024, 3, 22),
    _task(14, "Prototype new feature A", 3, 2024, 3, 25),
    _task(15, "Prototype new feature B", 2, 2024, 3, 28),
    _task(16, "Write unit tests", 1, 2024, 4, 2),
    _task(17, "Upgrade dependencies", 2, 2024, 4, 4),
    _task(18, "Benchmark performance", 3, 2024, 4, 6),
    _task(19, "Fix flaky tests", 2, 2024, 4, 8),
    _task(20, "Improve error messages", 1, 2024, 4, 10),
    _task(21, "Add feature flags", 2, 2024, 4, 12),
    _task(22, "Refine onboarding flow", 1, 2024, 4, 15),
    _task(23, "Conduct user interviews", 3, 2024, 4, 18),
    _task(24, "Polish UI for launch", 2, 2024, 4, 20),
    _task(25, "Launch post-mortem review", 1, 2024, 4, 25),
)


def example_columns() -> tuple[ColumnDescriptor[ExampleTask], ...]:
    return (
        ColumnDescriptor(
            label="ID",
            numeric=True,
            sortable=True,
            sort_key=lambda t: t.task_id,
        ),
        ColumnDescriptor(
            label="Title",
            sortable=True,
            sort_key=lambda t: t.title,
            filter_kind="text",
            filter_text=lambda t: t.title,
        ),
        ColumnDescriptor(
            label="Priority",
            numeric=True,
            sortable=True,
            sort_key=lambda t: t.priority,
            filter_kind="number_range",
            filter_number=lambda t: t.priority,
        ),
        ColumnDescriptor(
            label="Level",
            csv_value=lambda t: t.priority_label,
            filter_kind="select",
            filter_select=lambda t: t.priority_label,
            options=tuple(PRIORITY_LABELS.values()),
        ),
        ColumnDescriptor(
            label="Created",
            sortable=True,
            sort_key=lambda t: t.created_at,
            csv_value=lambda t: t.created_at.isoformat(),
            filter_kind="date_range",
            filter_date=lambda t: t.created_at,
        ),
    )
