"""Derive filtered, sorted, read-only views of a project's tasks.

Nothing here mutates its input. Sorting is stable, so ties keep the
canonical list order and running a view twice gives the same result.
"""

from datetime import date
from functools import cmp_to_key
from typing import Callable

from monoboard.models import FilterSpec, Priority, Project, SortBy, SortOrder, Task, ViewMode

PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}

Comparator = Callable[[Task, Task], int]


def _sign(value) -> int:
    return (value > 0) - (value < 0)


def _compare_due(a: Task, b: Task) -> int:
    return _sign((a.due_date - b.due_date).days)


def _compare_priority(a: Task, b: Task) -> int:
    return _sign(PRIORITY_RANK[a.priority] - PRIORITY_RANK[b.priority])


def _title_key(task: Task) -> tuple[str, str]:
    return task.title.casefold(), task.title


def _compare_title(a: Task, b: Task) -> int:
    ka, kb = _title_key(a), _title_key(b)
    return (ka > kb) - (ka < kb)


def _compare_created(a: Task, b: Task) -> int:
    ka, kb = (a.seq, a.id), (b.seq, b.id)
    return (ka > kb) - (ka < kb)


_COMPARATORS: dict[SortBy, Comparator] = {
    SortBy.DUE_DATE: _compare_due,
    SortBy.PRIORITY: _compare_priority,
    SortBy.TITLE: _compare_title,
    SortBy.CREATED: _compare_created,
}


def comparator(spec: FilterSpec) -> Comparator:
    """Build the comparison function for a filter spec.

    Tasks without a due date sort after dated tasks in both directions.
    """
    base = _COMPARATORS[SortBy(spec.sort_by)]
    sign = -1 if SortOrder(spec.sort_order) is SortOrder.DESC else 1

    if base is not _compare_due:
        return lambda a, b: sign * base(a, b)

    def compare(a: Task, b: Task) -> int:
        if a.due_date is not None and b.due_date is None:
            return -1
        if a.due_date is None and b.due_date is not None:
            return 1
        if a.due_date is None and b.due_date is None:
            return 0
        return sign * base(a, b)

    return compare


def filter_tasks(tasks, spec: FilterSpec) -> list[Task]:
    """Keep tasks matching any filter tag and any filter priority."""
    result = list(tasks)
    if spec.tags:
        result = [t for t in result if spec.tags.intersection(t.tags)]
    if spec.priority:
        wanted = {Priority(p) for p in spec.priority}
        result = [t for t in result if t.priority in wanted]
    return result


def view(tasks, spec: FilterSpec) -> list[Task]:
    """Filter then sort tasks according to spec."""
    return sorted(filter_tasks(tasks, spec), key=cmp_to_key(comparator(spec)))


def _compare_timeline(a: Task, b: Task) -> int:
    if a.due_date is not None and b.due_date is None:
        return -1
    if a.due_date is None and b.due_date is not None:
        return 1
    if a.due_date is not None and b.due_date is not None and a.due_date != b.due_date:
        return _compare_due(a, b)
    return -_compare_priority(a, b) or _compare_title(a, b)


def timeline_order(tasks) -> list[Task]:
    """Order tasks for a timeline: by due date, then priority (high first), then title."""
    return sorted(tasks, key=cmp_to_key(_compare_timeline))


def column_view(project: Project, column_id: str, spec: FilterSpec) -> list[Task]:
    """The visible tasks of one column."""
    tasks = view(project.column_tasks(column_id), spec)
    col = project.column(column_id)
    if col is not None and col.view_mode is ViewMode.TIMELINE:
        return timeline_order(tasks)
    return tasks


def board_view(project: Project, spec: FilterSpec) -> dict[str, list[Task]]:
    """Visible tasks for every column, keyed by column id in column order."""
    return {col.id: column_view(project, col.id, spec) for col in project.columns}


def available_tags(project: Project) -> list[str]:
    """All distinct tags used in a project, sorted."""
    return sorted({tag for task in project.tasks for tag in task.tags})


# --- Due dates and progress ---


def days_until_due(task: Task, today: date) -> int | None:
    """Whole days from today to the due date; negative when overdue."""
    if task.due_date is None:
        return None
    return (task.due_date - today).days


def is_overdue(task: Task, today: date) -> bool:
    days = days_until_due(task, today)
    return days is not None and days < 0


def describe_due(days: int | None) -> str:
    """Human wording for days_until_due."""
    if days is None:
        return ""
    if days < 0:
        return f"{abs(days)} days overdue"
    if days == 0:
        return "Due today"
    if days == 1:
        return "Due tomorrow"
    return f"Due in {days} days"


def checklist_progress(task: Task) -> tuple[int, int]:
    """(completed, total) checklist items."""
    done = sum(1 for item in task.checklist if item.completed)
    return done, len(task.checklist)


def checklist_percent(task: Task) -> int:
    """Checklist completion rounded down to a whole percent."""
    done, total = checklist_progress(task)
    if total == 0:
        return 0
    return done * 100 // total
