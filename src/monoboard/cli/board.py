"""Handler for 'monoboard board': the filtered, sorted board view."""

from datetime import date

from monoboard.cli._common import find_project, open_store, output_json, short_id
from monoboard.model.view import (
    available_tags,
    board_view,
    checklist_progress,
    days_until_due,
    describe_due,
)
from monoboard.models import FilterSpec, Priority, SortBy, SortOrder, Task


def filter_spec_from_args(args) -> FilterSpec:
    """Build a FilterSpec from --tag/--priority/--sort/--order."""
    return FilterSpec(
        tags=frozenset(args.tags or ()),
        priority=frozenset(Priority(p) for p in args.priority or ()),
        sort_by=SortBy(args.sort),
        sort_order=SortOrder(args.order),
    )


def _task_line(task: Task, today: date) -> str:
    parts = [f"{short_id(task.id)}  {task.title}", f"[{task.priority.value}]"]
    due = describe_due(days_until_due(task, today))
    if due:
        parts.append(f"({due})")
    done, total = checklist_progress(task)
    if total:
        parts.append(f"{done}/{total}")
    if task.tags:
        parts.append(" ".join(f"#{t}" for t in task.tags))
    return "  ".join(parts)


def board_show(args) -> int:
    """Show every column with its visible tasks."""
    store = open_store(args)
    project = find_project(store, args)
    spec = filter_spec_from_args(args)
    today = date.today()
    columns = board_view(project, spec)

    if args.json:
        output_json(
            {
                "id": project.id,
                "name": project.name,
                "tags": available_tags(project),
                "columns": [
                    {
                        "id": col.id,
                        "title": col.title,
                        "viewMode": col.view_mode.value,
                        "tasks": [t.id for t in columns[col.id]],
                    }
                    for col in project.columns
                ],
            }
        )
        return 0

    print(project.name)
    for col in project.columns:
        tasks = columns[col.id]
        mode = "  [timeline]" if col.view_mode.value == "timeline" else ""
        print(f"  {col.title} ({len(tasks)}){mode}")
        for task in tasks:
            print(f"    {_task_line(task, today)}")
    return 0
