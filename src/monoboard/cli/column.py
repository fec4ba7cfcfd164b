"""Handlers for 'monoboard column' commands."""

from monoboard.cli._common import (
    column_summary,
    error,
    find_column,
    find_project,
    format_column_line,
    open_store,
    output_json,
    output_result,
)
from monoboard.errors import MonoboardError
from monoboard.model.column import add_column, delete_column, rename_column, toggle_column_view_mode


def column_list(args) -> int:
    """List columns with task counts."""
    store = open_store(args)
    project = find_project(store, args)
    items = [column_summary(project, c) for c in project.columns]

    if args.json:
        output_json(items)
    else:
        print(project.name)
        for c in items:
            print(format_column_line(c, indent="  "))
    return 0


def column_add(args) -> int:
    """Append a column."""
    store = open_store(args)
    project = find_project(store, args)
    project = store.apply(project.id, add_column, args.title)
    col = project.columns[-1]
    output_result(
        {"id": col.id, "title": col.title, "color": col.color},
        f"Created column {col.title}",
        args.json,
    )
    return 0


def column_rename(args) -> int:
    """Rename a column."""
    store = open_store(args)
    project = find_project(store, args)
    col = find_column(project, args.id, args.json)
    try:
        store.apply(project.id, rename_column, col.id, args.title)
    except MonoboardError as e:
        error(str(e), args.json)
    output_result({"id": col.id, "title": args.title.strip()}, f"Renamed column to {args.title.strip()}", args.json)
    return 0


def column_toggle(args) -> int:
    """Switch a column between board and timeline view."""
    store = open_store(args)
    project = find_project(store, args)
    col = find_column(project, args.id, args.json)
    project = store.apply(project.id, toggle_column_view_mode, col.id)
    mode = project.column(col.id).view_mode.value
    output_result({"id": col.id, "viewMode": mode}, f"{col.title} now shows as {mode}", args.json)
    return 0


def column_delete(args) -> int:
    """Delete a column and its tasks."""
    store = open_store(args)
    project = find_project(store, args)
    col = find_column(project, args.id, args.json)
    removed = len(project.column_tasks(col.id))
    try:
        store.apply(project.id, delete_column, col.id)
    except MonoboardError as e:
        error(str(e), args.json)
    tasks = "task" if removed == 1 else "tasks"
    output_result(
        {"id": col.id, "deletedTasks": removed},
        f"Deleted column {col.title} and {removed} {tasks}",
        args.json,
    )
    return 0
