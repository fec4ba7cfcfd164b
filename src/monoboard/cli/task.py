"""Handlers for 'monoboard task' commands."""

import sys
from dataclasses import replace
from datetime import date

from monoboard.cli._common import (
    error,
    find_column,
    find_project,
    find_task,
    open_store,
    output_json,
    output_result,
    short_id,
)
from monoboard.errors import MonoboardError
from monoboard.markdown import markdown_to_draft, task_to_markdown
from monoboard.model.task import (
    add_checklist_item,
    add_task,
    delete_task,
    move_task,
    reorder_within_column,
    toggle_checklist_item,
    update_task,
)
from monoboard.model.writer import task_to_dict
from monoboard.models import TaskDraft


def _parse_due(raw: str | None, json_mode: bool) -> date | None:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        error(f"Invalid due date '{raw}', expected YYYY-MM-DD.", json_mode)


def task_list(args) -> int:
    """List tasks grouped by column, in canonical order."""
    store = open_store(args)
    project = find_project(store, args)

    only = find_column(project, args.column, args.json).id if args.column else None
    columns = []
    for col in project.columns:
        if only and col.id != only:
            continue
        tasks = [{"id": t.id, "title": t.title} for t in project.column_tasks(col.id)]
        columns.append({"id": col.id, "title": col.title, "tasks": tasks})

    if args.json:
        items = [
            {"id": t["id"], "title": t["title"], "column": {"id": col["id"], "title": col["title"]}}
            for col in columns
            for t in col["tasks"]
        ]
        output_json(items)
    else:
        for col in columns:
            print(f"{short_id(col['id'])}  {col['title']}")
            for t in col["tasks"]:
                print(f"  {short_id(t['id'])}  {t['title']}")
    return 0


def task_add(args) -> int:
    """Create a task in a column (default: the first column)."""
    store = open_store(args)
    project = find_project(store, args)
    if args.column:
        col = find_column(project, args.column, args.json)
    elif project.columns:
        col = project.columns[0]
    else:
        error("Project has no columns.", args.json)

    draft = TaskDraft(
        title=args.title,
        description=args.description or "",
        tags=tuple(args.tags or ()),
        priority=args.priority or "medium",
        due_date=_parse_due(args.due, args.json),
    )
    try:
        project = store.apply(project.id, add_task, col.id, draft)
    except MonoboardError as e:
        error(str(e), args.json)

    task = project.tasks[-1]
    output_result(
        {"id": task.id, "title": task.title, "column": {"id": col.id, "title": col.title}},
        f"Created task {short_id(task.id)} in {col.title}",
        args.json,
    )
    return 0


def task_get(args) -> int:
    """Dump a task as markdown."""
    store = open_store(args)
    project = find_project(store, args)
    task = find_task(project, args.id, args.json)
    markdown = task_to_markdown(task)

    if args.json:
        data = task_to_dict(task)
        data["markdown"] = markdown
        output_json(data)
    else:
        sys.stdout.write(markdown)
    return 0


def task_set(args) -> int:
    """Replace a task's content with markdown read from stdin."""
    store = open_store(args)
    project = find_project(store, args)
    task = find_task(project, args.id, args.json)

    try:
        draft = markdown_to_draft(sys.stdin.read(), task.checklist)
        updated = replace(
            task,
            title=draft.title,
            description=draft.description,
            notes=draft.notes,
            tags=draft.tags,
            priority=draft.priority,
            due_date=draft.due_date,
            checklist=draft.checklist,
        )
        store.apply(project.id, update_task, updated)
    except MonoboardError as e:
        error(str(e), args.json)

    output_result({"id": task.id}, f"Updated task {short_id(task.id)}", args.json)
    return 0


def task_edit(args) -> int:
    """Change individual task fields."""
    store = open_store(args)
    project = find_project(store, args)
    task = find_task(project, args.id, args.json)

    changes = {}
    if args.title is not None:
        changes["title"] = args.title
    if args.description is not None:
        changes["description"] = args.description
    if args.priority is not None:
        changes["priority"] = args.priority
    if args.due is not None:
        changes["due_date"] = _parse_due(args.due, args.json)
    tags = [t for t in task.tags if t not in (args.remove_tags or ())]
    tags.extend(args.add_tags or ())
    changes["tags"] = tuple(tags)

    try:
        project = store.apply(project.id, update_task, replace(task, **changes))
    except MonoboardError as e:
        error(str(e), args.json)

    output_result(task_to_dict(project.task(task.id)), f"Updated task {short_id(task.id)}", args.json)
    return 0


def task_delete(args) -> int:
    """Delete a task."""
    store = open_store(args)
    project = find_project(store, args)
    task = find_task(project, args.id, args.json)
    store.apply(project.id, delete_task, task.id)
    output_result({"id": task.id}, f"Deleted task {short_id(task.id)}", args.json)
    return 0


def task_move(args) -> int:
    """Move a task to the end of another column."""
    store = open_store(args)
    project = find_project(store, args)
    task = find_task(project, args.id, args.json)
    target = find_column(project, args.column, args.json)

    store.apply(project.id, move_task, task.id, target.id)

    output_result(
        {"id": task.id, "column": {"id": target.id, "title": target.title}},
        f"Moved task {short_id(task.id)} to {target.title}",
        args.json,
    )
    return 0


def task_reorder(args) -> int:
    """Move a task before another task of the same column, or to its end."""
    store = open_store(args)
    project = find_project(store, args)
    task = find_task(project, args.id, args.json)
    before = find_task(project, args.before, args.json) if args.before else None

    try:
        store.apply(project.id, reorder_within_column, task.column_id, task.id, before.id if before else None)
    except MonoboardError as e:
        error(str(e), args.json)

    where = f"before {short_id(before.id)}" if before else "to the end"
    output_result(
        {"id": task.id, "before": before.id if before else None},
        f"Moved task {short_id(task.id)} {where}",
        args.json,
    )
    return 0


def task_check(args) -> int:
    """Toggle a checklist item (1-indexed), or append one with --add."""
    store = open_store(args)
    project = find_project(store, args)
    task = find_task(project, args.id, args.json)

    if args.add is not None:
        project = store.apply(project.id, add_checklist_item, task.id, args.add)
    else:
        if args.item is None or not 1 <= args.item <= len(task.checklist):
            error(f"Task {short_id(task.id)} has no checklist item {args.item}.", args.json)
        item = task.checklist[args.item - 1]
        project = store.apply(project.id, toggle_checklist_item, task.id, item.id)

    checklist = project.task(task.id).checklist
    if args.json:
        output_json({"id": task.id, "checklist": task_to_dict(project.task(task.id))["checklist"]})
    else:
        for i, item in enumerate(checklist, 1):
            print(f"{i:>3}. [{'x' if item.completed else ' '}] {item.text}")
    return 0
