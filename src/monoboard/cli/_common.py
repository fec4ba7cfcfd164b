"""Shared helpers for CLI command handlers."""

import json
import logging
import sys

from monoboard.config import load_config
from monoboard.models import Column, Project, Task
from monoboard.storage import open_storage
from monoboard.store import ProjectStore


def setup_logging(level: str) -> None:
    """Log to stderr at the configured level."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=getattr(logging, str(level).upper(), logging.WARNING),
    )


def open_store(args) -> ProjectStore:
    """Build the store from config and load saved state."""
    config = load_config(getattr(args, "config", None))
    setup_logging(config["log_level"])
    try:
        storage = open_storage(config)
    except ValueError as e:
        error(str(e), args.json)
    store = ProjectStore(
        storage,
        key=config["storage_key"],
        seed_default_project=config["seed_default_project"],
    )
    store.load()
    return store


def resolve_id(ids: list[str], wanted: str) -> str | None:
    """Match an exact id, or a unique id prefix."""
    if wanted in ids:
        return wanted
    matches = [i for i in ids if i.startswith(wanted)]
    return matches[0] if len(matches) == 1 else None


def find_project(store: ProjectStore, args) -> Project:
    """Project named by --project, else the active one. Exit 1 if neither."""
    wanted = getattr(args, "project", None)
    if wanted:
        project_id = resolve_id([p.id for p in store.projects], wanted)
        if project_id is None:
            error(f"Project '{wanted}' not found.", args.json)
        return store.get_project(project_id)
    project = store.current_project
    if project is None:
        error("No project selected. Create one with 'monoboard project create NAME'.", args.json)
    return project


def find_column(project: Project, col_id: str, json_mode: bool) -> Column:
    """Lookup column by id. Exit 1 listing available columns if not found."""
    resolved = resolve_id([c.id for c in project.columns], col_id)
    if resolved is not None:
        return project.column(resolved)
    available = [f"  {c.id}  {c.title}" for c in project.columns]
    msg = f"Column '{col_id}' not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def find_task(project: Project, task_id: str, json_mode: bool) -> Task:
    """Lookup task by id or unique prefix. Exit 1 if not found."""
    resolved = resolve_id([t.id for t in project.tasks], task_id)
    if resolved is not None:
        return project.task(resolved)
    error(f"Task '{task_id}' not found.", json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def short_id(value: str) -> str:
    """First eight characters of an id, for display."""
    return value[:8]


def column_summary(project: Project, col: Column) -> dict:
    count = len(project.column_tasks(col.id))
    return {
        "id": col.id,
        "title": col.title,
        "color": col.color,
        "viewMode": col.view_mode.value,
        "protected": col.protected,
        "tasks": count,
    }


def format_column_line(c: dict, indent: str = "") -> str:
    """Format a column summary dict as a text line."""
    protected = "  (protected)" if c["protected"] else ""
    timeline = "  [timeline]" if c["viewMode"] == "timeline" else ""
    tasks = "task" if c["tasks"] == 1 else "tasks"
    return f"{indent}{short_id(c['id']):<8}  {c['title']:<16} {c['tasks']} {tasks}{timeline}{protected}"
