"""Serialize monoboard state to JSON and export single projects."""

import json
import re
from datetime import date
from pathlib import Path

from monoboard.errors import StorageError
from monoboard.models import AppState, ChecklistItem, Column, Project, Task

# --- Helpers for converting models to plain JSON data ---


def checklist_item_to_dict(item: ChecklistItem) -> dict:
    return {"id": item.id, "text": item.text, "completed": item.completed}


def task_to_dict(task: Task) -> dict:
    """Convert a Task to its wire form. dueDate is omitted when unset."""
    data = {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "notes": task.notes,
        "tags": list(task.tags),
        "priority": task.priority.value,
        "checklist": [checklist_item_to_dict(i) for i in task.checklist],
        "columnId": task.column_id,
        "seq": task.seq,
    }
    if task.due_date is not None:
        data["dueDate"] = task.due_date.isoformat()
    return data


def column_to_dict(column: Column) -> dict:
    return {
        "id": column.id,
        "title": column.title,
        "color": column.color,
        "viewMode": column.view_mode.value,
        "protected": column.protected,
    }


def project_to_dict(project: Project) -> dict:
    return {
        "id": project.id,
        "name": project.name,
        "columns": [column_to_dict(c) for c in project.columns],
        "tasks": [task_to_dict(t) for t in project.tasks],
        "notes": project.notes,
        "createdAt": project.created_at.isoformat(),
        "updatedAt": project.updated_at.isoformat(),
    }


def state_to_dict(state: AppState) -> dict:
    return {
        "projects": [project_to_dict(p) for p in state.projects],
        "currentProjectId": state.current_project_id,
    }


def serialize(state: AppState) -> str:
    """Serialize the whole app state to a JSON document."""
    return json.dumps(state_to_dict(state))


# --- Export ---


def export_filename(project: Project, today: date) -> str:
    """Build '<name with whitespace as underscores>_<yyyy-mm-dd>.json'."""
    name = re.sub(r"\s+", "_", project.name)
    return f"{name}_{today.isoformat()}.json"


def export_text(project: Project) -> str:
    """Pretty-printed JSON for a single project."""
    return json.dumps(project_to_dict(project), indent=2, ensure_ascii=False) + "\n"


def export_project(project: Project, directory: str | Path, today: date | None = None) -> Path:
    """Write a project to directory as a standalone JSON file.

    Returns the path written.
    """
    today = today or date.today()
    path = Path(directory) / export_filename(project, today)
    try:
        path.write_text(export_text(project), encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Could not write {path}: {exc}") from exc
    return path
