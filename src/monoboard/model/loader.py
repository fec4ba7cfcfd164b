"""Load monoboard state and imported projects from JSON."""

import asyncio
import json
import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from monoboard.errors import CorruptDataError, ProjectImportError
from monoboard.ids import new_id
from monoboard.model.project import DONE_ID, TODO_ID, utcnow
from monoboard.models import AppState, ChecklistItem, Column, Priority, Project, Task, ViewMode

logger = logging.getLogger(__name__)

LEGACY_PROTECTED_IDS = {TODO_ID, DONE_ID}
LEGACY_VIEW_MODES = {"kanban": ViewMode.BOARD}


def _require(data: Any, key: str, kind: type | tuple[type, ...], where: str) -> Any:
    """Fetch data[key] and check its type, raising CorruptDataError."""
    if not isinstance(data, dict):
        raise CorruptDataError(f"{where}: expected an object")
    if key not in data:
        raise CorruptDataError(f"{where}: missing '{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise CorruptDataError(f"{where}: '{key}' has the wrong type")
    return value


def _optional_str(data: dict, key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _parse_datetime(raw: Any, where: str) -> datetime:
    """Parse an ISO timestamp; a trailing Z means UTC."""
    if not isinstance(raw, str):
        raise CorruptDataError(f"{where}: timestamp must be a string")
    text = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        value = datetime.fromisoformat(text)
    except ValueError as exc:
        raise CorruptDataError(f"{where}: bad timestamp {raw!r}") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _parse_date(raw: Any, where: str) -> date | None:
    if raw in (None, ""):
        return None
    if not isinstance(raw, str):
        raise CorruptDataError(f"{where}: dueDate must be a string")
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise CorruptDataError(f"{where}: bad dueDate {raw!r}") from exc


def checklist_item_from_dict(data: Any, where: str) -> ChecklistItem:
    return ChecklistItem(
        id=_require(data, "id", str, where),
        text=_optional_str(data, "text"),
        completed=bool(data.get("completed", False)),
    )


def task_from_dict(data: Any, where: str = "task") -> Task:
    """Build a Task from wire data. Missing optional fields take defaults."""
    task_id = _require(data, "id", str, where)
    where = f"{where} {task_id}"
    tags = data.get("tags") or []
    checklist = data.get("checklist") or []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise CorruptDataError(f"{where}: 'tags' must be a list of strings")
    if not isinstance(checklist, list):
        raise CorruptDataError(f"{where}: 'checklist' must be a list")
    try:
        priority = Priority(data.get("priority") or Priority.MEDIUM.value)
    except ValueError as exc:
        raise CorruptDataError(f"{where}: unknown priority {data.get('priority')!r}") from exc
    seq = data.get("seq", 0)
    if not isinstance(seq, int) or isinstance(seq, bool):
        raise CorruptDataError(f"{where}: 'seq' must be an integer")
    return Task(
        id=task_id,
        title=_require(data, "title", str, where),
        column_id=_require(data, "columnId", str, where),
        description=_optional_str(data, "description"),
        notes=_optional_str(data, "notes"),
        tags=tuple(dict.fromkeys(tags)),
        priority=priority,
        due_date=_parse_date(data.get("dueDate"), where),
        checklist=tuple(checklist_item_from_dict(i, where) for i in checklist),
        seq=seq,
    )


def column_from_dict(data: Any, where: str = "column") -> Column:
    """Build a Column from wire data.

    Data written before columns carried a protected flag marks the
    todo and done columns as protected.
    """
    col_id = _require(data, "id", str, where)
    raw_mode = data.get("viewMode") or ViewMode.BOARD.value
    try:
        view_mode = LEGACY_VIEW_MODES.get(raw_mode) or ViewMode(raw_mode)
    except (TypeError, ValueError) as exc:
        raise CorruptDataError(f"{where} {col_id}: unknown viewMode {raw_mode!r}") from exc
    protected = data.get("protected")
    if protected is None:
        protected = col_id in LEGACY_PROTECTED_IDS
    return Column(
        id=col_id,
        title=_require(data, "title", str, where),
        color=_optional_str(data, "color"),
        view_mode=view_mode,
        protected=bool(protected),
    )


def project_from_dict(data: Any) -> Project:
    """Build a Project from wire data, raising CorruptDataError on bad shape."""
    project_id = _require(data, "id", str, "project")
    where = f"project {project_id}"
    name = _require(data, "name", str, where)
    columns = _require(data, "columns", list, where)
    tasks = _require(data, "tasks", list, where)
    now = utcnow()
    created = data.get("createdAt")
    updated = data.get("updatedAt")
    return Project(
        id=project_id,
        name=name,
        created_at=_parse_datetime(created, where) if created is not None else now,
        updated_at=_parse_datetime(updated, where) if updated is not None else now,
        columns=tuple(column_from_dict(c, where) for c in columns),
        tasks=tuple(task_from_dict(t, where) for t in tasks),
        notes=_optional_str(data, "notes"),
    )


def state_from_dict(data: Any) -> AppState:
    projects = _require(data, "projects", list, "state")
    current = data.get("currentProjectId")
    if current is not None and not isinstance(current, str):
        raise CorruptDataError("state: 'currentProjectId' must be a string or null")
    return AppState(
        projects=tuple(project_from_dict(p) for p in projects),
        current_project_id=current,
    )


def deserialize(text: str) -> AppState:
    """Parse a persisted state document."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise CorruptDataError(f"state is not valid JSON: {exc}") from exc
    return state_from_dict(data)


# --- Import ---


def parse_project(text: str) -> Project:
    """Parse an exported project file.

    The project gets a fresh id and updated_at; ids of columns, tasks
    and checklist items are kept as they are.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ProjectImportError(f"Failed to parse project file: {exc}") from exc

    if not isinstance(data, dict):
        raise ProjectImportError("Invalid project format: expected an object")
    for key in ("id", "name"):
        if not isinstance(data.get(key), str) or not data[key]:
            raise ProjectImportError(f"Invalid project format: missing '{key}'")
    for key in ("columns", "tasks"):
        if not isinstance(data.get(key), list):
            raise ProjectImportError(f"Invalid project format: '{key}' must be a list")

    try:
        project = project_from_dict(data)
    except CorruptDataError as exc:
        raise ProjectImportError(f"Invalid project format: {exc}") from exc

    column_ids = {c.id for c in project.columns}
    for task in project.tasks:
        if task.column_id not in column_ids:
            raise ProjectImportError(
                f"Invalid project format: task {task.id} references unknown column {task.column_id}"
            )

    return replace(project, id=new_id(), updated_at=utcnow())


def _read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectImportError(f"Failed to read file {path}: {exc}") from exc


def import_project(path: str | Path) -> Project:
    """Read and parse an exported project file."""
    project = parse_project(_read_text(path))
    logger.info("imported project %s from %s", project.name, path)
    return project


async def import_project_file(path: str | Path) -> Project:
    """Read a project file in a worker thread, then parse it."""
    text = await asyncio.to_thread(_read_text, path)
    return parse_project(text)
