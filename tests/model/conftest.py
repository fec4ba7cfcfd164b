"""Shared test helpers for model tests."""

from datetime import datetime, timezone

import pytest

from monoboard.model.project import DONE_ID, TODO_ID
from monoboard.models import Column, Priority, Project, Task

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def _make_task(task_id, title=None, column_id=TODO_ID, seq=0, **fields):
    """Helper to build a Task."""
    return Task(id=task_id, title=title or task_id.upper(), column_id=column_id, seq=seq, **fields)


def _make_column(col_id, title=None, protected=False, **fields):
    """Helper to build a Column."""
    return Column(id=col_id, title=title or col_id.title(), protected=protected, **fields)


def _make_project(columns=None, tasks=None, notes="", project_id="p1", name="Test Project"):
    """Helper to build a Project with protected todo/done columns by default."""
    if columns is None:
        columns = [
            _make_column(TODO_ID, "To Do", protected=True),
            _make_column("doing", "Doing"),
            _make_column(DONE_ID, "Done", protected=True),
        ]
    return Project(
        id=project_id,
        name=name,
        created_at=T0,
        updated_at=T0,
        columns=tuple(columns),
        tasks=tuple(tasks or ()),
        notes=notes,
    )


@pytest.fixture
def project():
    """A project with three columns and tasks spread across them."""
    return _make_project(
        tasks=[
            _make_task("a", column_id=TODO_ID, seq=1),
            _make_task("x", column_id="doing", seq=2),
            _make_task("b", column_id=TODO_ID, seq=3),
            _make_task("y", column_id="doing", seq=4),
            _make_task("c", column_id=TODO_ID, seq=5, priority=Priority.HIGH),
        ]
    )


def ids(tasks):
    return [t.id for t in tasks]
