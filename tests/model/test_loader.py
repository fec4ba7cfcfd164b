"""Tests for loading state and importing projects."""

import json
from datetime import date, datetime, timezone

import pytest

from monoboard.errors import CorruptDataError, ProjectImportError
from monoboard.model.loader import (
    deserialize,
    import_project,
    import_project_file,
    parse_project,
    project_from_dict,
)
from monoboard.model.writer import export_text, project_to_dict, serialize
from monoboard.models import AppState, ChecklistItem, Priority, ViewMode

from .conftest import T0, _make_project, _make_task


def _exported(project) -> dict:
    return json.loads(export_text(project))


def test_round_trip(project):
    task = _make_task(
        "rich",
        description="desc",
        notes="some notes",
        tags=("art", "code"),
        priority=Priority.HIGH,
        due_date=date(2024, 2, 29),
        checklist=(ChecklistItem(id="c1", text="first", completed=True), ChecklistItem(id="c2", text="second")),
        seq=9,
    )
    project = _make_project(tasks=[*project.tasks, task], notes="hello")
    state = AppState(projects=(project,), current_project_id=project.id)

    assert deserialize(serialize(state)) == state


def test_round_trip_empty_state():
    assert deserialize(serialize(AppState())) == AppState()


def test_deserialize_not_json():
    with pytest.raises(CorruptDataError):
        deserialize("{not json")


@pytest.mark.parametrize(
    "text",
    [
        "[]",
        '{"currentProjectId": null}',
        '{"projects": {}}',
        '{"projects": [{"id": "p1"}]}',
        '{"projects": [], "currentProjectId": 3}',
    ],
)
def test_deserialize_wrong_shape(text):
    with pytest.raises(CorruptDataError):
        deserialize(text)


def test_legacy_view_mode_and_protected():
    data = {
        "id": "p1",
        "name": "Old",
        "columns": [
            {"id": "todo", "title": "To Do", "color": "#ef4444", "viewMode": "kanban"},
            {"id": "c2", "title": "Later", "color": "#8b5cf6", "viewMode": "timeline"},
            {"id": "done", "title": "Done", "color": "#10b981"},
        ],
        "tasks": [],
        "createdAt": "2024-01-01T09:00:00.000Z",
        "updatedAt": "2024-01-02T09:00:00.000Z",
    }
    project = project_from_dict(data)

    assert [c.view_mode for c in project.columns] == [ViewMode.BOARD, ViewMode.TIMELINE, ViewMode.BOARD]
    assert [c.protected for c in project.columns] == [True, False, True]
    assert project.created_at == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def test_explicit_protected_flag_wins():
    data = {
        "id": "p1",
        "name": "P",
        "columns": [{"id": "todo", "title": "To Do", "protected": False}],
        "tasks": [],
    }
    assert project_from_dict(data).columns[0].protected is False


def test_task_defaults():
    data = {
        "id": "p1",
        "name": "P",
        "columns": [{"id": "todo", "title": "To Do"}],
        "tasks": [{"id": "t1", "title": "Bare", "columnId": "todo"}],
    }
    task = project_from_dict(data).tasks[0]
    assert task.priority is Priority.MEDIUM
    assert task.tags == ()
    assert task.checklist == ()
    assert task.due_date is None
    assert task.seq == 0


def test_unknown_priority_is_corrupt():
    data = {
        "id": "p1",
        "name": "P",
        "columns": [],
        "tasks": [{"id": "t1", "title": "T", "columnId": "todo", "priority": "urgent"}],
    }
    with pytest.raises(CorruptDataError):
        project_from_dict(data)


def test_parse_project_new_id_keeps_inner_ids(project):
    imported = parse_project(export_text(project))

    assert imported.id != project.id
    assert imported.name == project.name
    assert [c.id for c in imported.columns] == [c.id for c in project.columns]
    assert [t.id for t in imported.tasks] == [t.id for t in project.tasks]
    assert imported.created_at == project.created_at
    assert imported.updated_at > T0


def test_parse_project_missing_tasks(project):
    data = _exported(project)
    del data["tasks"]
    with pytest.raises(ProjectImportError):
        parse_project(json.dumps(data))


@pytest.mark.parametrize("key", ["id", "name"])
def test_parse_project_missing_identity(project, key):
    data = _exported(project)
    del data[key]
    with pytest.raises(ProjectImportError):
        parse_project(json.dumps(data))


def test_parse_project_not_json():
    with pytest.raises(ProjectImportError):
        parse_project("this is not json")


def test_parse_project_orphan_task(project):
    data = _exported(project)
    data["tasks"][0]["columnId"] = "nowhere"
    with pytest.raises(ProjectImportError, match="unknown column"):
        parse_project(json.dumps(data))


def test_import_error_is_corrupt_data():
    assert issubclass(ProjectImportError, CorruptDataError)


def test_import_project_missing_file(tmp_path):
    with pytest.raises(ProjectImportError):
        import_project(tmp_path / "missing.json")


def test_import_project(tmp_path, project):
    path = tmp_path / "p.json"
    path.write_text(export_text(project))
    imported = import_project(path)
    assert imported.name == project.name
    assert len(imported.tasks) == len(project.tasks)


@pytest.mark.asyncio
async def test_import_project_file(tmp_path, project):
    path = tmp_path / "p.json"
    path.write_text(json.dumps(project_to_dict(project)))
    imported = await import_project_file(path)
    assert imported.name == project.name
    assert imported.id != project.id


@pytest.mark.asyncio
async def test_import_project_file_invalid(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"id": "x", "name": "X", "columns": []}')
    with pytest.raises(ProjectImportError):
        await import_project_file(path)
