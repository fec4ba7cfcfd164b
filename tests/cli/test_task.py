"""Tests for 'monoboard task' commands."""

import json
from io import StringIO

import pytest

from monoboard.cli.task import (
    task_add,
    task_check,
    task_delete,
    task_edit,
    task_get,
    task_list,
    task_move,
    task_reorder,
    task_set,
)

from .conftest import load_store, make_args


def _tasks(config):
    return load_store(config).current_project.tasks


def _add_args(config, title, **kwargs):
    fields = {"column": None, "description": "", "tags": None, "priority": "medium", "due": None}
    fields.update(kwargs)
    return make_args(config, title=title, **fields)


def _edit_args(config, task_id, **kwargs):
    fields = {
        "title": None,
        "description": None,
        "priority": None,
        "due": None,
        "add_tags": None,
        "remove_tags": None,
    }
    fields.update(kwargs)
    return make_args(config, id=task_id, **fields)


def test_task_list(initialized, capsys):
    assert task_list(make_args(initialized, column=None)) == 0
    out = capsys.readouterr().out
    assert "First task" in out
    assert "Second task" in out
    assert "Doing" in out


def test_task_list_json_filtered(initialized, capsys):
    assert task_list(make_args(initialized, json=True, column="todo")) == 0
    data = json.loads(capsys.readouterr().out)
    assert [t["title"] for t in data] == ["First task", "Second task"]
    assert data[0]["column"]["id"] == "todo"


def test_task_add_defaults_to_first_column(initialized, capsys):
    assert task_add(_add_args(initialized, "Third task", tags=["code", "code"], due="2024-03-01")) == 0
    assert "Created task" in capsys.readouterr().out

    task = _tasks(initialized)[-1]
    assert task.title == "Third task"
    assert task.column_id == "todo"
    assert task.tags == ("code",)
    assert task.due_date.isoformat() == "2024-03-01"
    assert task.seq == 3


def test_task_add_bad_due(initialized, capsys):
    with pytest.raises(SystemExit):
        task_add(_add_args(initialized, "Bad", due="tomorrow"))
    assert "Invalid due date" in capsys.readouterr().err


def test_task_add_blank_title(initialized):
    with pytest.raises(SystemExit):
        task_add(_add_args(initialized, "   "))
    assert len(_tasks(initialized)) == 2


def test_task_get_markdown(initialized, capsys):
    task = _tasks(initialized)[1]
    assert task_get(make_args(initialized, id=task.id[:8])) == 0
    out = capsys.readouterr().out
    assert "# Second task" in out
    assert "priority: high" in out


def test_task_get_json(initialized, capsys):
    task = _tasks(initialized)[0]
    assert task_get(make_args(initialized, json=True, id=task.id)) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["id"] == task.id
    assert data["markdown"].startswith("---\n")


def test_task_get_not_found(initialized, capsys):
    with pytest.raises(SystemExit):
        task_get(make_args(initialized, id="nope"))
    assert "not found" in capsys.readouterr().err


def test_task_set(initialized, monkeypatch):
    task = _tasks(initialized)[0]
    markdown = "---\npriority: low\ntags: [docs]\n---\n# Renamed\n\nNew body\n\n## Checklist\n\n- [ ] Step\n"
    monkeypatch.setattr("sys.stdin", StringIO(markdown))

    assert task_set(make_args(initialized, id=task.id)) == 0
    updated = load_store(initialized).current_project.task(task.id)
    assert updated.title == "Renamed"
    assert updated.description == "New body"
    assert updated.priority.value == "low"
    assert updated.tags == ("docs",)
    assert [i.text for i in updated.checklist] == ["Step"]


def test_task_set_empty_title(initialized, monkeypatch):
    task = _tasks(initialized)[0]
    monkeypatch.setattr("sys.stdin", StringIO("no heading here\n"))
    with pytest.raises(SystemExit):
        task_set(make_args(initialized, id=task.id))
    assert load_store(initialized).current_project.task(task.id).title == "First task"


def test_task_edit(initialized, capsys):
    task = _tasks(initialized)[1]
    args = _edit_args(initialized, task.id, json=True, priority="low", due="", add_tags=["sound"], remove_tags=["art"])
    assert task_edit(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["priority"] == "low"
    assert data["tags"] == ["sound"]
    assert "dueDate" not in data


def test_task_delete(initialized):
    task = _tasks(initialized)[0]
    assert task_delete(make_args(initialized, id=task.id)) == 0
    assert [t.title for t in _tasks(initialized)] == ["Second task"]


def test_task_move(initialized, capsys):
    doing = load_store(initialized).current_project.columns[1]
    task = _tasks(initialized)[0]
    assert task_move(make_args(initialized, id=task.id, column=doing.id[:8])) == 0
    assert "Moved task" in capsys.readouterr().out

    project = load_store(initialized).current_project
    assert project.task(task.id).column_id == doing.id
    assert [t.title for t in project.column_tasks("todo")] == ["Second task"]


def test_task_reorder(initialized):
    first, second = _tasks(initialized)
    assert task_reorder(make_args(initialized, id=second.id, before=first.id)) == 0
    assert [t.title for t in _tasks(initialized)] == ["Second task", "First task"]

    assert task_reorder(make_args(initialized, id=second.id, before=None)) == 0
    assert [t.title for t in _tasks(initialized)] == ["First task", "Second task"]


def test_task_reorder_other_column(initialized):
    store = load_store(initialized)
    doing = store.current_project.columns[1]
    first, second = store.current_project.tasks
    task_move(make_args(initialized, id=first.id, column=doing.id))

    with pytest.raises(SystemExit):
        task_reorder(make_args(initialized, id=second.id, before=first.id))


def test_task_check(initialized, capsys):
    task = _tasks(initialized)[0]
    assert task_check(make_args(initialized, id=task.id, item=None, add="Write docs")) == 0
    assert "[ ] Write docs" in capsys.readouterr().out

    assert task_check(make_args(initialized, json=True, id=task.id, item=1, add=None)) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["checklist"][0]["completed"] is True


def test_task_check_bad_item(initialized, capsys):
    task = _tasks(initialized)[0]
    with pytest.raises(SystemExit):
        task_check(make_args(initialized, id=task.id, item=3, add=None))
    assert "no checklist item 3" in capsys.readouterr().err
