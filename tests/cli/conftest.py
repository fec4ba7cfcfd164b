"""Shared fixtures for CLI tests."""

from argparse import Namespace
from datetime import date

import pytest

from monoboard.config import load_config
from monoboard.model.task import add_task
from monoboard.models import Priority, TaskDraft
from monoboard.storage import FileStorage
from monoboard.store import ProjectStore


@pytest.fixture
def config(tmp_path):
    """Write a config file pointing file storage at tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(f"storage: file\ndata-dir: {tmp_path / 'data'}\n")
    return str(path)


def load_store(config_path) -> ProjectStore:
    """Open the store a CLI command would see for this config."""
    cfg = load_config(config_path)
    store = ProjectStore(FileStorage(cfg["data_dir"]), key=cfg["storage_key"])
    store.load()
    return store


@pytest.fixture
def initialized(config):
    """A saved project with To Do / Doing / Done and two tasks in To Do."""
    store = load_store(config)
    project = store.create_project("Test Board", ["Doing"])
    store.apply(project.id, add_task, "todo", TaskDraft(title="First task", description="Description one."))
    store.apply(
        project.id,
        add_task,
        "todo",
        TaskDraft(title="Second task", tags=("art",), priority=Priority.HIGH, due_date=date(2024, 1, 1)),
    )
    return config


def make_args(config, json=False, project=None, **kwargs):
    return Namespace(config=config, json=json, project=project, **kwargs)
