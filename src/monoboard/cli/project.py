"""Handlers for 'monoboard project' commands."""

import asyncio
import sys
from pathlib import Path

from monoboard.cli._common import (
    error,
    find_project,
    open_store,
    output_json,
    output_result,
    resolve_id,
    short_id,
)
from monoboard.errors import MonoboardError
from monoboard.model.project import update_notes


def _project_id(store, wanted: str, json_mode: bool) -> str:
    project_id = resolve_id([p.id for p in store.projects], wanted)
    if project_id is None:
        error(f"Project '{wanted}' not found.", json_mode)
    return project_id


def project_list(args) -> int:
    """List projects, marking the active one."""
    store = open_store(args)
    current = store.state.current_project_id
    items = [
        {
            "id": p.id,
            "name": p.name,
            "current": p.id == current,
            "columns": len(p.columns),
            "tasks": len(p.tasks),
        }
        for p in store.projects
    ]

    if args.json:
        output_json(items)
    else:
        for item in items:
            marker = "*" if item["current"] else " "
            print(f"{marker} {short_id(item['id'])}  {item['name']:<24} {item['tasks']} tasks")
    return 0


def project_create(args) -> int:
    """Create a project and make it active."""
    store = open_store(args)
    try:
        project = store.create_project(args.name, args.columns or ())
    except MonoboardError as e:
        error(str(e), args.json)

    output_result(
        {"id": project.id, "name": project.name, "columns": [c.title for c in project.columns]},
        f"Created project {project.name} ({short_id(project.id)})",
        args.json,
    )
    return 0


def project_select(args) -> int:
    """Make a project the active one."""
    store = open_store(args)
    project_id = _project_id(store, args.id, args.json)
    store.select_project(project_id)
    project = store.current_project
    output_result({"id": project.id, "name": project.name}, f"Selected {project.name}", args.json)
    return 0


def project_rename(args) -> int:
    """Rename a project."""
    store = open_store(args)
    project_id = _project_id(store, args.id, args.json)
    try:
        project = store.rename_project(project_id, args.name)
    except MonoboardError as e:
        error(str(e), args.json)
    output_result({"id": project.id, "name": project.name}, f"Renamed project to {project.name}", args.json)
    return 0


def project_delete(args) -> int:
    """Delete a project."""
    store = open_store(args)
    project_id = _project_id(store, args.id, args.json)
    name = store.get_project(project_id).name
    try:
        store.delete_project(project_id)
    except MonoboardError as e:
        error(str(e), args.json)
    output_result(
        {"id": project_id, "current": store.state.current_project_id},
        f"Deleted project {name}",
        args.json,
    )
    return 0


def project_notes(args) -> int:
    """Print project notes, or replace them with --set / stdin."""
    store = open_store(args)
    project = find_project(store, args)

    if args.set is None and not args.stdin:
        if args.json:
            output_json({"id": project.id, "notes": project.notes})
        else:
            sys.stdout.write(project.notes + ("\n" if project.notes else ""))
        return 0

    notes = sys.stdin.read() if args.stdin else args.set
    project = store.apply(project.id, update_notes, notes)
    output_result({"id": project.id, "notes": project.notes}, "Updated notes", args.json)
    return 0


def project_export(args) -> int:
    """Export a project to a JSON file."""
    store = open_store(args)
    project = find_project(store, args)
    try:
        path = store.export(project.id, Path(args.dir))
    except MonoboardError as e:
        error(str(e), args.json)
    output_result({"id": project.id, "path": str(path)}, f"Exported {project.name} to {path}", args.json)
    return 0


def project_import(args) -> int:
    """Import a project file as a new project."""
    store = open_store(args)
    try:
        project = asyncio.run(store.import_file_async(args.file))
    except MonoboardError as e:
        error(f"Failed to import project: {e}", args.json)
    output_result(
        {"id": project.id, "name": project.name, "tasks": len(project.tasks)},
        f"Imported project {project.name} ({short_id(project.id)})",
        args.json,
    )
    return 0
