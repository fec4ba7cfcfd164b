"""CLI argument parser and dispatch for monoboard."""

import argparse

from monoboard.cli.board import board_show
from monoboard.cli.column import column_add, column_delete, column_list, column_rename, column_toggle
from monoboard.cli.project import (
    project_create,
    project_delete,
    project_export,
    project_import,
    project_list,
    project_notes,
    project_rename,
    project_select,
)
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
from monoboard.models import Priority, SortBy, SortOrder

PRIORITIES = [p.value for p in Priority]


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Path to config file (default: ~/.config/monoboard/config.yaml)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("--project", help="Project ID or prefix (default: the active project)")

    parser = argparse.ArgumentParser(
        prog="monoboard",
        description="Single-user task board",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- project ---
    proj_p = nouns.add_parser("project", help="Project operations", parents=[common])
    proj_verbs = proj_p.add_subparsers(dest="verb")

    proj_list_p = proj_verbs.add_parser("list", help="List projects", parents=[common])
    proj_list_p.set_defaults(func=project_list)

    proj_create_p = proj_verbs.add_parser("create", help="Create a project", parents=[common])
    proj_create_p.add_argument("name", help="Project name")
    proj_create_p.add_argument(
        "--column", dest="columns", action="append", help="Extra column between To Do and Done (repeatable)"
    )
    proj_create_p.set_defaults(func=project_create)

    proj_select_p = proj_verbs.add_parser("select", help="Make a project active", parents=[common])
    proj_select_p.add_argument("id", help="Project ID")
    proj_select_p.set_defaults(func=project_select)

    proj_rename_p = proj_verbs.add_parser("rename", help="Rename a project", parents=[common])
    proj_rename_p.add_argument("id", help="Project ID")
    proj_rename_p.add_argument("name", help="New project name")
    proj_rename_p.set_defaults(func=project_rename)

    proj_delete_p = proj_verbs.add_parser("delete", help="Delete a project", parents=[common])
    proj_delete_p.add_argument("id", help="Project ID")
    proj_delete_p.set_defaults(func=project_delete)

    proj_notes_p = proj_verbs.add_parser("notes", help="Show or replace project notes", parents=[common])
    proj_notes_p.add_argument("--set", help="Replace notes with this text")
    proj_notes_p.add_argument("--stdin", action="store_true", help="Replace notes with stdin")
    proj_notes_p.set_defaults(func=project_notes)

    proj_export_p = proj_verbs.add_parser("export", help="Export a project to JSON", parents=[common])
    proj_export_p.add_argument("--dir", default=".", help="Output directory (default: .)")
    proj_export_p.set_defaults(func=project_export)

    proj_import_p = proj_verbs.add_parser("import", help="Import a project JSON file", parents=[common])
    proj_import_p.add_argument("file", help="Exported project file")
    proj_import_p.set_defaults(func=project_import)

    # project with no verb = list
    proj_p.set_defaults(func=project_list)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.set_defaults(func=column_list)

    col_add_p = col_verbs.add_parser("add", help="Create a column", parents=[common])
    col_add_p.add_argument("title", nargs="?", help="Column title (default: Column N)")
    col_add_p.set_defaults(func=column_add)

    col_rename_p = col_verbs.add_parser("rename", help="Rename a column", parents=[common])
    col_rename_p.add_argument("id", help="Column ID")
    col_rename_p.add_argument("title", help="New column title")
    col_rename_p.set_defaults(func=column_rename)

    col_toggle_p = col_verbs.add_parser("toggle", help="Switch board/timeline view", parents=[common])
    col_toggle_p.add_argument("id", help="Column ID")
    col_toggle_p.set_defaults(func=column_toggle)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column and its tasks", parents=[common])
    col_delete_p.add_argument("id", help="Column ID")
    col_delete_p.set_defaults(func=column_delete)

    # column with no verb = list
    col_p.set_defaults(func=column_list)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_list_p = task_verbs.add_parser("list", help="List tasks", parents=[common])
    task_list_p.add_argument("--column", dest="column", help="Filter by column ID")
    task_list_p.set_defaults(func=task_list)

    task_add_p = task_verbs.add_parser("add", help="Create a task", parents=[common])
    task_add_p.add_argument("title", help="Task title")
    task_add_p.add_argument("--column", dest="column", help="Target column ID (default: first column)")
    task_add_p.add_argument("--description", default="", help="Task description")
    task_add_p.add_argument("--tag", dest="tags", action="append", help="Tag (repeatable)")
    task_add_p.add_argument("--priority", choices=PRIORITIES, default="medium", help="Priority")
    task_add_p.add_argument("--due", help="Due date (YYYY-MM-DD)")
    task_add_p.set_defaults(func=task_add)

    task_get_p = task_verbs.add_parser("get", help="Dump task markdown", parents=[common])
    task_get_p.add_argument("id", help="Task ID")
    task_get_p.set_defaults(func=task_get)

    task_set_p = task_verbs.add_parser("set", help="Write task markdown from stdin", parents=[common])
    task_set_p.add_argument("id", help="Task ID")
    task_set_p.set_defaults(func=task_set)

    task_edit_p = task_verbs.add_parser("edit", help="Change task fields", parents=[common])
    task_edit_p.add_argument("id", help="Task ID")
    task_edit_p.add_argument("--title", help="New title")
    task_edit_p.add_argument("--description", help="New description")
    task_edit_p.add_argument("--priority", choices=PRIORITIES, help="New priority")
    task_edit_p.add_argument("--due", help="Due date (YYYY-MM-DD, empty to clear)")
    task_edit_p.add_argument("--add-tag", dest="add_tags", action="append", help="Add a tag (repeatable)")
    task_edit_p.add_argument("--remove-tag", dest="remove_tags", action="append", help="Remove a tag (repeatable)")
    task_edit_p.set_defaults(func=task_edit)

    task_delete_p = task_verbs.add_parser("delete", help="Delete a task", parents=[common])
    task_delete_p.add_argument("id", help="Task ID")
    task_delete_p.set_defaults(func=task_delete)

    task_move_p = task_verbs.add_parser("move", help="Move a task to another column", parents=[common])
    task_move_p.add_argument("id", help="Task ID")
    task_move_p.add_argument("--column", dest="column", required=True, help="Target column ID")
    task_move_p.set_defaults(func=task_move)

    task_reorder_p = task_verbs.add_parser("reorder", help="Reorder a task within its column", parents=[common])
    task_reorder_p.add_argument("id", help="Task ID")
    task_reorder_p.add_argument("--before", help="Place before this task (default: end of column)")
    task_reorder_p.set_defaults(func=task_reorder)

    task_check_p = task_verbs.add_parser("check", help="Toggle or add checklist items", parents=[common])
    task_check_p.add_argument("id", help="Task ID")
    task_check_p.add_argument("item", nargs="?", type=int, help="Checklist item number (1-indexed)")
    task_check_p.add_argument("--add", help="Append a checklist item with this text")
    task_check_p.set_defaults(func=task_check)

    # task with no verb = list
    task_p.set_defaults(func=task_list, column=None)

    # --- board ---
    board_p = nouns.add_parser("board", help="Show the filtered, sorted board", parents=[common])
    board_p.add_argument("--tag", dest="tags", action="append", help="Show tasks with any of these tags")
    board_p.add_argument(
        "--priority", action="append", choices=PRIORITIES, help="Show tasks with any of these priorities"
    )
    board_p.add_argument("--sort", choices=[s.value for s in SortBy], default=SortBy.DUE_DATE.value)
    board_p.add_argument("--order", choices=[o.value for o in SortOrder], default=SortOrder.ASC.value)
    board_p.set_defaults(func=board_show)

    return parser
