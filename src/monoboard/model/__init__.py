"""Pure board operations: mutation engine, views and persistence."""

from monoboard.model.column import add_column, delete_column, rename_column, toggle_column_view_mode
from monoboard.model.loader import deserialize, import_project, import_project_file, parse_project
from monoboard.model.project import new_project, touch, update_notes
from monoboard.model.task import (
    add_checklist_item,
    add_tag,
    add_task,
    delete_task,
    edit_checklist_item,
    move_task,
    remove_checklist_item,
    remove_tag,
    reorder_within_column,
    toggle_checklist_item,
    update_task,
)
from monoboard.model.view import board_view, column_view, view
from monoboard.model.writer import export_project, serialize

__all__ = [
    "add_checklist_item",
    "add_column",
    "add_tag",
    "add_task",
    "board_view",
    "column_view",
    "delete_column",
    "delete_task",
    "deserialize",
    "edit_checklist_item",
    "export_project",
    "import_project",
    "import_project_file",
    "move_task",
    "new_project",
    "parse_project",
    "remove_checklist_item",
    "remove_tag",
    "rename_column",
    "reorder_within_column",
    "serialize",
    "toggle_checklist_item",
    "toggle_column_view_mode",
    "touch",
    "update_notes",
    "update_task",
    "view",
]
