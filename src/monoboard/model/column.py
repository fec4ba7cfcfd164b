"""Column mutation operations for monoboard projects."""

from dataclasses import replace

from monoboard.errors import InvariantViolation, ValidationError
from monoboard.ids import new_id
from monoboard.model.project import touch
from monoboard.models import Column, Project, ViewMode
from monoboard.palette import next_column_color


def _replace_column(project: Project, column_id: str, **changes) -> Project:
    """Replace fields on one column. Unknown ids leave the project as-is."""
    if project.column(column_id) is None:
        return project
    columns = tuple(replace(c, **changes) if c.id == column_id else c for c in project.columns)
    return touch(project, columns=columns)


def add_column(project: Project, title: str | None = None) -> Project:
    """Append a new column with the next unused palette color."""
    title = (title or "").strip() or f"Column {len(project.columns) + 1}"
    color = next_column_color([c.color for c in project.columns])
    col = Column(id=new_id(), title=title, color=color, view_mode=ViewMode.BOARD)
    return touch(project, columns=project.columns + (col,))


def rename_column(project: Project, column_id: str, title: str) -> Project:
    """Rename a column."""
    title = (title or "").strip()
    if not title:
        raise ValidationError("Column title must not be empty")
    return _replace_column(project, column_id, title=title)


def toggle_column_view_mode(project: Project, column_id: str) -> Project:
    """Switch a column between board and timeline view."""
    col = project.column(column_id)
    if col is None:
        return project
    mode = ViewMode.TIMELINE if col.view_mode is ViewMode.BOARD else ViewMode.BOARD
    return _replace_column(project, column_id, view_mode=mode)


def delete_column(project: Project, column_id: str) -> Project:
    """Remove a column and every task in it.

    Protected columns are refused.
    """
    col = project.column(column_id)
    if col is None:
        return project
    if col.protected:
        raise InvariantViolation(f"Column '{col.title}' is protected and cannot be deleted")
    columns = tuple(c for c in project.columns if c.id != column_id)
    tasks = tuple(t for t in project.tasks if t.column_id != column_id)
    return touch(project, columns=columns, tasks=tasks)
