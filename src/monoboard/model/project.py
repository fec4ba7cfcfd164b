"""Project-level operations: creation, timestamps, notes."""

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

from monoboard.errors import ValidationError
from monoboard.ids import new_id
from monoboard.models import ChecklistItem, Column, Priority, Project, Task
from monoboard.palette import COLORS

TODO_ID = "todo"
DONE_ID = "done"

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def touch(project: Project, **changes) -> Project:
    """Return a copy of project with changes applied and updated_at advanced.

    updated_at always moves forward, even if the clock has not.
    """
    now = utcnow()
    if now <= project.updated_at:
        now = project.updated_at + _TICK
    return replace(project, updated_at=now, **changes)


def default_columns(extra: list[str] | tuple[str, ...] = ()) -> tuple[Column, ...]:
    """Build the protected To Do / Done columns with extra columns between them."""
    palette = list(COLORS.values())
    columns = [Column(id=TODO_ID, title="To Do", color=COLORS["red"], protected=True)]
    for i, title in enumerate(extra):
        color = palette[(i + 1) % len(palette)]
        columns.append(Column(id=new_id(), title=title, color=color))
    columns.append(Column(id=DONE_ID, title="Done", color=COLORS["emerald"], protected=True))
    return tuple(columns)


def new_project(name: str, extra_columns: list[str] | tuple[str, ...] = ()) -> Project:
    """Allocate an empty project seeded with the protected default columns."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Project name must not be empty")
    now = utcnow()
    return Project(
        id=new_id(),
        name=name,
        created_at=now,
        updated_at=now,
        columns=default_columns([t.strip() for t in extra_columns if t.strip()]),
    )


def update_notes(project: Project, notes: str) -> Project:
    """Replace the project's freeform notes."""
    return touch(project, notes=notes)


STARTER_NOTES = """Welcome to your new board!

Use this notes section to:
- Brainstorm features
- Track bugs and issues
- Keep meeting notes and feedback
- Store useful links"""


def starter_project(today: date | None = None) -> Project:
    """A sample project shown the first time the board is opened."""
    today = today or utcnow().date()
    project = new_project("My Project", ["In Progress", "Testing"])
    in_progress = project.columns[1].id
    tasks = (
        Task(
            id=new_id(),
            title="Plan the first milestone",
            column_id=TODO_ID,
            description="Decide what goes into the first release",
            tags=("planning",),
            priority=Priority.HIGH,
            due_date=today + timedelta(days=7),
            checklist=(
                ChecklistItem(id=new_id(), text="List candidate features", completed=True),
                ChecklistItem(id=new_id(), text="Estimate effort"),
                ChecklistItem(id=new_id(), text="Agree on scope"),
            ),
            seq=1,
        ),
        Task(
            id=new_id(),
            title="Set up the repository",
            column_id=in_progress,
            description="Version control, CI and a README",
            tags=("setup",),
            due_date=today + timedelta(days=3),
            checklist=(ChecklistItem(id=new_id(), text="Create repository", completed=True),),
            seq=2,
        ),
        Task(
            id=new_id(),
            title="Pick a name",
            column_id=DONE_ID,
            tags=("planning",),
            priority=Priority.LOW,
            seq=3,
        ),
    )
    return replace(project, tasks=tasks, notes=STARTER_NOTES)
