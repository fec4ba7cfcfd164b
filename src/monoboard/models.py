"""Data models for monoboard projects."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ViewMode(str, Enum):
    BOARD = "board"
    TIMELINE = "timeline"


class SortBy(str, Enum):
    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    TITLE = "title"
    CREATED = "created"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ChecklistItem:
    """A sub-step of a task."""

    id: str
    text: str = ""
    completed: bool = False


@dataclass(frozen=True)
class Task:
    """A unit of work belonging to exactly one column."""

    id: str
    title: str
    column_id: str
    description: str = ""
    notes: str = ""
    tags: tuple[str, ...] = ()
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    checklist: tuple[ChecklistItem, ...] = ()
    seq: int = 0


@dataclass(frozen=True)
class TaskDraft:
    """User-entered task fields, before an id and column are assigned."""

    title: str
    description: str = ""
    notes: str = ""
    tags: tuple[str, ...] = ()
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    checklist: tuple[ChecklistItem, ...] = ()


@dataclass(frozen=True)
class Column:
    """An ordered bucket of tasks within a project."""

    id: str
    title: str
    color: str = ""
    view_mode: ViewMode = ViewMode.BOARD
    protected: bool = False


@dataclass(frozen=True)
class Project:
    """A complete board: columns, tasks and freeform notes."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    columns: tuple[Column, ...] = ()
    tasks: tuple[Task, ...] = ()
    notes: str = ""

    def column(self, column_id: str) -> Column | None:
        """Find a column by id."""
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def task(self, task_id: str) -> Task | None:
        """Find a task by id."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def column_tasks(self, column_id: str) -> list[Task]:
        """Tasks of one column, in canonical list order."""
        return [t for t in self.tasks if t.column_id == column_id]


@dataclass(frozen=True)
class AppState:
    """Everything that is persisted: all projects plus the active one."""

    projects: tuple[Project, ...] = ()
    current_project_id: str | None = None

    def project(self, project_id: str | None) -> Project | None:
        """Find a project by id."""
        for project in self.projects:
            if project.id == project_id:
                return project
        return None


@dataclass(frozen=True)
class FilterSpec:
    """Transient view descriptor: filters plus sort. Never persisted."""

    tags: frozenset[str] = field(default_factory=frozenset)
    priority: frozenset[Priority] = field(default_factory=frozenset)
    sort_by: SortBy = SortBy.DUE_DATE
    sort_order: SortOrder = SortOrder.ASC

    @property
    def is_filtered(self) -> bool:
        return bool(self.tags or self.priority)

    def toggle_tag(self, tag: str) -> "FilterSpec":
        """Add tag to the filter, or remove it if already present."""
        return replace(self, tags=self.tags ^ {tag})

    def toggle_priority(self, priority: Priority) -> "FilterSpec":
        """Add priority to the filter, or remove it if already present."""
        return replace(self, priority=self.priority ^ {Priority(priority)})

    def sorted_by(self, sort_by: SortBy) -> "FilterSpec":
        """Select a sort key. Re-selecting the ascending key flips to descending."""
        sort_by = SortBy(sort_by)
        if self.sort_by is sort_by and self.sort_order is SortOrder.ASC:
            order = SortOrder.DESC
        else:
            order = SortOrder.ASC
        return replace(self, sort_by=sort_by, sort_order=order)

    def cleared(self) -> "FilterSpec":
        """Drop all filters and go back to the default sort."""
        return FilterSpec()
