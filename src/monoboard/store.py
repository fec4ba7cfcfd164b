"""In-memory canonical state with change notification and persistence."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

from monoboard.errors import CorruptDataError, InvariantViolation, NotFoundError, StorageError, ValidationError
from monoboard.model.loader import deserialize, import_project, import_project_file
from monoboard.model.project import new_project, starter_project, touch
from monoboard.model.writer import export_project, serialize
from monoboard.models import AppState, Project
from monoboard.storage import Storage

logger = logging.getLogger(__name__)

STORAGE_KEY = "monoboard-data"

Callback = Callable[[AppState, AppState], None]


def _repair(state: AppState) -> AppState:
    """Point current_project_id at a real project if it dangles."""
    if not state.projects:
        return replace(state, current_project_id=None)
    if state.project(state.current_project_id) is None:
        return replace(state, current_project_id=state.projects[0].id)
    return state


class ProjectStore:
    """Holds the AppState and replaces it wholesale on every change.

    Each change saves and then fires watchers with (old, new). A failing
    operation raises before anything is replaced; a failing watcher is
    logged and does not undo the change.
    """

    def __init__(
        self,
        storage: Storage | None = None,
        key: str = STORAGE_KEY,
        seed_default_project: bool = False,
    ) -> None:
        self.storage = storage
        self.key = key
        self.seed_default_project = seed_default_project
        self._state = AppState()
        self._watchers: list[Callback] = []
        self._last_saved: str | None = None

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def projects(self) -> tuple[Project, ...]:
        return self._state.projects

    @property
    def current_project(self) -> Project | None:
        return self._state.project(self._state.current_project_id)

    def get_project(self, project_id: str) -> Project:
        """Find a project by id or raise NotFoundError."""
        project = self._state.project(project_id)
        if project is None:
            raise NotFoundError(f"Project '{project_id}' not found")
        return project

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch for state changes. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    # --- Persistence ---

    def load(self) -> AppState:
        """Replace state with what storage holds.

        Missing, unreadable or corrupt data gives the empty state. When
        seeding is on and there are no projects, the starter project is
        saved straight away.
        """
        state = AppState()
        text = None
        if self.storage is not None:
            try:
                text = self.storage.read(self.key)
            except StorageError as exc:
                logger.warning("could not read saved state: %s", exc)
        if text:
            try:
                state = deserialize(text)
                self._last_saved = text
            except CorruptDataError as exc:
                logger.warning("ignoring corrupt saved state: %s", exc)

        state = _repair(state)
        seeded = not state.projects and self.seed_default_project
        if seeded:
            project = starter_project()
            state = AppState(projects=(project,), current_project_id=project.id)
            logger.info("seeded starter project %s", project.id)

        self._set(state, save=seeded)
        return state

    def save(self, state: AppState | None = None) -> bool:
        """Persist state (default: current state). Never raises.

        Returns False when the write failed. Re-saving an unchanged
        state is skipped.
        """
        if self.storage is None:
            return True
        text = serialize(state if state is not None else self._state)
        if text == self._last_saved:
            return True
        try:
            self.storage.write(self.key, text)
        except (StorageError, OSError) as exc:
            logger.warning("could not save state: %s", exc)
            return False
        self._last_saved = text
        return True

    def _set(self, state: AppState, save: bool = True) -> None:
        old = self._state
        self._state = state
        if save:
            self.save()
        for cb in list(self._watchers):
            try:
                cb(old, state)
            except Exception:
                logger.exception("state watcher %r failed", cb)

    # --- Projects ---

    def create_project(self, name: str, extra_columns: list[str] | tuple[str, ...] = ()) -> Project:
        """Create a project and make it active."""
        project = new_project(name, extra_columns)
        self.add_project(project)
        return project

    def add_project(self, project: Project) -> None:
        """Add a project (e.g. an imported one) and make it active."""
        if self._state.project(project.id) is not None:
            raise InvariantViolation(f"Project '{project.id}' already exists")
        self._set(AppState(projects=self._state.projects + (project,), current_project_id=project.id))

    def select_project(self, project_id: str) -> None:
        self.get_project(project_id)
        if project_id != self._state.current_project_id:
            self._set(replace(self._state, current_project_id=project_id))

    def rename_project(self, project_id: str, name: str) -> Project:
        name = (name or "").strip()
        project = self.get_project(project_id)
        if not name:
            raise ValidationError("Project name must not be empty")
        return self.replace_project(touch(project, name=name))

    def delete_project(self, project_id: str) -> None:
        """Delete a project; the last remaining project cannot be deleted.

        Deleting the active project activates the first survivor.
        """
        self.get_project(project_id)
        if len(self._state.projects) <= 1:
            raise InvariantViolation("Cannot delete the only project")
        projects = tuple(p for p in self._state.projects if p.id != project_id)
        current = self._state.current_project_id
        if current == project_id:
            current = projects[0].id
        self._set(AppState(projects=projects, current_project_id=current))

    def replace_project(self, project: Project) -> Project:
        """Swap in a new version of an existing project."""
        self.get_project(project.id)
        if project is not self._state.project(project.id):
            projects = tuple(project if p.id == project.id else p for p in self._state.projects)
            self._set(replace(self._state, projects=projects))
        return project

    def apply(self, project_id: str, mutation: Callable[..., Project], *args: Any, **kwargs: Any) -> Project:
        """Run a mutation function on a project and store the result."""
        project = self.get_project(project_id)
        return self.replace_project(mutation(project, *args, **kwargs))

    # --- Import / export ---

    def import_file(self, path) -> Project:
        """Import a project file and make it active. Existing projects are untouched on failure."""
        project = import_project(path)
        self.add_project(project)
        return project

    async def import_file_async(self, path) -> Project:
        """Like import_file, awaiting the file read.

        Concurrent imports are not serialized; each lands when its read completes.
        """
        project = await import_project_file(path)
        self.add_project(project)
        return project

    def export(self, project_id: str, directory) -> Path:
        """Write one project to directory and return the file path."""
        return export_project(self.get_project(project_id), directory)
