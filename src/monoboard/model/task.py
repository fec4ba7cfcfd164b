"""Task mutation operations for monoboard projects."""

from dataclasses import replace

from monoboard.errors import ValidationError
from monoboard.ids import max_seq, new_id, next_seq
from monoboard.model.project import touch
from monoboard.models import ChecklistItem, Priority, Project, Task, TaskDraft


def dedupe_tags(tags) -> tuple[str, ...]:
    """Strip tags, drop blanks and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for raw in tags:
        tag = raw.strip()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def _check_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Task title must not be empty")
    return title


def _check_column(project: Project, column_id: str) -> None:
    if project.column(column_id) is None:
        raise ValidationError(f"Column '{column_id}' not found")


def add_task(project: Project, column_id: str, draft: TaskDraft) -> Project:
    """Create a task from draft and append it to column_id."""
    title = _check_title(draft.title)
    _check_column(project, column_id)
    task = Task(
        id=new_id(),
        title=title,
        column_id=column_id,
        description=draft.description.strip(),
        notes=draft.notes,
        tags=dedupe_tags(draft.tags),
        priority=Priority(draft.priority),
        due_date=draft.due_date,
        checklist=tuple(draft.checklist),
        seq=next_seq(max_seq(t.seq for t in project.tasks)),
    )
    return touch(project, tasks=project.tasks + (task,))


def update_task(project: Project, task: Task) -> Project:
    """Replace the task with the same id. Unknown ids are a no-op."""
    if project.task(task.id) is None:
        return project
    title = _check_title(task.title)
    _check_column(project, task.column_id)
    task = replace(task, title=title, tags=dedupe_tags(task.tags), priority=Priority(task.priority))
    tasks = tuple(task if t.id == task.id else t for t in project.tasks)
    return touch(project, tasks=tasks)


def delete_task(project: Project, task_id: str) -> Project:
    """Remove a task. Unknown ids are a no-op."""
    if project.task(task_id) is None:
        return project
    return touch(project, tasks=tuple(t for t in project.tasks if t.id != task_id))


def move_task(project: Project, task_id: str, target_column_id: str) -> Project:
    """Move a task to the end of target_column_id."""
    task = project.task(task_id)
    if task is None or task.column_id == target_column_id:
        return project
    _check_column(project, target_column_id)
    moved = replace(task, column_id=target_column_id)
    tasks = tuple(t for t in project.tasks if t.id != task_id) + (moved,)
    return touch(project, tasks=tasks)


def reorder_within_column(
    project: Project,
    column_id: str,
    task_id: str,
    before_task_id: str | None,
) -> Project:
    """Move task_id to just before before_task_id within one column.

    A before_task_id of None moves the task to the end of the column.
    Tasks in other columns keep their exact positions in the list.
    """
    slots = [i for i, t in enumerate(project.tasks) if t.column_id == column_id]
    column_tasks = [project.tasks[i] for i in slots]
    ids = [t.id for t in column_tasks]

    if task_id not in ids:
        raise ValidationError(f"Task '{task_id}' is not in column '{column_id}'")
    if before_task_id is not None and before_task_id not in ids:
        raise ValidationError(f"Task '{before_task_id}' is not in column '{column_id}'")
    if task_id == before_task_id:
        return project

    moving = column_tasks.pop(ids.index(task_id))
    if before_task_id is None:
        column_tasks.append(moving)
    else:
        insert_pos = [t.id for t in column_tasks].index(before_task_id)
        column_tasks.insert(insert_pos, moving)

    if [t.id for t in column_tasks] == ids:
        return project

    tasks = list(project.tasks)
    for slot, task in zip(slots, column_tasks):
        tasks[slot] = task
    return touch(project, tasks=tuple(tasks))


# --- Tags ---


def add_tag(project: Project, task_id: str, tag: str) -> Project:
    """Add a tag to a task. Blank or duplicate tags are a no-op."""
    task = project.task(task_id)
    tag = tag.strip()
    if task is None or not tag or tag in task.tags:
        return project
    return update_task(project, replace(task, tags=task.tags + (tag,)))


def remove_tag(project: Project, task_id: str, tag: str) -> Project:
    """Remove a tag from a task."""
    task = project.task(task_id)
    if task is None or tag not in task.tags:
        return project
    return update_task(project, replace(task, tags=tuple(t for t in task.tags if t != tag)))


# --- Checklist ---


def _replace_checklist(project: Project, task: Task, checklist) -> Project:
    return update_task(project, replace(task, checklist=tuple(checklist)))


def add_checklist_item(project: Project, task_id: str, text: str = "") -> Project:
    """Append a checklist item to a task."""
    task = project.task(task_id)
    if task is None:
        return project
    item = ChecklistItem(id=new_id(), text=text.strip())
    return _replace_checklist(project, task, task.checklist + (item,))


def toggle_checklist_item(project: Project, task_id: str, item_id: str) -> Project:
    """Flip the completed flag of a checklist item."""
    task = project.task(task_id)
    if task is None or item_id not in {i.id for i in task.checklist}:
        return project
    checklist = [replace(i, completed=not i.completed) if i.id == item_id else i for i in task.checklist]
    return _replace_checklist(project, task, checklist)


def edit_checklist_item(project: Project, task_id: str, item_id: str, text: str) -> Project:
    """Change the text of a checklist item."""
    task = project.task(task_id)
    if task is None or item_id not in {i.id for i in task.checklist}:
        return project
    checklist = [replace(i, text=text.strip()) if i.id == item_id else i for i in task.checklist]
    return _replace_checklist(project, task, checklist)


def remove_checklist_item(project: Project, task_id: str, item_id: str) -> Project:
    """Delete a checklist item at any position."""
    task = project.task(task_id)
    if task is None or item_id not in {i.id for i in task.checklist}:
        return project
    return _replace_checklist(project, task, [i for i in task.checklist if i.id != item_id])
