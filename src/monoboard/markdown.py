"""Render a task as markdown with YAML front-matter, and parse it back.

The layout is fixed: front-matter holds priority, tags and due date, the
h1 is the title, text under it is the description, and ``## Checklist``
and ``## Notes`` hold the rest.
"""

import re
from datetime import date, datetime

import yaml

from monoboard.errors import ValidationError
from monoboard.ids import new_id
from monoboard.models import ChecklistItem, Priority, Task, TaskDraft

CHECKLIST = "Checklist"
NOTES = "Notes"

_FRONT_MATTER = re.compile(r"^---\n(.*?)\n---\n?", re.DOTALL)
_H1_OR_H2 = re.compile(r"^#{1,2} ")
_CHECK_LINE = re.compile(r"^\s*[-*] \[( |x|X)\]\s?(.*)$")


def _demote_headings(text: str) -> str:
    """Turn # and ## lines outside code fences into ###, so a body can't open a section."""
    lines = []
    in_fence = False
    for line in text.split("\n"):
        if line.startswith("```"):
            in_fence = not in_fence
        elif not in_fence:
            line = _H1_OR_H2.sub("### ", line)
        lines.append(line)
    return "\n".join(lines)


def _split_front_matter(text: str) -> tuple[dict, str]:
    match = _FRONT_MATTER.match(text)
    if not match:
        return {}, text
    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        raise ValidationError(f"Bad front-matter: {exc}") from exc
    if not isinstance(meta, dict):
        raise ValidationError("Front-matter must be a mapping")
    return meta, text[match.end() :]


def _split_sections(body: str) -> tuple[str, str, dict[str, str]]:
    """Split a task body into (title, description, {h2 heading: text})."""
    title = ""
    description: list[str] = []
    sections: dict[str, list[str]] = {}
    current = description
    in_fence = False

    for line in body.split("\n"):
        if line.startswith("```"):
            in_fence = not in_fence
        elif not in_fence and line.startswith("## "):
            current = sections.setdefault(line[3:].strip(), [])
            continue
        elif not in_fence and line.startswith("# ") and not title and current is description:
            title = line[2:].strip()
            continue
        current.append(line)

    return title, "\n".join(description).strip(), {k: "\n".join(v).strip() for k, v in sections.items()}


# --- Tasks ---


def task_to_markdown(task: Task) -> str:
    """Render a task: front-matter for metadata, sections for text."""
    meta: dict = {"priority": task.priority.value}
    if task.tags:
        meta["tags"] = list(task.tags)
    if task.due_date is not None:
        meta["due"] = task.due_date.isoformat()

    parts = ["---", yaml.safe_dump(meta, default_flow_style=False, sort_keys=False).rstrip(), "---", ""]
    parts += [f"# {task.title}", ""]
    if task.description:
        parts += [_demote_headings(task.description), ""]
    if task.checklist:
        parts += [f"## {CHECKLIST}", ""]
        parts += [f"- [{'x' if item.completed else ' '}] {item.text}" for item in task.checklist]
        parts.append("")
    if task.notes:
        parts += [f"## {NOTES}", "", _demote_headings(task.notes), ""]
    return "\n".join(parts).rstrip() + "\n"


def _parse_due(raw) -> date | None:
    if raw in (None, ""):
        return None
    # YAML reads a bare timestamp as a datetime, which is also a date
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw))
    except ValueError as exc:
        raise ValidationError(f"Invalid due date '{raw}'") from exc


def _parse_tags(raw) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        raise ValidationError("tags must be a list")
    return tuple(str(t).strip() for t in raw if str(t).strip())


def _parse_checklist(body: str, existing: tuple[ChecklistItem, ...]) -> tuple[ChecklistItem, ...]:
    """Parse '- [x] text' lines, reusing ids of existing items with the same text."""
    unused = list(existing)
    items = []
    for line in body.split("\n"):
        match = _CHECK_LINE.match(line)
        if not match:
            continue
        text = match.group(2).strip()
        completed = match.group(1) != " "
        reuse = next((i for i in unused if i.text == text), None)
        if reuse is not None:
            unused.remove(reuse)
            item_id = reuse.id
        else:
            item_id = new_id()
        items.append(ChecklistItem(id=item_id, text=text, completed=completed))
    return tuple(items)


def markdown_to_draft(text: str, existing_checklist: tuple[ChecklistItem, ...] = ()) -> TaskDraft:
    """Parse task markdown into a TaskDraft.

    Sections other than Checklist and Notes are folded back into the
    description.
    """
    meta, body = _split_front_matter(text)
    title, description, sections = _split_sections(body)
    extra = []
    checklist: tuple[ChecklistItem, ...] = ()
    notes = ""
    for heading, content in sections.items():
        if heading.lower() == CHECKLIST.lower():
            checklist = _parse_checklist(content, existing_checklist)
        elif heading.lower() == NOTES.lower():
            notes = content
        else:
            extra.append(f"### {heading}\n\n{content}".rstrip())
    if extra:
        description = "\n\n".join([description, *extra]).strip()

    try:
        priority = Priority(meta.get("priority") or Priority.MEDIUM.value)
    except ValueError as exc:
        raise ValidationError(f"Unknown priority '{meta.get('priority')}'") from exc

    return TaskDraft(
        title=title,
        description=description,
        notes=notes,
        tags=_parse_tags(meta.get("tags")),
        priority=priority,
        due_date=_parse_due(meta.get("due")),
        checklist=checklist,
    )
