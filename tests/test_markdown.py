"""Tests for the task markdown codec."""

from datetime import date

import pytest

from monoboard.errors import ValidationError
from monoboard.markdown import markdown_to_draft, task_to_markdown
from monoboard.model.project import TODO_ID, new_project
from monoboard.model.task import add_task
from monoboard.model.view import view
from monoboard.models import ChecklistItem, FilterSpec, Priority, Task, TaskDraft


def _task(**fields):
    return Task(id="t1", title="Draw sprites", column_id="todo", **fields)


def test_draft_from_front_matter_and_sections():
    text = "---\npriority: high\n---\n# Title\n\nBody text\n\n## Notes\n\nA note\n"
    draft = markdown_to_draft(text)
    assert draft.title == "Title"
    assert draft.description == "Body text"
    assert draft.notes == "A note"
    assert draft.priority is Priority.HIGH


def test_draft_without_heading():
    draft = markdown_to_draft("just text\n")
    assert draft.title == ""
    assert draft.description == "just text"
    assert draft.priority is Priority.MEDIUM


def test_draft_ignores_headings_in_code():
    draft = markdown_to_draft("# Title\n\n```\n# not a heading\n## nor this\n```\n")
    assert draft.title == "Title"
    assert "# not a heading" in draft.description
    assert "## nor this" in draft.description
    assert draft.notes == ""


def test_body_headings_are_demoted():
    text = task_to_markdown(_task(description="## inner\n\n```\n## kept\n```"))
    assert "\n### inner\n" in text
    assert "\n## kept\n" in text
    assert markdown_to_draft(text).description == "### inner\n\n```\n## kept\n```"


def test_bad_front_matter():
    with pytest.raises(ValidationError):
        markdown_to_draft("---\npriority: [unclosed\n---\n# T\n")


def test_task_to_markdown():
    task = _task(
        description="Hero and enemies",
        notes="Use the 16px grid",
        tags=("art", "sprites"),
        priority=Priority.HIGH,
        due_date=date(2024, 1, 15),
        checklist=(ChecklistItem(id="c1", text="Hero", completed=True), ChecklistItem(id="c2", text="Enemies")),
    )
    text = task_to_markdown(task)

    assert text.startswith("---\npriority: high\n")
    assert "due: '2024-01-15'" in text
    assert "# Draw sprites\n\nHero and enemies" in text
    assert "## Checklist\n\n- [x] Hero\n- [ ] Enemies" in text
    assert text.endswith("## Notes\n\nUse the 16px grid\n")


def test_markdown_to_draft_reuses_checklist_ids():
    existing = (ChecklistItem(id="c1", text="Hero"), ChecklistItem(id="c2", text="Enemies"))
    text = "---\npriority: low\ntags: [art]\ndue: 2024-02-01\n---\n# New title\n\n## Checklist\n\n- [x] Hero\n- [ ] Boss\n"

    draft = markdown_to_draft(text, existing)

    assert draft.title == "New title"
    assert draft.priority is Priority.LOW
    assert draft.tags == ("art",)
    assert draft.due_date == date(2024, 2, 1)
    assert [i.text for i in draft.checklist] == ["Hero", "Boss"]
    assert draft.checklist[0].id == "c1"
    assert draft.checklist[0].completed
    assert draft.checklist[1].id not in ("c1", "c2")


def test_markdown_to_draft_folds_unknown_sections():
    draft = markdown_to_draft("# T\n\nIntro\n\n## Extra\n\nMore\n\n## Notes\n\nN\n")
    assert draft.description == "Intro\n\n### Extra\n\nMore"
    assert draft.notes == "N"


def test_task_markdown_round_trip_fields():
    task = _task(
        description="desc",
        notes="notes",
        tags=("a", "b"),
        priority=Priority.LOW,
        due_date=date(2024, 5, 6),
        checklist=(ChecklistItem(id="c1", text="one", completed=True),),
    )
    draft = markdown_to_draft(task_to_markdown(task), task.checklist)
    assert (draft.title, draft.description, draft.notes) == (task.title, task.description, task.notes)
    assert (draft.tags, draft.priority, draft.due_date) == (task.tags, task.priority, task.due_date)
    assert draft.checklist == task.checklist


def test_markdown_to_draft_bad_priority():
    with pytest.raises(ValidationError):
        markdown_to_draft("---\npriority: urgent\n---\n# T\n")


def test_markdown_to_draft_bad_due():
    with pytest.raises(ValidationError):
        markdown_to_draft("---\ndue: next week\n---\n# T\n")


def test_due_timestamp_becomes_date():
    draft = markdown_to_draft("---\ndue: 2024-01-05 10:00:00\n---\n# T\n")
    assert draft.due_date == date(2024, 1, 5)
    assert type(draft.due_date) is date


def test_due_timestamp_sorts_beside_plain_dates():
    project = new_project("Board")
    project = add_task(project, TODO_ID, TaskDraft(title="Plain", due_date=date(2024, 1, 6)))
    project = add_task(project, TODO_ID, markdown_to_draft("---\ndue: 2024-01-05 10:00:00\n---\n# Stamped\n"))

    assert [t.title for t in view(project.tasks, FilterSpec())] == ["Stamped", "Plain"]
