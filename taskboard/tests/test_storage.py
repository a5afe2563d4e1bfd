"""Unit tests for the TaskStorage and TagStorage classes."""

import json

import pytest
from sqlmodel import Session

from taskboard.crud import decode_tags, filter_valid_tags
from taskboard.errors import ConflictError, NotFoundError, ValidationError
from taskboard.models import Task


def test_storage_initialization(task_storage, tag_storage):
    """Test that storage starts out empty."""
    assert task_storage.get_all_tasks() == []
    assert tag_storage.get_all_tags() == []


def test_add_tag(tag_storage):
    tag = tag_storage.add_tag("urgent", "#ff0000")

    assert tag.id == 1
    assert tag.name == "urgent"
    assert tag.color == "#ff0000"
    assert [t.name for t in tag_storage.get_all_tags()] == ["urgent"]


def test_add_duplicate_tag_conflicts(tag_storage):
    tag_storage.add_tag("urgent", "#ff0000")

    with pytest.raises(ConflictError):
        tag_storage.add_tag("urgent", "#00ff00")

    tags = tag_storage.get_all_tags()
    assert len(tags) == 1
    assert tags[0].color == "#ff0000"


def test_update_tag(tag_storage):
    tag = tag_storage.add_tag("urgent", "#ff0000")

    assert tag_storage.update_tag(tag.id, "urgent", "#0000ff") == 1
    assert tag_storage.get_all_tags()[0].color == "#0000ff"

    with pytest.raises(NotFoundError):
        tag_storage.update_tag(999, "x", "#000000")


def test_update_tag_to_existing_name_conflicts(tag_storage):
    tag_storage.add_tag("home", "#00ff00")
    work = tag_storage.add_tag("work", "#0000ff")

    with pytest.raises(ConflictError):
        tag_storage.update_tag(work.id, "home", "#0000ff")

    assert sorted(tag_storage.get_tag_names()) == ["home", "work"]


def test_delete_tag(tag_storage):
    tag = tag_storage.add_tag("urgent", "#ff0000")

    assert tag_storage.delete_tag(tag.id) == 1
    assert tag_storage.get_all_tags() == []

    with pytest.raises(NotFoundError):
        tag_storage.delete_tag(tag.id)


def test_add_task_defaults(task_storage):
    """Test adding a task with only a title."""
    task_id = task_storage.add_task("Buy milk")

    assert task_id == 1
    task = task_storage.get_all_tasks()[0]
    assert task.title == "Buy milk"
    assert task.completed is False
    assert task.priority == 0
    assert task.deadline is None
    assert task.tags == []
    assert task.creation_date


def test_add_task_keeps_given_fields(task_storage):
    task_id = task_storage.add_task(
        "Report",
        completed=True,
        priority=3,
        deadline="2024-06-01",
        creation_date="2024-05-01T08:00:00.000Z",
    )

    task = task_storage.get_all_tasks()[0]
    assert task.id == task_id
    assert task.completed is True
    assert task.priority == 3
    assert task.deadline == "2024-06-01"
    assert task.creation_date == "2024-05-01T08:00:00.000Z"


def test_add_task_null_priority_means_zero(task_storage):
    task_storage.add_task("Task", priority=None)
    assert task_storage.get_all_tasks()[0].priority == 0


def test_add_task_filters_unknown_tags(task_storage, tag_storage):
    tag_storage.add_tag("a", "#111111")

    task_storage.add_task("Task", tags=["a", "b"])

    assert task_storage.get_all_tasks()[0].tags == ["a"]


def test_tag_filter_preserves_order_and_duplicates(task_storage, tag_storage):
    tag_storage.add_tag("home", "#00ff00")
    tag_storage.add_tag("work", "#0000ff")

    task_storage.add_task("Task", tags=["work", "ghost", "home", "work"])

    assert task_storage.get_all_tasks()[0].tags == ["work", "home", "work"]


@pytest.mark.parametrize("title", ["", None, 42])
def test_add_task_rejects_invalid_title(task_storage, title):
    with pytest.raises(ValidationError):
        task_storage.add_task(title)
    assert task_storage.get_all_tasks() == []


def test_update_task(task_storage, tag_storage):
    tag_storage.add_tag("home", "#00ff00")
    task_id = task_storage.add_task(
        "Original", priority=2, deadline="2024-01-01", creation_date="2023-12-31", tags=["home"]
    )

    changes = task_storage.update_task(task_id, "Updated", completed=True, tags=["home", "ghost"])

    assert changes == 1
    task = task_storage.get_all_tasks()[0]
    assert task.title == "Updated"
    assert task.completed is True
    # Full-row update: omitted fields fall back to defaults
    assert task.priority == 0
    assert task.deadline is None
    assert task.tags == ["home"]
    assert task.creation_date == "2023-12-31"


def test_update_missing_task(task_storage):
    with pytest.raises(NotFoundError):
        task_storage.update_task(999, "Title")


def test_update_task_rejects_invalid_title(task_storage):
    task_id = task_storage.add_task("Original")

    with pytest.raises(ValidationError):
        task_storage.update_task(task_id, "")

    assert task_storage.get_all_tasks()[0].title == "Original"


def test_delete_task(task_storage):
    task_storage.add_task("Task 1")
    task_storage.add_task("Task 2")

    assert task_storage.delete_task(1) == 1

    tasks = task_storage.get_all_tasks()
    assert [t.title for t in tasks] == ["Task 2"]

    with pytest.raises(NotFoundError):
        task_storage.delete_task(1)


def test_deleting_tag_keeps_name_on_tasks(task_storage, tag_storage):
    tag = tag_storage.add_tag("home", "#00ff00")
    task_storage.add_task("Task", tags=["home"])

    tag_storage.delete_tag(tag.id)

    assert task_storage.get_all_tasks()[0].tags == ["home"]


@pytest.mark.parametrize("raw", ["not json", None, '{"a": 1}', "[1, 2]"])
def test_unreadable_stored_tags_list_as_empty(engine, task_storage, raw):
    with Session(engine) as session:
        session.add(Task(title="Broken", tags=raw))
        session.add(Task(title="Fine", tags=json.dumps(["x"])))
        session.commit()

    tasks = task_storage.get_all_tasks()

    assert [t.tags for t in tasks] == [[], ["x"]]


def test_persistence_across_storage_instances(engine, task_storage, tag_storage):
    """Test that tasks persist across storage instances sharing an engine."""
    from taskboard.crud import TagStorage, TaskStorage

    task_storage.add_task("Task 1")
    new_storage = TaskStorage(engine, TagStorage(engine))

    assert [t.title for t in new_storage.get_all_tasks()] == ["Task 1"]


def test_filter_valid_tags():
    assert filter_valid_tags(["a", "b", "a"], ["a"]) == ["a", "a"]
    assert filter_valid_tags(None, ["a"]) == []
    assert filter_valid_tags(["a"], []) == []


def test_decode_tags():
    assert decode_tags('["a", "b"]') == ["a", "b"]
    assert decode_tags("[]") == []
    assert decode_tags("garbage") == []
    assert decode_tags(None) == []
