"""Storage layer for persisting tasks and tags to the relational store."""

import json
import logging
from typing import Iterable, Optional

from sqlalchemy.engine import Engine
from sqlmodel import select

from .database import session_scope
from .errors import NotFoundError, ValidationError
from .models import Tag, Task, utc_now_iso
from .schemas import TaskRead

logger = logging.getLogger(__name__)


def decode_tags(raw: Optional[str], task_id: Optional[int] = None) -> list[str]:
    """Decode a stored tag list.

    Args:
        raw: JSON text from the tags column
        task_id: Owning task, used only for the warning message

    Returns:
        The list of tag names, or an empty list if the stored value is
        missing, not valid JSON, or not a list of strings
    """
    try:
        tags = json.loads(raw)
    except (TypeError, ValueError):
        tags = None
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        logger.warning(f"Task {task_id} has unreadable tags {raw!r}")
        return []
    return tags


def filter_valid_tags(requested: Optional[Iterable[str]], existing: Iterable[str]) -> list[str]:
    """Keep the requested tags that name an existing tag.

    Order is preserved and duplicates are kept as given.
    """
    known = set(existing)
    return [tag for tag in (requested or []) if tag in known]


# SQLite INTEGER is a signed 64-bit value
MIN_ROW_ID = -(2 ** 63)
MAX_ROW_ID = 2 ** 63 - 1


def _get_row(session, model, row_id: int, missing: str):
    """Fetch a row by primary key or raise NotFoundError.

    Ids outside the INTEGER range cannot name a row, so they are rejected
    before they reach the driver.
    """
    if not MIN_ROW_ID <= row_id <= MAX_ROW_ID:
        raise NotFoundError(missing)
    row = session.get(model, row_id)
    if row is None:
        raise NotFoundError(missing)
    return row


def _require_title(title) -> str:
    if not title or not isinstance(title, str):
        raise ValidationError("Invalid title")
    return title


class TagStorage:
    """Handles reading and writing tag definitions.

    Attributes:
        engine: Engine shared with the task storage
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def get_all_tags(self) -> list[Tag]:
        """Get all tags, in id order."""
        with session_scope(self.engine) as session:
            return list(session.exec(select(Tag).order_by(Tag.id)).all())

    def get_tag_names(self) -> list[str]:
        """Names of every tag currently stored."""
        with session_scope(self.engine) as session:
            return list(session.exec(select(Tag.name)).all())

    def add_tag(self, name: str, color: str) -> Tag:
        """Add a new tag.

        Args:
            name: Unique tag name
            color: Display color

        Returns:
            The newly created Tag

        Raises:
            ConflictError: A tag with this name already exists
        """
        if not name or not isinstance(name, str):
            raise ValidationError("Invalid name")
        with session_scope(self.engine) as session:
            tag = Tag(name=name, color=color)
            session.add(tag)
            session.commit()
            session.refresh(tag)
        logger.info(f"Created tag {tag.id} ({tag.name})")
        return tag

    def update_tag(self, tag_id: int, name: str, color: str) -> int:
        """Overwrite a tag's name and color.

        Returns:
            Number of rows changed

        Raises:
            NotFoundError: No tag has this id
            ConflictError: The new name belongs to another tag
        """
        if not name or not isinstance(name, str):
            raise ValidationError("Invalid name")
        with session_scope(self.engine) as session:
            tag = _get_row(session, Tag, tag_id, "Tag not found")
            tag.name = name
            tag.color = color
            session.add(tag)
            session.commit()
        logger.info(f"Updated tag {tag_id}")
        return 1

    def delete_tag(self, tag_id: int) -> int:
        """Delete a tag by ID.

        Tasks that reference the tag by name keep the name.

        Raises:
            NotFoundError: No tag has this id
        """
        with session_scope(self.engine) as session:
            tag = _get_row(session, Tag, tag_id, "Tag not found")
            session.delete(tag)
            session.commit()
        logger.info(f"Deleted tag {tag_id}")
        return 1


class TaskStorage:
    """Handles reading and writing task rows.

    Tag names on writes are checked against the tag storage; unknown names
    are dropped. The tag lookup and the task write run in separate sessions.

    Attributes:
        engine: Engine shared with the tag storage
        tags: Tag storage consulted for valid tag names
    """

    def __init__(self, engine: Engine, tags: TagStorage):
        self.engine = engine
        self.tags = tags

    def _valid_tags(self, requested: Optional[list[str]]) -> list[str]:
        valid = filter_valid_tags(requested, self.tags.get_tag_names())
        dropped = len(requested or []) - len(valid)
        if dropped:
            logger.debug(f"Dropped {dropped} unknown tag(s) from {requested}")
        return valid

    def get_all_tasks(self) -> list[TaskRead]:
        """Get all tasks with their tag lists decoded.

        Returns:
            List of tasks in id order. A row whose stored tags cannot be
            decoded is returned with an empty tag list.
        """
        with session_scope(self.engine) as session:
            rows = session.exec(select(Task).order_by(Task.id)).all()
            tasks = []
            for row in rows:
                tasks.append(
                    TaskRead(
                        id=row.id,
                        title=row.title,
                        completed=row.completed,
                        priority=row.priority,
                        deadline=row.deadline,
                        creation_date=row.creation_date,
                        tags=decode_tags(row.tags, row.id),
                    )
                )
        return tasks

    def add_task(
        self,
        title: str,
        completed: bool = False,
        priority: Optional[int] = 0,
        deadline: Optional[str] = None,
        creation_date: Optional[str] = None,
        tags: Optional[list[str]] = None,
    ) -> int:
        """Add a new task.

        Args:
            title: Task title, must be a non-empty string
            completed: Completion flag
            priority: Integer priority; None means 0
            deadline: Optional deadline string
            creation_date: Creation timestamp; defaults to now (UTC)
            tags: Requested tag names, filtered against existing tags

        Returns:
            The generated task id
        """
        title = _require_title(title)
        valid_tags = self._valid_tags(tags)
        with session_scope(self.engine) as session:
            task = Task(
                title=title,
                completed=bool(completed),
                priority=priority or 0,
                deadline=deadline,
                creation_date=creation_date or utc_now_iso(),
                tags=json.dumps(valid_tags),
            )
            session.add(task)
            session.commit()
            session.refresh(task)
            task_id = task.id
        logger.info(f"Created task {task_id}")
        return task_id

    def update_task(
        self,
        task_id: int,
        title: str,
        completed: bool = False,
        priority: Optional[int] = 0,
        deadline: Optional[str] = None,
        tags: Optional[list[str]] = None,
    ) -> int:
        """Overwrite all mutable fields of a task.

        The creation date is left untouched.

        Returns:
            Number of rows changed

        Raises:
            ValidationError: Title is missing or not a string
            NotFoundError: No task has this id
        """
        title = _require_title(title)
        valid_tags = self._valid_tags(tags)
        with session_scope(self.engine) as session:
            task = _get_row(session, Task, task_id, "Task not found")
            task.title = title
            task.completed = bool(completed)
            task.priority = priority or 0
            task.deadline = deadline
            task.tags = json.dumps(valid_tags)
            session.add(task)
            session.commit()
        logger.info(f"Updated task {task_id}")
        return 1

    def delete_task(self, task_id: int) -> int:
        """Delete a task by ID.

        Raises:
            NotFoundError: No task has this id
        """
        with session_scope(self.engine) as session:
            task = _get_row(session, Task, task_id, "Task not found")
            session.delete(task)
            session.commit()
        logger.info(f"Deleted task {task_id}")
        return 1
