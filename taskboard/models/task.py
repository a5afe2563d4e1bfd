from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, String
from sqlmodel import Field, SQLModel


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Task(SQLModel, table=True):
    """A single task row.

    Attributes:
        id: Unique identifier for the task
        title: Task title (required)
        completed: Whether the task is completed
        priority: Integer priority, 0 by default
        deadline: Optional deadline as a date string
        creation_date: Creation timestamp, stored in the creationDate column
        tags: JSON-encoded list of tag names
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    completed: bool = Field(default=False)
    priority: int = Field(default=0)
    deadline: Optional[str] = Field(default=None)
    creation_date: str = Field(
        default_factory=utc_now_iso,
        sa_column=Column("creationDate", String, nullable=False),
    )
    tags: Optional[str] = Field(default="[]")
