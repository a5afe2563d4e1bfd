"""Request and response schemas for the HTTP API."""
from .common import ChangesResponse
from .tag import TagCreate, TagList, TagRead, TagUpdate
from .task import TaskCreate, TaskCreated, TaskList, TaskRead, TaskUpdate

__all__ = [
    "ChangesResponse",
    "TagCreate",
    "TagList",
    "TagRead",
    "TagUpdate",
    "TaskCreate",
    "TaskCreated",
    "TaskList",
    "TaskRead",
    "TaskUpdate",
]
