from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    completed: Optional[bool] = False
    priority: Optional[int] = 0
    deadline: Optional[str] = None
    creation_date: Optional[str] = Field(None, alias="creationDate")
    tags: Optional[List[str]] = None


class TaskUpdate(BaseModel):
    # Full-row update: omitted fields are written back as their defaults
    title: str = Field(..., min_length=1)
    completed: Optional[bool] = False
    priority: Optional[int] = 0
    deadline: Optional[str] = None
    tags: Optional[List[str]] = None


class TaskRead(BaseModel):
    """A task as returned by the API, with its tag list decoded."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    completed: bool
    priority: int
    deadline: Optional[str] = None
    creation_date: str = Field(..., alias="creationDate")
    tags: List[str] = Field(default_factory=list)


class TaskList(BaseModel):
    tasks: List[TaskRead]


class TaskCreated(BaseModel):
    id: int
