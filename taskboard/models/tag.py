from typing import Optional

from sqlmodel import Field, SQLModel


class Tag(SQLModel, table=True):
    """A named, colored label that tasks may reference by name."""
    __tablename__ = "tags"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    color: str
