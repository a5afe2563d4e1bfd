from pydantic import BaseModel


class ChangesResponse(BaseModel):
    """Number of rows affected by an update or delete."""
    changes: int
