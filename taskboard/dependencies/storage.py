"""FastAPI dependencies resolving the stores built at application startup."""

from fastapi import Request

from ..crud import TagStorage, TaskStorage


def get_task_storage(request: Request) -> TaskStorage:
    return request.app.state.task_storage


def get_tag_storage(request: Request) -> TagStorage:
    return request.app.state.tag_storage
