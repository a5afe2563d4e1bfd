from fastapi import APIRouter, Depends, status

from ..crud import TaskStorage
from ..dependencies.storage import get_task_storage
from ..schemas import ChangesResponse, TaskCreate, TaskCreated, TaskList, TaskUpdate

router = APIRouter()


@router.get("", response_model=TaskList)
async def get_tasks(storage: TaskStorage = Depends(get_task_storage)):
    return {"tasks": storage.get_all_tasks()}


@router.post("", response_model=TaskCreated, status_code=status.HTTP_201_CREATED)
async def create_task(task: TaskCreate, storage: TaskStorage = Depends(get_task_storage)):
    task_id = storage.add_task(
        title=task.title,
        completed=task.completed,
        priority=task.priority,
        deadline=task.deadline,
        creation_date=task.creation_date,
        tags=task.tags,
    )
    return {"id": task_id}


@router.put("/{task_id}", response_model=ChangesResponse)
async def update_task(
    task_id: int,
    task_update: TaskUpdate,
    storage: TaskStorage = Depends(get_task_storage),
):
    changes = storage.update_task(
        task_id,
        title=task_update.title,
        completed=task_update.completed,
        priority=task_update.priority,
        deadline=task_update.deadline,
        tags=task_update.tags,
    )
    return {"changes": changes}


@router.delete("/{task_id}", response_model=ChangesResponse)
async def delete_task(task_id: int, storage: TaskStorage = Depends(get_task_storage)):
    return {"changes": storage.delete_task(task_id)}
