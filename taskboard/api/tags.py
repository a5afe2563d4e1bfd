from fastapi import APIRouter, Depends, status

from ..crud import TagStorage
from ..dependencies.storage import get_tag_storage
from ..schemas import ChangesResponse, TagCreate, TagList, TagRead, TagUpdate

router = APIRouter()


@router.get("", response_model=TagList)
async def get_tags(storage: TagStorage = Depends(get_tag_storage)):
    return {"tags": storage.get_all_tags()}


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(tag: TagCreate, storage: TagStorage = Depends(get_tag_storage)):
    """Create a tag. A duplicate name is reported as a server error."""
    return storage.add_tag(name=tag.name, color=tag.color)


@router.put("/{tag_id}", response_model=ChangesResponse)
async def update_tag(
    tag_id: int,
    tag_update: TagUpdate,
    storage: TagStorage = Depends(get_tag_storage),
):
    return {"changes": storage.update_tag(tag_id, name=tag_update.name, color=tag_update.color)}


@router.delete("/{tag_id}", response_model=ChangesResponse)
async def delete_tag(tag_id: int, storage: TagStorage = Depends(get_tag_storage)):
    """Delete a tag. Tasks referencing it by name are left as they are."""
    return {"changes": storage.delete_tag(tag_id)}
