"""
Tag endpoints for API v1.

Personal tags are visible to their owner only; shared tags are created
inside a project and visible to all of its members.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from taskboard_api.app.api.v1.dependencies import get_tag_service
from taskboard_api.app.core.security import get_current_user
from taskboard_api.app.schemas.tag import TagCreate, TagRead, TagUpdate
from taskboard_api.app.services.tag_service import TagService


router = APIRouter()


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post("/", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    body: TagCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    tags: TagService = Depends(get_tag_service),
) -> TagRead:
    try:
        return await tags.create_tag(current_user["user_id"], body)
    except PermissionError as e:
        raise _to_http(e)


@router.get("/", response_model=List[TagRead])
async def list_tags(
    project_id: Optional[int] = Query(None, description="Also include the shared tags of this project"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    tags: TagService = Depends(get_tag_service),
) -> List[TagRead]:
    try:
        return await tags.list_tags(current_user["user_id"], project_id)
    except PermissionError as e:
        raise _to_http(e)


@router.patch("/{tag_id}", response_model=TagRead)
async def update_tag(
    tag_id: int,
    body: TagUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    tags: TagService = Depends(get_tag_service),
) -> TagRead:
    """Rename or recolour a tag."""
    try:
        return await tags.update_tag(current_user["user_id"], tag_id, body)
    except (PermissionError, ValueError) as e:
        raise _to_http(e)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    tags: TagService = Depends(get_tag_service),
) -> None:
    """Delete a tag and unlink it from every task."""
    try:
        await tags.remove_tag(current_user["user_id"], tag_id)
    except (PermissionError, ValueError) as e:
        raise _to_http(e)
