"""
Task endpoints for API v1.

Personal and shared to-do tasks, and the tags linked to them.  Shared
tasks require an accepted membership of their project.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from taskboard_api.app.api.v1.dependencies import get_tag_service, get_task_service
from taskboard_api.app.schemas.tag import TagLink, TagRead
from taskboard_api.app.schemas.task import TaskCreate, TaskRead
from taskboard_api.app.services.tag_service import TagService
from taskboard_api.app.services.task_service import TaskService


router = APIRouter()


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(body: TaskCreate, service: TaskService = Depends(get_task_service)) -> TaskRead:
    try:
        return await service.create_task(body)
    except (PermissionError, RuntimeError) as exc:
        raise _to_http(exc)


@router.get("/", response_model=List[TaskRead])
async def list_tasks(
    project_id: Optional[int] = Query(None, description="Project whose tasks to list; omit for personal tasks"),
    service: TaskService = Depends(get_task_service),
) -> List[TaskRead]:
    try:
        return await service.list_tasks(project_id)
    except PermissionError as exc:
        raise _to_http(exc)


@router.post("/{task_id}/complete", response_model=TaskRead)
async def complete_task(task_id: int, service: TaskService = Depends(get_task_service)) -> TaskRead:
    try:
        return await service.complete_task(task_id)
    except (PermissionError, ValueError, RuntimeError) as exc:
        raise _to_http(exc)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)) -> None:
    try:
        await service.delete_task(task_id)
    except (PermissionError, ValueError, RuntimeError) as exc:
        raise _to_http(exc)


@router.post("/{task_id}/tags", status_code=status.HTTP_204_NO_CONTENT)
async def attach_tag(
    task_id: int,
    body: TagLink,
    service: TaskService = Depends(get_task_service),
    tags: TagService = Depends(get_tag_service),
) -> None:
    """Link a tag to a task visible to the current user."""
    try:
        await service.get_task(task_id)
        await tags.attach_tag(service.user_id, task_id, body.tag_id)
    except (PermissionError, ValueError) as exc:
        raise _to_http(exc)


@router.get("/{task_id}/tags", response_model=List[TagRead])
async def list_task_tags(
    task_id: int,
    service: TaskService = Depends(get_task_service),
    tags: TagService = Depends(get_tag_service),
) -> List[TagRead]:
    try:
        await service.get_task(task_id)
    except (PermissionError, ValueError) as exc:
        raise _to_http(exc)
    return await tags.tags_for_task(task_id)
