"""
Pydantic models for to-do tasks.

A task without ``project_id`` is personal and visible only to its
owner.  A task with ``project_id`` is shared by every accepted member
of that project and is deleted together with the project when its last
member leaves.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, examples=["Write release notes"])
    description: Optional[str] = None
    project_id: Optional[int] = None


class TaskRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    is_done: bool = False
    owner_id: int
    project_id: Optional[int] = None

    model_config = {
        "from_attributes": True,
    }
