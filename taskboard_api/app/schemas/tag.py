"""Pydantic models for task tags."""

from typing import Optional

from pydantic import BaseModel, Field


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64, examples=["urgent"])
    color: str = Field("Black", examples=["#2295F2"])
    # Shared tags belong to a project; personal tags leave this empty.
    project_id: Optional[int] = None


class TagRead(TagCreate):
    id: int
    owner_id: int

    model_config = {
        "from_attributes": True,
    }


class TagLink(BaseModel):
    tag_id: int


class TagUpdate(BaseModel):
    """Rename or recolour a tag; omitted fields keep their value."""

    name: Optional[str] = Field(None, min_length=1, max_length=64)
    color: Optional[str] = None
