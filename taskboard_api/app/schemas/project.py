"""
Pydantic models for projects, memberships and invitations.

These are the plain value objects exchanged between the API layer and
``MembershipService``; no persistence record crosses that boundary.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ProjectBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Sprint"])


class ProjectCreate(ProjectBase):
    """Schema for creating a shared project.

    ``logins`` lists the users to invite.  The creator becomes a member
    automatically and must not appear in the list.
    """

    logins: List[str] = Field(default_factory=list, examples=[["bob", "carol"]])


class ProjectRef(BaseModel):
    """Project descriptor accepted by ``MembershipService.create_or_invite``.

    A new project only needs ``name``; an existing one is addressed by
    ``id``.
    """

    id: Optional[int] = None
    name: Optional[str] = None


class ProjectRead(ProjectBase):
    id: int

    model_config = {
        "from_attributes": True,
    }


class InvitationCreate(BaseModel):
    """Logins to invite into an existing project."""

    logins: List[str] = Field(..., min_length=1, examples=[["dave"]])


class InvitationRead(BaseModel):
    """A pending invitation of the current user."""

    inviter_login: str
    project_id: int
    project_name: str
