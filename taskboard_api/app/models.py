"""
Persistence records.

One pydantic model per database table.  Records are mutable so a
service can flip a field (e.g. ``Membership.is_accepted``) and hand the
same object back to its repository.  ``id`` stays ``None`` until the
record has been inserted.
"""

from typing import Optional

from pydantic import BaseModel


class Record(BaseModel):
    id: Optional[int] = None

    model_config = {
        "from_attributes": True,
    }


class User(Record):
    login: str
    full_name: Optional[str] = None
    password: Optional[str] = None


class Project(Record):
    name: str


class Membership(Record):
    """Link between a user and a project.

    ``is_accepted`` is ``False`` while the row is a pending invitation
    sent by ``inviter_id`` and ``True`` once the user is a member.
    """

    project_id: int
    user_id: int
    inviter_id: int
    is_accepted: bool = False


class Task(Record):
    title: str
    description: Optional[str] = None
    is_done: bool = False
    owner_id: int
    project_id: Optional[int] = None


class Tag(Record):
    name: str
    color: str = "Black"
    owner_id: int
    project_id: Optional[int] = None
