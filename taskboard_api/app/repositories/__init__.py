"""
Data access layer.

Each repository stores one record type in its SQLite table.  All
repositories of a request share the same connection so services can
commit or roll back several writes together.
"""

from .base import Repository
from .memberships import MembershipRepository
from .projects import ProjectRepository
from .tasks import TaskRepository
from .users import UserRepository

__all__ = [
    "Repository",
    "MembershipRepository",
    "ProjectRepository",
    "TaskRepository",
    "UserRepository",
]
