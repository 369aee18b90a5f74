"""Repository for to-do tasks."""

from typing import List

from taskboard_api.app.models import Task

from .base import Repository


class TaskRepository(Repository[Task]):
    table = "tasks"
    model = Task
    columns = ("title", "description", "is_done", "owner_id", "project_id")

    def for_project(self, project_id: int) -> List[Task]:
        return self.filter(project_id=project_id)

    def personal(self, owner_id: int) -> List[Task]:
        """Tasks of ``owner_id`` that belong to no project."""
        return self.filter(owner_id=owner_id, project_id=None)
