"""
Service for to-do tasks.

A task is either personal (no project) or shared in a project.  Shared
tasks are visible to and editable by every accepted member of their
project; personal tasks only by their owner.  Access violations raise
``PermissionError``, missing tasks ``ValueError``.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from taskboard_api.app.models import Task
from taskboard_api.app.repositories import MembershipRepository, TaskRepository
from taskboard_api.app.schemas.task import TaskCreate, TaskRead
from taskboard_api.app.services.audit_service import AuditService
from taskboard_api.app.services.tag_service import TagService

logger = logging.getLogger(__name__)


class TaskService:
    """Task operations performed on behalf of one acting user."""

    def __init__(self, user_id: int, conn: sqlite3.Connection) -> None:
        self.user_id = user_id
        self.conn = conn
        self.tasks = TaskRepository(conn)
        self.memberships = MembershipRepository(conn)
        self.tag_service = TagService(conn)

    @staticmethod
    def _to_read(task: Task) -> TaskRead:
        return TaskRead(**task.model_dump())

    def _require_member(self, project_id: int) -> None:
        membership = self.memberships.find(project_id, self.user_id)
        if membership is None or not membership.is_accepted:
            raise PermissionError(f"User {self.user_id} is not a member of project {project_id}")

    def _get_visible(self, task_id: int) -> Task:
        task = self.tasks.get(task_id)
        if task is None:
            raise ValueError(f"Task {task_id} not found")
        if task.project_id is None:
            if task.owner_id != self.user_id:
                raise PermissionError(f"Task {task_id} belongs to another user")
        else:
            self._require_member(task.project_id)
        return task

    async def create_task(self, data: TaskCreate) -> TaskRead:
        if data.project_id is not None:
            self._require_member(data.project_id)
        task = Task(
            title=data.title,
            description=data.description,
            owner_id=self.user_id,
            project_id=data.project_id,
        )
        if not self.tasks.add(task):
            self.tasks.rollback()
            raise RuntimeError("Failed to create task")
        self.tasks.save()
        logger.info("User %s created task %s", self.user_id, task.id)
        return self._to_read(task)

    async def list_tasks(self, project_id: Optional[int] = None) -> List[TaskRead]:
        """Tasks of a project (members only) or the user's personal tasks."""
        if project_id is None:
            tasks = self.tasks.personal(self.user_id)
        else:
            self._require_member(project_id)
            tasks = self.tasks.for_project(project_id)
        return [self._to_read(task) for task in tasks]

    async def get_task(self, task_id: int) -> TaskRead:
        return self._to_read(self._get_visible(task_id))

    async def complete_task(self, task_id: int) -> TaskRead:
        task = self._get_visible(task_id)
        if not task.is_done:
            task.is_done = True
            if not self.tasks.update(task):
                self.tasks.rollback()
                raise RuntimeError(f"Failed to update task {task_id}")
            self.tasks.save()
        return self._to_read(task)

    async def delete_task(self, task_id: int) -> None:
        """Delete a task together with its tag links."""
        task = self._get_visible(task_id)
        if not await self.tag_service.remove_tags_from_task(task.id) or not self.tasks.remove(task):
            self.tasks.rollback()
            raise RuntimeError(f"Failed to delete task {task_id}")
        await AuditService.log(
            user_id=self.user_id,
            action="delete",
            object_type="task",
            object_id=task_id,
            conn=self.conn,
        )
        self.tasks.save()
