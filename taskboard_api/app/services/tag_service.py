"""
Service for task tags.

Tags are either personal (``project_id`` is ``NULL``) or shared by the
members of one project.  A personal tag is usable by its owner only, a
shared tag by the accepted members of its project; anything else raises
``PermissionError``.  Tasks and tags are linked through the
``task_tags`` table.  ``MembershipService`` relies on
``remove_tags_from_task`` to unlink a task before deleting it when a
project is torn down.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from taskboard_api.app.schemas.tag import TagCreate, TagRead, TagUpdate

logger = logging.getLogger(__name__)


class TagService:
    """Tag operations on a caller-provided connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    @staticmethod
    def _to_tag(row: sqlite3.Row) -> TagRead:
        return TagRead(
            id=row["id"],
            name=row["name"],
            color=row["color"],
            owner_id=row["owner_id"],
            project_id=row["project_id"],
        )

    def _is_member(self, project_id: int, user_id: int) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM project_members WHERE project_id = ? AND user_id = ? AND is_accepted = 1",
            (project_id, user_id),
        ).fetchone()
        return row is not None

    def _require_member(self, project_id: int, user_id: int) -> None:
        if not self._is_member(project_id, user_id):
            raise PermissionError(f"User {user_id} is not a member of project {project_id}")

    async def _get_usable(self, user_id: int, tag_id: int) -> TagRead:
        """Return a tag ``user_id`` may use, or raise.

        Raises ``ValueError`` for a missing tag and ``PermissionError``
        for a tag of another user or of a foreign project.
        """
        tag = await self.get_tag(tag_id)
        if tag is None:
            raise ValueError(f"Tag {tag_id} not found")
        if tag.project_id is None:
            if tag.owner_id != user_id:
                raise PermissionError(f"Tag {tag_id} belongs to another user")
        else:
            self._require_member(tag.project_id, user_id)
        return tag

    async def create_tag(self, owner_id: int, data: TagCreate) -> TagRead:
        """Create a personal tag, or a shared one when ``project_id`` is set.

        Raises ``PermissionError`` if the owner is not an accepted member
        of the project the tag should be shared in.
        """
        if data.project_id is not None:
            self._require_member(data.project_id, owner_id)
        cursor = self.conn.execute(
            "INSERT INTO tags (name, color, owner_id, project_id) VALUES (?, ?, ?, ?)",
            (data.name, data.color, owner_id, data.project_id),
        )
        self.conn.commit()
        logger.info("Tag %s created by user %s", cursor.lastrowid, owner_id)
        return TagRead(id=cursor.lastrowid, owner_id=owner_id, **data.model_dump())

    async def list_tags(self, owner_id: int, project_id: Optional[int] = None) -> List[TagRead]:
        """Personal tags of ``owner_id`` plus the shared tags of ``project_id``.

        Asking for the shared tags of a project ``owner_id`` is not a
        member of raises ``PermissionError``.
        """
        if project_id is None:
            rows = self.conn.execute(
                "SELECT id, name, color, owner_id, project_id FROM tags "
                "WHERE owner_id = ? AND project_id IS NULL ORDER BY id",
                (owner_id,),
            ).fetchall()
        else:
            self._require_member(project_id, owner_id)
            rows = self.conn.execute(
                "SELECT id, name, color, owner_id, project_id FROM tags "
                "WHERE (owner_id = ? AND project_id IS NULL) OR project_id = ? ORDER BY id",
                (owner_id, project_id),
            ).fetchall()
        return [self._to_tag(row) for row in rows]

    async def get_tag(self, tag_id: int) -> Optional[TagRead]:
        row = self.conn.execute(
            "SELECT id, name, color, owner_id, project_id FROM tags WHERE id = ?",
            (tag_id,),
        ).fetchone()
        return self._to_tag(row) if row else None

    async def update_tag(self, user_id: int, tag_id: int, data: TagUpdate) -> TagRead:
        """Rename or recolour a tag the user may use."""
        tag = await self._get_usable(user_id, tag_id)
        changes = data.model_dump(exclude_none=True)
        if not changes:
            return tag
        assignments = ", ".join(f"{column} = ?" for column in changes)
        self.conn.execute(
            f"UPDATE tags SET {assignments} WHERE id = ?",
            tuple(changes.values()) + (tag_id,),
        )
        self.conn.commit()
        logger.info("Tag %s updated by user %s", tag_id, user_id)
        return tag.model_copy(update=changes)

    async def remove_tag(self, user_id: int, tag_id: int) -> None:
        """Delete a tag; its links to tasks go with it."""
        await self._get_usable(user_id, tag_id)
        self.conn.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
        self.conn.commit()
        logger.info("Tag %s deleted by user %s", tag_id, user_id)

    async def attach_tag(self, user_id: int, task_id: int, tag_id: int) -> None:
        """Link a tag usable by ``user_id`` to a task.  Linking twice is a no-op."""
        await self._get_usable(user_id, tag_id)
        self.conn.execute(
            "INSERT OR IGNORE INTO task_tags (task_id, tag_id) VALUES (?, ?)",
            (task_id, tag_id),
        )
        self.conn.commit()

    async def tags_for_task(self, task_id: int) -> List[TagRead]:
        rows = self.conn.execute(
            """
            SELECT t.id, t.name, t.color, t.owner_id, t.project_id
            FROM tags t JOIN task_tags tt ON tt.tag_id = t.id
            WHERE tt.task_id = ?
            ORDER BY t.id
            """,
            (task_id,),
        ).fetchall()
        return [self._to_tag(row) for row in rows]

    async def remove_tags_from_task(self, task_id: int) -> bool:
        """Unlink every tag from a task.

        Does not commit: the caller owns the unit of work.  Returns
        ``False`` if the database refused the delete.
        """
        try:
            self.conn.execute("DELETE FROM task_tags WHERE task_id = ?", (task_id,))
        except sqlite3.Error:
            logger.exception("Failed to remove tags from task %s", task_id)
            return False
        return True
