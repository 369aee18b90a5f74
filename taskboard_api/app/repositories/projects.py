"""Repository for shared projects."""

from typing import List

from taskboard_api.app.models import Project

from .base import Repository


class ProjectRepository(Repository[Project]):
    table = "projects"
    model = Project
    columns = ("name",)

    def for_member(self, user_id: int, is_accepted: bool = True) -> List[Project]:
        """Projects where ``user_id`` holds a membership in the given state."""
        rows = self.conn.execute(
            """
            SELECT p.id, p.name
            FROM projects p JOIN project_members m ON m.project_id = p.id
            WHERE m.user_id = ? AND m.is_accepted = ?
            ORDER BY p.id
            """,
            (user_id, is_accepted),
        ).fetchall()
        return [self._to_record(row) for row in rows]
