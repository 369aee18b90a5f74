"""Repository for project memberships and pending invitations."""

from typing import List, Optional

from taskboard_api.app.models import Membership

from .base import Repository


class MembershipRepository(Repository[Membership]):
    table = "project_members"
    model = Membership
    columns = ("project_id", "user_id", "inviter_id", "is_accepted")

    def find(self, project_id: int, user_id: int) -> Optional[Membership]:
        """Return the single row for (project, user), if any."""
        return self.first(project_id=project_id, user_id=user_id)

    def for_project(self, project_id: int) -> List[Membership]:
        return self.filter(project_id=project_id)

    def count_for_project(self, project_id: int) -> int:
        row = self.conn.execute(
            "SELECT COUNT(*) AS count FROM project_members WHERE project_id = ?",
            (project_id,),
        ).fetchone()
        return row["count"]
