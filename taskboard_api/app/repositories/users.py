"""Repository for user accounts."""

from typing import Dict, Iterable, List, Optional

from taskboard_api.app.models import User

from .base import Repository


class UserRepository(Repository[User]):
    table = "users"
    model = User
    columns = ("login", "full_name", "password")

    def get_by_login(self, login: str) -> Optional[User]:
        return self.first(login=login)

    def get_by_logins(self, logins: Iterable[str]) -> Dict[str, User]:
        """Map every known login of ``logins`` to its user.

        Logins without a user are simply missing from the result.
        """
        wanted = list(dict.fromkeys(logins))
        if not wanted:
            return {}
        placeholders = ", ".join("?" for _ in wanted)
        rows = self.conn.execute(
            f"{self._select()} WHERE login IN ({placeholders})",
            tuple(wanted),
        ).fetchall()
        found = {row["login"]: self._to_record(row) for row in rows}
        return {login: found[login] for login in wanted if login in found}

    def members_of(self, project_id: int) -> List[User]:
        """Users holding an accepted membership of ``project_id``."""
        rows = self.conn.execute(
            """
            SELECT u.id, u.login, u.full_name, u.password
            FROM users u JOIN project_members m ON m.user_id = u.id
            WHERE m.project_id = ? AND m.is_accepted = 1
            ORDER BY m.id
            """,
            (project_id,),
        ).fetchall()
        return [self._to_record(row) for row in rows]
