"""
Business logic for users.

Users are identified by a unique login, which is also what other users
type when inviting them into a project.  Passwords are stored as
PBKDF2 hashes (see ``core.security``).
"""

import logging
from typing import List, Optional

from taskboard_api.app.core.db import get_connection
from taskboard_api.app.core.security import hash_password, verify_password
from taskboard_api.app.models import User
from taskboard_api.app.repositories import UserRepository
from taskboard_api.app.schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Registration, authentication and lookup of users."""

    @staticmethod
    def _to_read(user: User) -> UserRead:
        return UserRead(id=user.id, login=user.login, full_name=user.full_name)

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Register a new user.

        Raises ``ValueError`` if the login is already taken.
        """
        logger.info("Registering user %s", data.login)
        conn = get_connection()
        try:
            users = UserRepository(conn)
            if users.get_by_login(data.login) is not None:
                raise ValueError(f"Login {data.login} is already taken")
            user = User(
                login=data.login,
                full_name=data.full_name,
                password=hash_password(data.password),
            )
            if not users.add(user):
                conn.rollback()
                raise ValueError(f"Login {data.login} is already taken")
            users.save()
            return cls._to_read(user)
        finally:
            conn.close()

    @classmethod
    async def authenticate(cls, login: str, password: str) -> Optional[UserRead]:
        """Return the user if the credentials match, otherwise ``None``."""
        conn = get_connection()
        try:
            user = UserRepository(conn).get_by_login(login)
        finally:
            conn.close()
        if user is None or not verify_password(password, user.password):
            return None
        return cls._to_read(user)

    @classmethod
    async def get_user_by_id(cls, user_id: int) -> Optional[UserRead]:
        conn = get_connection()
        try:
            user = UserRepository(conn).get(user_id)
        finally:
            conn.close()
        return cls._to_read(user) if user else None

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        """All users, so clients can offer logins to invite."""
        conn = get_connection()
        try:
            users = UserRepository(conn).get_all()
        finally:
            conn.close()
        return [cls._to_read(user) for user in users]
