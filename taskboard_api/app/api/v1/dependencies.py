"""
Shared FastAPI dependencies for version 1 of the API.

Every request gets its own SQLite connection, closed when the response
has been produced.  The dependencies are ``async`` so the connection is
created on the event loop thread that also runs the (async) endpoint;
``sqlite3`` connections refuse to be used from another thread.
"""

import sqlite3
from typing import Any, AsyncIterator, Dict

from fastapi import Depends

from taskboard_api.app.core.db import get_connection
from taskboard_api.app.core.security import get_current_user
from taskboard_api.app.services.membership_service import MembershipService
from taskboard_api.app.services.tag_service import TagService
from taskboard_api.app.services.task_service import TaskService


async def get_db() -> AsyncIterator[sqlite3.Connection]:
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


async def get_membership_service(
    current_user: Dict[str, Any] = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
) -> MembershipService:
    return MembershipService.for_user(current_user["user_id"], conn)


async def get_task_service(
    current_user: Dict[str, Any] = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
) -> TaskService:
    return TaskService(current_user["user_id"], conn)


async def get_tag_service(conn: sqlite3.Connection = Depends(get_db)) -> TagService:
    return TagService(conn)
