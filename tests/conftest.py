"""
Shared pytest fixtures.

Every test gets a fresh SQLite file under ``tmp_path`` with all
migrations applied.
"""

import os

# Set test environment variables before importing app modules
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["LOG_LEVEL"] = "DEBUG"

import pytest

from taskboard_api.app.core.config import settings
from taskboard_api.app.core.db import get_connection, init_db
from taskboard_api.app.services.membership_service import MembershipService


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "taskboard.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def conn(db_path):
    connection = get_connection()
    yield connection
    connection.close()


@pytest.fixture
def make_user(conn):
    def _make(login: str) -> int:
        cursor = conn.execute(
            "INSERT INTO users (login, full_name) VALUES (?, ?)",
            (login, login.title()),
        )
        conn.commit()
        return cursor.lastrowid

    return _make


@pytest.fixture
def users(make_user):
    """Ids of alice, bob, carol and dave."""
    return {login: make_user(login) for login in ("alice", "bob", "carol", "dave")}


@pytest.fixture
def service_for(conn):
    def _for(user_id: int) -> MembershipService:
        return MembershipService.for_user(user_id, conn)

    return _for


@pytest.fixture
def count(conn):
    """Count rows of ``table`` matching column equality filters."""

    def _count(table: str, **where) -> int:
        query = f"SELECT COUNT(*) AS count FROM {table}"
        if where:
            query += " WHERE " + " AND ".join(f"{column} = ?" for column in where)
        return conn.execute(query, tuple(where.values())).fetchone()["count"]

    return _count
