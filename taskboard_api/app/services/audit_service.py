"""
Audit service for recording and querying user actions.

Services record significant actions (project created, invitation
accepted, project torn down, ...) in the ``audit_logs`` table.  When a
connection is passed to ``log`` the record joins that connection's
transaction, so an action that is rolled back leaves no audit trail.
"""

from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, List, Optional

from taskboard_api.app.core.db import get_connection


class AuditService:
    """Service class for writing and retrieving audit logs."""

    @classmethod
    async def log(
        cls,
        user_id: Optional[int],
        action: str,
        object_type: str,
        object_id: Optional[int] = None,
        details: Optional[dict] = None,
        conn: Optional[sqlite3.Connection] = None,
    ) -> None:
        """Insert a new audit record.

        Parameters
        ----------
        user_id : Optional[int]
            ID of the acting user, ``None`` for system actions.
        action : str
            Short verb such as ``"create"``, ``"invite"`` or ``"leave"``.
        object_type : str
            Type of object affected (``"project"``, ``"task"``, ...).
        object_id : Optional[int]
            Primary key of the affected object, if applicable.
        details : Optional[dict]
            Additional structured data, stored as JSON.
        conn : Optional[sqlite3.Connection]
            Connection of an open unit of work.  The caller commits it.
            Without one, the record is written and committed on a
            connection of its own.
        """
        details_json = json.dumps(details) if details else None
        params = (user_id, action, object_type, object_id, details_json)
        sql = """
            INSERT INTO audit_logs (user_id, action, object_type, object_id, details)
            VALUES (?, ?, ?, ?, ?)
        """
        if conn is not None:
            conn.execute(sql, params)
            return
        own_conn = get_connection()
        try:
            own_conn.execute(sql, params)
            own_conn.commit()
        finally:
            own_conn.close()

    @classmethod
    async def list_logs(
        cls,
        user_id: Optional[int] = None,
        object_type: Optional[str] = None,
        action: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Retrieve audit records, newest first, with optional filters."""
        conn = get_connection()
        try:
            where_clauses: List[str] = []
            params: List[Any] = []
            if user_id is not None:
                where_clauses.append("user_id = ?")
                params.append(user_id)
            if object_type:
                where_clauses.append("object_type = ?")
                params.append(object_type)
            if action:
                where_clauses.append("action = ?")
                params.append(action)
            query = "SELECT id, user_id, action, object_type, object_id, timestamp, details FROM audit_logs"
            if where_clauses:
                query += " WHERE " + " AND ".join(where_clauses)
            query += " ORDER BY id DESC LIMIT ? OFFSET ?"
            params.extend([limit, offset])
            rows = conn.execute(query, tuple(params)).fetchall()
            logs = []
            for row in rows:
                details_data = None
                if row["details"]:
                    try:
                        details_data = json.loads(row["details"])
                    except json.JSONDecodeError:
                        details_data = row["details"]
                logs.append(
                    {
                        "id": row["id"],
                        "user_id": row["user_id"],
                        "action": row["action"],
                        "object_type": row["object_type"],
                        "object_id": row["object_id"],
                        "timestamp": row["timestamp"],
                        "details": details_data,
                    }
                )
            return logs
        finally:
            conn.close()
