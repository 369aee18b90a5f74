"""
Audit log endpoints for API v1.

Users can review the actions they performed themselves: projects
created, invitations sent and answered, projects left or deleted.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from taskboard_api.app.core.security import get_current_user
from taskboard_api.app.services.audit_service import AuditService

router = APIRouter()


@router.get("/logs")
async def list_audit_logs(
    object_type: Optional[str] = Query(None, description="Filter by object type (project, task)"),
    action: Optional[str] = Query(None, description="Filter by action (create, invite, accept, leave, ...)"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of logs to return"),
    offset: int = Query(0, ge=0, description="Number of logs to skip"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> List[dict]:
    """Audit records of the current user, newest first."""
    return await AuditService.list_logs(
        user_id=current_user["user_id"],
        object_type=object_type,
        action=action,
        limit=limit,
        offset=offset,
    )
