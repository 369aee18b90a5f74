"""
Project endpoints for API v1.

Create shared projects, invite users by login, answer invitations and
leave projects.  All routes act on behalf of the authenticated user;
there are no owner or admin roles, every accepted member has the same
rights.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from taskboard_api.app.api.v1.dependencies import get_membership_service
from taskboard_api.app.core.errors import (
    MembershipNotFoundError,
    PersistenceError,
    SelfInvitationError,
    UnknownUserError,
)
from taskboard_api.app.schemas.project import (
    InvitationCreate,
    InvitationRead,
    ProjectCreate,
    ProjectRead,
    ProjectRef,
)
from taskboard_api.app.services.membership_service import MembershipService


router = APIRouter()


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, (UnknownUserError, MembershipNotFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, SelfInvitationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, PersistenceError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.get("/", response_model=List[ProjectRead])
async def list_projects(service: MembershipService = Depends(get_membership_service)) -> List[ProjectRead]:
    """Projects the current user is a member of."""
    return await service.get_projects()


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    service: MembershipService = Depends(get_membership_service),
) -> ProjectRead:
    """Create a shared project and invite the listed logins.

    The current user becomes the first member.  Unknown logins (404) or
    the user's own login (400) reject the request before anything is
    created.
    """
    try:
        project_id = await service.create_or_invite(
            ProjectRef(name=body.name), body.logins, is_new_project=True
        )
    except (ValueError, PersistenceError) as exc:
        raise _to_http(exc)
    return ProjectRead(id=project_id, name=body.name)


@router.get("/invitations", response_model=List[InvitationRead])
async def list_invitations(
    service: MembershipService = Depends(get_membership_service),
) -> List[InvitationRead]:
    """Pending invitations of the current user."""
    return await service.get_invitations()


@router.post("/{project_id}/invitations", status_code=status.HTTP_204_NO_CONTENT)
async def invite_users(
    project_id: int,
    body: InvitationCreate,
    service: MembershipService = Depends(get_membership_service),
) -> None:
    """Invite more users into an existing project.

    Logins that already have an invitation or membership are ignored.
    """
    try:
        await service.create_or_invite(ProjectRef(id=project_id), body.logins, is_new_project=False)
    except (ValueError, PersistenceError) as exc:
        raise _to_http(exc)


@router.post("/{project_id}/accept", status_code=status.HTTP_204_NO_CONTENT)
async def accept_invitation(
    project_id: int,
    service: MembershipService = Depends(get_membership_service),
) -> None:
    try:
        accepted = await service.accept_invitation(project_id)
    except PersistenceError as exc:
        raise _to_http(exc)
    if not accepted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")


@router.post("/{project_id}/decline", status_code=status.HTTP_204_NO_CONTENT)
async def decline_invitation(
    project_id: int,
    service: MembershipService = Depends(get_membership_service),
) -> None:
    try:
        declined = await service.decline_invitation(project_id)
    except PersistenceError as exc:
        raise _to_http(exc)
    if not declined:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")


@router.post("/{project_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
async def leave_project(
    project_id: int,
    service: MembershipService = Depends(get_membership_service),
) -> None:
    """Leave a project.

    When the last member leaves, the project is deleted together with
    its tasks and their tag links.
    """
    try:
        await service.leave_project(project_id)
    except (MembershipNotFoundError, PersistenceError) as exc:
        raise _to_http(exc)


@router.get("/{project_id}/members", response_model=List[str])
async def list_members(
    project_id: int,
    service: MembershipService = Depends(get_membership_service),
) -> List[str]:
    """Logins of the accepted members of a project."""
    return await service.get_project_members(project_id)
