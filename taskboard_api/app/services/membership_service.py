"""
Project membership and invitation workflow.

A shared project is owned collectively by its accepted members.  The
``project_members`` table holds one row per (project, user): a row with
``is_accepted = 0`` is a pending invitation, a row with
``is_accepted = 1`` an active membership.  Each row moves through

    (none) --invite--> pending --accept--> accepted
    pending --decline--> (none)
    accepted --leave--> (none)

and never from accepted back to pending.

When the last row of a project disappears the project is torn down:
tag links of its tasks first, then the tasks, then the project itself.

Every mutating operation runs as one transaction on the connection the
repositories share.  Validation errors are raised before anything is
written; a failed write rolls the whole operation back and surfaces as
``PersistenceError``.  Re-running an operation after a failure is safe.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional

from taskboard_api.app.core.errors import (
    MembershipNotFoundError,
    PersistenceError,
    SelfInvitationError,
    UnknownUserError,
)
from taskboard_api.app.models import Membership, Project, User
from taskboard_api.app.repositories import (
    MembershipRepository,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)
from taskboard_api.app.schemas.project import InvitationRead, ProjectRead, ProjectRef
from taskboard_api.app.services.audit_service import AuditService
from taskboard_api.app.services.tag_service import TagService

logger = logging.getLogger(__name__)


class MembershipService:
    """Membership operations performed on behalf of one acting user."""

    def __init__(
        self,
        user_id: int,
        users: UserRepository,
        projects: ProjectRepository,
        memberships: MembershipRepository,
        tasks: TaskRepository,
        tag_service: TagService,
    ) -> None:
        self.user_id = user_id
        self.users = users
        self.projects = projects
        self.memberships = memberships
        self.tasks = tasks
        self.tag_service = tag_service

    @classmethod
    def for_user(cls, user_id: int, conn: sqlite3.Connection) -> "MembershipService":
        """Build a service whose collaborators all share ``conn``."""
        return cls(
            user_id,
            UserRepository(conn),
            ProjectRepository(conn),
            MembershipRepository(conn),
            TaskRepository(conn),
            TagService(conn),
        )

    def refresh_repositories(self) -> None:
        self.tasks.refresh()
        self.users.refresh()
        self.projects.refresh()
        self.memberships.refresh()

    def _discard(self) -> None:
        self.memberships.rollback()
        self.refresh_repositories()

    @contextmanager
    def _unit_of_work(self) -> Iterator[None]:
        try:
            yield
            self.memberships.save()
        except sqlite3.Error as exc:
            self._discard()
            raise PersistenceError(str(exc)) from exc
        except Exception:
            self._discard()
            raise

    async def _audit(self, action: str, project_id: int, details: Optional[dict] = None) -> None:
        await AuditService.log(
            user_id=self.user_id,
            action=action,
            object_type="project",
            object_id=project_id,
            details=details,
            conn=self.memberships.conn,
        )

    # ------------------------------------------------------------------
    # Creation and invitations
    # ------------------------------------------------------------------
    def _resolve_logins(self, logins: Iterable[str]) -> Dict[str, User]:
        requested = list(dict.fromkeys(logins))
        users = self.users.get_by_logins(requested)
        missing = [login for login in requested if login not in users]
        if missing:
            raise UnknownUserError(missing)
        return users

    async def create_or_invite(
        self,
        project: ProjectRef,
        logins: Iterable[str],
        is_new_project: bool,
    ) -> int:
        """Create a shared project or invite more users into one.

        Parameters
        ----------
        project : ProjectRef
            ``name`` of the project to create, or ``id`` of the existing
            project to invite into.
        logins : Iterable[str]
            Logins of the users to invite.
        is_new_project : bool
            ``True`` creates the project with the acting user as its
            first, already accepted member.

        Returns
        -------
        int
            Id of the created or existing project.

        Raises
        ------
        UnknownUserError
            A login does not belong to any user.  Nothing is written.
        SelfInvitationError
            The acting user listed their own login.  Nothing is written.
        MembershipNotFoundError
            ``is_new_project`` is false and the project does not exist
            or the acting user holds no row for it.
        PersistenceError
            A write failed; the operation was rolled back.
        """
        users = self._resolve_logins(logins)

        if not is_new_project:
            if project.id is None or self.projects.get(project.id) is None:
                raise MembershipNotFoundError(f"Project {project.id} not found")
            # only someone already invited into the project may invite others
            if self.memberships.find(project.id, self.user_id) is None:
                raise MembershipNotFoundError(
                    f"User {self.user_id} is not a member of project {project.id}"
                )

        actor = self.users.get(self.user_id)
        if actor is None:
            raise MembershipNotFoundError(f"User {self.user_id} not found")
        if actor.login in users:
            raise SelfInvitationError(actor.login)

        if not is_new_project:
            with self._unit_of_work():
                invited = await self._apply_invitations(users, project.id)
                if invited:
                    await self._audit("invite", project.id, {"logins": invited})
            return project.id

        if not project.name:
            raise ValueError("Project name is required")

        with self._unit_of_work():
            new_project = Project(name=project.name)
            if not self.projects.add(new_project):
                raise PersistenceError(f"Failed to create project {project.name!r}")
            creator = Membership(
                project_id=new_project.id,
                user_id=self.user_id,
                inviter_id=self.user_id,
                is_accepted=True,
            )
            if not self.memberships.add(creator):
                raise PersistenceError(f"Failed to add creator to project {new_project.id}")
            invited = await self._apply_invitations(users, new_project.id)
            await self._audit("create", new_project.id, {"name": new_project.name, "invited": invited})

        logger.info(
            "User %s created project %s and invited %d user(s)",
            self.user_id,
            new_project.id,
            len(invited),
        )
        return new_project.id

    async def _apply_invitations(self, users: Dict[str, User], project_id: int) -> List[str]:
        """Insert a pending membership for every user not yet in the project.

        Users that already hold a row (pending or accepted) are skipped.
        Returns the logins that were actually invited.
        """
        present = {membership.user_id for membership in self.memberships.for_project(project_id)}
        invited: List[str] = []
        for login, user in users.items():
            if user.id in present:
                continue
            invitation = Membership(
                project_id=project_id,
                user_id=user.id,
                inviter_id=self.user_id,
                is_accepted=False,
            )
            if not self.memberships.add(invitation):
                # A concurrent client may have invited the same user first.
                if self.memberships.find(project_id, user.id) is not None:
                    continue
                raise PersistenceError(f"Failed to invite {login} to project {project_id}")
            present.add(user.id)
            invited.append(login)
        return invited

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------
    async def accept_invitation(self, project_id: int) -> bool:
        """Turn the acting user's invitation into a membership.

        Returns ``False`` if the user has no row for the project.
        Accepting an accepted membership changes nothing.
        """
        membership = self.memberships.find(project_id, self.user_id)
        if membership is None:
            return False
        if membership.is_accepted:
            return True
        with self._unit_of_work():
            membership.is_accepted = True
            if not self.memberships.update(membership):
                raise PersistenceError(f"Failed to accept invitation to project {project_id}")
            await self._audit("accept", project_id)
        logger.info("User %s joined project %s", self.user_id, project_id)
        return True

    async def decline_invitation(self, project_id: int) -> bool:
        """Remove the acting user's row for the project, pending or not.

        Returns ``False`` if there is no such row.  If it was the last
        row of the project, the project is torn down.
        """
        membership = self.memberships.find(project_id, self.user_id)
        if membership is None:
            return False
        with self._unit_of_work():
            if not self.memberships.remove(membership):
                raise PersistenceError(f"Failed to decline invitation to project {project_id}")
            await self._audit("decline", project_id)
            await self._teardown_if_empty(project_id)
        logger.info("User %s declined project %s", self.user_id, project_id)
        return True

    async def leave_project(self, project_id: int) -> None:
        """Leave a project; the last member to leave deletes it.

        Raises
        ------
        MembershipNotFoundError
            The acting user has no row for the project.
        PersistenceError
            A step failed; the membership, tasks, tag links and project
            are left exactly as they were.
        """
        membership = self.memberships.find(project_id, self.user_id)
        if membership is None:
            raise MembershipNotFoundError(
                f"User {self.user_id} is not a member of project {project_id}"
            )
        with self._unit_of_work():
            if not self.memberships.remove(membership):
                raise PersistenceError(f"Failed to leave project {project_id}")
            await self._audit("leave", project_id)
            await self._teardown_if_empty(project_id)
        logger.info("User %s left project %s", self.user_id, project_id)

    async def _teardown_if_empty(self, project_id: int) -> bool:
        """Delete tag links, tasks and the project once no rows remain."""
        if self.memberships.count_for_project(project_id):
            return False

        tasks = self.tasks.for_project(project_id)
        for task in tasks:
            if not await self.tag_service.remove_tags_from_task(task.id):
                raise PersistenceError(f"Can't remove tags from task {task.id}")
            if not self.tasks.remove(task):
                raise PersistenceError(f"Failed to delete task {task.id}")

        project = self.projects.get(project_id)
        if project is not None and not self.projects.remove(project):
            raise PersistenceError(f"Failed to delete project {project_id}")
        await self._audit("delete", project_id, {"tasks": len(tasks)})
        logger.info("Project %s deleted with %d task(s)", project_id, len(tasks))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def get_projects(self) -> List[ProjectRead]:
        """Projects the acting user is an accepted member of."""
        return [
            ProjectRead(id=project.id, name=project.name)
            for project in self.projects.for_member(self.user_id, is_accepted=True)
        ]

    async def get_invitations(self) -> List[InvitationRead]:
        """Pending invitations of the acting user."""
        invitations: List[InvitationRead] = []
        pending = self.memberships.filter(user_id=self.user_id, is_accepted=False)
        for membership in pending:
            project = self.projects.get(membership.project_id)
            inviter = self.users.get(membership.inviter_id)
            if project is None or inviter is None:
                continue
            invitations.append(
                InvitationRead(
                    inviter_login=inviter.login,
                    project_id=project.id,
                    project_name=project.name,
                )
            )
        return invitations

    async def get_project_members(self, project_id: int) -> List[str]:
        """Logins of the accepted members; empty for an unknown project."""
        return [user.login for user in self.users.members_of(project_id)]
