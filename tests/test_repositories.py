"""Repository tests against a real SQLite file."""

import pytest

from taskboard_api.app.models import Membership, Project, Task, User
from taskboard_api.app.repositories import (
    MembershipRepository,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)


def test_add_assigns_id_and_get_returns_record(conn):
    projects = ProjectRepository(conn)
    project = Project(name="Sprint")

    assert projects.add(project) is True
    projects.save()

    assert project.id is not None
    assert projects.get(project.id) == project


def test_filter_matches_null(conn, users):
    tasks = TaskRepository(conn)
    projects = ProjectRepository(conn)
    project = Project(name="Sprint")
    projects.add(project)
    tasks.add(Task(title="personal", owner_id=users["alice"]))
    tasks.add(Task(title="shared", owner_id=users["alice"], project_id=project.id))

    assert [t.title for t in tasks.personal(users["alice"])] == ["personal"]
    assert [t.title for t in tasks.for_project(project.id)] == ["shared"]


def test_filter_rejects_unknown_column(conn):
    with pytest.raises(ValueError):
        ProjectRepository(conn).filter(owner="alice")


def test_duplicate_membership_is_refused(conn, users):
    projects = ProjectRepository(conn)
    memberships = MembershipRepository(conn)
    project = Project(name="Sprint")
    projects.add(project)

    first = Membership(project_id=project.id, user_id=users["bob"], inviter_id=users["alice"])
    second = Membership(project_id=project.id, user_id=users["bob"], inviter_id=users["carol"])

    assert memberships.add(first) is True
    assert memberships.add(second) is False
    assert second.id is None
    assert memberships.count_for_project(project.id) == 1


def test_update_persists_in_place_changes(conn, users):
    projects = ProjectRepository(conn)
    memberships = MembershipRepository(conn)
    project = Project(name="Sprint")
    projects.add(project)
    invitation = Membership(project_id=project.id, user_id=users["bob"], inviter_id=users["alice"])
    memberships.add(invitation)

    invitation.is_accepted = True
    assert memberships.update(invitation) is True
    memberships.save()

    assert memberships.find(project.id, users["bob"]).is_accepted is True


def test_remove_twice_reports_false(conn):
    projects = ProjectRepository(conn)
    project = Project(name="Sprint")
    projects.add(project)

    assert projects.remove(project) is True
    assert projects.remove(project) is False


def test_rollback_discards_pending_writes(conn):
    projects = ProjectRepository(conn)
    projects.add(Project(name="Draft"))

    projects.rollback()

    assert projects.get_all() == []


def test_get_all_is_cached_until_refresh(conn, users):
    repo = UserRepository(conn)
    assert len(repo.get_all()) == 4

    UserRepository(conn).add(User(login="erin"))
    assert len(repo.get_all()) == 4

    repo.refresh()
    assert len(repo.get_all()) == 5


def test_get_by_logins_skips_unknown(conn, users):
    found = UserRepository(conn).get_by_logins(["bob", "nobody", "bob"])

    assert list(found) == ["bob"]
    assert found["bob"].id == users["bob"]
