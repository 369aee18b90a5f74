"""
HTTP tests for the v1 API.

Runs the FastAPI application in-process through ``TestClient`` against
the per-test SQLite database.
"""

import pytest
from fastapi.testclient import TestClient

from taskboard_api.app.main import create_app


@pytest.fixture
def client(db_path):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def login_as(client):
    """Register ``login`` and return its authorization headers."""

    def _login(login: str) -> dict:
        response = client.post("/api/v1/users/", json={"login": login, "password": "secret123"})
        assert response.status_code == 201
        response = client.post("/api/v1/users/login", json={"login": login, "password": "secret123"})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


def test_requires_authentication(client):
    assert client.get("/api/v1/projects/").status_code == 401
    assert client.get("/api/v1/projects/", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_duplicate_registration_conflicts(client, login_as):
    login_as("alice")

    response = client.post("/api/v1/users/", json={"login": "alice", "password": "another1"})

    assert response.status_code == 409


def test_wrong_password(client, login_as):
    login_as("alice")

    response = client.post("/api/v1/users/login", json={"login": "alice", "password": "wrong"})

    assert response.status_code == 401


def test_sprint_workflow(client, login_as):
    alice = login_as("alice")
    bob = login_as("bob")
    carol = login_as("carol")

    response = client.post("/api/v1/projects/", json={"name": "Sprint", "logins": ["bob", "carol"]}, headers=alice)
    assert response.status_code == 201
    project_id = response.json()["id"]
    assert response.json()["name"] == "Sprint"

    invitations = client.get("/api/v1/projects/invitations", headers=bob).json()
    assert invitations == [{"inviter_login": "alice", "project_id": project_id, "project_name": "Sprint"}]

    assert client.post(f"/api/v1/projects/{project_id}/accept", headers=bob).status_code == 204
    assert client.post(f"/api/v1/projects/{project_id}/decline", headers=carol).status_code == 204

    members = client.get(f"/api/v1/projects/{project_id}/members", headers=alice).json()
    assert sorted(members) == ["alice", "bob"]
    assert client.get("/api/v1/projects/", headers=bob).json() == [{"id": project_id, "name": "Sprint"}]
    assert client.get("/api/v1/projects/invitations", headers=carol).json() == []


def test_create_project_errors(client, login_as):
    alice = login_as("alice")
    login_as("bob")

    unknown = client.post("/api/v1/projects/", json={"name": "Sprint", "logins": ["bob", "ghost"]}, headers=alice)
    self_invite = client.post("/api/v1/projects/", json={"name": "Sprint", "logins": ["alice"]}, headers=alice)

    assert unknown.status_code == 404
    assert "ghost" in unknown.json()["detail"]
    assert self_invite.status_code == 400
    assert client.get("/api/v1/projects/", headers=alice).json() == []


def test_invite_into_existing_project(client, login_as):
    alice = login_as("alice")
    dave = login_as("dave")
    project_id = client.post("/api/v1/projects/", json={"name": "Ops"}, headers=alice).json()["id"]

    response = client.post(f"/api/v1/projects/{project_id}/invitations", json={"logins": ["dave"]}, headers=alice)
    again = client.post(f"/api/v1/projects/{project_id}/invitations", json={"logins": ["dave"]}, headers=alice)
    missing = client.post("/api/v1/projects/999/invitations", json={"logins": ["dave"]}, headers=alice)

    assert response.status_code == 204
    assert again.status_code == 204
    assert missing.status_code == 404
    assert len(client.get("/api/v1/projects/invitations", headers=dave).json()) == 1


def test_answering_missing_invitation(client, login_as):
    bob = login_as("bob")

    assert client.post("/api/v1/projects/42/accept", headers=bob).status_code == 404
    assert client.post("/api/v1/projects/42/decline", headers=bob).status_code == 404
    assert client.post("/api/v1/projects/42/leave", headers=bob).status_code == 404


def test_last_member_leaving_deletes_tasks(client, login_as):
    alice = login_as("alice")
    project_id = client.post("/api/v1/projects/", json={"name": "Solo"}, headers=alice).json()["id"]
    task = client.post("/api/v1/tasks/", json={"title": "Plan", "project_id": project_id}, headers=alice).json()
    tag = client.post("/api/v1/tags/", json={"name": "urgent", "project_id": project_id}, headers=alice).json()
    assert client.post(f"/api/v1/tasks/{task['id']}/tags", json={"tag_id": tag["id"]}, headers=alice).status_code == 204
    assert [t["name"] for t in client.get(f"/api/v1/tasks/{task['id']}/tags", headers=alice).json()] == ["urgent"]

    assert client.post(f"/api/v1/projects/{project_id}/leave", headers=alice).status_code == 204

    assert client.get("/api/v1/projects/", headers=alice).json() == []
    assert client.get(f"/api/v1/projects/{project_id}/members", headers=alice).json() == []
    assert client.post(f"/api/v1/tasks/{task['id']}/complete", headers=alice).status_code == 404

    actions = [log["action"] for log in client.get("/api/v1/audit/logs", headers=alice).json()]
    assert actions[:2] == ["delete", "leave"]


def test_project_tasks_require_membership(client, login_as):
    alice = login_as("alice")
    bob = login_as("bob")
    project_id = client.post("/api/v1/projects/", json={"name": "Sprint", "logins": ["bob"]}, headers=alice).json()["id"]

    pending = client.post("/api/v1/tasks/", json={"title": "Sneak", "project_id": project_id}, headers=bob)
    assert pending.status_code == 403

    client.post(f"/api/v1/projects/{project_id}/accept", headers=bob)
    created = client.post("/api/v1/tasks/", json={"title": "Review", "project_id": project_id}, headers=bob)
    assert created.status_code == 201

    titles = [t["title"] for t in client.get("/api/v1/tasks/", params={"project_id": project_id}, headers=alice).json()]
    assert titles == ["Review"]
    assert client.get("/api/v1/tasks/", headers=alice).json() == []


def test_outsider_cannot_invite_themselves(client, login_as):
    alice = login_as("alice")
    dave = login_as("dave")
    project_id = client.post("/api/v1/projects/", json={"name": "Secret"}, headers=alice).json()["id"]

    response = client.post(f"/api/v1/projects/{project_id}/invitations", json={"logins": ["dave"]}, headers=dave)

    assert response.status_code == 404
    assert client.post(f"/api/v1/projects/{project_id}/accept", headers=dave).status_code == 404
    assert client.get(f"/api/v1/projects/{project_id}/members", headers=alice).json() == ["alice"]


def test_shared_tags_are_hidden_from_outsiders(client, login_as):
    alice = login_as("alice")
    dave = login_as("dave")
    project_id = client.post("/api/v1/projects/", json={"name": "Secret"}, headers=alice).json()["id"]
    tag = client.post("/api/v1/tags/", json={"name": "confidential", "project_id": project_id}, headers=alice).json()
    task = client.post("/api/v1/tasks/", json={"title": "Mine"}, headers=dave).json()

    listed = client.get("/api/v1/tags/", params={"project_id": project_id}, headers=dave)
    attached = client.post(f"/api/v1/tasks/{task['id']}/tags", json={"tag_id": tag["id"]}, headers=dave)
    renamed = client.patch(f"/api/v1/tags/{tag['id']}", json={"name": "public"}, headers=dave)

    assert listed.status_code == 403
    assert attached.status_code == 403
    assert renamed.status_code == 403
    assert client.delete(f"/api/v1/tags/{tag['id']}", headers=alice).status_code == 204
    assert client.get("/api/v1/tags/", params={"project_id": project_id}, headers=alice).json() == []
