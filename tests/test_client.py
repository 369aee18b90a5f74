"""TaskboardAPI client tests with a stubbed ``requests`` session."""

import json

import requests

from taskboard_client import TaskboardAPI


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    response.url = "http://testserver"
    return response


class StubSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        return self.responses.pop(0)


def test_login_stores_token_for_later_calls():
    session = StubSession(
        make_response(200, {"access_token": "abc", "token_type": "bearer"}),
        make_response(200, [{"id": 1, "name": "Sprint"}]),
    )
    api = TaskboardAPI(base_url="http://testserver/", session=session)

    assert api.login("alice", "secret123") == (True, None)
    projects, error = api.list_projects()

    assert error is None
    assert projects == [{"id": 1, "name": "Sprint"}]
    assert session.calls[1]["url"] == "http://testserver/api/v1/projects/"
    assert session.calls[1]["headers"] == {"Authorization": "Bearer abc"}


def test_create_project_sends_logins():
    session = StubSession(make_response(201, {"id": 7, "name": "Sprint"}))
    api = TaskboardAPI(base_url="http://testserver", token="abc", session=session)

    project, error = api.create_project("Sprint", ["bob", "carol"])

    assert project == {"id": 7, "name": "Sprint"}
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["json"] == {"name": "Sprint", "logins": ["bob", "carol"]}


def test_http_error_is_returned_not_raised():
    session = StubSession(make_response(404, {"detail": "Unknown user login(s): ghost"}))
    api = TaskboardAPI(base_url="http://testserver", token="abc", session=session)

    ok, error = api.invite(3, ["ghost"])

    assert ok is False
    assert error == {"status_code": 404, "message": "Unknown user login(s): ghost"}


def test_empty_response_counts_as_success():
    session = StubSession(make_response(204))
    api = TaskboardAPI(base_url="http://testserver", token="abc", session=session)

    assert api.accept_invitation(3) == (True, None)
    assert session.calls[0]["url"] == "http://testserver/api/v1/projects/3/accept"


def test_network_error():
    class DownSession:
        def request(self, **kwargs):
            raise requests.ConnectionError("connection refused")

    api = TaskboardAPI(base_url="http://testserver", session=DownSession())

    members, error = api.project_members(3)

    assert members == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]
