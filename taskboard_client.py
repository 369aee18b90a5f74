"""Taskboard API client.

A thin wrapper around the Taskboard REST API for front ends (desktop
windows, bots, scripts).  The client uses the ``requests`` library and
never raises for HTTP or network failures: every method returns a tuple
``(data, error)`` where ``error`` is ``None`` on success and otherwise a
dictionary with ``status_code`` and ``message``.

Typical use::

    api = TaskboardAPI(base_url="http://localhost:8000")
    api.login("alice", "secret")
    project, error = api.create_project("Sprint", ["bob", "carol"])
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class TaskboardAPI:
    """Client for the project, invitation and task endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.  The
                ``/api/v1`` prefix is added by the client.
            token: Bearer token.  Can also be obtained with :meth:`login`.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + "/api/v1"
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns ``(data, None)`` with the parsed JSON body (``None`` for
        empty responses) or ``(None, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def register(self, login: str, password: str, full_name: Optional[str] = None) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "POST", "/users/", json_body={"login": login, "password": password, "full_name": full_name}
        )

    def login(self, login: str, password: str) -> Tuple[bool, Optional[Error]]:
        """Authenticate and keep the token for subsequent calls."""
        data, error = self._request("POST", "/users/login", json_body={"login": login, "password": password})
        if error:
            return False, error
        self.token = data["access_token"]
        return True, None

    # ------------------------------------------------------------------
    # Projects and invitations
    # ------------------------------------------------------------------
    def list_projects(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/projects/")
        return (data or []), error

    def create_project(self, name: str, logins: List[str]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a project and invite ``logins``; the caller joins automatically."""
        return self._request("POST", "/projects/", json_body={"name": name, "logins": logins})

    def invite(self, project_id: int, logins: List[str]) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("POST", f"/projects/{project_id}/invitations", json_body={"logins": logins})
        return error is None, error

    def list_invitations(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/projects/invitations")
        return (data or []), error

    def accept_invitation(self, project_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("POST", f"/projects/{project_id}/accept")
        return error is None, error

    def decline_invitation(self, project_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("POST", f"/projects/{project_id}/decline")
        return error is None, error

    def leave_project(self, project_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("POST", f"/projects/{project_id}/leave")
        return error is None, error

    def project_members(self, project_id: int) -> Tuple[List[str], Optional[Error]]:
        data, error = self._request("GET", f"/projects/{project_id}/members")
        return (data or []), error

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def create_task(
        self, title: str, description: Optional[str] = None, project_id: Optional[int] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "POST",
            "/tasks/",
            json_body={"title": title, "description": description, "project_id": project_id},
        )

    def list_tasks(self, project_id: Optional[int] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        params = {"project_id": project_id} if project_id is not None else None
        data, error = self._request("GET", "/tasks/", params=params)
        return (data or []), error
