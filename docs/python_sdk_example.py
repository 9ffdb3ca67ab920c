"""
User Management API Python client example.

Uses the requests library. Mirrors the FastAPI routes under /users.
Run: pip install requests

Usage:
    from docs.python_sdk_example import UserManagementClient
    client = UserManagementClient("http://localhost:8000", token="secret")
    user = client.create_user("Ann", "ann@example.com")
"""

from __future__ import annotations

from typing import Any

import requests


class UserManagementClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: requests.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class UserManagementClient:
    """Client for the user management API. Any non-blank token is accepted by the server."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str = "secret",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers["Authorization"] = f"Bearer {token}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        resp = self._session.request(method, url, json=json, timeout=self.timeout)
        if not resp.ok:
            if resp.headers.get("content-type", "").startswith("application/json"):
                body = resp.json()
                detail = body.get("detail") or body.get("error") or resp.text
            else:
                detail = resp.text
            raise UserManagementClientError(
                f"API error: {detail}",
                status_code=resp.status_code,
                response=resp,
            )
        return resp

    def health(self) -> dict[str, str]:
        """Liveness probe."""
        r = self._request("GET", "/health")
        return r.json()

    def list_users(self) -> list[dict[str, Any]]:
        r = self._request("GET", "/users")
        return r.json()

    def get_user(self, user_id: int) -> dict[str, Any]:
        r = self._request("GET", f"/users/{user_id}")
        return r.json()

    def create_user(self, name: str, email: str) -> dict[str, Any]:
        """Create a user; returns the stored record with its id."""
        r = self._request("POST", "/users", json={"name": name, "email": email})
        return r.json()

    def update_user(self, user_id: int, name: str, email: str) -> dict[str, Any]:
        """Replace name and email. Unchanged values are rejected when the server enforces it."""
        r = self._request("PUT", f"/users/{user_id}", json={"name": name, "email": email})
        return r.json()

    def delete_user(self, user_id: int) -> None:
        self._request("DELETE", f"/users/{user_id}")


# -----------------------------------------------------------------------------
# Example usage
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    client = UserManagementClient("http://localhost:8000", token="secret")

    print("Health:", client.health())

    ann = client.create_user("Ann", "ann@example.com")
    print("Created:", ann)

    updated = client.update_user(ann["id"], "Ann Lee", "ann.lee@example.com")
    print("Updated:", updated)

    print("Users:", len(client.list_users()))

    client.delete_user(ann["id"])
    try:
        client.get_user(ann["id"])
    except UserManagementClientError as e:
        if e.status_code == 404:
            print("Deleted")
        else:
            raise
