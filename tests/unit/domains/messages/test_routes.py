"""
Tests for message routes in shiftsync/domains/messages/routes.py
"""

from typing import Callable, Dict

from fastapi.testclient import TestClient

from tests.fixtures.storage_fixtures import ADMIN_ID, EMPLOYEE_ID, MANAGER_ID

Headers = Callable[[int], Dict[str, str]]


class TestMessageRoutes:
    def test_send_and_read(self, client: TestClient, auth_headers: Headers):
        sent = client.post(
            "/api/messages",
            json={"receiverId": MANAGER_ID, "content": "Can I swap Friday?"},
            headers=auth_headers(EMPLOYEE_ID),
        )
        assert sent.status_code == 201
        message_id = sent.json()["id"]

        unread = client.get("/api/messages/unread", headers=auth_headers(MANAGER_ID))
        assert [m["id"] for m in unread.json()] == [message_id]

        marked = client.patch(
            f"/api/messages/{message_id}",
            json={"isRead": True},
            headers=auth_headers(MANAGER_ID),
        )
        assert marked.status_code == 200
        assert marked.json()["isRead"] is True

        unread = client.get("/api/messages/unread", headers=auth_headers(MANAGER_ID))
        assert unread.json() == []

    def test_broadcast_requires_mass_messaging(
        self, client: TestClient, auth_headers: Headers
    ):
        denied = client.post(
            "/api/messages",
            json={"content": "Hello everyone"},
            headers=auth_headers(MANAGER_ID),
        )
        allowed = client.post(
            "/api/messages",
            json={"content": "Hello everyone"},
            headers=auth_headers(ADMIN_ID),
        )

        assert denied.status_code == 403
        assert allowed.status_code == 201

    def test_requires_authentication(self, client: TestClient):
        assert client.get("/api/messages").status_code == 401
