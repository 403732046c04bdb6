"""Shared test helpers: fresh schema per test and small API shortcuts."""

import unittest
from typing import Any

from fastapi.testclient import TestClient

from blog_api.core.database import SessionLocal, engine
from blog_api.models import Base

ADMIN_EMAIL = "admin@example.com"
PASSWORD = "Abcd1234!"
API = "/api/v1"


class DatabaseTestCase(unittest.TestCase):
    """Creates all tables before each test and drops them afterwards."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase with a TestClient bound to the application."""

    def setUp(self) -> None:
        super().setUp()
        from blog_api.main import app

        self.app = app
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.app.dependency_overrides.clear()
        self.client.close()
        super().tearDown()

    def register(self, email: str, role: str = "user", client: TestClient | None = None) -> dict[str, Any]:
        """Register via the API and return the JSON body; fails the test on non-201."""
        client = client or self.client
        resp = client.post(
            f"{API}/auth/register",
            json={"email": email, "password": PASSWORD, "role": role},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def new_client(self) -> TestClient:
        """A second client with its own cookie jar (another device or user)."""
        client = TestClient(self.app)
        self.addCleanup(client.close)
        return client


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
