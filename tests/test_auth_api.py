"""Integration tests for /auth endpoints, the bearer guard and error rendering."""

import unittest
from dataclasses import replace
from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from blog_api.api.deps import get_session_service
from blog_api.core.config import get_auth_config
from blog_api.core.security import TokenService
from blog_api.models import User
from tests.helpers import ADMIN_EMAIL, API, PASSWORD, ApiTestCase, bearer

COOKIE = "refreshToken"


class TestRegisterEndpoint(ApiTestCase):
    def test_register_returns_user_token_and_cookie(self) -> None:
        resp = self.client.post(
            f"{API}/auth/register",
            json={"email": "a@x.com", "password": PASSWORD, "role": "user"},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        self.assertEqual(body["user"]["role"], "user")
        self.assertEqual(body["user"]["email"], "a@x.com")
        self.assertIn("accessToken", body)
        self.assertNotIn("password", body["user"])
        self.assertIn(COOKIE, resp.cookies)
        set_cookie = resp.headers["set-cookie"].lower()
        self.assertIn("httponly", set_cookie)
        self.assertIn("samesite=strict", set_cookie)

    def test_cookie_not_secure_in_dev(self) -> None:
        resp = self.client.post(
            f"{API}/auth/register", json={"email": "a@x.com", "password": PASSWORD}
        )
        set_cookie = resp.headers["set-cookie"].lower()
        self.assertIn("max-age=604800", set_cookie)
        self.assertNotIn("secure", set_cookie)

    def test_cookie_secure_in_prod(self) -> None:
        prod = replace(get_auth_config(), secure_cookies=True)
        self.app.dependency_overrides[get_auth_config] = lambda: prod
        resp = self.client.post(
            f"{API}/auth/register", json={"email": "a@x.com", "password": PASSWORD}
        )
        self.assertEqual(resp.status_code, 201)
        set_cookie = resp.headers["set-cookie"].lower()
        self.assertIn("secure", set_cookie)
        self.assertIn("httponly", set_cookie)
        self.assertIn("samesite=strict", set_cookie)
        self.assertIn("max-age=604800", set_cookie)

    def test_duplicate_email(self) -> None:
        self.register("a@x.com")
        resp = self.client.post(
            f"{API}/auth/register", json={"email": "a@x.com", "password": PASSWORD}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"code": "ValidationError", "message": "User already exists"})

    def test_admin_outside_allow_list_forbidden(self) -> None:
        resp = self.client.post(
            f"{API}/auth/register",
            json={"email": "mallory@x.com", "password": PASSWORD, "role": "admin"},
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["code"], "AuthorizationError")
        self.assertEqual(self.db.query(User).count(), 0)

    def test_allow_listed_admin(self) -> None:
        body = self.register(ADMIN_EMAIL, role="admin")
        self.assertEqual(body["user"]["role"], "admin")

    def test_weak_password_rejected(self) -> None:
        resp = self.client.post(
            f"{API}/auth/register", json={"email": "a@x.com", "password": "abcdefgh"}
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["code"], "ValidationError")
        self.assertIn("password", body["errors"])

    def test_invalid_email_and_unknown_role(self) -> None:
        resp = self.client.post(
            f"{API}/auth/register",
            json={"email": "not-an-email", "password": PASSWORD, "role": "owner"},
        )
        self.assertEqual(resp.status_code, 400)
        errors = resp.json()["errors"]
        self.assertIn("email", errors)
        self.assertIn("role", errors)


class TestLoginEndpoint(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register("bob@x.com")

    def test_login_success(self) -> None:
        client = self.new_client()
        resp = client.post(f"{API}/auth/login", json={"email": "bob@x.com", "password": PASSWORD})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertIn("accessToken", resp.json())
        self.assertIn(COOKIE, resp.cookies)

    def test_wrong_password(self) -> None:
        resp = self.client.post(
            f"{API}/auth/login", json={"email": "bob@x.com", "password": "Wrong1234!"}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "User email or password is incorrect")

    def test_unknown_email_same_message(self) -> None:
        resp = self.client.post(
            f"{API}/auth/login", json={"email": "nobody@x.com", "password": PASSWORD}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "User email or password is incorrect")


class TestRefreshEndpoint(ApiTestCase):
    def test_no_cookie(self) -> None:
        resp = self.new_client().post(f"{API}/auth/refresh-token")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json(), {"code": "ValidationError", "message": "Refresh token required"}
        )

    def test_refresh_with_cookie(self) -> None:
        self.register("carol@x.com")
        resp = self.client.post(f"{API}/auth/refresh-token")
        self.assertEqual(resp.status_code, 200, resp.text)
        access = resp.json()["accessToken"]
        me = self.client.get(f"{API}/users/current", headers=bearer(access))
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["user"]["email"], "carol@x.com")

    def test_unrecorded_token(self) -> None:
        self.register("carol@x.com")
        user_id = self.db.query(User).filter(User.email == "carol@x.com").one().id
        token = TokenService(get_auth_config()).issue_refresh_token(user_id)
        resp = self.new_client().post(
            f"{API}/auth/refresh-token", headers={"Cookie": f"{COOKIE}={token}"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Invalid refresh token")


class TestLogoutEndpoint(ApiTestCase):
    def test_logout_revokes_token_and_clears_cookie(self) -> None:
        client = self.new_client()
        body = self.register("dan@x.com", client=client)
        token = client.cookies[COOKIE]
        resp = client.post(f"{API}/auth/logout", headers=bearer(body["accessToken"]))
        self.assertEqual(resp.status_code, 204)
        self.assertIn(f"{COOKIE}=", resp.headers["set-cookie"])
        self.assertNotIn(COOKIE, client.cookies)

        again = self.new_client().post(
            f"{API}/auth/refresh-token", headers={"Cookie": f"{COOKIE}={token}"}
        )
        self.assertEqual(again.status_code, 401)

    def test_other_devices_keep_their_session(self) -> None:
        laptop, phone = self.new_client(), self.new_client()
        body = self.register("eve@x.com", client=laptop)
        phone.post(f"{API}/auth/login", json={"email": "eve@x.com", "password": PASSWORD})
        laptop.post(f"{API}/auth/logout", headers=bearer(body["accessToken"]))
        self.assertEqual(phone.post(f"{API}/auth/refresh-token").status_code, 200)

    def test_foreign_cookie_does_not_end_other_session(self) -> None:
        victim, attacker = self.new_client(), self.new_client()
        self.register("victim@x.com", client=victim)
        victim_token = victim.cookies[COOKIE]
        attacker_body = self.register("attacker@x.com", client=attacker)
        resp = self.new_client().post(
            f"{API}/auth/logout",
            headers={**bearer(attacker_body["accessToken"]), "Cookie": f"{COOKIE}={victim_token}"},
        )
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(victim.post(f"{API}/auth/refresh-token").status_code, 200)

    def test_logout_requires_access_token(self) -> None:
        resp = self.client.post(f"{API}/auth/logout")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Access denied. No token provided.")


class TestAccessGuard(ApiTestCase):
    def test_expired_access_token(self) -> None:
        self.register("frank@x.com")
        user_id = self.db.query(User).filter(User.email == "frank@x.com").one().id
        past = TokenService(get_auth_config(), clock=lambda: datetime.now(UTC) - timedelta(days=2))
        resp = self.client.get(
            f"{API}/users/current", headers=bearer(past.issue_access_token(user_id))
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(
            resp.json()["message"], "Access token expired, request a new one with refresh token"
        )
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_invalid_access_token(self) -> None:
        resp = self.client.get(f"{API}/users/current", headers=bearer("a.b.c"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Access token invalid")

    def test_refresh_token_is_not_an_access_token(self) -> None:
        self.register("gina@x.com")
        resp = self.client.get(
            f"{API}/users/current", headers=bearer(self.client.cookies[COOKIE])
        )
        self.assertEqual(resp.status_code, 401)

    def test_token_for_deleted_user(self) -> None:
        body = self.register("hank@x.com")
        headers = bearer(body["accessToken"])
        self.assertEqual(self.client.delete(f"{API}/users/current", headers=headers).status_code, 204)
        resp = self.client.get(f"{API}/users/current", headers=headers)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "User not found")


class TestErrorRendering(ApiTestCase):
    def test_unhandled_error_is_opaque(self) -> None:
        def broken_service() -> None:
            raise RuntimeError("database password is hunter2")

        self.app.dependency_overrides[get_session_service] = broken_service
        client = TestClient(self.app, raise_server_exceptions=False)
        self.addCleanup(client.close)
        with self.assertLogs("blog_api.api.errors", level="ERROR"):
            resp = client.post(
                f"{API}/auth/login", json={"email": "bob@x.com", "password": PASSWORD}
            )
        self.assertEqual(resp.status_code, 500)
        body = resp.json()
        self.assertEqual(body["code"], "ServerError")
        self.assertEqual(body["message"], "Internal Server Error")
        self.assertIn("id", body["error"])
        self.assertNotIn("hunter2", resp.text)

    def test_unknown_route(self) -> None:
        resp = self.client.get(f"{API}/does-not-exist")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "NotFound")

    def test_welcome_and_health(self) -> None:
        self.assertEqual(self.client.get(f"{API}/").json()["version"], "1.0.0")
        self.assertEqual(self.client.get("/").status_code, 200)
        health = self.client.get(f"{API}/health/").json()
        self.assertEqual(health["status"], "ok")
        self.assertEqual(health["database"], "connected")
        self.assertIn("checkedAt", health)


if __name__ == "__main__":
    unittest.main()
