"""End-to-end tests for the auth routes: cookies, guard and session lifecycle."""

import unittest
import uuid
from collections.abc import Generator
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.exc import DataError
from sqlalchemy.orm import Session, sessionmaker

from blog_api.core.config import get_settings
from blog_api.core.database import build_engine, get_db
from blog_api.services.tokens import issue_token
from tests.support import API, make_app, make_session_factory, register


class AuthApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.app = make_app(make_session_factory())
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()


class TestRegisterAndLogin(AuthApiTestCase):
    def test_register_sets_both_cookies(self) -> None:
        response = self.client.post(
            f"{API}/auth/register",
            json={
                "name": "alice",
                "email": "a@x.com",
                "password": "secret1",
                "password_confirmation": "secret1",
            },
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["name"], "alice")
        self.assertNotIn("password_hash", body["data"])
        self.assertNotIn("refresh_token", body["data"])

        set_cookies = response.headers.get_list("set-cookie")
        self.assertEqual(len(set_cookies), 2)
        access = next(c for c in set_cookies if c.startswith("accessToken="))
        refresh = next(c for c in set_cookies if c.startswith("refreshToken="))
        for cookie in (access, refresh):
            self.assertIn("HttpOnly", cookie)
            self.assertIn("SameSite=lax", cookie)
            self.assertNotIn("Secure", cookie)
        self.assertIn("Path=/;", access + ";")
        self.assertIn("Path=/api/v1/auth/refresh-token", refresh)
        self.assertIn("Max-Age=900", access)
        self.assertIn("Max-Age=604800", refresh)

    def test_register_missing_fields(self) -> None:
        response = self.client.post(f"{API}/auth/register", json={"name": "alice"})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["message"], "All fields are required")
        self.assertIn("email is required", body["errors"])

    def test_duplicate_registration(self) -> None:
        register(self.client, "alice", "a@x.com")
        response = self.client.post(
            f"{API}/auth/register",
            json={
                "name": "alice2",
                "email": "a@x.com",
                "password": "secret1",
                "password_confirmation": "secret1",
            },
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "User already exists")

    def test_login_wrong_password(self) -> None:
        register(self.client, "alice", "a@x.com")
        response = self.client.post(
            f"{API}/auth/login", json={"email": "a@x.com", "password": "wrong-pw"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid email or password")

    def test_login_sets_cookies(self) -> None:
        register(self.client, "alice", "a@x.com")
        other = TestClient(self.app)
        response = other.post(
            f"{API}/auth/login", json={"email": "a@x.com", "password": "secret1"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.headers.get_list("set-cookie")), 2)
        self.assertEqual(other.get(f"{API}/auth/me").status_code, 200)
        other.close()


class TestGuard(AuthApiTestCase):
    def test_me_without_cookie(self) -> None:
        response = self.client.get(f"{API}/auth/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Access denied. No token provided.")

    def test_me_with_garbage_cookie(self) -> None:
        self.client.cookies.set("accessToken", "garbage")
        response = self.client.get(f"{API}/auth/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid token.")

    def test_me_with_expired_cookie(self) -> None:
        user = register(self.client, "alice", "a@x.com")
        expired = issue_token(
            user["id"],
            get_settings().JWT_ACCESS_TOKEN_SECRET.get_secret_value(),
            timedelta(seconds=-10),
        )
        self.client.cookies.clear()
        self.client.cookies.set("accessToken", expired)
        response = self.client.get(f"{API}/auth/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Token has expired.")

    def test_me_returns_profile(self) -> None:
        user = register(self.client, "alice", "a@x.com")
        response = self.client.get(f"{API}/auth/me")
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["id"], user["id"])
        self.assertEqual(data["email"], "a@x.com")
        self.assertNotIn("password_hash", data)


class TestRefreshAndLogout(AuthApiTestCase):
    def test_refresh_without_cookie(self) -> None:
        response = self.client.get(f"{API}/auth/refresh-token")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Unauthorized")

    def test_refresh_issues_new_access_cookie(self) -> None:
        register(self.client, "alice", "a@x.com")
        response = self.client.get(f"{API}/auth/refresh-token")
        self.assertEqual(response.status_code, 200)
        set_cookies = response.headers.get_list("set-cookie")
        self.assertEqual(len(set_cookies), 1)
        self.assertTrue(set_cookies[0].startswith("accessToken="))

    def test_login_elsewhere_ends_first_session(self) -> None:
        register(self.client, "alice", "a@x.com")
        other = TestClient(self.app)
        other.post(f"{API}/auth/login", json={"email": "a@x.com", "password": "secret1"})

        self.assertEqual(self.client.get(f"{API}/auth/refresh-token").status_code, 401)
        self.assertEqual(other.get(f"{API}/auth/refresh-token").status_code, 200)
        other.close()

    def test_logout_clears_cookies_and_second_logout_fails(self) -> None:
        register(self.client, "alice", "a@x.com")
        access_cookie = self.client.cookies.get("accessToken")

        response = self.client.delete(f"{API}/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "User logged out successfully")
        self.assertEqual(self.client.get(f"{API}/auth/refresh-token").status_code, 401)

        # The access token itself is still within its lifetime.
        self.client.cookies.set("accessToken", access_cookie)
        again = self.client.delete(f"{API}/auth/logout")
        self.assertEqual(again.status_code, 401)
        self.assertEqual(again.json()["message"], "Unauthorized, no refresh token found")

    def test_logout_requires_access_token(self) -> None:
        response = self.client.delete(f"{API}/auth/logout")
        self.assertEqual(response.status_code, 401)


class TestErrorBoundary(unittest.TestCase):
    def test_unexpected_error_is_generic_500(self) -> None:
        app = make_app(make_session_factory())

        @app.get("/boom")
        def boom() -> None:
            raise RuntimeError("database password is hunter2")

        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/boom")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(),
            {"success": False, "message": "Internal server error", "errors": None},
        )

    def test_unknown_route_uses_error_envelope(self) -> None:
        client = TestClient(make_app(make_session_factory()))
        response = client.get(f"{API}/nope")
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])

    def test_unreachable_database_is_500(self) -> None:
        app = make_app(make_session_factory())
        broken = sessionmaker(bind=build_engine("sqlite:////nonexistent-dir/x/db.sqlite"))

        def broken_get_db() -> Generator[Session, None, None]:
            db = broken()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = broken_get_db
        response = TestClient(app).get(f"{API}/users/{uuid.uuid4()}")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["message"], "Internal server error")

    def test_rejected_value_is_400(self) -> None:
        app = make_app(make_session_factory())

        @app.get("/bad-value")
        def bad_value() -> None:
            raise DataError("SELECT 1", {}, ValueError("invalid input syntax"))

        response = TestClient(app).get("/bad-value")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid identifier or value")
