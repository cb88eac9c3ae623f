"""
Tests for the access gate, layout, dashboard and profile screens
"""
import inspect
from datetime import date, timedelta

import pytest
from fastapi.routing import APIRoute

from studyhub.config import settings
from studyhub.main import app
from studyhub.modules.auth import service as auth_service_module
from tests.conftest import PASSWORD

PROTECTED = ["/", "/tasks", "/groups", "/resources", "/profile"]


class TestAccessGate:

    @pytest.mark.parametrize("path", PROTECTED)
    def test_unauthenticated_redirects_to_login(self, client, path):
        response = client.get(path, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_invalid_cookie_redirects_to_login(self, client):
        client.cookies.set(settings.session_cookie_name, "forged")
        response = client.get("/tasks", follow_redirects=False)
        assert response.headers["location"] == "/login"

    def test_login_then_tasks_renders(self, client, student):
        assert client.get("/tasks", follow_redirects=False).headers["location"] == "/login"

        response = client.post("/login", json={"email": student["email"], "password": PASSWORD})
        assert response.status_code == 200
        assert response.json()["screen"] == "dashboard"

        page = client.get("/tasks")
        assert page.status_code == 200
        assert page.json()["screen"] == "tasks"
        assert page.json()["items"] == []

    def test_bad_login_shows_inline_error(self, client, student):
        response = client.post("/login", json={"email": student["email"], "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json() == {"screen": "login", "error": "Invalid email or password"}

    def test_login_page_redirects_when_signed_in(self, logged_in):
        response = logged_in.get("/login", follow_redirects=False)
        assert response.headers["location"] == "/"

    def test_public_pages_render(self, client):
        assert client.get("/login").json() == {"screen": "login", "error": None}
        assert client.get("/register").json() == {"screen": "register", "error": None}

    def test_logout_returns_to_login(self, logged_in):
        response = logged_in.post("/logout")
        assert response.json()["screen"] == "login"
        assert logged_in.get("/tasks", follow_redirects=False).headers["location"] == "/login"

    def test_expired_token_is_noticed_on_next_resolve(self, logged_in, fake_supabase):
        assert logged_in.get("/tasks").status_code == 200
        fake_supabase.auth.tokens.clear()
        auth_service_module._AUTH_USER_CACHE.clear()

        response = logged_in.get("/tasks", follow_redirects=False)
        assert response.headers["location"] == "/login"

    def test_logout_revokes_cookie_token(self, logged_in):
        token = logged_in.cookies.get(settings.session_cookie_name)
        logged_in.post("/logout")
        response = logged_in.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_register_page_signs_in(self, client, fake_supabase):
        response = client.post("/register", json={
            "name": "New Student",
            "email": "new@example.com",
            "password": PASSWORD,
            "confirm_password": PASSWORD,
        })
        assert response.status_code == 200
        assert response.json()["screen"] == "dashboard"
        assert fake_supabase.rows("users")[0]["email"] == "new@example.com"

    def test_register_page_duplicate_account(self, client, student):
        response = client.post("/register", json={
            "name": "Again",
            "email": student["email"],
            "password": PASSWORD,
        })
        assert response.status_code == 400
        assert response.json()["error"] == "User already exists"


class TestLayout:

    def test_navigation_marks_active_screen(self, logged_in, student):
        page = logged_in.get("/groups").json()
        assert [item["to"] for item in page["navigation"]] == ["/", "/tasks", "/groups", "/resources"]
        assert [item["name"] for item in page["navigation"] if item["active"]] == ["Groups"]
        assert page["user"]["id"] == student["user_id"]
        assert page["user"]["email"] == student["email"]


class TestDashboard:

    def test_dashboard_sections(self, logged_in, student, client):
        today = date.today()
        for offset in range(-3, 4):
            client.post("/api/v1/tasks", headers=student["headers"], json={
                "title": f"task {offset}",
                "dueDate": (today + timedelta(days=offset)).isoformat(),
            })
        for name in ["a", "b", "c", "d"]:
            client.post("/api/v1/groups", headers=student["headers"], json={"name": name})

        page = logged_in.get("/").json()
        items = page["items"]

        assert len(items["recentTasks"]) == settings.dashboard_recent_limit
        assert [t["title"] for t in items["upcomingDeadlines"]] == ["task 0", "task 1", "task 2"]
        assert len(items["studyGroups"]) == settings.dashboard_group_limit

    def test_dashboard_api(self, client, student):
        response = client.get("/api/v1/dashboard", headers=student["headers"])
        assert response.status_code == 200
        assert response.json() == {"recentTasks": [], "upcomingDeadlines": [], "studyGroups": []}


class TestProfile:

    def test_profile_shows_identity_and_profile(self, logged_in, student):
        page = logged_in.get("/profile").json()
        assert page["items"]["email"] == student["email"]
        assert page["items"]["profile"]["id"] == student["user_id"]
        assert page["items"]["profile"]["name"] == "Test Student"

    def test_profile_update(self, logged_in):
        page = logged_in.post("/profile", json={"name": "Renamed Student"}).json()
        assert page["items"]["profile"]["name"] == "Renamed Student"

    def test_profile_api(self, client, student):
        response = client.put("/api/v1/users/me", headers=student["headers"], json={"name": "API Name"})
        assert response.status_code == 200
        assert response.json()["name"] == "API Name"
        assert client.get("/api/v1/users/me", headers=student["headers"]).json()["name"] == "API Name"

    def test_missing_profile_row_still_renders(self, logged_in, fake_supabase, student):
        fake_supabase.tables["users"].clear()
        page = logged_in.get("/profile").json()
        assert page["items"] == {"email": student["email"], "profile": None}


def test_health(client):
    response = client.get("/health")
    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Frame-Options"] == "DENY"


def test_backend_handlers_run_in_threadpool():
    """Handlers calling the blocking Supabase client must be plain functions"""
    async_allowed = {"upload_resource", "resources_upload", "health", "ready"}
    for route in app.routes:
        if isinstance(route, APIRoute) and route.endpoint.__name__ not in async_allowed:
            assert not inspect.iscoroutinefunction(route.endpoint), route.path
