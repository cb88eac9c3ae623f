"""
Test configuration and fixtures
"""
import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "test")

from studyhub.main import app
from studyhub.database.supabase_client import get_supabase, get_service_supabase
from studyhub.modules.auth import service as auth_service_module
from tests.fakes import FakeSupabase

PASSWORD = "secret123"


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(fake_supabase):
    """Test client with the Supabase client replaced by the in-memory fake"""
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    auth_service_module._AUTH_USER_CACHE.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    auth_service_module._AUTH_USER_CACHE.clear()


def register(client, email, name="Test Student", password=PASSWORD):
    response = client.post("/api/v1/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
        "confirm_password": password,
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def student(client):
    """Registered user: dict with user_id, email, access_token and auth headers"""
    data = register(client, "student@example.com")
    data["headers"] = {"Authorization": f"Bearer {data['access_token']}"}
    return data


@pytest.fixture
def classmate(client):
    data = register(client, "classmate@example.com", name="Class Mate")
    data["headers"] = {"Authorization": f"Bearer {data['access_token']}"}
    return data


@pytest.fixture
def logged_in(client, student):
    """Client holding the session cookie of `student`"""
    response = client.post("/login", json={"email": student["email"], "password": PASSWORD})
    assert response.status_code == 200, response.text
    return client
