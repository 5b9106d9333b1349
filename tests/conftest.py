import os
import tempfile
import uuid

_DB_DIR = tempfile.mkdtemp(prefix="cashcompass-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DB_CONNECT_RETRIES"] = "0"

import pytest
from fastapi.testclient import TestClient

from app.main import app

PASSWORD = "Sup3r-Secret!"


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def password() -> str:
    return PASSWORD


@pytest.fixture(scope="session")
def register_user(client):
    """Register an account and return bearer headers for it."""

    def register(email: str = None, password: str = PASSWORD) -> dict:
        email = email or f"user-{uuid.uuid4().hex[:10]}@mail.com"
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": password, "name": "Test User"},
        )
        assert response.status_code == 201, response.text
        response = client.post(
            "/api/v1/auth/jwt/login",
            data={"username": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return register


@pytest.fixture
def auth_headers(register_user):
    return register_user()
