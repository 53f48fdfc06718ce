"""
Pytest configuration and shared fixtures.

Every test gets its own data directory under tmp_path, so master.db and
the tenant_<id>.db files never leak between tests.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


# Test credentials - these match the seeded bootstrap admin
TEST_ADMIN_USERNAME = "admin"
TEST_ADMIN_PASSWORD = "admin-test-pw"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: uses SQLite stores in a temporary directory")
    config.addinivalue_line("markers", "api: drives the app through TestClient")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATA_DIR=str(tmp_path / "data"),
        SECRET_KEY="test-secret-key-that-is-long-enough-for-hs256",
        DEFAULT_ADMIN_USERNAME=TEST_ADMIN_USERNAME,
        DEFAULT_ADMIN_PASSWORD=TEST_ADMIN_PASSWORD,
        LOG_LEVEL="WARNING",
        _env_file=None,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def _login(client, username, password):
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return _login(client, TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)


@pytest.fixture
def login(client):
    return lambda username, password: _login(client, username, password)


@pytest.fixture
def register_company(client):
    """Register a company with its first account; the helper returns (company_id, auth headers)."""

    def _register(username, name="Acme", password="secret-pw"):
        response = client.post(
            "/auth/register",
            json={
                "name_en": name,
                "name_ar": name,
                "username": username,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["company_id"], _login(client, username, password)

    return _register


@pytest.fixture
def create_commitment(client):
    def _create(headers, **overrides):
        body = {
            "due_date": "2025-03-15",
            "account": "Rent",
            "description": "Office rent",
            "amount": 100,
        }
        body.update(overrides)
        response = client.post("/commitments", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
