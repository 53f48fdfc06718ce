"""Authentication, registration and health endpoints."""

import pytest

pytestmark = pytest.mark.api


def test_health_reports_master_and_open_stores(client, register_company):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"api_ok": True, "db_ok": True, "open_tenant_stores": []}

    _, headers = register_company("acme")
    client.get("/commitments", headers=headers)

    assert client.get("/health").json()["open_tenant_stores"] == [1]


def test_login_returns_token_and_user(client, settings):
    response = client.post(
        "/auth/login",
        json={"username": settings.DEFAULT_ADMIN_USERNAME, "password": settings.DEFAULT_ADMIN_PASSWORD},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["username"] == settings.DEFAULT_ADMIN_USERNAME
    assert body["user"]["role"] == "admin"
    assert body["user"]["company_id"] is None
    assert "password" not in body["user"]


def test_login_with_wrong_password_is_401(client, settings):
    response = client.post(
        "/auth/login",
        json={"username": settings.DEFAULT_ADMIN_USERNAME, "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "authentication_error"


def test_me_requires_a_valid_token(client, admin_headers):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    response = client.get("/auth/me", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "admin"


def test_register_creates_company_and_bound_admin(client, register_company):
    company_id, headers = register_company("acme", name="Acme Trading")

    me = client.get("/auth/me", headers=headers).json()
    assert me["company_id"] == company_id
    assert me["role"] == "admin"

    company = client.get(f"/companies/{company_id}", headers=headers).json()
    assert company["name_en"] == "Acme Trading"
    assert company["currency_code"] == "SAR"
    assert company["currency_symbol"] == "ر.س"


def test_register_with_taken_username_creates_no_company(client, register_company, admin_headers):
    register_company("acme")

    response = client.post(
        "/auth/register",
        json={"name_en": "Second", "name_ar": "Second", "username": "acme", "password": "pw"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "conflict"
    companies = client.get("/companies", headers=admin_headers).json()
    assert [c["name_en"] for c in companies] == ["Acme"]


def test_register_with_unknown_currency_is_rejected(client, admin_headers):
    response = client.post(
        "/auth/register",
        json={"name_en": "X", "name_ar": "X", "username": "x", "password": "pw", "currency_code": "xyz"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"currency_code": "XYZ"}
    assert client.get("/companies", headers=admin_headers).json() == []


def test_disabled_account_cannot_log_in_or_use_its_token(client, register_company, admin_headers):
    _, headers = register_company("acme")
    user_id = client.get("/auth/me", headers=headers).json()["user_id"]

    response = client.put(f"/users/{user_id}", json={"is_active": False}, headers=admin_headers)
    assert response.status_code == 200

    assert client.get("/auth/me", headers=headers).status_code == 403
    response = client.post("/auth/login", json={"username": "acme", "password": "secret-pw"})
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "authorization_error"


def test_request_shape_errors_use_the_error_envelope(client, admin_headers):
    response = client.post("/auth/login", json={"username": "admin"})

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "validation_error"
    assert body["error"]["details"]["errors"]
