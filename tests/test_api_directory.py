"""Master directory endpoints: companies, users and currencies."""

import pytest

pytestmark = pytest.mark.api


def test_seeded_currencies_are_readable_by_any_account(client, register_company):
    _, headers = register_company("acme")

    response = client.get("/currencies", headers=headers)

    assert response.status_code == 200
    codes = [c["code"] for c in response.json()]
    assert codes == sorted(codes)
    assert {"SAR", "USD", "EUR", "AED", "KWD", "BHD", "OMR", "JOD", "EGP"} == set(codes)


def test_only_system_admin_changes_the_directory(client, register_company):
    _, headers = register_company("acme")

    assert client.get("/companies", headers=headers).status_code == 403
    assert client.get("/users", headers=headers).status_code == 403
    response = client.post(
        "/currencies",
        json={"code": "GBP", "name_ar": "جنيه", "name_en": "Pound", "symbol": "£"},
        headers=headers,
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "authorization_error"


def test_currency_lifecycle(client, admin_headers):
    body = {"code": " gbp ", "name_ar": "جنيه إسترليني", "name_en": "Pound Sterling", "symbol": "£"}

    created = client.post("/currencies", json=body, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["code"] == "GBP"

    assert client.post("/currencies", json=body, headers=admin_headers).status_code == 409

    updated = client.put("/currencies/GBP", json={"symbol": "GBP£"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["symbol"] == "GBP£"

    assert client.delete("/currencies/GBP", headers=admin_headers).json() == {"success": True}
    assert client.delete("/currencies/GBP", headers=admin_headers).status_code == 404


def test_currency_in_use_cannot_be_deleted(client, register_company, admin_headers):
    register_company("acme")

    response = client.delete("/currencies/SAR", headers=admin_headers)

    assert response.status_code == 409


def test_company_lifecycle(client, admin_headers):
    created = client.post(
        "/companies",
        json={"name_en": "Globex", "name_ar": "جلوبكس", "currency_code": "usd", "city": "Riyadh"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    company = created.json()
    assert company["currency_code"] == "USD"
    assert company["currency_symbol"] == "$"
    assert company["city"] == "Riyadh"

    updated = client.put(
        f"/companies/{company['id']}",
        json={"currency_code": "EUR", "phone": "+966"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["currency_symbol"] == "€"
    assert updated.json()["name_en"] == "Globex"

    bad_currency = client.put(f"/companies/{company['id']}", json={"currency_code": "ZZZ"}, headers=admin_headers)
    assert bad_currency.status_code == 400

    assert client.delete(f"/companies/{company['id']}", headers=admin_headers).json() == {"success": True}
    assert client.get(f"/companies/{company['id']}", headers=admin_headers).status_code == 404


def test_company_with_users_cannot_be_deleted(client, register_company, admin_headers):
    company_id, _ = register_company("acme")

    response = client.delete(f"/companies/{company_id}", headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["error"]["details"]["user_count"] == 1


def test_user_management(client, register_company, admin_headers, login):
    company_id, _ = register_company("acme", name="Acme")

    created = client.post(
        "/users",
        json={"username": "clerk", "password": "pw1", "company_id": company_id},
        headers=admin_headers,
    )
    assert created.status_code == 201
    clerk = created.json()
    assert clerk["role"] == "user"
    assert clerk["company_id"] == company_id

    duplicate = client.post("/users", json={"username": "clerk", "password": "x"}, headers=admin_headers)
    assert duplicate.status_code == 409

    listed = {u["username"]: u for u in client.get("/users", headers=admin_headers).json()}
    assert listed["clerk"]["company_name"] == "Acme"
    assert listed["admin"]["company_name"] is None

    # Blank password keeps the old one; a new one replaces it
    client.put(f"/users/{clerk['id']}", json={"password": ""}, headers=admin_headers)
    login("clerk", "pw1")
    client.put(f"/users/{clerk['id']}", json={"password": "pw2"}, headers=admin_headers)
    login("clerk", "pw2")

    assert client.delete(f"/users/{clerk['id']}", headers=admin_headers).json() == {"success": True}
    assert client.delete(f"/users/{clerk['id']}", headers=admin_headers).status_code == 404


def test_user_for_unknown_company_is_rejected(client, admin_headers):
    response = client.post(
        "/users",
        json={"username": "ghost", "password": "pw", "company_id": 77},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_admin_cannot_delete_itself_or_the_main_admin(client, admin_headers, login):
    me = client.get("/auth/me", headers=admin_headers).json()
    assert client.delete(f"/users/{me['user_id']}", headers=admin_headers).status_code == 400

    client.post("/users", json={"username": "root2", "password": "pw", "role": "admin"}, headers=admin_headers)
    other_admin = login("root2", "pw")

    response = client.delete(f"/users/{me['user_id']}", headers=other_admin)

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "The main administrator account cannot be deleted"
