"""Commitment, payment and report endpoints, including tenant isolation."""

import pytest

pytestmark = pytest.mark.api


def test_create_and_read_commitment(client, register_company, create_commitment):
    _, headers = register_company("acme")

    created = create_commitment(headers, amount=250.5)
    assert created["commit_number"] == "2025-03-001"
    assert created["status"] == "active"
    assert created["amount"] == 250.5

    response = client.get(f"/commitments/{created['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["commit_number"] == "2025-03-001"

    assert create_commitment(headers)["commit_number"] == "2025-03-002"


def test_commit_number_is_never_taken_from_the_client(client, register_company, create_commitment):
    _, headers = register_company("acme")

    created = create_commitment(headers, commit_number="1999-01-999")

    assert created["commit_number"] == "2025-03-001"


@pytest.mark.parametrize(
    "overrides",
    [
        {"due_date": "not-a-date"},
        {"amount": 0},
        {"amount": -5},
        {"account": ""},
        {"status": "paused"},
    ],
)
def test_invalid_commitment_bodies_are_rejected(client, register_company, overrides):
    _, headers = register_company("acme")
    body = {"due_date": "2025-03-15", "account": "Rent", "amount": 100, **overrides}

    response = client.post("/commitments", json=body, headers=headers)

    assert response.status_code == 422
    assert client.get("/commitments", headers=headers).json() == []


def test_payment_flow_completes_commitment(client, register_company, create_commitment):
    _, headers = register_company("acme")
    commitment = create_commitment(headers, amount=100)

    partial = client.post(
        "/payments",
        json={"commitment_id": commitment["id"], "amount": 40, "method": "cash", "payment_date": "2025-03-16"},
        headers=headers,
    )
    assert partial.status_code == 201
    assert partial.json()["commitment_status"] == "active"
    assert partial.json()["remaining_amount"] == 60.0

    final = client.post(
        "/payments",
        json={"commitment_id": commitment["id"], "amount": 60, "method": "transfer", "payment_date": "2025-03-20"},
        headers=headers,
    )
    assert final.status_code == 201
    assert final.json()["commitment_status"] == "completed"

    found = client.get(f"/commitments/search/{commitment['commit_number']}", headers=headers).json()
    assert found["status"] == "completed"
    assert found["totalPaid"] == 100.0
    assert found["remainingAmount"] == 0.0
    assert [p["method"] for p in found["payments"]] == ["transfer", "cash"]

    payments = client.get("/payments", headers=headers).json()
    assert [p["commit_number"] for p in payments] == ["2025-03-001", "2025-03-001"]
    assert payments[0]["commitment_description"] == "Office rent"


def test_over_payment_is_rejected(client, register_company, create_commitment):
    _, headers = register_company("acme")
    commitment = create_commitment(headers, amount=100)

    response = client.post(
        "/payments",
        json={"commitment_id": commitment["id"], "amount": 100.01, "method": "cash", "payment_date": "2025-03-16"},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"
    assert client.get("/payments", headers=headers).json() == []


def test_payment_for_missing_commitment_is_404(client, register_company):
    _, headers = register_company("acme")

    response = client.post(
        "/payments",
        json={"commitment_id": 42, "amount": 1, "method": "cash", "payment_date": "2025-03-16"},
        headers=headers,
    )

    assert response.status_code == 404


def test_delete_commitment(client, register_company, create_commitment):
    _, headers = register_company("acme")
    paid = create_commitment(headers)
    unpaid = create_commitment(headers)
    client.post(
        "/payments",
        json={"commitment_id": paid["id"], "amount": 10, "method": "cash", "payment_date": "2025-03-16"},
        headers=headers,
    )

    assert client.delete(f"/commitments/{paid['id']}", headers=headers).status_code == 409
    response = client.delete(f"/commitments/{unpaid['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.delete(f"/commitments/{unpaid['id']}", headers=headers).status_code == 404


def test_search_unknown_number_is_404(client, register_company):
    _, headers = register_company("acme")

    response = client.get("/commitments/search/2025-01-001", headers=headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


def test_list_filters_and_sorts(client, register_company, create_commitment):
    _, headers = register_company("acme")
    create_commitment(headers, due_date="2025-06-01", description="b")
    create_commitment(headers, due_date="2025-01-01", description="c")
    create_commitment(headers, due_date="2025-03-01", description="a", status="cancelled")

    by_due = client.get("/commitments", params={"sortBy": "due_date", "order": "ASC"}, headers=headers).json()
    assert [c["due_date"] for c in by_due] == ["2025-01-01", "2025-03-01", "2025-06-01"]

    by_description = client.get("/commitments", params={"sortBy": "description", "order": "asc"}, headers=headers)
    assert [c["description"] for c in by_description.json()] == ["a", "b", "c"]

    fallback = client.get("/commitments", params={"sortBy": "nonsense", "order": "ASC"}, headers=headers).json()
    assert [c["description"] for c in fallback] == ["a", "c", "b"]

    cancelled = client.get("/commitments", params={"status": "cancelled"}, headers=headers).json()
    assert [c["description"] for c in cancelled] == ["a"]


def test_update_commitment_keeps_its_number(client, register_company, create_commitment):
    _, headers = register_company("acme")
    created = create_commitment(headers)

    response = client.put(
        f"/commitments/{created['id']}",
        json={"due_date": "2025-09-01", "account": "Lease", "status": "cancelled"},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["commit_number"] == created["commit_number"]
    assert body["account"] == "Lease"
    assert body["status"] == "cancelled"


def test_companies_cannot_see_each_other(client, register_company, create_commitment):
    first_id, first = register_company("first", name="First")
    second_id, second = register_company("second", name="Second")
    mine = create_commitment(first)

    assert client.get("/commitments", headers=second).json() == []
    assert client.get(f"/commitments/{mine['id']}", headers=second).status_code == 404
    assert client.get(f"/commitments/search/{mine['commit_number']}", headers=second).status_code == 404

    # A company_id sent by a company account is ignored
    listed = client.get("/commitments", params={"company_id": first_id}, headers=second).json()
    assert listed == []

    # Each company numbers independently
    assert create_commitment(second)["commit_number"] == "2025-03-001"
    assert client.get(f"/companies/{first_id}", headers=second).status_code == 403
    assert second_id != first_id


def test_system_admin_names_the_company(client, register_company, create_commitment, admin_headers):
    company_id, headers = register_company("acme")
    create_commitment(headers)

    assert client.get("/commitments", headers=admin_headers).json() == []

    listed = client.get("/commitments", params={"company_id": company_id}, headers=admin_headers).json()
    assert [c["commit_number"] for c in listed] == ["2025-03-001"]

    created = create_commitment(admin_headers, company_id=company_id)
    assert created["commit_number"] == "2025-03-002"

    response = client.post(
        "/commitments",
        json={"due_date": "2025-03-15", "account": "Rent", "amount": 10},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "company_id is required"

    assert client.get("/payments", headers=admin_headers).status_code == 400
    assert client.get("/commitments", params={"company_id": 999}, headers=admin_headers).status_code == 404


def test_user_without_company_is_refused(client, admin_headers, login):
    client.post("/users", json={"username": "loose", "password": "pw"}, headers=admin_headers)
    headers = login("loose", "pw")

    response = client.get("/commitments", headers=headers)

    assert response.status_code == 403


def test_report_stats(client, register_company, create_commitment):
    _, headers = register_company("acme")
    paid = create_commitment(headers, amount=100)
    create_commitment(headers, amount=50)
    create_commitment(headers, amount=25, status="cancelled")
    client.post(
        "/payments",
        json={"commitment_id": paid["id"], "amount": 100, "method": "cash", "payment_date": "2025-03-16"},
        headers=headers,
    )

    stats = client.get("/reports/stats", headers=headers).json()

    assert stats == {
        "total_count": 3,
        "active_count": 1,
        "completed_count": 1,
        "cancelled_count": 1,
        "total_amount": 175.0,
        "total_paid": 100.0,
    }


def test_ledger_requires_authentication(client):
    assert client.get("/commitments").status_code == 401
    assert client.post("/payments", json={}).status_code in (401, 422)
    assert client.get("/reports/stats").status_code == 401


def test_order_applies_to_the_default_sort(client, register_company, create_commitment):
    _, headers = register_company("acme")
    ids = [create_commitment(headers, description=d)["id"] for d in ("first", "second", "third")]

    oldest_first = client.get("/commitments", params={"order": "ASC"}, headers=headers).json()
    assert [c["id"] for c in oldest_first] == ids

    newest_first = client.get("/commitments", headers=headers).json()
    assert [c["id"] for c in newest_first] == ids[::-1]
