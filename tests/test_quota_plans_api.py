import pytest
from fastapi import status

PLAN = {"plan_name": "Senior", "year": 2025, "quota_vacation_day": 15, "quota_medical_expense_baht": 30000}


def test_admin_creates_plan(client, admin_user, auth_headers):
    response = client.post("/api/quota-plans", headers=auth_headers(admin_user), json=PLAN)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["plan_name"] == "Senior"
    assert data["created_by_user_id"] == admin_user.id


def test_employee_cannot_create_plan(client, employee, auth_headers):
    response = client.post("/api/quota-plans", headers=auth_headers(employee), json=PLAN)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["errors"][0]["code"] == "PERMISSION_DENIED"


def test_duplicate_plan_name_per_year(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    client.post("/api/quota-plans", headers=headers, json=PLAN)
    response = client.post("/api/quota-plans", headers=headers, json=PLAN)
    assert response.status_code == status.HTTP_409_CONFLICT


def test_assign_plan_and_edit_propagates(client, admin_user, employee, auth_headers):
    headers = auth_headers(admin_user)
    plan_id = client.post("/api/quota-plans", headers=headers, json=PLAN).json()["id"]

    response = client.post(f"/api/quota-plans/{plan_id}/assign", headers=headers)
    assert response.status_code == 200
    assert response.json()["records"] == 2

    client.put(f"/api/quota-plans/{plan_id}", headers=headers, json={"quota_vacation_day": 20})
    record = client.get("/api/annual-records/me/2025", headers=auth_headers(employee)).json()
    assert record["quota_plan_id"] == plan_id
    assert record["quota_vacation_day"] == 20


def test_list_plans_by_year(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    client.post("/api/quota-plans", headers=headers, json=PLAN)
    client.post("/api/quota-plans", headers=headers, json={**PLAN, "year": 2026})

    plans = client.get("/api/quota-plans", headers=headers, params={"year": 2026}).json()
    assert [p["year"] for p in plans] == [2026]


def test_rollover_endpoint(client, admin_user, employee, default_plan, auth_headers):
    response = client.post("/api/annual-records/rollover/2025", headers=auth_headers(admin_user))
    assert response.status_code == 200
    assert response.json() == {"from_year": 2025, "to_year": 2026, "created": 2}


def test_employee_sees_only_own_records(client, employee, admin_user, default_plan, auth_headers):
    client.get("/api/annual-records/me/2025", headers=auth_headers(admin_user))
    client.get("/api/annual-records/me/2025", headers=auth_headers(employee))

    own = client.get("/api/annual-records", headers=auth_headers(employee)).json()
    assert {r["user_id"] for r in own} == {employee.id}
    forbidden = client.get("/api/annual-records", headers=auth_headers(employee), params={"user_id": admin_user.id})
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN


def test_null_plan_fields_are_rejected(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    plan_id = client.post("/api/quota-plans", headers=headers, json=PLAN).json()["id"]

    response = client.put(f"/api/quota-plans/{plan_id}", headers=headers, json={"plan_name": None})
    assert response.status_code == 422
    assert response.json()["success"] is False

    assert client.get(f"/api/quota-plans/{plan_id}", headers=headers).json()["plan_name"] == "Senior"


def test_year_change_refused_while_records_are_linked(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    plan_id = client.post("/api/quota-plans", headers=headers, json=PLAN).json()["id"]
    client.post(f"/api/quota-plans/{plan_id}/assign", headers=headers)

    response = client.put(f"/api/quota-plans/{plan_id}", headers=headers, json={"year": 2026})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert client.get(f"/api/quota-plans/{plan_id}", headers=headers).json()["year"] == 2025


def test_year_change_allowed_for_unused_plan(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    plan_id = client.post("/api/quota-plans", headers=headers, json=PLAN).json()["id"]

    response = client.put(f"/api/quota-plans/{plan_id}", headers=headers, json={"year": 2026})
    assert response.status_code == 200
    assert response.json()["year"] == 2026


def test_null_usage_on_record_update_is_rejected(client, admin_user, employee, default_plan, auth_headers):
    client.get("/api/annual-records/me/2025", headers=auth_headers(employee))
    url = f"/api/annual-records/{employee.id}/2025"

    response = client.put(url, headers=auth_headers(admin_user), json={"used_vacation_day": None})
    assert response.status_code == 422

    cleared = client.put(url, headers=auth_headers(admin_user), json={"quota_plan_id": None, "rollover_vacation_day": 3})
    assert cleared.status_code == 200
    assert cleared.json()["quota_plan_id"] is None
    assert cleared.json()["rollover_vacation_day"] == 3
