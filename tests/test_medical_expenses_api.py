import pytest


def _claim(client, headers, amount, receipt_date="2025-04-01"):
    return client.post(
        "/api/medical-expenses",
        headers=headers,
        json={"amount": amount, "receipt_name": "Bangkok Hospital", "receipt_date": receipt_date}
    )


def test_expense_within_pro_rated_budget(client, employee, default_plan, auth_headers):
    headers = auth_headers(employee)
    response = _claim(client, headers, 5000)
    assert response.status_code == 201

    summary = client.get("/api/annual-records/summary/2025", headers=headers).json()
    assert summary["remaining_medical_expense_baht"] == pytest.approx(20000 * 100 / 365 - 5000)


def test_expense_over_pro_rated_budget_is_rejected(client, employee, default_plan, auth_headers):
    headers = auth_headers(employee)
    _claim(client, headers, 5000)

    response = _claim(client, headers, 500)
    assert response.status_code == 422
    error = response.json()["errors"][0]
    assert error["code"] == "QUOTA_EXCEEDED"
    assert error["msg"] == "This expense would exceed your remaining pro-rated budget by ฿21"


def test_past_year_receipt_uses_full_year_budget(client, employee, auth_headers, db_session):
    from hr_portal.models.quota_plan import QuotaPlan
    db_session.add(QuotaPlan(plan_name="Default", year=2024, quota_vacation_day=10, quota_medical_expense_baht=20000))
    db_session.commit()

    assert _claim(client, auth_headers(employee), 19000, receipt_date="2024-11-20").status_code == 201


def test_update_credits_previous_amount(client, employee, default_plan, auth_headers):
    headers = auth_headers(employee)
    expense = _claim(client, headers, 5000).json()

    response = client.put(f"/api/medical-expenses/{expense['id']}", headers=headers, json={"amount": 5400})
    assert response.status_code == 200
    assert response.json()["amount"] == 5400

    assert client.put(f"/api/medical-expenses/{expense['id']}", headers=headers, json={"amount": 6000}).status_code == 422


def test_no_plan_means_no_budget(client, employee, auth_headers):
    response = _claim(client, auth_headers(employee), 1)
    assert response.status_code == 422
