import pytest
from hr_portal.models.annual_record import AnnualRecord

# With TODAY = 2025-04-10 (day 100) the 10-day Default plan has accrued ~2.74 days


def _create_leave(client, headers, day, leave_type="vacation", worked_day=1.0):
    return client.post(
        "/api/leave-logs",
        headers=headers,
        json={"type": leave_type, "date": day, "worked_day": worked_day, "note": "family trip"}
    )


def test_create_vacation_within_quota(client, employee, default_plan, auth_headers, db_session):
    """Test creating a vacation leave log within the pro-rated quota."""
    response = _create_leave(client, auth_headers(employee), "2025-04-21")
    assert response.status_code == 201
    assert response.json()["type"] == "vacation"

    record = db_session.query(AnnualRecord).filter_by(user_id=employee.id, year=2025).one()
    assert record.used_vacation_day == pytest.approx(1.0)
    assert record.quota_plan_id == default_plan.id


def test_vacation_beyond_pro_rated_quota_is_rejected(client, employee, default_plan, auth_headers):
    headers = auth_headers(employee)
    assert _create_leave(client, headers, "2025-04-21").status_code == 201
    assert _create_leave(client, headers, "2025-04-22").status_code == 201

    response = _create_leave(client, headers, "2025-04-23")
    assert response.status_code == 422
    error = response.json()["errors"][0]
    assert error["code"] == "QUOTA_EXCEEDED"
    assert error["msg"] == "This would exceed your remaining pro-rated leave quota by 0.3 days"
    assert error["details"]["is_valid"] is False


def test_sick_leave_is_not_quota_limited(client, employee, default_plan, auth_headers):
    headers = auth_headers(employee)
    for day in ("2025-04-21", "2025-04-22", "2025-04-23", "2025-04-24"):
        assert _create_leave(client, headers, day, leave_type="sick").status_code == 201


def test_edit_vacation_credits_previous_amount(client, employee, default_plan, auth_headers):
    headers = auth_headers(employee)
    first = _create_leave(client, headers, "2025-04-21").json()
    _create_leave(client, headers, "2025-04-22")

    # 2 days used of ~2.74; moving the first log keeps the total unchanged
    response = client.put(f"/api/leave-logs/{first['id']}", headers=headers, json={"date": "2025-04-24"})
    assert response.status_code == 200
    assert response.json()["date"] == "2025-04-24"


def test_leave_respects_daily_allocation(client, employee, default_plan, auth_headers, task):
    headers = auth_headers(employee)
    client.post("/api/task-logs", headers=headers, json={"task_id": task.id, "worked_day": 0.5, "worked_date": "2025-04-21"})

    response = _create_leave(client, headers, "2025-04-21", leave_type="sick", worked_day=1.0)
    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "DAILY_ALLOCATION_EXCEEDED"

    assert _create_leave(client, headers, "2025-04-21", leave_type="sick", worked_day=0.5).status_code == 201


def test_delete_leave_resyncs_record(client, employee, default_plan, auth_headers, db_session):
    headers = auth_headers(employee)
    log_id = _create_leave(client, headers, "2025-04-21").json()["id"]

    assert client.delete(f"/api/leave-logs/{log_id}", headers=headers).status_code == 204

    record = db_session.query(AnnualRecord).filter_by(user_id=employee.id, year=2025).one()
    assert record.used_vacation_day == 0.0


def test_cannot_touch_another_users_leave(client, employee, admin_user, default_plan, db_session, auth_headers):
    from hr_portal.models.user import User
    other = User(username="malee", email="malee@example.com", user_type="user", is_active=True)
    db_session.add(other)
    db_session.commit()

    log_id = _create_leave(client, auth_headers(employee), "2025-04-21", leave_type="sick").json()["id"]

    assert client.delete(f"/api/leave-logs/{log_id}", headers=auth_headers(other)).status_code == 403
    assert client.delete(f"/api/leave-logs/{log_id}", headers=auth_headers(admin_user)).status_code == 204


def test_other_leave_counts_toward_the_day_only(client, employee, default_plan, auth_headers, db_session):
    response = _create_leave(client, auth_headers(employee), "2025-04-21", leave_type="other")
    assert response.status_code == 201
    assert response.json()["type"] == "other"

    record = db_session.query(AnnualRecord).filter_by(user_id=employee.id, year=2025).one()
    assert record.used_vacation_day == 0.0
    assert record.used_sick_leave_day == 0.0

    second = _create_leave(client, auth_headers(employee), "2025-04-21", leave_type="sick", worked_day=0.5)
    assert second.status_code == 422
