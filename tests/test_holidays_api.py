from fastapi import status


def _create(client, headers, day="2025-04-14", name="Songkran"):
    return client.post("/api/holidays", headers=headers, json={"date": day, "name": name})


def test_admin_manages_holidays(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    holiday = _create(client, headers).json()

    response = client.put(f"/api/holidays/{holiday['id']}", headers=headers, json={"note": "Thai New Year"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["note"] == "Thai New Year"

    listed = client.get("/api/holidays", headers=headers, params={"year": 2025}).json()
    assert [h["name"] for h in listed] == ["Songkran"]


def test_duplicate_date_conflicts(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    _create(client, headers)
    assert _create(client, headers, name="Again").status_code == status.HTTP_409_CONFLICT


def test_null_holiday_name_is_rejected(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    holiday = _create(client, headers).json()

    response = client.put(f"/api/holidays/{holiday['id']}", headers=headers, json={"name": None})
    assert response.status_code == 422

    # note is optional and can be cleared
    cleared = client.put(f"/api/holidays/{holiday['id']}", headers=headers, json={"note": None})
    assert cleared.status_code == status.HTTP_200_OK
    assert cleared.json()["name"] == "Songkran"


def test_employee_cannot_create_holiday(client, employee, auth_headers):
    assert _create(client, auth_headers(employee)).status_code == status.HTTP_403_FORBIDDEN
