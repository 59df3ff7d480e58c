import pytest
from fastapi import status


@pytest.fixture
def categories(client, admin_user, auth_headers):
    """Engineering > Backend > Billing, plus a separate Operations root."""
    headers = auth_headers(admin_user)

    def _create(name, parent_id=None):
        return client.post("/api/task-categories", headers=headers, json={"name": name, "parent_id": parent_id}).json()

    engineering = _create("Engineering")
    backend = _create("Backend", engineering["id"])
    billing = _create("Billing", backend["id"])
    operations = _create("Operations")
    return {"engineering": engineering, "backend": backend, "billing": billing, "operations": operations}


def test_category_tree(client, employee, categories, auth_headers):
    tree = client.get("/api/task-categories/tree", headers=auth_headers(employee)).json()

    assert [root["name"] for root in tree] == ["Engineering", "Operations"]
    backend = tree[0]["children"][0]
    assert backend["name"] == "Backend"
    assert [child["name"] for child in backend["children"]] == ["Billing"]


def test_list_tasks_includes_subcategories(client, employee, categories, auth_headers):
    headers = auth_headers(employee)
    client.post("/api/tasks", headers=headers, json={"title": "Invoice PDF", "task_category_id": categories["billing"]["id"]})
    client.post("/api/tasks", headers=headers, json={"title": "On-call rota", "task_category_id": categories["operations"]["id"]})

    tasks = client.get("/api/tasks", headers=headers, params={"category_id": categories["engineering"]["id"]}).json()
    assert [t["title"] for t in tasks] == ["Invoice PDF"]
    assert tasks[0]["category_name"] == "Billing"


def test_category_cannot_move_under_its_subtree(client, admin_user, categories, auth_headers):
    response = client.put(
        f"/api/task-categories/{categories['engineering']['id']}",
        headers=auth_headers(admin_user),
        json={"parent_id": categories["billing"]["id"]}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"][0]["code"] == "INVALID_PARENT"


def test_category_with_children_cannot_be_deleted(client, admin_user, categories, auth_headers):
    headers = auth_headers(admin_user)
    assert client.delete(f"/api/task-categories/{categories['backend']['id']}", headers=headers).status_code == 409
    assert client.delete(f"/api/task-categories/{categories['operations']['id']}", headers=headers).status_code == 204


def test_task_with_logs_cannot_be_deleted(client, admin_user, employee, task, auth_headers):
    client.post(
        "/api/task-logs", headers=auth_headers(employee),
        json={"task_id": task.id, "worked_day": 0.5, "worked_date": "2025-04-15"}
    )
    response = client.delete(f"/api/tasks/{task.id}", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_409_CONFLICT


def test_null_task_title_is_rejected(client, employee, task, auth_headers):
    headers = auth_headers(employee)
    assert client.put(f"/api/tasks/{task.id}", headers=headers, json={"title": None}).status_code == 422

    response = client.put(f"/api/tasks/{task.id}", headers=headers, json={"status": "done", "status_color": "#2e7d32"})
    assert response.status_code == 200
    assert response.json()["status"] == "done"


def test_estimates_belong_to_their_author(client, employee, admin_user, task, auth_headers, db_session):
    from hr_portal.models.user import User
    other = User(username="malee", email="malee@example.com", user_type="user", is_active=True)
    db_session.add(other)
    db_session.commit()

    estimate = client.post(
        "/api/task-estimates", headers=auth_headers(employee),
        json={"task_id": task.id, "estimate_day": 2.5, "note": "includes review"}
    ).json()
    assert estimate["created_by_user_id"] == employee.id

    url = f"/api/task-estimates/{estimate['id']}"
    assert client.put(url, headers=auth_headers(other), json={"estimate_day": 1}).status_code == 403
    assert client.put(url, headers=auth_headers(employee), json={"estimate_day": 3}).json()["estimate_day"] == 3

    listed = client.get("/api/task-estimates", headers=auth_headers(employee), params={"task_id": task.id}).json()
    assert [e["id"] for e in listed] == [estimate["id"]]
    assert client.delete(url, headers=auth_headers(admin_user)).status_code == 204


def test_estimate_for_unknown_task(client, employee, auth_headers):
    response = client.post("/api/task-estimates", headers=auth_headers(employee), json={"task_id": 9999, "estimate_day": 1})
    assert response.status_code == status.HTTP_404_NOT_FOUND
