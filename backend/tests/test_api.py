"""
Tests for the HTTP layer: routing, auth and error rendering.
Handler behaviour is covered in the other modules; these go through FastAPI.
"""
from tasklist.auth import create_access_token, resolve_user_id
from tasklist.errors import AssistantUnavailable


class TestAuth:
    """Tests for bearer-token authentication."""

    def test_missing_token_is_401(self, app_client):
        response = app_client.get("/tasks")
        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}

    def test_garbage_token_is_401(self, app_client):
        response = app_client.get("/tasks", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_expired_token_is_rejected(self):
        assert resolve_user_id(create_access_token("user-a", ttl_seconds=-60)) is None

    def test_token_round_trip(self):
        assert resolve_user_id(create_access_token("user-a")) == "user-a"

    def test_health_needs_no_auth(self, app_client):
        response = app_client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_meta_needs_no_auth(self, app_client):
        meta = app_client.get("/meta").json()
        assert meta["status_labels"]["in_progress"] == "In Progress"
        assert meta["limits"]["title"] == 200
        assert meta["rate_limits"]["createThread"]["capacity"] == 1


class TestTaskEndpoints:
    """Tests for /tasks endpoints."""

    def test_get_tasks_empty(self, app_client, auth_headers):
        """GET /tasks returns empty list when no tasks."""
        response = app_client.get("/tasks", headers=auth_headers())
        assert response.status_code == 200
        assert response.json() == []

    def test_create_and_get(self, app_client, auth_headers):
        """POST /tasks returns the id; GET /tasks/{id} returns the task."""
        response = app_client.post("/tasks", json={"title": "Write tests", "tags": ["dev"]}, headers=auth_headers())
        assert response.status_code == 200
        task_id = response.json()["id"]

        task = app_client.get(f"/tasks/{task_id}", headers=auth_headers()).json()
        assert task["title"] == "Write tests"
        assert task["tags"] == ["dev"]
        assert task["order"] == 0

    def test_update_and_complete(self, app_client, auth_headers):
        headers = auth_headers()
        task_id = app_client.post("/tasks", json={"title": "Old title"}, headers=headers).json()["id"]

        response = app_client.patch(f"/tasks/{task_id}", json={"title": "New title"}, headers=headers)
        assert response.status_code == 200
        response = app_client.post(f"/tasks/{task_id}/complete", headers=headers)
        assert response.status_code == 200

        task = app_client.get(f"/tasks/{task_id}", headers=headers).json()
        assert task["title"] == "New title"
        assert task["status"] == "completed"
        assert task["completed_at"] is not None

        activity = app_client.get(f"/tasks/{task_id}/activity", headers=headers).json()
        assert [a["action"] for a in activity] == ["completed", "updated", "created"]
        assert activity[1]["changes"]["title"] == {"old": "Old title", "new": "New title"}

    def test_invalid_title_is_400(self, app_client, auth_headers):
        response = app_client.post("/tasks", json={"title": "x" * 201}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["detail"] == "Title must be between 1 and 200 characters"

    def test_unknown_priority_is_400(self, app_client, auth_headers):
        """Body validation failures use the same {"detail": ...} shape as handler errors."""
        response = app_client.post("/tasks", json={"title": "T", "priority": "critical"}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid priority:")

    def test_missing_body_field_is_400(self, app_client, auth_headers):
        response = app_client.post("/tasks", json={}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid title:")

    def test_not_found_is_404(self, app_client, auth_headers):
        response = app_client.get("/tasks/nonexistent", headers=auth_headers())
        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"

    def test_other_users_task_is_403(self, app_client, auth_headers):
        task_id = app_client.post("/tasks", json={"title": "Private"}, headers=auth_headers("user-b")).json()["id"]

        response = app_client.delete(f"/tasks/{task_id}", headers=auth_headers("user-a"))
        assert response.status_code == 403

    def test_static_routes_not_shadowed(self, app_client, auth_headers):
        headers = auth_headers()
        for path in ("/tasks/due", "/tasks/overdue", "/tasks/search?q=x", "/tasks/by-status/todo"):
            response = app_client.get(path, headers=headers)
            assert response.status_code == 200, path
            assert response.json() == []

    def test_delete_task(self, app_client, auth_headers):
        headers = auth_headers()
        task_id = app_client.post("/tasks", json={"title": "Delete me"}, headers=headers).json()["id"]
        app_client.post(f"/tasks/{task_id}/comments", json={"content": "bye"}, headers=headers)

        response = app_client.delete(f"/tasks/{task_id}", headers=headers)
        assert response.json() == {"success": True}
        assert app_client.get(f"/tasks/{task_id}", headers=headers).status_code == 404

    def test_rate_limit_is_429_with_retry_after(self, app_client, auth_headers):
        headers = auth_headers()
        for _ in range(5):
            assert app_client.post("/tasks", json={"title": "Burst"}, headers=headers).status_code == 200

        response = app_client.post("/tasks", json={"title": "Burst"}, headers=headers)
        assert response.status_code == 429
        assert response.json()["retry_after_ms"] > 0
        assert int(response.headers["Retry-After"]) >= 1

    def test_failed_request_is_rolled_back(self, app_client, auth_headers):
        """A rejected write leaves nothing behind, including its rate-limit token."""
        headers = auth_headers()
        for _ in range(5):
            app_client.post("/tasks", json={"title": ""}, headers=headers)

        response = app_client.post("/tasks", json={"title": "Still allowed"}, headers=headers)
        assert response.status_code == 200
        assert len(app_client.get("/tasks", headers=headers).json()) == 1


class TestOtherEndpoints:
    """Smoke tests for categories, preferences, dashboard and threads."""

    def test_category_delete_modes(self, app_client, auth_headers):
        headers = auth_headers()
        category_id = app_client.post("/categories", json={"name": "Work", "color": "#112233"}, headers=headers).json()["id"]
        app_client.post("/tasks", json={"title": "In work", "category_id": category_id}, headers=headers)

        count = app_client.get(f"/categories/{category_id}/task-count", headers=headers).json()
        assert count == {"count": 1}

        response = app_client.delete(f"/categories/{category_id}?mode=deleteTasks", headers=headers)
        assert response.status_code == 200
        assert app_client.get("/tasks", headers=headers).json() == []

    def test_preferences(self, app_client, auth_headers):
        headers = auth_headers()
        assert app_client.get("/preferences", headers=headers).json()["theme"] == "system"

        response = app_client.patch("/preferences", json={"theme": "dark"}, headers=headers)
        assert response.json() == {"success": True}
        assert app_client.get("/preferences", headers=headers).json()["theme"] == "dark"

    def test_dashboard_summary(self, app_client, auth_headers):
        headers = auth_headers()
        app_client.post("/tasks", json={"title": "One", "priority": "urgent"}, headers=headers)

        summary = app_client.get("/dashboard/summary", headers=headers).json()
        assert summary["total_tasks"] == 1
        assert summary["high_priority_tasks"] == 1
        assert app_client.get("/dashboard/by-priority", headers=headers).json()["urgent"] == 1

    def test_thread_round_trip(self, app_client, auth_headers, fake_assistant):
        headers = auth_headers()
        thread_id = app_client.post("/threads", json={}, headers=headers).json()["id"]

        response = app_client.post(f"/threads/{thread_id}/messages", json={"content": "Hi there"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["content"] == fake_assistant.reply_text

        messages = app_client.get(f"/threads/{thread_id}/messages", headers=headers).json()
        assert [m["role"] for m in messages] == ["user", "assistant"]
        assert app_client.get(f"/threads/{thread_id}", headers=headers).json()["title"] == "Hi there"

    def test_assistant_outage_is_503(self, app_client, auth_headers, fake_assistant):
        fake_assistant.error = AssistantUnavailable("API key not configured")
        headers = auth_headers()
        thread_id = app_client.post("/threads", json={}, headers=headers).json()["id"]

        response = app_client.post(f"/threads/{thread_id}/messages", json={"content": "Hello"}, headers=headers)
        assert response.status_code == 503
        assert response.json()["detail"] == "API key not configured"
        messages = app_client.get(f"/threads/{thread_id}/messages", headers=headers).json()
        assert [m["role"] for m in messages] == ["user"]
