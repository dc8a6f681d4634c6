from fastapi.testclient import TestClient

from src.api.errors import InvalidTaskError

BASE = "/api/todos"


def create_todo(client, title="Test Task"):
    res = client.post(BASE, json={"title": title})
    assert res.status_code == 201
    return res.json()


def assert_todo_shape(todo: dict):
    assert set(todo) == {"id", "title", "done"}
    assert isinstance(todo["id"], int)
    assert isinstance(todo["title"], str)
    assert isinstance(todo["done"], bool)


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert res.json() == {"message": "Healthy", "todos": 0}

    def test_health_check_counts_todos(self, client):
        create_todo(client, "Count me")
        assert client.get("/").json()["todos"] == 1


class TestTodosCRUD:
    def test_end_to_end_scenario(self, client):
        res_create = client.post(BASE, json={"title": "Learn the domain"})
        assert res_create.status_code == 201
        assert res_create.json() == {"id": 1, "title": "Learn the domain", "done": False}

        res_toggle = client.put(f"{BASE}/1/toggle")
        assert res_toggle.status_code == 200
        assert res_toggle.json() == {"id": 1, "title": "Learn the domain", "done": True}

        res_del = client.delete(f"{BASE}/1")
        assert res_del.status_code == 204
        assert res_del.text == ""

        res_get = client.get(f"{BASE}/1")
        assert res_get.status_code == 404
        assert res_get.json() == {"error": "Todo not found with id: 1"}

    def test_create_ignores_done_and_id(self, client):
        res = client.post(BASE, json={"title": "Sneaky", "done": True, "id": 50})
        assert res.status_code == 201
        todo = res.json()
        assert_todo_shape(todo)
        assert todo["id"] == 1
        assert todo["done"] is False

    def test_list_todos(self, client):
        assert client.get(BASE).json() == []
        create_todo(client, "Buy milk")
        create_todo(client, "Read book")
        res = client.get(BASE)
        assert res.status_code == 200
        items = res.json()
        assert len(items) == 2
        for item in items:
            assert_todo_shape(item)
        assert {t["title"] for t in items} == {"Buy milk", "Read book"}

    def test_get_todo(self, client):
        created = create_todo(client, "Read book")
        res = client.get(f"{BASE}/{created['id']}")
        assert res.status_code == 200
        assert res.json() == created

    def test_toggle_twice_restores(self, client):
        created = create_todo(client, "Toggle twice")
        client.put(f"{BASE}/{created['id']}/toggle")
        res = client.put(f"{BASE}/{created['id']}/toggle")
        assert res.json()["done"] is False

    def test_toggle_not_found(self, client):
        res = client.put(f"{BASE}/999/toggle")
        assert res.status_code == 404
        assert res.json() == {"error": "Todo not found with id: 999"}

    def test_delete_not_found(self, client):
        created = create_todo(client, "ToDelete")
        assert client.delete(f"{BASE}/{created['id']}").status_code == 204
        res_again = client.delete(f"{BASE}/{created['id']}")
        assert res_again.status_code == 404
        assert res_again.json() == {"error": f"Todo not found with id: {created['id']}"}

    def test_ids_not_reused_after_delete(self, client):
        first = create_todo(client, "First one")
        client.delete(f"{BASE}/{first['id']}")
        second = create_todo(client, "Second one")
        assert second["id"] == first["id"] + 1

    def test_title_whitespace_is_kept(self, client):
        todo = create_todo(client, "  spaced  ")
        assert todo["title"] == "  spaced  "


class TestValidationErrors:
    def test_title_too_short(self, client):
        res = client.post(BASE, json={"title": "ab"})
        assert res.status_code == 400
        assert res.json() == {"error": "Title must be at least 3 characters"}

    def test_title_short_after_trim(self, client):
        res = client.post(BASE, json={"title": "  ab  "})
        assert res.status_code == 400
        assert res.json() == {"error": "Title must be at least 3 characters"}

    def test_title_blank(self, client):
        res = client.post(BASE, json={"title": "   "})
        assert res.status_code == 400
        assert res.json() == {"error": "Title is required"}

    def test_title_null(self, client):
        res = client.post(BASE, json={"title": None})
        assert res.status_code == 400
        assert res.json() == {"error": "Title is required"}

    def test_title_missing(self, client):
        res = client.post(BASE, json={})
        assert res.status_code == 400
        assert res.json() == {"error": "Title is required"}

    def test_body_missing(self, client):
        res = client.post(BASE)
        assert res.status_code == 400
        assert res.json() == {"error": "Title is required"}

    def test_invalid_path_id(self, client):
        res = client.get(f"{BASE}/not-a-number")
        assert res.status_code == 400
        assert isinstance(res.json()["error"], str)

    def test_id_beyond_64_bits(self, client):
        huge = 2**63
        for res in (
            client.get(f"{BASE}/{huge}"),
            client.put(f"{BASE}/{huge}/toggle"),
            client.delete(f"{BASE}/{huge}"),
        ):
            assert res.status_code == 400
            assert "9223372036854775807" in res.json()["error"]

    def test_id_zero(self, client):
        res = client.get(f"{BASE}/0")
        assert res.status_code == 400

    def test_largest_id_is_a_lookup_miss(self, client):
        res = client.get(f"{BASE}/{2**63 - 1}")
        assert res.status_code == 404
        assert res.json() == {"error": f"Todo not found with id: {2**63 - 1}"}

    def test_numeric_title_is_text(self, client):
        res = client.post(BASE, json={"title": 12345})
        assert res.status_code == 201
        assert res.json() == {"id": 1, "title": "12345", "done": False}

    def test_short_numeric_title(self, client):
        res = client.post(BASE, json={"title": 12})
        assert res.status_code == 400
        assert res.json() == {"error": "Title must be at least 3 characters"}

    def test_boolean_title_rejected(self, client):
        res = client.post(BASE, json={"title": True})
        assert res.status_code == 400
        assert client.get(BASE).json() == []

    def test_rejected_create_stores_nothing(self, client):
        client.post(BASE, json={"title": "ab"})
        assert client.get(BASE).json() == []


class TestErrorRendering:
    def test_unknown_route(self, client):
        res = client.get("/api/nowhere")
        assert res.status_code == 404
        assert res.json() == {"error": "Not Found"}

    def test_method_not_allowed(self, client):
        res = client.patch(f"{BASE}/1")
        assert res.status_code == 405
        assert res.json() == {"error": "Method Not Allowed"}

    def test_service_rejection_is_400(self, app, client, monkeypatch):
        def reject(task):
            raise InvalidTaskError("Todo cannot be null")

        monkeypatch.setattr(app.state.task_service, "create", reject)
        res = client.post(BASE, json={"title": "Valid title"})
        assert res.status_code == 400
        assert res.json() == {"error": "Todo cannot be null"}

    def test_unexpected_error_is_500(self, app, monkeypatch):
        def boom():
            raise RuntimeError("database on fire")

        monkeypatch.setattr(app.state.task_service, "list_all", boom)
        client = TestClient(app, raise_server_exceptions=False)
        res = client.get(BASE)
        assert res.status_code == 500
        assert res.json() == {"error": "Internal server error"}
