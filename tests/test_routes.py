"""
Tests des routes /api/todo et /api/category.
Utilise le TestClient FastAPI sur une app en mémoire (MemoryStore),
et sur SQLite en mémoire (moteur posé sur app.state.engine).
"""
import unittest
from unittest import mock

from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.dependencies import get_todo_service
from app.features.schemas import MAX_ID
from app.main import create_app

from stores import sqlite_engine


class RouteCases:
    def make_app(self):
        raise NotImplementedError

    def setUp(self):
        self.app = self.make_app()
        self.client = TestClient(self.app)

    # -------- helpers --------

    def _create_todo(self, title="learn ts", description="read the handbook"):
        r = self.client.post("/api/todo", json={"title": title, "description": description})
        self.assertEqual(r.status_code, 201, r.text)
        return r.json()["todo"]

    def _create_category(self, name="Work"):
        r = self.client.post("/api/category", json={"name": name})
        self.assertEqual(r.status_code, 201, r.text)
        return r.json()["category"]

    # -------- todos --------

    def test_create_todo_then_list(self):
        todo = self._create_todo()
        self.assertGreater(todo["id"], 0)
        self.assertFalse(todo["done"])
        self.assertEqual(todo["categories"], [])
        self.assertIn("createdAt", todo)
        self.assertIn("updatedAt", todo)

        r = self.client.get("/api/todo")
        self.assertEqual(r.status_code, 200)
        self.assertEqual([t["id"] for t in r.json()["list"]], [todo["id"]])

    def test_create_todo_empty_fields_returns_400(self):
        r = self.client.post("/api/todo", json={"title": "  ", "description": "desc"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("error", r.json())
        r = self.client.post("/api/todo", json={"title": "title"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(self.client.get("/api/todo").json()["list"], [])

    def test_get_todo(self):
        todo = self._create_todo()
        r = self.client.get(f"/api/todo/{todo['id']}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["todo"]["title"], "learn ts")
        self.assertEqual(self.client.get("/api/todo/999").status_code, 404)

    def test_invalid_id_returns_400(self):
        r = self.client.get("/api/todo/abc")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "Invalid request")

    def test_ids_out_of_range_return_400(self):
        too_big = MAX_ID + 1
        r = self.client.get(f"/api/todo/{too_big}")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "Invalid request")
        self.assertEqual(self.client.get("/api/todo/0").status_code, 400)
        self.assertEqual(self.client.delete(f"/api/category/{too_big}").status_code, 400)

        category = self._create_category()
        r = self.client.put(f"/api/category/{category['id']}/addTodos", json={"todoIds": [too_big]})
        self.assertEqual(r.status_code, 400)

        # le plus grand id représentable est simplement inconnu
        self.assertEqual(self.client.get(f"/api/todo/{MAX_ID}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/category/{MAX_ID}").status_code, 404)

    def test_update_todo(self):
        todo = self._create_todo()
        r = self.client.put(f"/api/todo/{todo['id']}", json={"title": "learn python", "done": True})
        self.assertEqual(r.status_code, 200)
        updated = r.json()["updatedTodo"]
        self.assertEqual(updated["id"], todo["id"])
        self.assertEqual(updated["title"], "learn python")
        self.assertEqual(updated["description"], "read the handbook")
        self.assertTrue(updated["done"])

    def test_update_todo_without_body_returns_400(self):
        todo = self._create_todo()
        r = self.client.put(f"/api/todo/{todo['id']}")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"error": "Entity todo cannot be null"})

    def test_update_unknown_todo_returns_404(self):
        r = self.client.put("/api/todo/999", json={"done": True})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"error": "Todo not found"})

    def test_toggle_status(self):
        todo = self._create_todo()
        r = self.client.put(f"/api/todo/toggle_status/{todo['id']}")
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.json()["updatedTodo"]["done"])
        r = self.client.put(f"/api/todo/toggle_status/{todo['id']}")
        self.assertFalse(r.json()["updatedTodo"]["done"])
        self.assertEqual(self.client.put("/api/todo/toggle_status/999").status_code, 404)

    def test_delete_todo(self):
        todo = self._create_todo()
        r = self.client.delete(f"/api/todo/{todo['id']}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["deletedTodo"]["id"], todo["id"])
        self.assertEqual(self.client.get("/api/todo").json()["list"], [])
        self.assertEqual(self.client.delete(f"/api/todo/{todo['id']}").status_code, 404)

    # -------- categories --------

    def test_create_category_empty_name_returns_400_and_persists_nothing(self):
        r = self.client.post("/api/category", json={"name": ""})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(self.client.get("/api/category").json()["list"], [])

    def test_create_duplicate_category_returns_409(self):
        self._create_category("Work")
        r = self.client.post("/api/category", json={"name": "Work"})
        self.assertEqual(r.status_code, 409)

    def test_get_category(self):
        category = self._create_category()
        r = self.client.get(f"/api/category/{category['id']}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["category"]["name"], "Work")
        self.assertEqual(r.json()["category"]["todos"], [])
        r = self.client.get("/api/category/999")
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"error": "Category not found"})

    def test_delete_category_by_id_and_name(self):
        work = self._create_category("Work")
        self._create_category("Home")

        r = self.client.delete(f"/api/category/{work['id']}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["deletedCategory"]["name"], "Work")
        self.assertEqual(self.client.delete(f"/api/category/{work['id']}").status_code, 404)

        r = self.client.delete("/api/category/name/Home")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["deletedCategory"]["name"], "Home")
        self.assertEqual(self.client.delete("/api/category/name/Home").status_code, 404)

    def test_change_name(self):
        category = self._create_category()
        r = self.client.put(f"/api/category/changeName/{category['id']}", json={"name": "Job"})
        self.assertEqual(r.status_code, 200)
        updated = r.json()["updatedCategory"]
        self.assertEqual((updated["id"], updated["name"]), (category["id"], "Job"))

        r = self.client.put(f"/api/category/changeName/{category['id']}", json={"name": ""})
        self.assertEqual(r.status_code, 400)
        r = self.client.put("/api/category/changeName/999", json={"name": "Other"})
        self.assertEqual(r.status_code, 404)

    def test_add_and_delete_todos(self):
        t1 = self._create_todo("one", "1")
        t2 = self._create_todo("two", "2")
        category = self._create_category("C")

        r = self.client.put(
            f"/api/category/{category['id']}/addTodos",
            json={"todoIds": [t1["id"], t2["id"], 999]},
        )
        self.assertEqual(r.status_code, 200)
        todos = r.json()["todos"]
        self.assertEqual([t["id"] for t in todos], [t1["id"], t2["id"]])
        for t in todos:
            self.assertEqual([c["name"] for c in t["categories"]], ["C"])

        [listed] = self.client.get("/api/category").json()["list"]
        self.assertEqual(sorted(t["id"] for t in listed["todos"]), [t1["id"], t2["id"]])

        r = self.client.put(f"/api/category/{category['id']}/deleteTodos", json={"todoIds": [t1["id"]]})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["todos"][0]["categories"], [])
        listed = self.client.get(f"/api/category/{category['id']}").json()["category"]
        self.assertEqual([t["id"] for t in listed["todos"]], [t2["id"]])

    def test_todo_ids_missing_returns_400(self):
        category = self._create_category()
        for action in ("addTodos", "deleteTodos"):
            r = self.client.put(f"/api/category/{category['id']}/{action}", json={})
            self.assertEqual(r.status_code, 400)
            self.assertEqual(r.json(), {"error": "todoIds must be an array"})
        r = self.client.put(f"/api/category/{category['id']}/addTodos", json={"todoIds": "1,2"})
        self.assertEqual(r.status_code, 400)

    def test_empty_todo_ids_is_accepted(self):
        category = self._create_category()
        r = self.client.put(f"/api/category/{category['id']}/addTodos", json={"todoIds": []})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"todos": []})

    def test_add_todos_unknown_category_returns_404(self):
        r = self.client.put("/api/category/999/addTodos", json={"todoIds": [1]})
        self.assertEqual(r.status_code, 404)

    def test_health(self):
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok"})


class TestRoutesMemory(RouteCases, unittest.TestCase):
    def make_app(self):
        return create_app(store_backend="memory")


class TestRoutesSql(RouteCases, unittest.TestCase):
    def make_app(self):
        engine = sqlite_engine()
        self.addCleanup(engine.dispose)
        app = create_app(store_backend="sql")
        app.state.engine = engine
        return app


class _FailingTodoService:
    def __init__(self, exc):
        self.exc = exc

    def list(self):
        raise self.exc


class TestServerErrors(unittest.TestCase):
    """Les erreurs inattendues donnent un 500 opaque, loggé côté serveur."""

    def _client_failing_with(self, exc):
        app = create_app(store_backend="memory")
        app.dependency_overrides[get_todo_service] = lambda: _FailingTodoService(exc)
        return TestClient(app, raise_server_exceptions=False)

    def test_store_failure_returns_500(self):
        client = self._client_failing_with(SQLAlchemyError("database is locked"))
        with self.assertLogs("app.api.errors", level="ERROR"):
            r = client.get("/api/todo")
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Internal Server Error"})

    def test_unexpected_error_returns_500(self):
        client = self._client_failing_with(RuntimeError("boom"))
        with self.assertLogs("app.api.errors", level="ERROR"):
            r = client.get("/api/todo")
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Internal Server Error"})
        self.assertNotIn("boom", r.text)


class TestMemoryBackendWiring(unittest.TestCase):
    def test_memory_app_never_opens_a_sql_session(self):
        app = create_app(store_backend="memory")
        self.assertIsNone(app.state.engine)
        client = TestClient(app)
        with mock.patch("app.api.v1.dependencies.open_session", side_effect=AssertionError("SQL session opened")):
            self.assertEqual(client.get("/api/todo").status_code, 200)
            self.assertEqual(client.post("/api/category", json={"name": "Work"}).status_code, 201)
