"""Tests of the REST API

Every test runs once with in-memory repositories and once with SQLAlchemy
repositories on an in-memory SQLite database.

"""
import asyncio
import time
import httpx
import pytest
from unittest.mock import Mock
from todoapp.errors import ConfigurationError
from todoapp.memory_adapter import MemoryTodoAdapter, MemoryLabelAdapter
from todoapp.rest.api import build_repositories, create_app
from todoapp.sqla_adapter import SQLATodoAdapter, SQLALabelAdapter
from todoapp.tests.test_adapter.conftest import mock_sqlite_config
from todoapp.util import AttrDict

pytestmark = pytest.mark.timeout(5)


class Test_API_Health:
    """Tests of the overall API"""

    def test_api_docs_render(self, testing_api_client):
        response = testing_api_client.get("/docs")
        assert response.status_code == 200

    def test_root_greeting(self, testing_api_client):
        response = testing_api_client.get("/")
        assert response.status_code == 200
        assert response.text == "Hello, world!"
        assert response.headers["content-type"].startswith("text/plain")


class Test_Todos_API:
    """Tests of the Todo CRUD API"""

    def test_create_todo(self, testing_api_client):
        response = testing_api_client.post("/todos", json={"text": "buy milk"})
        assert response.status_code == 201
        assert response.json() == {
            "id": 1,
            "text": "buy milk",
            "completed": False,
        }

    def test_create_todo_without_text(self, testing_api_client):
        response = testing_api_client.post("/todos", json={})
        assert response.status_code == 400

    def test_create_todo_with_empty_text(self, testing_api_client):
        response = testing_api_client.post("/todos", json={"text": ""})
        assert response.status_code == 400

    def test_create_todo_with_long_text(self, testing_api_client):
        response = testing_api_client.post("/todos", json={"text": "x" * 101})
        assert response.status_code == 400

    def test_create_todo_malformed_json(self, testing_api_client):
        response = testing_api_client.post(
            "/todos",
            content=b'{"text": "buy milk"',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert testing_api_client.get("/todos").json() == []

    def test_list_todos(self, populated_api_client):
        populated_api_client.post("/todos", json={"text": "walk dog"})
        response = populated_api_client.get("/todos")
        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "text": "buy milk", "completed": False},
            {"id": 2, "text": "walk dog", "completed": False},
        ]

    def test_list_no_todos(self, testing_api_client):
        response = testing_api_client.get("/todos")
        assert response.status_code == 200
        assert response.json() == []

    def test_get_todo(self, populated_api_client):
        response = populated_api_client.get("/todos/1")
        assert response.status_code == 200
        assert response.json() == {
            "id": 1,
            "text": "buy milk",
            "completed": False,
        }

    def test_get_missing_todo(self, testing_api_client):
        response = testing_api_client.get("/todos/999")
        assert response.status_code == 404
        assert "999" in response.json()["detail"]

    def test_get_todo_non_numeric_id(self, testing_api_client):
        response = testing_api_client.get("/todos/first")
        assert response.status_code == 400

    def test_update_todo(self, populated_api_client):
        response = populated_api_client.patch(
            "/todos/1", json={"id": 1, "text": "new", "completed": True}
        )
        assert response.status_code == 200
        assert response.json() == {"id": 1, "text": "new", "completed": True}
        assert populated_api_client.get("/todos/1").json() == response.json()

    def test_update_todo_partially(self, populated_api_client):
        response = populated_api_client.patch(
            "/todos/1", json={"completed": True}
        )
        assert response.status_code == 200
        assert response.json() == {
            "id": 1,
            "text": "buy milk",
            "completed": True,
        }

    def test_update_todo_null_keeps_value(self, populated_api_client):
        response = populated_api_client.patch(
            "/todos/1", json={"text": None, "completed": True}
        )
        assert response.status_code == 200
        assert response.json()["text"] == "buy milk"

    def test_update_missing_todo(self, testing_api_client):
        response = testing_api_client.patch(
            "/todos/1", json={"id": 1, "text": "new", "completed": True}
        )
        assert response.status_code == 404

    def test_update_todo_with_empty_text(self, populated_api_client):
        response = populated_api_client.patch("/todos/1", json={"text": ""})
        assert response.status_code == 400
        assert populated_api_client.get("/todos/1").json()["text"] == (
            "buy milk"
        )

    def test_update_todo_malformed_json(self, populated_api_client):
        response = populated_api_client.patch(
            "/todos/1",
            content=b"{text: new}",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_delete_todo(self, populated_api_client):
        response = populated_api_client.delete("/todos/1")
        assert response.status_code == 204
        assert response.content == b""
        response = populated_api_client.get("/todos/1")
        assert response.status_code == 404

    def test_delete_missing_todo(self, testing_api_client):
        response = testing_api_client.delete("/todos/1")
        assert response.status_code == 404

    def test_delete_todo_non_numeric_id(self, testing_api_client):
        response = testing_api_client.delete("/todos/all")
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "item_id", ["0", "-1", "2147483648", "99999999999999999999"]
    )
    def test_out_of_range_id(self, populated_api_client, item_id):
        for method in ("get", "delete"):
            response = getattr(populated_api_client, method)(
                f"/todos/{item_id}"
            )
            assert response.status_code == 400
            assert "detail" in response.json()
        response = populated_api_client.patch(
            f"/todos/{item_id}", json={"completed": True}
        )
        assert response.status_code == 400

    def test_largest_id_is_not_found(self, populated_api_client):
        response = populated_api_client.get("/todos/2147483647")
        assert response.status_code == 404


class Test_Labels_API:
    """Tests of the Label CRUD API"""

    def test_create_label(self, testing_api_client):
        response = testing_api_client.post("/labels", json={"name": "urgent"})
        assert response.status_code == 201
        assert response.json() == {"id": 1, "name": "urgent"}

    def test_create_label_without_name(self, testing_api_client):
        response = testing_api_client.post("/labels", json={"label": "x"})
        assert response.status_code == 400

    def test_list_labels(self, populated_api_client):
        populated_api_client.post("/labels", json={"name": "later"})
        response = populated_api_client.get("/labels")
        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "name": "urgent"},
            {"id": 2, "name": "later"},
        ]

    def test_get_label(self, populated_api_client):
        response = populated_api_client.get("/labels/1")
        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "urgent"}

    def test_update_label(self, populated_api_client):
        response = populated_api_client.patch(
            "/labels/1", json={"name": "critical"}
        )
        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "critical"}

    def test_delete_label(self, populated_api_client):
        response = populated_api_client.delete("/labels/1")
        assert response.status_code == 204
        assert populated_api_client.get("/labels").json() == []

    def test_delete_missing_label(self, testing_api_client):
        response = testing_api_client.delete("/labels/1")
        assert response.status_code == 404

    def test_labels_and_todos_are_separate(self, populated_api_client):
        populated_api_client.delete("/labels/1")
        assert populated_api_client.get("/todos/1").status_code == 200


class Test_Store_Errors:
    """Storage failures are answered with 500"""

    def test_list_todos(self, broken_api_client):
        response = broken_api_client.get("/todos")
        assert response.status_code == 500
        assert "detail" in response.json()

    def test_create_todo(self, broken_api_client):
        response = broken_api_client.post("/todos", json={"text": "buy milk"})
        assert response.status_code == 500

    def test_get_todo(self, broken_api_client):
        response = broken_api_client.get("/todos/1")
        assert response.status_code == 500
        assert "detail" in response.json()

    def test_update_todo(self, broken_api_client):
        response = broken_api_client.patch(
            "/todos/1", json={"text": "new", "completed": True}
        )
        assert response.status_code == 500

    def test_delete_todo(self, broken_api_client):
        response = broken_api_client.delete("/todos/1")
        assert response.status_code == 500

    def test_list_labels(self, broken_api_client):
        response = broken_api_client.get("/labels")
        assert response.status_code == 500

    def test_update_label(self, broken_api_client):
        response = broken_api_client.patch("/labels/1", json={"name": "x"})
        assert response.status_code == 500

    def test_root_unaffected(self, broken_api_client):
        response = broken_api_client.get("/")
        assert response.status_code == 200


class Test_CORS:
    def test_preflight_from_configured_origin(self, testing_api_client):
        response = testing_api_client.options(
            "/todos",
            headers={
                "Origin": "http://localhost:3001",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )
        assert response.status_code == 200
        assert (
            response.headers["access-control-allow-origin"]
            == "http://localhost:3001"
        )

    def test_preflight_from_other_origin(self, testing_api_client):
        response = testing_api_client.options(
            "/todos",
            headers={
                "Origin": "http://evil.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers


class Test_BuildRepositories:
    def test_memory_storage(self):
        cfg = Mock(todoapp=AttrDict(storage="memory"))
        todo_repo, label_repo = build_repositories(cfg)
        assert isinstance(todo_repo, MemoryTodoAdapter)
        assert isinstance(label_repo, MemoryLabelAdapter)

    def test_sqla_storage_shares_engine(self):
        todo_repo, label_repo = build_repositories(mock_sqlite_config())
        assert isinstance(todo_repo, SQLATodoAdapter)
        assert isinstance(label_repo, SQLALabelAdapter)
        assert todo_repo.sql_engine is label_repo.sql_engine
        todo_repo.sql_engine.dispose()

    def test_unknown_storage(self):
        cfg = Mock(todoapp=AttrDict(storage="redis"))
        with pytest.raises(ConfigurationError):
            build_repositories(cfg)


class SlowTodoAdapter(MemoryTodoAdapter):
    """Takes its time listing, as a remote database might"""

    delay = 0.5

    def all(self):
        time.sleep(self.delay)
        return super().all()


class Test_Concurrency:
    requests = 4

    def test_slow_store_does_not_serialize_requests(self):
        api = create_app(
            SlowTodoAdapter(), MemoryLabelAdapter(), cfg=mock_sqlite_config()
        )

        async def fetch_all():
            transport = httpx.ASGITransport(app=api)
            async with httpx.AsyncClient(
                transport=transport, base_url="http://testserver"
            ) as client:
                return await asyncio.gather(
                    *[client.get("/todos") for _ in range(self.requests)]
                )

        started = time.monotonic()
        responses = asyncio.run(fetch_all())
        elapsed = time.monotonic() - started
        assert [r.status_code for r in responses] == [200] * self.requests
        assert elapsed < SlowTodoAdapter.delay * self.requests * 0.75

    def test_greeting_answers_while_store_is_slow(self):
        api = create_app(
            SlowTodoAdapter(), MemoryLabelAdapter(), cfg=mock_sqlite_config()
        )

        async def slow_then_fast():
            transport = httpx.ASGITransport(app=api)
            async with httpx.AsyncClient(
                transport=transport, base_url="http://testserver"
            ) as client:
                finished = []

                async def get(path):
                    response = await client.get(path)
                    finished.append(path)
                    return response

                slow = asyncio.ensure_future(get("/todos"))
                await asyncio.sleep(0.05)
                greeting = await get("/")
                await slow
                return greeting, finished

        greeting, finished = asyncio.run(slow_then_fast())
        assert greeting.text == "Hello, world!"
        assert finished == ["/", "/todos"]
