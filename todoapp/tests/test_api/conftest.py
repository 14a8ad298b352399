"""Fixtures for testing the TODOAPP REST API"""
import pytest
from fastapi.testclient import TestClient
from todoapp.models import CreateTodo, CreateLabel
from todoapp.rest.api import create_app
from todoapp.tests.test_adapter.conftest import (
    mock_sqlite_config,
    sqlite_engine,
    memory_todo_adapter,
    memory_label_adapter,
    sqla_todo_adapter,
    sqla_label_adapter,
    broken_sqla_todo_adapter,
    broken_sqla_label_adapter,
)


@pytest.fixture(params=["memory", "sqla"])
def repositories(request):
    """A todo repository and a label repository of the same kind"""
    return (
        request.getfixturevalue(f"{request.param}_todo_adapter"),
        request.getfixturevalue(f"{request.param}_label_adapter"),
    )


@pytest.fixture
def populated_repositories(repositories):
    """Repositories holding one todo item and one label"""
    todo_repo, label_repo = repositories
    todo_repo.create(CreateTodo(text="buy milk"))
    label_repo.create(CreateLabel(name="urgent"))
    return repositories


def _client(todo_repo, label_repo):
    api = create_app(todo_repo, label_repo, cfg=mock_sqlite_config())
    with TestClient(api) as client:
        yield client


@pytest.fixture
def testing_api_client(repositories):
    yield from _client(*repositories)


@pytest.fixture
def populated_api_client(populated_repositories):
    yield from _client(*populated_repositories)


@pytest.fixture
def broken_api_client(broken_sqla_todo_adapter, broken_sqla_label_adapter):
    """An API client over a database which has no tables"""
    yield from _client(broken_sqla_todo_adapter, broken_sqla_label_adapter)
