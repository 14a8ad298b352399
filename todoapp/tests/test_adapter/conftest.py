"""Fixtures for testing TODOAPP repositories"""
from unittest.mock import Mock
from pytest import fixture
from todoapp.dbsession import create_sql_engine
from todoapp.memory_adapter import MemoryTodoAdapter, MemoryLabelAdapter
from todoapp.sqla_adapter import SQLATodoAdapter, SQLALabelAdapter
from todoapp.util import AttrDict, ConnectionSettings


def mock_sqlite_config():
    """A config selecting a private in-memory SQLite database"""
    return Mock(
        database=ConnectionSettings(adapter="sqlite", db_name="", url=""),
        todoapp=AttrDict(
            config_file="actually a mock",
            cors_origin="http://localhost:3001",
            storage="sqla",
        ),
    )


@fixture
def sqlite_engine():
    engine = create_sql_engine(mock_sqlite_config())
    yield engine
    engine.dispose()


@fixture
def memory_todo_adapter():
    return MemoryTodoAdapter()


@fixture
def memory_label_adapter():
    return MemoryLabelAdapter()


@fixture
def sqla_todo_adapter(sqlite_engine):
    adapter = SQLATodoAdapter(engine=sqlite_engine)
    adapter.initialize_tables()
    return adapter


@fixture
def sqla_label_adapter(sqlite_engine):
    adapter = SQLALabelAdapter(engine=sqlite_engine)
    adapter.initialize_tables()
    return adapter


@fixture
def broken_sqla_todo_adapter(sqlite_engine):
    """An adapter whose database has no tables"""
    return SQLATodoAdapter(engine=sqlite_engine)


@fixture
def broken_sqla_label_adapter(sqlite_engine):
    return SQLALabelAdapter(engine=sqlite_engine)


@fixture(params=["memory", "sqla"])
def todo_repository(request):
    return request.getfixturevalue(f"{request.param}_todo_adapter")


@fixture(params=["memory", "sqla"])
def label_repository(request):
    return request.getfixturevalue(f"{request.param}_label_adapter")


@fixture
def file_sqla_todo_adapter(tmp_path):
    """An adapter on a SQLite file, which gives each thread its connection"""
    cfg = mock_sqlite_config()
    cfg.database = ConnectionSettings(
        adapter="sqlite", db_name=str(tmp_path / "todo_test.db"), url=""
    )
    engine = create_sql_engine(cfg)
    adapter = SQLATodoAdapter(engine=engine)
    adapter.initialize_tables()
    yield adapter
    engine.dispose()


@fixture(params=["memory", "file_sqla"])
def threaded_todo_repository(request):
    return request.getfixturevalue(f"{request.param}_todo_adapter")
