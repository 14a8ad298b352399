"""fixtures for TODOAPP config testing"""

import configparser
import pytest


def _todoapp_mock_config():
    """Some settings are intentionally left out; their defaults shall prevail"""
    cp = configparser.ConfigParser(interpolation=None)
    cp["TodoApp"] = {"storage": "memory", "cors_origin": "https://todo.io"}
    cp["Database"] = {
        "adapter": "sqlite",
        "db_name": "todo_test.db",
        "db_pass": "screwy%pass${word}",
    }
    return cp


@pytest.fixture
def todoapp_test_cfg_path(tmp_path):
    return tmp_path / "etc" / "todoapp" / "todoapp_test.ini"


@pytest.fixture
def todoapp_test_env(monkeypatch, todoapp_test_cfg_path):
    monkeypatch.setenv("TODOAPP_CONFIG", str(todoapp_test_cfg_path))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    return todoapp_test_cfg_path


@pytest.fixture
def todoapp_mock_config():
    return _todoapp_mock_config()


@pytest.fixture
def todoapp_mock_config_file(
    todoapp_mock_config, todoapp_test_cfg_path, todoapp_test_env
):
    cfg = todoapp_test_cfg_path
    cfg.parent.mkdir(parents=True, exist_ok=True)
    with cfg.open("w") as cfg_file:
        todoapp_mock_config.write(cfg_file)
    yield cfg
