"""TODOAPP

A small TODO and label management service.

Todo items and labels are managed through a REST API built on FastAPI_.
Storage is abstracted behind repository interfaces, with a relational
implementation using SQLAlchemy_ and an in-memory implementation which is
mostly useful for testing.

"""
from ._version import __version__
import todoapp.logging

__all__ = [
    "_version",
    "util",
    "config",
    "errors",
    "logging",
    "models",
    "dbmodels",
    "dbsession",
    "adapter",
    "sqla_adapter",
    "memory_adapter",
]
