"""TODOAPP REST API implementation

The :mod:`~.api` module assembles the :class:`~fastapi.FastAPI` object from
the routers in :mod:`~.routers` and the repositories it is given.

"""
__all__ = ["api", "routers"]
