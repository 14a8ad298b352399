"""API route implementations

Each major category of route gets its own router.

Most of the actual code is contained in the :mod:`common` module, which
contains factories for building the routes related to object manipulation.
The :mod:`root` module holds the greeting answered at the top of the API.

"""
__all__ = ["common", "root", "todos", "labels"]
