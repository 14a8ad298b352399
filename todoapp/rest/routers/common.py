"""
Route factories and other reusable code
---------------------------------------

Factories for API routes are defined in this module along with the
`FastAPI`_ dependency which supplies routes with their repository.

The route factories perform the repetitive grunt work required to set up the
typical 'create', 'read', 'update', 'delete' and 'list' functions needed for
basic object management.  Each factory is given the repository interface of
the entity (:class:`~todoapp.adapter.TodoRepository` or
:class:`~todoapp.adapter.LabelRepository`), from which it learns the
response and payload models, and a dependency which yields the repository
implementation chosen when the application was assembled.

In order to avoid extra levels of metaprogramming, the parameter name for
the record ID in the path is ``item_id``, since it is clear, brief and
generic.

The routes are plain functions rather than coroutines, because the
repositories block on I/O and locks.  FastAPI runs such routes in its
threadpool, which keeps the event loop free for other requests.  Record IDs
are limited to the range of the database's integer key, so an ID outside it
is a bad request for every kind of repository.

The routes do not catch repository exceptions.  Those are turned into
responses by the exception handlers installed in
:func:`todoapp.rest.api.create_app`.

.. _fastapi: https://fastapi.tiangolo.com/

"""
import inspect
import logging
from typing import Type
from fastapi import Body, Depends, Path, Request, Response, status
from todoapp.adapter import Repository

logger = logging.getLogger(__name__)

REPOSITORIES = "repositories"
"""Name of the attribute of the application state holding the repositories"""

ITEM_ID_MAX = 2**31 - 1
"""Largest record ID accepted in a path; the range of a signed 32-bit column"""


def repository_dependency(cls: Type[Repository]):
    """Build a FastAPI dependency which yields the repository for `cls`

    :param cls: the repository interface, used as the lookup key

    The repositories are placed into the application state by
    :func:`~todoapp.rest.api.create_app`, keyed on their interface.

    """

    def get_repository(request: Request) -> Repository:
        return getattr(request.app.state, REPOSITORIES)[cls]

    get_repository.__name__ = f"get_{cls.model_name()}_repository"
    return get_repository


def _route_signature(*params: inspect.Parameter) -> inspect.Signature:
    """Assemble a signature for FastAPI out of the listed parameters"""
    return inspect.Signature(list(params))


def _item_id_param() -> inspect.Parameter:
    return inspect.Parameter(
        name="item_id",
        kind=inspect.Parameter.POSITIONAL_OR_KEYWORD,
        default=Path(..., ge=1, le=ITEM_ID_MAX),
        annotation=int,
    )


def _repository_param(cls: Type[Repository]) -> inspect.Parameter:
    return inspect.Parameter(
        name="repository",
        kind=inspect.Parameter.KEYWORD_ONLY,
        default=Depends(repository_dependency(cls)),
        annotation=cls,
    )


def get_item_by_id(cls: Type[Repository]):
    """Build a route coroutine to get an item by ID

    :param cls: the repository interface of the entity

    Its signature is:

      .. code:: python

        def get_i(item_id: int) -> cls.model

    """
    mname = cls.model_name()

    def get_i(item_id: int, *, repository: Repository):
        return repository.find(item_id)

    get_i.__signature__ = _route_signature(
        _item_id_param(), _repository_param(cls)
    )
    get_i.__name__ = f"get_{mname}"
    get_i.__doc__ = f"Retrieve a **{mname}** record by ID."
    return get_i


def list_items(cls: Type[Repository]):
    """Build a route coroutine to list items

    :param cls: the repository interface of the entity

    The route takes no parameters and returns every record, ordered by ID.

    """
    mname = cls.model_name()

    def list_i(*, repository: Repository):
        return repository.all()

    list_i.__signature__ = _route_signature(_repository_param(cls))
    list_i.__name__ = f"list_{mname}"
    list_i.__doc__ = f"List all **{mname}** records, in order of ID."
    return list_i


def create_item(cls: Type[Repository]):
    """Build a route coroutine to create new item records

    :param cls: the repository interface of the entity

    The request body is validated as :attr:`cls.create_model
    <todoapp.adapter.Repository.create_model>`.  The new object will be
    returned, including its ID.

    """
    mname = cls.model_name()

    def create_i(payload, *, repository: Repository):
        item = repository.create(payload)
        logger.debug(f"created {mname} {item.id}")
        return item

    create_i.__signature__ = _route_signature(
        inspect.Parameter(
            name="payload",
            kind=inspect.Parameter.POSITIONAL_OR_KEYWORD,
            default=Body(...),
            annotation=cls.create_model,
        ),
        _repository_param(cls),
    )
    create_i.__name__ = f"create_{mname}"
    create_i.__doc__ = f"""
        Create a new **{mname}** record.<br/>
        The new object will be returned, including its ID.
        """
    return create_i


def update_item(cls: Type[Repository]):
    """Build a route to update items.

    :param cls: the repository interface of the entity

    The request body is validated as :attr:`cls.update_model
    <todoapp.adapter.Repository.update_model>`; every field is optional, and
    only the fields provided (and not `null`) are changed.

    """
    mname = cls.model_name()

    def update_i(item_id: int, payload, *, repository: Repository):
        return repository.update(item_id, payload)

    update_i.__signature__ = _route_signature(
        _item_id_param(),
        inspect.Parameter(
            name="payload",
            kind=inspect.Parameter.POSITIONAL_OR_KEYWORD,
            default=Body(...),
            annotation=cls.update_model,
        ),
        _repository_param(cls),
    )
    update_i.__name__ = f"update_{mname}"
    update_i.__doc__ = f"""
        Update a **{mname}** record by ID.<br/>
        Attributes which are omitted or `null` keep their current values.
        """
    return update_i


def delete_item(cls: Type[Repository]):
    """Build a route coroutine to delete an item by ID

    The route answers with an empty `204 No Content` response.

    """
    mname = cls.model_name()

    def delete_i(item_id: int, *, repository: Repository):
        repository.delete(item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    delete_i.__signature__ = _route_signature(
        _item_id_param(), _repository_param(cls)
    )
    delete_i.__name__ = f"delete_{mname}"
    delete_i.__doc__ = f"Delete the **{mname}** record with the given ID."
    return delete_i
