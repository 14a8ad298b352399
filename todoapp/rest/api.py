"""
Top level API definition
------------------------

This module includes the routers and assembles the :class:`~fastapi.FastAPI`
object which answers web requests.

The repositories are not chosen here but passed in to :func:`create_app`,
which is how tests run the API against in-memory storage.  For a server,
:func:`default_app` builds the repositories the config asks for; it is meant
to be handed to uvicorn as an application factory:

  .. code:: shell

    uvicorn --factory todoapp.rest.api:default_app

"""
# Note that the API is powered by FastAPI and as such, the application
# object itself is designed to be executed by uvicorn

from typing import Dict, Type
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from todoapp.config import config, TodoAppConfig
from todoapp._version import __version__
from todoapp.adapter import Repository, TodoRepository, LabelRepository
from todoapp.dbsession import create_sql_engine
from todoapp.errors import NotFound, StoreError, ConfigurationError
from todoapp.memory_adapter import MemoryTodoAdapter, MemoryLabelAdapter
from todoapp.sqla_adapter import SQLATodoAdapter, SQLALabelAdapter
from todoapp.rest.routers import root, todos, labels
from todoapp.rest.routers.common import REPOSITORIES
import logging
import todoapp.logging

logger = logging.getLogger(__name__)

tags_metadata = [
    dict(
        name="todos",
        description=(
            "<h3>Create, list, fetch, update, and delete operations "
            "involving todo items.</h3><p>Use PATCH to change the "
            "<b>text</b> of an item or to mark it <b>completed</b>.</p>"
        ),
    ),
    dict(
        name="labels",
        description=(
            "<h3>Create, list, fetch, update and delete operations for "
            "labels.</h3>"
        ),
    ),
]


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    """Creates a log entry upon request validation error

    Malformed JSON, a body which fails validation and a non-numeric ID in the
    path all end up here.  Returns a response with code 400.

    """
    exc_str = f"{exc}".replace("\n", " ").replace("   ", " ")
    logger.error(f"{request.method} {request.url.path}: {exc_str}")
    return JSONResponse(
        content=dict(detail=jsonable_encoder(exc.errors())),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def not_found_handler(request: Request, exc: NotFound):
    """Answer with 404 when a repository cannot find the requested record"""
    return JSONResponse(
        content=dict(detail=str(exc)),
        status_code=status.HTTP_404_NOT_FOUND,
    )


async def store_error_handler(request: Request, exc: StoreError):
    """Answer with 500 when the storage fails

    The adapter has already logged the underlying exception.

    """
    return JSONResponse(
        content=dict(detail=str(exc)),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def create_app(
    todo_repository: TodoRepository,
    label_repository: LabelRepository,
    *,
    cfg: TodoAppConfig = None,
) -> FastAPI:
    """Assemble the API around the repositories provided

    :param todo_repository: storage for todo items
    :param label_repository: storage for labels
    :param cfg: optional config override, used for the CORS origin

    The repositories are placed into the application state, where the route
    dependencies find them.

    """
    cfg = cfg or config
    api = FastAPI(
        title="TODOAPP REST API",
        description="Manage todo items and the labels used to tag them.",
        version=__version__,
        license_info=dict(name="MIT License", url="https://mit-license.org/"),
        openapi_tags=tags_metadata,
    )
    repositories: Dict[Type[Repository], Repository] = {
        TodoRepository: todo_repository,
        LabelRepository: label_repository,
    }
    setattr(api.state, REPOSITORIES, repositories)

    api.include_router(root.api)
    api.include_router(todos.api)
    api.include_router(labels.api)

    api.add_exception_handler(
        RequestValidationError, validation_exception_handler
    )
    api.add_exception_handler(NotFound, not_found_handler)
    api.add_exception_handler(StoreError, store_error_handler)

    api.add_middleware(
        CORSMiddleware,
        allow_origins=[cfg.todoapp.cors_origin],
        allow_methods=["*"],
        allow_headers=["content-type"],
    )
    logger.debug(
        f"API assembled with {type(todo_repository).__name__} and "
        f"{type(label_repository).__name__}"
    )
    return api


def build_repositories(cfg: TodoAppConfig = None, engine: Engine = None):
    """Build the repositories selected by the `storage` setting

    :param cfg: optional config override
    :param engine: optional engine to use instead of building one from the
      config, when `storage` is `sqla`

    :raises ConfigurationError: if `storage` is not `sqla` or `memory`

    :returns: a tuple of the todo repository and the label repository

    Both relational repositories share one engine, and so one connection
    pool.

    """
    cfg = cfg or config
    storage = cfg.todoapp.storage
    if storage == "memory":
        return MemoryTodoAdapter(), MemoryLabelAdapter()
    if storage == "sqla":
        engine = engine or create_sql_engine(cfg)
        return SQLATodoAdapter(engine=engine), SQLALabelAdapter(engine=engine)
    raise ConfigurationError(
        f"Configured storage must be one of 'sqla', 'memory'; not {storage!r}"
    )


def default_app() -> FastAPI:
    """Application factory for uvicorn, configured from the config file"""
    todoapp.logging.configure_logging(
        config.todoapp.log_level, config.todoapp.syslog
    )
    logger.info(
        f"TODOAPP v{__version__} starting with {config.todoapp.storage} "
        f"storage; config from {config.todoapp.config_file}"
    )
    return create_app(*build_repositories(config), cfg=config)
