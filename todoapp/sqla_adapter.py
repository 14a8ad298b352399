"""Repositories based on SQLAlchemy
--------------------------------

These adapters keep entities in a relational database.  Every operation
opens its own :class:`~sqlalchemy.orm.Session` on a shared
:class:`~sqlalchemy.engine.Engine`, so connections come from the engine's
pool and are returned to it when the operation completes.  No transaction
spans more than one operation.

Errors raised by SQLAlchemy_ (including failure to obtain a connection from
the pool) are logged and re-raised as :exc:`~todoapp.errors.StoreError`.

.. _sqlalchemy: https://www.sqlalchemy.org/

"""
import logging
from functools import wraps
from typing import List
from pydantic import BaseModel
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from todoapp.config import TodoAppConfig
from todoapp.dbsession import create_sql_engine
from todoapp.adapter import Repository, TodoRepository, LabelRepository
from todoapp.errors import NotFound, StoreError
from todoapp.models import TodoAppModel, Patch
from todoapp import dbmodels

logger = logging.getLogger(__name__)


def db_interaction(db_func):
    """Decorator for database interactions

    The wrapped method receives a :class:`~sqlalchemy.orm.Session` as its
    first argument after `self`.  The session is closed when the method
    returns or raises.  Any :exc:`~sqlalchemy.exc.SQLAlchemyError` is logged
    and converted to a :exc:`~todoapp.errors.StoreError`; other exceptions,
    such as :exc:`~todoapp.errors.NotFound`, pass through untouched.

    """

    @wraps(db_func)
    def wrapped_interaction(self, *args, **kwargs):
        with self.Session() as session:
            try:
                return db_func(self, session, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.exception(
                    f"{db_func.__name__}:{self.model_name()}"
                    f"({args!r},{kwargs!r})"
                )
                raise StoreError(
                    f"Unable to {db_func.__name__} {self.model_name()}"
                ) from e

    return wrapped_interaction


class SQLAAdapter(Repository):
    """Base class for repositories using SQLAlchemy_

    Subclasses set :attr:`orm_model` to the ORM model backing the entity.

    """

    orm_model = dbmodels.DB_Base

    def __init__(self, *, cfg: TodoAppConfig = None, engine: Engine = None):
        """
        :param cfg: a config to build an engine from, if `engine` is not
          provided; defaults to the global config
        :param engine: an engine to share with other adapters

        """
        if engine is None:
            if cfg:
                logger.debug(
                    "Passed override config based on "
                    + cfg.todoapp.config_file
                )
            engine = create_sql_engine(cfg)
        self.sql_engine = engine
        self.Session = sessionmaker(self.sql_engine)

    def initialize_tables(self):
        """Set up required tables.

        The schemata for the tables are defined in :mod:`~.dbmodels`.  We can
        create everything in a stroke by simply invoking :func:`create_all` on
        the SQLAlchemy_ metadata.  Existing tables are left alone.

        """
        dbmodels.DB_Base.metadata.create_all(self.sql_engine)

    @db_interaction
    def create(self, session, payload: BaseModel) -> TodoAppModel:
        item = self.orm_model(**payload.model_dump())
        session.add(item)
        session.commit()
        return self.model.wrap(item)

    @db_interaction
    def find(self, session, item_id: int) -> TodoAppModel:
        item = session.scalar(self.orm_model.select_by_id(item_id))
        if item is None:
            raise NotFound(self.model_name(), item_id)
        return self.model.wrap(item)

    @db_interaction
    def all(self, session) -> List[TodoAppModel]:
        return self.model.wrap(
            session.scalars(self.orm_model.select_all()).all()
        )

    @db_interaction
    def update(self, session, item_id: int, patch: Patch) -> TodoAppModel:
        values = patch.changes()
        if values:
            result = session.execute(
                self.orm_model.update_by_id(item_id, values)
            )
            if result.rowcount < 1:
                raise NotFound(self.model_name(), item_id)
            session.commit()
        item = session.scalar(self.orm_model.select_by_id(item_id))
        if item is None:
            raise NotFound(self.model_name(), item_id)
        return self.model.wrap(item)

    @db_interaction
    def delete(self, session, item_id: int) -> None:
        result = session.execute(self.orm_model.remove_by_id(item_id))
        if result.rowcount < 1:
            raise NotFound(self.model_name(), item_id)
        session.commit()


class SQLATodoAdapter(SQLAAdapter, TodoRepository):
    """Todo items kept in the `todos` table"""

    orm_model = dbmodels.Todo


class SQLALabelAdapter(SQLAAdapter, LabelRepository):
    """Labels kept in the `labels` table"""

    orm_model = dbmodels.Label
