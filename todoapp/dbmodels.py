"""
TODOAPP data schemata
---------------------

Database schema expressed as `SQLAlchemy`_ `ORM Models`_

The ORM models correspond to the Pydantic models used by the API.  There is
a subclass of the metaclass, :class:`~sqlalchemy.orm.DeclarativeMeta`, which
provides extra logic to the database models to build the statements used by
:mod:`~todoapp.sqla_adapter`.

.. _sqlalchemy: https://www.sqlalchemy.org/
.. _orm models: https://docs.sqlalchemy.org/en/20/orm/quickstart.html

"""
from typing import Any, Dict
from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    select,
    update,
    delete,
)
from sqlalchemy.orm import declarative_base, DeclarativeMeta
from sqlalchemy.schema import MetaData
from todoapp.models import TEXT_MAX_LENGTH

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
"""SQLA's recommended naming convention for constraints"""


# declare subclass of the SQLAlchemy DeclarativeMeta class
# in order to attach custom routines to the ORM objects
class DB_Customizations(DeclarativeMeta):
    """Custom ORM metaclass

    These routines allow calls to the ORM class itself, to get it to return
    statement objects (objects defined in :mod:`sqlalchemy.sql.expression`).
    All of the methods defined here become available as class methods on the
    classes derived from :const:`~.DB_Base`.

    """

    def select_by_id(cls, id: int):
        """SELECT (load) a single object by ID"""
        return select(cls).where(cls.id == id)

    def select_all(cls):
        """SELECT every object, in order of ID"""
        return select(cls).order_by(cls.id)

    def remove_by_id(cls, id: int):
        """Return a Delete for the object with ID `id`"""
        return delete(cls).where(cls.id == id)

    def update_by_id(cls, id: int, values: Dict[str, Any]):
        """Return an Update statement setting `values` on object `id`

        :param int id: the ID of the object to update
        :param values: column names mapped onto their new values

        """
        return update(cls).where(cls.id == id).values(**values)


DB_Base = declarative_base(
    metaclass=DB_Customizations,
    metadata=MetaData(naming_convention=convention),
)
"""DB_Base serves as the base of all `ORM models`_

All of the magic provided for the ORM layer is implemented in the metaclass,
:class:`~.DB_Customizations`.

"""


class Todo(DB_Base):
    """ORM model for todo items"""

    __tablename__ = "todos"
    __table_args__ = dict(sqlite_autoincrement=True)  # never reuse IDs
    id = Column(Integer, primary_key=True)
    """integer auto-incremented primary key"""
    text = Column(String(TEXT_MAX_LENGTH), nullable=False)
    """string of up to 100 chars"""
    completed = Column(Boolean, nullable=False, default=False)
    """completion flag, false when created"""

    def __repr__(self):
        return (
            f"Todo[ORM](id={self.id!r}, text={self.text!r}, "
            f"completed={self.completed!r})"
        )


class Label(DB_Base):
    """ORM model for labels"""

    __tablename__ = "labels"
    __table_args__ = dict(sqlite_autoincrement=True)  # never reuse IDs
    id = Column(Integer, primary_key=True)
    name = Column(String(TEXT_MAX_LENGTH), nullable=False)
    """string of up to 100 chars"""

    def __repr__(self):
        return f"Label[ORM](id={self.id!r}, name={self.name!r})"
