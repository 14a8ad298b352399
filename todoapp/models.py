"""
API data models
---------------

`Pydantic`_ models describing the entities exchanged with API clients, and
the payloads accepted when creating and updating them.

Entities are validated from ORM rows as well as from plain values, so the
relational adapter may hand rows from :mod:`~todoapp.dbmodels` straight to
:meth:`~.TodoAppModel.wrap`.

.. _pydantic: https://docs.pydantic.dev/

"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

TEXT_MAX_LENGTH = 100
"""Longest text accepted for a todo item or label name"""


class TodoAppModel(BaseModel):
    """Base API data model"""

    model_config = ConfigDict(from_attributes=True)

    id: int

    @classmethod
    def wrap(cls, orm_instance):
        """create a pydantic model (or a list of them) from ORM instances"""
        if orm_instance is None:
            return orm_instance
        try:
            orm_iter = iter(orm_instance)
            return [cls.model_validate(oi) for oi in orm_iter]
        except TypeError:
            return cls.model_validate(orm_instance)


class Todo(TodoAppModel):
    """API model to represent todo items"""

    model_config = ConfigDict(
        json_schema_extra=dict(
            example=dict(id=1, text="buy milk", completed=False)
        )
    )

    text: str
    completed: bool = False


class Label(TodoAppModel):
    """API model to represent labels"""

    model_config = ConfigDict(
        json_schema_extra=dict(example=dict(id=1, name="urgent"))
    )

    name: str


class CreateTodo(BaseModel):
    """Payload for creating a todo item"""

    text: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)


class CreateLabel(BaseModel):
    """Payload for creating a label"""

    name: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)


class Patch(BaseModel):
    """Base of the update payloads

    Every field of a patch is optional.  Fields which are omitted, or sent as
    `null`, leave the stored value untouched.  An `id` may be sent along, as
    clients tend to echo the whole record back, but the ID in the route is
    the one which counts.

    """

    id: Optional[int] = None

    def changes(self) -> Dict[str, Any]:
        """Return the fields which should be written, keyed by name"""
        return self.model_dump(exclude_none=True, exclude={"id"})


class UpdateTodo(Patch):
    """Payload for updating a todo item"""

    text: Optional[str] = Field(
        None, min_length=1, max_length=TEXT_MAX_LENGTH
    )
    completed: Optional[bool] = None


class UpdateLabel(Patch):
    """Payload for updating a label"""

    name: Optional[str] = Field(
        None, min_length=1, max_length=TEXT_MAX_LENGTH
    )
