"""
Repository interfaces
---------------------

The API routes never talk to a storage technology directly.  Instead, they
are handed a repository for each kind of entity, which implements the
interface described here.  There are two families of implementation:

  * :mod:`~todoapp.sqla_adapter` keeps entities in a relational database
    via SQLAlchemy

  * :mod:`~todoapp.memory_adapter` keeps entities in a lock-guarded
    :obj:`dict`, which is handy for tests

The choice is made once, when the application is assembled by
:func:`todoapp.rest.api.create_app`.

Absence of a record is an ordinary outcome, reported by raising
:exc:`~todoapp.errors.NotFound`.  Failure of the storage itself is reported
by raising :exc:`~todoapp.errors.StoreError`.

"""
from abc import ABC, abstractmethod
from typing import List, Type
from todoapp.models import (
    TodoAppModel,
    Todo,
    Label,
    CreateTodo,
    CreateLabel,
    UpdateTodo,
    UpdateLabel,
    Patch,
)
from pydantic import BaseModel


class Repository(ABC):
    """Abstract base class for entity persistence operations

    Subclasses set :attr:`model` to the API model of the entity they store,
    and :attr:`create_model` and :attr:`update_model` to the payloads
    accepted by :meth:`create` and :meth:`update`.

    """

    model: Type[TodoAppModel] = TodoAppModel
    create_model: Type[BaseModel] = BaseModel
    update_model: Type[Patch] = Patch

    @classmethod
    def model_name(cls) -> str:
        """Convenience function to get the lowercase name of the model"""
        return cls.model.__name__.lower()

    @abstractmethod
    def create(self, payload: BaseModel) -> TodoAppModel:
        """Store a new entity built from `payload`

        Returns the entity, including its newly assigned ID.

        :raises StoreError: if the entity could not be written

        """

    @abstractmethod
    def find(self, item_id: int) -> TodoAppModel:
        """Return the entity with ID `item_id`

        :raises NotFound: if there is no such entity

        """

    @abstractmethod
    def all(self) -> List[TodoAppModel]:
        """Return every stored entity"""

    @abstractmethod
    def update(self, item_id: int, patch: Patch) -> TodoAppModel:
        """Apply the non-null fields of `patch` to entity `item_id`

        Returns the entity as it is after the update.

        :raises NotFound: if there is no such entity

        """

    @abstractmethod
    def delete(self, item_id: int) -> None:
        """Remove entity `item_id`

        :raises NotFound: if there is no such entity

        """


class TodoRepository(Repository):
    """Persistence of :class:`~todoapp.models.Todo` items

    :meth:`create` accepts a :class:`~todoapp.models.CreateTodo` and
    :meth:`update` an :class:`~todoapp.models.UpdateTodo`.

    """

    model = Todo
    create_model = CreateTodo
    update_model = UpdateTodo


class LabelRepository(Repository):
    """Persistence of :class:`~todoapp.models.Label` objects

    :meth:`create` accepts a :class:`~todoapp.models.CreateLabel` and
    :meth:`update` an :class:`~todoapp.models.UpdateLabel`.

    """

    model = Label
    create_model = CreateLabel
    update_model = UpdateLabel
