"""
In-memory repositories
----------------------

These adapters keep their entities in a :obj:`dict` owned by the adapter
instance, so two instances never share state.  IDs come from a counter which
only ever increases, so an ID is not reused after its entity is deleted.

Every access to the collection happens while holding the instance's lock.
Entities are copied on the way in and on the way out; callers never hold a
reference to the stored object.

They are used in tests, and may also be selected for a throwaway server by
setting `storage = memory` in the `[TodoApp]` config block.

"""
import threading
from typing import Dict, List
from pydantic import BaseModel
from todoapp.adapter import Repository, TodoRepository, LabelRepository
from todoapp.errors import NotFound
from todoapp.models import TodoAppModel, Patch


class MemoryAdapter(Repository):
    """Base class for in-memory repositories"""

    def __init__(self):
        self._lock = threading.Lock()
        self._items: Dict[int, TodoAppModel] = {}
        self._counter = 0

    def _get(self, item_id: int) -> TodoAppModel:
        """Return the stored entity; call only while holding the lock"""
        try:
            return self._items[item_id]
        except KeyError:
            raise NotFound(self.model_name(), item_id) from None

    def create(self, payload: BaseModel) -> TodoAppModel:
        with self._lock:
            self._counter += 1
            item = self.model(id=self._counter, **payload.model_dump())
            self._items[item.id] = item
            return item.model_copy()

    def find(self, item_id: int) -> TodoAppModel:
        with self._lock:
            return self._get(item_id).model_copy()

    def all(self) -> List[TodoAppModel]:
        with self._lock:
            return [item.model_copy() for item in self._items.values()]

    def update(self, item_id: int, patch: Patch) -> TodoAppModel:
        with self._lock:
            item = self._get(item_id).model_copy(update=patch.changes())
            self._items[item_id] = item
            return item.model_copy()

    def delete(self, item_id: int) -> None:
        with self._lock:
            self._get(item_id)
            del self._items[item_id]


class MemoryTodoAdapter(MemoryAdapter, TodoRepository):
    """Todo items kept in memory"""


class MemoryLabelAdapter(MemoryAdapter, LabelRepository):
    """Labels kept in memory"""
