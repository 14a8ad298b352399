"""
Custom exceptions
-----------------

The repositories report absent records and storage failures by raising the
exceptions defined here.  They are translated into HTTP responses in exactly
one place, the exception handlers installed by
:func:`todoapp.rest.api.create_app`.

"""


class TodoAppException(Exception):
    """Parent class for TODOAPP exceptions"""


class ConfigurationError(TodoAppException):
    """There was an error in the setting of configuration elements"""


class RepositoryException(TodoAppException):
    """Parent of exceptions raised by repositories"""


class NotFound(RepositoryException):
    """No record exists with the requested ID"""

    def __init__(self, model: str, item_id: int):
        self.model = model
        self.item_id = item_id
        super().__init__(f"No {model} could be found with id {item_id}")


class StoreError(RepositoryException):
    """The underlying storage failed to complete an operation"""
