"""
**Todo** record management implemented by factories
---------------------------------------------------

This module defines the API router for **Todo** record manipulation.  All of
its routes are produced by the factories in :mod:`~.common`.

"""
from typing import List
from fastapi import APIRouter, Response, status
from todoapp.adapter import TodoRepository
from todoapp.models import Todo
from todoapp.rest.routers.common import (
    get_item_by_id,
    list_items,
    create_item,
    delete_item,
    update_item,
)

api = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={404: {"description": "Todo not found."}},
)
"""The **Todo** record management API router"""

api.get("", response_model=List[Todo])(list_items(TodoRepository))

api.get("/{item_id}", response_model=Todo)(get_item_by_id(TodoRepository))

api.post("", status_code=status.HTTP_201_CREATED, response_model=Todo)(
    create_item(TodoRepository)
)

api.patch("/{item_id}", response_model=Todo)(update_item(TodoRepository))

api.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)(delete_item(TodoRepository))
