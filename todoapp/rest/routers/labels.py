"""
**Label** record management implemented by factories
----------------------------------------------------

This module defines the API router for **Label** record manipulation, built
the same way as the :mod:`~.todos` router.

"""
from typing import List
from fastapi import APIRouter, Response, status
from todoapp.adapter import LabelRepository
from todoapp.models import Label
from todoapp.rest.routers.common import (
    get_item_by_id,
    list_items,
    create_item,
    delete_item,
    update_item,
)

api = APIRouter(
    prefix="/labels",
    tags=["labels"],
    responses={404: {"description": "Label not found."}},
)
"""The **Label** record management API router"""

api.get("", response_model=List[Label])(list_items(LabelRepository))

api.get("/{item_id}", response_model=Label)(get_item_by_id(LabelRepository))

api.post("", status_code=status.HTTP_201_CREATED, response_model=Label)(
    create_item(LabelRepository)
)

api.patch("/{item_id}", response_model=Label)(update_item(LabelRepository))

api.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)(delete_item(LabelRepository))
