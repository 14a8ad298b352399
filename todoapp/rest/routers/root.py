"""
The greeting route
------------------

A fixed greeting is served at the top of the API.  It touches no storage,
which makes it handy for checking that the service is up.

"""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

GREETING = "Hello, world!"

api = APIRouter(tags=["root"])
"""The greeting router"""


@api.get("/", response_class=PlainTextResponse)
async def root():
    """Answer with a plain-text greeting"""
    return GREETING
