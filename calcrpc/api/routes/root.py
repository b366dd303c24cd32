"""Root Path: fixed plain-text answers for requests to "/".

Invariants:
    - POST / answers 404 "Not found."
    - GET, PUT, DELETE, OPTIONS, PATCH / answer 405 "Unsupported request."
"""

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["root"])


@router.post("/", include_in_schema=False)
async def root_post():
    return PlainTextResponse("Not found.", status_code=status.HTTP_404_NOT_FOUND)


@router.api_route(
    "/", methods=["GET", "PUT", "DELETE", "OPTIONS", "PATCH"],
    include_in_schema=False,
)
async def root_unsupported():
    return PlainTextResponse(
        "Unsupported request.", status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
    )
