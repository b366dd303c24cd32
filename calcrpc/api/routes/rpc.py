"""RPC Endpoint: POST {rpc_path} carrying a methodCall body.

Invariants:
    - Always HTTP 200 with a text/xml envelope; faults travel in the body
    - The route only moves bytes; decoding and dispatch live in services/rpc_service
"""

import logging
import socket
from functools import lru_cache

from fastapi import APIRouter, Request, status
from fastapi.responses import Response

from calcrpc.services.rpc_service import respond

logger = logging.getLogger(__name__)

XML_MEDIA_TYPE = "text/xml"


@lru_cache
def local_hostname() -> str:
    return socket.gethostname()


def xml_response(body: str, advertise_hostname: bool = False) -> Response:
    headers = {"Host": local_hostname()} if advertise_hostname else None
    return Response(
        content=body, status_code=status.HTTP_200_OK,
        media_type=XML_MEDIA_TYPE, headers=headers,
    )


def create_router(rpc_path: str, advertise_hostname: bool = True) -> APIRouter:
    """Router serving the RPC endpoint at rpc_path."""
    router = APIRouter(tags=["rpc"])

    @router.post(rpc_path)
    async def rpc_endpoint(request: Request):
        body = await request.body()
        content_type = request.headers.get("content-type", "")
        if not content_type.startswith(XML_MEDIA_TYPE):
            logger.warning(
                f"RPC request with content-type {content_type!r}",
                extra={"path": request.url.path},
            )
        return xml_response(respond(body), advertise_hostname)

    return router
