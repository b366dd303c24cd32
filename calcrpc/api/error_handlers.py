"""Error Handlers: global exception handlers for the calcrpc API.

Invariants:
    - CalcRpcError → Fault envelope, HTTP 200, text/xml
    - Exception (catch-all) on the RPC path → MALFORMED_REQUEST Fault envelope, HTTP 200
    - Exception elsewhere → JSON 500 that never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from calcrpc.api.routes.rpc import xml_response
from calcrpc.core.codec import encode_fault
from calcrpc.core.domain_types import FaultCode, FaultMessage
from calcrpc.core.errors import CalcRpcError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, rpc_path: str) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(CalcRpcError, calcrpc_error_handler)
    app.add_exception_handler(Exception, _make_generic_handler(rpc_path))


async def calcrpc_error_handler(request: Request, exc: CalcRpcError):
    """Answer any escaped calcrpc error with its Fault envelope.

    The RPC route converts errors itself (services/rpc_service.respond never
    raises); this handler only runs for a CalcRpcError raised outside it.
    """
    logger.error(
        f"CalcRpcError: {exc.message}",
        extra={"fault_code": int(exc.code), "path": request.url.path},
    )
    fault = exc.to_fault()
    return xml_response(encode_fault(fault.code, fault.message))


def _make_generic_handler(rpc_path: str):
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        if request.url.path == rpc_path:
            return xml_response(encode_fault(
                FaultCode.MALFORMED_REQUEST, FaultMessage.MALFORMED_REQUEST,
            ))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )

    return generic_error_handler
