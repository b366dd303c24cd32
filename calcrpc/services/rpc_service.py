"""RPC Service: request body in, response envelope out.

Invariants:
    - handle_request() never raises: decode errors become Faults here and only here
    - Unexpected exceptions are logged with traceback and answered as MALFORMED_REQUEST
    - Every call is handled exactly once (no retry)
"""

import logging

from calcrpc.core.codec import decode_call, encode_response
from calcrpc.core.dispatch import execute
from calcrpc.core.domain_types import Fault, FaultCode, FaultMessage, Response
from calcrpc.core.errors import CalcRpcError

logger = logging.getLogger(__name__)


def handle_request(body: str | bytes) -> Response:
    """Decode, validate and execute one methodCall body."""
    try:
        call = decode_call(body)
    except CalcRpcError as e:
        logger.warning(
            f"Rejected request: {e}",
            extra={"fault_code": int(e.code)},
        )
        return e.to_fault()
    except Exception:
        logger.error("Unclassified failure while decoding request", exc_info=True)
        return Fault(FaultCode.MALFORMED_REQUEST, FaultMessage.MALFORMED_REQUEST)

    response = execute(call)
    if isinstance(response, Fault):
        logger.warning(
            f"{call.name} faulted: {response.message}",
            extra={
                "method_name": call.name,
                "arg_count": len(call.args),
                "fault_code": int(response.code),
            },
        )
    else:
        logger.info(
            f"{call.name} -> {response.value}",
            extra={"method_name": call.name, "arg_count": len(call.args)},
        )
    return response


def respond(body: str | bytes) -> str:
    """handle_request() followed by encoding; the HTTP route's only entry point."""
    return encode_response(handle_request(body))
