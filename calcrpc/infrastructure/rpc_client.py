"""RPC Client: encodes calls, POSTs them over httpx, decodes results.

Invariants:
    - One synchronous request per call(), no retry
    - Non-200 status and connection failures → TransportFault
    - Fault envelope → RemoteFault carrying faultCode/faultString
    - Malformed response bodies → ParseFault / TypeFault from the codec
    - Only closes the httpx.Client it created itself
"""

import logging

import httpx

from calcrpc.core.codec import decode_response, encode_call
from calcrpc.core.domain_types import Fault
from calcrpc.core.errors import RemoteFault, TransportFault

logger = logging.getLogger(__name__)

XML_HEADERS = {"Content-Type": "text/xml"}


class CalcRpcClient:
    """Calls the five arithmetic operations on a calcrpc server."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        self.url = url
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def call(self, name: str, *args: int) -> int:
        """Invoke name(*args) remotely and return the int32 result."""
        body = encode_call(name, args)
        try:
            response = self._http.post(self.url, content=body, headers=XML_HEADERS)
        except httpx.HTTPError as e:
            logger.warning(
                f"{name} request failed: {e}", extra={"method_name": name},
            )
            raise TransportFault(None, str(e)) from e

        if response.status_code != 200:
            raise TransportFault(response.status_code, response.text)

        result = decode_response(response.content)
        if isinstance(result, Fault):
            logger.debug(
                f"{name} returned fault {result.code}: {result.message}",
                extra={"method_name": name, "fault_code": result.code},
            )
            raise RemoteFault(result.code, result.message)
        return result.value

    def add(self, *args: int) -> int:
        return self.call("add", *args)

    def multiply(self, *args: int) -> int:
        return self.call("multiply", *args)

    def subtract(self, lhs: int, rhs: int) -> int:
        return self.call("subtract", lhs, rhs)

    def divide(self, lhs: int, rhs: int) -> int:
        return self.call("divide", lhs, rhs)

    def modulo(self, lhs: int, rhs: int) -> int:
        return self.call("modulo", lhs, rhs)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "CalcRpcClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
