"""HTTP surface: POST /RPC, root path answers and health probe.

Tests cover:
    - every RPC outcome is HTTP 200 text/xml, faults included
    - POST / is 404, other methods on / are 405, unknown paths 404
    - Host header advertised on RPC responses
    - concurrent requests each get their own answer
    - a non-XML content type is answered but logged as a warning
"""

import asyncio
import logging

import pytest

from calcrpc.core.codec import decode_response, encode_call
from calcrpc.core.domain_types import Fault, FaultMessage, Success

XML_HEADERS = {"Content-Type": "text/xml"}


async def _rpc(client, body):
    return await client.post("/RPC", content=body, headers=XML_HEADERS)


@pytest.mark.asyncio
async def test_rpc_success(client):
    response = await _rpc(client, encode_call("add", [1, 2, 3, 4, 5]))
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/xml")
    assert decode_response(response.content) == Success(15)


@pytest.mark.asyncio
async def test_rpc_fault_still_200(client):
    response = await _rpc(client, encode_call("divide", [10, 0]))
    assert response.status_code == 200
    assert decode_response(response.content) == Fault(1, "Divide by zero")


@pytest.mark.asyncio
async def test_rpc_type_fault(client):
    body = (
        "<methodCall><methodName>add</methodName><params>"
        "<param><value><string>1</string></value></param>"
        "</params></methodCall>"
    )
    response = await _rpc(client, body)
    assert response.status_code == 200
    assert decode_response(response.content) == Fault(3, FaultMessage.UNSUPPORTED_TYPE)


@pytest.mark.asyncio
async def test_rpc_malformed_body_is_fault_envelope(client):
    response = await _rpc(client, "this is not xml")
    assert response.status_code == 200
    assert decode_response(response.content) == Fault(2, FaultMessage.MALFORMED_REQUEST)


@pytest.mark.asyncio
async def test_rpc_unknown_operation(client):
    response = await _rpc(client, encode_call("unknown_op", [1]))
    assert decode_response(response.content) == Fault(1, FaultMessage.UNEXPECTED_ARGUMENTS)


@pytest.mark.asyncio
async def test_rpc_advertises_host(client):
    response = await _rpc(client, encode_call("add", []))
    assert response.headers.get("host")


@pytest.mark.asyncio
async def test_rpc_get_not_allowed(client):
    response = await client.get("/RPC")
    assert response.status_code == 405


@pytest.mark.asyncio
async def test_post_root_is_404(client):
    response = await client.post("/", content="x")
    assert response.status_code == 404
    assert response.text == "Not found."


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "OPTIONS", "PATCH"])
async def test_other_methods_on_root_are_405(client, method):
    response = await client.request(method, "/")
    assert response.status_code == 405
    assert response.text == "Unsupported request."


@pytest.mark.asyncio
async def test_unknown_path_is_404(client):
    response = await client.post("/rpc2", content="x")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_concurrent_requests_get_their_own_results(client):
    string_param = (
        "<methodCall><methodName>add</methodName><params>"
        "<param><value><string>1</string></value></param>"
        "</params></methodCall>"
    )
    cases = [
        (encode_call("add", [1, 2, 3]), Success(6)),
        (encode_call("multiply", [3, 4]), Success(12)),
        (encode_call("divide", [1, 0]), Fault(1, "Divide by zero")),
        (string_param, Fault(3, FaultMessage.UNSUPPORTED_TYPE)),
        (encode_call("subtract", [6, 12]), Success(-6)),
    ] * 4
    responses = await asyncio.gather(*(_rpc(client, body) for body, _ in cases))
    for response, (_, expected) in zip(responses, cases):
        assert response.status_code == 200
        assert decode_response(response.content) == expected


@pytest.mark.asyncio
async def test_non_xml_content_type_is_logged(client, caplog):
    with caplog.at_level(logging.WARNING, logger="calcrpc.api.routes.rpc"):
        response = await client.post(
            "/RPC",
            content=encode_call("add", [2, 4]),
            headers={"Content-Type": "application/json"},
        )
    assert response.status_code == 200
    assert decode_response(response.content) == Success(6)
    assert any(
        r.name == "calcrpc.api.routes.rpc" and r.levelno == logging.WARNING
        for r in caplog.records
    )
