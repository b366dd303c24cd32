"""Root conftest: shared test configuration and HTTP clients."""

import os

# Keep a developer's .env / shell settings out of the tests
os.environ["CALCRPC_RPC_PATH"] = "/RPC"
os.environ["CALCRPC_SERVER_URL"] = "http://testserver/RPC"

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from calcrpc.main import app


@pytest.fixture
async def client():
    """Async client talking to the ASGI app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def sync_client():
    """Sync httpx client (TestClient) bound to the app, for CalcRpcClient."""
    with TestClient(app) as c:
        yield c
