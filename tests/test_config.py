"""Settings: defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from calcrpc.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("CALCRPC_RPC_PATH", raising=False)
    monkeypatch.delenv("CALCRPC_SERVER_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.rpc_path == "/RPC"
    assert settings.server_url == "http://localhost:8080/RPC"
    assert settings.log_format == "json"


def test_env_override(monkeypatch):
    monkeypatch.setenv("CALCRPC_PORT", "9090")
    monkeypatch.setenv("CALCRPC_RPC_PATH", "calc")
    monkeypatch.setenv("CALCRPC_LOG_FORMAT", "TEXT")
    settings = Settings(_env_file=None)
    assert settings.port == 9090
    assert settings.rpc_path == "/calc"
    assert settings.log_format == "text"


def test_invalid_log_format(monkeypatch):
    monkeypatch.setenv("CALCRPC_LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
