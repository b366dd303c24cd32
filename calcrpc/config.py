"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a CALCRPC_-prefixed environment variable
    - get_settings() is cached (lru_cache): single instance per process
    - rpc_path always starts with "/"
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server, client and logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="CALCRPC_", env_file=".env", case_sensitive=False,
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    rpc_path: str = "/RPC"
    advertise_hostname: bool = True

    # Client
    server_url: str = "http://localhost:8080/RPC"
    client_timeout_seconds: float = 10.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("rpc_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        v = v.strip()
        return v if v.startswith("/") else f"/{v}"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
