"""calcrpc API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CalcRpcError → Fault envelopes
    - Logging configured on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from calcrpc import __version__
from calcrpc.api.error_handlers import register_error_handlers
from calcrpc.api.routes import health, root, rpc
from calcrpc.config import Settings, get_settings
from calcrpc.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info(f"calcrpc listening for calls on {settings.rpc_path}")
        yield
        logger.info("calcrpc shutting down")

    app = FastAPI(title="calcrpc", version=__version__, lifespan=lifespan)

    app.include_router(rpc.create_router(settings.rpc_path, settings.advertise_hostname))
    app.include_router(root.router)
    app.include_router(health.router)

    register_error_handlers(app, settings.rpc_path)
    return app


app = create_app()
