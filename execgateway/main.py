# -*- coding: utf-8 -*-
"""Location: ./execgateway/main.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Execution Gateway - request pipeline.

``create_app`` builds the one FastAPI pipeline shared by both entry shapes:
the long-running listener started by ``execgateway serve`` and the one-shot
handler in ``execgateway.handler``. Stages run in this order for every
request:

    request logging -> origin policy (incl. pre-flight) -> static assets
    -> centralized error handler -> route dispatch

Request bodies and cookies are parsed lazily by the route that needs them.
Diagnostic routes are registered first and never touch the backing store or
the execution engine.
"""

# Standard
from contextlib import asynccontextmanager
from typing import Optional

# Third-Party
from fastapi import FastAPI

# First-Party
from execgateway import __version__
from execgateway.config import Settings, settings
from execgateway.errors import BackingStoreConnectionError
from execgateway.middleware.error_handler import ErrorEnvelopeMiddleware
from execgateway.middleware.origin_policy import OriginPolicy, OriginPolicyMiddleware
from execgateway.middleware.request_logging_middleware import RequestLoggingMiddleware
from execgateway.middleware.static_assets import StaticAssetsMiddleware
from execgateway.routers import diagnostics, execution_router, file_router, user_router
from execgateway.services.connection_manager import ConnectionManager
from execgateway.services.execution_proxy import ExecutionProxy
from execgateway.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    connection_manager: Optional[ConnectionManager] = None,
    execution_proxy: Optional[ExecutionProxy] = None,
    connect_on_startup: bool = False,
) -> FastAPI:
    """Build the request pipeline.

    Args:
        app_settings: Settings to use; defaults to the process settings.
        connection_manager: Backing-store connection owner; built from settings when omitted.
        execution_proxy: Execution engine client; built from settings when omitted.
        connect_on_startup: Reach the backing store during lifespan startup. Used by the
            long-running listener; a failure there is logged and retried on demand.

    Returns:
        FastAPI: The configured application.

    Examples:
        >>> app = create_app(Settings(environment="development"))
        >>> app.state.diagnostic_mode
        True
        >>> app.state.connection_manager.is_ready
        False
    """
    app_settings = app_settings or settings
    connection_manager = connection_manager or ConnectionManager(app_settings.database_url, echo=app_settings.database_echo)
    execution_proxy = execution_proxy or ExecutionProxy(app_settings.execution_engine_url, timeout=app_settings.execution_timeout)
    diagnostic_mode = app_settings.diagnostic_mode

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Startup and shutdown of the long-running listener.

        Args:
            _app: The application being served.

        Yields:
            None
        """
        await logging_service.initialize()
        if connect_on_startup:
            try:
                await connection_manager.ensure_ready()
            except BackingStoreConnectionError as exc:
                logger.error(f"Backing store unavailable at startup, retrying on demand: {exc}")
        logger.info(f"{app_settings.app_name} listening on port: http://localhost:{app_settings.port}")
        yield
        await execution_proxy.aclose()
        await connection_manager.close()
        await logging_service.shutdown()

    app = FastAPI(title=app_settings.app_name, version=__version__, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.environment = app_settings.environment
    app.state.diagnostic_mode = diagnostic_mode
    app.state.connection_manager = connection_manager
    app.state.execution_proxy = execution_proxy
    app.state.origin_policy = OriginPolicy(app_settings.allowed_origins)

    # Diagnostic routes first
    app.include_router(diagnostics.router)
    app.include_router(user_router.router)
    app.include_router(file_router.router)
    app.include_router(execution_router.router)

    # add_middleware wraps from the inside out: the last one added runs first
    app.add_middleware(ErrorEnvelopeMiddleware, diagnostic_mode=diagnostic_mode)
    app.add_middleware(StaticAssetsMiddleware, directory=app_settings.static_dir)
    app.add_middleware(OriginPolicyMiddleware, policy=app.state.origin_policy, diagnostic_mode=diagnostic_mode)
    app.add_middleware(RequestLoggingMiddleware, log_requests=app_settings.log_requests, max_body_size=app_settings.log_max_body_size)

    return app


app = create_app()
