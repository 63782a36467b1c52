# -*- coding: utf-8 -*-
"""Location: ./execgateway/handler.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

One-shot entry point.

For hosts that invoke the application once per request with no guarantee the
process survives (serverless platforms). ``handler`` is a plain ASGI callable:
it makes sure the backing store is connected, then runs the same pipeline the
long-running listener serves and returns once the response is written.

Deploy by pointing the platform at ``execgateway.handler:handler``.
"""

# Third-Party
from fastapi import FastAPI
from starlette.responses import JSONResponse
from starlette.types import Receive, Scope, Send

# First-Party
from execgateway.errors import BackingStoreConnectionError, GENERIC_ENTRY_ERROR_MESSAGE, public_message
from execgateway.main import app as default_app
from execgateway.routers.diagnostics import DIAGNOSTIC_PATHS
from execgateway.services.logging_service import LoggingService

logger = LoggingService().get_logger(__name__)


def needs_backing_store(scope: Scope) -> bool:
    """Whether a request has to wait for the backing store.

    Diagnostic routes and pre-flight requests never reach the store.

    Args:
        scope: ASGI scope of the request.

    Returns:
        bool: True for every other HTTP request.

    Examples:
        >>> needs_backing_store({"type": "http", "method": "GET", "path": "/health"})
        False
        >>> needs_backing_store({"type": "http", "method": "OPTIONS", "path": "/api/v1/user/"})
        False
        >>> needs_backing_store({"type": "http", "method": "GET", "path": "/api/v1/user/"})
        True
    """
    if scope["type"] != "http":
        return False
    return scope["method"] != "OPTIONS" and scope.get("path", "") not in DIAGNOSTIC_PATHS


class OneShotHandler:
    """Run one request through ``app`` after the backing store is ready."""

    def __init__(self, app: FastAPI) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if needs_backing_store(scope):
            try:
                await self.app.state.connection_manager.ensure_ready()
            except BackingStoreConnectionError as exc:
                logger.error(f"Serverless function error: {exc}")
                message = public_message(exc, self.app.state.diagnostic_mode, GENERIC_ENTRY_ERROR_MESSAGE)
                await JSONResponse({"success": False, "message": message}, status_code=500)(scope, receive, send)
                return
        await self.app(scope, receive, send)


handler = OneShotHandler(default_app)
