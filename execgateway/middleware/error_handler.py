# -*- coding: utf-8 -*-
"""
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Centralized error handler for the Execution Gateway.

Any exception escaping route dispatch (database failures, proxy bugs, anything
else) is logged with its traceback and turned into the failure envelope
``{"success": false, "message": ...}`` with status 500.
"""

# Third-Party
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

# First-Party
from execgateway.errors import public_message
from execgateway.services.logging_service import LoggingService

logger = LoggingService().get_logger(__name__)


class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    """
    Catch-all for errors raised downstream of the middleware stack.

    ``diagnostic_mode`` is fixed when the pipeline is built: when set, the
    envelope carries the underlying error text, otherwise a generic message.
    """

    def __init__(self, app, diagnostic_mode: bool = False):
        super().__init__(app)
        self.diagnostic_mode = diagnostic_mode

    async def dispatch(self, request: Request, call_next) -> Response:
        """
        Run the downstream handler and convert unhandled errors.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware or endpoint handler

        Returns:
            The downstream response, or a 500 failure envelope
        """
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
            return JSONResponse(
                {"success": False, "message": public_message(exc, self.diagnostic_mode)},
                status_code=500,
            )
