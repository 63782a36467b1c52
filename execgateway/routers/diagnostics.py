# -*- coding: utf-8 -*-
"""Location: ./execgateway/routers/diagnostics.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Health and diagnostic endpoints.

These routes are terminal: they are registered ahead of the persistence and
execution routers and never touch the backing store or the execution engine.
"""

# Third-Party
from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

# First-Party
from execgateway.schemas import HealthResponse

router = APIRouter(tags=["diagnostics"])

DIAGNOSTIC_PATHS = frozenset({"/health", "/", "/favicon.ico"})


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Liveness probe reporting the configured environment.

    Args:
        request: Incoming request; the environment lives on ``app.state``.

    Returns:
        HealthResponse: ``{"status": "ok", "environment": ...}``.
    """
    return HealthResponse(status="ok", environment=request.app.state.environment)


@router.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    """No favicon; answer 204 so browsers stop asking."""
    return Response(status_code=204)


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plain-text banner."""
    return "API is running"
