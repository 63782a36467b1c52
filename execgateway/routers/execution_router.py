# -*- coding: utf-8 -*-
"""Location: ./execgateway/routers/execution_router.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Code execution endpoint.

``POST /api/run`` hands the submitted program to the external execution
engine and relays the engine's payload as-is. The body is not checked here:
``{language, version, files}`` and any extra keys reach the engine unchanged,
and the engine's rejection comes back like any other engine failure, as
``500 {"error": message}``.
"""

# Standard
from typing import Any, Dict

# Third-Party
from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

# First-Party
from execgateway.errors import ExecutionProxyError
from execgateway.services.execution_proxy import ExecutionProxy
from execgateway.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["execution"])


@router.post("/run")
async def run_code(request: Request, payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    """Run source files on the execution engine.

    Args:
        request: Incoming request; the proxy lives on ``app.state``.
        payload: Submitted body, typically language, version and source files.

    Returns:
        JSONResponse: Engine payload with 200, or ``{"error": ...}`` with 500.
    """
    proxy: ExecutionProxy = request.app.state.execution_proxy
    try:
        result = await proxy.execute(payload)
    except ExecutionProxyError as exc:
        logger.error(f"Execution request failed: {exc}")
        return JSONResponse({"error": str(exc)}, status_code=500)
    return JSONResponse(result)
