# -*- coding: utf-8 -*-
"""Location: ./execgateway/services/execution_proxy.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Execution Proxy.

Forwards execution requests to the external execution engine (a Piston
compatible ``/execute`` endpoint) and relays its answer untouched. The proxy
keeps no state between calls: no retries, no caching, no rate limiting.
"""

# Standard
from typing import Any, Dict, Optional

# Third-Party
import httpx

# First-Party
from execgateway.errors import ExecutionProxyError
from execgateway.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)


class ExecutionProxy:
    """Thin async client for the execution engine.

    Attributes:
        engine_url (str): Invocation endpoint of the execution engine.
        client (httpx.AsyncClient): The underlying HTTP client.
    """

    def __init__(self, engine_url: str, timeout: Optional[float] = None, client_args: Optional[Dict[str, Any]] = None):
        """
        Initializes the ExecutionProxy.

        Args:
            engine_url (str): Invocation endpoint of the execution engine.
            timeout (float, optional): Seconds to wait on the engine. None waits indefinitely.
            client_args (dict, optional): Additional arguments for ``httpx.AsyncClient``, e.g. ``transport``.
        """
        self.engine_url = engine_url
        self.client_args = {"timeout": httpx.Timeout(timeout), **(client_args or {})}
        self.client = httpx.AsyncClient(**self.client_args)

    async def execute(self, payload: Dict[str, Any]) -> Any:
        """
        Forward one execution request.

        Args:
            payload (dict): Request body as submitted by the caller.

        Returns:
            Any: The engine's JSON payload, unmodified.

        Raises:
            ExecutionProxyError: On network failure, timeout, non-2xx status or an undecodable body.
        """
        logger.debug(f"Forwarding execution request for {payload.get('language')} {payload.get('version')} to {self.engine_url}")
        try:
            response = await self.client.post(self.engine_url, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(f"Execution engine returned {exc.response.status_code}")
            raise ExecutionProxyError(str(exc), status_code=exc.response.status_code) from exc
        except httpx.TimeoutException as exc:
            logger.warning(f"Execution engine timed out: {exc!r}")
            raise ExecutionProxyError(str(exc) or "Execution engine timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning(f"Execution engine unreachable: {exc!r}")
            raise ExecutionProxyError(str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            logger.warning(f"Execution engine returned a non-JSON body: {exc}")
            raise ExecutionProxyError(f"Invalid response from execution engine: {exc}") from exc

    async def aclose(self) -> None:
        """
        Closes the underlying HTTP client gracefully.
        """
        await self.client.aclose()

    async def __aenter__(self):
        """
        Asynchronous context manager entry point.

        Returns:
            ExecutionProxy: The proxy instance.
        """
        return self

    async def __aexit__(self, *args):
        """
        Asynchronous context manager exit point.
        """
        await self.aclose()
