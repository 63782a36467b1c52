# -*- coding: utf-8 -*-
"""Location: ./execgateway/middleware/origin_policy.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Origin Policy Guard.

``OriginPolicy.evaluate`` is a pure allow/deny decision over the request's
``Origin`` header and the process allow-list. ``OriginPolicyMiddleware`` is the
first stage of the pipeline: it rejects denied origins before anything else
runs, answers pre-flight requests itself, and decorates allowed responses with
the CORS headers.

Examples:
    >>> policy = OriginPolicy(["http://localhost:5173"])
    >>> policy.evaluate(None).allowed
    True
    >>> policy.evaluate("http://localhost:5173").allowed
    True
    >>> decision = policy.evaluate("https://evil.example.com")
    >>> decision.allowed, decision.reason == POLICY_VIOLATION_REASON
    (False, True)
"""

# Standard
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

# Third-Party
from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

# First-Party
from execgateway.errors import GENERIC_ERROR_MESSAGE
from execgateway.services.logging_service import LoggingService

logger = LoggingService().get_logger(__name__)

POLICY_VIOLATION_REASON = "The CORS policy for this site does not allow access from the specified Origin."
ALLOWED_METHODS: Tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
ALLOWED_HEADERS: Tuple[str, ...] = ("Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin")


@dataclass(frozen=True)
class PolicyDecision:
    """Outcome of an origin check."""

    allowed: bool
    reason: Optional[str] = None


ALLOW = PolicyDecision(allowed=True)


class OriginPolicy:
    """Immutable origin allow-list."""

    def __init__(self, allowed_origins: Iterable[str]):
        """Build the allow-list, dropping empty entries and duplicates.

        Args:
            allowed_origins: Origins in priority order.
        """
        origins: List[str] = []
        for origin in allowed_origins:
            if origin and origin not in origins:
                origins.append(origin)
        self._origins: Tuple[str, ...] = tuple(origins)

    @property
    def allowed_origins(self) -> Tuple[str, ...]:
        """Allowed origins in priority order."""
        return self._origins

    def evaluate(self, origin: Optional[str]) -> PolicyDecision:
        """Decide whether a request from ``origin`` may proceed.

        Requests without an ``Origin`` header come from non-browser clients and
        are always allowed.

        Args:
            origin: Value of the ``Origin`` header, or None when absent.

        Returns:
            PolicyDecision: Allow, or Deny with the policy-violation reason.
        """
        if not origin:
            return ALLOW
        if origin in self._origins:
            return ALLOW
        return PolicyDecision(allowed=False, reason=POLICY_VIOLATION_REASON)


def cors_headers(origin: Optional[str]) -> List[Tuple[str, str]]:
    """Headers attached to every allowed response.

    Args:
        origin: Allowed request origin, or None.

    Returns:
        List[Tuple[str, str]]: Header pairs; empty when there is no origin to echo.

    Examples:
        >>> cors_headers(None)
        []
        >>> dict(cors_headers("http://localhost:3000"))["Access-Control-Allow-Origin"]
        'http://localhost:3000'
    """
    if not origin:
        return []
    return [
        ("Access-Control-Allow-Origin", origin),
        ("Access-Control-Allow-Credentials", "true"),
        ("Vary", "Origin"),
    ]


def preflight_response(origin: Optional[str]) -> Response:
    """Answer to an ``OPTIONS`` method-discovery request.

    Args:
        origin: Allowed request origin, or None.

    Returns:
        Response: Empty ``204`` carrying the allowed methods and headers.
    """
    response = Response(status_code=204)
    for key, value in cors_headers(origin):
        response.headers[key] = value
    response.headers["Access-Control-Allow-Methods"] = ",".join(ALLOWED_METHODS)
    response.headers["Access-Control-Allow-Headers"] = ",".join(ALLOWED_HEADERS)
    response.headers["Access-Control-Allow-Credentials"] = "true"
    return response


class OriginPolicyMiddleware:
    """First pipeline stage enforcing the origin policy.

    Only ``http`` scopes are inspected; lifespan scopes pass straight through.
    """

    def __init__(self, app: ASGIApp, policy: OriginPolicy, diagnostic_mode: bool = False) -> None:
        self.app = app
        self.policy = policy
        self.diagnostic_mode = diagnostic_mode

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        decision = self.policy.evaluate(origin)

        if not decision.allowed:
            logger.warning(f"Rejected request from origin {origin!r} to {scope.get('path')}")
            message = decision.reason if self.diagnostic_mode else GENERIC_ERROR_MESSAGE
            response = JSONResponse({"success": False, "message": message}, status_code=403)
            await response(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            await preflight_response(origin)(scope, receive, send)
            return

        extra_headers = cors_headers(origin)
        if not extra_headers:
            await self.app(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for key, value in extra_headers:
                    if key == "Vary":
                        headers.add_vary_header(value)
                    else:
                        headers[key] = value
            await send(message)

        await self.app(scope, receive, send_with_cors)
