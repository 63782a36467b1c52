# -*- coding: utf-8 -*-
"""
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Request logging for the Execution Gateway.

Logs method, path, masked headers and a masked, size-capped copy of the JSON
body of every request. Source files submitted to ``/api/run`` are logged by
name and size only.
"""

# Standard
import json
import logging
from typing import Callable

# Third-Party
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# First-Party
from execgateway.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

SENSITIVE_KEYS = {"password", "secret", "token", "apikey", "access_token", "refresh_token", "client_secret", "authorization"}


def mask_sensitive_data(data):
    """Recursively mask sensitive keys and file contents in dict/list payloads."""
    if isinstance(data, dict):
        masked = {}
        for k, v in data.items():
            if k.lower() in SENSITIVE_KEYS:
                masked[k] = "******"
            elif k == "content" and isinstance(v, str):
                masked[k] = f"<{len(v)} chars>"
            else:
                masked[k] = mask_sensitive_data(v)
        return masked
    elif isinstance(data, list):
        return [mask_sensitive_data(i) for i in data]
    return data


def mask_sensitive_cookies(cookie_header):
    """Mask auth/session cookies while preserving other cookies."""
    if not cookie_header:
        return cookie_header

    cookies = []
    for cookie in cookie_header.split(";"):
        cookie = cookie.strip()
        if "=" in cookie:
            name, _ = cookie.split("=", 1)
            name = name.strip()
            if any(sensitive in name.lower() for sensitive in ["jwt", "token", "auth", "session"]):
                cookies.append(f"{name}=******")
            else:
                cookies.append(cookie)
        else:
            cookies.append(cookie)

    return "; ".join(cookies)


def mask_sensitive_headers(headers):
    """Mask sensitive headers like Authorization."""
    masked_headers = {}
    for key, value in headers.items():
        key_lower = key.lower()
        if key_lower in SENSITIVE_KEYS or "auth" in key_lower:
            masked_headers[key] = "******"
        elif key_lower == "cookie":
            masked_headers[key] = mask_sensitive_cookies(value)
        else:
            masked_headers[key] = value
    return masked_headers


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, log_requests: bool = True, max_body_size: int = 4096):
        super().__init__(app)
        self.log_requests = log_requests
        self.max_body_size = max_body_size  # bytes

    async def dispatch(self, request: Request, call_next: Callable):
        if not self.log_requests or not logger.isEnabledFor(logging.INFO):
            return await call_next(request)

        # Starlette caches the body on the request, so downstream handlers can still read it
        body = await request.body()
        truncated = len(body) > self.max_body_size
        payload = body[: self.max_body_size].decode("utf-8", errors="ignore").strip()

        if not payload:
            payload_str = "<empty>"
        else:
            try:
                payload_str = json.dumps(mask_sensitive_data(json.loads(payload)))
            except json.JSONDecodeError:
                payload_str = payload
                if any(sensitive_key in payload.lower() for sensitive_key in SENSITIVE_KEYS):
                    payload_str = "<contains sensitive data - masked>"

        logger.info(
            f"Incoming request: {request.method} {request.url.path} "
            f"query={dict(request.query_params)} "
            f"headers={mask_sensitive_headers(dict(request.headers))} "
            f"body={payload_str}{'... [truncated]' if truncated else ''}"
        )

        return await call_next(request)
