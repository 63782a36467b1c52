# -*- coding: utf-8 -*-
"""Location: ./execgateway/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Shared exception types for the Execution Gateway.
"""

# Future
from __future__ import annotations

GENERIC_ERROR_MESSAGE = "Something went wrong!"
GENERIC_ENTRY_ERROR_MESSAGE = "Internal Server Error"


class GatewayError(Exception):
    """Base exception for the gateway."""


class BackingStoreConnectionError(GatewayError):
    """The backing store could not be reached."""


class ExecutionProxyError(GatewayError):
    """The execution engine was unreachable or answered with an error.

    Attributes:
        status_code: Upstream HTTP status, when the engine answered at all.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def public_message(exc: BaseException, diagnostic_mode: bool, generic: str = GENERIC_ERROR_MESSAGE) -> str:
    """Message exposed to clients for an error.

    Args:
        exc: The error being reported.
        diagnostic_mode: Whether verbose detail may be shown.
        generic: Fallback message outside diagnostic mode.

    Returns:
        str: ``str(exc)`` in diagnostic mode, otherwise ``generic``.

    Examples:
        >>> public_message(ValueError("boom"), True)
        'boom'
        >>> public_message(ValueError("boom"), False)
        'Something went wrong!'
    """
    if diagnostic_mode:
        return str(exc)
    return generic
