# -*- coding: utf-8 -*-
"""Location: ./tests/utils/engine_stub.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Stub execution engine served through ``httpx.MockTransport``.
"""

# Standard
import json
from typing import List

# Third-Party
import httpx

ENGINE_URL = "https://engine.test/api/v2/piston/execute"
STUB_RESULT = {"run": {"stdout": "1\n", "stderr": "", "code": 0}, "language": "python", "version": "3.10.0"}


class StubEngine:
    """Records forwarded requests and answers with a canned response or error."""

    def __init__(self, status_code: int = 200, payload=None, error: Exception = None):
        self.status_code = status_code
        self.payload = STUB_RESULT if payload is None else payload
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def bodies(self) -> list:
        return [json.loads(r.content) for r in self.requests]
