# -*- coding: utf-8 -*-
"""Location: ./tests/unit/execgateway/middleware/test_request_logging_middleware.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Unit tests for request logging middleware.
"""
import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from execgateway.middleware.request_logging_middleware import (
    mask_sensitive_data,
    mask_sensitive_cookies,
    mask_sensitive_headers,
    RequestLoggingMiddleware,
)


class DummyLogger:
    def __init__(self):
        self.infos = []
        self.enabled = True

    def isEnabledFor(self, level):
        return self.enabled

    def info(self, msg):
        self.infos.append(msg)


@pytest.fixture
def dummy_logger(monkeypatch):
    logger = DummyLogger()
    monkeypatch.setattr("execgateway.middleware.request_logging_middleware.logger", logger)
    return logger


@pytest.fixture
def make_client():
    def _make(log_requests: bool = True, max_body_size: int = 4096) -> TestClient:
        app = FastAPI()

        @app.post("/echo")
        async def echo(request: Request):
            return {"received": await request.json()}

        app.add_middleware(RequestLoggingMiddleware, log_requests=log_requests, max_body_size=max_body_size)
        return TestClient(app)

    return _make

# --- mask_sensitive_data tests ---

def test_mask_sensitive_data_dict():
    data = {"password": "123", "username": "user", "nested": {"token": "abc"}}
    masked = mask_sensitive_data(data)
    assert masked["password"] == "******"
    assert masked["nested"]["token"] == "******"
    assert masked["username"] == "user"

def test_mask_sensitive_data_hides_file_contents():
    data = {"language": "python", "files": [{"name": "a.py", "content": "print(1)"}]}
    masked = mask_sensitive_data(data)
    assert masked["files"][0] == {"name": "a.py", "content": "<8 chars>"}
    assert masked["language"] == "python"

def test_mask_sensitive_data_non_dict_list():
    assert mask_sensitive_data("string") == "string"

# --- mask_sensitive_cookies tests ---

def test_mask_sensitive_cookies_with_sensitive():
    cookie = "jwt_token=abc; sessionid=xyz; other=123"
    masked = mask_sensitive_cookies(cookie)
    assert "jwt_token=******" in masked
    assert "sessionid=******" in masked
    assert "other=123" in masked

def test_mask_sensitive_cookies_empty():
    assert mask_sensitive_cookies("") == ""

# --- mask_sensitive_headers tests ---

def test_mask_sensitive_headers_authorization():
    headers = {"Authorization": "Bearer abc", "Cookie": "accessToken=abc", "X-Custom": "ok"}
    masked = mask_sensitive_headers(headers)
    assert masked["Authorization"] == "******"
    assert masked["Cookie"] == "accessToken=******"
    assert masked["X-Custom"] == "ok"

# --- dispatch tests ---

def test_dispatch_logs_and_preserves_body(make_client, dummy_logger):
    response = make_client().post("/echo", json={"password": "hunter2", "language": "python"})
    assert response.status_code == 200
    assert response.json() == {"received": {"password": "hunter2", "language": "python"}}
    assert len(dummy_logger.infos) == 1
    assert "POST /echo" in dummy_logger.infos[0]
    assert "hunter2" not in dummy_logger.infos[0]

def test_dispatch_truncates_large_body(make_client, dummy_logger):
    response = make_client(max_body_size=10).post("/echo", json={"content": "x" * 100})
    assert response.status_code == 200
    assert "[truncated]" in dummy_logger.infos[0]

def test_dispatch_skips_when_disabled(make_client, dummy_logger):
    response = make_client(log_requests=False).post("/echo", json={"a": 1})
    assert response.status_code == 200
    assert dummy_logger.infos == []
