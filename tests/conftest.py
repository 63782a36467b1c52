# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
"""

# Standard
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

# Third-Party
from fastapi.testclient import TestClient
import httpx
import pytest

# First-Party
from execgateway.config import Settings
from execgateway.main import create_app
from execgateway.services.connection_manager import ConnectionManager
from execgateway.services.execution_proxy import ExecutionProxy
from tests.utils.engine_stub import ENGINE_URL, StubEngine

FRONTEND_URL = "https://app.example.com"


@pytest.fixture
def stub_engine() -> StubEngine:
    return StubEngine()


@pytest.fixture
def make_proxy() -> Callable[[StubEngine], ExecutionProxy]:
    def _make(engine: StubEngine) -> ExecutionProxy:
        return ExecutionProxy(ENGINE_URL, client_args={"transport": httpx.MockTransport(engine)})

    return _make


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'gateway.db'}"


@pytest.fixture
def unreachable_db_url(tmp_path) -> str:
    """A SQLite path whose parent directory does not exist."""
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nested' / 'gateway.db'}"


@pytest.fixture
def make_settings(db_url, tmp_path) -> Callable[..., Settings]:
    def _make(**overrides) -> Settings:
        values = {
            "environment": "development",
            "frontend_url": FRONTEND_URL,
            "database_url": db_url,
            "execution_engine_url": ENGINE_URL,
            "static_dir": str(tmp_path / "public"),
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def test_settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def make_app(make_settings, make_proxy):
    """Build a pipeline with its own connection manager and a stubbed engine."""

    def _make(engine: StubEngine = None, manager: ConnectionManager = None, **overrides):
        app_settings = make_settings(**overrides)
        manager = manager or ConnectionManager(app_settings.database_url)
        return create_app(app_settings, connection_manager=manager, execution_proxy=make_proxy(engine or StubEngine()))

    return _make


@pytest.fixture
def app(make_app, stub_engine):
    return make_app(engine=stub_engine)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_engine():
    """Engine double returned by a patched ``ConnectionManager._establish``."""
    engine = MagicMock()
    engine.dispose = AsyncMock()
    return engine
