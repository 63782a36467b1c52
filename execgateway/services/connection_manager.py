# -*- coding: utf-8 -*-
"""Location: ./execgateway/services/connection_manager.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Backing Store Connection Manager.

Owns the single database engine of the process. ``ensure_ready()`` may be
called on every request: once the store is reachable it returns without I/O,
while the store is being reached every caller awaits the same in-flight
attempt, and after a failure the next caller starts a fresh attempt.

Examples:
    >>> manager = ConnectionManager("sqlite+aiosqlite:///:memory:")
    >>> manager.state
    <ConnectionState.UNINITIALIZED: 'uninitialized'>
    >>> manager.is_ready
    False
"""

# Standard
import asyncio
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator, Optional

# Third-Party
from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncEngine, AsyncSession, create_async_engine

# First-Party
from execgateway.db import Base
from execgateway.errors import BackingStoreConnectionError
from execgateway.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)


class ConnectionState(str, Enum):
    """Lifecycle of the backing-store connection."""

    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class ConnectionManager:
    """Memoizes the backing-store connection for the lifetime of the process.

    Attributes:
        database_url: SQLAlchemy async URL of the backing store.
        echo: Whether SQLAlchemy should echo statements.
        attempts: Number of connection attempts started so far.
    """

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize the manager without touching the store.

        Args:
            database_url: SQLAlchemy async URL of the backing store.
            echo: Whether SQLAlchemy should echo statements.
        """
        self.database_url = database_url
        self.echo = echo
        self.attempts = 0
        self._state = ConnectionState.UNINITIALIZED
        self._error: Optional[BaseException] = None
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._pending: Optional["asyncio.Task[AsyncEngine]"] = None

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state

    @property
    def last_error(self) -> Optional[BaseException]:
        """Error of the most recent failed attempt, if the state is FAILED."""
        return self._error

    @property
    def is_ready(self) -> bool:
        """Whether the store has been reached."""
        return self._state is ConnectionState.READY

    async def ensure_ready(self) -> AsyncEngine:
        """Make sure the backing store is connected.

        Returns:
            AsyncEngine: The connected engine.

        Raises:
            BackingStoreConnectionError: If the attempt this call observed failed.
        """
        if self._state is ConnectionState.READY and self._engine is not None:
            return self._engine

        # A task left behind by a loop that has since been closed cannot be awaited here
        if self._pending is not None and self._pending.get_loop() is not asyncio.get_running_loop():
            self._pending = None

        if self._pending is None:
            self._state = ConnectionState.CONNECTING
            self.attempts += 1
            self._pending = asyncio.create_task(self._connect())
            self._pending.add_done_callback(_retrieve_outcome)

        # Shielded so a cancelled caller does not abort the attempt other callers are awaiting
        return await asyncio.shield(self._pending)

    async def _connect(self) -> AsyncEngine:
        """Run one connection attempt and record its outcome.

        Returns:
            AsyncEngine: The connected engine.

        Raises:
            BackingStoreConnectionError: If the store could not be reached.
        """
        logger.info(f"Connecting to backing store (attempt {self.attempts})")
        try:
            engine = await self._establish()
        except Exception as exc:
            self._state = ConnectionState.FAILED
            self._error = exc
            self._pending = None
            logger.error(f"Backing store connection error: {exc}")
            raise BackingStoreConnectionError(f"Backing store connection failed: {exc}") from exc

        self._engine = engine
        self._session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        self._state = ConnectionState.READY
        self._error = None
        self._pending = None
        logger.info("Backing store connected successfully")
        return engine

    async def _establish(self) -> AsyncEngine:
        """Create the engine, ping the store and create missing tables.

        Returns:
            AsyncEngine: A live engine.
        """
        engine = create_async_engine(self.database_url, echo=self.echo, pool_pre_ping=True)
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(Base.metadata.create_all)
        except BaseException:
            await engine.dispose()
            raise
        return engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session on the connected store.

        Yields:
            AsyncSession: A session closed when the block exits.
        """
        await self.ensure_ready()
        async with self._session_factory() as session:
            yield session

    async def close(self) -> None:
        """Abort any in-flight attempt, dispose the engine and forget the connection."""
        pending, self._pending = self._pending, None
        if pending is not None and not pending.done():
            pending.cancel()
            if pending.get_loop() is asyncio.get_running_loop():
                await asyncio.wait([pending])
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Backing store connection closed")
        self._engine = None
        self._session_factory = None
        self._state = ConnectionState.UNINITIALIZED
        self._error = None


def _retrieve_outcome(task: "asyncio.Task[AsyncEngine]") -> None:
    """Mark a finished attempt's error as seen even if every caller gave up waiting."""
    if not task.cancelled():
        task.exception()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a session from the application's connection manager.

    Args:
        request: Incoming request; the manager lives on ``app.state``.

    Yields:
        AsyncSession: Session bound to the backing store.
    """
    manager: ConnectionManager = request.app.state.connection_manager
    async with manager.session() as session:
        yield session
