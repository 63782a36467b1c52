# -*- coding: utf-8 -*-
"""Location: ./execgateway/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Execution Gateway Configuration.

Settings are read from environment variables (and an optional ``.env`` file)
through pydantic-settings. A module-level ``settings`` instance is shared by the
application; tests build their own ``Settings`` and pass it to ``create_app``.

Examples:
    >>> s = Settings(environment="development", frontend_url="https://app.example.com")
    >>> s.diagnostic_mode
    True
    >>> s.allowed_origins[0]
    'https://app.example.com'
"""

# Standard
from functools import lru_cache
from typing import List, Literal, Optional

# Third-Party
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]


class Settings(BaseSettings):
    """Execution Gateway settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    app_name: str = "Execution Gateway"
    host: str = "0.0.0.0"
    port: int = 8001

    # "development" turns on verbose error messages
    environment: str = Field(default="production", validation_alias=AliasChoices("environment", "ENVIRONMENT", "NODE_ENV"))

    # CORS
    frontend_url: Optional[str] = None
    dev_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_DEV_ORIGINS))

    # Backing store
    database_url: str = "sqlite+aiosqlite:///./execgateway.db"
    database_echo: bool = False

    # Execution engine
    execution_engine_url: str = "https://emkc.org/api/v2/piston/execute"
    execution_timeout: Optional[float] = None

    static_dir: str = "public"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"
    log_to_file: bool = False
    log_file: Optional[str] = None
    log_folder: Optional[str] = None
    log_requests: bool = False
    log_max_body_size: int = 4096

    @property
    def diagnostic_mode(self) -> bool:
        """Whether error responses carry the underlying error detail.

        Returns:
            bool: True only in the development environment.

        Examples:
            >>> Settings(environment="production").diagnostic_mode
            False
        """
        return self.environment.lower() == "development"

    @property
    def allowed_origins(self) -> List[str]:
        """Origin allow-list: configured frontend first, then development defaults.

        Empty entries are dropped and duplicates keep their first position.

        Returns:
            List[str]: Ordered, de-duplicated origins.

        Examples:
            >>> Settings(frontend_url="http://localhost:3000").allowed_origins[:2]
            ['http://localhost:3000', 'http://localhost:5173']
            >>> Settings(frontend_url="").allowed_origins[0]
            'http://localhost:3000'
        """
        origins: List[str] = []
        for origin in [self.frontend_url, *self.dev_origins]:
            if origin and origin not in origins:
                origins.append(origin)
        return origins


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The process-wide settings.
    """
    return Settings()


settings = get_settings()
