# -*- coding: utf-8 -*-
"""Logging Service Implementation.

Copyright 2025
SPDX-License-Identifier: Apache-2.0

Console logging uses a plain text formatter (or JSON when ``log_format`` is
``json``); the optional rotating file handler always writes JSON lines.
"""

# Standard
import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Dict, Optional

# Third-Party
from pythonjsonlogger import jsonlogger

# First-Party
from execgateway.config import settings

# Create a text formatter
text_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# Create a JSON formatter
json_formatter = jsonlogger.JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")

# Global handlers will be created lazily
_file_handler: Optional[RotatingFileHandler] = None
_text_handler: Optional[logging.StreamHandler] = None


def _get_file_handler() -> RotatingFileHandler:
    """Get or create the file handler.

    Returns:
        RotatingFileHandler: The file handler for JSON logging.

    Raises:
        ValueError: If file logging is disabled or no log file specified.
    """
    global _file_handler  # pylint: disable=global-statement
    if _file_handler is None:
        if not settings.log_to_file or not settings.log_file:
            raise ValueError("File logging is disabled or no log file specified")

        if settings.log_folder:
            os.makedirs(settings.log_folder, exist_ok=True)
            log_path = os.path.join(settings.log_folder, settings.log_file)
        else:
            log_path = settings.log_file

        _file_handler = RotatingFileHandler(log_path, maxBytes=1024 * 1024, backupCount=5)
        _file_handler.setFormatter(json_formatter)
    return _file_handler


def _get_text_handler() -> logging.StreamHandler:
    """Get or create the console handler.

    Returns:
        logging.StreamHandler: The stream handler for console logging.
    """
    global _text_handler  # pylint: disable=global-statement
    if _text_handler is None:
        _text_handler = logging.StreamHandler()
        _text_handler.setFormatter(json_formatter if settings.log_format == "json" else text_formatter)
    return _text_handler


class LoggingService:
    """Gateway logging service.

    Hands out named loggers that share one console handler and, when enabled,
    one rotating JSON file handler. Loggers do not propagate to the root
    logger so records are not emitted twice.
    """

    def __init__(self):
        """Initialize logging service."""
        self._level = settings.log_level.upper()
        self._loggers: Dict[str, logging.Logger] = {}

    async def initialize(self) -> None:
        """Attach handlers to the root logger.

        Examples:
            >>> import asyncio
            >>> service = LoggingService()
            >>> asyncio.run(service.initialize())
        """
        root = logging.getLogger()
        self._loggers[""] = root
        if _get_text_handler() not in root.handlers:
            root.addHandler(_get_text_handler())

        if settings.log_to_file and settings.log_file:
            try:
                handler = _get_file_handler()
                if handler not in root.handlers:
                    root.addHandler(handler)
                logging.info(f"File logging enabled: {settings.log_folder or '.'}/{settings.log_file}")
            except OSError as e:
                logging.warning(f"Failed to initialize file logging: {e}")
        else:
            logging.info("File logging disabled - logging to stdout/stderr only")

        logging.info("Logging service initialized")

    async def shutdown(self) -> None:
        """Shutdown logging service.

        Examples:
            >>> import asyncio
            >>> asyncio.run(LoggingService().shutdown())
        """
        for handler in (_file_handler, _text_handler):
            if handler is not None:
                handler.flush()
        logging.info("Logging service shutdown")

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create logger instance.

        Args:
            name: Logger name

        Returns:
            Logger instance

        Examples:
            >>> service = LoggingService()
            >>> logger = service.get_logger('test')
            >>> import logging
            >>> isinstance(logger, logging.Logger)
            True
        """
        if name not in self._loggers:
            logger = logging.getLogger(name)

            if _get_text_handler() not in logger.handlers:
                logger.addHandler(_get_text_handler())

            if settings.log_to_file and settings.log_file:
                try:
                    handler = _get_file_handler()
                    if handler not in logger.handlers:
                        logger.addHandler(handler)
                except OSError as e:
                    logging.getLogger(__name__).warning(f"Failed to add file handler to logger {name}: {e}")

            logger.setLevel(getattr(logging, self._level, logging.INFO))
            logger.propagate = False
            self._loggers[name] = logger

        return self._loggers[name]

    def set_level(self, level: str) -> None:
        """Set minimum log level for every logger handed out so far.

        Args:
            level: Level name, e.g. ``"DEBUG"``.

        Raises:
            ValueError: If the level name is unknown.

        Examples:
            >>> service = LoggingService()
            >>> _ = service.get_logger("level-test")
            >>> service.set_level("debug")
            >>> service.get_logger("level-test").level == logging.DEBUG
            True
        """
        level = level.upper()
        log_level = logging.getLevelName(level)
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {level}")

        self._level = level
        for logger in self._loggers.values():
            logger.setLevel(log_level)
