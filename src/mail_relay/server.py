# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""ASGI application entry point for uvicorn.

Usage:
    uvicorn mail_relay.server:app --host 0.0.0.0 --port 8080

or, with the settings applied from the environment::

    mail-relay

Environment variables:
    MAIL_RELAY_HOST: Bind address (default: 0.0.0.0).
    MAIL_RELAY_PORT: Bind port (default: 8080).
    MAIL_RELAY_LOG_LEVEL: Logging level (default: INFO).
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .api import create_app
from .config import configure_logging, ensure_logging, load_settings
from .logger import get_logger

SERVICE_NAME = "mail-relay"

_logger = get_logger("MailRelay")
_settings = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log the startup banner and the shutdown of the listener."""
    ensure_logging(_settings)
    _logger.info("Serviço de e-mail '%s' iniciado na porta %d", SERVICE_NAME, _settings.port)
    try:
        yield
    finally:
        _logger.info("Serviço de e-mail '%s' encerrado", SERVICE_NAME)


app = create_app(lifespan=lifespan)


def main() -> None:
    """Configure logging and serve :data:`app` with uvicorn."""
    configure_logging(_settings)
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_level=_settings.numeric_log_level)
