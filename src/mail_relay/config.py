# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Process settings for the mail relay.

The relay keeps no configuration file. The bind address and log level come
from environment variables, all prefixed with ``MAIL_RELAY_``:

    MAIL_RELAY_HOST - Bind address (default: 0.0.0.0)
    MAIL_RELAY_PORT - Bind port (default: 8080)
    MAIL_RELAY_LOG_LEVEL - Logging level (default: INFO)

SMTP credentials are never part of the settings; every request brings its own.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class RelaySettings:
    """Resolved process settings.

    Attributes:
        host: Address uvicorn binds to.
        port: TCP port uvicorn listens on.
        log_level: Name of the root logging level.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def load_settings(environ: Mapping[str, str] | None = None) -> RelaySettings:
    """Build :class:`RelaySettings` from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        ValueError: If ``MAIL_RELAY_PORT`` is not an integer in 1-65535.
    """
    env = os.environ if environ is None else environ

    host = env.get("MAIL_RELAY_HOST", "").strip() or DEFAULT_HOST

    raw_port = env.get("MAIL_RELAY_PORT", "").strip()
    if raw_port:
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ValueError(f"MAIL_RELAY_PORT must be an integer, got {raw_port!r}") from exc
        if not 0 < port < 65536:
            raise ValueError(f"MAIL_RELAY_PORT out of range: {port}")
    else:
        port = DEFAULT_PORT

    log_level = env.get("MAIL_RELAY_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL

    return RelaySettings(host=host, port=port, log_level=log_level)


def configure_logging(settings: RelaySettings) -> None:
    """Install the root logging configuration for the process."""
    logging.basicConfig(
        level=settings.numeric_log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=True,  # Force reconfiguration to avoid duplicate handlers
    )


def ensure_logging(settings: RelaySettings) -> bool:
    """Configure logging unless the root logger already has handlers.

    Covers ``uvicorn mail_relay.server:app``, where :func:`configure_logging`
    is not called by :func:`mail_relay.server.main`. Returns ``True`` when the
    configuration was installed.
    """
    if logging.getLogger().handlers:
        return False
    configure_logging(settings)
    return True
