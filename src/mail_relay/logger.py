"""Logging utilities for the mail relay.

Handlers, level and format are configured once by the entry point through
``logging.basicConfig()``; modules only ask for a named logger.

Example::

    from mail_relay.logger import get_logger

    logger = get_logger("MailDispatcher")
    logger.info("Operation completed")
"""

import logging


def get_logger(name: str = "MailRelay") -> logging.Logger:
    """Return the standard library logger bound to ``name``."""
    return logging.getLogger(name)
