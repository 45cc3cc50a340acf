# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SMTP transport used by the dispatcher.

The dispatcher only depends on the narrow :class:`MailTransport` protocol, so
tests can substitute a fake without touching the network. The production
implementation, :class:`SmtpTransport`, opens one aiosmtplib connection per
send and closes it afterwards; nothing is pooled or cached between requests.

Transport security follows a single rule: port 465 connects with implicit TLS.
On any other port the decision is left to aiosmtplib, which upgrades with
STARTTLS when the server advertises it and stays in plaintext otherwise.
"""

from __future__ import annotations

from email.message import EmailMessage
from typing import Protocol

import aiosmtplib

from .models import EmailRequest, SmtpConfig

IMPLICIT_TLS_PORT = 465


def uses_implicit_tls(port: int) -> bool:
    """Return ``True`` when ``port`` requires TLS from the first byte."""
    return port == IMPLICIT_TLS_PORT


def build_message(request: EmailRequest) -> EmailMessage:
    """Translate a validated request into an HTML :class:`EmailMessage`."""
    msg = EmailMessage()
    msg["From"] = request.smtp_config.from_
    msg["To"] = request.send_to
    msg["Subject"] = request.subject
    msg.set_content(request.body, subtype="html")
    return msg


class MailTransport(Protocol):
    """Anything able to deliver one message with the given SMTP config.

    ``send`` returns on success and raises on any failure; the exception text
    is what the caller ends up seeing.
    """

    async def send(self, config: SmtpConfig, message: EmailMessage) -> None: ...


class SmtpTransport:
    """Deliver messages through a fresh aiosmtplib connection per call."""

    def _client(self, config: SmtpConfig) -> aiosmtplib.SMTP:
        # start_tls and timeout stay at the library defaults
        return aiosmtplib.SMTP(
            hostname=config.host,
            port=config.port,
            use_tls=uses_implicit_tls(config.port),
        )

    async def send(self, config: SmtpConfig, message: EmailMessage) -> None:
        """Connect, authenticate, send ``message`` and quit."""
        smtp = self._client(config)
        async with smtp:
            await smtp.login(config.username, config.password.get_secret_value())
            await smtp.send_message(message)
