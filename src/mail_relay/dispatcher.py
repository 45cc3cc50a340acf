# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Mail dispatch for validated relay requests.

:class:`MailDispatcher` performs exactly one send attempt per request and
turns whatever happens into a :class:`DispatchOutcome`. There is no retry and
no backoff: a failure is reported back to the HTTP caller as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .logger import get_logger
from .models import EmailRequest
from .transport import MailTransport, SmtpTransport, build_message


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of a dispatch attempt.

    ``error`` is ``None`` on success and carries the transport's message text
    on failure.
    """

    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "DispatchOutcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str) -> "DispatchOutcome":
        return cls(ok=False, error=message)


def describe_error(exc: BaseException) -> str:
    """Return the text a caller should see for ``exc``."""
    return str(exc) or exc.__class__.__name__


class MailDispatcher:
    """Send validated requests through a :class:`MailTransport`."""

    def __init__(self, transport: MailTransport | None = None):
        self.transport = transport if transport is not None else SmtpTransport()
        self.logger = get_logger("MailDispatcher")

    async def dispatch(self, request: EmailRequest) -> DispatchOutcome:
        """Attempt delivery of ``request`` once and classify the result.

        Header values the message cannot carry (e.g. a subject with a line
        break) fail the attempt like any transport error.
        """
        config = request.smtp_config

        self.logger.info("Tentando enviar e-mail de '%s' para '%s'...", config.from_, request.send_to)
        try:
            message = build_message(request)
            await self.transport.send(config, message)
        except Exception as exc:
            error = describe_error(exc)
            self.logger.error("ERRO: Falha ao enviar e-mail: %s", error)
            return DispatchOutcome.failure(error)

        self.logger.info("Sucesso: E-mail enviado!")
        return DispatchOutcome.success()
