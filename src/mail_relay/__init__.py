# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Stateless HTTP to SMTP relay.

The service exposes a single ``POST /send-email`` endpoint. Each request
carries its own SMTP credentials together with the message to deliver; the
payload is validated, a fresh SMTP session is opened with those credentials
and the message is sent in one synchronous attempt.

Features:
    - Exhaustive field validation with ordered, per-field error reports
    - Implicit TLS on port 465, library-negotiated STARTTLS elsewhere
    - HTML message bodies
    - FastAPI REST surface served by uvicorn

Example::

    from mail_relay.api import create_app
    from mail_relay.dispatcher import MailDispatcher
    from mail_relay.transport import SmtpTransport

    app = create_app(MailDispatcher(SmtpTransport()))
"""

__version__ = "0.1.0"
