# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pydantic models for the mail relay.

Models:
    - SmtpConfig: caller-supplied SMTP connection and credentials
    - EmailRequest: a validated relay request
    - ValidationError: one failed field rule, as reported to the caller

Instances are frozen: a request is immutable once it has been validated.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class SmtpConfig(BaseModel):
    """SMTP connection parameters and credentials for a single request.

    Attributes:
        from_: Sender address, used as the ``From`` header (JSON key ``from``).
        host: SMTP server hostname.
        port: SMTP server port. Port 465 selects implicit TLS.
        username: Login presented through SMTP AUTH.
        password: Secret presented through SMTP AUTH; masked in ``repr``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from")
    host: str
    port: int
    username: str
    password: SecretStr


class EmailRequest(BaseModel):
    """A relay request whose every field passed validation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    smtp_config: SmtpConfig = Field(alias="smtpConfig")
    send_to: str = Field(alias="sendTo")
    subject: str
    body: str


class ValidationError(BaseModel):
    """A failed field rule.

    ``value`` is only serialized when the caller actually sent something for
    the field; dump with ``exclude_unset=True``.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["field"] = "field"
    value: Any = None
    msg: str
    path: str
    location: Literal["body"] = "body"

    def to_payload(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        data.setdefault("type", "field")
        data.setdefault("location", "body")
        return {key: data[key] for key in ("type", "value", "msg", "path", "location") if key in data}
