# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Request validation for ``POST /send-email``.

Validation is driven by an ordered table of ``(path, check, message)`` rules.
Every rule is evaluated, so a caller sees all violations of a payload in one
response, reported in declaration order:

    smtpConfig.from, smtpConfig.host, smtpConfig.port, smtpConfig.username,
    smtpConfig.password, sendTo, subject, body

Values are read from the decoded JSON body and converted to text the way a
form validator does: missing and ``null`` become empty text, numbers and
booleans are rendered, objects and arrays never satisfy a rule. A failed
validation is an expected outcome, returned as a value and not raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, NamedTuple, Optional

from email_validator import EmailNotValidError, validate_email

from .models import EmailRequest, ValidationError

_MISSING = object()
_INTEGER_RE = re.compile(r"^[-+]?[0-9]+$")


def _as_text(value: Any) -> Optional[str]:
    """Render a JSON scalar as text; ``None`` for objects and arrays."""
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return None


def is_email(text: Optional[str]) -> bool:
    """Syntax-only email check; no DNS lookups are performed.

    ``.test`` domains are accepted. Other special-use names (``.local``,
    ``localhost``, ``.invalid``...) stay rejected by email-validator.
    """
    if not text:
        return False
    try:
        validate_email(text, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


def not_empty(text: Optional[str]) -> bool:
    return bool(text)


def not_blank(text: Optional[str]) -> bool:
    return bool(text and text.strip())


def is_int(text: Optional[str]) -> bool:
    return bool(text) and _INTEGER_RE.fullmatch(text) is not None


class Rule(NamedTuple):
    path: str
    check: Callable[[Optional[str]], bool]
    message: str


RULES: tuple[Rule, ...] = (
    Rule("smtpConfig.from", is_email, 'O campo "from" é obrigatório e deve ser um e-mail válido.'),
    Rule("smtpConfig.host", not_blank, 'O campo "host" é obrigatório.'),
    Rule("smtpConfig.port", is_int, 'O campo "port" é obrigatório e deve ser um número inteiro.'),
    Rule("smtpConfig.username", is_email, 'O campo "username" é obrigatório e deve ser um e-mail válido.'),
    Rule("smtpConfig.password", not_empty, 'O campo "password" é obrigatório.'),
    Rule("sendTo", is_email, 'O campo "sendTo" é obrigatório e deve ser um e-mail válido.'),
    Rule("subject", not_empty, 'O campo "subject" é obrigatório.'),
    Rule("body", not_empty, 'O campo "body" (corpo do e-mail) é obrigatório.'),
)


@dataclass(frozen=True)
class ValidationResult:
    """Either a validated :class:`EmailRequest` or the list of failed rules."""

    request: Optional[EmailRequest] = None
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.errors


def _lookup(payload: Any, path: str) -> Any:
    current = payload
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def validate_request(payload: Any) -> ValidationResult:
    """Check ``payload`` against :data:`RULES`.

    Args:
        payload: The decoded JSON body. Anything other than a JSON object is
            treated as an empty object.

    Returns:
        A :class:`ValidationResult` holding the normalized request when every
        rule passed, otherwise one :class:`ValidationError` per failed rule.
    """
    if not isinstance(payload, dict):
        payload = {}

    errors: list[ValidationError] = []
    texts: dict[str, str] = {}
    for rule in RULES:
        raw = _lookup(payload, rule.path)
        text = _as_text(raw)
        if text is not None and rule.check(text):
            texts[rule.path] = text
            continue
        if raw is _MISSING:
            errors.append(ValidationError(msg=rule.message, path=rule.path))
        else:
            errors.append(ValidationError(value=raw, msg=rule.message, path=rule.path))

    if errors:
        return ValidationResult(errors=errors)

    request = EmailRequest(
        smtpConfig={
            "from": texts["smtpConfig.from"],
            "host": texts["smtpConfig.host"],
            "port": int(texts["smtpConfig.port"]),
            "username": texts["smtpConfig.username"],
            "password": texts["smtpConfig.password"],
        },
        sendTo=texts["sendTo"],
        subject=texts["subject"],
        body=texts["body"],
    )
    return ValidationResult(request=request)
