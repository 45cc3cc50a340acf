# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""FastAPI application factory and HTTP schemas for the mail relay.

The relay exposes a single route, ``POST /send-email``. The handler validates
the JSON body, hands the request to the :class:`MailDispatcher` stored on
``app.state`` and maps the outcome to a response:

- ``400`` with every failed field rule when validation fails
- ``500`` with the transport's error text when delivery fails
- ``200`` when the SMTP server accepted the message

Example:
    Creating and running the API application::

        from mail_relay.api import create_app

        app = create_app()

        # Run with uvicorn
        uvicorn.run(app, host="0.0.0.0", port=8080)
"""

import json
import math
from typing import Any, AsyncContextManager, Callable, Dict, List, Literal, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .dispatcher import MailDispatcher
from .logger import get_logger
from .models import ValidationError
from .validation import validate_request

logger = get_logger("MailRelayAPI")

INVALID_BODY_MESSAGE = "Corpo da requisição inválido"
SEND_FAILED_MESSAGE = "Falha ao enviar o e-mail"
SEND_OK_MESSAGE = "E-mail enviado com sucesso!"
INVALID_JSON_MESSAGE = "JSON inválido"


class StatusResponse(BaseModel):
    """Envelope shared by every response of the relay."""
    status: Literal["success", "error"]
    message: str


class SendSuccessResponse(StatusResponse):
    status: Literal["success"] = "success"
    message: str = SEND_OK_MESSAGE


class InvalidBodyResponse(StatusResponse):
    """Returned with ``400`` when the request body fails validation."""
    status: Literal["error"] = "error"
    message: str = INVALID_BODY_MESSAGE
    errors: List[Dict[str, Any]]


class SendFailedResponse(StatusResponse):
    """Returned with ``500`` when the SMTP exchange fails."""
    status: Literal["error"] = "error"
    message: str = SEND_FAILED_MESSAGE
    details: str


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are not JSON and cannot be echoed back in a response
    raise ValueError(f"Invalid JSON constant: {token}")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def _decode_body(raw: bytes) -> Any:
    """Decode a request body as strict JSON.

    Raises ``ValueError`` for syntax errors, ``NaN``/``Infinity``, numbers
    outside the float range and strings holding lone surrogates, none of
    which could be echoed back in a JSON response.
    """
    if not raw:
        return {}
    payload = json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_float)
    json.dumps(payload, ensure_ascii=False).encode("utf-8")
    return payload


def _invalid_body(errors: List[ValidationError]) -> JSONResponse:
    payload = InvalidBodyResponse(errors=[error.to_payload() for error in errors])
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload.model_dump())


def create_app(
    dispatcher: Optional[MailDispatcher] = None,
    lifespan: Callable[[FastAPI], AsyncContextManager] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    dispatcher:
        :class:`mail_relay.dispatcher.MailDispatcher` used for every request.
        Defaults to one backed by :class:`mail_relay.transport.SmtpTransport`.
    lifespan:
        Optional lifespan context manager for startup/shutdown events.

    Returns
    -------
    FastAPI
        A configured application ready to be served by uvicorn or any ASGI
        server.
    """
    api = FastAPI(title="Mail Relay", lifespan=lifespan)
    api.state.dispatcher = dispatcher if dispatcher is not None else MailDispatcher()

    @api.post(
        "/send-email",
        response_model=SendSuccessResponse,
        responses={400: {"model": InvalidBodyResponse}, 500: {"model": SendFailedResponse}},
    )
    async def send_email(request: Request):
        """Validate the payload and relay the message through the caller's SMTP server."""
        raw = await request.body()
        try:
            payload = _decode_body(raw)
        except ValueError as exc:
            logger.warning("Rejected undecodable body on %s: %s", request.url.path, exc)
            return _invalid_body([ValidationError(msg=INVALID_JSON_MESSAGE, path="")])

        result = validate_request(payload)
        if not result.ok:
            logger.info("Rejected request with %d invalid field(s)", len(result.errors))
            return _invalid_body(result.errors)

        outcome = await request.app.state.dispatcher.dispatch(result.request)
        if not outcome.ok:
            failed = SendFailedResponse(details=outcome.error or "")
            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=failed.model_dump())

        return SendSuccessResponse()

    return api
