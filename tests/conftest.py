# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for the mail relay tests."""

import copy
import socket

import pytest


VALID_PAYLOAD = {
    "smtpConfig": {
        "from": "a@x.com",
        "host": "smtp.x.com",
        "port": 587,
        "username": "a@x.com",
        "password": "secret",
    },
    "sendTo": "b@y.com",
    "subject": "Hi",
    "body": "<p>Hello</p>",
}


def get_free_port() -> int:
    """Find a free port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.listen(1)
        port = s.getsockname()[1]
    return port


class FakeTransport:
    """Records every send; raises ``error`` when one is configured."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    async def send(self, config, message):
        self.calls.append((config, message))
        if self.error is not None:
            raise self.error


@pytest.fixture
def payload():
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def transport_factory():
    return FakeTransport
