# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the ordered field rules of ``POST /send-email``."""

import pytest

from mail_relay.validation import RULES, validate_request

ALL_PATHS = [
    "smtpConfig.from",
    "smtpConfig.host",
    "smtpConfig.port",
    "smtpConfig.username",
    "smtpConfig.password",
    "sendTo",
    "subject",
    "body",
]


def paths(result):
    return [error.path for error in result.errors]


def test_valid_payload_produces_request(payload):
    result = validate_request(payload)

    assert result.ok
    assert result.errors == []
    request = result.request
    assert request.smtp_config.from_ == "a@x.com"
    assert request.smtp_config.host == "smtp.x.com"
    assert request.smtp_config.port == 587
    assert request.smtp_config.username == "a@x.com"
    assert request.smtp_config.password.get_secret_value() == "secret"
    assert request.send_to == "b@y.com"
    assert request.subject == "Hi"
    assert request.body == "<p>Hello</p>"


def test_rules_follow_declaration_order():
    assert [rule.path for rule in RULES] == ALL_PATHS


def test_empty_body_reports_every_field_in_order():
    result = validate_request({})

    assert not result.ok
    assert result.request is None
    assert paths(result) == ALL_PATHS


def test_missing_smtp_config_reports_each_subfield(payload):
    del payload["smtpConfig"]

    result = validate_request(payload)

    assert paths(result) == ALL_PATHS[:5]


@pytest.mark.parametrize("body", [[], "text", 42, None])
def test_non_object_body_fails_every_rule(body):
    assert paths(validate_request(body)) == ALL_PATHS


@pytest.mark.parametrize("field", ["from", "username"])
def test_invalid_smtp_address_fails_only_that_field(payload, field):
    payload["smtpConfig"][field] = "not-an-email"

    result = validate_request(payload)

    assert paths(result) == [f"smtpConfig.{field}"]
    assert result.errors[0].value == "not-an-email"


def test_invalid_send_to_fails_only_send_to(payload):
    payload["sendTo"] = "not-valid"

    result = validate_request(payload)

    assert paths(result) == ["sendTo"]
    assert result.errors[0].msg == 'O campo "sendTo" é obrigatório e deve ser um e-mail válido.'


@pytest.mark.parametrize("host", ["", "   ", None])
def test_blank_host_is_rejected(payload, host):
    payload["smtpConfig"]["host"] = host

    assert paths(validate_request(payload)) == ["smtpConfig.host"]


@pytest.mark.parametrize("port, expected", [(465, 465), ("587", 587), (25.0, 25), ("+2525", 2525), ("0587", 587)])
def test_integer_ports_are_normalized(payload, port, expected):
    payload["smtpConfig"]["port"] = port

    result = validate_request(payload)

    assert result.ok
    assert result.request.smtp_config.port == expected


@pytest.mark.parametrize("port", ["abc", 587.5, True, "", " 587", "587\n", {"value": 587}, [587]])
def test_non_integer_ports_are_rejected(payload, port):
    payload["smtpConfig"]["port"] = port

    result = validate_request(payload)

    assert paths(result) == ["smtpConfig.port"]
    assert result.errors[0].msg == 'O campo "port" é obrigatório e deve ser um número inteiro.'


def test_port_range_is_not_checked(payload):
    payload["smtpConfig"]["port"] = 99999

    assert validate_request(payload).ok


@pytest.mark.parametrize("field", ["subject", "body"])
def test_empty_text_fields_are_rejected(payload, field):
    payload[field] = ""

    assert paths(validate_request(payload)) == [field]


def test_password_has_no_format_constraint(payload):
    payload["smtpConfig"]["password"] = " "

    assert validate_request(payload).ok


def test_body_is_passed_through_unescaped(payload):
    payload["body"] = "<h1 style='color:red'>Olá & bem-vindo</h1><script>x()</script>"

    result = validate_request(payload)

    assert result.request.body == payload["body"]


def test_missing_field_omits_value_in_report(payload):
    del payload["subject"]
    payload["sendTo"] = "broken"

    result = validate_request(payload)

    reported = [error.to_payload() for error in result.errors]
    assert reported == [
        {
            "type": "field",
            "value": "broken",
            "msg": 'O campo "sendTo" é obrigatório e deve ser um e-mail válido.',
            "path": "sendTo",
            "location": "body",
        },
        {
            "type": "field",
            "msg": 'O campo "subject" é obrigatório.',
            "path": "subject",
            "location": "body",
        },
    ]


def test_explicit_null_is_reported_with_value(payload):
    payload["body"] = None

    result = validate_request(payload)

    assert result.errors[0].to_payload()["value"] is None


def test_request_is_immutable(payload):
    request = validate_request(payload).request

    with pytest.raises(Exception):
        request.subject = "changed"


@pytest.mark.parametrize("address", ["qa@relay.test", "ops@mx.example.com", "joão@exemplo.com.br"])
def test_test_domains_and_unicode_addresses_are_accepted(payload, address):
    payload["sendTo"] = address

    assert validate_request(payload).ok


@pytest.mark.parametrize("address", ["root@localhost", "dev@mail.local", "a@", "@x.com", "a b@x.com"])
def test_unroutable_or_malformed_addresses_are_rejected(payload, address):
    payload["sendTo"] = address

    assert paths(validate_request(payload)) == ["sendTo"]
