# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl
import sys

import httpx
import pytest

from linkinspector import config, log
from linkinspector.config import DEFAULT_USER_AGENT, InspectorSettings, parse_duration
from linkinspector.errors import (
    ConfigError,
    ErrorCategory,
    ProbeError,
    categorize_exception,
    error_category_to_reason,
)


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("LINKINSPECTOR_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("LINKINSPECTOR_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("LINKINSPECTOR_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("LINKINSPECTOR_HTTP_VERIFY_SSL", "0")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("LINKINSPECTOR_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.delenv("LINKINSPECTOR_USER_AGENT", raising=False)

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.verify_ssl is True


def test_http_settings_rejects_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("LINKINSPECTOR_HTTP_TIMEOUT", "0")
    assert config.load_http_settings().timeout == config.HttpSettings.timeout


def test_inspector_settings_env(monkeypatch):
    monkeypatch.setenv("LINKINSPECTOR_CONCURRENCY", "7")
    monkeypatch.setenv("LINKINSPECTOR_DELAY", "250ms")
    settings = config.load_inspector_settings()
    assert settings.concurrency == 7
    assert settings.delay == pytest.approx(0.25)

    monkeypatch.setenv("LINKINSPECTOR_CONCURRENCY", "-3")
    monkeypatch.setenv("LINKINSPECTOR_DELAY", "soon")
    settings = config.load_inspector_settings()
    assert settings.concurrency == config.DEFAULT_CONCURRENCY
    assert settings.delay is None


def test_inspector_settings_validation():
    with pytest.raises(ConfigError):
        InspectorSettings(concurrency=0)
    with pytest.raises(ConfigError):
        InspectorSettings(json_style="MarshalIndent")
    assert InspectorSettings(delay=-1.0).delay is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("200ms", 0.2),
        ("1s", 1.0),
        ("1.5s", 1.5),
        ("1m30s", 90.0),
        ("2h", 7200.0),
        ("500us", 0.0005),
        ("3", 3.0),
        ("0", 0.0),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == pytest.approx(expected)


def test_parse_duration_negative_and_empty_mean_no_delay():
    assert parse_duration("-1ns") is None
    assert parse_duration("-2") is None
    assert parse_duration("") is None
    assert parse_duration(None) is None


@pytest.mark.parametrize("text", ["fast", "10 parsecs", "1x", "inf", "nan", "s"])
def test_parse_duration_rejects_garbage(text):
    with pytest.raises(ConfigError):
        parse_duration(text)


def test_categorize_exception_httpx_types():
    assert categorize_exception(httpx.ConnectTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ReadTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.UnsupportedProtocol("no scheme")) == ErrorCategory.INVALID_URL
    assert categorize_exception(httpx.InvalidURL("bad")) == ErrorCategory.INVALID_URL
    assert categorize_exception(RuntimeError("?")) == ErrorCategory.UNKNOWN_ERROR


def _wrapped(cause: BaseException) -> httpx.ConnectError:
    try:
        raise cause
    except BaseException as inner:  # noqa: BLE001
        try:
            raise httpx.ConnectError(str(inner)) from inner
        except httpx.ConnectError as outer:
            return outer


def test_categorize_exception_inspects_cause_chain():
    assert categorize_exception(_wrapped(socket.gaierror(-2, "Name or service not known"))) == ErrorCategory.DNS_ERROR
    assert categorize_exception(_wrapped(ssl.SSLCertVerificationError("bad cert"))) == ErrorCategory.SSL_ERROR
    assert categorize_exception(_wrapped(ConnectionRefusedError("nope"))) == ErrorCategory.CONNECTION_ERROR


def test_probe_error_kind_and_message():
    timeout = ProbeError("http://x", "", ErrorCategory.TIMEOUT)
    assert timeout.kind == "timeout"
    assert str(timeout) == error_category_to_reason(ErrorCategory.TIMEOUT)

    transport = ProbeError("http://x", "connection refused", ErrorCategory.CONNECTION_ERROR)
    assert transport.kind == "transport"
    assert str(transport) == "connection refused"
    assert error_category_to_reason(None) == ""


def test_setup_logging_targets_stderr_and_quiets_http_stack(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    httpx_logger = logging.getLogger("httpx")
    monkeypatch.setattr(httpx_logger, "level", httpx_logger.level)
    httpcore_logger = logging.getLogger("httpcore")
    monkeypatch.setattr(httpcore_logger, "level", httpcore_logger.level)

    log.setup_logging("debug")
    assert calls[-1]["level"] == logging.DEBUG
    assert calls[-1]["stream"] is sys.stderr
    assert httpx_logger.level == logging.DEBUG

    log.setup_logging("warning")
    assert calls[-1]["level"] == logging.WARNING
    assert httpx_logger.level == logging.WARNING

    log.setup_logging("bogus")
    assert calls[-1]["level"] == logging.WARNING
