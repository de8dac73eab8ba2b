# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from linkinspector.config import HttpSettings
from linkinspector.errors import ErrorCategory, ProbeError
from linkinspector.http import HttpRequest, HttpResponse, StubHttpClient
from linkinspector.models import UNKNOWN_CONTENT_LENGTH
from linkinspector.scan.prober import Prober, parse_content_length, parse_content_type


class RecordingClient:
    def __init__(self, response: HttpResponse):
        self.response = response
        self.requests: list[HttpRequest] = []

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        return self.response

    def close(self) -> None:  # pragma: no cover - not exercised
        pass


def test_probe_issues_single_head_with_settings():
    client = RecordingClient(HttpResponse(ok=True, status_code=200, headers={"content-type": "text/html"}))
    settings = HttpSettings(timeout=2.5, user_agent="Probe/1.0")
    Prober(client, settings).probe("https://example.com/")

    assert len(client.requests) == 1
    request = client.requests[0]
    assert request.method == "HEAD"
    assert request.timeout == 2.5
    assert request.headers == {"User-Agent": "Probe/1.0"}
    assert request.allow_redirects is True


def test_probe_extracts_status_length_and_bare_content_type():
    client = RecordingClient(
        HttpResponse(
            ok=True,
            status_code=200,
            headers={"content-type": " text/html ; charset=UTF-8", "content-length": "1234"},
        )
    )
    result = Prober(client, HttpSettings()).probe("https://example.com/")
    assert result.status_code == 200
    assert result.content_length == 1234
    assert result.content_type == "text/html"


def test_probe_missing_headers():
    client = RecordingClient(HttpResponse(ok=True, status_code=404, headers={}))
    result = Prober(client, HttpSettings()).probe("https://example.com/missing")
    assert result.status_code == 404
    assert result.content_length == UNKNOWN_CONTENT_LENGTH
    assert result.content_type == ""


def test_probe_transport_failure_raises_probe_error():
    stub = StubHttpClient()
    stub.add(
        "https://slow.example/",
        HttpResponse(ok=False, error_message="timed out", error_category=ErrorCategory.TIMEOUT),
    )
    prober = Prober(stub, HttpSettings())

    with pytest.raises(ProbeError) as excinfo:
        prober.probe("https://slow.example/")
    assert excinfo.value.kind == "timeout"
    assert excinfo.value.url == "https://slow.example/"
    assert str(excinfo.value) == "timed out"

    with pytest.raises(ProbeError) as excinfo:
        prober.probe("https://unknown.example/")
    assert excinfo.value.kind == "transport"
    assert len(stub.requests) == 2


def test_probe_failure_without_category_is_unknown():
    client = RecordingClient(HttpResponse(ok=False))
    with pytest.raises(ProbeError) as excinfo:
        Prober(client, HttpSettings()).probe("https://example.com/")
    assert excinfo.value.category == ErrorCategory.UNKNOWN_ERROR
    assert str(excinfo.value)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1234", 1234), (" 0 ", 0), ("", -1), ("abc", -1), ("-5", -1)],
)
def test_parse_content_length(raw, expected):
    assert parse_content_length(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("text/html", "text/html"),
        ("text/html; charset=UTF-8", "text/html"),
        ("  application/json ;", "application/json"),
        ("", ""),
    ],
)
def test_parse_content_type(raw, expected):
    assert parse_content_type(raw) == expected
