# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import time

import httpx
import pytest

from linkinspector.config import HttpSettings
from linkinspector.errors import ErrorCategory, ProbeError
from linkinspector.http import HttpRequest, HttpResponse, StubHttpClient, header_value
from linkinspector.http.httpx_client import HttpxClient, RequestDeadline
from linkinspector.scan.prober import Prober


def _client(handler, **settings):
    return HttpxClient(HttpSettings(**settings), client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_httpx_client_sends_head_with_user_agent():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"Content-Type": "text/html; charset=UTF-8", "Content-Length": "1234"})

    client = _client(handler, user_agent="UA/1.0")
    response = client.request(HttpRequest(url="https://example.com/", method="HEAD"))

    assert response.ok is True
    assert response.status_code == 200
    assert header_value(response.headers, "Content-Type") == "text/html; charset=UTF-8"
    assert header_value(response.headers, "content-length") == "1234"
    assert response.url == "https://example.com/"
    assert seen[0].method == "HEAD"
    assert seen[0].headers["User-Agent"] == "UA/1.0"


def test_httpx_client_explicit_headers_win():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    client = _client(handler, user_agent="Default/1.0")
    client.request(HttpRequest(url="https://example.com/", headers={"User-Agent": "Custom/2.0"}))
    assert seen[0].headers["User-Agent"] == "Custom/2.0"


def test_httpx_client_reports_transport_errors():
    def timeout_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    response = _client(timeout_handler).request(HttpRequest(url="https://slow.example/"))
    assert response.ok is False
    assert response.status_code is None
    assert response.error_type == "ConnectTimeout"
    assert response.error_category == ErrorCategory.TIMEOUT

    def dns_handler(request: httpx.Request) -> httpx.Response:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as exc:
            raise httpx.ConnectError("Name or service not known", request=request) from exc

    response = _client(dns_handler).request(HttpRequest(url="https://nowhere.invalid/"))
    assert response.ok is False
    assert response.error_category == ErrorCategory.DNS_ERROR
    assert "Name or service" in (response.error_message or "")


def test_httpx_client_builds_underlying_client_from_settings(monkeypatch):
    created = {}

    class FakeHttpxClient:
        def __init__(self, follow_redirects, timeout, verify):
            created.update(follow_redirects=follow_redirects, timeout=timeout, verify=verify)

        def close(self):
            created["closed"] = True

    monkeypatch.setattr(httpx, "Client", FakeHttpxClient)
    client = HttpxClient(HttpSettings(timeout=3.0, verify_ssl=False, allow_redirects=True))
    client.close()
    assert created == {"follow_redirects": True, "timeout": 3.0, "verify": False, "closed": True}


def test_header_value_is_case_insensitive():
    headers = {"content-type": "text/plain", "X-Custom": " padded "}
    assert header_value(headers, "Content-Type") == "text/plain"
    assert header_value(headers, "x-custom") == "padded"
    assert header_value(headers, "missing", "fallback") == "fallback"
    assert header_value(None, "Content-Type") == ""


def test_stub_http_client_records_requests():
    stub = StubHttpClient({"https://a/": HttpResponse(ok=True, status_code=200)})
    assert stub.request(HttpRequest(url="https://a/")).status_code == 200
    missing = stub.request(HttpRequest(url="https://b/"))
    assert missing.ok is False
    assert [r.url for r in stub.requests] == ["https://a/", "https://b/"]
    stub.close()
    assert stub.closed is True


def test_httpx_client_follows_redirects_hop_by_hop():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "/new"})
        return httpx.Response(200, headers={"Content-Type": "application/pdf"})

    response = _client(handler).request(HttpRequest(url="https://example.com/old"))
    assert response.ok is True
    assert response.status_code == 200
    assert response.url == "https://example.com/new"
    assert seen == [("HEAD", "/old"), ("HEAD", "/new")]

    seen.clear()
    response = _client(handler).request(HttpRequest(url="https://example.com/old", allow_redirects=False))
    assert response.status_code == 301
    assert seen == [("HEAD", "/old")]


def test_httpx_client_redirect_loop_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "/loop"})

    response = _client(handler).request(HttpRequest(url="https://example.com/loop"))
    assert response.ok is False
    assert response.error_type == "TooManyRedirects"


def test_httpx_client_timeout_covers_whole_request():
    def slow_handler(request: httpx.Request) -> httpx.Response:
        time.sleep(0.2)
        return httpx.Response(200)

    response = _client(slow_handler).request(HttpRequest(url="https://slow.example/", timeout=0.05))
    assert response.ok is False
    assert response.error_type == "ReadTimeout"
    assert response.error_category == ErrorCategory.TIMEOUT


def test_httpx_client_timeout_spans_redirect_hops():
    hops = []

    def handler(request: httpx.Request) -> httpx.Response:
        hops.append(request.url.path)
        time.sleep(0.05)
        return httpx.Response(302, headers={"Location": f"/hop{len(hops)}"})

    response = _client(handler).request(HttpRequest(url="https://example.com/start", timeout=0.12))
    assert response.ok is False
    assert response.error_category == ErrorCategory.TIMEOUT
    assert len(hops) <= 3


def test_slow_server_surfaces_as_timeout_error():
    def slow_handler(request: httpx.Request) -> httpx.Response:
        time.sleep(0.2)
        return httpx.Response(200, headers={"Content-Type": "text/html"})

    settings = HttpSettings(timeout=0.05)
    prober = Prober(_client(slow_handler, timeout=0.05), settings)
    with pytest.raises(ProbeError) as excinfo:
        prober.probe("https://slow.example/")
    assert excinfo.value.kind == "timeout"


def test_request_deadline_shrinks_phase_timeouts():
    deadline = RequestDeadline(5.0)
    request = httpx.Request("HEAD", "https://example.com/")
    deadline.attach(request)
    assert 0 < request.extensions["timeout"]["read"] <= 5.0
    assert request.extensions["trace"] == deadline.trace

    deadline.expires_at = time.monotonic() + 0.5
    deadline.trace("http11.receive_response_headers.started", {"request": request})
    assert request.extensions["timeout"]["read"] <= 0.5
    assert request.extensions["timeout"]["connect"] <= 0.5

    deadline.expires_at = time.monotonic() - 1
    assert deadline.remaining() == 0.0
    with pytest.raises(httpx.TimeoutException):
        deadline.check(request)

    unbounded = RequestDeadline(None)
    assert unbounded.remaining() is None
    assert unbounded.expired() is False
