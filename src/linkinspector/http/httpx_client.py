# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import time
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class RequestDeadline:
    """
    One wall-clock budget for a request, shared by every phase and redirect hop.

    httpx applies a scalar timeout to each phase (pool, connect, write, read)
    separately. Before every hop, and again whenever the transport reports that
    a phase is starting, the request's timeout extension is reset to whatever
    is left of the budget.
    """

    def __init__(self, timeout: float | None):
        self.expires_at = None if timeout is None else time.monotonic() + timeout
        self._request: httpx.Request | None = None

    def remaining(self) -> float | None:
        if self.expires_at is None:
            return None
        return max(self.expires_at - time.monotonic(), 0.0)

    def expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def check(self, request: httpx.Request) -> None:
        if self.expired():
            raise httpx.ReadTimeout("Request deadline exceeded", request=request)

    def attach(self, request: httpx.Request) -> None:
        self._request = request
        request.extensions["timeout"] = httpx.Timeout(self.remaining()).as_dict()
        request.extensions["trace"] = self.trace

    def trace(self, event_name: str, info: dict[str, Any]) -> None:
        if self._request is not None and event_name.endswith(".started"):
            self._request.extensions["timeout"] = httpx.Timeout(self.remaining()).as_dict()


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    A single ``httpx.Client`` is shared by every worker thread; httpx clients
    are thread-safe and pool connections per host. Redirects are followed hop
    by hop so the whole chain stays within one ``timeout``.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        deadline = RequestDeadline(timeout)

        try:
            outgoing = self._client.build_request(request.method, request.url, headers=headers)
            redirects = 0
            while True:
                deadline.check(outgoing)
                deadline.attach(outgoing)
                resp = self._client.send(outgoing, follow_redirects=False)
                resp.close()
                deadline.check(outgoing)
                if not request.allow_redirects or resp.next_request is None:
                    break
                redirects += 1
                if redirects > self._client.max_redirects:
                    raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=outgoing)
                outgoing = resp.next_request
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            url=str(resp.url),
        )

    def close(self) -> None:
        self._client.close()
