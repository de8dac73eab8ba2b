# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The request seam used by the prober, and the factory for the real client."""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Issues one request and reports the outcome as an HttpResponse.

    Implementations are shared by every worker thread, so ``request`` must be
    thread-safe. Transport failures come back as ``ok=False`` responses rather
    than exceptions.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Build the httpx-backed client used for real runs."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())
