# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single HEAD probe returning the headers used for classification."""

from __future__ import annotations

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, ProbeError, error_category_to_reason
from ..http import HttpClient, HttpRequest, header_value
from ..models import UNKNOWN_CONTENT_LENGTH, ProbeResult


def parse_content_type(raw: str) -> str:
    """Drop parameters such as ``charset`` and surrounding whitespace."""
    return raw.split(";", 1)[0].strip()


def parse_content_length(raw: str) -> int:
    """Advertised length, or -1 when the header is missing or not a valid size."""
    try:
        value = int(raw.strip())
    except ValueError:
        return UNKNOWN_CONTENT_LENGTH
    return value if value >= 0 else UNKNOWN_CONTENT_LENGTH


class Prober:
    """Issues exactly one HEAD request per URL; never retries and never reads a body."""

    def __init__(self, http_client: HttpClient, settings: HttpSettings | None = None):
        self.http_client = http_client
        self.settings = settings or load_http_settings()

    def probe(self, url: str) -> ProbeResult:
        request = HttpRequest(
            url=url,
            method="HEAD",
            headers={"User-Agent": self.settings.user_agent},
            timeout=self.settings.timeout,
            allow_redirects=self.settings.allow_redirects,
        )
        response = self.http_client.request(request)
        if not response.ok or response.status_code is None:
            category = response.error_category
            if category == ErrorCategory.NONE:
                category = ErrorCategory.UNKNOWN_ERROR
            raise ProbeError(url, response.error_message or error_category_to_reason(category), category)

        return ProbeResult(
            status_code=response.status_code,
            content_length=parse_content_length(header_value(response.headers, "Content-Length")),
            content_type=parse_content_type(header_value(response.headers, "Content-Type")),
        )


__all__ = ["Prober", "parse_content_length", "parse_content_type"]
