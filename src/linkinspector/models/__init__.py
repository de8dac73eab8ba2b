# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for linkinspector."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .outcome import ClassificationMode, ClassificationOutcome
from .probe import UNKNOWN_CONTENT_LENGTH, ProbeResult

__all__ = [
    "ClassificationMode",
    "ClassificationOutcome",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeResult",
    "UNKNOWN_CONTENT_LENGTH",
]
