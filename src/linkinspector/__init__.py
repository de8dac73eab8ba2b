# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
linkinspector package entrypoint.

Probes URLs concurrently with HTTP HEAD requests and classifies each one by its
content type, or by its URL suffix without any request in passive mode.
Results can be narrowed with allow-list matchers and are written as plain,
colored or JSON records. HTTP behavior is abstracted behind an injectable
client interface, and results are modeled with typed dataclasses.
"""

from .classification import Classifier
from .config import HttpSettings, InspectorSettings, load_http_settings, load_inspector_settings
from .errors import ConfigError, InputError, LinkInspectorError, ProbeError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .matchers import FilterSpec, matches
from .models import ClassificationMode, ClassificationOutcome, ProbeResult
from .output import OutputFormat, ResultSink
from .runtime import LinkInspector
from .scan import DispatchSummary, Dispatcher, InspectionEngine, Prober
from .version import __version__

__all__ = [
    "ClassificationMode",
    "ClassificationOutcome",
    "Classifier",
    "ConfigError",
    "DispatchSummary",
    "Dispatcher",
    "FilterSpec",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InputError",
    "InspectionEngine",
    "InspectorSettings",
    "LinkInspector",
    "LinkInspectorError",
    "OutputFormat",
    "ProbeError",
    "ProbeResult",
    "Prober",
    "ResultSink",
    "StubHttpClient",
    "create_default_http_client",
    "load_http_settings",
    "load_inspector_settings",
    "matches",
    "setup_logging",
    "__version__",
]
