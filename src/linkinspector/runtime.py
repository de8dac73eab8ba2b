# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level linkinspector facade wiring client, classifier, sink and dispatcher."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress

from .classification import Classifier
from .config import HttpSettings, InspectorSettings, load_http_settings, load_inspector_settings
from .http.client import HttpClient, create_default_http_client
from .models import ClassificationOutcome
from .output import OutputFormat, ResultSink
from .scan import DispatchSummary, Dispatcher, InspectionEngine, Prober


class LinkInspector:
    """
    Convenience wrapper that shares one HTTP client and one result sink across a run.

    The output file (if any) is opened here, so a bad output path fails before
    any URL is read or probed.
    """

    def __init__(
        self,
        settings: InspectorSettings | None = None,
        http_settings: HttpSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        classifier: Classifier | None = None,
        sink: ResultSink | None = None,
    ):
        self.settings = settings or load_inspector_settings()
        self.http_settings = http_settings or load_http_settings()
        self.sink = sink or ResultSink.open(
            self.settings.output_path,
            append=self.settings.append_output,
            output_format=OutputFormat.select(json_output=self.settings.json_output, color=self.settings.color),
            verbose=self.settings.verbose,
            json_style=self.settings.json_style,
        )
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.classifier = classifier or Classifier()
        self.prober = Prober(self.http_client, self.http_settings)
        self.engine = InspectionEngine(
            self.prober,
            self.classifier,
            self.settings.filters,
            passive=self.settings.passive,
        )
        self.dispatcher = Dispatcher(
            self.engine,
            self.sink,
            concurrency=self.settings.concurrency,
            delay=self.settings.delay,
        )

    def inspect(self, url: str) -> ClassificationOutcome | None:
        """Classify one URL without emitting it; raises ProbeError on transport failure."""
        return self.engine.inspect(url)

    def run(self, urls: Iterable[str]) -> DispatchSummary:
        """Inspect every URL concurrently, emitting results as they complete."""
        return self.dispatcher.run(urls)

    def close(self) -> None:
        self.sink.close()
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> LinkInspector:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
