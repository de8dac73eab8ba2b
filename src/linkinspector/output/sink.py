# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Thread-safe result sink writing to stdout and an optional output file."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from ..errors import InputError
from ..models import ClassificationOutcome
from .formatting import OutputFormat, render


class ResultSink:
    """
    Shared by all worker threads.

    Each record is written with a single ``write`` call per destination while
    holding one lock, so records never interleave. Files receive the same
    record as the console, minus ANSI styling.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        file: TextIO | None = None,
        *,
        output_format: OutputFormat = OutputFormat.COLOR,
        verbose: bool = False,
        json_style: str = "pretty",
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.file = file
        self.output_format = output_format
        self.verbose = verbose
        self.json_style = json_style
        self._lock = threading.Lock()

    @classmethod
    def open(
        cls,
        path: str | None = None,
        *,
        append: bool = False,
        stream: TextIO | None = None,
        output_format: OutputFormat = OutputFormat.COLOR,
        verbose: bool = False,
        json_style: str = "pretty",
    ) -> ResultSink:
        """Create a sink, truncating ``path`` or appending to it; open failures are fatal."""
        file = None
        if path:
            try:
                file = open(path, "a" if append else "w", encoding="utf-8")  # noqa: SIM115
            except OSError as exc:
                raise InputError(f"Error opening output file {path}: {exc}") from exc
        return cls(stream, file, output_format=output_format, verbose=verbose, json_style=json_style)

    def render(self, outcome: ClassificationOutcome, output_format: OutputFormat | None = None) -> str:
        return render(
            outcome,
            output_format or self.output_format,
            verbose=self.verbose,
            json_style=self.json_style,
        )

    def emit(self, outcome: ClassificationOutcome) -> None:
        record = self.render(outcome) + "\n"
        file_record = record
        if self.file is not None and self.output_format == OutputFormat.COLOR:
            file_record = self.render(outcome, OutputFormat.PLAIN) + "\n"
        with self._lock:
            self.stream.write(record)
            self.stream.flush()
            if self.file is not None:
                self.file.write(file_record)
                self.file.flush()

    def close(self) -> None:
        with self._lock:
            if self.file is not None:
                self.file.close()
                self.file = None

    def __enter__(self) -> ResultSink:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
