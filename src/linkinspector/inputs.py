# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target sources: a single URL, a list file, or standard input."""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TextIO

from .errors import InputError

logger = logging.getLogger(__name__)


def iter_targets(lines: Iterable[str], *, source: str = "input") -> Iterator[str]:
    """Lazily yield stripped, non-blank lines; a read error ends the stream."""
    try:
        for line in lines:
            url = line.strip()
            if url:
                yield url
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error reading %s: %s", source, exc)


@contextmanager
def open_targets(
    target: str | None = None,
    list_path: str | None = None,
    stdin: TextIO | None = None,
) -> Iterator[Iterator[str]]:
    """
    Select exactly one target source.

    A single target wins over a list file, which wins over stdin. The list file
    is opened before anything is yielded so a bad path fails the run up front.
    """
    if target:
        yield iter_targets([target], source="target")
        return

    if list_path:
        try:
            handle = open(list_path, encoding="utf-8", errors="replace")  # noqa: SIM115
        except OSError as exc:
            raise InputError(f"Error opening file {list_path}: {exc}") from exc
        with handle:
            yield iter_targets(handle, source=list_path)
        return

    stream = stdin if stdin is not None else sys.stdin
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        yield iter_targets(stream, source="stdin")
        return

    # Undecodable bytes become U+FFFD instead of aborting the whole stream.
    lenient = io.TextIOWrapper(buffer, encoding="utf-8", errors="replace")
    try:
        yield iter_targets(lenient, source="stdin")
    finally:
        lenient.detach()


__all__ = ["iter_targets", "open_targets"]
