# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Bounded fan-out of per-URL inspections.

Every URL becomes one task on a thread pool. A bounded semaphore acts as the
admission gate: the input loop takes a slot before submitting a task and the
task gives it back when it finishes, so at most ``concurrency`` tasks exist at
once and reading a large input never runs ahead of the workers. The slot is
taken by the input loop rather than by the task on purpose: it bounds pending
work and worker threads as well as in-flight requests. Tasks are independent;
their output may appear in any order relative to the input.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from ..config import DEFAULT_CONCURRENCY
from ..errors import ConfigError, ProbeError
from ..models import ClassificationOutcome

logger = logging.getLogger(__name__)


class Inspector(Protocol):
    def inspect(self, url: str) -> ClassificationOutcome | None: ...


class OutcomeSink(Protocol):
    def emit(self, outcome: ClassificationOutcome) -> None: ...


@dataclass
class DispatchSummary:
    """Per-run counters; informational only."""

    submitted: int = 0
    emitted: int = 0
    filtered: int = 0
    failed: int = 0


class Dispatcher:
    """Runs an inspector over a stream of URLs with bounded concurrency."""

    def __init__(
        self,
        inspector: Inspector,
        sink: OutcomeSink,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
        delay: float | None = None,
    ):
        if concurrency < 1:
            raise ConfigError(f"concurrency must be a positive integer, got {concurrency}")
        self.inspector = inspector
        self.sink = sink
        self.concurrency = concurrency
        self.delay = delay if delay is not None and delay >= 0 else None
        self._gate = threading.BoundedSemaphore(concurrency)
        self._lock = threading.Lock()
        self._summary = DispatchSummary()

    def run(self, urls: Iterable[str]) -> DispatchSummary:
        """Process every URL and return once all tasks have finished."""
        self._summary = DispatchSummary()
        pool = ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="linkinspector")
        try:
            for url in urls:
                self._gate.acquire()
                try:
                    pool.submit(self._process, url)
                except BaseException:
                    self._gate.release()
                    raise
                self._count("submitted")
        except BaseException:
            # Interrupted: drop queued work; in-flight requests end on their own timeout.
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        pool.shutdown(wait=True)
        summary = self._summary
        logger.debug(
            "Processed %d URLs: %d emitted, %d filtered, %d failed",
            summary.submitted,
            summary.emitted,
            summary.filtered,
            summary.failed,
        )
        return summary

    def _process(self, url: str) -> None:
        try:
            outcome = self.inspector.inspect(url)
            if outcome is None:
                self._count("filtered")
            else:
                self.sink.emit(outcome)
                self._count("emitted")
        except ProbeError as exc:
            self._count("failed")
            logger.warning("Error fetching %s: %s", url, exc)
        except Exception:  # noqa: BLE001
            self._count("failed")
            logger.exception("Unexpected error while processing %s", url)
        finally:
            try:
                if self.delay:
                    time.sleep(self.delay)
            finally:
                self._gate.release()

    def _count(self, name: str) -> None:
        with self._lock:
            setattr(self._summary, name, getattr(self._summary, name) + 1)


__all__ = ["DispatchSummary", "Dispatcher"]
