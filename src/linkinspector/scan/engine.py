# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-URL pipeline: passive suffix match, else probe, classify and filter."""

from __future__ import annotations

import logging

from ..classification import Classifier
from ..matchers import FilterSpec
from ..models import ClassificationOutcome
from .prober import Prober

logger = logging.getLogger(__name__)


class InspectionEngine:
    """Turns one URL into an emit-ready outcome, or None when matchers reject it."""

    def __init__(
        self,
        prober: Prober,
        classifier: Classifier | None = None,
        filters: FilterSpec | None = None,
        *,
        passive: bool = False,
    ):
        self.prober = prober
        self.classifier = classifier or Classifier()
        self.filters = filters or FilterSpec()
        self.passive = passive

    def inspect(self, url: str) -> ClassificationOutcome | None:
        """
        Classify ``url``.

        In passive mode a known suffix short-circuits the request, and matchers
        are not applied to such outcomes. Otherwise the URL is probed and the
        label comes from the content type. Raises ProbeError on transport
        failures.
        """
        if self.passive:
            label = self.classifier.classify_by_suffix(url)
            if label is not None:
                logger.debug("Passive match for %s: %s", url, label)
                return ClassificationOutcome.passive(url, label)

        result = self.prober.probe(url)
        label = self.classifier.classify_by_content_type(result.content_type)
        if not self.filters.accepts(result.status_code, result.content_length, result.content_type, label):
            logger.debug("Matchers rejected %s (%s %s %s)", url, result.status_code, result.content_length, result.content_type)
            return None
        return ClassificationOutcome.active(url, result, label)


__all__ = ["InspectionEngine"]
