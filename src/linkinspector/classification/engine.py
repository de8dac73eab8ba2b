# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Suffix- and content-type-based classification."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .tables import CONTENT_TYPE_LABELS, SUFFIX_LABELS, SuffixGroup


class Classifier:
    """
    Resolves short labels from URL suffixes (passive) or content types (active).

    Tables are injected so callers can narrow or extend them; they are only
    read, never mutated, and may be shared between threads.
    """

    def __init__(
        self,
        suffix_labels: Sequence[SuffixGroup] = SUFFIX_LABELS,
        content_type_labels: Mapping[str, str] = CONTENT_TYPE_LABELS,
    ):
        # str.endswith accepts a tuple of candidates, so each group is one call.
        self._suffix_groups = tuple((tuple(suffixes), label) for suffixes, label in suffix_labels)
        self._content_type_labels = content_type_labels

    def classify_by_suffix(self, url: str) -> str | None:
        """Label of the first group with a suffix ``url`` ends with, else None."""
        for suffixes, label in self._suffix_groups:
            if url.endswith(suffixes):
                return label
        return None

    def classify_by_content_type(self, content_type: str) -> str:
        """Exact lookup of an already-trimmed content type; empty string on a miss."""
        return self._content_type_labels.get(content_type, "")


__all__ = ["Classifier"]
