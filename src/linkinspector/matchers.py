# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Allow-list matchers for request-based results.

A matcher is a comma-separated list of literal values, e.g. ``200,302``. Each
candidate is trimmed; the observed value is compared verbatim (no wildcards,
no ranges, no case-folding). An empty matcher accepts everything.
"""

from __future__ import annotations

from dataclasses import dataclass


def parse_allow_list(candidates: str | None) -> frozenset[str]:
    """Split a comma-separated matcher into its trimmed candidates."""
    if not candidates:
        return frozenset()
    return frozenset(candidate.strip() for candidate in candidates.split(","))


def matches(value: str, candidates: str | None) -> bool:
    """Return True when ``value`` is allowed by the comma-separated ``candidates``."""
    if not candidates:
        return True
    return value in parse_allow_list(candidates)


def _allowed(value: str, allowed: frozenset[str]) -> bool:
    return not allowed or value in allowed


@dataclass(frozen=True)
class FilterSpec:
    """Parsed matchers for the four filterable dimensions; empty sets disable a dimension."""

    status_codes: frozenset[str] = frozenset()
    content_lengths: frozenset[str] = frozenset()
    content_types: frozenset[str] = frozenset()
    suffixes: frozenset[str] = frozenset()

    @classmethod
    def from_strings(
        cls,
        *,
        status_codes: str | None = None,
        content_lengths: str | None = None,
        content_types: str | None = None,
        suffixes: str | None = None,
    ) -> FilterSpec:
        return cls(
            status_codes=parse_allow_list(status_codes),
            content_lengths=parse_allow_list(content_lengths),
            content_types=parse_allow_list(content_types),
            suffixes=parse_allow_list(suffixes),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.status_codes or self.content_lengths or self.content_types or self.suffixes)

    def accepts(self, status_code: int, content_length: int, content_type: str, suffix: str) -> bool:
        """All four dimensions must pass."""
        return (
            _allowed(str(status_code), self.status_codes)
            and _allowed(str(content_length), self.content_lengths)
            and _allowed(content_type, self.content_types)
            and _allowed(suffix, self.suffixes)
        )


__all__ = ["FilterSpec", "matches", "parse_allow_list"]
