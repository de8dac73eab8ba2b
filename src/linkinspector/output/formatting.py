# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Rendering of classification outcomes as text lines or JSON records."""

from __future__ import annotations

import json
from enum import Enum

from colorama import Fore, Style

from ..models import ClassificationMode, ClassificationOutcome


class OutputFormat(str, Enum):
    PLAIN = "plain"
    COLOR = "color"
    JSON = "json"

    @classmethod
    def select(cls, *, json_output: bool = False, color: bool = True) -> OutputFormat:
        if json_output:
            return cls.JSON
        return cls.COLOR if color else cls.PLAIN


_MODE_STYLES = {
    ClassificationMode.ACTIVE: Style.BRIGHT + Fore.BLUE,
    ClassificationMode.PASSIVE: Fore.CYAN,
}


def _paint(text: str, style: str, color: bool) -> str:
    return f"{style}{text}{Style.RESET_ALL}" if color else text


def format_text(outcome: ClassificationOutcome, *, verbose: bool = False, color: bool = False) -> str:
    """
    One result line without a trailing newline.

    Request-based: ``<url> [<status>] [<length>] [<type>] [<label>]``.
    Extension-based: ``<url> [<label>]``. Color only adds ANSI styling.
    """
    label = _paint(f"[{outcome.label}]", Fore.YELLOW, color)
    if outcome.is_passive:
        line = f"{outcome.url} {label}"
    else:
        status = _paint(str(outcome.status_code), Fore.GREEN, color)
        length = _paint(str(outcome.content_length), Fore.MAGENTA, color)
        content_type = _paint(outcome.content_type or "", Fore.MAGENTA, color)
        line = f"{outcome.url} [{status}] [{length}] [{content_type}] {label}"
    if verbose:
        prefix = _paint(outcome.mode.value, _MODE_STYLES[outcome.mode], color)
        line = f"{prefix}: {line}"
    return line


def format_json(outcome: ClassificationOutcome, *, style: str = "pretty") -> str:
    """JSON record; ``pretty`` is indented over several lines, ``compact`` is one line."""
    record = outcome.to_dict()
    if style == "compact":
        return json.dumps(record, separators=(",", ":"))
    return json.dumps(record, indent=2)


def render(
    outcome: ClassificationOutcome,
    output_format: OutputFormat,
    *,
    verbose: bool = False,
    json_style: str = "pretty",
) -> str:
    if output_format == OutputFormat.JSON:
        return format_json(outcome, style=json_style)
    return format_text(outcome, verbose=verbose, color=output_format == OutputFormat.COLOR)


__all__ = ["OutputFormat", "format_json", "format_text", "render"]
