# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Result formatting and output sinks."""

from .formatting import OutputFormat, format_json, format_text, render
from .sink import ResultSink

__all__ = ["OutputFormat", "ResultSink", "format_json", "format_text", "render"]
