# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the linkinspector CLI."""

from __future__ import annotations

import logging
import os
import sys

DEFAULT_LOG_LEVEL = os.getenv("LINKINSPECTOR_LOG_LEVEL", "WARNING").upper()

# Per-request chatter from the HTTP stack; only shown with --debug.
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> None:
    """
    Send log records to stderr so stdout carries only result records.

    Per-URL failures are logged at WARNING, so they show by default.
    """
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        stream=sys.stderr,
        format="[%(levelname)s] %(message)s",
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if effective_level <= logging.DEBUG else logging.WARNING)


__all__ = ["setup_logging"]
