# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Startup banner and version line."""

from __future__ import annotations

import sys
from typing import TextIO

from .version import __version__

BANNER = r"""
    __ _         __    _                                  __
   / /(_)____   / /__ (_)____   _____ ____   ___   _____ / /_ ____   _____
  / // // __ \ / //_// // __ \ / ___// __ \ / _ \ / ___// __// __ \ / ___/
 / // // / / // ,<  / // / / /(__  )/ /_/ //  __// /__ / /_ / /_/ // /
/_//_//_/ /_//_/|_|/_//_/ /_//____// .___/ \___/ \___/ \__/ \____//_/
                                  /_/
"""


def version_line() -> str:
    return f"Current linkinspector version v{__version__}"


def print_banner(stream: TextIO | None = None) -> None:
    out = stream if stream is not None else sys.stderr
    out.write(f"{BANNER}\n{version_line():>75}\n\n")


def print_version(stream: TextIO | None = None) -> None:
    out = stream if stream is not None else sys.stdout
    out.write(version_line() + "\n")


__all__ = ["BANNER", "print_banner", "print_version", "version_line"]
