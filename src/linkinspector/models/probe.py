# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe result model."""

from dataclasses import dataclass

UNKNOWN_CONTENT_LENGTH = -1


@dataclass(frozen=True)
class ProbeResult:
    """Headers of interest from one successful HEAD exchange."""

    status_code: int
    content_length: int = UNKNOWN_CONTENT_LENGTH
    content_type: str = ""
