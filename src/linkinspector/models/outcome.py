# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Classification outcome model and its JSON record shape."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .probe import ProbeResult


class ClassificationMode(str, Enum):
    ACTIVE = "REQUEST BASED"
    PASSIVE = "EXTENSION BASED"


@dataclass(frozen=True)
class ClassificationOutcome:
    """
    Final, emit-ready result for one URL.

    Passive outcomes carry only the suffix label; no request was made, so the
    status code, content length and content type are ``None``. Active outcomes
    always carry those three, and their label is empty when the content type is
    not in the lookup table.
    """

    url: str
    mode: ClassificationMode
    label: str = ""
    status_code: int | None = None
    content_length: int | None = None
    content_type: str | None = None

    @classmethod
    def passive(cls, url: str, label: str) -> ClassificationOutcome:
        return cls(url=url, mode=ClassificationMode.PASSIVE, label=label)

    @classmethod
    def active(cls, url: str, result: ProbeResult, label: str) -> ClassificationOutcome:
        return cls(
            url=url,
            mode=ClassificationMode.ACTIVE,
            label=label,
            status_code=result.status_code,
            content_length=result.content_length,
            content_type=result.content_type,
        )

    @property
    def is_passive(self) -> bool:
        return self.mode == ClassificationMode.PASSIVE

    def to_dict(self) -> dict[str, Any]:
        """JSON record; zero or empty fields are left out of ``data`` entirely."""
        data: dict[str, Any] = {}
        if self.status_code:
            data["status_code"] = self.status_code
        if self.content_length:
            data["content_length"] = self.content_length
        if self.content_type:
            data["content_type"] = self.content_type
        if self.label:
            data["suffix"] = self.label
        return {"host": self.url, "type": self.mode.value, "data": data}
