# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for linkinspector."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from .errors import ConfigError
from .matchers import FilterSpec

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36"
)
DEFAULT_CONCURRENCY = 50
JSON_STYLES = ("pretty", "compact")
JSON_STYLE_ALIASES = {"MarshalIndent": "pretty", "Marshal": "compact"}

_DURATION_RE = re.compile(r"(?P<sign>[-+]?)(?P<body>(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")
_DURATION_PART_RE = re.compile(r"(?P<value>\d+(?:\.\d*)?|\.\d+)(?P<unit>ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_duration(text: str | None) -> float | None:
    """
    Parse a duration such as ``200ms``, ``1s`` or ``1m30s`` into seconds.

    A bare number is read as seconds. Negative durations mean "no delay" and
    yield ``None``, as does an empty value.
    """
    raw = (text or "").strip()
    if not raw:
        return None
    if _NUMBER_RE.fullmatch(raw):
        seconds = float(raw)
    else:
        match = _DURATION_RE.fullmatch(raw)
        if not match:
            raise ConfigError(f"invalid duration: {text!r}")
        seconds = sum(
            float(part.group("value")) * _DURATION_UNITS[part.group("unit")]
            for part in _DURATION_PART_RE.finditer(match.group("body"))
        )
        if match.group("sign") == "-":
            seconds = -seconds
    if seconds < 0:
        return None
    return seconds


def normalize_json_style(value: str) -> str:
    """Map legacy style names onto ``pretty`` or ``compact``; other values pass through."""
    return JSON_STYLE_ALIASES.get(value.strip(), value.strip())


def _duration_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        return parse_duration(value) if value is not None else default
    except ConfigError:
        return default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("LINKINSPECTOR_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("LINKINSPECTOR_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("LINKINSPECTOR_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("LINKINSPECTOR_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


@dataclass
class InspectorSettings:
    """Run-level options: concurrency, passive mode, filters and output."""

    concurrency: int = DEFAULT_CONCURRENCY
    delay: float | None = None
    passive: bool = False
    verbose: bool = False
    color: bool = True
    json_output: bool = False
    json_style: str = "pretty"
    output_path: str | None = None
    append_output: bool = False
    filters: FilterSpec = field(default_factory=FilterSpec)

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ConfigError(f"concurrency must be a positive integer, got {self.concurrency}")
        if self.json_style not in JSON_STYLES:
            raise ConfigError(f"unknown JSON style {self.json_style!r}; expected one of {', '.join(JSON_STYLES)}")
        if self.delay is not None and self.delay < 0:
            self.delay = None

    @classmethod
    def from_env(cls) -> InspectorSettings:
        concurrency = _int_env("LINKINSPECTOR_CONCURRENCY", DEFAULT_CONCURRENCY)
        if concurrency < 1:
            concurrency = DEFAULT_CONCURRENCY
        return cls(
            concurrency=concurrency,
            delay=_duration_env("LINKINSPECTOR_DELAY", None),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_inspector_settings() -> InspectorSettings:
    """Load run settings from environment with sensible defaults."""
    return InspectorSettings.from_env()


__all__ = [
    "DEFAULT_CONCURRENCY",
    "DEFAULT_USER_AGENT",
    "HttpSettings",
    "InspectorSettings",
    "JSON_STYLES",
    "JSON_STYLE_ALIASES",
    "load_http_settings",
    "load_inspector_settings",
    "normalize_json_style",
    "parse_duration",
]
