# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe, per-URL inspection and concurrent dispatch."""

from .dispatcher import DispatchSummary, Dispatcher
from .engine import InspectionEngine
from .prober import Prober

__all__ = ["DispatchSummary", "Dispatcher", "InspectionEngine", "Prober"]
