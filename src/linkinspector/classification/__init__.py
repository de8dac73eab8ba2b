# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL classification: lookup tables and the classifier that reads them."""

from .engine import Classifier
from .tables import CONTENT_TYPE_LABELS, SUFFIX_LABELS

__all__ = ["CONTENT_TYPE_LABELS", "Classifier", "SUFFIX_LABELS"]
