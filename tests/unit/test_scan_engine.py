# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from linkinspector.config import HttpSettings
from linkinspector.errors import ProbeError
from linkinspector.http import HttpResponse, StubHttpClient
from linkinspector.matchers import FilterSpec
from linkinspector.models import ClassificationMode
from linkinspector.scan import InspectionEngine, Prober


def _engine(responses=None, *, passive=False, filters=None):
    stub = StubHttpClient(responses or {})
    engine = InspectionEngine(Prober(stub, HttpSettings()), filters=filters, passive=passive)
    return engine, stub


def _html(status=200, length="1234"):
    return HttpResponse(ok=True, status_code=status, headers={"content-type": "text/html", "content-length": length})


def test_passive_suffix_match_skips_request():
    engine, stub = _engine(passive=True)
    outcome = engine.inspect("https://example.com/file.zip")

    assert outcome is not None
    assert outcome.mode == ClassificationMode.PASSIVE
    assert outcome.label == "zip"
    assert outcome.status_code is None
    assert outcome.content_length is None
    assert outcome.content_type is None
    assert stub.requests == []


def test_passive_mode_without_suffix_match_probes():
    engine, stub = _engine({"https://example.com/": _html()}, passive=True)
    outcome = engine.inspect("https://example.com/")
    assert outcome.mode == ClassificationMode.ACTIVE
    assert len(stub.requests) == 1


def test_active_mode_ignores_suffix():
    engine, stub = _engine({"https://example.com/file.zip": _html()})
    outcome = engine.inspect("https://example.com/file.zip")
    assert outcome.mode == ClassificationMode.ACTIVE
    assert outcome.label == "html"
    assert len(stub.requests) == 1


def test_active_outcome_fields():
    engine, _ = _engine({"https://example.com/": _html()})
    outcome = engine.inspect("https://example.com/")
    assert outcome.url == "https://example.com/"
    assert (outcome.status_code, outcome.content_length, outcome.content_type, outcome.label) == (
        200,
        1234,
        "text/html",
        "html",
    )


def test_unknown_content_type_yields_empty_label():
    response = HttpResponse(ok=True, status_code=200, headers={"content-type": "application/json"})
    engine, _ = _engine({"https://example.com/api": response})
    outcome = engine.inspect("https://example.com/api")
    assert outcome is not None
    assert outcome.label == ""


def test_matchers_reject_active_outcomes():
    engine, stub = _engine({"https://example.com/": _html()}, filters=FilterSpec.from_strings(status_codes="404"))
    assert engine.inspect("https://example.com/") is None
    assert len(stub.requests) == 1


def test_matchers_accept_when_all_dimensions_pass():
    filters = FilterSpec.from_strings(status_codes="200", content_lengths="1234", content_types="text/html", suffixes="html")
    engine, _ = _engine({"https://example.com/": _html()}, filters=filters)
    assert engine.inspect("https://example.com/") is not None


def test_matchers_do_not_apply_to_passive_outcomes():
    filters = FilterSpec.from_strings(status_codes="404", suffixes="pdf")
    engine, stub = _engine(passive=True, filters=filters)
    outcome = engine.inspect("https://example.com/file.zip")
    assert outcome is not None
    assert outcome.label == "zip"
    assert stub.requests == []


def test_transport_error_propagates_as_probe_error():
    engine, _ = _engine()
    with pytest.raises(ProbeError):
        engine.inspect("https://unreachable.example/")
