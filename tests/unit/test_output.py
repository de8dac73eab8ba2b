# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json
import re
import threading

import pytest

from linkinspector.errors import InputError
from linkinspector.models import ClassificationOutcome, ProbeResult
from linkinspector.output import OutputFormat, ResultSink, format_json, format_text, render

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

ACTIVE = ClassificationOutcome.active(
    "https://example.com/",
    ProbeResult(status_code=200, content_length=1234, content_type="text/html"),
    "html",
)
ACTIVE_UNLABELED = ClassificationOutcome.active(
    "https://example.com/api",
    ProbeResult(status_code=200, content_length=0, content_type="application/json"),
    "",
)
PASSIVE = ClassificationOutcome.passive("https://example.com/file.zip", "zip")


def test_plain_active_line():
    assert format_text(ACTIVE) == "https://example.com/ [200] [1234] [text/html] [html]"


def test_plain_active_line_with_empty_label():
    assert format_text(ACTIVE_UNLABELED) == "https://example.com/api [200] [0] [application/json] []"


def test_plain_passive_line():
    assert format_text(PASSIVE) == "https://example.com/file.zip [zip]"


def test_verbose_prefixes_mode():
    assert format_text(ACTIVE, verbose=True).startswith("REQUEST BASED: https://example.com/ [200]")
    assert format_text(PASSIVE, verbose=True) == "EXTENSION BASED: https://example.com/file.zip [zip]"


@pytest.mark.parametrize("outcome", [ACTIVE, ACTIVE_UNLABELED, PASSIVE])
@pytest.mark.parametrize("verbose", [False, True])
def test_color_differs_only_in_styling(outcome, verbose):
    colored = format_text(outcome, verbose=verbose, color=True)
    assert "\x1b[" in colored
    assert ANSI_RE.sub("", colored) == format_text(outcome, verbose=verbose, color=False)


def test_json_active_record():
    record = json.loads(format_json(ACTIVE))
    assert record == {
        "host": "https://example.com/",
        "type": "REQUEST BASED",
        "data": {"status_code": 200, "content_length": 1234, "content_type": "text/html", "suffix": "html"},
    }


def test_json_passive_record_has_only_suffix():
    record = json.loads(format_json(PASSIVE))
    assert record == {"host": "https://example.com/file.zip", "type": "EXTENSION BASED", "data": {"suffix": "zip"}}


def test_json_omits_zero_and_empty_fields():
    record = json.loads(format_json(ACTIVE_UNLABELED))
    assert record["data"] == {"status_code": 200, "content_type": "application/json"}
    assert "content_length" not in record["data"]
    assert "suffix" not in record["data"]


def test_json_unknown_length_is_kept():
    outcome = ClassificationOutcome.active("https://x/", ProbeResult(status_code=301), "")
    assert json.loads(format_json(outcome))["data"] == {"status_code": 301, "content_length": -1}


def test_json_styles():
    pretty = format_json(ACTIVE, style="pretty")
    compact = format_json(ACTIVE, style="compact")
    assert "\n" in pretty
    assert pretty.startswith('{\n  "host"')
    assert "\n" not in compact
    assert compact.startswith('{"host":"https://example.com/","type":"REQUEST BASED","data":{')
    assert json.loads(pretty) == json.loads(compact)


def test_render_dispatches_on_format():
    assert render(PASSIVE, OutputFormat.PLAIN) == format_text(PASSIVE)
    assert render(PASSIVE, OutputFormat.JSON, json_style="compact") == format_json(PASSIVE, style="compact")
    assert OutputFormat.select(json_output=True, color=True) == OutputFormat.JSON
    assert OutputFormat.select(color=False) == OutputFormat.PLAIN
    assert OutputFormat.select() == OutputFormat.COLOR


def test_sink_writes_console_and_file(tmp_path):
    path = tmp_path / "out.txt"
    stream = io.StringIO()
    with ResultSink.open(str(path), stream=stream, output_format=OutputFormat.PLAIN) as sink:
        sink.emit(ACTIVE)
        sink.emit(PASSIVE)
    expected = "https://example.com/ [200] [1234] [text/html] [html]\nhttps://example.com/file.zip [zip]\n"
    assert stream.getvalue() == expected
    assert path.read_text(encoding="utf-8") == expected


def test_sink_file_gets_uncolored_lines(tmp_path):
    path = tmp_path / "out.txt"
    stream = io.StringIO()
    with ResultSink.open(str(path), stream=stream, output_format=OutputFormat.COLOR) as sink:
        sink.emit(PASSIVE)
    assert "\x1b[" in stream.getvalue()
    assert path.read_text(encoding="utf-8") == "https://example.com/file.zip [zip]\n"


def test_sink_overwrite_truncates_and_append_appends(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("old line\n", encoding="utf-8")

    with ResultSink.open(str(path), append=True, stream=io.StringIO(), output_format=OutputFormat.PLAIN) as sink:
        sink.emit(PASSIVE)
    assert path.read_text(encoding="utf-8") == "old line\nhttps://example.com/file.zip [zip]\n"

    with ResultSink.open(str(path), stream=io.StringIO(), output_format=OutputFormat.PLAIN) as sink:
        sink.emit(PASSIVE)
    assert path.read_text(encoding="utf-8") == "https://example.com/file.zip [zip]\n"


def test_sink_open_failure_is_input_error(tmp_path):
    with pytest.raises(InputError):
        ResultSink.open(str(tmp_path / "missing-dir" / "out.txt"))


def test_sink_without_file_writes_stdout(capsys):
    sink = ResultSink(output_format=OutputFormat.JSON, json_style="compact")
    sink.emit(PASSIVE)
    sink.close()
    assert json.loads(capsys.readouterr().out) == PASSIVE.to_dict()


def test_concurrent_emits_do_not_interleave(tmp_path):
    path = tmp_path / "out.jsonl"
    stream = io.StringIO()
    sink = ResultSink.open(str(path), stream=stream, output_format=OutputFormat.JSON, json_style="compact")
    outcomes = [ClassificationOutcome.passive(f"https://example.com/{i}.zip", "zip") for i in range(200)]

    def worker(chunk):
        for outcome in chunk:
            sink.emit(outcome)

    threads = [threading.Thread(target=worker, args=(outcomes[i::8],)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    sink.close()

    for text in (stream.getvalue(), path.read_text(encoding="utf-8")):
        records = [json.loads(line) for line in text.splitlines()]
        assert sorted(r["host"] for r in records) == sorted(o.url for o in outcomes)
