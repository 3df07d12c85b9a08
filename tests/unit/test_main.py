"""Unit tests for the decode CLI."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from tertestrial.main import EXIT_CONFIG_ERROR, EXIT_DECODE_ERRORS, EXIT_OK, decode_stream, main

pytestmark = pytest.mark.usefixtures("clean_env", "restore_root_logging")


def test_decode_stream_writes_triggers_and_reports_errors() -> None:
    out = io.StringIO()
    err = io.StringIO()

    failures = decode_stream(
        ['{"filename": "foo.rs"}\n', "\n", '{"filename}\r\n', '{"line": "4"}'],
        out,
        err,
    )

    assert failures == 1
    assert out.getvalue() == '{"filename":"foo.rs"}\n{"line":"4"}\n'
    assert err.getvalue() == (
        'cannot parse command received from client: {"filename}\n'
        "\n"
        "Error message from JSON parser: EOF while parsing a string at line 1 column 11\n"
        "This is a problem with your Tertestrial client.\n"
    )


def test_decode_stream_keeps_inner_whitespace() -> None:
    out = io.StringIO()

    failures = decode_stream(['  {"line": " 9 "}  \n'], out, io.StringIO())

    assert failures == 0
    assert out.getvalue() == '{"line":" 9 "}\n'


def test_main_reads_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "client.jsonl"
    source.write_text('{}\n{"filename": "a.py", "line": "1", "extra": 5}\n', encoding="utf-8")

    code = main(["--input", str(source)])

    assert code == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line) for line in lines] == [{}, {"filename": "a.py", "line": "1"}]


def test_main_reports_decode_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TERTESTRIAL_LOG_FORMAT", "text")
    monkeypatch.setattr("sys.stdin", io.StringIO('{"line": 12}\n{"filename": "b.py"}\n'))

    code = main([])

    assert code == EXIT_DECODE_ERRORS
    captured = capsys.readouterr()
    assert captured.out == '{"filename":"b.py"}\n'
    assert 'cannot parse command received from client: {"line": 12}' in captured.err
    assert "This is a problem with your Tertestrial client." in captured.err


def test_main_config_error(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    code = main([])

    assert code == EXIT_CONFIG_ERROR
    assert "Configuration error" in capsys.readouterr().err


def test_main_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])

    assert exc.value.code == 0
    assert "tertestrial 0.1.0" in capsys.readouterr().out


def test_main_shows_offending_line_once(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TERTESTRIAL_LOG_FORMAT", "text")
    monkeypatch.setattr("sys.stdin", io.StringIO('{"filename}\n'))

    code = main([])

    assert code == EXIT_DECODE_ERRORS
    err = capsys.readouterr().err
    assert err.count('cannot parse command received from client: {"filename}') == 1
    assert "Undecodable client line" in err
