from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from alge import cli
from alge.core.catalog import SchemaName


@pytest.fixture(autouse=True)
def _isolate(tmp_path: Path, monkeypatch):
    # No stray alge.toml / env config, and leave logging as we found it.
    monkeypatch.chdir(tmp_path)
    for key in ("MAX_DEPTH", "PARSE_NUMERIC_STRINGS", "LOG_JSON", "VERBOSE"):
        monkeypatch.delenv(f"ALGE_SERDE_{key}", raising=False)
    root, alge = logging.getLogger(), logging.getLogger("alge")
    handlers, level = list(root.handlers), root.level
    alge_handlers, alge_level, propagate = list(alge.handlers), alge.level, alge.propagate
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    alge.handlers[:] = alge_handlers
    alge.setLevel(alge_level)
    alge.propagate = propagate


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as info:
        cli.main(argv)
    return int(info.value.code)


def test_no_args_prints_help(capsys) -> None:
    cli.main([])
    assert "usage: alge" in capsys.readouterr().out


def test_unknown_command(capsys) -> None:
    assert _run(["frobnicate"]) == 2
    assert "Unknown command: frobnicate" in capsys.readouterr().err


def test_list_prints_every_schema(capsys) -> None:
    assert _run(["list"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert [line.split("\t")[0] for line in out] == [name.value for name in SchemaName]
    assert "two_bits\tTuple[Boolean, Boolean]" in out


def test_check_file_success(tmp_path: Path, capsys) -> None:
    doc = tmp_path / "ack.json"
    doc.write_text(json.dumps({"object": "ack", "data": {"a": "ok", "b": "1", "c": 3.5}}))

    assert _run(["check", "result", str(doc)]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "object": "ack",
        "data": {"a": "ok", "b": 1, "c": 3.5},
    }


def test_check_verbose_json_logs_go_to_stderr(tmp_path: Path, capsys) -> None:
    doc = tmp_path / "ack.json"
    doc.write_text(json.dumps({"object": "ack", "data": {}}))

    assert _run(["check", "--verbose", "--log-json", "result", str(doc)]) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out) == {"object": "ack", "data": {}}
    records = [json.loads(line) for line in captured.err.splitlines()]
    assert {r["logger"] for r in records} >= {"alge.cli", "alge.serde.converters"}
    assert all(r["level"] == "debug" for r in records)


def test_check_stdin_tuple_output(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("[1200, \"usd\"]"))

    assert _run(["check", "charge_amount"]) == 0
    assert json.loads(capsys.readouterr().out) == [1200, "usd"]


def test_check_validation_failure(tmp_path: Path, capsys) -> None:
    doc = tmp_path / "bits.json"
    doc.write_text("[true, 0]")

    assert _run(["check", "two_bits", str(doc)]) == 1
    err = capsys.readouterr().err
    assert "Could not deserialize to Boolean: [1]: Non-boolean value: 0 (int)" in err


def test_check_invalid_json(tmp_path: Path, capsys) -> None:
    doc = tmp_path / "broken.json"
    doc.write_text("{not json")

    assert _run(["check", "error", str(doc)]) == 1
    assert "invalid JSON" in capsys.readouterr().err


def test_check_unknown_schema(capsys) -> None:
    assert _run(["check", "invoice", "-"]) == 2
    assert "Unknown schema: invoice" in capsys.readouterr().err


def test_check_missing_file(tmp_path: Path, capsys) -> None:
    assert _run(["check", "error", str(tmp_path / "absent.json")]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_check_respects_max_depth(tmp_path: Path, capsys) -> None:
    doc = tmp_path / "err.json"
    doc.write_text(json.dumps({"code": 1, "message": "m"}))

    assert _run(["check", "error", str(doc), "--max-depth", "1"]) == 0
    assert _run(["check", "error", str(doc), "--max-depth", "0"]) == 2
    capsys.readouterr()


def test_check_reads_settings_from_alge_toml(tmp_path: Path, capsys) -> None:
    (tmp_path / "alge.toml").write_text("[serde]\nparse_numeric_strings = false\n")
    doc = tmp_path / "err.json"
    doc.write_text(json.dumps({"code": "404", "message": "missing"}))

    assert _run(["check", "error", str(doc)]) == 1
    assert "code: Non-integer value" in capsys.readouterr().err


def test_check_bad_config(tmp_path: Path, capsys) -> None:
    (tmp_path / "alge.toml").write_text("max_depth = -3\n")

    assert _run(["check", "error", "-"]) == 2
    assert "max_depth" in capsys.readouterr().err
