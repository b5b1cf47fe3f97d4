"""Tests for the CLI entry point."""

import io
import json
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from redactai.cli import main


def _run(monkeypatch, capsys, argv, stdin):
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    main(argv)
    return json.loads(capsys.readouterr().out)


def test_detect(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["detect"], "Mail a@b.io")
    assert out == [{"type": "EMAIL_ADDRESS", "text": "a@b.io", "source": "pattern"}]


def test_redact_remove_with_expected(monkeypatch, capsys, tmp_path):
    expected = tmp_path / "expected.txt"
    expected.write_text("IP: end", encoding="utf-8")
    out = _run(
        monkeypatch, capsys,
        ["--no-presidio", "redact", "--mode", "remove", "--expected", str(expected)],
        "IP: 10.0.0.1 end",
    )
    assert out["text"] == "IP: end"
    assert out["mode"] == "REMOVE"
    assert out["entities"] == [
        {"type": "IP_ADDRESS", "text": "10.0.0.1", "source": "pattern", "start": 4, "end": 12},
    ]
    assert out["stats"]["accuracy_score"] == 100.0
    assert all(c["type"] == "match" for c in out["diff"]["actual"])


def test_redact_patterns_only(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["redact", "--patterns-only"], "at 14:30")
    assert out["text"] == "at [DATE_TIME]"
    assert out["stats"]["accuracy_score"] is None
    assert "diff" not in out


def test_compare(monkeypatch, capsys, tmp_path):
    expected = tmp_path / "expected.txt"
    expected.write_text("the dog sat", encoding="utf-8")
    out = _run(monkeypatch, capsys, ["compare", "--expected", str(expected)], "the cat sat")
    assert out["edit_distance"] == 3
    assert {"value": "cat", "type": "mismatch-actual"} in out["actual"]
    assert {"value": "dog", "type": "mismatch-expected"} in out["expected"]
