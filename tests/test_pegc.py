"""Tests for the grammar loader and the pegc CLI."""

from __future__ import annotations

from pathlib import Path

import pytest

from pegcore import load_grammar
from pegcore.loader import load_grammar_text
from pegcore import pegc

ANBNCN = """\
S := &(A 'c') 'a'+ B !.
A := 'a' A? 'b'
B := 'b' B? 'c'
"""


@pytest.fixture
def grammar_file(tmp_path: Path) -> Path:
    path = tmp_path / "anbncn.peg"
    path.write_text(ANBNCN, encoding="utf-8")
    return path


def test_load_grammar_text_normalises_newlines(tmp_path: Path) -> None:
    path = tmp_path / "crlf.peg"
    path.write_bytes(b"S <- 'a'\r\nT <- 'b'\rU <- 'c'\n")

    assert load_grammar_text(str(path)) == "S <- 'a'\nT <- 'b'\nU <- 'c'\n"


def test_load_grammar(grammar_file: Path) -> None:
    g = load_grammar(str(grammar_file))
    assert g.start == "S"
    assert g.match_all("aabbcc")

    g = load_grammar(str(grammar_file), start="A")
    assert g.match_all("aabb")


def test_check(grammar_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = pegc.main(["check", str(grammar_file)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "[CHECK OK] rules=3 start=S" in out


def test_check_debug_lists_rules(grammar_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = pegc.main(["check", str(grammar_file), "-D"])

    err = capsys.readouterr().err
    assert exit_code == 0
    assert "[DEBUG] grammar linked | rules=3 start=S" in err
    assert "[RULES]" in err


def test_check_syntax_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.peg"
    path.write_text("S <- 'a", encoding="utf-8")

    exit_code = pegc.main(["check", str(path)])

    assert exit_code == 2
    assert "[SYNTAX ERROR]" in capsys.readouterr().err


def test_check_undefined_rule(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "undefined.peg"
    path.write_text("S <- T", encoding="utf-8")

    exit_code = pegc.main(["check", str(path)])

    assert exit_code == 2
    assert "[CONFIG ERROR]" in capsys.readouterr().err


def test_check_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = pegc.main(["check", str(tmp_path / "missing.peg")])

    assert exit_code == 2
    assert "FileNotFoundError" in capsys.readouterr().err


def test_match_prefix(grammar_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = pegc.main(["match", str(grammar_file), "--rule", "A", "--text", "aabbcc"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.splitlines() == ["[MATCH] 0..4", "aabb"]


def test_match_all_rejects_trailing_input(grammar_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = pegc.main(["match", str(grammar_file), "--rule", "A", "--text", "aabbcc", "--all"])

    assert exit_code == 1
    assert "[NO MATCH] rule=A" in capsys.readouterr().out


def test_match_from_input_file(grammar_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    data = tmp_path / "input.txt"
    data.write_text("aaabbbccc", encoding="utf-8")

    exit_code = pegc.main(["match", str(grammar_file), "--input", str(data), "--all"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.splitlines() == ["[MATCH] 0..9", "aaabbbccc"]


def test_match_unknown_rule(grammar_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = pegc.main(["match", str(grammar_file), "--rule", "Z", "--text", "a"])

    assert exit_code == 2
    assert "[CONFIG ERROR]" in capsys.readouterr().err


def test_match_too_deep(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "parens.peg"
    path.write_text("P <- '(' P ')' / ''", encoding="utf-8")

    exit_code = pegc.main(["match", str(path), "--text", "(" * 5000 + ")" * 5000])

    assert exit_code == 2
    assert "RecursionError" in capsys.readouterr().err


def test_match_requires_input(grammar_file: Path) -> None:
    with pytest.raises(SystemExit):
        pegc.main(["match", str(grammar_file)])


def test_check_rejects_non_utf8_grammar(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "latin1.peg"
    path.write_bytes(b"S <- '\xff'")

    exit_code = pegc.main(["check", str(path)])

    assert exit_code == 2
    assert "[ERROR] UnicodeDecodeError" in capsys.readouterr().err


def test_match_rejects_non_utf8_input(grammar_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    data = tmp_path / "input.bin"
    data.write_bytes(b"abc\xff")

    exit_code = pegc.main(["match", str(grammar_file), "--input", str(data)])

    assert exit_code == 2
    assert "[ERROR] UnicodeDecodeError" in capsys.readouterr().err
