# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the msgschema CLI entry point."""

import sys
from pathlib import Path

import pytest

from msgschema.cli.main import main
from msgschema.compiler.artifact import ARTIFACT_FILENAME, read_artifact

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Run main() with *argv* and return the exit code."""
    monkeypatch.setattr(sys, "argv", ["msgschema", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- check tests --------


def test_check_valid_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check reports fingerprints and success for a valid file."""
    schema = tmp_path / "a.lcm"
    schema.write_text("struct a { int32_t x; int32_t data[x]; }\nenum e { A }\n")
    assert _run(monkeypatch, "check", str(schema)) == 0
    out = capsys.readouterr().out
    assert "struct a: 0x" in out
    assert "enum e: 0x" in out
    assert "1 struct(s), 1 enum(s). No issues found." in out


def test_check_directory(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check accepts a directory and compiles every schema file in it."""
    (tmp_path / "a.lcm").write_text("struct a { int8_t x; }\n")
    (tmp_path / "b.lcm").write_text("struct b { int8_t y; }\n")
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "2 struct(s), 0 enum(s)" in capsys.readouterr().out


def test_check_syntax_error_prints_caret(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A syntax error is rendered on stdout with the source line and a caret."""
    schema = tmp_path / "bad.lcm"
    schema.write_text("struct a {\n  int8_t x\n}\n")
    assert _run(monkeypatch, "check", str(schema)) == 1
    out = capsys.readouterr().out
    lines = out.split("\n")
    assert lines[0] == ""
    assert lines[1] == "expected token ;"
    assert lines[2] == f"{schema} : 3"
    assert lines[3] == "}"
    assert lines[4] == "^"


def test_check_semantic_error_has_no_caret(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A semantic error is rendered without a caret line."""
    schema = tmp_path / "bad.lcm"
    schema.write_text("struct b { int32_t n[0]; }\n")
    assert _run(monkeypatch, "check", str(schema)) == 1
    out = capsys.readouterr().out
    assert "Constant array size must be > 0" in out
    assert "^" not in out


def test_check_missing_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A missing path is reported on stderr."""
    assert _run(monkeypatch, "check", str(tmp_path / "missing.lcm")) == 1
    assert "Error:" in capsys.readouterr().err


# -------- dump tests --------


def test_dump(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """dump prints enums and structs with dimension annotations."""
    schema = tmp_path / "a.lcm"
    schema.write_text("enum Color { RED, GREEN=5, BLUE }\nstruct c { int16_t n; float f[2][n]; }\n")
    assert _run(monkeypatch, "dump", str(schema)) == 0
    out = capsys.readouterr().out
    assert "enum Color" in out
    assert "BLUE" in out
    assert "struct c [hash=0x" in out
    assert "f [ (const) 2 ] [ (var) n ]" in out


# -------- tokenize tests --------


def test_tokenize(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """tokenize prints one row per token without parsing."""
    schema = tmp_path / "a.lcm"
    schema.write_text("union }\n")
    assert _run(monkeypatch, "tokenize", str(schema)) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "  tok#   line    col: token"
    assert lines[1] == "     0      1      1: union"
    assert lines[2] == "     1      1      7: }"
    assert len(lines) == 3


def test_tokenize_lexical_error(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    schema = tmp_path / "a.lcm"
    schema.write_text("a $\n")
    assert _run(monkeypatch, "tokenize", str(schema)) == 1
    assert "Unexpected character" in capsys.readouterr().out


# -------- build tests --------


def test_build_writes_artifact(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """build compiles the configured sources and writes the JSON artifact."""
    (tmp_path / ".msgschema.yaml").write_text("build-directory: out\nsource-paths: [schemas]\n")
    schemas = tmp_path / "schemas"
    schemas.mkdir()
    (schemas / "a.lcm").write_text("struct a { int8_t x; }\nenum e { A }\n")
    assert _run(monkeypatch, "build", str(tmp_path)) == 0
    registry = read_artifact(tmp_path / "out" / ARTIFACT_FILENAME)
    assert [s.name.name for s in registry.structs] == ["a"]
    assert [e.name.name for e in registry.enums] == ["e"]
    assert "Compiling 1 schema file(s)..." in capsys.readouterr().out


def test_build_without_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "build", str(tmp_path)) == 1


def test_build_invalid_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".msgschema.yaml").write_text("source-paths: [a]\n")
    assert _run(monkeypatch, "build", str(tmp_path)) == 1


def test_build_no_schema_files(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / ".msgschema.yaml").write_text("build-directory: out\n")
    assert _run(monkeypatch, "build", str(tmp_path)) == 0
    assert "No schema files found" in capsys.readouterr().out


def test_build_reports_schema_error(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / ".msgschema.yaml").write_text("build-directory: out\n")
    (tmp_path / "a.lcm").write_text("enum e { A, A }\n")
    assert _run(monkeypatch, "build", str(tmp_path)) == 1
    assert "Enum value A declared twice!" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()
