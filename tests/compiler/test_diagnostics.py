# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for diagnostic rendering."""

import io

import pytest

from msgschema.compiler.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    ParseError,
    SemanticError,
    SourcePosition,
    emit,
    warning,
)
from msgschema.compiler.parser import parse


class TestRender:
    def test_syntax_error_has_caret(self) -> None:
        pos = SourcePosition("a.lcm", 2, 5, "  x y")
        text = Diagnostic(DiagnosticKind.SYNTAX, "expected token ;", pos).render()
        assert text.split("\n") == ["", "expected token ;", "a.lcm : 2", "  x y", "    ^"]

    def test_caret_keeps_tabs(self) -> None:
        pos = SourcePosition("a.lcm", 1, 3, "\tab")
        text = Diagnostic(DiagnosticKind.SYNTAX, "msg", pos).render()
        assert text.split("\n")[-1] == "\t ^"

    def test_lexical_error_has_caret(self) -> None:
        pos = SourcePosition("a.lcm", 1, 1, "$")
        assert Diagnostic(DiagnosticKind.LEXICAL, "bad", pos).render().endswith("\n^")

    def test_semantic_error_has_no_caret(self) -> None:
        pos = SourcePosition("a.lcm", 3, 9, "  int8_t x;")
        text = Diagnostic(DiagnosticKind.SEMANTIC, "Duplicate member name 'x'.", pos).render()
        assert text.split("\n") == ["", "Duplicate member name 'x'.", "a.lcm : 3", "  int8_t x;"]

    def test_warning_is_not_fatal(self) -> None:
        diagnostic = warning("careful", SourcePosition("a.lcm", 1, 1, ""))
        assert not diagnostic.is_fatal
        assert "^" not in diagnostic.render()

    def test_emit_writes_rendered_text(self) -> None:
        stream = io.StringIO()
        diagnostic = Diagnostic(DiagnosticKind.SEMANTIC, "boom", SourcePosition("a.lcm", 1, 1, "x"))
        emit(diagnostic, stream)
        assert stream.getvalue() == diagnostic.render() + "\n"


class TestErrors:
    def test_exception_message_includes_location(self) -> None:
        err = ParseError("expected token ;", SourcePosition("a.lcm", 2, 4, ""))
        assert str(err) == "a.lcm:2:4: expected token ;"
        assert err.message == "expected token ;"
        assert err.diagnostic.is_fatal

    def test_parser_errors_render_source_line(self) -> None:
        with pytest.raises(SemanticError) as exc_info:
            parse("struct b {\n\tint32_t n[0];\n}", "b.lcm")
        rendered = exc_info.value.diagnostic.render()
        assert "Constant array size must be > 0" in rendered
        assert "b.lcm : 2" in rendered
        assert "\tint32_t n[0];" in rendered
