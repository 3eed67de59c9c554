# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostics reported while scanning, parsing and validating schema files.

Every problem is described by a :class:`Diagnostic`. Fatal diagnostics are
raised wrapped in a :class:`DiagnosticError` subclass; the parsing routines
never print or terminate the process themselves.
"""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import TextIO

# ###############
# Public Interface
# ###############


class DiagnosticKind(enum.Enum):
    """Category of a diagnostic."""

    LEXICAL = "lexical"
    SYNTAX = "syntax"
    SEMANTIC = "semantic"
    WARNING = "warning"


@dataclass(frozen=True)
class SourcePosition:
    """Location of a token in a schema file.

    Attributes:
        path: Path of the file as given to the parser.
        line: 1-based line number.
        column: 1-based column number.
        line_text: The full source line, without its trailing newline.
    """

    path: str
    line: int
    column: int
    line_text: str


@dataclass(frozen=True)
class Diagnostic:
    """A single error or warning with its source position."""

    kind: DiagnosticKind
    message: str
    position: SourcePosition

    @property
    def is_fatal(self) -> bool:
        return self.kind != DiagnosticKind.WARNING

    def render(self) -> str:
        """Format the diagnostic for display.

        The layout is a blank line, the message, ``<path> : <line>``, the raw
        source line and, for lexical and syntax errors, a caret under the
        offending column.
        """
        lines = [
            "",
            self.message,
            f"{self.position.path} : {self.position.line}",
            self.position.line_text,
        ]
        if self.kind in _CARET_KINDS:
            lines.append(_caret_line(self.position))
        return "\n".join(lines)


class DiagnosticError(Exception):
    """Base class for fatal diagnostics.

    Attributes:
        diagnostic: The diagnostic describing the failure.
    """

    kind = DiagnosticKind.SYNTAX

    def __init__(self, message: str, position: SourcePosition) -> None:
        super().__init__(f"{position.path}:{position.line}:{position.column}: {message}")
        self.diagnostic = Diagnostic(self.kind, message, position)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def line(self) -> int:
        return self.diagnostic.position.line

    @property
    def column(self) -> int:
        return self.diagnostic.position.column


class LexerError(DiagnosticError):
    """Raised on characters that cannot start any token."""

    kind = DiagnosticKind.LEXICAL


class ParseError(DiagnosticError):
    """Raised when a required token is missing or of the wrong kind."""

    kind = DiagnosticKind.SYNTAX


class SemanticError(DiagnosticError):
    """Raised when a declaration parses but violates a schema rule."""

    kind = DiagnosticKind.SEMANTIC


def warning(message: str, position: SourcePosition) -> Diagnostic:
    """Build a non-fatal diagnostic."""
    return Diagnostic(DiagnosticKind.WARNING, message, position)


def emit(diagnostic: Diagnostic, stream: TextIO | None = None) -> None:
    """Print a rendered diagnostic (to stdout unless *stream* is given)."""
    print(diagnostic.render(), file=stream if stream is not None else sys.stdout)


# ################
# Implementation
# ################

_CARET_KINDS = frozenset({DiagnosticKind.LEXICAL, DiagnosticKind.SYNTAX})


def _caret_line(position: SourcePosition) -> str:
    """Return a line with '^' under *position*, keeping tabs from the source line."""
    prefix: list[str] = []
    for i in range(max(position.column - 1, 0)):
        ch = position.line_text[i] if i < len(position.line_text) else " "
        prefix.append(ch if ch.isspace() else " ")
    return "".join(prefix) + "^"
