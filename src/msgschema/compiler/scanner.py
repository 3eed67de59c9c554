# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for schema files.

Converts raw source text into a sequence of tokens and exposes them through a
single-token-lookahead :class:`TokenStream` for the parser.
"""

import enum
import re
from collections.abc import Iterator
from dataclasses import dataclass

from msgschema.compiler.diagnostics import LexerError, SourcePosition

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the scanner."""

    # Keywords
    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    SEMICOLON = ";"
    EQUALS = "="

    # Literals
    INTEGER = "INTEGER"

    # Identifiers, possibly qualified with '.'
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        line_text: The full source line the token starts on.
    """

    type: TokenType
    value: str
    line: int
    column: int
    line_text: str = ""

    @property
    def is_eof(self) -> bool:
        return self.type == TokenType.EOF

    def position(self, path: str) -> SourcePosition:
        """Return the location of this token in the file at *path*."""
        return SourcePosition(path, self.line, self.column, self.line_text)


def tokenize(source: str, path: str = "<string>") -> list[Token]:
    """Tokenize schema source text into a sequence of tokens.

    Returns a list of tokens. The final token is always an EOF token.
    Comments and whitespace are consumed and not included in the output.

    Args:
        source: The full text of a schema file.
        path: File label used in error positions.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unexpected characters, malformed integer literals,
            or unterminated block comments.
    """
    return _Lexer(source, path).tokenize()


class TokenStream:
    """Single-token-lookahead view over a token list.

    ``next()`` past the end keeps returning the EOF token.
    """

    def __init__(self, tokens: list[Token], path: str = "<string>") -> None:
        if not tokens or not tokens[-1].is_eof:
            raise ValueError("token list must end with an EOF token")
        self._tokens = tokens
        self._pos = 0
        self.path = path

    @classmethod
    def from_source(cls, source: str, path: str = "<string>") -> "TokenStream":
        return cls(tokenize(source, path), path)

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        return self._tokens[self._pos]

    def next(self) -> Token:
        """Consume and return the next token."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def __iter__(self) -> Iterator[Token]:
        """Iterate over the remaining tokens, excluding EOF."""
        while not self.peek().is_eof:
            yield self.next()


def parse_integer_literal(text: str) -> int:
    """Convert integer literal text to an int.

    Accepts an optional sign followed by a ``0x`` hexadecimal, leading-zero
    octal, or decimal literal.

    Raises:
        ValueError: If *text* is not a valid literal.
    """
    sign = 1
    digits = text
    if digits[:1] in ("-", "+"):
        sign = -1 if digits[0] == "-" else 1
        digits = digits[1:]
    if digits[:2].lower() == "0x":
        base, digits = 16, digits[2:]
    elif len(digits) > 1 and digits[0] == "0":
        base, digits = 8, digits[1:]
    else:
        base = 10
    if not digits or not _DIGITS[base].fullmatch(digits):
        raise ValueError(f"invalid integer literal: {text!r}")
    return sign * int(digits, base)


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "struct": TokenType.STRUCT,
    "enum": TokenType.ENUM,
    "union": TokenType.UNION,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "=": TokenType.EQUALS,
}

_DIGITS: dict[int, re.Pattern[str]] = {
    8: re.compile(r"[0-7]+"),
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"[0-9a-fA-F]+"),
}


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str, path: str) -> None:
        self._source = source
        self._path = path
        self._lines = [line.removesuffix("\r") for line in source.split("\n")]
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(self._make(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _line_text(self, line: int) -> str:
        if 0 < line <= len(self._lines):
            return self._lines[line - 1]
        return ""

    def _make(self, token_type: TokenType, value: str, line: int, col: int) -> Token:
        return Token(token_type, value, line, col, self._line_text(line))

    def _error(self, message: str, line: int, col: int) -> LexerError:
        return LexerError(message, SourcePosition(self._path, line, col, self._line_text(line)))

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comment runs at the current position."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/'."""
        start_line = self._line
        start_col = self._column
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()
        raise self._error("Unterminated block comment", start_line, start_col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._tokens.append(self._make(_SINGLE_CHAR_TOKENS[ch], ch, line, col))
        elif _is_digit(ch) or (ch == "-" and _is_digit(self._peek())):
            self._scan_number(line, col)
        elif _is_identifier_start(ch):
            self._scan_identifier_or_keyword(line, col)
        else:
            raise self._error(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_number(self, line: int, col: int) -> None:
        """Scan an integer literal; letters directly after the digits are an error."""
        start = self._pos
        if self._current() == "-":
            self._advance()
        while self._pos < len(self._source) and _is_identifier_char(self._current()):
            self._advance()
        value = self._source[start : self._pos]
        try:
            parse_integer_literal(value)
        except ValueError:
            raise self._error(f"Invalid integer literal: {value!r}", line, col) from None
        self._tokens.append(self._make(TokenType.INTEGER, value, line, col))

    def _scan_identifier_or_keyword(self, line: int, col: int) -> None:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        while self._pos < len(self._source) and (
            _is_identifier_char(self._current()) or self._current() == "."
        ):
            self._advance()
        value = self._source[start : self._pos]
        token_type = _KEYWORDS.get(value, TokenType.IDENTIFIER)
        self._tokens.append(self._make(token_type, value, line, col))


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


def _is_identifier_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == "_")


def _is_identifier_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")
