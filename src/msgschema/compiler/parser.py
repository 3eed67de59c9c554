# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for schema files.

Reads ``struct`` and ``enum`` declarations from a token stream, validates
each declaration as it is consumed and appends the completed entities, with
their fingerprints, to a :class:`SchemaRegistry`.
"""

from __future__ import annotations

from collections.abc import Callable

from msgschema.compiler import semantic_analysis as rules
from msgschema.compiler.diagnostics import Diagnostic, ParseError, emit
from msgschema.compiler.fingerprint import enum_hash, struct_hash
from msgschema.compiler.scanner import Token, TokenStream, TokenType, parse_integer_literal
from msgschema.model.entities import EnumDef, EnumValue, Member, SchemaRegistry, StructDef
from msgschema.model.types import Dimension, DimensionMode, TypeName

# ###############
# Public Interface
# ###############

WarningHandler = Callable[[Diagnostic], None]


def parse(
    source: str,
    path: str = "<string>",
    *,
    registry: SchemaRegistry | None = None,
    on_warning: WarningHandler | None = None,
) -> SchemaRegistry:
    """Parse schema source text.

    Args:
        source: The full text of a schema file.
        path: File label used in diagnostics and recorded on each entity.
        registry: Registry to append to. A new one is created if omitted.
        on_warning: Called for every non-fatal diagnostic. Defaults to
            printing it.

    Returns:
        The registry holding every struct and enum parsed so far.

    Raises:
        LexerError: If the source contains characters that cannot be scanned.
        ParseError: If the source is syntactically invalid.
        SemanticError: If a declaration violates a schema rule.
    """
    return parse_stream(TokenStream.from_source(source, path), registry=registry, on_warning=on_warning)


def parse_stream(
    stream: TokenStream,
    *,
    registry: SchemaRegistry | None = None,
    on_warning: WarningHandler | None = None,
) -> SchemaRegistry:
    """Parse every entity available from *stream*. See :func:`parse`."""
    result = registry if registry is not None else SchemaRegistry()
    _Parser(stream, result, on_warning or emit).parse()
    return result


# ################
# Implementation
# ################

_NESTED_DECLARATIONS = frozenset({TokenType.STRUCT, TokenType.ENUM, TokenType.UNION})


class _Parser:
    """Recursive-descent parser over a single-lookahead token stream."""

    def __init__(self, stream: TokenStream, registry: SchemaRegistry, on_warning: WarningHandler) -> None:
        self._stream = stream
        self._registry = registry
        self._on_warning = on_warning
        self._path = stream.path

    def parse(self) -> None:
        """Parse entities until the input has no further struct/enum/union."""
        while self._parse_entity():
            pass

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _error(self, message: str, tok: Token) -> ParseError:
        return ParseError(message, tok.position(self._path))

    def _try_consume(self, text: str) -> bool:
        """Consume the next token if its text is *text*.

        Running out of input here is an error: every caller is inside a
        construct that still needs a closing token.
        """
        tok = self._stream.peek()
        if tok.is_eof:
            raise self._error(f"End of file while looking for {text}.", tok)
        if tok.value != text:
            return False
        self._stream.next()
        return True

    def _require(self, text: str) -> Token:
        """Consume the next token, which must be *text*."""
        tok = self._stream.next()
        if tok.is_eof or tok.value != text:
            raise self._error(f"expected token {text}", tok)
        return tok

    def _require_next(self, description: str) -> Token:
        """Consume the next token, whatever it is, as long as input remains."""
        tok = self._stream.next()
        if tok.is_eof:
            raise self._error(f"End of file reached, expected {description}.", tok)
        return tok

    # ------------------------------------------------------------------
    # Top-level entities
    # ------------------------------------------------------------------

    def _parse_entity(self) -> bool:
        """Parse one top-level entity. Return False when the file is finished."""
        tok = self._stream.next()
        if tok.type == TokenType.STRUCT:
            struct = self._parse_struct()
            self._check_redeclaration(struct.name, tok)
            self._registry.add_struct(struct)
            return True
        if tok.type == TokenType.ENUM:
            enum = self._parse_enum()
            self._check_redeclaration(enum.name, tok)
            self._registry.add_enum(enum)
            return True
        if tok.type == TokenType.UNION:
            raise self._error("unions not implemented", tok)
        return False

    def _check_redeclaration(self, name: TypeName, tok: Token) -> None:
        diagnostic = rules.check_type_redeclaration(self._registry, name.name, tok.position(self._path))
        if diagnostic is not None:
            self._on_warning(diagnostic)

    def _parse_type_name(self, description: str) -> TypeName:
        tok = self._require_next(description)
        rules.check_identifier(tok.value, description, tok.position(self._path))
        return TypeName(name=tok.value)

    # ------------------------------------------------------------------
    # Struct declarations
    # ------------------------------------------------------------------

    def _parse_struct(self) -> StructDef:
        """Parse: <name> { member* }   (the 'struct' keyword is already consumed)"""
        name = self._parse_type_name("struct name")
        self._require("{")
        members: list[Member] = []
        while not self._try_consume("}"):
            self._parse_member(members)
        return StructDef(
            name=name,
            members=members,
            hash=struct_hash(members),
            source_file=self._path,
        )

    def _parse_member(self, members: list[Member]) -> None:
        """Parse: <type> <item> (',' <item>)* ';' and append each item to *members*.

        Each item is a member name followed by zero or more ``[size]``
        dimensions. All items of one declaration share the type.
        """
        tok = self._stream.peek()
        if tok.type in _NESTED_DECLARATIONS:
            raise self._error(f"recursive {tok.value}s not implemented.", tok)

        member_type = self._parse_type_name("type identifier")

        while True:
            name_tok = self._require_next("name identifier")
            position = name_tok.position(self._path)
            rules.check_identifier(name_tok.value, "member name", position)
            rules.check_unique_member(members, name_tok.value, position)

            dimensions: list[Dimension] = []
            while self._try_consume("["):
                dimensions.append(self._parse_dimension(members))
                self._require("]")
            members.append(Member(type=member_type, name=name_tok.value, dimensions=dimensions))

            if not self._try_consume(","):
                break

        self._require(";")

    def _parse_dimension(self, members: list[Member]) -> Dimension:
        """Parse the size inside '[' ']', either a positive constant or an earlier member."""
        tok = self._require_next("array size")
        position = tok.position(self._path)
        if tok.value[:1].isdigit():
            rules.check_constant_size(tok.value, position)
            return Dimension(mode=DimensionMode.CONSTANT, size=tok.value)
        rules.check_variable_size(members, tok.value, position)
        return Dimension(mode=DimensionMode.VARIABLE, size=tok.value)

    # ------------------------------------------------------------------
    # Enum declarations
    # ------------------------------------------------------------------

    def _parse_enum(self) -> EnumDef:
        """Parse: <name> { (<value> (',' | ';')*)* }   (the 'enum' keyword is already consumed)"""
        name = self._parse_type_name("enum name")
        self._require("{")
        values: list[EnumValue] = []
        while not self._try_consume("}"):
            values.append(self._parse_enum_value(values))
            while self._try_consume(",") or self._try_consume(";"):
                pass
        return EnumDef(
            name=name,
            values=values,
            hash=enum_hash(name),
            source_file=self._path,
        )

    def _parse_enum_value(self, values: list[EnumValue]) -> EnumValue:
        """Parse: <name> ['=' <integer>]"""
        name_tok = self._require_next("enum name")
        rules.check_identifier(name_tok.value, "enum value name", name_tok.position(self._path))
        if self._try_consume("="):
            literal = self._require_next("enum value literal")
            try:
                number = parse_integer_literal(literal.value)
            except ValueError:
                raise self._error(f"expected integer literal, got {literal.value!r}", literal) from None
        else:
            number = rules.next_enum_value(values)
        candidate = EnumValue(name=name_tok.value, value=number)
        rules.check_enum_value(values, candidate, name_tok.position(self._path))
        return candidate
