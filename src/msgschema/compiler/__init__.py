# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler front end for schema files: scanning, parsing, validation and fingerprints."""

from msgschema.compiler.artifact import ARTIFACT_FILENAME, deserialize, read_artifact, serialize, write_artifact
from msgschema.compiler.build import CompilerError, compile_files, discover_schema_files
from msgschema.compiler.diagnostics import (
    Diagnostic,
    DiagnosticError,
    DiagnosticKind,
    LexerError,
    ParseError,
    SemanticError,
    SourcePosition,
)
from msgschema.compiler.fingerprint import enum_hash, struct_hash
from msgschema.compiler.parser import parse, parse_stream
from msgschema.compiler.scanner import Token, TokenStream, TokenType, tokenize

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "TokenStream",
    "parse",
    "parse_stream",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticError",
    "SourcePosition",
    "LexerError",
    "ParseError",
    "SemanticError",
    "struct_hash",
    "enum_hash",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_FILENAME",
    "compile_files",
    "discover_schema_files",
    "CompilerError",
]
