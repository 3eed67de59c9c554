# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compile one or more schema files into a single registry.

Files are processed in the order given, each one completely before the
next. The first fatal diagnostic stops the run; entities from files that
were already parsed stay in the registry, but nothing from the failing
declaration is ever added.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from msgschema.compiler.diagnostics import Diagnostic, DiagnosticError
from msgschema.compiler.parser import WarningHandler, parse
from msgschema.model.entities import SchemaRegistry

# ###############
# Public Interface
# ###############

DEFAULT_SCHEMA_SUFFIX = ".lcm"


class CompilerError(Exception):
    """Raised when a schema file cannot be read or contains a fatal diagnostic.

    Attributes:
        diagnostic: The diagnostic that stopped compilation, if any.
    """

    def __init__(self, message: str, diagnostic: Diagnostic | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic


def compile_files(
    files: Iterable[Path],
    *,
    registry: SchemaRegistry | None = None,
    on_warning: WarningHandler | None = None,
) -> SchemaRegistry:
    """Parse and validate each file in turn.

    Args:
        files: Schema files to compile, in processing order.
        registry: Registry to append to. A new one is created if omitted.
        on_warning: Called for every non-fatal diagnostic.

    Returns:
        The registry holding all structs and enums from every file.

    Raises:
        CompilerError: If a file cannot be read, or on the first lexical,
            syntax or semantic error.
    """
    result = registry if registry is not None else SchemaRegistry()
    for source_file in files:
        try:
            source_text = source_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise CompilerError(f"Cannot read source file '{source_file}': {exc}") from exc

        try:
            parse(source_text, str(source_file), registry=result, on_warning=on_warning)
        except DiagnosticError as exc:
            raise CompilerError(f"Error in '{source_file}': {exc}", exc.diagnostic) from exc
    return result


def discover_schema_files(paths: Iterable[Path], suffix: str = DEFAULT_SCHEMA_SUFFIX) -> list[Path]:
    """Expand *paths* into a list of schema files.

    Files are kept as given; directories are searched recursively for files
    ending in *suffix*, sorted so the processing order is reproducible.

    Raises:
        CompilerError: If a path does not exist.
    """
    found: list[Path] = []
    for path in paths:
        if path.is_dir():
            found.extend(sorted(p for p in path.rglob(f"*{suffix}") if p.is_file()))
        elif path.exists():
            found.append(path)
        else:
            raise CompilerError(f"Schema path '{path}' does not exist")
    return found
