# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the msgschema command-line interface."""

import argparse
import sys
from pathlib import Path

from msgschema.compiler.artifact import ARTIFACT_FILENAME, write_artifact
from msgschema.compiler.build import CompilerError, compile_files, discover_schema_files
from msgschema.compiler.diagnostics import DiagnosticError, emit
from msgschema.compiler.scanner import TokenStream
from msgschema.model.entities import SchemaRegistry
from msgschema.workspace.config import CONFIG_FILENAME, ProjectConfigError, load_project_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the msgschema CLI."""
    parser = argparse.ArgumentParser(
        prog="msgschema",
        description="msgschema - message schema compiler front end",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Parse and validate schema files",
        description="Parse and validate schema files and report their fingerprints.",
    )
    check_parser.add_argument("files", nargs="+", type=Path, help="Schema files or directories")

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the parsed structs and enums",
        description="Parse schema files and print every enum and struct with its members.",
    )
    dump_parser.add_argument("files", nargs="+", type=Path, help="Schema files or directories")

    # tokenize subcommand
    tokenize_parser = subparsers.add_parser(
        "tokenize",
        help="Print the token stream of schema files",
        description="Print every token with its index, line and column without parsing.",
    )
    tokenize_parser.add_argument("files", nargs="+", type=Path, help="Schema files")

    # build subcommand
    build_parser = subparsers.add_parser(
        "build",
        help="Compile a schema project",
        description=f"Compile all schema files of a project configured by {CONFIG_FILENAME}.",
    )
    build_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Project directory (default: current directory)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "dump":
        return _cmd_dump(args)
    if args.command == "tokenize":
        return _cmd_tokenize(args)
    if args.command == "build":
        return _cmd_build(args)
    return 0


def _compile(paths: list[Path]) -> SchemaRegistry | None:
    """Compile *paths*, reporting any failure. Returns None on error."""
    try:
        return compile_files(discover_schema_files(paths))
    except CompilerError as exc:
        _report(exc)
        return None


def _report(exc: CompilerError) -> None:
    if exc.diagnostic is not None:
        emit(exc.diagnostic)
    else:
        print(f"Error: {exc}", file=sys.stderr)


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    registry = _compile(args.files)
    if registry is None:
        return 1
    for struct in registry.structs:
        print(f"struct {struct.name}: 0x{struct.hash & 0xFFFFFFFFFFFFFFFF:016x}")
    for enum in registry.enums:
        print(f"enum {enum.name}: 0x{enum.hash & 0xFFFFFFFFFFFFFFFF:016x}")
    print(f"{len(registry.structs)} struct(s), {len(registry.enums)} enum(s). No issues found.")
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    registry = _compile(args.files)
    if registry is None:
        return 1
    print(registry.dump())
    return 0


def _cmd_tokenize(args: argparse.Namespace) -> int:
    """Handle the tokenize subcommand."""
    for path in args.files:
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
            return 1
        try:
            stream = TokenStream.from_source(source, str(path))
        except DiagnosticError as exc:
            emit(exc.diagnostic)
            return 1
        print(f"{'tok#':>6} {'line':>6} {'col':>6}: token")
        for index, tok in enumerate(stream):
            print(f"{index:6d} {tok.line:6d} {tok.column:6d}: {tok.value}")
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    """Handle the build subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILENAME
    if not config_file.exists():
        print(f"Error: no {CONFIG_FILENAME} found in '{directory}'.", file=sys.stderr)
        return 1

    try:
        config = load_project_config(config_file)
    except ProjectConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    build_dir = directory / config.build_directory
    try:
        schema_files = discover_schema_files(
            [directory / p for p in config.source_paths],
            config.schema_suffix,
        )
    except CompilerError as exc:
        _report(exc)
        return 1
    schema_files = [f for f in schema_files if build_dir not in f.parents]
    if not schema_files:
        print("No schema files found in the project.")
        return 0

    print(f"Compiling {len(schema_files)} schema file(s)...")
    try:
        registry = compile_files(schema_files)
    except CompilerError as exc:
        _report(exc)
        return 1

    artifact = build_dir / ARTIFACT_FILENAME
    write_artifact(registry, artifact)
    print(f"Wrote {len(registry.structs)} struct(s) and {len(registry.enums)} enum(s) to '{artifact}'.")
    return 0
