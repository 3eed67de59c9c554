# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the project configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from msgschema.compiler.build import DEFAULT_SCHEMA_SUFFIX

# ###############
# Public Interface
# ###############

CONFIG_FILENAME = ".msgschema.yaml"


class ProjectConfigError(Exception):
    """Raised when a project configuration file is invalid or cannot be loaded."""


@dataclass
class ProjectConfig:
    """The parsed configuration for a schema project.

    Attributes:
        build_directory: Relative path (from the project root) for compiler output.
        source_paths: Files or directories, relative to the project root,
            that hold the schema files.
        schema_suffix: File suffix identifying schema files inside directories.
    """

    build_directory: str
    source_paths: list[str] = field(default_factory=lambda: ["."])
    schema_suffix: str = DEFAULT_SCHEMA_SUFFIX


def load_project_config(path: Path) -> ProjectConfig:
    """Load and parse a project configuration file.

    Args:
        path: Path to the `.msgschema.yaml` file.

    Returns:
        A ProjectConfig instance populated from the file.

    Raises:
        ProjectConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Project config file not found: {path}") from None
    except OSError as exc:
        raise ProjectConfigError(f"Cannot read project config file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_project_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse project config YAML text into a ProjectConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Returns:
        A ProjectConfig instance.

    Raises:
        ProjectConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ProjectConfigError(f"{source_label}: project config must be a YAML mapping")

    build_directory = _require_string(data, "build-directory", source_label)
    config = ProjectConfig(build_directory=build_directory)

    if "source-paths" in data:
        raw_paths = data["source-paths"]
        if not isinstance(raw_paths, list):
            raise ProjectConfigError(f"{source_label}: 'source-paths' must be a list")
        for index, entry in enumerate(raw_paths):
            if not isinstance(entry, str):
                raise ProjectConfigError(f"{source_label}: source-paths[{index}] must be a string")
        config.source_paths = list(raw_paths)

    if "schema-suffix" in data:
        suffix = _require_string(data, "schema-suffix", source_label)
        if not suffix.startswith("."):
            raise ProjectConfigError(f"{source_label}: 'schema-suffix' must start with '.'")
        config.schema_suffix = suffix

    return config


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising ProjectConfigError if missing."""
    if key not in mapping:
        raise ProjectConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise ProjectConfigError(f"{source_label}: '{key}' must be a string")
    return value
