# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization of a compiled schema registry for code emitters.

Artifacts are stored as compact JSON files for portability and human-readability.
The format is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from msgschema.model.entities import EnumDef, EnumValue, Member, SchemaRegistry, StructDef
from msgschema.model.types import Dimension, DimensionMode, TypeName

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_FILENAME = "schema.msgschema.json"


def serialize(registry: SchemaRegistry) -> str:
    """Serialize a SchemaRegistry to a compact JSON string."""
    return json.dumps(_registry_to_dict(registry), separators=(",", ":"))


def deserialize(data: str) -> SchemaRegistry:
    """Deserialize a SchemaRegistry from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`SchemaRegistry`.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _registry_from_dict(obj)


def write_artifact(registry: SchemaRegistry, path: Path) -> None:
    """Write a compiled artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(registry), encoding="utf-8")


def read_artifact(path: Path) -> SchemaRegistry:
    """Read and deserialize a compiled artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _registry_to_dict(registry: SchemaRegistry) -> dict[str, Any]:
    return {
        "v": ARTIFACT_FORMAT_VERSION,
        "structs": [_struct_to_dict(s) for s in registry.structs],
        "enums": [_enum_to_dict(e) for e in registry.enums],
    }


def _registry_from_dict(obj: dict[str, Any]) -> SchemaRegistry:
    return SchemaRegistry(
        structs=[_struct_from_dict(s) for s in obj.get("structs", [])],
        enums=[_enum_from_dict(e) for e in obj.get("enums", [])],
    )


def _struct_to_dict(struct: StructDef) -> dict[str, Any]:
    return {
        "name": struct.name.name,
        "hash": struct.hash,
        "file": struct.source_file,
        "members": [_member_to_dict(m) for m in struct.members],
    }


def _struct_from_dict(obj: dict[str, Any]) -> StructDef:
    return StructDef(
        name=TypeName(name=obj["name"]),
        hash=obj["hash"],
        source_file=obj.get("file", ""),
        members=[_member_from_dict(m) for m in obj.get("members", [])],
    )


def _member_to_dict(member: Member) -> dict[str, Any]:
    d: dict[str, Any] = {"name": member.name, "type": member.type.name}
    if member.dimensions:
        d["dims"] = [[dim.mode.value, dim.size] for dim in member.dimensions]
    return d


def _member_from_dict(obj: dict[str, Any]) -> Member:
    return Member(
        name=obj["name"],
        type=TypeName(name=obj["type"]),
        dimensions=[Dimension(mode=DimensionMode(mode), size=size) for mode, size in obj.get("dims", [])],
    )


def _enum_to_dict(enum: EnumDef) -> dict[str, Any]:
    return {
        "name": enum.name.name,
        "hash": enum.hash,
        "file": enum.source_file,
        "values": [[v.name, v.value] for v in enum.values],
    }


def _enum_from_dict(obj: dict[str, Any]) -> EnumDef:
    return EnumDef(
        name=TypeName(name=obj["name"]),
        hash=obj["hash"],
        source_file=obj.get("file", ""),
        values=[EnumValue(name=name, value=value) for name, value in obj.get("values", [])],
    )
