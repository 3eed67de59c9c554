# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Struct and enum declarations, and the registry that collects them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from msgschema.model.types import Dimension, DimensionMode, TypeName

# ###############
# Public Interface
# ###############


class Member(BaseModel):
    """A named, typed field of a struct with zero or more array dimensions."""

    model_config = ConfigDict(frozen=True)

    type: TypeName
    name: str
    dimensions: tuple[Dimension, ...] = ()

    @property
    def is_array(self) -> bool:
        return bool(self.dimensions)

    @property
    def is_primitive(self) -> bool:
        return self.type.is_primitive

    def is_constant_size_array(self) -> bool:
        """Return True if every dimension is constant. Scalars count as constant."""
        return all(dim.mode == DimensionMode.CONSTANT for dim in self.dimensions)


class EnumValue(BaseModel):
    """A named constant of an enum."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: int


class EnumDef(BaseModel):
    """An enumeration declaration with its fingerprint."""

    model_config = ConfigDict(frozen=True)

    name: TypeName
    values: tuple[EnumValue, ...] = ()
    hash: int
    source_file: str = ""

    def find_value(self, name: str) -> EnumValue | None:
        return next((v for v in self.values if v.name == name), None)


class StructDef(BaseModel):
    """A struct declaration. Member order is significant for the fingerprint."""

    model_config = ConfigDict(frozen=True)

    name: TypeName
    members: tuple[Member, ...] = ()
    hash: int
    source_file: str = ""

    def find_member(self, name: str) -> Member | None:
        return next((m for m in self.members if m.name == name), None)


class SchemaRegistry(BaseModel):
    """Every struct and enum parsed during one run, in declaration order.

    The registry only grows: entities are appended once their closing brace
    has been consumed and are never removed.
    """

    structs: list[StructDef] = _Field(default_factory=list)
    enums: list[EnumDef] = _Field(default_factory=list)

    def add_struct(self, struct: StructDef) -> None:
        self.structs.append(struct)

    def add_enum(self, enum: EnumDef) -> None:
        self.enums.append(enum)

    def find_struct(self, name: str) -> StructDef | None:
        return next((s for s in self.structs if s.name.name == name), None)

    def find_enum(self, name: str) -> EnumDef | None:
        return next((e for e in self.enums if e.name.name == name), None)

    def dump(self) -> str:
        """Return a human-readable listing of all enums and structs."""
        lines: list[str] = []
        for enum in self.enums:
            lines.extend(_dump_enum(enum))
        for struct in self.structs:
            lines.extend(_dump_struct(struct))
        return "\n".join(lines)


# ################
# Implementation
# ################


def _dump_enum(enum: EnumDef) -> list[str]:
    lines = [f"enum {enum.name}"]
    for value in enum.values:
        lines.append(f"        {value.name:<20}  {value.value}")
    return lines


def _dump_struct(struct: StructDef) -> list[str]:
    lines = [f"struct {struct.name} [hash=0x{struct.hash & 0xFFFFFFFFFFFFFFFF:016x}]"]
    for member in struct.members:
        dims = "".join(_dump_dimension(dim) for dim in member.dimensions)
        lines.append(f"\t{member.type.name:<20}  {member.name}{dims}")
    return lines


def _dump_dimension(dim: Dimension) -> str:
    label = "const" if dim.mode == DimensionMode.CONSTANT else "var"
    return f" [ ({label}) {dim.size} ]"
