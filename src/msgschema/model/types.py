# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type names, array dimensions and the built-in type vocabulary."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############

# The built-in scalar types. There are deliberately no unsigned integers.
PRIMITIVE_TYPES: frozenset[str] = frozenset(
    {
        "int8_t",
        "int16_t",
        "int32_t",
        "int64_t",
        "byte",
        "float",
        "double",
        "string",
        "boolean",
    }
)

# Types whose scalar members may size a variable-length array.
ARRAY_DIMENSION_TYPES: frozenset[str] = frozenset({"int8_t", "int16_t", "int32_t", "int64_t"})


def is_primitive_type(name: str) -> bool:
    return name in PRIMITIVE_TYPES


def is_array_dimension_type(name: str) -> bool:
    return name in ARRAY_DIMENSION_TYPES


def is_legal_identifier(name: str) -> bool:
    """Return True if *name* starts with an ASCII letter or underscore."""
    return bool(name) and name[0].isascii() and (name[0].isalpha() or name[0] == "_")


class TypeName(BaseModel):
    """A possibly package-qualified type name such as ``geometry.point_t``."""

    model_config = ConfigDict(frozen=True)

    name: str

    @property
    def package(self) -> str:
        """Everything before the last '.', or '' if there is none."""
        package, _, _ = self.name.rpartition(".")
        return package

    @property
    def shortname(self) -> str:
        """Everything after the last '.', or the whole name if there is none."""
        return self.name.rpartition(".")[2]

    @property
    def is_primitive(self) -> bool:
        return is_primitive_type(self.name)

    def __str__(self) -> str:
        return self.name


class DimensionMode(Enum):
    """How the size of one array axis is determined."""

    CONSTANT = 0
    VARIABLE = 1


class Dimension(BaseModel):
    """One array axis of a member.

    ``size`` is the literal text of a positive integer for constant
    dimensions, or the name of an earlier integer scalar member for variable
    ones.
    """

    model_config = ConfigDict(frozen=True)

    mode: DimensionMode
    size: str
