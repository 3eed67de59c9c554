# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema model: type names, members, structs, enums and the registry."""

from msgschema.model.entities import (
    EnumDef,
    EnumValue,
    Member,
    SchemaRegistry,
    StructDef,
)
from msgschema.model.types import (
    ARRAY_DIMENSION_TYPES,
    PRIMITIVE_TYPES,
    Dimension,
    DimensionMode,
    TypeName,
    is_array_dimension_type,
    is_legal_identifier,
    is_primitive_type,
)

__all__ = [
    # Type system
    "PRIMITIVE_TYPES",
    "ARRAY_DIMENSION_TYPES",
    "is_primitive_type",
    "is_array_dimension_type",
    "is_legal_identifier",
    "TypeName",
    "DimensionMode",
    "Dimension",
    # Entities
    "Member",
    "EnumValue",
    "EnumDef",
    "StructDef",
    "SchemaRegistry",
]
