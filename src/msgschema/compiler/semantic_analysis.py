# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic rules for schema declarations.

There is no separate analysis pass: the parser calls these checks inline as
each declaration is recognized, so the first violation aborts the run at the
token that caused it. Checks raise :class:`SemanticError`; the only
non-fatal rule, type redeclaration, returns a warning instead.
"""

from __future__ import annotations

from collections.abc import Sequence

from msgschema.compiler.diagnostics import Diagnostic, SemanticError, SourcePosition, warning
from msgschema.compiler.scanner import parse_integer_literal
from msgschema.model.entities import EnumValue, Member, SchemaRegistry
from msgschema.model.types import is_array_dimension_type, is_legal_identifier

# ###############
# Public Interface
# ###############

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


def check_identifier(name: str, description: str, position: SourcePosition) -> None:
    """Require *name* to start with a letter or underscore."""
    if not is_legal_identifier(name):
        raise SemanticError(f"Invalid {description} '{name}': must start with [a-zA-Z_].", position)


def check_unique_member(members: Sequence[Member], name: str, position: SourcePosition) -> None:
    if any(m.name == name for m in members):
        raise SemanticError(f"Duplicate member name '{name}'.", position)


def check_constant_size(size: str, position: SourcePosition) -> int:
    """Validate a numeric array size and return its value."""
    try:
        value = parse_integer_literal(size)
    except ValueError:
        raise SemanticError(f"Invalid constant array size '{size}'.", position) from None
    if value <= 0:
        raise SemanticError("Constant array size must be > 0", position)
    return value


def check_variable_size(members: Sequence[Member], size: str, position: SourcePosition) -> Member:
    """Validate a named array size against the members declared so far.

    The name must refer to an earlier scalar member of an integer type.

    Returns:
        The member that holds the array length.
    """
    if size == "]":
        raise SemanticError("Array sizes must be declared either as a constant or variable.", position)
    if not is_legal_identifier(size):
        raise SemanticError("Invalid array size variable name: must start with [a-zA-Z_].", position)
    for member in members:
        if member.name != size:
            continue
        if member.is_array:
            raise SemanticError(f"Array dimension '{size}' must not be an array type.", position)
        if not is_array_dimension_type(member.type.name):
            raise SemanticError(f"Array dimension '{size}' must be an integer type.", position)
        return member
    raise SemanticError(
        f"Unknown variable array index '{size}'. Index variables must be declared before the array.",
        position,
    )


def check_enum_value(values: Sequence[EnumValue], candidate: EnumValue, position: SourcePosition) -> None:
    """Reject out-of-range values and collisions with earlier values of the same enum."""
    if not INT32_MIN <= candidate.value <= INT32_MAX:
        raise SemanticError(
            f"Enum value {candidate.name} = {candidate.value} does not fit in a signed 32-bit integer.",
            position,
        )
    for prior in values:
        if prior.value == candidate.value:
            raise SemanticError(
                f"Enum values {prior.name} and {candidate.name} have the same value {candidate.value}!",
                position,
            )
        if prior.name == candidate.name:
            raise SemanticError(f"Enum value {prior.name} declared twice!", position)


def next_enum_value(values: Sequence[EnumValue]) -> int:
    """Return the value for an enum entry without an explicit literal.

    This is one more than the largest value so far (starting from 0), not one
    more than the previous entry.
    """
    return max([0, *(v.value for v in values)]) + 1


def check_type_redeclaration(
    registry: SchemaRegistry,
    name: str,
    position: SourcePosition,
) -> Diagnostic | None:
    """Return a warning if a struct or enum called *name* is already registered."""
    existing = registry.find_struct(name) or registry.find_enum(name)
    if existing is None:
        return None
    where = f" in '{existing.source_file}'" if existing.source_file else ""
    return warning(f"Type '{name}' was already declared{where}.", position)
