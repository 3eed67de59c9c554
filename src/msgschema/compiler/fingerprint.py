# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""64-bit fingerprints identifying the wire shape of structs and enums.

The hash is a rolling update over characters and small integers, so the
order in which fields are fed is part of the format. All values are signed
64-bit integers with wraparound.
"""

from __future__ import annotations

from collections.abc import Iterable

from msgschema.model.entities import Member
from msgschema.model.types import TypeName

# ###############
# Public Interface
# ###############

STRUCT_HASH_SEED = 0x12345678
ENUM_HASH_SEED = 0x87654321


def hash_update(v: int, c: int) -> int:
    """Mix one character (or small integer) *c* into hash *v*."""
    u = v & _MASK64
    return _to_signed64(((u << 8) ^ (u >> 55)) + c)


def hash_string_update(v: int, s: str) -> int:
    """Mix the byte length of *s*, then each of its UTF-8 bytes, into *v*."""
    data = s.encode("utf-8")
    v = hash_update(v, len(data))
    for byte in data:
        v = hash_update(v, byte)
    return v


def struct_hash(members: Iterable[Member]) -> int:
    """Compute the fingerprint of a struct from its members, in order.

    The struct's own name is not part of the hash, and neither are the names
    of compound member types; only primitive type names are mixed in.
    """
    v = STRUCT_HASH_SEED
    for member in members:
        v = hash_string_update(v, member.name)
        if member.is_primitive:
            v = hash_string_update(v, member.type.name)
        v = hash_update(v, len(member.dimensions))
        for dim in member.dimensions:
            v = hash_update(v, dim.mode.value)
            v = hash_string_update(v, dim.size)
    return v


def enum_hash(name: TypeName | str) -> int:
    """Compute the fingerprint of an enum. Only the qualified name is hashed."""
    v = ENUM_HASH_SEED
    return hash_string_update(v, str(name))


# ################
# Implementation
# ################

_MASK64 = (1 << 64) - 1


def _to_signed64(value: int) -> int:
    value &= _MASK64
    if value >= 1 << 63:
        value -= 1 << 64
    return value
