# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for struct and enum fingerprints."""

import pytest

from msgschema.compiler.fingerprint import (
    ENUM_HASH_SEED,
    STRUCT_HASH_SEED,
    enum_hash,
    hash_string_update,
    hash_update,
    struct_hash,
)
from msgschema.compiler.parser import parse
from msgschema.model.entities import Member
from msgschema.model.types import Dimension, DimensionMode, TypeName

# ###############
# Test Helpers
# ###############


def _struct_hash(source: str) -> int:
    return parse(source).structs[0].hash


def _enum_hash(source: str) -> int:
    return parse(source).enums[0].hash


# ###############
# Primitive Updates
# ###############


class TestHashUpdate:
    def test_small_values(self) -> None:
        assert hash_update(0, 5) == 5
        assert hash_update(1, 0) == 256

    def test_shift_is_logical(self) -> None:
        # All bits set: (v << 8) keeps 56 ones, (v >>> 55) brings down 9 ones.
        assert hash_update(-1, 0) == -257

    def test_wraps_to_signed_64_bit(self) -> None:
        assert hash_update(1 << 62, 0) == 128
        assert hash_update(0x7FFFFFFFFFFFFFFF, 0) == -1

    def test_result_stays_in_signed_range(self) -> None:
        v = STRUCT_HASH_SEED
        for c in range(500):
            v = hash_update(v, c % 256)
            assert -(1 << 63) <= v < (1 << 63)

    def test_string_update_feeds_length_first(self) -> None:
        assert hash_string_update(0, "") == 0
        assert hash_string_update(0, "a") == (1 << 8) + ord("a")

    def test_string_update_uses_utf8_bytes(self) -> None:
        assert hash_string_update(0, "é") == hash_update(hash_update(hash_update(0, 2), 0xC3), 0xA9)


# ###############
# Struct Hash
# ###############


class TestStructHash:
    def test_empty_struct_is_seed(self) -> None:
        assert struct_hash([]) == STRUCT_HASH_SEED
        assert _struct_hash("struct s { }") == 0x12345678

    def test_deterministic(self) -> None:
        source = "struct s { int32_t n; double v[n][3]; geo.point_t p; }"
        assert _struct_hash(source) == _struct_hash(source)

    def test_struct_rename_keeps_hash(self) -> None:
        assert _struct_hash("struct a { int8_t x; }") == _struct_hash("struct b { int8_t x; }")

    def test_compound_type_rename_keeps_hash(self) -> None:
        assert _struct_hash("struct s { pose_t p; }") == _struct_hash("struct s { other.pose2_t p; }")

    def test_member_rename_changes_hash(self) -> None:
        assert _struct_hash("struct s { int8_t x; }") != _struct_hash("struct s { int8_t y; }")

    def test_compound_member_rename_changes_hash(self) -> None:
        assert _struct_hash("struct s { pose_t p; }") != _struct_hash("struct s { pose_t q; }")

    def test_primitive_type_change_changes_hash(self) -> None:
        assert _struct_hash("struct s { int8_t x; }") != _struct_hash("struct s { int16_t x; }")

    def test_primitive_vs_compound_type_changes_hash(self) -> None:
        assert _struct_hash("struct s { int8_t x; }") != _struct_hash("struct s { byte_t x; }")

    def test_member_order_matters(self) -> None:
        assert _struct_hash("struct s { int8_t a; int8_t b; }") != _struct_hash("struct s { int8_t b; int8_t a; }")

    def test_dimension_order_matters(self) -> None:
        assert _struct_hash("struct c { float f[2][3]; }") != _struct_hash("struct c { float f[3][2]; }")

    def test_dimension_mode_matters(self) -> None:
        byte = TypeName(name="byte")
        const = Member(type=byte, name="b", dimensions=[Dimension(mode=DimensionMode.CONSTANT, size="n")])
        var = Member(type=byte, name="b", dimensions=[Dimension(mode=DimensionMode.VARIABLE, size="n")])
        assert struct_hash([const]) != struct_hash([var])

    def test_array_vs_scalar_changes_hash(self) -> None:
        assert _struct_hash("struct s { byte b; }") != _struct_hash("struct s { byte b[1]; }")

    def test_size_literal_text_is_hashed(self) -> None:
        assert _struct_hash("struct s { byte b[16]; }") != _struct_hash("struct s { byte b[0x10]; }")

    def test_matches_manual_computation(self) -> None:
        v = STRUCT_HASH_SEED
        v = hash_string_update(v, "n")
        v = hash_string_update(v, "int32_t")
        v = hash_update(v, 0)
        v = hash_string_update(v, "data")
        v = hash_string_update(v, "int32_t")
        v = hash_update(v, 1)
        v = hash_update(v, 1)
        v = hash_string_update(v, "n")
        v = hash_string_update(v, "p")
        v = hash_update(v, 0)
        assert _struct_hash("struct a { int32_t n; int32_t data[n]; point_t p; }") == v


# ###############
# Enum Hash
# ###############


class TestEnumHash:
    def test_known_value(self) -> None:
        assert enum_hash("a") == 0x876543210161
        assert ENUM_HASH_SEED == 0x87654321

    def test_accepts_type_name(self) -> None:
        assert enum_hash(TypeName(name="pkg.e")) == enum_hash("pkg.e")

    @pytest.mark.parametrize(
        "body",
        ["A", "A, B", "B, A", "A = 7, B = 3, C", ""],
    )
    def test_values_do_not_affect_hash(self, body: str) -> None:
        assert _enum_hash(f"enum Color {{ {body} }}") == enum_hash("Color")

    def test_rename_changes_hash(self) -> None:
        assert _enum_hash("enum Color { A }") != _enum_hash("enum Colour { A }")

    def test_package_is_part_of_name(self) -> None:
        assert _enum_hash("enum a.Color { A }") != _enum_hash("enum b.Color { A }")
