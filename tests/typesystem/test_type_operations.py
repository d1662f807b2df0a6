"""
Tests for type-union algebra.
"""

import pytest

from proctree.typesystem import (
    canonical_type_union,
    expand_type,
    is_type_union_subset,
    matches_requirement,
    type_equals,
    type_union,
)


class TestTypeUnion:
    """Tests for union laws."""

    @pytest.mark.parametrize(
        "a,b",
        [
            (("int",), ("string",)),
            (("boolean", "string"), ("int", "string")),
            ((), ("double",)),
        ],
    )
    def test_commutative(self, a, b):
        assert type_union(a, b) == type_union(b, a)

    def test_associative(self):
        a, b, c = ("string",), ("boolean", "int"), ("double", "string")
        assert type_union(type_union(a, b), c) == type_union(a, type_union(b, c))

    def test_idempotent(self):
        a = ("int", "string")
        assert type_union(a, a) == a

    def test_result_is_canonical(self):
        result = type_union(("string", "boolean"), ("boolean", "alpha"))
        assert result == ("alpha", "boolean", "string")

    def test_accepts_bare_type_id(self):
        assert type_union("string", ("int",)) == ("int", "string")

    def test_canonical_type_union(self):
        assert canonical_type_union(["b", "a", "b"]) == ("a", "b")

    def test_type_equals(self):
        assert type_equals(("a", "b"), ("a", "b"))
        assert not type_equals(("a",), ("a", "b"))


class TestSubset:
    """Tests for direct-membership subset checks."""

    def test_subset(self):
        assert is_type_union_subset(("boolean", "int", "string"), ("int", "string"))

    def test_not_subset(self):
        assert not is_type_union_subset(("int", "string"), ("boolean",))

    def test_empty_is_subset(self):
        assert is_type_union_subset(("int",), ())

    def test_descendants_do_not_count(self):
        """Test the subset check ignores the hierarchy."""
        assert not is_type_union_subset(("double",), ("int",))


class TestMatchesRequirement:
    """Tests for requirement satisfaction."""

    def test_reflexive(self, type_system):
        for type_id in type_system.type_ids:
            assert matches_requirement((type_id,), (type_id,), type_system)

    def test_descendant_satisfies(self, type_system):
        assert matches_requirement(("int",), ("double",), type_system)
        assert matches_requirement(("int",), ("object",), type_system)

    def test_ancestor_does_not_satisfy(self, type_system):
        assert not matches_requirement(("double",), ("int",), type_system)

    def test_every_member_must_match(self, type_system):
        assert matches_requirement(("int", "string"), ("double", "string"), type_system)
        assert not matches_requirement(("boolean", "int"), ("double",), type_system)

    def test_unrelated_types(self, type_system):
        assert not matches_requirement(("person",), ("string",), type_system)


class TestExpandType:
    """Tests for expanding a type with its descendants."""

    def test_contains_type_and_descendants(self, type_system):
        assert expand_type(("double",), type_system) == ("double", "int", "percentage")

    def test_leaf_type_expands_to_itself(self, type_system):
        """Test a type without descendants is kept."""
        assert expand_type(("int",), type_system) == ("int",)

    def test_exact_closure(self, type_system):
        for type_id in type_system.type_ids:
            expected = {type_id, *type_system.descendants_of(type_id)}
            assert set(expand_type((type_id,), type_system)) == expected

    def test_union_expands_each_member(self, type_system):
        assert expand_type(("boolean", "string"), type_system) == (
            "boolean",
            "log-level",
            "string",
            "zip-code",
        )

    def test_void_expands_to_void(self, type_system):
        assert expand_type((), type_system) == ()
