"""
Type system and type-union algebra.

This package derives the transitive closure of the declared subtype hierarchy and
provides the set operations used to check expression types against parameters.
"""

from proctree.typesystem.operations import (
    as_type_union,
    canonical_type_union,
    expand_type,
    is_type_union_subset,
    matches_requirement,
    type_equals,
    type_union,
)
from proctree.typesystem.system import TypeSystem, build_type_system

__all__ = [
    "TypeSystem",
    "build_type_system",
    "as_type_union",
    "canonical_type_union",
    "expand_type",
    "is_type_union_subset",
    "matches_requirement",
    "type_equals",
    "type_union",
]
