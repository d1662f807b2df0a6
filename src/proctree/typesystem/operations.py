"""
Set algebra over type unions.

A TypeUnion is a sorted, duplicate-free tuple of type IDs. Every function here
accepts either a union or a bare type ID and always returns canonical unions, so
results can be compared with plain equality.
"""

from bisect import bisect_left
from collections.abc import Iterable
from typing import TYPE_CHECKING

from proctree.core.types import VOID_TYPE, TypeId, TypeUnion

if TYPE_CHECKING:
    from proctree.typesystem.system import TypeSystem


def canonical_type_union(type_ids: Iterable[TypeId]) -> TypeUnion:
    """Sort and de-duplicate type IDs into a canonical union."""
    return tuple(sorted(set(type_ids)))


def as_type_union(value: TypeUnion | TypeId) -> TypeUnion:
    """Promote a bare type ID to a single-member union."""
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def type_equals(reference: TypeUnion, compare: TypeUnion) -> bool:
    """Check two canonical unions for equality."""
    return tuple(reference) == tuple(compare)


def type_union(a: TypeUnion | TypeId, b: TypeUnion | TypeId) -> TypeUnion:
    """
    Merge two unions.

    Params:
        a: First union or type ID
        b: Second union or type ID

    Returns:
        Canonical union containing every member of both arguments
    """
    return canonical_type_union((*as_type_union(a), *as_type_union(b)))


def _contains(union: TypeUnion, type_id: TypeId) -> bool:
    index = bisect_left(union, type_id)
    return index < len(union) and union[index] == type_id


def is_type_union_subset(
    reference: TypeUnion | TypeId, compare: TypeUnion | TypeId
) -> bool:
    """
    Check that every member of compare appears directly in reference.

    Params:
        reference: The containing union
        compare: The union whose members are looked up

    Returns:
        True if compare is a subset of reference
    """
    ref = as_type_union(reference)
    return all(_contains(ref, type_id) for type_id in as_type_union(compare))


def matches_requirement(
    input_type: TypeUnion, required: TypeUnion, type_system: "TypeSystem"
) -> bool:
    """
    Check whether an expression type satisfies a declared requirement.

    Each member of the input must either be required directly or descend from
    some required type.

    Params:
        input_type: Computed type of the expression
        required: Declared (or allowed) type of the slot
        type_system: Closure of the declared hierarchy

    Returns:
        True if every input member is covered by the requirement
    """
    for type_id in input_type:
        if _contains(required, type_id):
            continue
        if not any(
            _contains(type_system.descendants_of(required_id), type_id)
            for required_id in required
        ):
            return False
    return True


def expand_type(type_union_: TypeUnion, type_system: "TypeSystem") -> TypeUnion:
    """
    Expand a union with every descendant of its members.

    Params:
        type_union_: The declared type
        type_system: Closure of the declared hierarchy

    Returns:
        Canonical union of the members and all their descendants
    """
    expanded: TypeUnion = VOID_TYPE
    for type_id in type_union_:
        expanded = type_union(expanded, (type_id, *type_system.descendants_of(type_id)))
    return expanded
