"""
Transitive closure of the declared type hierarchy.

The type system is derived once per engine specification and never mutated. It
records direct parents and children as declared, plus ancestors and descendants
computed by breadth-first expansion with an explicit cycle guard.
"""

import logging
from collections.abc import Mapping

from attrs import field, frozen

from proctree.core.types import VOID_TYPE, TypeId, TypeUnion
from proctree.exceptions import TypeHierarchyCycleError, UndeclaredTypeError
from proctree.specification.models import TypeSpec
from proctree.typesystem.operations import canonical_type_union

logger = logging.getLogger(__name__)


@frozen
class TypeSystem:
    """
    All type relationships of one engine specification.

    Mappings only hold entries for types that have at least one relation; use the
    accessor methods to get an empty union for the rest.
    """

    type_ids: TypeUnion
    parents: Mapping[TypeId, TypeUnion] = field(factory=dict)
    children: Mapping[TypeId, TypeUnion] = field(factory=dict)
    ancestors: Mapping[TypeId, TypeUnion] = field(factory=dict)
    descendants: Mapping[TypeId, TypeUnion] = field(factory=dict)

    def parents_of(self, type_id: TypeId) -> TypeUnion:
        return self.parents.get(type_id, VOID_TYPE)

    def children_of(self, type_id: TypeId) -> TypeUnion:
        return self.children.get(type_id, VOID_TYPE)

    def ancestors_of(self, type_id: TypeId) -> TypeUnion:
        return self.ancestors.get(type_id, VOID_TYPE)

    def descendants_of(self, type_id: TypeId) -> TypeUnion:
        return self.descendants.get(type_id, VOID_TYPE)

    def is_declared(self, type_id: TypeId) -> bool:
        return type_id in self.type_ids


def _collect_descendants(
    type_id: TypeId,
    children: Mapping[TypeId, TypeUnion],
    check_cycles: bool,
) -> set[TypeId]:
    found: set[TypeId] = set()
    # child -> the type it was first reached from, for reporting cycles
    reached_from: dict[TypeId, TypeId] = {}
    generation = [(type_id, child_id) for child_id in children.get(type_id, VOID_TYPE)]
    while generation:
        next_generation: list[tuple[TypeId, TypeId]] = []
        for parent_id, child_id in generation:
            if child_id == type_id:
                if check_cycles:
                    cycle = [child_id, parent_id]
                    while cycle[-1] != type_id:
                        cycle.append(reached_from[cycle[-1]])
                    raise TypeHierarchyCycleError(type_id, cycle[::-1])
                continue
            if child_id in found:
                continue
            found.add(child_id)
            reached_from[child_id] = parent_id
            next_generation.extend(
                (child_id, grandchild_id)
                for grandchild_id in children.get(child_id, VOID_TYPE)
            )
        generation = next_generation
    return found


def build_type_system(
    types: Mapping[TypeId, TypeSpec], check_cycles: bool = True
) -> TypeSystem:
    """
    Build the type system for a catalog of declared types.

    Params:
        types: Declared types keyed by ID
        check_cycles: Raise when the hierarchy is cyclic (expansion terminates
            either way; without the check a cyclic type simply omits itself)

    Returns:
        Immutable TypeSystem with canonical unions

    Raises:
        UndeclaredTypeError: If a type names a supertype that is not declared
        TypeHierarchyCycleError: If check_cycles is set and a cycle exists
    """
    raw_children: dict[TypeId, list[TypeId]] = {}
    parents: dict[TypeId, TypeUnion] = {}
    for type_id, type_spec in types.items():
        if type_spec.supertypes:
            parents[type_id] = canonical_type_union(type_spec.supertypes)
        for supertype_id in type_spec.supertypes:
            if supertype_id not in types:
                raise UndeclaredTypeError(type_id, supertype_id)
            raw_children.setdefault(supertype_id, []).append(type_id)

    children = {
        type_id: canonical_type_union(child_ids)
        for type_id, child_ids in raw_children.items()
    }

    descendants: dict[TypeId, TypeUnion] = {}
    raw_ancestors: dict[TypeId, set[TypeId]] = {}
    for type_id in types:
        found = _collect_descendants(type_id, children, check_cycles)
        if found:
            descendants[type_id] = canonical_type_union(found)
        for descendant_id in found:
            raw_ancestors.setdefault(descendant_id, set()).add(type_id)

    ancestors = {
        type_id: canonical_type_union(ancestor_ids)
        for type_id, ancestor_ids in raw_ancestors.items()
    }

    logger.debug("Built type system with %d types", len(types))
    return TypeSystem(
        type_ids=canonical_type_union(types),
        parents=parents,
        children=children,
        ancestors=ancestors,
        descendants=descendants,
    )
