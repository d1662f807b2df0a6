"""
Reference reachability and path resolution.

A reference is legal only where the variable it points at has certainly, or at
least possibly, been produced. Classification compares the coordinates of the
producing action with those of the reference's position; path resolution walks
the property chain of the variable's declared type.
"""

import logging
from enum import Enum

from attrs import frozen

from proctree.content.coordinates import find_coordinates
from proctree.content.nodes import Reference, Variable
from proctree.content.store import ContentStore
from proctree.core.coordinates import (
    Coordinates,
    coordinates_address_block,
    get_shared_ancestor,
    is_predecessor,
)
from proctree.core.types import ContentKey, TypeUnion
from proctree.exceptions import ReferencePathError
from proctree.specification.models import EngineSpec
from proctree.validation.context import TreeContext
from proctree.validation.errors import (
    ErrorCode,
    ValidationError,
    invalid_reference,
    remove_errors,
    unchecked_reference,
)

logger = logging.getLogger(__name__)


class ReferenceType(Enum):
    # Certainly produced before use
    VALID = "VALID"
    # Produced before use only on some paths (e.g. inside an earlier conditional branch)
    OPTIONAL = "OPTIONAL"
    # Produced after use, or in a branch exclusive to the use
    UNREACHABLE = "UNREACHABLE"


@frozen
class ExpressionInfo:
    """Type, multiplicity and optionality of an expression."""

    type: TypeUnion
    multi: bool = False
    optional: bool = False


def classify_reference(
    variable_coordinates: Coordinates, location_coordinates: Coordinates
) -> ReferenceType:
    """
    Classify reachability from the positions of a variable's producer and of its use.

    Params:
        variable_coordinates: Coordinates of the variable
        location_coordinates: Coordinates of the position of use

    Returns:
        The reachability classification
    """
    shared = get_shared_ancestor(variable_coordinates, location_coordinates)

    if not is_predecessor(variable_coordinates, location_coordinates):
        return ReferenceType.UNREACHABLE
    if not coordinates_address_block(shared):
        # Use and production meet at an executable, e.g. an action referencing
        # its own output or a condition referencing its own branches
        return ReferenceType.UNREACHABLE
    if len(shared) < len(variable_coordinates) - 1:
        return ReferenceType.OPTIONAL
    return ReferenceType.VALID


def resolve_reference_type(
    store: ContentStore, variable_key: ContentKey, location_key: ContentKey
) -> ReferenceType:
    """
    Classify whether a variable may be used at a position.

    Params:
        store: Content store holding both nodes
        variable_key: The referenced variable
        location_key: Any node at the position of use

    Returns:
        The reachability classification
    """
    return classify_reference(
        find_coordinates(store, variable_key), find_coordinates(store, location_key)
    )


def resolve_expression_info(
    variable: Variable, path: list[str], engine_spec: EngineSpec
) -> ExpressionInfo:
    """
    Resolve the type reached by walking a property path from a variable.

    Params:
        variable: The variable the path starts at
        path: Property names, outermost first
        engine_spec: Catalog holding the property declarations

    Returns:
        Type of the final property; multi and optional accumulate along the path

    Raises:
        ReferencePathError: If a segment is taken from a union or is not declared
    """
    type_union = variable.type
    multi = variable.multi
    optional = variable.optional
    for segment in path:
        if len(type_union) != 1:
            raise ReferencePathError(
                path, type_union, "only a single type can declare properties"
            )
        type_spec = engine_spec.types.get(type_union[0])
        prop = type_spec.properties.get(segment) if type_spec is not None else None
        if prop is None:
            raise ReferencePathError(
                path, type_union, f"property '{segment}' is not declared"
            )
        type_union = prop.type
        multi = multi or prop.multi
        optional = optional or prop.optional
    return ExpressionInfo(type=type_union, multi=multi, optional=optional)


def validate_reference(context: TreeContext, reference_key: ContentKey) -> list[ValidationError]:
    """
    Compute the reference errors of one reference.

    Params:
        context: Editor state (or equivalent) holding the reference
        reference_key: The reference to check

    Returns:
        INVALID_REFERENCE for an unresolvable path or an unreachable variable,
        UNCHECKED_REFERENCE for an optionally-set value without a guard
    """
    store = context.store
    reference = store.resolve(reference_key, Reference)
    variable = store.resolve(reference.variable_key, Variable)

    try:
        resolve_expression_info(variable, reference.path, context.engine_spec)
    except ReferencePathError as e:
        logger.warning("Reference '%s' has an unresolvable path: %s", reference_key, e)
        return [invalid_reference(variable.key, reference_key, "not resolvable by path")]

    reference_type = resolve_reference_type(store, variable.key, reference_key)
    if reference_type is ReferenceType.UNREACHABLE:
        return [invalid_reference(variable.key, reference_key)]
    if reference_type is ReferenceType.OPTIONAL or reference.optional:
        if not context.is_reference_guarded(reference):
            return [unchecked_reference(variable.key, reference_key)]
    return []


def revalidate_reference(context: TreeContext, reference_key: ContentKey) -> None:
    """Replace a reference's reference errors with freshly computed ones."""
    reference = context.store.resolve(reference_key, Reference)
    remove_errors(
        reference.errors, ErrorCode.INVALID_REFERENCE, ErrorCode.UNCHECKED_REFERENCE
    )
    reference.errors.extend(validate_reference(context, reference_key))
