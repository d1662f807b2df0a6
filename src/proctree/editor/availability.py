"""
What may be plugged in where.

Every literal value caches the functions that could replace it and the variables
it could be turned into a reference to. Both depend on the value's position, so
they are recomputed after every structural change.
"""

from proctree.content.coordinates import find_coordinates
from proctree.content.nodes import Argument, AvailableVariable, Value, Variable
from proctree.content.store import ContentStore
from proctree.core.coordinates import Coordinates
from proctree.core.types import ContentKey, TypeUnion
from proctree.editor.state import EditorState
from proctree.specification.models import CallableSpec
from proctree.typesystem.operations import matches_requirement
from proctree.validation.references import ReferenceType, classify_reference


def find_functions_matching(
    state: EditorState, type_union: TypeUnion, multi: bool
) -> dict[str, CallableSpec]:
    """
    Find the functions whose output can fill a slot.

    Params:
        state: Editor state
        type_union: Type the slot requires
        multi: Whether the slot accepts multiple values

    Returns:
        Matching function specs by name, in catalog order
    """
    matching: dict[str, CallableSpec] = {}
    for name, function_spec in state.engine_spec.functions.items():
        output = function_spec.output
        if output is None:
            continue
        if not matches_requirement(output.type, type_union, state.type_system):
            continue
        # Multi-valued results only fit slots that accept multiple values
        if output.multi and not multi:
            continue
        matching[name] = function_spec
    return matching


def _variable_positions(store: ContentStore) -> list[tuple[ContentKey, Coordinates]]:
    return [
        (content.key, find_coordinates(store, content.key))
        for content in store.walk_down(store.root.key)
        if isinstance(content, Variable)
    ]


def _available_at(
    positions: list[tuple[ContentKey, Coordinates]], coordinates: Coordinates
) -> list[AvailableVariable]:
    available: list[AvailableVariable] = []
    for variable_key, variable_coordinates in positions:
        reference_type = classify_reference(variable_coordinates, coordinates)
        if reference_type is ReferenceType.UNREACHABLE:
            continue
        available.append(
            AvailableVariable(
                key=variable_key,
                conditional=reference_type is ReferenceType.OPTIONAL,
            )
        )
    return available


def find_available_variables(state: EditorState, key: ContentKey) -> list[AvailableVariable]:
    """
    Find the variables that may be referenced at a position.

    Params:
        state: Editor state
        key: Any node at the position of use

    Returns:
        Process inputs first, then action outputs in document order; variables
        produced only on some paths to the position are flagged conditional
    """
    store = state.store
    return _available_at(_variable_positions(store), find_coordinates(store, key))


def refresh_availability(state: EditorState) -> None:
    """
    Recompute the cached functions and variables of every value in the tree.

    Variable positions are computed once per refresh. Values at the same
    coordinates (every value inside one action) share one variable list, and
    slots of the same type and multiplicity share one function list.
    """
    store = state.store
    positions = _variable_positions(store)
    variables_at: dict[Coordinates, list[AvailableVariable]] = {}
    functions_for: dict[tuple[TypeUnion, bool], list[str]] = {}
    for content in list(store.walk_down(store.root.key)):
        if not isinstance(content, Value):
            continue
        argument = store.resolve(content.parent_key, Argument)
        slot = (content.type, argument.allow_multi)
        if slot not in functions_for:
            functions_for[slot] = list(find_functions_matching(state, *slot))
        coordinates = find_coordinates(store, content.key)
        if coordinates not in variables_at:
            variables_at[coordinates] = _available_at(positions, coordinates)
        content.available_function_ids = list(functions_for[slot])
        content.available_variables = list(variables_at[coordinates])
