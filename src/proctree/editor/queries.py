"""
Read-only queries over the editor state.

These are the lookups a rendering layer needs besides the operations: selection,
content by key, parameter declarations and reachable variables.
"""

from proctree.content.nodes import (
    Action,
    Argument,
    Content,
    Control,
    Function,
    Process,
    Reference,
    Value,
    Variable,
)
from proctree.core.types import CONDITIONAL_CONDITION_PROP, PROCESS_RETURN_PROP, ContentKey
from proctree.editor.availability import find_available_variables, find_functions_matching
from proctree.editor.state import EditorState
from proctree.exceptions import ContractViolationError
from proctree.specification.models import ExpressionSpec, InputSpec
from proctree.validation.references import ExpressionInfo, resolve_expression_info

__all__ = [
    "find_available_variables",
    "find_functions_matching",
    "get_content",
    "get_parameter_spec",
    "get_reference_expression_info",
    "get_selected_subtree",
    "get_selection",
    "is_in_selected_path",
]


def get_selection(state: EditorState) -> ContentKey:
    return state.selection


def get_content(state: EditorState, key: ContentKey) -> Content | None:
    return state.store.get(key)


def get_selected_subtree(state: EditorState) -> list[Content]:
    """Nodes on the path from the root down to the selection, root first."""
    if state.selection not in state.store:
        return []
    return list(reversed(state.store.get_content_and_ancestors(state.selection)))


def is_in_selected_path(state: EditorState, key: ContentKey) -> bool:
    """Whether a node is the selection or one of its ancestors."""
    if state.selection not in state.store:
        return False
    return state.store.is_ancestor(key, state.selection)


def get_parameter_spec(state: EditorState, key: ContentKey) -> InputSpec | ExpressionSpec:
    """
    Find the parameter declaration governing an argument or expression.

    Params:
        state: Editor state
        key: An Argument, or a Value, Function or Reference inside one

    Returns:
        The input declaration of the owning action or function, the condition
        declaration of a conditional, or the output declaration of the process
        for its return slot

    Raises:
        ContractViolationError: If no enclosing argument can be matched to a declaration
    """
    store = state.store
    content = store.resolve(key, Argument, Value, Function, Reference)
    argument = next(
        (node for node in store.walk_up(content.key) if isinstance(node, Argument)), None
    )
    if argument is None:
        raise ContractViolationError(f"Content '{key}' is not inside an argument")

    owner = store.resolve(argument.parent_key)
    engine_spec = state.engine_spec
    match owner:
        case Function():
            spec = engine_spec.get_function(owner.name).inputs.get(argument.name)
        case Action():
            spec = engine_spec.get_action(owner.name).inputs.get(argument.name)
        case Control() if argument.name == CONDITIONAL_CONDITION_PROP:
            spec = state.conditional_spec.inputs[CONDITIONAL_CONDITION_PROP]
        case Process() if argument.name == PROCESS_RETURN_PROP:
            spec = engine_spec.get_process(owner.name).output
        case _:
            spec = None
    if spec is None:
        raise ContractViolationError(
            f"Unable to resolve parameter specification for argument '{argument.key}'"
        )
    return spec


def get_reference_expression_info(state: EditorState, reference_key: ContentKey) -> ExpressionInfo:
    """
    Resolve a reference's type from its variable and path.

    Raises:
        ReferencePathError: If the path no longer resolves
    """
    store = state.store
    reference = store.resolve(reference_key, Reference)
    variable = store.resolve(reference.variable_key, Variable)
    return resolve_expression_info(variable, reference.path, state.engine_spec)
