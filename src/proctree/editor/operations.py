"""
Editing operations.

Each operation is one atomic state transition: it mutates the editor state and
finishes every cascading revalidation and type propagation before returning.
Operations invoked on a state that breaks their contract (unknown key, wrong node
kind, multiplicity violation) raise a ContractViolationError subclass and leave
the recoverable validation problems to the per-node error lists.
"""

import logging
from collections.abc import Sequence

from proctree.config.models import (
    ActionConfig,
    ConditionalConfig,
    ExpressionConfig,
    FunctionConfig,
    ProcessConfig,
    ValueConfig,
)
from proctree.content.nodes import (
    Action,
    Argument,
    Block,
    ContentType,
    Control,
    Function,
    Reference,
    Value,
    Variable,
)
from proctree.content.store import ContentStore
from proctree.core.types import ContentKey, TypeId
from proctree.editor.availability import find_functions_matching, refresh_availability
from proctree.editor.importer import ContentImporter, import_process
from proctree.editor.settings import EditorSettings
from proctree.editor.state import EditorState
from proctree.exceptions import (
    ContractViolationError,
    InvalidMoveError,
    MultiplicityError,
    ProcTreeError,
    ReorderError,
)
from proctree.specification.models import EngineSpec
from proctree.typesystem.system import build_type_system
from proctree.validation.errors import ErrorCode, remove_errors
from proctree.validation.propagation import (
    evaluate_argument,
    propagate_type_changes,
)
from proctree.validation.references import resolve_expression_info, revalidate_reference
from proctree.validation.values import validate_value

logger = logging.getLogger(__name__)

LITERAL_ERROR_CODES = (ErrorCode.MISSING_OR_INVALID_VALUE, ErrorCode.NO_LITERAL_FORM)


def init_editor(
    config: ProcessConfig,
    engine_spec: EngineSpec,
    settings: EditorSettings | None = None,
) -> EditorState:
    """
    Start an editing session.

    Params:
        config: Process document to edit
        engine_spec: Catalog the document is validated against
        settings: Session settings; defaults apply when omitted

    Returns:
        Fully validated editor state with the process selected

    Raises:
        SpecificationError: If the type hierarchy is invalid or the document names
            undeclared entries
        ConfigurationDocumentError: If the document cannot be mapped
    """
    settings = settings or EditorSettings()
    type_system = build_type_system(engine_spec.types, settings.check_hierarchy_cycles)
    state = EditorState(
        engine_spec=engine_spec,
        type_system=type_system,
        store=ContentStore(settings.key_prefix),
        settings=settings,
    )
    process = import_process(state, config)
    state.selection = process.key
    logger.debug("Initialized editor for process '%s' with %d nodes", config.name, len(state.store))
    return state


def set_selection(state: EditorState, key: ContentKey) -> None:
    """Select a node; unknown keys leave the selection unchanged."""
    if key in state.store:
        state.selection = key
    else:
        logger.debug("Ignoring selection of unknown key '%s'", key)


def _replacement_selection(state: EditorState, removed_key: ContentKey, new_key: ContentKey) -> None:
    if state.selection in state.store and state.store.is_ancestor(removed_key, state.selection):
        state.selection = new_key


def _detach_references(state: EditorState, subtree_keys: set[ContentKey]) -> None:
    """Unregister references inside a subtree from variables outside of it."""
    store = state.store
    for key in subtree_keys:
        reference = store.get(key)
        if not isinstance(reference, Reference) or reference.variable_key in subtree_keys:
            continue
        variable = store.get(reference.variable_key)
        if isinstance(variable, Variable) and key in variable.reference_keys:
            variable.reference_keys.remove(key)


def _orphan_references(state: EditorState, subtree_keys: set[ContentKey]) -> None:
    """Turn references from outside a subtree to variables inside it into empty values."""
    store = state.store
    for key in subtree_keys:
        variable = store.get(key)
        if not isinstance(variable, Variable):
            continue
        for reference_key in list(variable.reference_keys):
            if reference_key in subtree_keys:
                continue
            logger.debug("Replacing dangling reference '%s' with an empty value", reference_key)
            replace_expression(state, reference_key, ValueConfig())
        variable.reference_keys.clear()


def replace_expression(
    state: EditorState, key: ContentKey, config: ExpressionConfig
) -> ContentKey:
    """
    Substitute an expression subtree in place.

    Params:
        state: Editor state
        key: The Value, Function or Reference being replaced
        config: Document of the replacement expression

    Returns:
        Key of the new expression, which occupies the old one's slot

    Raises:
        SpecificationError: If the replacement names an undeclared function
        ConfigurationDocumentError: If the replacement cannot be constructed or
            one of its references cannot be bound; the tree is left unchanged
    """
    store = state.store
    old = store.resolve(key, Value, Function, Reference)
    argument = store.resolve(old.parent_key, Argument)

    importer = ContentImporter(state)
    try:
        new_expression = importer.import_expression(config, argument.key)
        importer.bind_references()
    except ProcTreeError:
        importer.discard()
        raise
    importer.track(new_expression.key)
    argument.child_keys[argument.child_keys.index(key)] = new_expression.key

    old_keys = store.subtree_keys(key)
    _orphan_references(state, old_keys)
    _detach_references(state, old_keys)
    _replacement_selection(state, key, new_expression.key)
    store.recursive_delete(key)

    importer.finish()
    propagate_type_changes(state, new_expression.key)
    return new_expression.key


def convert_value_to_function(
    state: EditorState, value_key: ContentKey, function_name: str
) -> ContentKey:
    """
    Replace a literal with a call to a function.

    Each of the function's parameters receives an empty literal typed by its
    declaration.

    Params:
        state: Editor state
        value_key: The value to convert
        function_name: Function declared in the engine specification

    Returns:
        Key of the new function

    Raises:
        SpecificationError: If the function is not declared
    """
    state.store.resolve(value_key, Value)
    state.engine_spec.get_function(function_name)
    return replace_expression(state, value_key, FunctionConfig(name=function_name))


def convert_value_to_reference(
    state: EditorState,
    value_key: ContentKey,
    variable_key: ContentKey,
    path: Sequence[str] | None = None,
) -> ContentKey:
    """
    Replace a literal with a reference to a variable.

    Params:
        state: Editor state
        value_key: The value to convert
        variable_key: The variable to reference
        path: Property names to walk from the variable's type

    Returns:
        Key of the new reference

    Raises:
        ReferencePathError: If the path cannot be walked from the variable's type
    """
    store = state.store
    value = store.resolve(value_key, Value)
    variable = store.resolve(variable_key, Variable)
    argument = store.resolve(value.parent_key, Argument)

    reference = ContentImporter(state).new_reference(argument.key, variable, list(path or []))
    argument.child_keys[argument.child_keys.index(value_key)] = reference.key
    _replacement_selection(state, value_key, reference.key)
    store.recursive_delete(value_key)

    revalidate_reference(state, reference.key)
    propagate_type_changes(state, reference.key)
    return reference.key


def add_input_value(state: EditorState, argument_key: ContentKey) -> ContentKey:
    """
    Append an empty literal to a multi-valued argument.

    Raises:
        MultiplicityError: If the argument accepts a single expression only
    """
    argument = state.store.resolve(argument_key, Argument)
    if not argument.allow_multi:
        raise MultiplicityError(argument_key)
    importer = ContentImporter(state)
    value = importer.import_value(ValueConfig(), argument.key)
    argument.child_keys.append(value.key)
    importer.track(value.key)
    importer.finish()
    evaluate_argument(state, argument.key)
    return value.key


def add_executable(
    state: EditorState,
    block_key: ContentKey,
    kind: ContentType,
    name: str | None = None,
    index: int | None = None,
) -> ContentKey:
    """
    Insert a new action or conditional into a block and select it.

    Params:
        state: Editor state
        block_key: Destination block
        kind: ContentType.ACTION or ContentType.CONTROL
        name: Action name; required for actions
        index: Position in the block; appended when omitted

    Returns:
        Key of the new executable
    """
    block = state.store.resolve(block_key, Block)
    if index is None:
        index = len(block.child_keys)
    if not 0 <= index <= len(block.child_keys):
        raise ContractViolationError(
            f"Index {index} is out of range for block '{block_key}' with {len(block.child_keys)} entries"
        )
    if kind is ContentType.ACTION:
        if name is None:
            raise ContractViolationError("An action name is required")
        state.engine_spec.get_action(name)
        config = ActionConfig(name=name)
    elif kind is ContentType.CONTROL:
        config = ConditionalConfig()
    else:
        raise ContractViolationError(f"Cannot add {kind.value} content to a block")

    importer = ContentImporter(state)
    executable = importer.import_executable(config, block.key)
    block.child_keys.insert(index, executable.key)
    importer.track(executable.key)
    importer.finish()
    state.selection = executable.key
    return executable.key


def delete_item(state: EditorState, key: ContentKey) -> None:
    """
    Remove a node from its block or argument, with everything it owns.

    A single-valued argument left empty receives a fresh empty literal, and
    references from elsewhere to variables produced by the removed subtree become
    empty literals as well.

    Raises:
        ContentKindError: If the node's parent is not a block or an argument
    """
    store = state.store
    content = store.resolve(key)
    parent = store.resolve(content.parent_key, Block, Argument)

    if state.selection in store and store.is_ancestor(key, state.selection):
        state.selection = parent.key

    subtree_keys = store.subtree_keys(key)
    _orphan_references(state, subtree_keys)
    _detach_references(state, subtree_keys)
    parent.child_keys.remove(key)
    store.recursive_delete(key)

    if isinstance(parent, Argument):
        if not parent.allow_multi and not parent.child_keys:
            importer = ContentImporter(state)
            value = importer.import_value(ValueConfig(), parent.key)
            parent.child_keys.append(value.key)
            importer.finish()
        evaluate_argument(state, parent.key)
    refresh_availability(state)
    logger.debug("Deleted '%s' from '%s'", key, parent.key)


def update_value(state: EditorState, value_key: ContentKey, value: str) -> None:
    """Replace a literal's text and revalidate it."""
    content = state.store.resolve(value_key, Value)
    argument = state.store.resolve(content.parent_key, Argument)
    content.value = value
    remove_errors(content.errors, *LITERAL_ERROR_CODES)
    content.errors.extend(
        validate_value(value, content.type, state.engine_spec, argument.required)
    )


def update_value_type(state: EditorState, value_key: ContentKey, type_id: TypeId) -> None:
    """Change the type a literal is interpreted as, then revalidate and propagate."""
    content = state.store.resolve(value_key, Value)
    argument = state.store.resolve(content.parent_key, Argument)
    content.type = (type_id,)
    remove_errors(content.errors, *LITERAL_ERROR_CODES)
    content.errors.extend(
        validate_value(content.value, content.type, state.engine_spec, argument.required)
    )
    content.available_function_ids = list(
        find_functions_matching(state, content.type, argument.allow_multi)
    )
    propagate_type_changes(state, value_key)


def update_reference_path(
    state: EditorState, reference_key: ContentKey, path: Sequence[str]
) -> None:
    """
    Point a reference at a different property of its variable.

    Raises:
        ReferencePathError: If the path cannot be walked from the variable's type
    """
    store = state.store
    reference = store.resolve(reference_key, Reference)
    variable = store.resolve(reference.variable_key, Variable)
    info = resolve_expression_info(variable, list(path), state.engine_spec)
    reference.path = list(path)
    reference.type = info.type
    reference.multi = info.multi
    reference.optional = info.optional
    revalidate_reference(state, reference_key)
    propagate_type_changes(state, reference_key)


def update_variable(
    state: EditorState,
    variable_key: ContentKey,
    title: str | None,
    description: str | None,
) -> None:
    variable = state.store.resolve(variable_key, Variable)
    variable.title = title
    variable.description = description


def _revalidate_positioned(state: EditorState, key: ContentKey) -> None:
    """Revalidate references whose reachability depends on an executable's position."""
    store = state.store
    subtree = list(store.walk_down(key))
    for content in subtree:
        match content:
            case Reference():
                revalidate_reference(state, content.key)
            case Variable():
                for reference_key in content.reference_keys:
                    revalidate_reference(state, reference_key)
    refresh_availability(state)


def move_executable(
    state: EditorState, key: ContentKey, new_parent_key: ContentKey, new_index: int
) -> None:
    """
    Move an action or conditional to a position in a block.

    Params:
        state: Editor state
        key: The executable to move
        new_parent_key: Destination block
        new_index: Position in the destination block after the move

    Raises:
        InvalidMoveError: If the destination is inside the moved subtree or the
            index is out of range
    """
    store = state.store
    executable = store.resolve(key, Action, Control)
    old_parent = store.resolve(executable.parent_key, Block)
    new_parent = store.resolve(new_parent_key, Block)
    if store.is_ancestor(key, new_parent_key):
        raise InvalidMoveError(key, new_parent_key, "destination is inside the moved subtree")

    size_after_removal = len(new_parent.child_keys) - (old_parent is new_parent)
    if not 0 <= new_index <= size_after_removal:
        raise InvalidMoveError(key, new_parent_key, f"index {new_index} is out of range")

    old_parent.child_keys.remove(key)
    new_parent.child_keys.insert(new_index, key)
    executable.parent_key = new_parent.key
    _revalidate_positioned(state, key)
    logger.debug("Moved '%s' to '%s' at %d", key, new_parent_key, new_index)


def reorder_input(
    state: EditorState, argument_key: ContentKey, old_index: int, new_index: int
) -> None:
    """Reorder the expressions of a multi-valued argument."""
    content = state.store.resolve(argument_key)
    if not isinstance(content, Argument):
        raise ReorderError(argument_key, f"{content.kind.value} is not an argument")
    state.store.reorder_list(argument_key, old_index, new_index)


def reorder_list(
    state: EditorState, list_key: ContentKey, old_index: int, new_index: int
) -> None:
    """
    Reorder the entries of a block or argument.

    Reordering a block changes the coordinates of the moved executable, so its
    references are revalidated as after a move.
    """
    store = state.store
    store.reorder_list(list_key, old_index, new_index)
    content = store.resolve(list_key)
    if isinstance(content, Block):
        _revalidate_positioned(state, content.child_keys[new_index])
