"""
Command records and dispatch.

Hosts that drive the editor through messages (an undo stack, a UI event loop)
describe each edit as an immutable command and hand it to ``dispatch``. The core
itself keeps no history; ``history_group_key`` only tells a host which commands
it may collapse into one history entry.
"""

from attrs import field, frozen

from proctree.config.models import ExpressionConfig
from proctree.content.nodes import ContentType
from proctree.core.types import ContentKey, TypeId
from proctree.editor import operations
from proctree.editor.state import EditorState


@frozen
class SetSelection:
    key: ContentKey


@frozen
class ConvertValueToFunction:
    key: ContentKey
    function_name: str


@frozen
class ConvertValueToReference:
    key: ContentKey
    variable_key: ContentKey
    path: tuple[str, ...] = field(default=(), converter=tuple)


@frozen
class ReplaceExpression:
    key: ContentKey
    config: ExpressionConfig


@frozen
class AddInputValue:
    key: ContentKey


@frozen
class AddExecutable:
    key: ContentKey
    kind: ContentType
    name: str | None = None
    index: int | None = None


@frozen
class ReorderInput:
    key: ContentKey
    old_index: int
    new_index: int


@frozen
class ReorderList:
    key: ContentKey
    old_index: int
    new_index: int


@frozen
class DeleteItem:
    key: ContentKey


@frozen
class UpdateValue:
    key: ContentKey
    value: str


@frozen
class UpdateValueType:
    key: ContentKey
    type_id: TypeId


@frozen
class UpdateReferencePath:
    key: ContentKey
    path: tuple[str, ...] = field(converter=tuple)


@frozen
class MoveExecutable:
    key: ContentKey
    new_parent_key: ContentKey
    new_index: int


@frozen
class UpdateVariable:
    key: ContentKey
    title: str | None = None
    description: str | None = None


EditorCommand = (
    SetSelection
    | ConvertValueToFunction
    | ConvertValueToReference
    | ReplaceExpression
    | AddInputValue
    | AddExecutable
    | ReorderInput
    | ReorderList
    | DeleteItem
    | UpdateValue
    | UpdateValueType
    | UpdateReferencePath
    | MoveExecutable
    | UpdateVariable
)


def dispatch(state: EditorState, command: EditorCommand) -> ContentKey | None:
    """
    Apply a command to the editor state.

    Params:
        state: Editor state, mutated in place
        command: The edit to apply

    Returns:
        Key of the node the command created, if it created one

    Raises:
        TypeError: If the command type is unknown
    """
    match command:
        case SetSelection(key=key):
            operations.set_selection(state, key)
        case ConvertValueToFunction(key=key, function_name=function_name):
            return operations.convert_value_to_function(state, key, function_name)
        case ConvertValueToReference(key=key, variable_key=variable_key, path=path):
            return operations.convert_value_to_reference(state, key, variable_key, path)
        case ReplaceExpression(key=key, config=config):
            return operations.replace_expression(state, key, config)
        case AddInputValue(key=key):
            return operations.add_input_value(state, key)
        case AddExecutable(key=key, kind=kind, name=name, index=index):
            return operations.add_executable(state, key, kind, name, index)
        case ReorderInput(key=key, old_index=old_index, new_index=new_index):
            operations.reorder_input(state, key, old_index, new_index)
        case ReorderList(key=key, old_index=old_index, new_index=new_index):
            operations.reorder_list(state, key, old_index, new_index)
        case DeleteItem(key=key):
            operations.delete_item(state, key)
        case UpdateValue(key=key, value=value):
            operations.update_value(state, key, value)
        case UpdateValueType(key=key, type_id=type_id):
            operations.update_value_type(state, key, type_id)
        case UpdateReferencePath(key=key, path=path):
            operations.update_reference_path(state, key, path)
        case MoveExecutable(key=key, new_parent_key=new_parent_key, new_index=new_index):
            operations.move_executable(state, key, new_parent_key, new_index)
        case UpdateVariable(key=key, title=title, description=description):
            operations.update_variable(state, key, title, description)
        case _:
            raise TypeError(f"Unknown editor command: {type(command).__name__}")
    return None


def history_group_key(command: EditorCommand) -> str | None:
    """
    Grouping key under which consecutive commands may be collapsed.

    Literal edits group per value, selection changes group together; every
    other command stands alone.
    """
    match command:
        case UpdateValue(key=key):
            return f"{UpdateValue.__name__}:{key}"
        case SetSelection():
            return SetSelection.__name__
        case _:
            return None
