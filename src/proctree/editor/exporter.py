"""
Configuration document export.

The structural inverse of import. Importing an exported document and exporting
it again yields an equal document; only content keys differ between the two
trees.
"""

from proctree.config.models import (
    ActionConfig,
    BlockConfig,
    ConditionalConfig,
    ExecutableConfig,
    ExpressionConfig,
    FunctionConfig,
    ProcessConfig,
    ReferenceConfig,
    ValueConfig,
    VariableConfig,
)
from proctree.content.coordinates import find_coordinates
from proctree.content.nodes import (
    Action,
    Argument,
    Block,
    Control,
    Function,
    Process,
    Reference,
    Value,
    Variable,
)
from proctree.content.store import ContentStore
from proctree.core.types import CONDITIONAL_CONDITION_PROP, PROCESS_RETURN_PROP, ContentKey
from proctree.editor.state import EditorState


def export_process(state: EditorState) -> ProcessConfig:
    """
    Export the whole tree.

    Params:
        state: Editor state

    Returns:
        Configuration document of the root process
    """
    store = state.store
    process = store.root
    return_key = process.child_key_map.get(PROCESS_RETURN_PROP)
    return ProcessConfig(
        name=process.name,
        root_block=export_block(store, process.root_block_key),
        return_expression=export_argument(store, return_key) if return_key else None,
        external_id=process.external_id,
    )


def export_block(store: ContentStore, key: ContentKey) -> BlockConfig:
    block = store.resolve(key, Block)
    return BlockConfig(
        executables=[export_executable(store, child) for child in block.child_keys]
    )


def export_executable(store: ContentStore, key: ContentKey) -> ExecutableConfig:
    content = store.resolve(key, Action, Control)
    match content:
        case Action():
            return ActionConfig(
                name=content.name,
                arguments=_export_arguments(store, content.child_key_map),
                output=_export_output(store, content.variable_key),
            )
        case Control():
            condition = export_argument(store, content.child_key_map[CONDITIONAL_CONDITION_PROP])
            return ConditionalConfig(
                control_type=content.control_type.value,
                condition=condition[0],
                blocks=[export_block(store, child) for child in content.child_keys],
            )


def _export_output(store: ContentStore, key: ContentKey | None) -> VariableConfig | None:
    if key is None:
        return None
    variable = store.resolve(key, Variable)
    if variable.title is None and variable.description is None:
        return None
    return VariableConfig(title=variable.title, description=variable.description)


def _export_arguments(
    store: ContentStore, child_key_map: dict[str, ContentKey]
) -> dict[str, list[ExpressionConfig]]:
    return {name: export_argument(store, key) for name, key in child_key_map.items()}


def export_argument(store: ContentStore, key: ContentKey) -> list[ExpressionConfig]:
    argument = store.resolve(key, Argument)
    return [export_expression(store, child) for child in argument.child_keys]


def export_expression(store: ContentStore, key: ContentKey) -> ExpressionConfig:
    content = store.resolve(key, Value, Function, Reference)
    match content:
        case Value():
            return ValueConfig(
                value=content.value,
                type_id=content.type[0] if content.type else None,
            )
        case Function():
            return FunctionConfig(
                name=content.name,
                arguments=_export_arguments(store, content.child_key_map),
            )
        case Reference():
            return export_reference(store, content)


def export_reference(store: ContentStore, reference: Reference) -> ReferenceConfig:
    """
    Serialize a reference by the position of the variable's producer.

    Process inputs sit at the root, so their name leads the path.
    """
    variable = store.resolve(reference.variable_key, Variable)
    producer = store.resolve(variable.parent_key)
    if isinstance(producer, Process):
        return ReferenceConfig(coordinates=[], path=[variable.base_path, *reference.path])
    return ReferenceConfig(
        coordinates=list(find_coordinates(store, variable.key)),
        path=list(reference.path),
    )
