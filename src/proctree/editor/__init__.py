"""
Editing operations.

This package provides the editor state and settings, configuration document
import and export, read-only queries, the atomic editing operations, and the
command records used to drive them.
"""

from proctree.editor.availability import (
    find_available_variables,
    find_functions_matching,
    refresh_availability,
)
from proctree.editor.commands import (
    AddExecutable,
    AddInputValue,
    ConvertValueToFunction,
    ConvertValueToReference,
    DeleteItem,
    EditorCommand,
    MoveExecutable,
    ReorderInput,
    ReorderList,
    ReplaceExpression,
    SetSelection,
    UpdateReferencePath,
    UpdateValue,
    UpdateValueType,
    UpdateVariable,
    dispatch,
    history_group_key,
)
from proctree.editor.exporter import export_process
from proctree.editor.importer import ContentImporter, import_process
from proctree.editor.operations import (
    add_executable,
    add_input_value,
    convert_value_to_function,
    convert_value_to_reference,
    delete_item,
    init_editor,
    move_executable,
    reorder_input,
    reorder_list,
    replace_expression,
    set_selection,
    update_reference_path,
    update_value,
    update_value_type,
    update_variable,
)
from proctree.editor.queries import (
    get_content,
    get_parameter_spec,
    get_reference_expression_info,
    get_selected_subtree,
    get_selection,
    is_in_selected_path,
)
from proctree.editor.settings import EditorSettings, ReferenceGuard
from proctree.editor.state import EditorState

__all__ = [
    "EditorSettings",
    "EditorState",
    "ReferenceGuard",
    "ContentImporter",
    "import_process",
    "export_process",
    "find_available_variables",
    "find_functions_matching",
    "refresh_availability",
    "get_content",
    "get_parameter_spec",
    "get_reference_expression_info",
    "get_selected_subtree",
    "get_selection",
    "is_in_selected_path",
    "add_executable",
    "add_input_value",
    "convert_value_to_function",
    "convert_value_to_reference",
    "delete_item",
    "init_editor",
    "move_executable",
    "reorder_input",
    "reorder_list",
    "replace_expression",
    "set_selection",
    "update_reference_path",
    "update_value",
    "update_value_type",
    "update_variable",
    "AddExecutable",
    "AddInputValue",
    "ConvertValueToFunction",
    "ConvertValueToReference",
    "DeleteItem",
    "EditorCommand",
    "MoveExecutable",
    "ReorderInput",
    "ReorderList",
    "ReplaceExpression",
    "SetSelection",
    "UpdateReferencePath",
    "UpdateValue",
    "UpdateValueType",
    "UpdateVariable",
    "dispatch",
    "history_group_key",
]
