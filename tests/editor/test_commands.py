"""
Tests for command records and dispatch.
"""

import pytest

from proctree.config import ValueConfig
from proctree.content import ContentType, Function, Reference, Value
from proctree.editor import (
    AddExecutable,
    AddInputValue,
    ConvertValueToFunction,
    ConvertValueToReference,
    DeleteItem,
    MoveExecutable,
    ReorderList,
    ReplaceExpression,
    SetSelection,
    UpdateReferencePath,
    UpdateValue,
    UpdateValueType,
    UpdateVariable,
    dispatch,
    export_process,
    history_group_key,
)

from helpers import argument_of, first_value, root_executables


class TestDispatch:
    """Tests for applying commands to an editor."""

    def test_selection(self, editor):
        setter = root_executables(editor)[0]
        assert dispatch(editor, SetSelection(setter.key)) is None
        assert editor.selection == setter.key

    def test_update_value(self, editor):
        value = first_value(editor, root_executables(editor)[1], "count")
        dispatch(editor, UpdateValue(value.key, "7"))
        assert value.value == "7"

    def test_update_value_type(self, editor):
        setter = root_executables(editor)[0]
        dispatch(editor, UpdateValueType(first_value(editor, setter, "value").key, "boolean"))
        assert setter.type == ("boolean",)

    def test_convert_to_function_returns_key(self, editor):
        value = first_value(editor, root_executables(editor)[0], "value")
        key = dispatch(editor, ConvertValueToFunction(value.key, "concat"))
        assert isinstance(editor.store.resolve(key), Function)

    def test_convert_to_reference(self, conditional_editor):
        fetch, _, log = root_executables(conditional_editor)
        value = first_value(conditional_editor, log, "level")
        key = dispatch(conditional_editor, ConvertValueToReference(value.key, fetch.variable_key, ["name"]))
        reference = conditional_editor.store.resolve(key, Reference)
        assert reference.path == ["name"]

    def test_update_reference_path(self, conditional_editor):
        log = root_executables(conditional_editor)[2]
        reference = first_value(conditional_editor, log, "message")
        dispatch(conditional_editor, UpdateReferencePath(reference.key, ["employer", "name"]))
        assert reference.path == ["employer", "name"]
        assert reference.optional

    def test_replace_expression(self, editor):
        value = first_value(editor, root_executables(editor)[0], "value")
        key = dispatch(editor, ReplaceExpression(value.key, ValueConfig(value="x", type_id="int")))
        assert editor.store.resolve(key, Value).type == ("int",)

    def test_structure_commands(self, editor):
        block_key = editor.store.root.root_block_key
        key = dispatch(editor, AddExecutable(block_key, ContentType.ACTION, "collect", 0))
        items = argument_of(editor, key, "items")
        added = dispatch(editor, AddInputValue(items.key))
        assert items.child_keys[-1] == added

        dispatch(editor, MoveExecutable(key, block_key, 2))
        assert root_executables(editor)[-1].key == key
        dispatch(editor, ReorderList(block_key, 2, 0))
        assert root_executables(editor)[0].key == key

        dispatch(editor, DeleteItem(key))
        assert key not in editor.store

    def test_update_variable(self, editor):
        setter = root_executables(editor)[0]
        dispatch(editor, UpdateVariable(setter.variable_key, title="Greeting"))
        exported = export_process(editor).root_block.executables[0]
        assert exported.output.title == "Greeting"

    def test_unknown_command(self, editor):
        with pytest.raises(TypeError):
            dispatch(editor, object())


class TestCommandRecords:
    """Tests for the command values themselves."""

    def test_paths_are_frozen(self):
        command = ConvertValueToReference("1", "2", ["a", "b"])
        assert command.path == ("a", "b")
        assert hash(command) == hash(ConvertValueToReference("1", "2", ("a", "b")))

    def test_history_grouping(self):
        assert history_group_key(UpdateValue("4", "a")) == history_group_key(UpdateValue("4", "ab"))
        assert history_group_key(UpdateValue("4", "a")) != history_group_key(UpdateValue("5", "a"))
        assert history_group_key(SetSelection("1")) == history_group_key(SetSelection("2"))
        assert history_group_key(DeleteItem("1")) is None
