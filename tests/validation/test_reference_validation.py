"""
Tests for reference reachability and path resolution.

Uses the conditional example:

    [0]       fetch-person         -> person variable
    [1]       conditional
    [1, 0, 0]   increment-counter  -> int variable (then-branch only)
    [2]       log(message=<ref [0].name>)
"""

import pytest

from proctree.content import Block, ContentType, Reference, Variable
from proctree.editor import (
    EditorSettings,
    add_executable,
    convert_value_to_reference,
    init_editor,
)
from proctree.exceptions import ReferencePathError
from proctree.validation import (
    ErrorCode,
    ReferenceType,
    classify_reference,
    resolve_expression_info,
    resolve_reference_type,
    validate_reference,
)

from helpers import argument_of, first_value, only_child, root_executables


@pytest.fixture
def layout(conditional_editor):
    """The interesting nodes of the conditional example, by role."""
    store = conditional_editor.store
    fetch, conditional, log = root_executables(conditional_editor)
    then_block = store.resolve(conditional.child_keys[0], Block)
    else_block = store.resolve(conditional.child_keys[1], Block)
    counter = store.resolve(then_block.child_keys[0])
    return {
        "fetch": fetch,
        "conditional": conditional,
        "log": log,
        "then": then_block,
        "else": else_block,
        "counter": counter,
        "person": store.resolve(fetch.variable_key, Variable),
        "count": store.resolve(counter.variable_key, Variable),
    }


class TestReachability:
    """Tests for classifying a variable against a position of use."""

    def test_earlier_sibling_is_valid(self, conditional_editor, layout):
        store = conditional_editor.store
        assert resolve_reference_type(store, layout["person"].key, layout["log"].key) is ReferenceType.VALID

    def test_later_sibling_is_unreachable(self, conditional_editor, layout):
        store = conditional_editor.store
        assert (
            resolve_reference_type(store, layout["count"].key, layout["fetch"].key)
            is ReferenceType.UNREACHABLE
        )

    def test_own_output_is_unreachable(self, conditional_editor, layout):
        store = conditional_editor.store
        assert (
            resolve_reference_type(store, layout["person"].key, layout["fetch"].key)
            is ReferenceType.UNREACHABLE
        )

    def test_branch_output_after_conditional_is_optional(self, conditional_editor, layout):
        store = conditional_editor.store
        assert (
            resolve_reference_type(store, layout["count"].key, layout["log"].key)
            is ReferenceType.OPTIONAL
        )

    def test_condition_cannot_see_its_branches(self, conditional_editor, layout):
        store = conditional_editor.store
        condition = argument_of(conditional_editor, layout["conditional"].key, "condition")
        assert (
            resolve_reference_type(store, layout["count"].key, condition.key)
            is ReferenceType.UNREACHABLE
        )

    def test_outer_variable_visible_inside_branch(self, conditional_editor, layout):
        store = conditional_editor.store
        assert (
            resolve_reference_type(store, layout["person"].key, layout["counter"].key)
            is ReferenceType.VALID
        )

    def test_sibling_branch_is_unreachable(self, conditional_editor, layout):
        """Test the else-branch cannot see what the then-branch produced."""
        store = conditional_editor.store
        key = add_executable(conditional_editor, layout["else"].key, ContentType.ACTION, "log")
        assert resolve_reference_type(store, layout["count"].key, key) is ReferenceType.UNREACHABLE

    def test_process_inputs_always_valid(self, conditional_editor, layout):
        store = conditional_editor.store
        for variable_key in store.root.input_variable_keys:
            for content in (layout["fetch"], layout["counter"], layout["log"]):
                assert resolve_reference_type(store, variable_key, content.key) is ReferenceType.VALID

    @pytest.mark.parametrize(
        "variable, location, expected",
        [
            ((), (1,), ReferenceType.VALID),
            ((0,), (1,), ReferenceType.VALID),
            ((0,), (1, 0, 0), ReferenceType.VALID),
            ((1, 0, 0), (2,), ReferenceType.OPTIONAL),
            ((1,), (0,), ReferenceType.UNREACHABLE),
            ((0,), (0,), ReferenceType.UNREACHABLE),
            ((1, 0, 0), (1,), ReferenceType.UNREACHABLE),
            ((1, 1, 0), (1, 0, 0), ReferenceType.UNREACHABLE),
        ],
    )
    def test_classify_by_coordinates(self, variable, location, expected):
        assert classify_reference(variable, location) is expected


class TestExpressionInfo:
    """Tests for walking property paths."""

    def test_empty_path(self, layout, engine_spec):
        info = resolve_expression_info(layout["person"], [], engine_spec)
        assert info.type == ("person",)
        assert not info.multi

    def test_property_path(self, layout, engine_spec):
        info = resolve_expression_info(layout["person"], ["name"], engine_spec)
        assert info.type == ("string",)
        assert not info.optional

    def test_flags_accumulate(self, layout, engine_spec):
        """Test multi and optional carry over from every segment."""
        info = resolve_expression_info(layout["person"], ["employer", "employees", "name"], engine_spec)
        assert info.type == ("string",)
        assert info.multi
        assert info.optional

    def test_undeclared_property(self, layout, engine_spec):
        with pytest.raises(ReferencePathError) as exc_info:
            resolve_expression_info(layout["person"], ["salary"], engine_spec)
        assert exc_info.value.path == ["salary"]

    def test_property_of_literal_type(self, layout, engine_spec):
        with pytest.raises(ReferencePathError):
            resolve_expression_info(layout["person"], ["name", "length"], engine_spec)


class TestValidateReference:
    """Tests for the errors recorded on references."""

    def test_imported_reference_is_clean(self, conditional_editor, layout):
        reference = first_value(conditional_editor, layout["log"], "message")
        assert isinstance(reference, Reference)
        assert reference.type == ("string",)
        assert reference.errors == []
        assert reference.key in layout["person"].reference_keys

    def test_optional_variable_is_unchecked(self, conditional_editor, layout):
        value = first_value(conditional_editor, layout["log"], "level")
        key = convert_value_to_reference(conditional_editor, value.key, layout["count"].key)
        reference = conditional_editor.store.resolve(key, Reference)
        assert [error.code for error in reference.errors] == [ErrorCode.UNCHECKED_REFERENCE]

    def test_optional_property_is_unchecked(self, conditional_editor, layout):
        value = first_value(conditional_editor, layout["log"], "level")
        key = convert_value_to_reference(conditional_editor, value.key, layout["person"].key, ["age"])
        reference = conditional_editor.store.resolve(key, Reference)
        assert reference.optional
        assert [error.code for error in reference.errors] == [ErrorCode.UNCHECKED_REFERENCE]

    def test_unreachable_reference(self, conditional_editor, layout):
        value = first_value(conditional_editor, layout["fetch"], "id")
        key = convert_value_to_reference(conditional_editor, value.key, layout["count"].key)
        errors = conditional_editor.store.resolve(key).errors
        assert [error.code for error in errors] == [ErrorCode.INVALID_REFERENCE]
        assert errors[0].data["variable"] == layout["count"].key

    def test_guard_suppresses_warning(self, engine_spec, conditional_config):
        """Test a host-supplied guard can vouch for optionally-set variables."""
        state = init_editor(
            conditional_config,
            engine_spec,
            EditorSettings(reference_guard=lambda state, reference: True),
        )
        fetch, conditional, log = root_executables(state)
        then_block = state.store.resolve(conditional.child_keys[0], Block)
        counter = state.store.resolve(then_block.child_keys[0])
        value = first_value(state, log, "level")
        key = convert_value_to_reference(state, value.key, counter.variable_key)
        assert state.store.resolve(key).errors == []

    def test_guard_does_not_excuse_unreachable(self, engine_spec, conditional_config):
        state = init_editor(
            conditional_config,
            engine_spec,
            EditorSettings(reference_guard=lambda state, reference: True),
        )
        fetch, conditional, log = root_executables(state)
        then_block = state.store.resolve(conditional.child_keys[0], Block)
        counter = state.store.resolve(then_block.child_keys[0])
        value = first_value(state, fetch, "id")
        key = convert_value_to_reference(state, value.key, counter.variable_key)
        assert [error.code for error in state.store.resolve(key).errors] == [
            ErrorCode.INVALID_REFERENCE
        ]

    def test_validate_reference_is_pure(self, conditional_editor, layout):
        reference = only_child(conditional_editor, argument_of(conditional_editor, layout["log"].key, "message"))
        before = list(reference.errors)
        assert validate_reference(conditional_editor, reference.key) == []
        assert reference.errors == before
