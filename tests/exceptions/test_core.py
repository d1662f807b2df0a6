"""
Tests for the exception hierarchy and message formatting.

Fatal conditions are exceptions; recoverable problems are recorded on nodes. These
tests pin down which exceptions count as contract violations and what they report.
"""

import pytest

from proctree.exceptions import (
    ConfigurationDocumentError,
    ContentKindError,
    ContentNotFoundError,
    ContractViolationError,
    InvalidMoveError,
    MultiplicityError,
    ProcTreeError,
    ReferencePathError,
    ReorderError,
    SpecificationError,
    TypeHierarchyCycleError,
    TypeHierarchyError,
    UndeclaredTypeError,
)


class TestHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "error",
        [
            ContentNotFoundError("1"),
            ContentKindError("1", "VALUE", ["BLOCK"]),
            MultiplicityError("1"),
            ReorderError("1", "out of range"),
            InvalidMoveError("1", "2", "cycle"),
            ReferencePathError(["a"], ("string",), "not declared"),
        ],
    )
    def test_contract_violations(self, error):
        assert isinstance(error, ContractViolationError)
        assert isinstance(error, ProcTreeError)

    def test_hierarchy_errors_are_specification_errors(self):
        assert isinstance(UndeclaredTypeError("a", "b"), TypeHierarchyError)
        assert isinstance(TypeHierarchyCycleError("a", ["a", "a"]), SpecificationError)

    def test_document_errors_are_not_contract_violations(self):
        assert not isinstance(ConfigurationDocumentError("bad"), ContractViolationError)


class TestMessages:
    """Tests for the human readable messages."""

    def test_specification_error(self):
        error = SpecificationError("function", "frobnicate")
        assert str(error) == "Specification function 'frobnicate' is not declared"

    def test_undeclared_type(self):
        error = UndeclaredTypeError("int", "number")
        assert str(error) == "Specification type 'int' declares unknown supertype 'number'"

    def test_cycle(self):
        error = TypeHierarchyCycleError("a", ["a", "b", "a"])
        assert "a -> b -> a" in str(error)

    def test_document_error_location(self):
        assert str(ConfigurationDocumentError("broken", "action 'log'")) == "broken (at action 'log')"
        assert str(ConfigurationDocumentError("broken")) == "broken"

    def test_content_kind_error(self):
        error = ContentKindError("7", "VALUE", ["BLOCK", "ARGUMENT"])
        assert str(error) == "Content '7' is of kind 'VALUE', expected one of: BLOCK, ARGUMENT"

    def test_reference_path_error(self):
        error = ReferencePathError(["employer", "ceo"], ("company",), "property 'ceo' is not declared")
        assert "employer.ceo" in str(error)
        assert "[company]" in str(error)
