"""
Validation and propagation engine.

This package provides the per-node error records, literal validation, reference
reachability classification and upward type propagation that keep a process tree
consistent after every edit.
"""

from proctree.validation.context import TreeContext
from proctree.validation.errors import (
    ErrorCode,
    ErrorLevel,
    ValidationError,
    ensure_error,
    has_blocking_errors,
    invalid_reference,
    invalid_value,
    no_literal_form,
    remove_errors,
    unchecked_reference,
    unsatisfied_input_type_mismatch,
)
from proctree.validation.propagation import (
    evaluate_argument,
    evaluate_subtree,
    propagate_type_changes,
    refresh_reference,
)
from proctree.validation.references import (
    ExpressionInfo,
    ReferenceType,
    classify_reference,
    resolve_expression_info,
    resolve_reference_type,
    revalidate_reference,
    validate_reference,
)
from proctree.validation.values import build_validator_chain, validate_value

__all__ = [
    "TreeContext",
    "ErrorCode",
    "ErrorLevel",
    "ValidationError",
    "ensure_error",
    "has_blocking_errors",
    "invalid_reference",
    "invalid_value",
    "no_literal_form",
    "remove_errors",
    "unchecked_reference",
    "unsatisfied_input_type_mismatch",
    "evaluate_argument",
    "evaluate_subtree",
    "propagate_type_changes",
    "refresh_reference",
    "ExpressionInfo",
    "ReferenceType",
    "classify_reference",
    "resolve_expression_info",
    "resolve_reference_type",
    "revalidate_reference",
    "validate_reference",
    "build_validator_chain",
    "validate_value",
]
