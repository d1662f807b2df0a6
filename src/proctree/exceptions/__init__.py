"""
Proctree exception classes.

This package provides all exception types used throughout the editing core
for consistent error handling and reporting.
"""

from proctree.exceptions.core import (
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

__all__ = [
    "ProcTreeError",
    "SpecificationError",
    "TypeHierarchyError",
    "UndeclaredTypeError",
    "TypeHierarchyCycleError",
    "ConfigurationDocumentError",
    "ContractViolationError",
    "ContentNotFoundError",
    "ContentKindError",
    "MultiplicityError",
    "ReorderError",
    "InvalidMoveError",
    "ReferencePathError",
]
