"""
Core type definitions for the process tree editing core.

This module contains fundamental type aliases and well-known identifiers used
throughout the package for type safety and consistency.
"""

from enum import Enum
from typing import Any

TypeId = str

# Sorted, duplicate-free tuple of type IDs meaning "is at least one of these types"
TypeUnion = tuple[TypeId, ...]

ContentKey = str

ConfigDict = dict[str, Any]

VOID_TYPE: TypeUnion = ()

PROCESS_RETURN_PROP = "return"

CONDITIONAL_CONDITION_PROP = "condition"


class WellKnownType(Enum):
    """Type IDs with built-in meaning for defaulting and literal validation."""

    OBJECT = "object"
    STRING = "string"
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"


class MetadataFlag:
    """Keys recognised in the free-form metadata of parameter and callable specs."""

    # Set on an input whose type narrows the output type of its owning callable
    INFLUENCES_RETURN_TYPE = "INFLUENCES_RETURN_TYPE"
    CATEGORY = "CATEGORY"
