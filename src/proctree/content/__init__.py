"""
Content store.

This package provides the node variants of a flattened process tree, the arena
that owns them, and the coordinate lookups over stored content.
"""

from proctree.content.coordinates import find_coordinates, find_executable
from proctree.content.nodes import (
    Action,
    Argument,
    AvailableVariable,
    Block,
    Content,
    ContentType,
    Control,
    ControlType,
    Executable,
    Expression,
    Function,
    Process,
    Reference,
    Value,
    Variable,
)
from proctree.content.store import ContentStore, child_keys_of

__all__ = [
    "Action",
    "Argument",
    "AvailableVariable",
    "Block",
    "Content",
    "ContentStore",
    "ContentType",
    "Control",
    "ControlType",
    "Executable",
    "Expression",
    "Function",
    "Process",
    "Reference",
    "Value",
    "Variable",
    "child_keys_of",
    "find_coordinates",
    "find_executable",
]
