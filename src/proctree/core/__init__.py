"""
Core proctree components.

This package provides the fundamental type aliases, well-known identifiers and
coordinate arithmetic shared by every other layer.
"""

from proctree.core.coordinates import (
    ROOT,
    Coordinates,
    coordinates_address_block,
    coordinates_equal,
    coordinates_nth_child,
    coordinates_parent,
    get_shared_ancestor,
    is_predecessor,
)
from proctree.core.types import (
    CONDITIONAL_CONDITION_PROP,
    PROCESS_RETURN_PROP,
    VOID_TYPE,
    ConfigDict,
    ContentKey,
    MetadataFlag,
    TypeId,
    TypeUnion,
    WellKnownType,
)

__all__ = [
    "ROOT",
    "Coordinates",
    "coordinates_address_block",
    "coordinates_equal",
    "coordinates_nth_child",
    "coordinates_parent",
    "get_shared_ancestor",
    "is_predecessor",
    "CONDITIONAL_CONDITION_PROP",
    "PROCESS_RETURN_PROP",
    "VOID_TYPE",
    "ConfigDict",
    "ContentKey",
    "MetadataFlag",
    "TypeId",
    "TypeUnion",
    "WellKnownType",
]
