"""
Editor settings.

Settings collect the few choices the editing core leaves to its host: how keys
look, which type IDs carry built-in meaning, and how optionally-set references are
judged.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic.alias_generators import to_snake

from proctree.core.types import WellKnownType

if TYPE_CHECKING:
    from proctree.content.nodes import Reference
    from proctree.editor.state import EditorState

ReferenceGuard = Callable[["EditorState", "Reference"], bool]


@dataclass
class EditorSettings:
    """Configuration for one editing session."""

    key_prefix: str = ""
    object_type_id: str = WellKnownType.OBJECT.value
    string_type_id: str = WellKnownType.STRING.value
    boolean_type_id: str = WellKnownType.BOOLEAN.value
    check_hierarchy_cycles: bool = True
    # Decides whether an optionally-set reference is protected; unguarded by default
    reference_guard: ReferenceGuard | None = None

    @classmethod
    def from_dict(cls, config: dict[str, Any] | None = None) -> "EditorSettings":
        """Factory method to create settings from a dict with defaults; camelCase keys are accepted."""
        if config is None:
            config = {}
        return cls(**{to_snake(name): value for name, value in config.items()})
