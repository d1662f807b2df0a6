"""
Editor state.

The state of one editing session is an explicit object owned by the caller and
passed into every operation; there is no module-level session.
"""

from dataclasses import dataclass, field

from proctree.content.nodes import Reference
from proctree.content.store import ContentStore
from proctree.core.types import ContentKey
from proctree.editor.settings import EditorSettings
from proctree.specification.models import CallableSpec, EngineSpec, conditional_control_spec
from proctree.typesystem.system import TypeSystem


@dataclass
class EditorState:
    engine_spec: EngineSpec
    type_system: TypeSystem
    store: ContentStore
    settings: EditorSettings = field(default_factory=EditorSettings)
    selection: ContentKey = ""

    @property
    def conditional_spec(self) -> CallableSpec:
        return conditional_control_spec(self.settings.boolean_type_id)

    def is_reference_guarded(self, reference: Reference) -> bool:
        guard = self.settings.reference_guard
        return guard is not None and guard(self, reference)
