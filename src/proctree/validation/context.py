"""
What validation needs to see of the editor.

Validation runs against the live content store together with the engine
specification it was built from. The editor state satisfies this protocol; tests
may supply any object with the same attributes.
"""

from typing import Protocol

from proctree.content.nodes import Reference
from proctree.content.store import ContentStore
from proctree.specification.models import EngineSpec
from proctree.typesystem.system import TypeSystem


class TreeContext(Protocol):
    engine_spec: EngineSpec
    type_system: TypeSystem
    store: ContentStore

    def is_reference_guarded(self, reference: Reference) -> bool:
        """Whether an optionally-set reference is protected by a guard."""
        ...
