"""
ProcTree - An in-memory editing core for typed process trees

ProcTree keeps a key-indexed process tree type-correct and referentially valid
while it is edited, one atomic operation at a time.
"""

from importlib.metadata import version

from proctree.config import ProcessConfig, load_process_config
from proctree.editor import EditorSettings, EditorState, dispatch, export_process, init_editor
from proctree.specification import EngineSpec

__version__ = version("proctree")

__all__ = [
    "__version__",
    "EditorSettings",
    "EditorState",
    "EngineSpec",
    "ProcessConfig",
    "dispatch",
    "export_process",
    "init_editor",
    "load_process_config",
]
