"""
Configuration document models.

This package provides the pydantic models for the serialized process tree that
is imported into, and exported out of, the editing core.
"""

from proctree.config.models import (
    ActionConfig,
    BlockConfig,
    ConditionalConfig,
    ConfigModel,
    ExecutableConfig,
    ExpressionConfig,
    FunctionConfig,
    ProcessConfig,
    ReferenceConfig,
    ValueConfig,
    VariableConfig,
    dump_config,
    load_process_config,
)

__all__ = [
    "ActionConfig",
    "BlockConfig",
    "ConditionalConfig",
    "ConfigModel",
    "ExecutableConfig",
    "ExpressionConfig",
    "FunctionConfig",
    "ProcessConfig",
    "ReferenceConfig",
    "ValueConfig",
    "VariableConfig",
    "dump_config",
    "load_process_config",
]
