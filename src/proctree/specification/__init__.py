"""
Engine specification models.

This package provides the pydantic models describing the read-only catalog of
types and callables that a process tree is validated against.
"""

from proctree.specification.models import (
    CallableSpec,
    EngineSpec,
    ExpressionSpec,
    InputSpec,
    ProcessSpec,
    TypePropertySpec,
    TypeSpec,
    VariableSpec,
    conditional_control_spec,
)

__all__ = [
    "CallableSpec",
    "EngineSpec",
    "ExpressionSpec",
    "InputSpec",
    "ProcessSpec",
    "TypePropertySpec",
    "TypeSpec",
    "VariableSpec",
    "conditional_control_spec",
]
