"""
Engine specification models.

The engine specification is the read-only catalog supplied once per editing
session: the declared types and their hierarchy, plus the processes, actions and
functions a process tree may be assembled from. Models are pydantic so that the
catalog can be loaded straight from dicts or JSON using camelCase keys.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from proctree.core.types import (
    CONDITIONAL_CONDITION_PROP,
    MetadataFlag,
    TypeUnion,
    WellKnownType,
)
from proctree.exceptions import SpecificationError


def _coerce_type_union(value: Any) -> Any:
    """Accept a single type ID or any sequence of IDs and return the canonical union."""
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(sorted(set(value)))
    return value


TypeUnionField = Annotated[TypeUnion, BeforeValidator(_coerce_type_union)]


class SpecModel(BaseModel):
    """Base class for specification models."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class TypePropertySpec(SpecModel):
    """A named property of a compound type."""

    type: TypeUnionField
    multi: bool = False
    optional: bool = False


class TypeSpec(SpecModel):
    """
    A declared type.

    Params:
        supertypes: IDs of the types this type directly inherits from
        values: Fixed enumeration of allowed literals, if any
        properties: Named properties navigable by reference paths
        value_type: Explicit literal-form flag; derived from properties when unset
        pattern: Regular expression a literal must fully match
        minimum: Inclusive lower bound for numeric literals
        maximum: Inclusive upper bound for numeric literals
    """

    supertypes: tuple[str, ...] = ()
    values: tuple[str, ...] = ()
    properties: dict[str, TypePropertySpec] = Field(default_factory=dict)
    value_type: bool | None = None
    pattern: str | None = None
    minimum: float | None = None
    maximum: float | None = None

    @property
    def has_literal_form(self) -> bool:
        """Whether values of this type can be typed in as literals."""
        if self.value_type is not None:
            return self.value_type
        return not self.properties


class ExpressionSpec(SpecModel):
    """Type and multiplicity of an expression slot or callable output."""

    type: TypeUnionField
    multi: bool = False


class InputSpec(ExpressionSpec):
    """A named input parameter of a process, action or function."""

    required: bool = True
    title: str | None = None
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def influences_return_type(self) -> bool:
        """Whether this input's type narrows the owning callable's output type."""
        return MetadataFlag.INFLUENCES_RETURN_TYPE in self.metadata


class VariableSpec(ExpressionSpec):
    """An initial variable made available by a process."""

    optional: bool = False
    title: str | None = None
    description: str | None = None


class CallableSpec(SpecModel):
    """An action or function: named inputs plus an optional output."""

    inputs: dict[str, InputSpec] = Field(default_factory=dict)
    output: ExpressionSpec | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ProcessSpec(SpecModel):
    """A process: its initial variables and an optional return expression."""

    inputs: dict[str, VariableSpec] = Field(default_factory=dict)
    output: ExpressionSpec | None = None


class EngineSpec(SpecModel):
    """The complete catalog of types, processes, actions and functions."""

    types: dict[str, TypeSpec] = Field(default_factory=dict)
    processes: dict[str, ProcessSpec] = Field(default_factory=dict)
    actions: dict[str, CallableSpec] = Field(default_factory=dict)
    functions: dict[str, CallableSpec] = Field(default_factory=dict)

    @classmethod
    def load(cls, data: dict[str, Any] | str | bytes) -> "EngineSpec":
        """
        Load a specification from a dict or JSON text.

        Params:
            data: Parsed mapping or raw JSON document

        Returns:
            Validated EngineSpec instance
        """
        if isinstance(data, (str, bytes)):
            return cls.model_validate_json(data)
        return cls.model_validate(data)

    def get_process(self, name: str) -> ProcessSpec:
        """Look up a process spec, raising SpecificationError if undeclared."""
        if name not in self.processes:
            raise SpecificationError("process", name)
        return self.processes[name]

    def get_action(self, name: str) -> CallableSpec:
        """Look up an action spec, raising SpecificationError if undeclared."""
        if name not in self.actions:
            raise SpecificationError("action", name)
        return self.actions[name]

    def get_function(self, name: str) -> CallableSpec:
        """Look up a function spec, raising SpecificationError if undeclared."""
        if name not in self.functions:
            raise SpecificationError("function", name)
        return self.functions[name]


def conditional_control_spec(
    boolean_type_id: str = WellKnownType.BOOLEAN.value,
) -> CallableSpec:
    """
    Build the implicit spec of the conditional control statement.

    Params:
        boolean_type_id: Type ID required of the condition expression

    Returns:
        CallableSpec with a single, required, single-valued condition input
    """
    return CallableSpec(
        inputs={CONDITIONAL_CONDITION_PROP: InputSpec(type=(boolean_type_id,))}
    )
