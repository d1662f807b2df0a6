"""
Configuration document models.

A configuration document is the serialized form of one process tree. It is the
only boundary between the editing core and storage: documents are imported into
a content store and exported back out of it. Every node carries a
``differentiator`` tag so that polymorphic slots (executables, expressions) can
be decoded as pydantic discriminated unions.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConfigModel(BaseModel):
    """Base class for configuration document nodes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValueConfig(ConfigModel):
    """A literal value with the type it should be interpreted as."""

    differentiator: Literal["VALUE"] = "VALUE"
    value: str = ""
    type_id: str | None = None


class FunctionConfig(ConfigModel):
    """A function call whose result flows into the enclosing argument."""

    differentiator: Literal["FUNCTION"] = "FUNCTION"
    name: str
    arguments: dict[str, list["ExpressionConfig"]] = Field(default_factory=dict)


class ReferenceConfig(ConfigModel):
    """
    A reference to a variable by the position of the action producing it.

    Empty coordinates address the process itself; the first path segment then
    names the process input being referenced.
    """

    differentiator: Literal["REFERENCE"] = "REFERENCE"
    coordinates: list[int] = Field(default_factory=list)
    path: list[str] = Field(default_factory=list)


ExpressionConfig = Annotated[
    Union[ValueConfig, FunctionConfig, ReferenceConfig],
    Field(discriminator="differentiator"),
]


class VariableConfig(ConfigModel):
    """User-facing metadata of an action's output variable."""

    differentiator: Literal["VARIABLE"] = "VARIABLE"
    title: str | None = None
    description: str | None = None


class ActionConfig(ConfigModel):
    differentiator: Literal["ACTION"] = "ACTION"
    name: str
    arguments: dict[str, list[ExpressionConfig]] = Field(default_factory=dict)
    output: VariableConfig | None = None


class BlockConfig(ConfigModel):
    differentiator: Literal["BLOCK"] = "BLOCK"
    executables: list["ExecutableConfig"] = Field(default_factory=list)


class ConditionalConfig(ConfigModel):
    """An if/else statement: a boolean condition plus then and else blocks."""

    differentiator: Literal["CONTROL_STATEMENT"] = "CONTROL_STATEMENT"
    control_type: Literal["CONDITIONAL"] = "CONDITIONAL"
    condition: ExpressionConfig = Field(default_factory=ValueConfig)
    blocks: list[BlockConfig] = Field(
        default_factory=lambda: [BlockConfig(), BlockConfig()],
        min_length=2,
        max_length=2,
    )


ExecutableConfig = Annotated[
    Union[ActionConfig, ConditionalConfig],
    Field(discriminator="differentiator"),
]


class ProcessConfig(ConfigModel):
    """The root of a configuration document."""

    differentiator: Literal["PROCESS"] = "PROCESS"
    name: str
    root_block: BlockConfig = Field(default_factory=BlockConfig)
    return_expression: list[ExpressionConfig] | None = None
    external_id: str | None = None


FunctionConfig.model_rebuild()
BlockConfig.model_rebuild()
ConditionalConfig.model_rebuild()
ProcessConfig.model_rebuild()


def load_process_config(data: dict[str, Any] | str | bytes) -> ProcessConfig:
    """
    Load a process configuration document.

    Params:
        data: Parsed mapping or raw JSON document using camelCase keys

    Returns:
        Validated ProcessConfig
    """
    if isinstance(data, (str, bytes)):
        return ProcessConfig.model_validate_json(data)
    return ProcessConfig.model_validate(data)


def dump_config(config: ConfigModel) -> dict[str, Any]:
    """Serialize any document node to a camelCase dict without unset optionals."""
    return config.model_dump(by_alias=True, exclude_none=True)
