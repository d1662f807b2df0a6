"""
Content node variants.

Content nodes are the flattened form of a process tree. Every node is stored in a
ContentStore under a unique key and refers to its parent and children by key only,
never by object. The ``kind`` class attribute is the variant tag; traversal sites
dispatch on the concrete class with ``match`` rather than on virtual methods.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from attrs import frozen

from proctree.core.types import VOID_TYPE, ContentKey, TypeUnion

if TYPE_CHECKING:
    from proctree.validation.errors import ValidationError


class ContentType(Enum):
    PROCESS = "PROCESS"
    BLOCK = "BLOCK"
    CONTROL = "CONTROL"
    ACTION = "ACTION"
    FUNCTION = "FUNCTION"
    ARGUMENT = "ARGUMENT"
    VALUE = "VALUE"
    REFERENCE = "REFERENCE"
    VARIABLE = "VARIABLE"


class ControlType(Enum):
    CONDITIONAL = "CONDITIONAL"


@frozen
class AvailableVariable:
    """A variable that may be referenced from some position in the tree."""

    key: ContentKey
    # True when the producing action might not have run at that position
    conditional: bool = False


@dataclass(kw_only=True)
class Content:
    """Fields shared by every node in the store."""

    kind: ClassVar[ContentType]

    key: ContentKey
    parent_key: ContentKey | None = None
    errors: list["ValidationError"] = field(default_factory=list)


@dataclass(kw_only=True)
class Process(Content):
    """
    Root of the tree.

    Params:
        name: Process name in the engine specification
        type: Declared return type, or the void type when the process returns nothing
        input_variable_keys: Variables for the process inputs, in declaration order
        child_key_map: Named slots; currently only the return argument
        root_block_key: Key of the top-level block
        external_id: Opaque identifier carried through import and export
    """

    kind: ClassVar[ContentType] = ContentType.PROCESS

    name: str
    type: TypeUnion = VOID_TYPE
    multi: bool = False
    input_variable_keys: list[ContentKey] = field(default_factory=list)
    child_key_map: dict[str, ContentKey] = field(default_factory=dict)
    root_block_key: ContentKey | None = None
    external_id: str | None = None


@dataclass(kw_only=True)
class Block(Content):
    kind: ClassVar[ContentType] = ContentType.BLOCK

    child_keys: list[ContentKey] = field(default_factory=list)


@dataclass(kw_only=True)
class Control(Content):
    """A control statement; ``child_keys`` holds its branch blocks in order."""

    kind: ClassVar[ContentType] = ContentType.CONTROL

    control_type: ControlType = ControlType.CONDITIONAL
    child_keys: list[ContentKey] = field(default_factory=list)
    child_key_map: dict[str, ContentKey] = field(default_factory=dict)


@dataclass(kw_only=True)
class Action(Content):
    kind: ClassVar[ContentType] = ContentType.ACTION

    name: str
    type: TypeUnion = VOID_TYPE
    multi: bool = False
    optional: bool = False
    child_key_map: dict[str, ContentKey] = field(default_factory=dict)
    variable_key: ContentKey | None = None


@dataclass(kw_only=True)
class Function(Content):
    kind: ClassVar[ContentType] = ContentType.FUNCTION

    name: str
    type: TypeUnion = VOID_TYPE
    multi: bool = False
    optional: bool = False
    child_key_map: dict[str, ContentKey] = field(default_factory=dict)


@dataclass(kw_only=True)
class Argument(Content):
    """
    The slot through which a callable consumes expressions for one parameter.

    Params:
        name: Parameter name within the owning node's ``child_key_map``
        declared_type: Type required by the engine specification
        allowed_type: Declared type expanded with all descendants
        calculated_type: Union of the current children's types
        allow_multi: Whether more than one child expression is permitted
        required: Whether an empty literal is an error
        propagate_type_changes: Whether the calculated type flows into the owner
        child_keys: Ordered child expression keys
    """

    kind: ClassVar[ContentType] = ContentType.ARGUMENT

    name: str
    declared_type: TypeUnion = VOID_TYPE
    allowed_type: TypeUnion = VOID_TYPE
    calculated_type: TypeUnion = VOID_TYPE
    allow_multi: bool = False
    required: bool = True
    propagate_type_changes: bool = False
    child_keys: list[ContentKey] = field(default_factory=list)


@dataclass(kw_only=True)
class Value(Content):
    kind: ClassVar[ContentType] = ContentType.VALUE

    value: str = ""
    type: TypeUnion = VOID_TYPE
    multi: bool = False
    optional: bool = False
    available_function_ids: list[str] = field(default_factory=list)
    available_variables: list[AvailableVariable] = field(default_factory=list)


@dataclass(kw_only=True)
class Reference(Content):
    kind: ClassVar[ContentType] = ContentType.REFERENCE

    variable_key: ContentKey
    path: list[str] = field(default_factory=list)
    type: TypeUnion = VOID_TYPE
    multi: bool = False
    optional: bool = False


@dataclass(kw_only=True)
class Variable(Content):
    """
    A named binding produced by a process input or by an action's output.

    ``base_path`` is set for process inputs only and holds the input name; it is
    the implicit first path segment when such a variable is serialized.
    """

    kind: ClassVar[ContentType] = ContentType.VARIABLE

    type: TypeUnion = VOID_TYPE
    multi: bool = False
    optional: bool = False
    title: str | None = None
    description: str | None = None
    initial: bool = False
    base_path: str | None = None
    reference_keys: list[ContentKey] = field(default_factory=list)


Executable = Action | Control
Expression = Value | Function | Reference
