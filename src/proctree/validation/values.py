"""
Literal value validation.

Each type ID maps to an ordered chain of validators. A chain stops at its first
validator that reports a problem, because later validators assume the earlier
ones passed (a range check only makes sense on a number). A literal typed with a
union is accepted as soon as one member type's chain passes.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

from proctree.core.types import TypeId, TypeUnion, WellKnownType
from proctree.specification.models import EngineSpec, TypeSpec
from proctree.validation.errors import ValidationError, invalid_value, no_literal_form

INTEGER_PATTERN = re.compile(r"[+-]?\d+")
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

BUILTIN_RANGES: dict[str, tuple[float, float]] = {
    WellKnownType.INT.value: (-(2**31), 2**31 - 1),
    WellKnownType.LONG.value: (-(2**63), 2**63 - 1),
}

BOOLEAN_VALUES = ("true", "false")


class Validator(ABC):
    """Abstract base class for one link of a validation chain."""

    @abstractmethod
    def validate(self, value: str) -> list[ValidationError]:
        """Check a literal, returning the problems found (empty when it passes)."""
        pass


class RequiredValidator(Validator):
    def __init__(self, type_id: TypeId):
        self.type_id = type_id

    def validate(self, value: str) -> list[ValidationError]:
        if not value:
            return [invalid_value("A value is required", self.type_id)]
        return []


class NoLiteralFormValidator(Validator):
    """Always fails; placed at the head of chains for compound types."""

    def __init__(self, type_id: TypeId):
        self.type_id = type_id

    def validate(self, value: str) -> list[ValidationError]:
        return [no_literal_form(self.type_id)]


class EnumValidator(Validator):
    def __init__(self, type_id: TypeId, values: Sequence[str]):
        self.type_id = type_id
        self.values = tuple(values)

    def validate(self, value: str) -> list[ValidationError]:
        if value not in self.values:
            return [
                invalid_value(f"Must be one of: {', '.join(self.values)}", self.type_id)
            ]
        return []


class FormatValidator(Validator):
    def __init__(self, type_id: TypeId, pattern: re.Pattern, description: str):
        self.type_id = type_id
        self.pattern = pattern
        self.description = description

    def validate(self, value: str) -> list[ValidationError]:
        if self.pattern.fullmatch(value) is None:
            return [invalid_value(f"Must be {self.description}", self.type_id)]
        return []


class RangeValidator(Validator):
    def __init__(
        self, type_id: TypeId, minimum: float | None, maximum: float | None
    ):
        self.type_id = type_id
        self.minimum = minimum
        self.maximum = maximum

    def validate(self, value: str) -> list[ValidationError]:
        number = int(value) if INTEGER_PATTERN.fullmatch(value) else float(value)
        if self.minimum is not None and number < self.minimum:
            return [invalid_value(f"Must be at least {self.minimum}", self.type_id)]
        if self.maximum is not None and number > self.maximum:
            return [invalid_value(f"Must be at most {self.maximum}", self.type_id)]
        return []


class PatternValidator(Validator):
    def __init__(self, type_id: TypeId, pattern: str):
        self.type_id = type_id
        self.pattern = re.compile(pattern)

    def validate(self, value: str) -> list[ValidationError]:
        if self.pattern.fullmatch(value) is None:
            return [
                invalid_value(
                    f"Must match regular expression {self.pattern.pattern}", self.type_id
                )
            ]
        return []


def build_validator_chain(type_id: TypeId, type_spec: TypeSpec | None) -> list[Validator]:
    """
    Build the validator chain for one type, excluding the required check.

    Params:
        type_id: The type to validate against
        type_spec: Its declaration; None for types the catalog does not declare,
            which are validated like plain strings

    Returns:
        Validators in the order they must run
    """
    if type_spec is not None and not type_spec.has_literal_form:
        return [NoLiteralFormValidator(type_id)]

    chain: list[Validator] = []
    values = type_spec.values if type_spec is not None else ()
    if not values and type_id == WellKnownType.BOOLEAN.value:
        values = BOOLEAN_VALUES
    if values:
        chain.append(EnumValidator(type_id, values))

    numeric_range: tuple[float | None, float | None] = (None, None)
    if type_id in (WellKnownType.INT.value, WellKnownType.LONG.value):
        chain.append(FormatValidator(type_id, INTEGER_PATTERN, "a whole number"))
        numeric_range = BUILTIN_RANGES[type_id]
    elif type_id in (WellKnownType.FLOAT.value, WellKnownType.DOUBLE.value):
        chain.append(FormatValidator(type_id, DECIMAL_PATTERN, "a decimal number"))

    if type_spec is not None and (
        type_spec.minimum is not None or type_spec.maximum is not None
    ):
        numeric_range = (type_spec.minimum, type_spec.maximum)
        if not any(isinstance(validator, FormatValidator) for validator in chain):
            chain.append(FormatValidator(type_id, DECIMAL_PATTERN, "a number"))
    if numeric_range != (None, None):
        chain.append(RangeValidator(type_id, *numeric_range))

    if type_spec is not None and type_spec.pattern:
        chain.append(PatternValidator(type_id, type_spec.pattern))
    return chain


def _run_chain(value: str, chain: list[Validator]) -> list[ValidationError]:
    for validator in chain:
        errors = validator.validate(value)
        if errors:
            return errors
    return []


def validate_value(
    value: str, type_union: TypeUnion, engine_spec: EngineSpec, required: bool = True
) -> list[ValidationError]:
    """
    Validate a literal against every member of its type.

    Params:
        value: The literal text
        type_union: The type the literal is interpreted as
        engine_spec: Catalog holding the type declarations
        required: Whether an empty literal is an error; an empty optional literal
            is accepted unless the type has no literal form at all

    Returns:
        Empty list if any member type accepts the literal, otherwise the errors
        reported by every member's chain
    """
    collected: list[ValidationError] = []
    for type_id in type_union:
        type_spec = engine_spec.types.get(type_id)
        chain = build_validator_chain(type_id, type_spec)
        has_literal_form = not (chain and isinstance(chain[0], NoLiteralFormValidator))
        if has_literal_form:
            if not value and not required:
                return []
            chain.insert(0, RequiredValidator(type_id))
        errors = _run_chain(value, chain)
        if not errors:
            return []
        collected.extend(errors)
    return collected
