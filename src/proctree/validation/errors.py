"""
Validation error records.

Validation problems are data attached to the node they concern, not exceptions.
Every editing operation clears and re-adds the records it is responsible for, so
the helpers here mutate a node's ``errors`` list in place.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from attrs import field, frozen

from proctree.core.types import ContentKey, TypeUnion


class ErrorCode(Enum):
    MISSING_OR_INVALID_VALUE = "MISSING_OR_INVALID_VALUE"
    NO_LITERAL_FORM = "NO_LITERAL_FORM"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    UNCHECKED_REFERENCE = "UNCHECKED_REFERENCE"
    UNSATISFIED_INPUT_TYPE_MISMATCH = "UNSATISFIED_INPUT_TYPE_MISMATCH"


class ErrorLevel(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


@frozen
class ValidationError:
    """A problem recorded on a content node."""

    code: ErrorCode
    level: ErrorLevel
    message: str
    data: Mapping[str, Any] = field(factory=dict, hash=False)


def invalid_value(message: str, type_id: str) -> ValidationError:
    return ValidationError(
        ErrorCode.MISSING_OR_INVALID_VALUE,
        ErrorLevel.ERROR,
        message,
        {"type": type_id},
    )


def no_literal_form(type_id: str) -> ValidationError:
    return ValidationError(
        ErrorCode.NO_LITERAL_FORM,
        ErrorLevel.ERROR,
        f"Type '{type_id}' cannot be entered as a literal",
        {"type": type_id},
    )


def invalid_reference(
    variable_key: ContentKey, reference_key: ContentKey, reason: str = "unreachable"
) -> ValidationError:
    return ValidationError(
        ErrorCode.INVALID_REFERENCE,
        ErrorLevel.ERROR,
        f"Variable '{variable_key}' is {reason} from reference '{reference_key}'",
        {"variable": variable_key, "reference": reference_key, "reason": reason},
    )


def unchecked_reference(
    variable_key: ContentKey, reference_key: ContentKey
) -> ValidationError:
    return ValidationError(
        ErrorCode.UNCHECKED_REFERENCE,
        ErrorLevel.WARNING,
        f"Variable '{variable_key}' may not be set when reference '{reference_key}' is evaluated",
        {"variable": variable_key, "reference": reference_key},
    )


def unsatisfied_input_type_mismatch(
    argument_key: ContentKey, declared_type: TypeUnion, calculated_type: TypeUnion
) -> ValidationError:
    return ValidationError(
        ErrorCode.UNSATISFIED_INPUT_TYPE_MISMATCH,
        ErrorLevel.ERROR,
        f"Expression of type [{', '.join(calculated_type)}] does not satisfy "
        f"required type [{', '.join(declared_type)}]",
        {
            "argument": argument_key,
            "declaredType": list(declared_type),
            "calculatedType": list(calculated_type),
        },
    )


def _matches(error: ValidationError, codes: tuple[ErrorCode, ...], data: dict) -> bool:
    return error.code in codes and all(
        error.data.get(name) == value for name, value in data.items()
    )


def remove_errors(
    errors: list[ValidationError], *codes: ErrorCode, **data: Any
) -> None:
    """
    Drop every error with one of the given codes.

    Params:
        errors: A node's error list, modified in place
        *codes: Codes to drop
        **data: Only drop errors whose data carries these entries
    """
    errors[:] = [error for error in errors if not _matches(error, codes, data)]


def ensure_error(
    errors: list[ValidationError], error: ValidationError, *match_on: str
) -> None:
    """
    Record an error, replacing an earlier one of the same code.

    Params:
        errors: A node's error list, modified in place
        error: The error to record
        *match_on: Data entries that must also match for an error to be replaced
    """
    remove_errors(errors, error.code, **{name: error.data.get(name) for name in match_on})
    errors.append(error)


def has_blocking_errors(errors: list[ValidationError]) -> bool:
    return any(error.level is ErrorLevel.ERROR for error in errors)
