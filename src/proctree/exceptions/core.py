"""
Exception classes for the process tree editing core.

This module defines specific exception types for the fatal conditions that can
occur while loading an engine specification, importing a configuration document,
or applying an editing operation. Validation problems that belong to a node are
not exceptions; they are recorded on the node (see proctree.validation.errors).
"""


class ProcTreeError(Exception):
    """Base exception for all proctree errors."""

    pass


class SpecificationError(ProcTreeError):
    """Raised when the engine specification is malformed or lacks a requested entry."""

    def __init__(self, category: str, name: str, reason: str = "is not declared"):
        """
        Initialize the exception.

        Params:
            category: Catalog that was searched (e.g. "action", "function", "process")
            name: The name that was looked up
            reason: Why the lookup failed
        """
        self.category = category
        self.name = name
        self.reason = reason
        super().__init__(f"Specification {category} '{name}' {reason}")


class TypeHierarchyError(SpecificationError):
    """Raised when the declared type hierarchy cannot be turned into a type system."""

    def __init__(self, type_id: str, reason: str):
        """
        Initialize the exception.

        Params:
            type_id: The type at which the problem was found
            reason: Description of the problem
        """
        self.type_id = type_id
        super().__init__("type", type_id, reason)


class UndeclaredTypeError(TypeHierarchyError):
    """Raised when a type names a supertype that the catalog does not declare."""

    def __init__(self, type_id: str, supertype_id: str):
        """
        Initialize the exception.

        Params:
            type_id: The declaring type
            supertype_id: The missing supertype
        """
        self.supertype_id = supertype_id
        super().__init__(type_id, f"declares unknown supertype '{supertype_id}'")


class TypeHierarchyCycleError(TypeHierarchyError):
    """Raised when a type is found among its own descendants."""

    def __init__(self, type_id: str, cycle: list[str]):
        """
        Initialize the exception.

        Params:
            type_id: The type that is its own descendant
            cycle: Types visited when the cycle was detected
        """
        self.cycle = cycle
        super().__init__(type_id, f"is its own descendant via {' -> '.join(cycle)}")


class ConfigurationDocumentError(ProcTreeError):
    """Raised when a configuration document cannot be mapped onto the specification."""

    def __init__(self, message: str, location: str | None = None):
        """
        Initialize the exception.

        Params:
            message: Description of the mapping failure
            location: Optional human readable location inside the document
        """
        self.location = location
        full_message = f"{message} (at {location})" if location else message
        super().__init__(full_message)


class ContractViolationError(ProcTreeError):
    """Base exception for editing operations invoked on a state that breaks their contract."""

    pass


class ContentNotFoundError(ContractViolationError):
    """Raised when a content key does not exist in the store."""

    def __init__(self, key: str):
        """
        Initialize the exception.

        Params:
            key: The missing content key
        """
        self.key = key
        super().__init__(f"Content '{key}' does not exist")


class ContentKindError(ContractViolationError):
    """Raised when content exists but is not of the kind an operation requires."""

    def __init__(self, key: str, actual: str, expected: list[str]):
        """
        Initialize the exception.

        Params:
            key: The content key
            actual: The kind that was found
            expected: The kinds that would have been accepted
        """
        self.key = key
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Content '{key}' is of kind '{actual}', expected one of: {', '.join(expected)}"
        )


class MultiplicityError(ContractViolationError):
    """Raised when an operation would break an argument's multiplicity contract."""

    def __init__(self, key: str, reason: str = "does not accept multiple values"):
        """
        Initialize the exception.

        Params:
            key: The argument key
            reason: What was attempted
        """
        self.key = key
        super().__init__(f"Argument '{key}' {reason}")


class ReorderError(ContractViolationError):
    """Raised when a reorder targets something that is not an ordered list or is out of range."""

    def __init__(self, key: str, reason: str):
        """
        Initialize the exception.

        Params:
            key: The list content key
            reason: Why the reorder was rejected
        """
        self.key = key
        super().__init__(f"Cannot reorder '{key}': {reason}")


class InvalidMoveError(ContractViolationError):
    """Raised when an executable cannot be moved to the requested block."""

    def __init__(self, key: str, target_key: str, reason: str):
        """
        Initialize the exception.

        Params:
            key: The executable being moved
            target_key: The requested destination block
            reason: Why the move was rejected
        """
        self.key = key
        self.target_key = target_key
        super().__init__(f"Cannot move '{key}' into '{target_key}': {reason}")


class ReferencePathError(ContractViolationError):
    """Raised when a property path cannot be walked from a variable's type."""

    def __init__(self, path: list[str], type_union: tuple[str, ...], reason: str):
        """
        Initialize the exception.

        Params:
            path: The property path
            type_union: The type at which resolution failed
            reason: Why the segment could not be resolved
        """
        self.path = path
        self.type_union = type_union
        super().__init__(
            f"Failed to resolve path '{'.'.join(path)}' for type [{', '.join(type_union)}]: {reason}"
        )
