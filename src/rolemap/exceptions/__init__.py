"""
Custom exceptions for the rolemap system.

None of these derive from ValueError, so that they propagate unchanged out of
Pydantic validators instead of being folded into a ValidationError.
"""


class RoleMapError(Exception):
    """
    Base exception for the rolemap system.
    All custom exceptions in the system should inherit from this.
    """


class SchemaError(RoleMapError):
    """Raised when constructing or editing the mapping type hierarchy fails."""


class SealedTypeError(SchemaError):
    """
    Raised when changing `levels` or `data_type` of a mapping type that already
    has subtypes. The type's values stay as they were.
    """


class NonMonotonicError(SchemaError):
    """
    Raised when a local value would move against its monotonic direction:
    levels may only grow, data types may only narrow.
    """


class UnknownTypeError(SchemaError):
    """Raised when a mapping type or data type reference cannot be resolved."""


class DuplicateTypeError(SchemaError):
    """Raised when defining a type whose identifier is already taken."""


class ConcreteTypeError(SchemaError):
    """Raised in strict mode when a concrete mapping type has no effective levels."""


class AbstractTypeError(SchemaError):
    """Raised when creating a mapping instance of an abstract mapping type."""


class DomainError(RoleMapError):
    """Raised when a value lies outside its closed vocabulary."""


class RequiredFieldError(RoleMapError):
    """Raised when a required field is missing or empty."""
