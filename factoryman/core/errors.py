"""
Core error definitions for FactoryMan

Provides error codes and the exception hierarchy raised while declaring,
building and creating factory instances.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for the library."""

    # Declaration Errors
    DUPLICATE_KEY = "DUPLICATE_KEY"
    NULL_BAG = "NULL_BAG"

    # Materialization Errors
    NO_TARGET_TYPE = "NO_TARGET_TYPE"
    NO_DEFAULT_CONSTRUCTOR = "NO_DEFAULT_CONSTRUCTOR"
    UNKNOWN_PROPERTY = "UNKNOWN_PROPERTY"

    # Creation Errors
    NO_CREATION_STRATEGY = "NO_CREATION_STRATEGY"
    UNKNOWN_CREATE_METHOD = "UNKNOWN_CREATE_METHOD"

    # Registry and Definition Errors
    FACTORY_NOT_REGISTERED = "FACTORY_NOT_REGISTERED"
    INVALID_DEFINITION = "INVALID_DEFINITION"


class FactoryError(Exception):
    """Base exception for all factory errors."""

    code = None

    def __init__(self, message: str, details: Optional[Dict] = None, code: Optional[ErrorCode] = None):
        if code is not None:
            self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class DuplicateKeyError(FactoryError, KeyError):
    """Raised when the same property name is declared twice in one store."""
    code = ErrorCode.DUPLICATE_KEY


class NullBagError(FactoryError, ValueError):
    """Raised when a bulk declaration is given no bag at all."""
    code = ErrorCode.NULL_BAG


class NoTargetTypeError(FactoryError):
    """Raised when building from a factory that has no target type."""
    code = ErrorCode.NO_TARGET_TYPE


class NoDefaultConstructorError(FactoryError, TypeError):
    """Raised when the target type cannot be instantiated without arguments."""
    code = ErrorCode.NO_DEFAULT_CONSTRUCTOR


class UnknownPropertyError(FactoryError, AttributeError):
    """Raised when a resolved property has no writable field on the target."""
    code = ErrorCode.UNKNOWN_PROPERTY


class NoCreationStrategyError(FactoryError):
    """Raised when create() runs with no creation strategy configured."""
    code = ErrorCode.NO_CREATION_STRATEGY


class UnknownCreateMethodError(FactoryError, AttributeError):
    """Raised when a named create method is missing or not callable."""
    code = ErrorCode.UNKNOWN_CREATE_METHOD


class FactoryNotRegisteredError(FactoryError, KeyError):
    """Raised when looking up a factory name the registry does not know."""
    code = ErrorCode.FACTORY_NOT_REGISTERED


class DefinitionValidationError(FactoryError, ValueError):
    """Raised when YAML factory definitions fail validation."""
    code = ErrorCode.INVALID_DEFINITION
