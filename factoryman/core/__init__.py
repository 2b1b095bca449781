"""
Core package: error taxonomy and sentinels.
"""

from .errors import (
    ErrorCode, FactoryError, DuplicateKeyError, NullBagError, NoTargetTypeError,
    NoDefaultConstructorError, UnknownPropertyError, NoCreationStrategyError,
    UnknownCreateMethodError, FactoryNotRegisteredError, DefinitionValidationError
)
from .sentinels import MISSING, NULL, is_function_value

__all__ = [
    'ErrorCode',
    'FactoryError',
    'DuplicateKeyError',
    'NullBagError',
    'NoTargetTypeError',
    'NoDefaultConstructorError',
    'UnknownPropertyError',
    'NoCreationStrategyError',
    'UnknownCreateMethodError',
    'FactoryNotRegisteredError',
    'DefinitionValidationError',
    'MISSING',
    'NULL',
    'is_function_value'
]
