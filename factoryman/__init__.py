"""
FactoryMan - declarative factories for building test fixtures.

Factories declare static and computed properties for a target type, build
fresh instances with per-call overrides, and run a pluggable creation hook
(such as a save() call) on create().
"""

from factoryman.core.errors import (
    ErrorCode, FactoryError, DuplicateKeyError, NullBagError, NoTargetTypeError,
    NoDefaultConstructorError, UnknownPropertyError, NoCreationStrategyError,
    UnknownCreateMethodError, FactoryNotRegisteredError, DefinitionValidationError
)
from factoryman.core.sentinels import MISSING, NULL
from factoryman.container.factory_registry import (
    FactoryRegistry, get_registry, configure_registry, reset_registry,
    set_default_create_action, set_default_create_method
)
from factoryman.factory import Factory
from factoryman.generic_factory import GenericFactory
from factoryman.sequence import Sequence
from factoryman.definitions import DefinitionLoader

__version__ = '0.1.0'

__all__ = [
    'Factory',
    'GenericFactory',
    'Sequence',
    'DefinitionLoader',
    'FactoryRegistry',
    'get_registry',
    'configure_registry',
    'reset_registry',
    'set_default_create_action',
    'set_default_create_method',
    'MISSING',
    'NULL',
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
    'DefinitionValidationError'
]
