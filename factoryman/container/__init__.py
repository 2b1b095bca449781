"""
Container package for the factory registry.
"""

from .factory_registry import (
    FactoryRegistry, get_registry, configure_registry, reset_registry,
    set_default_create_action, set_default_create_method
)

__all__ = [
    'FactoryRegistry',
    'get_registry',
    'configure_registry',
    'reset_registry',
    'set_default_create_action',
    'set_default_create_method'
]
