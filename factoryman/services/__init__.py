"""
Services package for FactoryMan

Contains the build pipeline decomposed into single-purpose services.
"""

from .override_resolver import OverrideResolver, ResolvedProperty
from .instance_materializer import InstanceMaterializer, get_writable_field
from .creation_strategy_service import CreationStrategyService, CreationStrategy, CreationStrategyKind

__all__ = [
    'OverrideResolver',
    'ResolvedProperty',
    'InstanceMaterializer',
    'get_writable_field',
    'CreationStrategyService',
    'CreationStrategy',
    'CreationStrategyKind'
]
