"""
Test Factories

Shared factory definitions and sequences used across the test suite,
including associations between factories.
"""

from .pet_factories import (
    num, breed, dog_factory, cat_factory, dog_toy_factory,
    dog_toy_with_overrides_factory, reset_sequences
)

__all__ = [
    'num',
    'breed',
    'dog_factory',
    'cat_factory',
    'dog_toy_factory',
    'dog_toy_with_overrides_factory',
    'reset_sequences'
]
