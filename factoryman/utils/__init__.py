"""
Utility helpers for FactoryMan.
"""

from .bag import to_dict, merge_bags
from .error_handling import log_factory_action, log_factory_error

__all__ = [
    'to_dict',
    'merge_bags',
    'log_factory_action',
    'log_factory_error'
]
