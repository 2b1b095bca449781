"""
Bag Conversion Utilities

Turns a loosely-typed bag of named values (mapping, dataclass instance,
namedtuple, simple namespace) into an ordered name -> value dict.
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Dict, Optional


def to_dict(bag: Any) -> Optional[Dict[str, Any]]:
    """
    Convert a bag of named values into a plain dict.

    Args:
        bag: Mapping, dataclass instance, namedtuple or object with attributes

    Returns:
        Dict preserving the bag's own ordering, or None when bag is None

    Raises:
        TypeError: If the bag cannot be decomposed into named values
    """
    if bag is None:
        return None

    if isinstance(bag, Mapping):
        result = dict(bag)
    elif dataclasses.is_dataclass(bag) and not isinstance(bag, type):
        # Shallow: nested values pass through unchanged
        result = {f.name: getattr(bag, f.name) for f in dataclasses.fields(bag)}
    elif isinstance(bag, tuple) and hasattr(bag, '_asdict'):
        result = dict(bag._asdict())
    elif hasattr(bag, '__dict__') and not isinstance(bag, type):
        result = {k: v for k, v in vars(bag).items() if not k.startswith('_')}
    else:
        raise TypeError(f"Cannot convert {type(bag).__name__} into named values")

    for key in result:
        if not isinstance(key, str):
            raise TypeError(f"Property names must be strings, got {type(key).__name__}: {key!r}")

    return result


def merge_bags(bag: Any = None, /, **kwargs) -> Dict[str, Any]:
    """
    Combine a positional bag with keyword values, keywords applied last.

    A None bag is treated as empty.
    """
    merged = to_dict(bag) or {}
    merged.update(kwargs)
    return merged
