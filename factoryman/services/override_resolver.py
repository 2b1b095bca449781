"""
Override Resolver

Merges per-call overrides into a copy of a factory's declared properties.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional

from factoryman.core.sentinels import is_function_value
from factoryman.property_store import PropertyStore

logger = logging.getLogger(__name__)


class ResolvedProperty(NamedTuple):
    """A single entry of the resolved property set."""
    name: str
    value: Any
    is_function: bool


class OverrideResolver:
    """
    Produces the ordered resolved property set for one build call.

    Declared entries keep their position; an override replaces the value
    and kind of a matching entry in place and unknown override keys are
    appended in the override's own order. Replaced functions are dropped
    without being called.
    """

    def resolve(self, store: PropertyStore, overrides: Optional[Dict[str, Any]] = None) -> List[ResolvedProperty]:
        """
        Resolve declared properties against overrides.

        Args:
            store: Declared properties
            overrides: Name -> literal or callable, None meaning no overrides

        Returns:
            Resolved properties in materialization order
        """
        working: Dict[str, ResolvedProperty] = {}

        for name, value, is_function in store.entries():
            working[name] = ResolvedProperty(name, value, is_function)

        if overrides:
            for name, value in overrides.items():
                if name in working:
                    logger.debug(f"Override replaces declared property: {name}")
                working[name] = ResolvedProperty(name, value, is_function_value(value))

        return list(working.values())
