"""
Factory Registry

This module provides the registry that holds the process-wide default
creation strategy and a name -> factory lookup table. Defaults live here
rather than on the factory classes so tests can reset them between runs.
Until set explicitly, the default create method follows the current
configuration, so loading a new config takes effect without a reset.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from factoryman.config_factory import FactoryManConfig, get_config_or_default
from factoryman.core.errors import FactoryNotRegisteredError

if TYPE_CHECKING:
    from factoryman.factory import Factory

logger = logging.getLogger(__name__)

_UNSET = object()


class FactoryRegistry:
    """
    Registry for factories and their shared creation defaults.

    Defaults are read by factories at create() time, so changing them
    affects only future calls.
    """

    def __init__(self, config: Optional[FactoryManConfig] = None):
        self._config = config
        self._factories: Dict[str, 'Factory'] = {}
        self.default_create_action: Optional[Callable[[Any], Any]] = None
        self._default_create_method: Any = _UNSET
        self.reset_defaults()

    @property
    def config(self) -> FactoryManConfig:
        """Configuration this registry was set up with, or the global one."""
        if self._config is not None:
            return self._config
        return get_config_or_default()

    @property
    def default_create_method(self) -> Optional[str]:
        """Explicitly set default create method, else the configured one."""
        if self._default_create_method is not _UNSET:
            return self._default_create_method
        return self.config.default_create_method

    @default_create_method.setter
    def default_create_method(self, method: Optional[str]) -> None:
        self._default_create_method = method

    def configure(self, config: FactoryManConfig) -> 'FactoryRegistry':
        """Bind a configuration and reapply its defaults."""
        self._config = config
        self.reset_defaults()
        logger.info(f"Registry configured (default_create_method={config.default_create_method!r}, "
                    f"strict_fields={config.strict_fields})")
        return self

    def set_default_create_action(self, action: Optional[Callable[[Any], Any]]) -> 'FactoryRegistry':
        """Set the action run by create() when a factory has no strategy of its own."""
        self.default_create_action = action
        logger.debug(f"Default create action set: {action!r}")
        return self

    def set_default_create_method(self, method: Optional[str]) -> 'FactoryRegistry':
        """Set the instance method name run by create() as the last fallback."""
        self.default_create_method = method
        logger.debug(f"Default create method set: {method!r}")
        return self

    def reset_defaults(self) -> 'FactoryRegistry':
        """Restore creation defaults to their configured values."""
        self.default_create_action = None
        self._default_create_method = _UNSET
        return self

    def register(self, factory: 'Factory', name: Optional[str] = None) -> 'Factory':
        """
        Register a factory under a name.

        Args:
            factory: Factory to register
            name: Lookup name, defaults to the factory's own name

        Returns:
            The registered factory
        """
        key = name or factory.name
        if not key:
            raise ValueError("Cannot register a factory without a name")
        if key in self._factories:
            logger.debug(f"Replacing registered factory: {key}")
        self._factories[key] = factory
        logger.debug(f"Registered factory: {key}")
        return factory

    def unregister(self, name: str) -> None:
        if name not in self._factories:
            raise FactoryNotRegisteredError(f"Factory '{name}' is not registered", {"factory": name})
        del self._factories[name]

    def get(self, name: str) -> 'Factory':
        """
        Get a factory by name.

        Raises:
            FactoryNotRegisteredError: If the factory hasn't been registered
        """
        if name not in self._factories:
            raise FactoryNotRegisteredError(f"Factory '{name}' is not registered", {"factory": name})
        return self._factories[name]

    def has(self, name: str) -> bool:
        return name in self._factories

    def names(self) -> List[str]:
        return list(self._factories)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._factories)

    def clear(self) -> None:
        """Drop all registered factories and restore defaults. Useful for testing."""
        self._factories.clear()
        self.reset_defaults()
        logger.debug("Factory registry cleared")


# Global registry instance
_registry = FactoryRegistry()


def get_registry() -> FactoryRegistry:
    """Get the global factory registry."""
    return _registry


def configure_registry(config: FactoryManConfig) -> FactoryRegistry:
    """Bind the global registry to a configuration."""
    return _registry.configure(config)


def set_default_create_action(action: Optional[Callable[[Any], Any]]) -> FactoryRegistry:
    """Set the process-wide default create action."""
    return _registry.set_default_create_action(action)


def set_default_create_method(method: Optional[str]) -> FactoryRegistry:
    """Set the process-wide default create method name."""
    return _registry.set_default_create_method(method)


def reset_registry() -> FactoryRegistry:
    """Reset the global registry (for testing)."""
    _registry._config = None
    _registry.clear()
    return _registry
