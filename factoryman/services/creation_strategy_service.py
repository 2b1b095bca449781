"""
Creation Strategy Service

Selects and runs the single post-build creation hook for create().
"""

import logging
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional, Union

from factoryman.core.errors import NoCreationStrategyError, UnknownCreateMethodError

logger = logging.getLogger(__name__)


class CreationStrategyKind(Enum):
    """Creation strategies in priority order."""
    INSTANCE_ACTION = "instance_action"
    INSTANCE_METHOD = "instance_method"
    DEFAULT_ACTION = "default_action"
    DEFAULT_METHOD = "default_method"


class CreationStrategy(NamedTuple):
    """The strategy picked for one create() call."""
    kind: CreationStrategyKind
    target: Union[Callable[[Any], Any], str]

    @property
    def is_method(self) -> bool:
        return self.kind in (CreationStrategyKind.INSTANCE_METHOD, CreationStrategyKind.DEFAULT_METHOD)


class CreationStrategyService:
    """
    Picks the creation hook by fixed priority, first match wins:

    1. factory instance create action
    2. factory instance create method name
    3. registry default create action
    4. registry default create method name
    """

    def select(
        self,
        instance_action: Optional[Callable[[Any], Any]] = None,
        instance_method: Optional[str] = None,
        default_action: Optional[Callable[[Any], Any]] = None,
        default_method: Optional[str] = None,
        factory_name: Optional[str] = None
    ) -> CreationStrategy:
        """
        Select the creation strategy.

        Raises:
            NoCreationStrategyError: If none of the four is configured
        """
        if instance_action is not None:
            return CreationStrategy(CreationStrategyKind.INSTANCE_ACTION, instance_action)
        if instance_method is not None:
            return CreationStrategy(CreationStrategyKind.INSTANCE_METHOD, instance_method)
        if default_action is not None:
            return CreationStrategy(CreationStrategyKind.DEFAULT_ACTION, default_action)
        if default_method is not None:
            return CreationStrategy(CreationStrategyKind.DEFAULT_METHOD, default_method)

        raise NoCreationStrategyError(
            "Don't know how to create(). Set a create action or create method "
            "on the factory or as a registry default.",
            {"factory": factory_name}
        )

    def run(self, strategy: CreationStrategy, instance: Any) -> None:
        """
        Run a selected strategy against a built instance.

        Raises:
            UnknownCreateMethodError: If a named method is missing or not callable
        """
        logger.debug(f"Running {strategy.kind.value} creation strategy on {type(instance).__name__}")

        if not strategy.is_method:
            strategy.target(instance)
            return

        method = getattr(instance, strategy.target, None)
        if method is None or not callable(method):
            raise UnknownCreateMethodError(
                f"{type(instance).__name__} has no callable create method '{strategy.target}'",
                {"method": strategy.target, "target_type": type(instance).__name__}
            )
        method()
