"""
Factory - declarative templates for building test fixture instances.

A factory holds declared properties (literal values or functions of the
instance under construction), builds fresh instances of its target type
with optional per-call overrides, and can run a creation hook such as a
save() call after building.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Type

from factoryman.container.factory_registry import FactoryRegistry, get_registry
from factoryman.core.errors import NoTargetTypeError, NullBagError
from factoryman.core.sentinels import MISSING, NULL
from factoryman.property_store import PropertyStore
from factoryman.services.creation_strategy_service import CreationStrategyService
from factoryman.services.instance_materializer import InstanceMaterializer
from factoryman.services.override_resolver import OverrideResolver, ResolvedProperty
from factoryman.utils.bag import merge_bags, to_dict
from factoryman.utils.error_handling import log_factory_action


_UNSET = object()


class Factory:
    """
    Reusable template for producing instances of one target type.

    Usage:
        dogs = Factory(Dog, {'name': 'Rover', 'breed': lambda d: f"Retriever for {d.name}"})
        dog = dogs.build(name='Snoopy')

        dogs.set_create_method('save')
        saved = dogs.create()
    """

    # Alias for None in declarations and overrides
    NULL = NULL

    def __init__(
        self,
        target_type: Optional[Type] = None,
        properties: Any = None,
        name: Optional[str] = None,
        registry: Optional[FactoryRegistry] = None
    ):
        """
        Initialize a factory.

        Args:
            target_type: Class to instantiate, needs a no-argument constructor
            properties: Optional bag of initial property declarations
            name: Display name, defaults to the target type's name
            registry: Registry supplying creation defaults, the global one if omitted
        """
        self._target_type = target_type
        self._name = name
        self._registry = registry
        self._store = PropertyStore()
        self._resolver = OverrideResolver()
        self._creation_service = CreationStrategyService()

        self.instance_create_action: Optional[Callable[[Any], Any]] = None
        self.instance_create_method: Optional[str] = None

        if properties is not None:
            self.add(properties)

    @classmethod
    def define(cls, target_type: Type, properties: Any = None, name: Optional[str] = None,
               registry: Optional[FactoryRegistry] = None) -> 'Factory':
        """Shortcut constructor: Factory.define(Dog, {'name': 'Rover'})."""
        return cls(target_type, properties, name=name, registry=registry)

    @property
    def target_type(self) -> Optional[Type]:
        return self._target_type

    @target_type.setter
    def target_type(self, value: Optional[Type]) -> None:
        self._target_type = value

    @property
    def name(self) -> Optional[str]:
        if self._name is None and self.target_type is not None:
            return self.target_type.__name__
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value

    @property
    def registry(self) -> FactoryRegistry:
        return self._registry if self._registry is not None else get_registry()

    def register(self, name: Optional[str] = None) -> 'Factory':
        """Register this factory with its registry."""
        self.registry.register(self, name)
        return self

    def add(self, name_or_bag: Any = _UNSET, value: Any = _UNSET, /, **properties) -> 'Factory':
        """
        Declare properties.

        Accepts add(name, value), add(bag) or add(**properties). Callable
        values (other than classes) are stored as function properties and
        called with the instance at build time.

        Raises:
            NullBagError: If add(None) is called
            DuplicateKeyError: If a name is declared twice in the same store
        """
        if value is not _UNSET:
            self._store.add(name_or_bag, value)
        elif name_or_bag is not _UNSET:
            bag = to_dict(name_or_bag)
            if bag is None:
                raise NullBagError(
                    "Cannot add properties from a None bag",
                    {"factory": self.name}
                )
            for key, item in bag.items():
                self._store.add(key, item)

        for key, item in properties.items():
            self._store.add(key, item)

        return self

    def add_static(self, name: str, value: Any) -> 'Factory':
        """Declare a literal value, even when the value is callable."""
        self._store.add_static(name, value)
        return self

    def add_function(self, name: str, function: Callable[[Any], Any]) -> 'Factory':
        """Declare a property computed from the instance under construction."""
        self._store.add_function(name, function)
        return self

    def set_create_method(self, method: Optional[str]) -> 'Factory':
        self.instance_create_method = method
        return self

    def set_create_action(self, action: Optional[Callable[[Any], Any]]) -> 'Factory':
        self.instance_create_action = action
        return self

    def __getitem__(self, name: str) -> Any:
        """Static value, else function, else MISSING."""
        return self._store.get(name)

    def get(self, name: str, default: Any = MISSING) -> Any:
        return self._store.get(name, default)

    def func(self, name: str) -> Callable[[Any], Any]:
        """Return a declared function property (KeyError when absent)."""
        return self._store.func(name)

    def __contains__(self, name: str) -> bool:
        return name in self._store

    def __len__(self) -> int:
        return len(self._store)

    @property
    def count(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return self._store.items()

    @property
    def properties(self) -> Dict[str, Any]:
        """Fresh dict of declared properties in build order."""
        return self._store.to_dict()

    @property
    def static_properties(self) -> Dict[str, Any]:
        return self._store.static_properties

    @property
    def function_properties(self) -> Dict[str, Callable[[Any], Any]]:
        return self._store.function_properties

    def resolve(self, overrides: Any = None, /, **kwargs) -> List[ResolvedProperty]:
        """Return the resolved property set a build() call would use."""
        return self._resolver.resolve(self._store, merge_bags(overrides, **kwargs))

    def build(self, overrides: Any = None, /, **kwargs) -> Any:
        """
        Build a new, unsaved instance.

        Args:
            overrides: Optional bag of per-call property replacements
            **kwargs: More overrides, applied after the bag

        Returns:
            Instance of the target type
        """
        target_type = self.target_type
        if target_type is None:
            raise NoTargetTypeError(
                f"Factory '{self._name}' has no target type to build",
                {"factory": self._name}
            )

        resolved = self.resolve(overrides, **kwargs)
        log_factory_action(self.name, "build", {"properties": [entry.name for entry in resolved]})

        materializer = InstanceMaterializer(strict_fields=self.registry.config.strict_fields)
        return materializer.materialize(target_type, resolved)

    def create(self, overrides: Any = None, /, **kwargs) -> Any:
        """
        Build an instance, then run exactly one creation strategy on it.

        Raises:
            NoCreationStrategyError: If no creation strategy is configured
        """
        instance = self.build(overrides, **kwargs)
        self._run_creation_strategy(instance)
        return instance

    def gen(self, overrides: Any = None, /, **kwargs) -> Any:
        """Alias for create()."""
        return self.create(overrides, **kwargs)

    def generate(self, overrides: Any = None, /, **kwargs) -> Any:
        """Alias for create()."""
        return self.create(overrides, **kwargs)

    def build_batch(self, size: int, overrides: Any = None, /, **kwargs) -> List[Any]:
        return [self.build(overrides, **kwargs) for _ in range(size)]

    def create_batch(self, size: int, overrides: Any = None, /, **kwargs) -> List[Any]:
        return [self.create(overrides, **kwargs) for _ in range(size)]

    def _run_creation_strategy(self, instance: Any) -> None:
        registry = self.registry
        strategy = self._creation_service.select(
            instance_action=self.instance_create_action,
            instance_method=self.instance_create_method,
            default_action=registry.default_create_action,
            default_method=registry.default_create_method,
            factory_name=self.name
        )
        log_factory_action(self.name, "create", {"strategy": strategy.kind.value})
        self._creation_service.run(strategy, instance)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} properties={list(self._store.names())!r}>"
