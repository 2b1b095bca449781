"""
Generic Factory - a typed variant of Factory.

The target type comes from the generic parameter instead of a runtime
argument, either by subclassing or by calling the subscripted class:

    class DogFactory(GenericFactory[Dog]):
        pass

    dogs = DogFactory({'name': 'Rover'})
    cats = GenericFactory[Cat]({'name': 'Paws'})

Function properties, creation actions and build results are typed against
the target type. Runtime behavior is identical to Factory.
"""

from typing import Any, Callable, Generic, List, Optional, Type, TypeVar, get_args, get_origin

from factoryman.container.factory_registry import FactoryRegistry
from factoryman.core.errors import NoTargetTypeError
from factoryman.factory import Factory

T = TypeVar('T')


def _concrete_type_arg(alias: Any) -> Optional[Type]:
    args = get_args(alias)
    if args and not isinstance(args[0], TypeVar):
        return args[0]
    return None


class GenericFactory(Factory, Generic[T]):
    """Factory whose target type is fixed by its generic parameter."""

    _bound_target_type: Optional[Type] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for base in getattr(cls, '__orig_bases__', ()):
            if get_origin(base) is GenericFactory:
                bound = _concrete_type_arg(base)
                if bound is not None:
                    cls._bound_target_type = bound

    def __init__(self, properties: Any = None, name: Optional[str] = None,
                 registry: Optional[FactoryRegistry] = None):
        super().__init__(None, properties, name=name, registry=registry)

    @classmethod
    def define(cls, properties: Any = None, name: Optional[str] = None,
               registry: Optional[FactoryRegistry] = None) -> 'GenericFactory[T]':
        """
        Shortcut constructor for bound subclasses: DogFactory.define({...}).

        A subscripted alias forwards classmethods to the unbound class, so
        GenericFactory[Dog].define() cannot see Dog. Call GenericFactory[Dog]()
        instead.

        Raises:
            NoTargetTypeError: If cls is not bound to a target type
        """
        if cls._bound_target_type is None:
            raise NoTargetTypeError(
                f"{cls.__name__}.define() needs a subclass bound to a target type, "
                f"e.g. class DogFactory({cls.__name__}[Dog])",
                {"factory": cls.__name__}
            )
        return cls(properties, name=name, registry=registry)

    @property
    def target_type(self) -> Optional[Type[T]]:
        if self._bound_target_type is not None:
            return self._bound_target_type
        # set by typing when the subscripted class is called, after __init__ returns
        orig_class = self.__dict__.get('__orig_class__')
        if orig_class is not None:
            return _concrete_type_arg(orig_class)
        return None

    @target_type.setter
    def target_type(self, value: Any) -> None:
        raise AttributeError("GenericFactory target type is fixed by its type parameter")

    def add_function(self, name: str, function: Callable[[T], Any]) -> 'GenericFactory[T]':
        super().add_function(name, function)
        return self

    def set_create_action(self, action: Optional[Callable[[T], Any]]) -> 'GenericFactory[T]':
        super().set_create_action(action)
        return self

    def build(self, overrides: Any = None, /, **kwargs) -> T:
        return super().build(overrides, **kwargs)

    def create(self, overrides: Any = None, /, **kwargs) -> T:
        return super().create(overrides, **kwargs)

    def gen(self, overrides: Any = None, /, **kwargs) -> T:
        return self.create(overrides, **kwargs)

    def generate(self, overrides: Any = None, /, **kwargs) -> T:
        return self.create(overrides, **kwargs)

    def build_batch(self, size: int, overrides: Any = None, /, **kwargs) -> List[T]:
        return super().build_batch(size, overrides, **kwargs)

    def create_batch(self, size: int, overrides: Any = None, /, **kwargs) -> List[T]:
        return super().create_batch(size, overrides, **kwargs)
