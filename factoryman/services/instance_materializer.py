"""
Instance Materializer

Instantiates a target type through its no-argument constructor and assigns
resolved properties onto it in order.
"""

import dataclasses
import inspect
import logging
import types
from typing import Any, Callable, Iterable, Optional, Type

from factoryman.core.errors import NoDefaultConstructorError, UnknownPropertyError
from factoryman.core.sentinels import MISSING
from factoryman.services.override_resolver import ResolvedProperty

logger = logging.getLogger(__name__)

FieldSetter = Callable[[Any, Any], None]


def _setter_for(name: str) -> FieldSetter:
    def set_field(instance: Any, value: Any) -> None:
        setattr(instance, name, value)
    return set_field


def _has_annotation(cls: type, name: str) -> bool:
    for klass in cls.__mro__:
        if name in getattr(klass, '__annotations__', {}):
            return True
    return False


def get_writable_field(instance: Any, name: str) -> Optional[FieldSetter]:
    """
    Look up a writable field on an instance.

    A field is writable when it is a property with a setter, a data
    descriptor (including __slots__ members), an existing instance
    attribute, an annotated or class-level data attribute of a type whose
    instances carry a __dict__.

    Returns:
        A setter taking (instance, value), or None when no such field exists
    """
    if not name.isidentifier() or name.startswith('__'):
        return None

    cls = type(instance)
    attr = inspect.getattr_static(cls, name, MISSING)

    if isinstance(attr, property):
        return _setter_for(name) if attr.fset is not None else None

    if attr is not MISSING and hasattr(type(attr), '__set__'):
        return _setter_for(name)

    instance_dict = getattr(instance, '__dict__', None)
    if instance_dict is None:
        return None

    if name in instance_dict:
        return _setter_for(name)

    if dataclasses.is_dataclass(cls) and name in {f.name for f in dataclasses.fields(cls)}:
        return _setter_for(name)

    if _has_annotation(cls, name):
        return _setter_for(name)

    if attr is not MISSING and not isinstance(attr, (types.FunctionType, staticmethod, classmethod)) \
            and not callable(attr):
        return _setter_for(name)

    return None


class InstanceMaterializer:
    """Builds instances and assigns resolved properties onto them."""

    def __init__(self, strict_fields: bool = True):
        """
        Initialize the materializer.

        Args:
            strict_fields: Raise on names with no writable field instead of
                attaching them as plain attributes
        """
        self.strict_fields = strict_fields

    def instantiate(self, target_type: Type) -> Any:
        """
        Create an instance using the no-argument construction path.

        Raises:
            NoDefaultConstructorError: If the type needs constructor arguments
        """
        details = {"target_type": getattr(target_type, '__name__', repr(target_type))}

        if inspect.isabstract(target_type):
            raise NoDefaultConstructorError(
                f"Cannot instantiate abstract type {details['target_type']}", details
            )

        try:
            signature = inspect.signature(target_type)
        except (TypeError, ValueError):
            # Some builtins have no introspectable signature
            signature = None

        if signature is not None:
            try:
                signature.bind()
            except TypeError as e:
                raise NoDefaultConstructorError(
                    f"{details['target_type']} has no no-argument constructor: {e}", details
                ) from e

        return target_type()

    def assign(self, instance: Any, name: str, value: Any) -> None:
        """
        Assign one value to the instance's field of the same name.

        Raises:
            UnknownPropertyError: If no writable field of that name exists
        """
        self._apply(instance, name, self.resolve_setter(instance, name), value)

    def resolve_setter(self, instance: Any, name: str) -> FieldSetter:
        setter = get_writable_field(instance, name)
        if setter is not None:
            return setter

        if not self.strict_fields and hasattr(instance, '__dict__') and name.isidentifier() \
                and inspect.getattr_static(type(instance), name, MISSING) is MISSING:
            logger.debug(f"Attaching undeclared field '{name}' to {type(instance).__name__}")
            return _setter_for(name)

        raise UnknownPropertyError(
            f"{type(instance).__name__} has no writable field '{name}'",
            {"property": name, "target_type": type(instance).__name__}
        )

    def materialize(self, target_type: Type, resolved: Iterable[ResolvedProperty]) -> Any:
        """
        Instantiate target_type and assign every resolved property once, in order.

        Function-valued entries are called with the in-progress instance, so
        they can read fields assigned by earlier entries.
        """
        instance = self.instantiate(target_type)

        for entry in resolved:
            setter = self.resolve_setter(instance, entry.name)
            value = entry.value(instance) if entry.is_function else entry.value
            self._apply(instance, entry.name, setter, value)

        return instance

    @staticmethod
    def _apply(instance: Any, name: str, setter: FieldSetter, value: Any) -> None:
        try:
            setter(instance, value)
        except dataclasses.FrozenInstanceError as e:
            raise UnknownPropertyError(
                f"Field '{name}' on {type(instance).__name__} is read-only",
                {"property": name, "target_type": type(instance).__name__}
            ) from e
