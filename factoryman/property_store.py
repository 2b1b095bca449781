"""
Property Store

Per-factory storage of declared properties. Literal values and
function-valued properties live in two insertion-ordered stores.
"""

from typing import Any, Callable, Dict, Iterator, Tuple

from factoryman.core.errors import DuplicateKeyError
from factoryman.core.sentinels import MISSING, is_function_value


class PropertyStore:
    """
    Ordered storage for static and function-valued properties.

    A name may sit in both stores at once. The merged view puts statics
    first in declaration order and lets a function entry with the same
    name take over the static entry's slot.
    """

    def __init__(self):
        self._static: Dict[str, Any] = {}
        self._functions: Dict[str, Callable[[Any], Any]] = {}

    def add_static(self, name: str, value: Any) -> None:
        """
        Declare a literal property value.

        Raises:
            DuplicateKeyError: If the name is already a static property
        """
        self._check_name(name)
        if name in self._static:
            raise DuplicateKeyError(
                f"Static property '{name}' is already declared",
                {"property": name}
            )
        self._static[name] = value

    def add_function(self, name: str, function: Callable[[Any], Any]) -> None:
        """
        Declare a function-valued property.

        Raises:
            DuplicateKeyError: If the name is already a function property
            TypeError: If function is not callable
        """
        self._check_name(name)
        if not callable(function):
            raise TypeError(f"Function property '{name}' must be callable, got {type(function).__name__}")
        if name in self._functions:
            raise DuplicateKeyError(
                f"Function property '{name}' is already declared",
                {"property": name}
            )
        self._functions[name] = function

    def add(self, name: str, value: Any) -> None:
        """Declare a property, routing callables to the function store."""
        if is_function_value(value):
            self.add_function(name, value)
        else:
            self.add_static(name, value)

    def get(self, name: str, default: Any = MISSING) -> Any:
        """Static value first, then function, then default."""
        if name in self._static:
            return self._static[name]
        if name in self._functions:
            return self._functions[name]
        return default

    def func(self, name: str) -> Callable[[Any], Any]:
        return self._functions[name]

    def entries(self) -> Iterator[Tuple[str, Any, bool]]:
        """
        Yield (name, value, is_function) for the merged view.

        Recomputed from the stores on every call.
        """
        for name, value in self._static.items():
            if name in self._functions:
                yield name, self._functions[name], True
            else:
                yield name, value, False
        for name, function in self._functions.items():
            if name not in self._static:
                yield name, function, True

    def items(self) -> Iterator[Tuple[str, Any]]:
        for name, value, _ in self.entries():
            yield name, value

    def names(self) -> Iterator[str]:
        for name, _, _ in self.entries():
            yield name

    @property
    def static_properties(self) -> Dict[str, Any]:
        return dict(self._static)

    @property
    def function_properties(self) -> Dict[str, Callable[[Any], Any]]:
        return dict(self._functions)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.items())

    def __contains__(self, name: str) -> bool:
        return name in self._static or name in self._functions

    def __len__(self) -> int:
        return len(self._static.keys() | self._functions.keys())

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return self.items()

    def __repr__(self) -> str:
        return f"PropertyStore({list(self.names())!r})"

    @staticmethod
    def _check_name(name: str) -> None:
        if not isinstance(name, str):
            raise TypeError(f"Property names must be strings, got {type(name).__name__}")
