"""
Sentinel values shared across the library.
"""


class _MissingType:
    """Marker returned by property lookups for undeclared names."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_MissingType, ())


MISSING = _MissingType()

# Explicit "set this field to None" marker
NULL = None


def is_function_value(value) -> bool:
    """Return True when a property value should be invoked with the instance."""
    return callable(value) and not isinstance(value, type)
