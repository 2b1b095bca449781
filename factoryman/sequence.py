"""
Sequence - deterministic, monotonically increasing value generator.

Typically shared by many factory function properties to keep generated
fixtures unique:

    names = Sequence(lambda n: f"Rover #{n}")
    Factory(Dog, {'name': lambda dog: names.next()})
"""

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar('T')


class Sequence(Generic[T]):
    """Counter paired with a generator function."""

    def __init__(self, generator: Callable[[int], T] = str, number: int = 0):
        self._generator = generator
        self.number = number

    def next(self) -> T:
        """Increment the counter, then map the new value through the generator."""
        self.number += 1
        return self._generator(self.number)

    def reset(self, number: int = 0) -> 'Sequence[T]':
        self.number = number
        return self

    def __next__(self) -> T:
        return self.next()

    def __iter__(self) -> Iterator[T]:
        return self

    def __repr__(self) -> str:
        return f"Sequence(number={self.number})"
