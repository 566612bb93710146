"""
Named-component registry used for optimizers and benchmark problems.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """
    Map case-insensitive names to factories.

    Supports usage as a decorator::

        BENCHMARKS = Registry("benchmarks")

        @BENCHMARKS.register("sphere")
        class Sphere(Benchmark): ...
    """

    def __init__(self, name: str = "Registry") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    @staticmethod
    def _key(key: str) -> str:
        return key.strip().lower()

    def register(self, key: str, item: T | None = None, *, override: bool = False) -> Callable[[T], T] | T:
        """
        Register an item under ``key``; returns a decorator when ``item`` is None.

        Raises:
            ValueError: on a duplicate key unless ``override`` is set.
        """

        def _do_register(obj: T) -> T:
            norm = self._key(key)
            if norm in self._items and not override:
                raise ValueError(f"Key '{norm}' already exists in registry '{self._name}'")
            self._items[norm] = obj
            return obj

        if item is None:
            return _do_register
        return _do_register(item)

    def get(self, key: str) -> T:
        norm = self._key(key)
        if norm not in self._items:
            raise KeyError(f"Key '{norm}' not found in registry '{self._name}'")
        return self._items[norm]

    def __getitem__(self, key: str) -> T:
        return self.get(key)

    def list(self) -> list[str]:
        """Return a sorted list of registered keys."""
        return sorted(self._items)

    def __contains__(self, key: str) -> bool:
        return self._key(key) in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["Registry"]
