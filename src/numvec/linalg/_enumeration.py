"""Restartable enumeration over vector storage."""

from typing import Any, Callable, Iterator, List, Optional

import numpy as np

__all__ = ['Enumeration']


class Enumeration:
    """
    Lazy, finite iterable over a storage enumerator.

    Each ``iter()`` call starts a fresh pass, so the same ``Enumeration``
    can be consumed more than once. Nothing is read from the storage until
    iteration begins.

    Example:
        >>> values = v.enumerate()
        >>> list(values) == list(values)
        True
        >>> v.enumerate_indexed(Zeros.ALLOW_SKIP).to_list()
        [(0, 1.0), (2, 3.0)]
    """

    __slots__ = ('_factory', '_dtype')

    def __init__(self, factory: Callable[[], Iterator[Any]], dtype: Optional[np.dtype] = None):
        self._factory = factory
        self._dtype = dtype

    def __iter__(self) -> Iterator[Any]:
        return iter(self._factory())

    def to_list(self) -> List[Any]:
        return list(self)

    def to_array(self) -> np.ndarray:
        """Materialize into a numpy array (2-column for indexed enumerations)."""
        items = self.to_list()
        if items and isinstance(items[0], tuple):
            return np.array(items, dtype=object)
        return np.array(items, dtype=self._dtype)

    def __repr__(self) -> str:
        return f"Enumeration({self._factory!r})"
