"""
Constant Vector Storage

A single value standing in for every element, with no per-element memory.
The common case is a structural zero vector: ``clear()`` is free and every
non-zero enumeration is empty.

Writes that would break the "all elements equal" structure are rejected
with ``InvalidArgumentError`` instead of silently materializing data.
"""

from typing import Any, Callable, Iterator, Optional, Tuple

import numpy as np

from .._errors import InvalidArgumentError
from ._dtypes import DType
from ._policy import Zeros, ExistingData, StorageKind
from ._storage import VectorStorage

__all__ = ['ConstantVectorStorage']


class ConstantVectorStorage(VectorStorage):
    """
    Storage where every element holds the same value.

    Example:
        >>> s = ConstantVectorStorage(1_000_000)    # structural zeros
        >>> s.nnz
        0
        >>> ConstantVectorStorage(3, value=2.0).at(1)
        2.0
    """

    __slots__ = ('_value',)

    def __init__(self, length: int, dtype=DType.float64, value: Optional[Any] = None):
        super().__init__(length, dtype)
        self._value = self._cast(self.zero if value is None else value)

    def _cast(self, value: Any) -> Any:
        return self._dtype.numpy_dtype.type(value)

    @property
    def kind(self) -> StorageKind:
        return StorageKind.CONSTANT

    @property
    def value(self) -> Any:
        """The value shared by every element."""
        return self._value

    @property
    def is_zero(self) -> bool:
        return self._value == 0

    @property
    def is_mutable(self) -> bool:
        return False

    @property
    def nnz(self) -> int:
        return 0 if self.is_zero else self._length

    def set_value(self, value: Any) -> None:
        """Replace the shared value of every element at once."""
        self._value = self._cast(value)

    # =========================================================================
    # Element Access
    # =========================================================================

    def at(self, index: int) -> Any:
        return self._value

    def set_at(self, index: int, value: Any) -> None:
        if value == self._value:
            return
        raise InvalidArgumentError(
            f"Cannot write {value!r} at index {index}: constant storage holds {self._value!r}"
        )

    def clear(self) -> None:
        self._value = self.zero

    def clear_range(self, index: int, count: int) -> None:
        if self.is_zero:
            return
        if index == 0 and count == self._length:
            self._value = self.zero
            return
        raise InvalidArgumentError(
            f"Cannot clear partial range [{index}, {index + count}) of a constant storage"
        )

    # =========================================================================
    # Copying
    # =========================================================================

    def copy_to_unchecked(self, target: VectorStorage,
                          existing_data: ExistingData) -> None:
        if isinstance(target, ConstantVectorStorage):
            target.set_value(self._value)
            return
        if target.kind == StorageKind.DENSE:
            target.data[:] = self._value
            return
        if target.kind == StorageKind.SPARSE:
            self._fill_sparse(target, self._value)
            return
        super().copy_to_unchecked(target, existing_data)

    # =========================================================================
    # Enumeration
    # =========================================================================

    def enumerate(self) -> Iterator[Any]:
        value = self._value
        for _ in range(self._length):
            yield value

    def enumerate_indexed(self) -> Iterator[Tuple[int, Any]]:
        value = self._value
        for i in range(self._length):
            yield i, value

    def enumerate_non_zero_indexed(self) -> Iterator[Tuple[int, Any]]:
        if self.is_zero:
            return iter(())
        return self.enumerate_indexed()

    # =========================================================================
    # Mapping
    # =========================================================================

    def map_to_unchecked(self, target: VectorStorage, f: Callable[[Any], Any],
                         zeros: Zeros, existing_data: ExistingData) -> None:
        if isinstance(target, ConstantVectorStorage):
            if zeros == Zeros.ALLOW_SKIP and self.is_zero:
                target.clear()
            else:
                target.set_value(f(self._value))
            return
        if target.kind == StorageKind.DENSE and not (zeros == Zeros.ALLOW_SKIP and self.is_zero):
            target.data[:] = f(self._value)
            return
        if target.kind == StorageKind.SPARSE:
            if zeros == Zeros.ALLOW_SKIP and self.is_zero:
                target.clear()
            else:
                self._fill_sparse(target, f(self._value))
            return
        super().map_to_unchecked(target, f, zeros, existing_data)

    def _fill_sparse(self, target: VectorStorage, value: Any) -> None:
        values = np.full(self._length, value, dtype=target.dtype.numpy_dtype)
        target.set_entries(np.arange(self._length), values)
