"""Vector Storage Base Class.

This module defines the abstract storage contract shared by every vector
backend (Dense, Sparse, Constant). A ``Vector`` never touches raw memory
itself: element access, bulk clearing, copying, enumeration and mapping
all go through the methods defined here.

Contract:

    Element access:
        at(i), set_at(i, x)           unchecked, caller validated the index
        __getitem__ / __setitem__     checked, raise OutOfRangeError

    Bulk operations:
        clear(), clear_range(i, n)
        copy_to(target, existing_data)
        copy_sub_vector_to(target, src, dst, n, existing_data)
        map_to(target, f, zeros, existing_data)
        map_indexed_to(target, f, zeros, existing_data)

    Enumeration (ascending index order):
        enumerate(), enumerate_indexed()                  zeros included
        enumerate_non_zero(), enumerate_non_zero_indexed() zeros may be omitted

Checked entry points validate arguments and then call the matching
``*_unchecked`` method. Subclasses override the unchecked methods when
they know a faster path for a particular target kind and defer to the
generic implementation here otherwise.

Generic Semantics:
    The generic implementations only use ``at``/``set_at``/``clear``/
    ``clear_range`` and the enumerators, so any pair of backends can be
    combined. Source entries are always read completely before the
    target is written, which keeps self-targeting calls (in-place map,
    overlapping sub-vector copy) correct.
"""

from abc import ABC, abstractmethod
from operator import index as _as_index
from typing import Any, Callable, Iterator, Tuple

from .._errors import (
    OutOfRangeError,
    check_not_none,
    check_same_length,
    check_same_dtype,
    InvalidArgumentError,
)
from ._dtypes import DType, normalize_dtype
from ._policy import Zeros, ExistingData, StorageKind

__all__ = ['VectorStorage', 'check_range']


def check_range(index: int, count: int, length: int, name: str = 'index') -> None:
    """Validate the window ``[index, index + count)`` against ``length``.

    Raises:
        OutOfRangeError: If count < 1 or the window leaves ``[0, length)``
    """
    if count < 1:
        raise OutOfRangeError(f"count must be positive, got {count}")
    if index < 0 or index + count > length:
        raise OutOfRangeError(
            f"{name}: range [{index}, {index + count}) out of bounds [0, {length})"
        )


class VectorStorage(ABC):
    """
    Abstract base class for all vector storages.

    Attributes:
        length: Number of logical elements
        dtype: Element type (``DType``)
        kind: Backend type (``StorageKind``)
    """

    __slots__ = ('_length', '_dtype')

    def __init__(self, length: int, dtype=DType.float64):
        length = _as_index(length)
        if length < 0:
            raise InvalidArgumentError(f"Storage length must be non-negative, got {length}")
        self._length = length
        self._dtype = normalize_dtype(dtype)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def length(self) -> int:
        """Number of logical elements."""
        return self._length

    @property
    def dtype(self) -> DType:
        """Element type."""
        return self._dtype

    @property
    def zero(self) -> Any:
        """Additive identity of the element type."""
        return self._dtype.zero

    @property
    @abstractmethod
    def kind(self) -> StorageKind:
        """Backend type."""
        ...

    @property
    @abstractmethod
    def nnz(self) -> int:
        """Number of stored non-zero elements."""
        ...

    @property
    def is_dense(self) -> bool:
        return self.kind == StorageKind.DENSE

    @property
    def is_mutable(self) -> bool:
        """Whether arbitrary per-element writes are supported."""
        return True

    # =========================================================================
    # Element Access
    # =========================================================================

    @abstractmethod
    def at(self, index: int) -> Any:
        """Read element ``index`` without range checking."""
        ...

    @abstractmethod
    def set_at(self, index: int, value: Any) -> None:
        """Write element ``index`` without range checking."""
        ...

    def __getitem__(self, index: int) -> Any:
        return self.at(self._check_index(index))

    def __setitem__(self, index: int, value: Any) -> None:
        self.set_at(self._check_index(index), value)

    def __len__(self) -> int:
        return self._length

    def _check_index(self, index: int) -> int:
        index = _as_index(index)
        if index < 0 or index >= self._length:
            raise OutOfRangeError(f"Index {index} out of bounds [0, {self._length})")
        return index

    # =========================================================================
    # Clearing
    # =========================================================================

    @abstractmethod
    def clear(self) -> None:
        """Reset every element to zero."""
        ...

    @abstractmethod
    def clear_range(self, index: int, count: int) -> None:
        """Reset ``count`` elements starting at ``index`` to zero (unchecked)."""
        ...

    # =========================================================================
    # Copying
    # =========================================================================

    def copy_to(self, target: 'VectorStorage',
                existing_data: ExistingData = ExistingData.CLEAR) -> None:
        """Copy every element into ``target``.

        Args:
            target: Storage of the same length, any kind
            existing_data: ``CLEAR`` if target content is unknown,
                ``ASSUME_ZEROS`` if target is freshly built

        Raises:
            MissingArgumentError: If target is None
            DimensionMismatchError: If lengths differ
            TypeMismatchError: If element types differ
        """
        check_not_none(target, 'target')
        if target is self:
            return
        check_same_length(self._length, target.length, 'target')
        check_same_dtype(self._dtype, target.dtype, 'target')
        self.copy_to_unchecked(target, existing_data)

    def copy_to_unchecked(self, target: 'VectorStorage',
                          existing_data: ExistingData) -> None:
        if existing_data == ExistingData.CLEAR:
            target.clear()
        for i, value in self.enumerate_non_zero_indexed():
            target.set_at(i, value)

    def copy_sub_vector_to(self, target: 'VectorStorage', source_index: int,
                           target_index: int, count: int,
                           existing_data: ExistingData = ExistingData.CLEAR) -> None:
        """Copy ``count`` elements from ``source_index`` into ``target`` at ``target_index``.

        Raises:
            MissingArgumentError: If target is None
            OutOfRangeError: If count < 1 or either window leaves its storage
            TypeMismatchError: If element types differ
        """
        check_not_none(target, 'target')
        check_same_dtype(self._dtype, target.dtype, 'target')
        self._check_sub_range(source_index, count, 'source_index')
        target._check_sub_range(target_index, count, 'target_index')
        if target is self and source_index == target_index:
            return
        self.copy_sub_vector_to_unchecked(target, source_index, target_index,
                                          count, existing_data)

    def copy_sub_vector_to_unchecked(self, target: 'VectorStorage', source_index: int,
                                     target_index: int, count: int,
                                     existing_data: ExistingData) -> None:
        window = [self.at(source_index + k) for k in range(count)]
        if existing_data == ExistingData.CLEAR or target is self:
            target.clear_range(target_index, count)
        for k, value in enumerate(window):
            if value != 0:
                target.set_at(target_index + k, value)

    def copy_to_row_unchecked(self, target, row: int, existing_data: ExistingData) -> None:
        """Copy into row ``row`` of a matrix storage."""
        if existing_data == ExistingData.CLEAR:
            items = self.enumerate_indexed()
        else:
            items = self.enumerate_non_zero_indexed()
        for j, value in items:
            target.set_at(row, j, value)

    def copy_to_column_unchecked(self, target, column: int,
                                 existing_data: ExistingData) -> None:
        """Copy into column ``column`` of a matrix storage."""
        if existing_data == ExistingData.CLEAR:
            items = self.enumerate_indexed()
        else:
            items = self.enumerate_non_zero_indexed()
        for i, value in items:
            target.set_at(i, column, value)

    def _check_sub_range(self, index: int, count: int, name: str) -> None:
        check_range(index, count, self._length, name)

    # =========================================================================
    # Enumeration
    # =========================================================================

    def enumerate(self) -> Iterator[Any]:
        """Yield every element in index order, zeros included."""
        for i in range(self._length):
            yield self.at(i)

    def enumerate_indexed(self) -> Iterator[Tuple[int, Any]]:
        """Yield ``(index, value)`` for every element, zeros included."""
        for i in range(self._length):
            yield i, self.at(i)

    def enumerate_non_zero(self) -> Iterator[Any]:
        """Yield element values, possibly omitting zeros."""
        for _, value in self.enumerate_non_zero_indexed():
            yield value

    def enumerate_non_zero_indexed(self) -> Iterator[Tuple[int, Any]]:
        """Yield ``(index, value)`` pairs, possibly omitting zeros."""
        for i, value in self.enumerate_indexed():
            if value != 0:
                yield i, value

    # =========================================================================
    # Mapping
    # =========================================================================

    def map_to(self, target: 'VectorStorage', f: Callable[[Any], Any],
               zeros: Zeros = Zeros.ALLOW_SKIP,
               existing_data: ExistingData = ExistingData.CLEAR) -> None:
        """Write ``f(x)`` for every element ``x`` into ``target``.

        With ``Zeros.ALLOW_SKIP`` the storage may assume ``f(0) == 0`` and
        leave structurally-zero entries of ``target`` untouched.

        Raises:
            MissingArgumentError: If target is None
            DimensionMismatchError: If lengths differ
        """
        check_not_none(target, 'target')
        check_same_length(self._length, target.length, 'target')
        self.map_to_unchecked(target, f, zeros, existing_data)

    def map_to_unchecked(self, target: 'VectorStorage', f: Callable[[Any], Any],
                         zeros: Zeros, existing_data: ExistingData) -> None:
        self._write_mapped(
            target,
            [(i, f(x)) for i, x in self._items_for(zeros)],
            zeros, existing_data,
        )

    def map_indexed_to(self, target: 'VectorStorage', f: Callable[[int, Any], Any],
                       zeros: Zeros = Zeros.ALLOW_SKIP,
                       existing_data: ExistingData = ExistingData.CLEAR) -> None:
        """Write ``f(i, x)`` for every element ``x`` at index ``i`` into ``target``."""
        check_not_none(target, 'target')
        check_same_length(self._length, target.length, 'target')
        self.map_indexed_to_unchecked(target, f, zeros, existing_data)

    def map_indexed_to_unchecked(self, target: 'VectorStorage',
                                 f: Callable[[int, Any], Any],
                                 zeros: Zeros, existing_data: ExistingData) -> None:
        self._write_mapped(
            target,
            [(i, f(i, x)) for i, x in self._items_for(zeros)],
            zeros, existing_data,
        )

    def _items_for(self, zeros: Zeros) -> Iterator[Tuple[int, Any]]:
        if zeros == Zeros.ALLOW_SKIP:
            return self.enumerate_non_zero_indexed()
        return self.enumerate_indexed()

    def _write_mapped(self, target: 'VectorStorage', results, zeros: Zeros,
                      existing_data: ExistingData) -> None:
        # results are fully computed before the first write
        if zeros == Zeros.ALLOW_SKIP and existing_data == ExistingData.CLEAR:
            target.clear()
        skip_zeros = (zeros == Zeros.ALLOW_SKIP
                      and existing_data == ExistingData.ASSUME_ZEROS
                      and target is not self)
        for i, value in results:
            if skip_zeros and value == 0:
                continue
            target.set_at(i, value)

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(length={self._length}, "
                f"dtype={self._dtype.value}, nnz={self.nnz})")
