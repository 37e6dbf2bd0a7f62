"""
Sparse Vector Storage

Stores only the non-zero entries of a vector as two parallel numpy arrays.

Memory Layout:
    - indices[nnz]: strictly ascending element indices (int64)
    - values[nnz]: matching non-zero values

Any index not present in ``indices`` is a structural zero and reads as the
element type's additive identity. Explicit zeros are never stored: writing
zero removes the entry.
"""

from typing import Any, Callable, Iterator, Tuple

import numpy as np

from .._errors import InvalidArgumentError, check_same_length
from ._dtypes import DType
from ._policy import Zeros, ExistingData, StorageKind
from ._storage import VectorStorage

__all__ = ['SparseVectorStorage']


class SparseVectorStorage(VectorStorage):
    """
    Sparse storage holding sorted (index, value) pairs.

    Example:
        >>> s = SparseVectorStorage(1000)
        >>> s.set_at(10, 1.5)
        >>> s.nnz
        1
        >>> s.at(11)
        0.0
    """

    __slots__ = ('_indices', '_values')

    def __init__(self, length: int, dtype=DType.float64):
        super().__init__(length, dtype)
        self._indices = np.empty(0, dtype=np.int64)
        self._values = np.empty(0, dtype=self._dtype.numpy_dtype)

    @classmethod
    def from_entries(cls, length: int, indices, values,
                     dtype=DType.float64) -> 'SparseVectorStorage':
        """Build from (possibly unsorted) index/value sequences.

        Duplicate indices keep the last value. Zero values are dropped.

        Raises:
            OutOfRangeError: If an index lies outside ``[0, length)``
        """
        storage = cls(length, dtype)
        indices = np.asarray(indices, dtype=np.int64).ravel()
        values = np.asarray(values, dtype=storage._dtype.numpy_dtype).ravel()
        check_same_length(indices.shape[0], values.shape[0], 'values')
        for i in indices:
            storage._check_index(int(i))
        # keep last occurrence of each index
        reversed_unique, first = np.unique(indices[::-1], return_index=True)
        storage.set_entries(reversed_unique, values[::-1][first])
        return storage

    @property
    def kind(self) -> StorageKind:
        return StorageKind.SPARSE

    @property
    def indices(self) -> np.ndarray:
        """Stored indices (shared, not a copy)."""
        return self._indices

    @property
    def values(self) -> np.ndarray:
        """Stored values (shared, not a copy)."""
        return self._values

    @property
    def nnz(self) -> int:
        return int(self._indices.shape[0])

    # =========================================================================
    # Element Access
    # =========================================================================

    def _find(self, index: int) -> Tuple[int, bool]:
        k = int(np.searchsorted(self._indices, index))
        return k, k < self._indices.shape[0] and self._indices[k] == index

    def at(self, index: int) -> Any:
        k, found = self._find(index)
        return self._values[k] if found else self.zero

    def set_at(self, index: int, value: Any) -> None:
        k, found = self._find(index)
        if value == 0:
            if found:
                self._indices = np.delete(self._indices, k)
                self._values = np.delete(self._values, k)
        elif found:
            self._values[k] = value
        else:
            self._indices = np.insert(self._indices, k, index)
            self._values = np.insert(self._values, k, value)

    # =========================================================================
    # Bulk Updates
    # =========================================================================

    def set_entries(self, indices, values) -> None:
        """Replace all content with sorted ``indices``/``values`` (zeros dropped)."""
        indices = np.array(indices, dtype=np.int64)
        values = np.array(values, dtype=self._dtype.numpy_dtype)
        check_same_length(indices.shape[0], values.shape[0], 'values')
        _check_sorted(indices)
        keep = values != 0
        self._indices = indices[keep]
        self._values = values[keep]

    def replace_range(self, index: int, count: int, indices, values) -> None:
        """Replace the window ``[index, index + count)`` with the given entries.

        ``indices`` must be sorted and lie inside the window.
        """
        indices = np.asarray(indices, dtype=np.int64)
        values = np.asarray(values, dtype=self._dtype.numpy_dtype)
        keep = values != 0
        lo, hi = self._window(index, count)
        self._indices = np.concatenate(
            (self._indices[:lo], indices[keep], self._indices[hi:]))
        self._values = np.concatenate(
            (self._values[:lo], values[keep], self._values[hi:]))

    def _window(self, index: int, count: int) -> Tuple[int, int]:
        lo = int(np.searchsorted(self._indices, index))
        hi = int(np.searchsorted(self._indices, index + count))
        return lo, hi

    def clear(self) -> None:
        self._indices = np.empty(0, dtype=np.int64)
        self._values = np.empty(0, dtype=self._dtype.numpy_dtype)

    def clear_range(self, index: int, count: int) -> None:
        lo, hi = self._window(index, count)
        if lo == hi:
            return
        self._indices = np.concatenate((self._indices[:lo], self._indices[hi:]))
        self._values = np.concatenate((self._values[:lo], self._values[hi:]))

    # =========================================================================
    # Copying
    # =========================================================================

    def copy_to_unchecked(self, target: VectorStorage,
                          existing_data: ExistingData) -> None:
        if isinstance(target, SparseVectorStorage):
            target.set_entries(self._indices, self._values)
            return
        if target.kind == StorageKind.DENSE:
            if existing_data == ExistingData.CLEAR:
                target.clear()
            target.data[self._indices] = self._values
            return
        super().copy_to_unchecked(target, existing_data)

    def copy_sub_vector_to_unchecked(self, target: VectorStorage, source_index: int,
                                     target_index: int, count: int,
                                     existing_data: ExistingData) -> None:
        lo, hi = self._window(source_index, count)
        indices = self._indices[lo:hi] - source_index + target_index
        values = self._values[lo:hi].copy()
        if isinstance(target, SparseVectorStorage):
            target.replace_range(target_index, count, indices, values)
            return
        if target.kind == StorageKind.DENSE:
            if existing_data == ExistingData.CLEAR:
                target.clear_range(target_index, count)
            target.data[indices] = values
            return
        super().copy_sub_vector_to_unchecked(target, source_index, target_index,
                                             count, existing_data)

    # =========================================================================
    # Enumeration
    # =========================================================================

    def enumerate(self) -> Iterator[Any]:
        for _, value in self.enumerate_indexed():
            yield value

    def enumerate_indexed(self) -> Iterator[Tuple[int, Any]]:
        zero = self.zero
        indices, values = self._indices, self._values
        k, nnz = 0, indices.shape[0]
        for i in range(self._length):
            if k < nnz and indices[k] == i:
                yield i, values[k]
                k += 1
            else:
                yield i, zero

    def enumerate_non_zero(self) -> Iterator[Any]:
        return iter(self._values.copy())

    def enumerate_non_zero_indexed(self) -> Iterator[Tuple[int, Any]]:
        for i, value in zip(self._indices.tolist(), self._values.copy()):
            yield i, value

    # =========================================================================
    # Mapping
    # =========================================================================

    def _map_values(self, target: VectorStorage, f: Callable[[Any], Any]) -> np.ndarray:
        return np.fromiter((f(x) for x in self._values),
                           dtype=target.dtype.numpy_dtype, count=self.nnz)

    def _map_full(self, target: VectorStorage, f: Callable[[Any], Any]) -> np.ndarray:
        # f(0) is evaluated once and broadcast over the structural zeros
        full = np.full(self._length, f(self.zero), dtype=target.dtype.numpy_dtype)
        full[self._indices] = self._map_values(target, f)
        return full

    def map_to_unchecked(self, target: VectorStorage, f: Callable[[Any], Any],
                         zeros: Zeros, existing_data: ExistingData) -> None:
        if isinstance(target, SparseVectorStorage):
            if zeros == Zeros.ALLOW_SKIP:
                target.set_entries(self._indices, self._map_values(target, f))
            else:
                full = self._map_full(target, f)
                nz = np.flatnonzero(full)
                target.set_entries(nz, full[nz])
            return
        if target.kind == StorageKind.DENSE:
            if zeros == Zeros.ALLOW_SKIP:
                mapped = self._map_values(target, f)
                if existing_data == ExistingData.CLEAR:
                    target.clear()
                target.data[self._indices] = mapped
            else:
                target.data[:] = self._map_full(target, f)
            return
        super().map_to_unchecked(target, f, zeros, existing_data)

    def map_indexed_to_unchecked(self, target: VectorStorage,
                                 f: Callable[[int, Any], Any],
                                 zeros: Zeros, existing_data: ExistingData) -> None:
        sparse_target = isinstance(target, SparseVectorStorage)
        if not (sparse_target or target.kind == StorageKind.DENSE):
            super().map_indexed_to_unchecked(target, f, zeros, existing_data)
            return
        dtype = target.dtype.numpy_dtype
        if zeros == Zeros.ALLOW_SKIP:
            mapped = np.fromiter(
                (f(i, x) for i, x in zip(self._indices.tolist(), self._values)),
                dtype=dtype, count=self.nnz,
            )
            if sparse_target:
                target.set_entries(self._indices, mapped)
            else:
                if existing_data == ExistingData.CLEAR:
                    target.clear()
                target.data[self._indices] = mapped
            return
        full = np.fromiter((f(i, x) for i, x in self.enumerate_indexed()),
                           dtype=dtype, count=self._length)
        if sparse_target:
            nz = np.flatnonzero(full)
            target.set_entries(nz, full[nz])
        else:
            target.data[:] = full


def _check_sorted(indices: np.ndarray) -> None:
    if indices.shape[0] > 1 and not np.all(np.diff(indices) > 0):
        raise InvalidArgumentError("Sparse indices must be strictly ascending")
