"""
Dense Vector Storage

One contiguous numpy array holding every element, zeros included.

Memory Layout:
    - data[length]: element values, dtype matches the storage ``DType``

Fast paths are provided when the other side of a copy or map is dense or
sparse; everything else falls back to the generic storage implementation.
"""

from typing import Any, Callable, Iterator, Optional, Tuple

import numpy as np

from .._errors import check_same_length
from ._dtypes import DType
from ._policy import Zeros, ExistingData, StorageKind
from ._storage import VectorStorage

__all__ = ['DenseVectorStorage']


class DenseVectorStorage(VectorStorage):
    """
    Dense storage backed by a 1-D numpy array.

    Example:
        >>> s = DenseVectorStorage(5)
        >>> s.set_at(2, 3.0)
        >>> s.data
        array([0., 0., 3., 0., 0.])
    """

    __slots__ = ('_data',)

    def __init__(self, length: int, dtype=DType.float64, data: Optional[Any] = None):
        """
        Args:
            length: Number of elements
            dtype: Element type
            data: Optional initial values (copied), must have ``length`` items
        """
        super().__init__(length, dtype)
        if data is None:
            self._data = np.zeros(self._length, dtype=self._dtype.numpy_dtype)
        else:
            data = np.array(data, dtype=self._dtype.numpy_dtype).ravel()
            check_same_length(self._length, data.shape[0], 'data')
            self._data = data

    @property
    def kind(self) -> StorageKind:
        return StorageKind.DENSE

    @property
    def data(self) -> np.ndarray:
        """Raw element array (shared, not a copy)."""
        return self._data

    @property
    def nnz(self) -> int:
        return int(np.count_nonzero(self._data))

    # =========================================================================
    # Element Access
    # =========================================================================

    def at(self, index: int) -> Any:
        return self._data[index]

    def set_at(self, index: int, value: Any) -> None:
        self._data[index] = value

    def clear(self) -> None:
        self._data[:] = 0

    def clear_range(self, index: int, count: int) -> None:
        self._data[index:index + count] = 0

    # =========================================================================
    # Copying
    # =========================================================================

    def copy_to_unchecked(self, target: VectorStorage,
                          existing_data: ExistingData) -> None:
        if isinstance(target, DenseVectorStorage):
            np.copyto(target._data, self._data)
            return
        if target.kind == StorageKind.SPARSE:
            nz = np.flatnonzero(self._data)
            target.set_entries(nz, self._data[nz])
            return
        super().copy_to_unchecked(target, existing_data)

    def copy_sub_vector_to_unchecked(self, target: VectorStorage, source_index: int,
                                     target_index: int, count: int,
                                     existing_data: ExistingData) -> None:
        window = self._data[source_index:source_index + count]
        if isinstance(target, DenseVectorStorage):
            # numpy resolves overlap when target is self
            target._data[target_index:target_index + count] = window
            return
        if target.kind == StorageKind.SPARSE:
            nz = np.flatnonzero(window)
            target.replace_range(target_index, count, nz + target_index, window[nz])
            return
        super().copy_sub_vector_to_unchecked(target, source_index, target_index,
                                             count, existing_data)

    # =========================================================================
    # Enumeration
    # =========================================================================

    def enumerate(self) -> Iterator[Any]:
        return iter(self._data)

    def enumerate_indexed(self) -> Iterator[Tuple[int, Any]]:
        for i in range(self._length):
            yield i, self._data[i]

    def enumerate_non_zero_indexed(self) -> Iterator[Tuple[int, Any]]:
        for i in np.flatnonzero(self._data):
            yield int(i), self._data[i]

    # =========================================================================
    # Mapping
    # =========================================================================

    def map_to_unchecked(self, target: VectorStorage, f: Callable[[Any], Any],
                         zeros: Zeros, existing_data: ExistingData) -> None:
        if isinstance(target, DenseVectorStorage):
            target._data[:] = np.fromiter(
                (f(x) for x in self._data),
                dtype=target.dtype.numpy_dtype, count=self._length,
            )
            return
        if target.kind == StorageKind.SPARSE:
            if zeros == Zeros.ALLOW_SKIP:
                nz = np.flatnonzero(self._data)
                mapped = np.fromiter((f(x) for x in self._data[nz]),
                                     dtype=target.dtype.numpy_dtype, count=nz.shape[0])
                target.set_entries(nz, mapped)
            else:
                _set_sparse_result(target, np.fromiter(
                    (f(x) for x in self._data),
                    dtype=target.dtype.numpy_dtype, count=self._length,
                ))
            return
        super().map_to_unchecked(target, f, zeros, existing_data)

    def map_indexed_to_unchecked(self, target: VectorStorage,
                                 f: Callable[[int, Any], Any],
                                 zeros: Zeros, existing_data: ExistingData) -> None:
        if isinstance(target, DenseVectorStorage):
            target._data[:] = np.fromiter(
                (f(i, self._data[i]) for i in range(self._length)),
                dtype=target.dtype.numpy_dtype, count=self._length,
            )
            return
        if target.kind == StorageKind.SPARSE:
            if zeros == Zeros.ALLOW_SKIP:
                nz = np.flatnonzero(self._data)
                mapped = np.fromiter((f(int(i), self._data[i]) for i in nz),
                                     dtype=target.dtype.numpy_dtype, count=nz.shape[0])
                target.set_entries(nz, mapped)
            else:
                _set_sparse_result(target, np.fromiter(
                    (f(i, self._data[i]) for i in range(self._length)),
                    dtype=target.dtype.numpy_dtype, count=self._length,
                ))
            return
        super().map_indexed_to_unchecked(target, f, zeros, existing_data)


def _set_sparse_result(target: VectorStorage, full: np.ndarray) -> None:
    # sparse targets keep only the non-zeros of a fully evaluated result
    nz = np.flatnonzero(full)
    target.set_entries(nz, full[nz])
