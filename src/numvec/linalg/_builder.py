"""
Vector Builder

Allocates new vectors. Every storage handed out here is freshly built and
reads as zero everywhere (constant storages excepted, which hold their
requested value), so callers may copy or map into it with
``ExistingData.ASSUME_ZEROS``.

Kind Selection for ``same_as``:
    reference kind      result kind
    --------------------------------------
    DENSE               DENSE
    SPARSE              SPARSE
    CONSTANT (zero)     SPARSE
    CONSTANT (other)    DENSE

A constant result could not hold mapped or copied data, so constant
references resolve to the writable kind that stores their content
efficiently. An explicit ``kind`` argument is always honored.
"""

import logging
from typing import Any, Iterable, Optional, Tuple, Union

import numpy as np

from .._errors import InvalidArgumentError, check_not_none
from ._config import config, normalize_kind
from ._dtypes import DType, normalize_dtype
from ._policy import StorageKind
from ._storage import VectorStorage
from ._dense import DenseVectorStorage
from ._sparse import SparseVectorStorage
from ._constant import ConstantVectorStorage
from ._vector import Vector

logger = logging.getLogger("numvec.linalg.builder")

__all__ = ['VectorBuilder', 'build']


def _infer_dtype(values: np.ndarray) -> DType:
    if values.dtype.kind in ('f', 'c'):
        try:
            return normalize_dtype(values.dtype)
        except InvalidArgumentError:
            pass
    if values.dtype.kind == 'c':
        return DType.complex128
    return config.default_dtype


class VectorBuilder:
    """
    Factory for vectors of any element type and storage kind.

    Example:
        >>> from numvec.linalg import build
        >>> build.dense([1.0, 2.0, 3.0])
        >>> build.sparse_of_indexed(1000, [(3, 1.5), (700, -2.0)])
        >>> build.same_as(v, 10)      # same dtype and kind, length 10
    """

    # =========================================================================
    # Storage Allocation
    # =========================================================================

    def storage(self, kind: Union[StorageKind, str], length: int,
                dtype=None) -> VectorStorage:
        """Allocate a zero-initialized storage of the given kind."""
        kind = normalize_kind(kind)
        dtype = self._dtype(dtype)
        if kind == StorageKind.DENSE:
            return DenseVectorStorage(length, dtype)
        if kind == StorageKind.SPARSE:
            return SparseVectorStorage(length, dtype)
        if kind == StorageKind.CONSTANT:
            return ConstantVectorStorage(length, dtype)
        raise InvalidArgumentError(f"Unsupported storage kind: {kind!r}")

    def _dtype(self, dtype) -> DType:
        return config.default_dtype if dtype is None else normalize_dtype(dtype)

    # =========================================================================
    # Construction
    # =========================================================================

    def of_storage(self, storage: VectorStorage) -> Vector:
        """Wrap an existing storage (ownership passes to the vector)."""
        check_not_none(storage, 'storage')
        return Vector(storage)

    def zeros(self, length: int, dtype=None,
              kind: Optional[Union[StorageKind, str]] = None) -> Vector:
        """Zero vector of the configured (or given) kind."""
        kind = config.default_kind if kind is None else kind
        return Vector(self.storage(kind, length, dtype))

    def dense(self, length_or_values: Union[int, Iterable[Any]], dtype=None) -> Vector:
        """Dense vector from a length (all zeros) or from values."""
        if isinstance(length_or_values, (int, np.integer)):
            return Vector(DenseVectorStorage(int(length_or_values), self._dtype(dtype)))
        return self.dense_of_array(length_or_values, dtype)

    def dense_of_array(self, values: Iterable[Any], dtype=None) -> Vector:
        """Dense vector holding a copy of ``values``."""
        check_not_none(values, 'values')
        arr = np.asarray(values)
        dtype = _infer_dtype(arr) if dtype is None else normalize_dtype(dtype)
        arr = arr.ravel()
        return Vector(DenseVectorStorage(arr.shape[0], dtype, arr))

    def sparse(self, length: int, dtype=None) -> Vector:
        """Sparse vector with no stored entries."""
        return Vector(SparseVectorStorage(length, self._dtype(dtype)))

    def sparse_of_indexed(self, length: int, pairs: Iterable[Tuple[int, Any]],
                          dtype=None) -> Vector:
        """Sparse vector from ``(index, value)`` pairs."""
        check_not_none(pairs, 'pairs')
        pairs = list(pairs)
        indices = [i for i, _ in pairs]
        values = [x for _, x in pairs]
        storage = SparseVectorStorage.from_entries(length, indices, values, self._dtype(dtype))
        return Vector(storage)

    def sparse_of_array(self, values: Iterable[Any], dtype=None) -> Vector:
        """Sparse vector keeping only the non-zeros of ``values``."""
        check_not_none(values, 'values')
        arr = np.asarray(values).ravel()
        dtype = _infer_dtype(arr) if dtype is None else normalize_dtype(dtype)
        storage = SparseVectorStorage(arr.shape[0], dtype)
        nz = np.flatnonzero(arr)
        storage.set_entries(nz, arr[nz])
        return Vector(storage)

    def constant(self, length: int, value: Any = None, dtype=None) -> Vector:
        """Constant vector (structural zeros when ``value`` is omitted)."""
        return Vector(ConstantVectorStorage(length, self._dtype(dtype), value))

    def same_as(self, reference: Vector, length: Optional[int] = None, dtype=None,
                kind: Optional[Union[StorageKind, str]] = None) -> Vector:
        """Fresh zero vector compatible with ``reference``.

        Args:
            reference: Vector whose element type and kind are matched
            length: Result length (default: ``reference.count``)
            dtype: Override the element type
            kind: Request a specific storage kind instead

        Raises:
            MissingArgumentError: If reference is None
            InvalidArgumentError: If the requested kind or dtype is unsupported
        """
        check_not_none(reference, 'reference')
        storage = reference.storage
        length = storage.length if length is None else length
        dtype = storage.dtype if dtype is None else normalize_dtype(dtype)
        if kind is None:
            kind = self._preferred_kind(storage)
        result = Vector(self.storage(kind, length, dtype))
        logger.debug(f"Built {result.kind.value} vector of length {length} "
                     f"({dtype.value}) like {storage.kind.value}")
        return result

    def _preferred_kind(self, storage: VectorStorage) -> StorageKind:
        if storage.kind != StorageKind.CONSTANT:
            return storage.kind
        return StorageKind.SPARSE if storage.nnz == 0 else StorageKind.DENSE


build = VectorBuilder()
