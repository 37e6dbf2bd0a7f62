"""
Vector Facade

``Vector`` is the backend-agnostic public surface over a ``VectorStorage``.
It owns exactly one storage, validates arguments, chooses the
``Zeros``/``ExistingData`` policy pair for each call and delegates the
actual work to the storage.

Policy Choices:

    Operation                     Zeros         ExistingData
    ---------------------------------------------------------------
    clone / sub_vector / to_*     -             ASSUME_ZEROS (fresh result)
    copy_to / set_sub_vector      -             CLEAR (target may be dirty)
    map_inplace (+ indexed)       caller        ASSUME_ZEROS (self)
    map(f) allocating             caller        ASSUME_ZEROS (fresh result)
    map(f, result=r)              INCLUDE       ASSUME_ZEROS (every entry written)
    map(f, result=r)              ALLOW_SKIP    CLEAR (no stale leftovers in r)

Ownership:
    Storage is never shared between two live vectors. Every operation
    producing a vector allocates fresh storage through the builder.

Example:
    >>> from numvec.linalg import build, Zeros
    >>> v = build.dense([1, 0, 3, 0, 5])
    >>> v.map(lambda x: x * 2, Zeros.ALLOW_SKIP).to_list()
    [2.0, 0.0, 6.0, 0.0, 10.0]
    >>> v.map(lambda x: x + 1, Zeros.INCLUDE).to_list()
    [2.0, 1.0, 4.0, 1.0, 6.0]
"""

import logging
from typing import Any, Callable, Iterator, Optional, Union

import numpy as np

from .._errors import (
    NUMVEC_ERROR_TYPE_MISMATCH,
    OutOfRangeError,
    InvalidArgumentError,
    TypeMismatchError,
    check_not_none,
    check_same_length,
)
from ._dtypes import DType
from ._policy import Zeros, ExistingData, StorageKind
from ._storage import VectorStorage, check_range
from ._dense import DenseVectorStorage
from ._enumeration import Enumeration

logger = logging.getLogger("numvec.linalg.vector")

__all__ = ['Vector']

_NO_VALUE = object()


def _existing_data_for(zeros: Zeros) -> ExistingData:
    # a reused result must lose its old non-zeros when entries may be skipped
    return ExistingData.ASSUME_ZEROS if zeros == Zeros.INCLUDE else ExistingData.CLEAR


class Vector:
    """
    One-dimensional numeric container over an interchangeable storage.

    Attributes:
        storage: The owned ``VectorStorage``
        count: Number of elements (always ``storage.length``)
        dtype: Element type
        kind: Storage backend type

    Example:
        >>> v = build.sparse(5)
        >>> v[3] = 2.0
        >>> v.at(3)
        2.0
        >>> v.enumerate_indexed(Zeros.ALLOW_SKIP).to_list()
        [(3, 2.0)]
    """

    __slots__ = ('_storage',)

    def __init__(self, storage: VectorStorage):
        check_not_none(storage, 'storage')
        self._storage = storage

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def storage(self) -> VectorStorage:
        """Raw storage backend."""
        return self._storage

    @property
    def count(self) -> int:
        """Number of elements."""
        return self._storage.length

    @property
    def dtype(self) -> DType:
        return self._storage.dtype

    @property
    def kind(self) -> StorageKind:
        return self._storage.kind

    @property
    def nnz(self) -> int:
        """Number of stored non-zero elements."""
        return self._storage.nnz

    @property
    def zero(self) -> Any:
        return self._storage.zero

    def __len__(self) -> int:
        return self._storage.length

    # =========================================================================
    # Element Access
    # =========================================================================

    def __getitem__(self, index: int) -> Any:
        """Checked read. Raises ``OutOfRangeError`` outside ``[0, count)``."""
        return self._storage[index]

    def __setitem__(self, index: int, value: Any) -> None:
        """Checked write. Raises ``OutOfRangeError`` outside ``[0, count)``."""
        self._storage[index] = value

    def at(self, index: int, value: Any = _NO_VALUE) -> Any:
        """Unchecked read (``at(i)``) or write (``at(i, x)``).

        No bounds validation happens here. Use it only on indices already
        known to be inside ``[0, count)``.
        """
        if value is _NO_VALUE:
            return self._storage.at(index)
        self._storage.set_at(index, value)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._storage.enumerate())

    # =========================================================================
    # Clearing
    # =========================================================================

    def clear(self) -> None:
        """Reset all values to zero."""
        self._storage.clear()

    def clear_sub_vector(self, index: int, count: int) -> None:
        """Reset ``count`` values starting at ``index`` to zero.

        Raises:
            InvalidArgumentError: If count < 1
            OutOfRangeError: If the range leaves ``[0, count)``
        """
        if count < 1:
            raise InvalidArgumentError(f"count must be positive, got {count}")
        if index < 0 or index + count > self.count:
            raise OutOfRangeError(
                f"Range [{index}, {index + count}) out of bounds [0, {self.count})"
            )
        self._storage.clear_range(index, count)

    def coerce_zero(self, threshold: Union[float, Callable[[Any], bool]]) -> None:
        """Set values to zero in place.

        Args:
            threshold: Either a magnitude (values with ``abs(x) < threshold``
                become zero) or a predicate (values with ``predicate(x)``
                become zero).

        Note:
            Both forms map with ``Zeros.ALLOW_SKIP``. A zero input stays
            zero whatever the predicate answers, so skipping structural
            zeros cannot change the result.
        """
        zero = self.zero
        if callable(threshold):
            predicate = threshold
            self.map_inplace(lambda x: zero if predicate(x) else x, Zeros.ALLOW_SKIP)
        else:
            self.map_inplace(lambda x: zero if abs(x) < threshold else x, Zeros.ALLOW_SKIP)

    # =========================================================================
    # Copying
    # =========================================================================

    def clone(self) -> 'Vector':
        """Deep copy with a same-kind-preferring storage."""
        from ._builder import build
        result = build.same_as(self)
        self._storage.copy_to_unchecked(result.storage, ExistingData.ASSUME_ZEROS)
        return result

    def set_values(self, values) -> None:
        """Replace all values.

        Raises:
            MissingArgumentError: If values is None
            DimensionMismatchError: If ``len(values) != count``
            TypeMismatchError: If values cannot be stored without losing
                information (complex values into a real vector)
        """
        check_not_none(values, 'values')
        values = np.asarray(values)
        check_same_length(self.count, values.shape[0] if values.ndim else 1, 'values')
        if not np.can_cast(values.dtype, self.dtype.numpy_dtype, casting='same_kind'):
            raise TypeMismatchError.from_code(
                NUMVEC_ERROR_TYPE_MISMATCH,
                f"Argument 'values' has dtype {values.dtype}, expected {self.dtype}",
            )
        source = DenseVectorStorage(self.count, self.dtype, values)
        source.copy_to(self._storage)

    def copy_to(self, target: 'Vector') -> None:
        """Copy all values into ``target``, overwriting its content.

        Raises:
            MissingArgumentError: If target is None
            DimensionMismatchError: If target has a different count
            TypeMismatchError: If target has a different element type
        """
        check_not_none(target, 'target')
        self._storage.copy_to(target.storage, ExistingData.CLEAR)

    def sub_vector(self, index: int, count: int) -> 'Vector':
        """New vector holding ``count`` values starting at ``index``.

        Raises:
            OutOfRangeError: If index < 0, count < 1 or index + count > self.count
        """
        from ._builder import build
        check_range(index, count, self.count, 'index')
        result = build.same_as(self, count)
        self._storage.copy_sub_vector_to_unchecked(
            result.storage, index, 0, count, ExistingData.ASSUME_ZEROS)
        return result

    def set_sub_vector(self, index: int, count: int, source: 'Vector') -> None:
        """Write ``count`` values of ``source`` (from its index 0) at ``index``.

        Raises:
            MissingArgumentError: If source is None
            OutOfRangeError: If either window is out of range
            TypeMismatchError: If source has a different element type
        """
        check_not_none(source, 'source')
        source.storage.copy_sub_vector_to(self._storage, 0, index, count,
                                          ExistingData.CLEAR)

    def copy_sub_vector_to(self, destination: 'Vector', source_index: int,
                           target_index: int, count: int) -> None:
        """Copy a window of this vector into a window of ``destination``."""
        check_not_none(destination, 'destination')
        self._storage.copy_sub_vector_to(destination.storage, source_index,
                                         target_index, count, ExistingData.CLEAR)

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_array(self) -> np.ndarray:
        """All values (zeros included) as a new numpy array."""
        result = DenseVectorStorage(self.count, self.dtype)
        self._storage.copy_to_unchecked(result, ExistingData.ASSUME_ZEROS)
        return result.data

    def to_list(self) -> list:
        return self.to_array().tolist()

    def to_column_matrix(self):
        """Matrix with this vector as its single column."""
        from ._matrix import matrix_build
        result = matrix_build.same_as(self, self.count, 1)
        self._storage.copy_to_column_unchecked(result.storage, 0, ExistingData.ASSUME_ZEROS)
        return result

    def to_row_matrix(self):
        """Matrix with this vector as its single row."""
        from ._matrix import matrix_build
        result = matrix_build.same_as(self, 1, self.count)
        self._storage.copy_to_row_unchecked(result.storage, 0, ExistingData.ASSUME_ZEROS)
        return result

    def to_scipy(self):
        """Convert to a ``1 x count`` scipy CSR matrix.

        Returns:
            scipy.sparse.csr_matrix
        """
        try:
            import scipy.sparse as sp
        except ImportError:
            raise ImportError("scipy is required for to_scipy()")

        items = list(self._storage.enumerate_non_zero_indexed())
        cols = np.array([i for i, _ in items], dtype=np.int64)
        data = np.array([x for _, x in items], dtype=self.dtype.numpy_dtype)
        rows = np.zeros(cols.shape[0], dtype=np.int64)
        return sp.csr_matrix((data, (rows, cols)), shape=(1, self.count))

    # =========================================================================
    # Enumeration
    # =========================================================================

    def enumerate(self, zeros: Zeros = Zeros.INCLUDE) -> Enumeration:
        """Values in index order.

        With ``Zeros.ALLOW_SKIP`` zero values may be omitted.
        """
        storage = self._storage
        if zeros == Zeros.ALLOW_SKIP:
            return Enumeration(storage.enumerate_non_zero, self.dtype.numpy_dtype)
        return Enumeration(storage.enumerate, self.dtype.numpy_dtype)

    def enumerate_indexed(self, zeros: Zeros = Zeros.INCLUDE) -> Enumeration:
        """``(index, value)`` pairs in index order.

        With ``Zeros.ALLOW_SKIP`` pairs with a zero value may be omitted.
        """
        storage = self._storage
        if zeros == Zeros.ALLOW_SKIP:
            return Enumeration(storage.enumerate_non_zero_indexed)
        return Enumeration(storage.enumerate_indexed)

    # =========================================================================
    # Mapping
    # =========================================================================

    def map_inplace(self, f: Callable[[Any], Any], zeros: Zeros = Zeros.ALLOW_SKIP) -> None:
        """Replace every value ``x`` with ``f(x)``.

        Unless ``zeros`` is ``Zeros.INCLUDE``, zero values may or may not be
        passed to ``f`` depending on the storage (relevant for sparse).
        """
        self._storage.map_to_unchecked(self._storage, f, zeros, ExistingData.ASSUME_ZEROS)

    def map_indexed_inplace(self, f: Callable[[int, Any], Any],
                            zeros: Zeros = Zeros.ALLOW_SKIP) -> None:
        """Replace every value ``x`` at index ``i`` with ``f(i, x)``."""
        self._storage.map_indexed_to_unchecked(self._storage, f, zeros,
                                               ExistingData.ASSUME_ZEROS)

    def map(self, f: Callable[[Any], Any], zeros: Zeros = Zeros.ALLOW_SKIP,
            result: Optional['Vector'] = None) -> 'Vector':
        """Apply ``f`` to every value.

        Args:
            f: Element transform
            zeros: Zero handling, see ``Zeros``
            result: Existing vector to write into. A new vector of the
                same element type is built when omitted.

        Returns:
            The result vector.
        """
        if result is None:
            return self._map_new(f, zeros, self.dtype, indexed=False)
        self._map_into(f, zeros, result, indexed=False)
        return result

    def map_indexed(self, f: Callable[[int, Any], Any], zeros: Zeros = Zeros.ALLOW_SKIP,
                    result: Optional['Vector'] = None) -> 'Vector':
        """Apply ``f(i, x)`` to every value ``x`` at index ``i``."""
        if result is None:
            return self._map_new(f, zeros, self.dtype, indexed=True)
        self._map_into(f, zeros, result, indexed=True)
        return result

    def map_convert(self, f: Callable[[Any], Any], dtype=None,
                    zeros: Zeros = Zeros.ALLOW_SKIP,
                    result: Optional['Vector'] = None) -> 'Vector':
        """Apply ``f`` producing values of another element type.

        Exactly one of ``dtype`` (build a new vector) or ``result`` (write
        into an existing vector) is expected.
        """
        if result is None:
            return self._map_new(f, zeros, self._convert_dtype(dtype), indexed=False)
        self._map_into(f, zeros, result, indexed=False)
        return result

    def map_indexed_convert(self, f: Callable[[int, Any], Any], dtype=None,
                            zeros: Zeros = Zeros.ALLOW_SKIP,
                            result: Optional['Vector'] = None) -> 'Vector':
        """Indexed variant of ``map_convert``."""
        if result is None:
            return self._map_new(f, zeros, self._convert_dtype(dtype), indexed=True)
        self._map_into(f, zeros, result, indexed=True)
        return result

    def _convert_dtype(self, dtype) -> DType:
        if dtype is None:
            raise InvalidArgumentError("map_convert needs a target dtype or a result vector")
        return dtype

    def _map_new(self, f, zeros: Zeros, dtype, indexed: bool) -> 'Vector':
        from ._builder import build
        result = build.same_as(self, dtype=dtype)
        if indexed:
            self._storage.map_indexed_to_unchecked(result.storage, f, zeros,
                                                   ExistingData.ASSUME_ZEROS)
        else:
            self._storage.map_to_unchecked(result.storage, f, zeros,
                                           ExistingData.ASSUME_ZEROS)
        return result

    def _map_into(self, f, zeros: Zeros, result: 'Vector', indexed: bool) -> None:
        check_not_none(result, 'result')
        existing_data = _existing_data_for(zeros)
        logger.debug(f"Mapping into existing result with {zeros.value}/{existing_data.value}")
        if indexed:
            self._storage.map_indexed_to(result.storage, f, zeros, existing_data)
        else:
            self._storage.map_to(result.storage, f, zeros, existing_data)

    # =========================================================================
    # Representation
    # =========================================================================

    def __repr__(self) -> str:
        n = self.count
        if n <= 6:
            data_str = str(self.to_list())
        else:
            values = list(self._storage.enumerate())
            preview = [v.item() for v in values[:3]] + ['...'] + [v.item() for v in values[-3:]]
            data_str = str(preview)
        return f"Vector({data_str}, dtype={self.dtype.value}, kind={self.kind.value})"

    def __str__(self) -> str:
        return self.__repr__()
