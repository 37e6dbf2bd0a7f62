"""
Matrix Container (minimal)

Just enough of a two-dimensional container to receive the results of
``Vector.to_column_matrix()`` and ``Vector.to_row_matrix()``. Matrix
algebra is not provided here.

Storage Types:
    - DenseMatrixStorage: 2-D numpy array
    - SparseMatrixStorage: coordinate map {(row, col): value}, non-zeros only
"""

import logging
from typing import Any, Dict, Tuple

import numpy as np

from .._errors import InvalidArgumentError, OutOfRangeError, check_not_none
from ._dtypes import DType, normalize_dtype
from ._policy import StorageKind

logger = logging.getLogger("numvec.linalg.matrix")

__all__ = [
    'DenseMatrixStorage',
    'SparseMatrixStorage',
    'Matrix',
    'MatrixBuilder',
    'matrix_build',
]


# =============================================================================
# Storage
# =============================================================================

class _MatrixStorage:
    """Shared shape/dtype handling for matrix storages."""

    __slots__ = ('_rows', '_cols', '_dtype')

    kind = None

    def __init__(self, rows: int, cols: int, dtype=DType.float64):
        if rows < 0 or cols < 0:
            raise InvalidArgumentError(f"Matrix shape must be non-negative, got ({rows}, {cols})")
        self._rows = rows
        self._cols = cols
        self._dtype = normalize_dtype(dtype)

    @property
    def row_count(self) -> int:
        return self._rows

    @property
    def column_count(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    @property
    def dtype(self) -> DType:
        return self._dtype


class DenseMatrixStorage(_MatrixStorage):
    """Dense row-major matrix storage."""

    __slots__ = ('_data',)

    kind = StorageKind.DENSE

    def __init__(self, rows: int, cols: int, dtype=DType.float64):
        super().__init__(rows, cols, dtype)
        self._data = np.zeros((rows, cols), dtype=self._dtype.numpy_dtype)

    @property
    def data(self) -> np.ndarray:
        return self._data

    def at(self, row: int, col: int) -> Any:
        return self._data[row, col]

    def set_at(self, row: int, col: int, value: Any) -> None:
        self._data[row, col] = value

    def to_array(self) -> np.ndarray:
        return self._data.copy()


class SparseMatrixStorage(_MatrixStorage):
    """Coordinate-map matrix storage holding non-zeros only."""

    __slots__ = ('_entries',)

    kind = StorageKind.SPARSE

    def __init__(self, rows: int, cols: int, dtype=DType.float64):
        super().__init__(rows, cols, dtype)
        self._entries: Dict[Tuple[int, int], Any] = {}

    @property
    def nnz(self) -> int:
        return len(self._entries)

    def at(self, row: int, col: int) -> Any:
        return self._entries.get((row, col), self._dtype.zero)

    def set_at(self, row: int, col: int, value: Any) -> None:
        if value == 0:
            self._entries.pop((row, col), None)
        else:
            self._entries[(row, col)] = self._dtype.numpy_dtype.type(value)

    def items(self):
        """``((row, col), value)`` pairs in row-major order."""
        return sorted(self._entries.items())

    def to_array(self) -> np.ndarray:
        result = np.zeros(self.shape, dtype=self._dtype.numpy_dtype)
        for (i, j), value in self._entries.items():
            result[i, j] = value
        return result


# =============================================================================
# Matrix Facade
# =============================================================================

class Matrix:
    """
    Two-dimensional container over a dense or sparse matrix storage.

    Example:
        >>> m = build.dense([1.0, 2.0]).to_column_matrix()
        >>> m.shape
        (2, 1)
    """

    __slots__ = ('_storage',)

    def __init__(self, storage: _MatrixStorage):
        check_not_none(storage, 'storage')
        self._storage = storage

    @property
    def storage(self) -> _MatrixStorage:
        return self._storage

    @property
    def row_count(self) -> int:
        return self._storage.row_count

    @property
    def column_count(self) -> int:
        return self._storage.column_count

    @property
    def shape(self) -> Tuple[int, int]:
        return self._storage.shape

    @property
    def dtype(self) -> DType:
        return self._storage.dtype

    @property
    def kind(self) -> StorageKind:
        return self._storage.kind

    def at(self, row: int, col: int) -> Any:
        """Unchecked read."""
        return self._storage.at(row, col)

    def __getitem__(self, key: Tuple[int, int]) -> Any:
        row, col = key
        if not (0 <= row < self.row_count and 0 <= col < self.column_count):
            raise OutOfRangeError(f"Index ({row}, {col}) out of bounds {self.shape}")
        return self._storage.at(row, col)

    def to_array(self) -> np.ndarray:
        """All values as a new 2-D numpy array."""
        return self._storage.to_array()

    def to_scipy(self):
        """Convert to scipy CSR matrix."""
        try:
            import scipy.sparse as sp
        except ImportError:
            raise ImportError("scipy is required for to_scipy()")
        if isinstance(self._storage, SparseMatrixStorage):
            items = self._storage.items()
            rows = np.array([i for (i, _), _ in items], dtype=np.int64)
            cols = np.array([j for (_, j), _ in items], dtype=np.int64)
            data = np.array([x for _, x in items], dtype=self.dtype.numpy_dtype)
            return sp.csr_matrix((data, (rows, cols)), shape=self.shape)
        return sp.csr_matrix(self._storage.data)

    def __repr__(self) -> str:
        return (f"Matrix(shape={self.shape}, dtype={self.dtype.value}, "
                f"kind={self.kind.value})")


class MatrixBuilder:
    """Allocates zero matrices matching a vector's element type and kind."""

    def same_as(self, reference, rows: int, cols: int) -> Matrix:
        check_not_none(reference, 'reference')
        if reference.kind == StorageKind.DENSE:
            storage = DenseMatrixStorage(rows, cols, reference.dtype)
        else:
            storage = SparseMatrixStorage(rows, cols, reference.dtype)
        logger.debug(f"Built {storage.kind.value} matrix {rows}x{cols}")
        return Matrix(storage)


matrix_build = MatrixBuilder()
