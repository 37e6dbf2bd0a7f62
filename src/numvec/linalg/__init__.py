"""numvec Linear Algebra Containers.

This module provides a one-dimensional numeric container (``Vector``)
whose data can live in interchangeable storage backends, together with
the policy vocabulary used to transform it efficiently.

Type Hierarchy:

    VectorStorage (ABC)
    ├── DenseVectorStorage        # Contiguous numpy array
    ├── SparseVectorStorage       # Sorted (index, value) arrays, non-zeros only
    └── ConstantVectorStorage     # One shared value, no per-element memory

    Vector                        # Facade owning exactly one storage
    Matrix                        # Minimal 2-D result of to_row/column_matrix

Quick Start:
    >>> from numvec.linalg import build, Zeros
    >>>
    >>> v = build.dense([1, 0, 3, 0, 5])
    >>> doubled = v.map(lambda x: 2 * x)               # zeros may be skipped
    >>> shifted = v.map(lambda x: x + 1, Zeros.INCLUDE)
    >>>
    >>> s = build.sparse_of_indexed(1_000_000, [(7, 1.0)])
    >>> s.sub_vector(0, 10).to_list()

Policies:
    - Zeros.INCLUDE / Zeros.ALLOW_SKIP
    - ExistingData.ASSUME_ZEROS / ExistingData.CLEAR
"""

# =============================================================================
# Element Types
# =============================================================================
from ._dtypes import (
    DType,
    float32,
    float64,
    complex64,
    complex128,
    normalize_dtype,
    is_complex_dtype,
)

# =============================================================================
# Policies
# =============================================================================
from ._policy import (
    Zeros,
    ExistingData,
    StorageKind,
)

# =============================================================================
# Configuration
# =============================================================================
from ._config import config, normalize_kind

# =============================================================================
# Storage Backends
# =============================================================================
from ._storage import VectorStorage, check_range
from ._dense import DenseVectorStorage
from ._sparse import SparseVectorStorage
from ._constant import ConstantVectorStorage

# =============================================================================
# Containers
# =============================================================================
from ._enumeration import Enumeration
from ._vector import Vector
from ._builder import VectorBuilder, build
from ._matrix import (
    Matrix,
    DenseMatrixStorage,
    SparseMatrixStorage,
    MatrixBuilder,
    matrix_build,
)


# =============================================================================
# Public API
# =============================================================================
__all__ = [
    # ---- Element Types ----
    'DType',
    'float32',
    'float64',
    'complex64',
    'complex128',
    'normalize_dtype',
    'is_complex_dtype',

    # ---- Policies ----
    'Zeros',
    'ExistingData',
    'StorageKind',

    # ---- Configuration ----
    'config',
    'normalize_kind',

    # ---- Storage ----
    'VectorStorage',
    'DenseVectorStorage',
    'SparseVectorStorage',
    'ConstantVectorStorage',
    'check_range',

    # ---- Containers ----
    'Enumeration',
    'Vector',
    'VectorBuilder',
    'build',
    'Matrix',
    'DenseMatrixStorage',
    'SparseMatrixStorage',
    'MatrixBuilder',
    'matrix_build',
]
