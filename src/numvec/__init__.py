"""
numvec - Numeric Vectors over Interchangeable Storage

Generic one-dimensional numeric container with:
- Dense, sparse and constant storage backends behind one facade
- Real and complex element types, single and double precision
- Zero-aware map/copy dispatch (Zeros, ExistingData policies)

Architecture:
    ┌──────────────────────────────────────────────┐
    │                Vector (facade)               │
    ├──────────────────────────────────────────────┤
    │  Storage: DENSE | SPARSE | CONSTANT          │
    │  Policy:  Zeros x ExistingData (per call)    │
    └──────────────────────────────────────────────┘

Example:
    >>> from numvec import build, Zeros
    >>> v = build.dense([10, 20, 30, 40])
    >>> v.sub_vector(1, 2).to_list()
    [20.0, 30.0]
"""

__version__ = '0.1.0'

from . import linalg

from ._errors import (
    VectorError,
    OutOfRangeError,
    InvalidArgumentError,
    DimensionMismatchError,
    MissingArgumentError,
    TypeMismatchError,
)

from .linalg import (
    # Containers
    Vector,
    Matrix,
    build,
    matrix_build,

    # Storage kinds and policies
    StorageKind,
    Zeros,
    ExistingData,

    # Element types
    DType,
    float32,
    float64,
    complex64,
    complex128,

    # Configuration
    config,
)

__all__ = [
    # Version
    '__version__',

    # Modules
    'linalg',

    # Errors
    'VectorError',
    'OutOfRangeError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'MissingArgumentError',
    'TypeMismatchError',

    # Containers
    'Vector',
    'Matrix',
    'build',
    'matrix_build',

    # Policies
    'StorageKind',
    'Zeros',
    'ExistingData',

    # Element types
    'DType',
    'float32',
    'float64',
    'complex64',
    'complex128',

    # Configuration
    'config',
]
