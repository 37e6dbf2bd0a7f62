"""Policy and Storage Kind Enumerations.

This module defines the small vocabulary callers use to pick between
speed and safety when transforming vectors:

- Zeros: may a transform skip structurally-zero entries?
- ExistingData: may a destination be assumed to read as zero already?
- StorageKind: which storage backend holds a vector's data.

All three are plain values. They are passed per call and never stored
on a vector.
"""

from enum import Enum

__all__ = [
    'Zeros',
    'ExistingData',
    'StorageKind',
]


class Zeros(Enum):
    """Zero handling of a transform.

    Attributes:
        INCLUDE: Every entry is visited, zeros included. Required whenever
                 the transform may turn a zero into a non-zero value
                 (e.g. adding a constant).

        ALLOW_SKIP: The caller asserts ``f(0) == 0``. Sparse storages
                    may then leave structurally-zero entries alone.
                    Passing this for a transform that does not keep zeros
                    gives a silently wrong result, not an error.

    Example:
        >>> v.map(lambda x: 2 * x, Zeros.ALLOW_SKIP)
        >>> v.map(lambda x: x + 1, Zeros.INCLUDE)
    """
    INCLUDE = 'include'
    ALLOW_SKIP = 'allow_skip'


class ExistingData(Enum):
    """What a copy or map may assume about the destination.

    Attributes:
        ASSUME_ZEROS: Destination is freshly built and reads as zero
                      everywhere, so zero values need not be written.

        CLEAR: Destination content is unknown (a reused buffer). Every
               target entry is overwritten, zeros included.
    """
    ASSUME_ZEROS = 'assume_zeros'
    CLEAR = 'clear'


class StorageKind(Enum):
    """Vector storage backend type.

    Attributes:
        DENSE: Contiguous numpy array, one slot per element.

        SPARSE: Sorted index array plus value array holding only
                non-zero entries. Absent entries read as zero.

        CONSTANT: A single value shared by every index, no per-element
                  storage. Used for structural zero vectors.
    """
    DENSE = 'dense'
    SPARSE = 'sparse'
    CONSTANT = 'constant'
