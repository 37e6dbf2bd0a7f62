"""
Element Type Definitions

Provides the supported element types (real and complex, single and double
precision) together with their numpy equivalents and additive identity.
"""

from typing import Any, Union
from enum import Enum

import numpy as np

from .._errors import InvalidArgumentError

__all__ = [
    'DType',
    'float32',
    'float64',
    'complex64',
    'complex128',
    'normalize_dtype',
    'is_complex_dtype',
]


class DType(Enum):
    """
    Vector element type enumeration.

    Example:
        >>> from numvec.linalg import DType, build
        >>> v = build.dense(10, dtype=DType.complex128)
        >>> v.dtype.zero
        0j
    """

    float32 = 'float32'
    float64 = 'float64'
    complex64 = 'complex64'
    complex128 = 'complex128'

    @property
    def numpy_dtype(self) -> np.dtype:
        """Equivalent numpy dtype."""
        return np.dtype(self.value)

    @property
    def zero(self) -> Any:
        """Additive identity, as a numpy scalar of this type."""
        return self.numpy_dtype.type(0)

    @property
    def is_complex(self) -> bool:
        return self in (DType.complex64, DType.complex128)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"


# =============================================================================
# Module-Level Constants
# =============================================================================

float32 = DType.float32
float64 = DType.float64
complex64 = DType.complex64
complex128 = DType.complex128


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType, np.dtype, type]) -> DType:
    """
    Normalize a dtype specification to ``DType``.

    Args:
        dtype: ``DType``, its string value, or a numpy dtype/scalar type

    Returns:
        DType member

    Raises:
        InvalidArgumentError: If the element type is not supported

    Example:
        >>> normalize_dtype('float32')
        DType.float32
        >>> normalize_dtype(np.complex128)
        DType.complex128
    """
    if isinstance(dtype, DType):
        return dtype
    if dtype is None:
        raise InvalidArgumentError("dtype must not be None")
    try:
        name = dtype if isinstance(dtype, str) else np.dtype(dtype).name
        return DType(name)
    except (TypeError, ValueError):
        valid = [e.value for e in DType]
        raise InvalidArgumentError(f"Unsupported dtype: {dtype!r}. Supported: {valid}")


def is_complex_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is complex."""
    return normalize_dtype(dtype).is_complex
