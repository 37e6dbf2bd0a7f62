"""
Error handling for numvec.

Every failure raised by a checked vector operation is a ``VectorError``.
The concrete classes also derive from the matching builtin exception so
callers can catch either ``OutOfRangeError`` or plain ``IndexError``.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

NUMVEC_OK = 0

# General errors (1-9)
NUMVEC_ERROR_UNKNOWN = 1
NUMVEC_ERROR_NULL_ARGUMENT = 4

# Argument errors (10-19)
NUMVEC_ERROR_INVALID_ARGUMENT = 10
NUMVEC_ERROR_DIMENSION_MISMATCH = 11
NUMVEC_ERROR_INDEX_OUT_OF_BOUNDS = 14

# Type errors (20-29)
NUMVEC_ERROR_TYPE_MISMATCH = 21


_ERROR_MESSAGES = {
    NUMVEC_OK: "Success",
    NUMVEC_ERROR_UNKNOWN: "Unknown error",
    NUMVEC_ERROR_NULL_ARGUMENT: "Missing argument",
    NUMVEC_ERROR_INVALID_ARGUMENT: "Invalid argument",
    NUMVEC_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    NUMVEC_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    NUMVEC_ERROR_TYPE_MISMATCH: "Type mismatch",
}


# =============================================================================
# Exception Classes
# =============================================================================

class VectorError(Exception):
    """
    Base exception for all numvec errors.

    Attributes:
        code: Numeric error code (``NUMVEC_ERROR_*``)
        message: Human readable message
    """

    default_code = NUMVEC_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        self.code = self.default_code if code is None else code
        if message is None:
            message = _ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "VectorError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(msg, code)


class OutOfRangeError(VectorError, IndexError):
    """Index or sub-range lies outside ``[0, count)``."""

    default_code = NUMVEC_ERROR_INDEX_OUT_OF_BOUNDS


class InvalidArgumentError(VectorError, ValueError):
    """A parameter has an unusable value (non-positive count, bad dtype, ...)."""

    default_code = NUMVEC_ERROR_INVALID_ARGUMENT


class DimensionMismatchError(InvalidArgumentError):
    """Two containers taking part in one operation differ in length."""

    default_code = NUMVEC_ERROR_DIMENSION_MISMATCH


class MissingArgumentError(VectorError, TypeError):
    """A required container or array argument is ``None``."""

    default_code = NUMVEC_ERROR_NULL_ARGUMENT


class TypeMismatchError(VectorError, TypeError):
    """Source and target hold different element types."""

    default_code = NUMVEC_ERROR_TYPE_MISMATCH


# =============================================================================
# Checking Helpers
# =============================================================================

def check_not_none(value, name: str) -> None:
    """Raise ``MissingArgumentError`` if ``value`` is ``None``."""
    if value is None:
        raise MissingArgumentError(f"Argument '{name}' must not be None")


def check_same_length(expected: int, actual: int, name: str) -> None:
    """Raise ``DimensionMismatchError`` unless the two lengths agree."""
    if expected != actual:
        raise DimensionMismatchError(
            f"Argument '{name}' has length {actual}, expected {expected}"
        )


def check_same_dtype(expected, actual, name: str) -> None:
    """Raise ``TypeMismatchError`` unless the two element types agree."""
    if expected != actual:
        raise TypeMismatchError.from_code(
            NUMVEC_ERROR_TYPE_MISMATCH,
            f"Argument '{name}' has dtype {actual}, expected {expected}",
        )


__all__ = [
    'NUMVEC_OK',
    'NUMVEC_ERROR_UNKNOWN',
    'NUMVEC_ERROR_NULL_ARGUMENT',
    'NUMVEC_ERROR_INVALID_ARGUMENT',
    'NUMVEC_ERROR_DIMENSION_MISMATCH',
    'NUMVEC_ERROR_INDEX_OUT_OF_BOUNDS',
    'NUMVEC_ERROR_TYPE_MISMATCH',
    'VectorError',
    'OutOfRangeError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'MissingArgumentError',
    'TypeMismatchError',
    'check_not_none',
    'check_same_length',
    'check_same_dtype',
]
