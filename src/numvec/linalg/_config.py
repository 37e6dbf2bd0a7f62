"""
Global configuration for numvec.

Provides:
- Default element type for builder calls without an explicit dtype
- Default storage kind for builder calls without an explicit kind
- Environment overrides (``NUMVEC_DEFAULT_DTYPE``, ``NUMVEC_DEFAULT_KIND``)
"""

from __future__ import annotations

import os
import logging
from typing import Union

from .._errors import InvalidArgumentError
from ._dtypes import DType, normalize_dtype
from ._policy import StorageKind

logger = logging.getLogger("numvec.config")

__all__ = ['config', 'normalize_kind']


def normalize_kind(kind: Union[StorageKind, str]) -> StorageKind:
    """Normalize a storage kind given as enum or string."""
    if isinstance(kind, StorageKind):
        return kind
    try:
        return StorageKind(str(kind).lower())
    except ValueError:
        valid = [k.value for k in StorageKind]
        raise InvalidArgumentError(f"Unknown storage kind: {kind!r}. Valid: {valid}")


class _Config:
    """
    Global configuration singleton.

    Example:
        >>> from numvec import config
        >>> config.default_dtype = 'float32'
        >>> config.default_kind = 'sparse'
        >>> config.reset()
    """

    def __init__(self):
        self._default_dtype = DType.float64
        self._default_kind = StorageKind.DENSE
        self._load_environment()

    def _load_environment(self) -> None:
        dtype = os.environ.get('NUMVEC_DEFAULT_DTYPE')
        if dtype:
            try:
                self._default_dtype = normalize_dtype(dtype)
            except InvalidArgumentError as e:
                logger.warning(f"Ignoring NUMVEC_DEFAULT_DTYPE: {e}")

        kind = os.environ.get('NUMVEC_DEFAULT_KIND')
        if kind:
            try:
                self._default_kind = normalize_kind(kind)
            except InvalidArgumentError as e:
                logger.warning(f"Ignoring NUMVEC_DEFAULT_KIND: {e}")

    @property
    def default_dtype(self) -> DType:
        """Element type used when a builder call names none."""
        return self._default_dtype

    @default_dtype.setter
    def default_dtype(self, value: Union[DType, str]):
        self._default_dtype = normalize_dtype(value)
        logger.debug(f"Default dtype set to {self._default_dtype.value}")

    @property
    def default_kind(self) -> StorageKind:
        """Storage kind used when a builder call names none."""
        return self._default_kind

    @default_kind.setter
    def default_kind(self, value: Union[StorageKind, str]):
        self._default_kind = normalize_kind(value)
        logger.debug(f"Default storage kind set to {self._default_kind.value}")

    def reset(self) -> None:
        """Restore defaults (environment overrides included)."""
        self._default_dtype = DType.float64
        self._default_kind = StorageKind.DENSE
        self._load_environment()

    def __repr__(self) -> str:
        return (f"Config(default_dtype={self._default_dtype.value}, "
                f"default_kind={self._default_kind.value})")


config = _Config()
