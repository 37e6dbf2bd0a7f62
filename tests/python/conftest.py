"""
Pytest configuration and shared fixtures for numvec tests.
"""

import os
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

# Try to import numvec - if it fails, skip tests that require it
try:
    import numvec
    from numvec.linalg import build, config, StorageKind
    HAS_NUMVEC = True
except ImportError as e:
    HAS_NUMVEC = False
    NUMVEC_IMPORT_ERROR = str(e)


# Try to import scipy
try:
    import scipy.sparse as sp
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def requires_numvec():
    """Skip test if numvec is not available."""
    if not HAS_NUMVEC:
        pytest.skip(f"numvec not available: {NUMVEC_IMPORT_ERROR}")


@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture(params=["dense", "sparse"])
def kind(request):
    """Writable storage kinds."""
    return request.param


@pytest.fixture
def make_vector(requires_numvec):
    """Factory building a vector of the given kind from values."""
    def _make(values, kind="dense", dtype=None):
        if kind == "dense":
            return build.dense(values, dtype=dtype)
        if kind == "sparse":
            return build.sparse_of_array(values, dtype=dtype)
        raise ValueError(f"unknown kind {kind}")
    return _make


@pytest.fixture
def clean_config(requires_numvec, monkeypatch):
    """Isolate tests that change the global configuration."""
    monkeypatch.delenv("NUMVEC_DEFAULT_DTYPE", raising=False)
    monkeypatch.delenv("NUMVEC_DEFAULT_KIND", raising=False)
    config.reset()
    yield config
    os.environ.pop("NUMVEC_DEFAULT_DTYPE", None)
    os.environ.pop("NUMVEC_DEFAULT_KIND", None)
    config.reset()

