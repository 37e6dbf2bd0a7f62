"""
Tests for the Vector facade.

Covers element access, clearing, copying, sub-vectors, conversion and
enumeration across dense and sparse storage.
"""

import numpy as np
import pytest

from numvec import (
    OutOfRangeError,
    InvalidArgumentError,
    DimensionMismatchError,
    MissingArgumentError,
    TypeMismatchError,
)
from numvec.linalg import Vector, build, StorageKind, Zeros, DType, Enumeration


# =============================================================================
# Element Access
# =============================================================================

class TestElementAccess:
    """Test checked indexer and unchecked accessor."""

    def test_len_and_count(self, make_vector, kind):
        """Test len() and count."""
        v = make_vector([1.0, 2.0, 3.0], kind)
        assert len(v) == 3
        assert v.count == 3
        assert v.kind == StorageKind(kind)

    def test_at_round_trip(self, make_vector, kind):
        """Test at() write/read round trip."""
        v = make_vector([0.0] * 5, kind)
        for i, x in enumerate([3.0, -1.5, 0.0, 7.0, 2.5]):
            v.at(i, x)
            assert v.at(i) == x

    def test_indexer_round_trip(self, make_vector, kind):
        """Test checked indexer round trip."""
        v = make_vector([1.0, 2.0, 3.0], kind)
        v[1] = 42.0
        assert v[1] == 42.0

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_indexer_out_of_range(self, make_vector, kind, index):
        """Test checked indexer bounds."""
        v = make_vector([1.0, 2.0, 3.0], kind)
        with pytest.raises(OutOfRangeError):
            _ = v[index]
        with pytest.raises(OutOfRangeError):
            v[index] = 1.0

    def test_out_of_range_is_index_error(self, make_vector):
        """Test OutOfRangeError is an IndexError."""
        v = make_vector([1.0])
        with pytest.raises(IndexError):
            _ = v[1]

    def test_iter(self, make_vector, kind):
        """Test iteration over all values."""
        v = make_vector([1.0, 0.0, 3.0], kind)
        assert list(v) == [1.0, 0.0, 3.0]

    def test_sparse_write_zero_keeps_structure(self, make_vector):
        """Test writing zero shrinks sparse storage."""
        v = make_vector([1.0, 0.0, 3.0], "sparse")
        v[0] = 0.0
        assert v.nnz == 1

    def test_missing_storage(self, requires_numvec):
        """Test Vector(None) is rejected."""
        with pytest.raises(MissingArgumentError):
            Vector(None)


# =============================================================================
# Clearing
# =============================================================================

class TestClear:
    """Test clear, clear_sub_vector and coerce_zero."""

    def test_clear(self, make_vector, kind):
        """Test clear()."""
        v = make_vector([1.0, 2.0, 3.0, 0.0], kind)
        v.clear()
        assert all(v.at(i) == 0 for i in range(v.count))

    def test_clear_sub_vector(self, make_vector, kind):
        """Test clear_sub_vector()."""
        v = make_vector([1.0, 2.0, 3.0, 4.0], kind)
        v.clear_sub_vector(1, 2)
        assert v.to_list() == [1.0, 0.0, 0.0, 4.0]

    @pytest.mark.parametrize("count", [0, -2])
    def test_clear_sub_vector_non_positive_count(self, make_vector, kind, count):
        """Test clear_sub_vector() with a non-positive count."""
        v = make_vector([1.0, 2.0, 3.0], kind)
        with pytest.raises(InvalidArgumentError):
            v.clear_sub_vector(0, count)

    @pytest.mark.parametrize("index,count", [(2, 2), (-1, 1), (3, 1)])
    def test_clear_sub_vector_out_of_range(self, make_vector, kind, index, count):
        """Test clear_sub_vector() bounds."""
        v = make_vector([1.0, 2.0, 3.0], kind)
        with pytest.raises(OutOfRangeError):
            v.clear_sub_vector(index, count)

    def test_coerce_zero_threshold(self, make_vector, kind):
        """Test coerce_zero() with a threshold."""
        v = make_vector([1e-12, 0.5, -1e-9, 0.0, -2.0], kind)
        v.coerce_zero(1e-6)
        assert v.to_list() == [0.0, 0.5, 0.0, 0.0, -2.0]

    def test_coerce_zero_idempotent(self, make_vector, kind):
        """Test coerce_zero() is idempotent."""
        v = make_vector([1e-12, 0.5, -1e-9, 0.0, -2.0], kind)
        v.coerce_zero(1e-6)
        once = v.to_array().copy()
        v.coerce_zero(1e-6)
        np.testing.assert_array_equal(v.to_array(), once)

    def test_coerce_zero_complex_magnitude(self, make_vector, kind):
        """Test coerce_zero() uses the complex modulus."""
        v = make_vector([3 + 4j, 1e-8 + 1e-8j, 0.0], kind, dtype="complex128")
        v.coerce_zero(1e-6)
        np.testing.assert_array_equal(v.to_array(), [3 + 4j, 0, 0])

    def test_coerce_zero_predicate(self, make_vector, kind):
        """Test coerce_zero() with a predicate."""
        v = make_vector([1.0, -2.0, 3.0, -4.0], kind)
        v.coerce_zero(lambda x: x < 0)
        assert v.to_list() == [1.0, 0.0, 3.0, 0.0]

    def test_coerce_zero_sparse_drops_entries(self, make_vector):
        """Test coerce_zero() drops sparse entries."""
        v = make_vector([1e-12, 0.5, 0.0], "sparse")
        v.coerce_zero(1e-6)
        assert v.nnz == 1


# =============================================================================
# Copying
# =============================================================================

class TestClone:
    """Test deep copies."""

    def test_clone_equal(self, make_vector, kind):
        """Test clone() equals the source."""
        v = make_vector([1.0, 0.0, 3.0], kind)
        c = v.clone()
        np.testing.assert_array_equal(c.enumerate().to_array(), v.enumerate().to_array())
        assert c.kind == v.kind
        assert c.dtype == v.dtype

    def test_clone_independent(self, make_vector, kind):
        """Test clone() is independent of the source."""
        v = make_vector([1.0, 0.0, 3.0], kind)
        c = v.clone()
        c[0] = 100.0
        c[1] = 5.0
        assert v.to_list() == [1.0, 0.0, 3.0]
        assert c.storage is not v.storage

    def test_clone_constant(self, requires_numvec):
        """Test clone() of a constant vector."""
        v = build.constant(4, 2.0)
        c = v.clone()
        assert c.kind == StorageKind.DENSE
        assert c.to_list() == [2.0] * 4


class TestSetValues:
    """Test set_values and copy_to."""

    def test_set_values(self, make_vector, kind):
        """Test set_values()."""
        v = make_vector([9.0, 9.0, 9.0], kind)
        v.set_values([1.0, 0.0, 2.0])
        assert v.to_list() == [1.0, 0.0, 2.0]

    def test_set_values_length_mismatch(self, make_vector, kind):
        """Test set_values() length mismatch."""
        v = make_vector([1.0, 2.0], kind)
        with pytest.raises(DimensionMismatchError):
            v.set_values([1.0, 2.0, 3.0])

    def test_set_values_none(self, make_vector):
        """Test set_values(None)."""
        with pytest.raises(MissingArgumentError):
            make_vector([1.0]).set_values(None)

    @pytest.mark.parametrize("target_kind", ["dense", "sparse"])
    def test_copy_to_dirty_target(self, make_vector, kind, target_kind):
        """Test copy_to() overwrites a dirty target."""
        v = make_vector([1.0, 0.0, 3.0, 0.0], kind)
        target = make_vector([9.0, 9.0, 9.0, 9.0], target_kind)
        v.copy_to(target)
        assert target.to_list() == [1.0, 0.0, 3.0, 0.0]

    def test_copy_to_errors(self, make_vector):
        """Test copy_to() argument errors."""
        v = make_vector([1.0, 2.0])
        with pytest.raises(MissingArgumentError):
            v.copy_to(None)
        with pytest.raises(DimensionMismatchError):
            v.copy_to(build.dense(3))

    def test_dimension_mismatch_is_value_error(self, make_vector):
        """Test DimensionMismatchError is a ValueError."""
        with pytest.raises(ValueError):
            make_vector([1.0, 2.0]).copy_to(build.dense(3))


class TestSubVector:
    """Test sub_vector, set_sub_vector and copy_sub_vector_to."""

    def test_sub_vector(self, make_vector, kind):
        """Test sub_vector()."""
        v = make_vector([10.0, 20.0, 30.0, 40.0], kind)
        s = v.sub_vector(1, 2)
        assert s.to_list() == [20.0, 30.0]
        assert s.kind == v.kind

    def test_sub_vector_law(self, make_vector, kind):
        """Test sub_vector() matches the source for every window."""
        v = make_vector([5.0, 0.0, 7.0, 0.0, 9.0, 1.0], kind)
        for index in range(v.count):
            for count in range(1, v.count - index + 1):
                s = v.sub_vector(index, count)
                for k in range(count):
                    assert s.at(k) == v.at(index + k)

    @pytest.mark.parametrize("index,count", [(0, 0), (3, 2), (-1, 2), (0, -1)])
    def test_sub_vector_out_of_range(self, make_vector, kind, index, count):
        """Test sub_vector() bounds."""
        v = make_vector([10.0, 20.0, 30.0, 40.0], kind)
        with pytest.raises(OutOfRangeError):
            v.sub_vector(index, count)

    def test_sub_vector_independent(self, make_vector, kind):
        """Test sub_vector() is independent of the source."""
        v = make_vector([10.0, 20.0, 30.0], kind)
        s = v.sub_vector(0, 2)
        s[0] = -1.0
        assert v[0] == 10.0

    @pytest.mark.parametrize("source_kind", ["dense", "sparse"])
    def test_set_sub_vector(self, make_vector, kind, source_kind):
        """Test set_sub_vector()."""
        v = make_vector([1.0, 2.0, 3.0, 4.0], kind)
        v.set_sub_vector(1, 2, make_vector([99.0, 88.0], source_kind))
        assert v.to_list() == [1.0, 99.0, 88.0, 4.0]

    def test_set_sub_vector_overwrites_with_zeros(self, make_vector, kind):
        """Test set_sub_vector() writes source zeros."""
        v = make_vector([1.0, 2.0, 3.0, 4.0], kind)
        v.set_sub_vector(1, 2, make_vector([0.0, 5.0], "sparse"))
        assert v.to_list() == [1.0, 0.0, 5.0, 4.0]

    def test_set_sub_vector_errors(self, make_vector):
        """Test set_sub_vector() argument errors."""
        v = make_vector([1.0, 2.0, 3.0])
        with pytest.raises(MissingArgumentError):
            v.set_sub_vector(0, 1, None)
        with pytest.raises(OutOfRangeError):
            v.set_sub_vector(2, 2, make_vector([1.0, 2.0]))
        with pytest.raises(OutOfRangeError):
            v.set_sub_vector(0, 3, make_vector([1.0, 2.0]))

    @pytest.mark.parametrize("target_kind", ["dense", "sparse"])
    def test_copy_sub_vector_to_dirty(self, make_vector, kind, target_kind):
        """Test copy_sub_vector_to() into a dirty target."""
        v = make_vector([1.0, 0.0, 3.0, 0.0], kind)
        target = make_vector([9.0] * 5, target_kind)
        v.copy_sub_vector_to(target, 0, 1, 3)
        assert target.to_list() == [9.0, 1.0, 0.0, 3.0, 9.0]

    def test_copy_sub_vector_to_self_overlap(self, make_vector, kind):
        """Test overlapping copy_sub_vector_to() on one vector."""
        v = make_vector([1.0, 2.0, 3.0, 4.0, 5.0], kind)
        v.copy_sub_vector_to(v, 0, 1, 3)
        assert v.to_list() == [1.0, 1.0, 2.0, 3.0, 5.0]

    def test_copy_sub_vector_to_none(self, make_vector):
        """Test copy_sub_vector_to(None)."""
        with pytest.raises(MissingArgumentError):
            make_vector([1.0]).copy_sub_vector_to(None, 0, 0, 1)


class TestElementTypeChecks:
    """Test copies between vectors of different element types."""

    @pytest.mark.parametrize("target_kind", ["dense", "sparse"])
    def test_copy_to_rejects_other_dtype(self, make_vector, kind, target_kind):
        """Test copy_to from complex into real fails with TypeMismatchError."""
        v = make_vector([1 + 2j, 3j], kind, dtype="complex128")
        target = make_vector([9.0, 9.0], target_kind)
        with pytest.raises(TypeMismatchError):
            v.copy_to(target)
        assert target.to_list() == [9.0, 9.0]

    def test_copy_to_rejects_precision_change(self, make_vector, kind):
        """Test copy_to between float32 and float64 is rejected."""
        v = make_vector([1.0, 2.0], kind, dtype="float32")
        with pytest.raises(TypeMismatchError):
            v.copy_to(build.dense(2))

    def test_set_sub_vector_rejects_other_dtype(self, make_vector, kind):
        """Test set_sub_vector with a complex source into a real vector."""
        v = make_vector([1.0, 2.0, 3.0], kind)
        with pytest.raises(TypeMismatchError):
            v.set_sub_vector(0, 2, make_vector([1j, 2j], kind, dtype="complex128"))
        assert v.to_list() == [1.0, 2.0, 3.0]

    def test_copy_sub_vector_to_rejects_other_dtype(self, make_vector, kind):
        """Test copy_sub_vector_to into a vector of another element type."""
        v = make_vector([1.0, 2.0], kind)
        with pytest.raises(TypeMismatchError):
            v.copy_sub_vector_to(build.sparse(2, dtype="complex64"), 0, 0, 1)

    def test_set_values_rejects_complex_into_real(self, make_vector, kind):
        """Test set_values refuses values that would lose their imaginary part."""
        v = make_vector([1.0, 2.0], kind)
        with pytest.raises(TypeMismatchError):
            v.set_values(np.array([1 + 2j, 3j]))
        assert v.to_list() == [1.0, 2.0]

    def test_set_values_accepts_compatible_input(self, make_vector, kind):
        """Test set_values accepts integers and real values into complex vectors."""
        v = make_vector([0j, 0j], kind, dtype="complex128")
        v.set_values([1, 2.5])
        np.testing.assert_array_equal(v.to_array(), [1 + 0j, 2.5 + 0j])

    def test_same_dtype_copy(self, make_vector, kind):
        """Test copy_to between complex vectors keeps imaginary parts."""
        v = make_vector([1 + 2j, 0j, 3j], kind, dtype="complex128")
        target = build.dense(3, dtype="complex128")
        v.copy_to(target)
        np.testing.assert_array_equal(target.to_array(), [1 + 2j, 0j, 3j])


# =============================================================================
# Conversion
# =============================================================================

class TestConversion:
    """Test array and list materialization."""

    def test_to_array_includes_zeros(self, make_vector, kind):
        """Test to_array() includes zeros."""
        v = make_vector([0.0, 2.0, 0.0], kind)
        arr = v.to_array()
        assert isinstance(arr, np.ndarray)
        assert arr.dtype == np.float64
        np.testing.assert_array_equal(arr, [0.0, 2.0, 0.0])

    def test_to_array_is_owned(self, make_vector, kind):
        """Test to_array() returns an owned array."""
        v = make_vector([1.0, 2.0], kind)
        arr = v.to_array()
        arr[0] = 50.0
        assert v[0] == 1.0

    def test_to_array_preserves_dtype(self, make_vector, kind):
        """Test to_array() keeps float32."""
        v = make_vector([1.0, 2.0], kind, dtype="float32")
        assert v.to_array().dtype == np.float32

    def test_constant_to_array(self, requires_numvec):
        """Test to_array() of a constant vector."""
        np.testing.assert_array_equal(build.constant(3, 1.5).to_array(), [1.5] * 3)


# =============================================================================
# Enumeration
# =============================================================================

class TestEnumerate:
    """Test the lazy enumeration family."""

    def test_include(self, make_vector, kind):
        """Test enumeration with INCLUDE."""
        v = make_vector([1.0, 0.0, 3.0], kind)
        assert v.enumerate().to_list() == [1.0, 0.0, 3.0]
        assert v.enumerate_indexed().to_list() == [(0, 1.0), (1, 0.0), (2, 3.0)]

    def test_allow_skip_subset(self, make_vector, kind):
        """Test ALLOW_SKIP enumeration covers the non-zeros."""
        v = make_vector([1.0, 0.0, 3.0], kind)
        pairs = v.enumerate_indexed(Zeros.ALLOW_SKIP).to_list()
        assert [(i, x) for i, x in pairs if x != 0] == [(0, 1.0), (2, 3.0)]

    def test_restartable(self, make_vector, kind):
        """Test enumerations can be iterated twice."""
        v = make_vector([1.0, 0.0, 3.0], kind)
        values = v.enumerate()
        assert isinstance(values, Enumeration)
        assert list(values) == list(values)

    def test_lazy(self, make_vector):
        """Test enumerations read the vector lazily."""
        v = make_vector([1.0, 2.0])
        values = v.enumerate()
        v[0] = 5.0
        assert values.to_list() == [5.0, 2.0]

    def test_to_array(self, make_vector, kind):
        """Test Enumeration.to_array()."""
        v = make_vector([1.0, 0.0], kind, dtype="float32")
        arr = v.enumerate().to_array()
        assert arr.dtype == np.float32
        indexed = v.enumerate_indexed().to_array()
        assert indexed.shape == (2, 2)


# =============================================================================
# Representation
# =============================================================================

class TestRepr:
    """Test repr."""

    def test_short(self, make_vector):
        """Test repr of a short vector."""
        v = make_vector([1.0, 2.0])
        assert repr(v) == "Vector([1.0, 2.0], dtype=float64, kind=dense)"

    def test_long_is_truncated(self, make_vector):
        """Test repr of a long vector is truncated."""
        v = make_vector(list(range(10)), "sparse", dtype=DType.float64)
        text = repr(v)
        assert "'...'" in text
        assert "kind=sparse" in text
        assert text.startswith("Vector([0.0, 1.0, 2.0")
