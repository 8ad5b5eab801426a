"""Tests for identity-token base points."""

import jax.numpy as jnp
import numpy as np
import pytest

from unitarax.errors import DimensionError
from unitarax.manifolds import BasePoint, as_base_point


class TestBasePoint:
    """Test suite for BasePoint."""

    @pytest.fixture
    def isometry(self):
        return jnp.eye(4)[:, :2]

    def test_matrix_view_of_matrix(self, isometry):
        point = BasePoint(isometry)
        assert point.shape == (4, 2)
        assert point.codomain_dim == 4
        assert point.domain_dim == 2
        np.testing.assert_array_equal(point.matrix, isometry)

    def test_tensor_indexed_structure(self):
        array = jnp.reshape(jnp.eye(6)[:, :2], (2, 3, 2))
        point = BasePoint(array)

        assert point.codomain_shape == (2, 3)
        assert point.domain_shape == (2,)
        assert point.matrix.shape == (6, 2)
        np.testing.assert_array_equal(point.matrix, jnp.eye(6)[:, :2])

    def test_multi_axis_domain(self):
        array = jnp.reshape(jnp.eye(8)[:, :4], (2, 4, 2, 2))
        point = BasePoint(array, domain_ndim=2)

        assert point.domain_shape == (2, 2)
        assert point.domain_dim == 4
        assert point.codomain_dim == 8

    def test_tokens_are_unique(self, isometry):
        first = BasePoint(isometry)
        second = BasePoint(isometry)

        assert first.token != second.token
        assert first != second
        assert first == first

    def test_hashable_by_token(self, isometry):
        point = BasePoint(isometry)
        lookup = {point: "W"}
        assert lookup[point] == "W"
        assert BasePoint(isometry) not in lookup

    def test_comparison_with_other_types(self, isometry):
        point = BasePoint(isometry)
        assert point != isometry
        assert point != point.token

    def test_wrap_keeps_existing_base_point(self, isometry):
        point = BasePoint(isometry)
        assert BasePoint.wrap(point) is point
        assert as_base_point(point) is point

    def test_wrap_array_creates_new_point(self, isometry):
        point = as_base_point(isometry)
        assert isinstance(point, BasePoint)
        np.testing.assert_array_equal(point.array, isometry)

    def test_with_matrix_keeps_structure(self):
        point = BasePoint(jnp.reshape(jnp.eye(6)[:, :2], (3, 2, 2)))
        matrix = jnp.eye(6)[:, 2:4]
        new_point = point.with_matrix(matrix)

        assert new_point.shape == point.shape
        assert new_point.domain_ndim == point.domain_ndim
        assert new_point != point
        np.testing.assert_array_equal(new_point.matrix, matrix)

    def test_with_matrix_shape_mismatch(self, isometry):
        with pytest.raises(DimensionError):
            BasePoint(isometry).with_matrix(jnp.eye(3)[:, :2])

    def test_domain_larger_than_codomain(self):
        with pytest.raises(DimensionError):
            BasePoint(jnp.ones((2, 3)))

    @pytest.mark.parametrize("domain_ndim", [0, 2])
    def test_invalid_axis_split(self, isometry, domain_ndim):
        with pytest.raises(DimensionError):
            BasePoint(isometry, domain_ndim=domain_ndim)

    def test_repr(self, isometry):
        point = BasePoint(isometry)
        assert f"token={point.token}" in repr(point)
        assert "(4, 2)" in repr(point)
