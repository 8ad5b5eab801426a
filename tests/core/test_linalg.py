"""Tests for the dense linear-algebra kernels."""

import logging

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from unitarax.core import linalg
from unitarax.core.constants import NumericalConstants
from unitarax.errors import DimensionError, UnknownAlgorithmError


def _random_isometry(key, n, p, dtype=jnp.float64):
    q, _ = jnp.linalg.qr(jax.random.normal(key, (n, p), dtype=dtype))
    return q


class TestElementaryKernels:
    """Test adjoint, Hermitian/anti-Hermitian parts and the matrix exponential."""

    @pytest.fixture
    def matrix(self):
        key_re, key_im = jax.random.split(jax.random.key(0))
        return jax.random.normal(key_re, (3, 3)) + 1j * jax.random.normal(key_im, (3, 3))

    def test_adjoint_is_conjugate_transpose(self, matrix):
        np.testing.assert_allclose(linalg.adjoint(matrix), np.conj(np.asarray(matrix)).T)

    def test_adjoint_of_real_matrix_is_transpose(self):
        m = jnp.arange(6.0).reshape(2, 3)
        np.testing.assert_array_equal(linalg.adjoint(m), m.T)

    def test_antihermitian_projection(self, matrix):
        a = linalg.project_antihermitian(matrix)
        np.testing.assert_allclose(linalg.adjoint(a), -a, atol=1e-14)

        # Projecting twice changes nothing
        np.testing.assert_allclose(linalg.project_antihermitian(a), a, atol=1e-14)

    def test_antihermitian_part_removes_hermitian_part(self, matrix):
        hermitian = 0.5 * (matrix + linalg.adjoint(matrix))
        np.testing.assert_allclose(linalg.project_antihermitian(matrix - hermitian), matrix - hermitian, atol=1e-14)
        np.testing.assert_allclose(linalg.project_antihermitian(hermitian), 0.0, atol=1e-14)

    def test_expm_of_antihermitian_is_unitary(self, matrix):
        a = linalg.project_antihermitian(matrix)
        e = linalg.expm(a)
        np.testing.assert_allclose(linalg.adjoint(e) @ e, jnp.eye(3), atol=1e-12)

    def test_expm_of_zero_is_identity(self):
        np.testing.assert_allclose(linalg.expm(jnp.zeros((4, 4))), jnp.eye(4), atol=1e-15)

    def test_isometry_error(self):
        w = _random_isometry(jax.random.key(1), 5, 3)
        assert float(linalg.isometry_error(w)) < 1e-12
        assert float(linalg.isometry_error(2.0 * w)) == pytest.approx(3 * np.sqrt(3.0))

    def test_antihermitian_error(self, matrix):
        assert float(linalg.antihermitian_error(linalg.project_antihermitian(matrix))) < 1e-14
        assert float(linalg.antihermitian_error(jnp.eye(2))) == pytest.approx(2 * np.sqrt(2.0))


class TestInnerProductAndNorm:
    """Test the Frobenius inner product and entrywise norms."""

    def test_inner_product_is_conjugate_linear_in_first_argument(self):
        a = jnp.array([[1.0 + 2.0j, 0.5], [-1.0j, 3.0]])
        b = jnp.array([[2.0, 1.0j], [1.0, -1.0 + 1.0j]])

        np.testing.assert_allclose(linalg.inner_product(1j * a, b), -1j * linalg.inner_product(a, b))
        np.testing.assert_allclose(linalg.inner_product(a, 1j * b), 1j * linalg.inner_product(a, b))
        np.testing.assert_allclose(linalg.inner_product(a, b), np.sum(np.conj(np.asarray(a)) * np.asarray(b)))

    def test_inner_product_with_itself_is_squared_norm(self):
        a = jnp.array([[3.0, 4.0], [0.0, 0.0]])
        assert float(jnp.real(linalg.inner_product(a, a))) == pytest.approx(25.0)

    @pytest.mark.parametrize(
        "p, expected",
        [(2, 5.0), (1, 7.0), (jnp.inf, 4.0), (3, (27.0 + 64.0) ** (1.0 / 3.0))],
    )
    def test_norms(self, p, expected):
        a = jnp.array([[3.0, -4.0], [0.0, 0.0]])
        assert float(linalg.norm(a, p)) == pytest.approx(expected)

    def test_norm_rejects_non_positive_order(self):
        with pytest.raises(ValueError):
            linalg.norm(jnp.eye(2), 0)


class TestIsometricProjection:
    """Test projection onto the manifold of isometries."""

    @pytest.fixture
    def isometry(self):
        return _random_isometry(jax.random.key(7), 6, 3)

    @pytest.mark.parametrize("method", ["svd", "polar_newton", "qr"])
    def test_result_is_isometry(self, method):
        m = jax.random.normal(jax.random.key(3), (6, 3))
        w = linalg.project_isometric(m, method=method)

        assert w.shape == m.shape
        assert float(linalg.isometry_error(w)) < 1e-10

    @pytest.mark.parametrize("method", ["svd", "polar_newton"])
    def test_idempotent_on_isometries(self, isometry, method):
        np.testing.assert_allclose(linalg.project_isometric(isometry, method=method), isometry, atol=1e-12)

    def test_svd_recovers_polar_factor(self, isometry):
        # M = W P with P Hermitian positive definite has polar factor W
        p = jnp.array([[2.0, 0.3, 0.0], [0.3, 1.5, 0.1], [0.0, 0.1, 1.0]])
        np.testing.assert_allclose(linalg.project_isometric(isometry @ p), isometry, atol=1e-12)

    def test_polar_newton_matches_svd(self, isometry):
        perturbation = 0.05 * jax.random.normal(jax.random.key(11), isometry.shape)
        m = isometry + perturbation
        np.testing.assert_allclose(
            linalg.project_isometric(m, method="polar_newton"),
            linalg.project_isometric(m, method="svd"),
            atol=1e-10,
        )

    def test_qr_has_positive_triangular_factor(self):
        key_re, key_im = jax.random.split(jax.random.key(5))
        m = jax.random.normal(key_re, (5, 3)) + 1j * jax.random.normal(key_im, (5, 3))
        q = linalg.project_isometric(m, method="qr")
        r = linalg.adjoint(q) @ m

        np.testing.assert_allclose(jnp.tril(r, -1), 0.0, atol=1e-12)
        diagonal = jnp.diagonal(r)
        np.testing.assert_allclose(jnp.imag(diagonal), 0.0, atol=1e-12)
        assert bool(jnp.all(jnp.real(diagonal) > 0))

    def test_complex_svd_projection(self):
        key_re, key_im = jax.random.split(jax.random.key(9))
        m = jax.random.normal(key_re, (4, 2)) + 1j * jax.random.normal(key_im, (4, 2))
        w = linalg.project_isometric(m)
        assert w.dtype == m.dtype
        assert float(linalg.isometry_error(w)) < 1e-12

    def test_unknown_method(self, isometry):
        with pytest.raises(UnknownAlgorithmError) as excinfo:
            linalg.project_isometric(isometry, method="cholesky")

        assert isinstance(excinfo.value, ValueError)
        assert excinfo.value.algorithm == "cholesky"
        assert "svd" in excinfo.value.supported

    def test_wide_matrix_is_rejected(self):
        with pytest.raises(DimensionError):
            linalg.project_isometric(jnp.ones((2, 4)))

    def test_polar_newton_warns_at_iteration_cap(self, isometry, monkeypatch, caplog):
        monkeypatch.setattr(NumericalConstants, "POLAR_MAX_ITERATIONS", 1)

        with caplog.at_level(logging.WARNING, logger="unitarax.core.linalg"):
            linalg.project_isometric(3.0 * isometry, method="polar_newton")

        assert "Polar Newton iteration stopped" in caplog.text
