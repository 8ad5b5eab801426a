"""Dense linear-algebra kernels for the manifold of isometries.

These are the primitives the tangent-vector machinery orchestrates: adjoints,
the matrix exponential, projections onto the anti-Hermitian matrices and onto
the isometries, and the Frobenius inner product and norms. All kernels act on
the last two axes and accept real or complex inputs.
"""

import logging
from functools import partial

import jax
import jax.numpy as jnp
import jax.scipy.linalg as jsl
from jax import Array, lax

from ..errors import DimensionError, UnknownAlgorithmError
from .constants import Defaults, NumericalConstants

logger = logging.getLogger(__name__)

ISOMETRIC_METHODS = ("svd", "polar_newton", "qr")


@jax.jit
def adjoint(m: Array) -> Array:
    """Conjugate transpose over the last two axes."""
    return jnp.swapaxes(jnp.conj(m), -1, -2)


@jax.jit
def expm(m: Array) -> Array:
    """Matrix exponential of a square matrix."""
    return jsl.expm(m)


@jax.jit
def project_antihermitian(m: Array) -> Array:
    """Anti-Hermitian part (M - M^H) / 2."""
    return 0.5 * (m - adjoint(m))


@jax.jit
def inner_product(a: Array, b: Array) -> Array:
    """Frobenius inner product, conjugate-linear in the first argument."""
    return jnp.vdot(a, b)


@partial(jax.jit, static_argnames=("p",))
def norm(a: Array, p: float = 2) -> Array:
    """Entrywise p-norm; p=2 is the Frobenius norm and p=inf the max-abs norm."""
    if p <= 0:
        raise ValueError(f"Norm order must be positive, got p={p}")
    flat = jnp.abs(jnp.ravel(a))
    if p == jnp.inf:
        return jnp.max(flat)
    if p == 2:
        return jnp.linalg.norm(flat)
    if p == 1:
        return jnp.sum(flat)
    return jnp.sum(flat**p) ** (1.0 / p)


@jax.jit
def isometry_error(w: Array) -> Array:
    """Frobenius distance of W^H W from the identity."""
    eye = jnp.eye(w.shape[-1], dtype=w.dtype)
    return jnp.linalg.norm(adjoint(w) @ w - eye)


@jax.jit
def antihermitian_error(a: Array) -> Array:
    """Frobenius norm of A + A^H."""
    return jnp.linalg.norm(a + adjoint(a))


@jax.jit
def _isometric_svd(m: Array) -> Array:
    # Polar factor U V^H: the isometry closest to M in Frobenius norm
    u, _, vh = jnp.linalg.svd(m, full_matrices=False)
    return u @ vh


@partial(jax.jit, static_argnames=("max_iterations",))
def _isometric_polar_newton(m: Array, tolerance: float, max_iterations: int) -> tuple[Array, Array, Array]:
    # Newton iteration X <- X (I + (X^H X)^{-1}) / 2 maps each singular value s to (s + 1/s) / 2
    eye = jnp.eye(m.shape[-1], dtype=m.dtype)

    def residual(x: Array) -> Array:
        return jnp.linalg.norm(adjoint(x) @ x - eye)

    def cond_fun(state: tuple[Array, Array, Array]) -> Array:
        _, iteration, error = state
        return (error > tolerance) & (iteration < max_iterations)

    def body_fun(state: tuple[Array, Array, Array]) -> tuple[Array, Array, Array]:
        x, iteration, _ = state
        x = 0.5 * x @ (eye + jnp.linalg.inv(adjoint(x) @ x))
        return x, iteration + 1, residual(x)

    return lax.while_loop(cond_fun, body_fun, (m, jnp.array(0, dtype=jnp.int32), residual(m)))


@jax.jit
def _isometric_qr(m: Array) -> Array:
    q, r = jnp.linalg.qr(m, mode="reduced")

    # Fix the phases so that diag(R) is real and positive
    d = jnp.diagonal(r, axis1=-2, axis2=-1)
    abs_d = jnp.abs(d)
    phase = jnp.where(abs_d > 0, d / jnp.where(abs_d > 0, abs_d, 1), 1)
    return q * phase[..., None, :]


def project_isometric(m: Array, method: str = Defaults.ISOMETRIC_METHOD) -> Array:
    """Project a tall matrix onto the manifold of isometries.

    Args:
        m: Matrix of shape (n, p) with n >= p and full column rank.
        method: ``"svd"`` for the polar factor via a thin SVD, ``"polar_newton"``
            for the same polar factor via Newton iteration (fast when ``m`` is
            already close to an isometry), or ``"qr"`` for the sign-fixed thin
            QR factor (cheap, but not the closest isometry).

    Returns:
        Matrix of the same shape and dtype with orthonormal columns.

    Raises:
        UnknownAlgorithmError: If ``method`` is not recognized.
        DimensionError: If ``m`` is not a tall matrix.
    """
    if method not in ISOMETRIC_METHODS:
        raise UnknownAlgorithmError(
            f"Unknown isometric projection method {method!r}; expected one of {', '.join(ISOMETRIC_METHODS)}",
            algorithm=method,
            supported=ISOMETRIC_METHODS,
        )
    if m.ndim < 2 or m.shape[-2] < m.shape[-1]:
        raise DimensionError(
            "Isometric projection requires a tall matrix (n >= p)",
            expected="(n, p) with n >= p",
            actual=tuple(m.shape),
        )

    if method == "svd":
        return _isometric_svd(m)
    if method == "qr":
        return _isometric_qr(m)

    tolerance = max(NumericalConstants.POLAR_TOLERANCE, 100 * float(jnp.finfo(m.dtype).eps))
    max_iterations = NumericalConstants.POLAR_MAX_ITERATIONS
    result, iterations, error = _isometric_polar_newton(m, tolerance, max_iterations)
    if int(iterations) >= max_iterations and float(error) > tolerance:
        logger.warning(
            f"Polar Newton iteration stopped after {max_iterations} iterations with residual {float(error):.3e}"
        )
    return result
