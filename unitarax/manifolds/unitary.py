"""Riemannian operations on the manifold of isometries.

Tangent vectors at an isometry W are W A with A anti-Hermitian. This module
provides the Euclidean inner product, the projection of ambient directions onto
the tangent space, the geodesic retraction W -> project_isometric(W exp(alpha A)),
and two vector transports compatible with that retraction:

- ``parallel``: Levi-Civita transport A -> E^H A E with E = exp(alpha A_delta / 2).
- ``stiefel``: the generator is kept and only rebound to the new base point,
  matching the transport used with the generic Stiefel retraction.

For a square isometry the retraction is the Riemannian exponential map; for
p < n it differs from the Stiefel exponential, which is not geodesic here.
"""

import logging
import math
from enum import Enum
from typing import Any

import jax.numpy as jnp
import jax.random as jr
from jax import Array
from jaxtyping import PRNGKeyArray

from ..core import linalg
from ..core.constants import Defaults, NumericalConstants
from ..core.type_system import AmbientArray, IsometryArray
from ..errors import (
    DimensionError,
    InvalidPointError,
    InvalidTangentVectorError,
    UnknownAlgorithmError,
    validate_antihermitian,
    validate_dimensions_match,
    validate_isometry,
    validate_metric,
)
from .base import BasePoint, as_base_point
from .tangent import UnitaryTangent, check_base

logger = logging.getLogger(__name__)


class TransportAlgorithm(str, Enum):
    """Vector transports compatible with the geodesic retraction."""

    PARALLEL = "parallel"
    STIEFEL = "stiefel"

    @classmethod
    def resolve(cls, alg: Any) -> "TransportAlgorithm":
        """Coerce a name or member to a TransportAlgorithm.

        Raises:
            UnknownAlgorithmError: If ``alg`` names no transport algorithm.
        """
        try:
            return cls(alg)
        except ValueError:
            supported = tuple(member.value for member in cls)
            raise UnknownAlgorithmError(
                f"Unknown transport algorithm {alg!r}; expected one of {', '.join(supported)}",
                algorithm=alg,
                supported=supported,
            ) from None


# Tangent space methods


def inner(W: BasePoint, delta1: UnitaryTangent, delta2: UnitaryTangent, *, metric: str = Defaults.METRIC) -> Array:
    """Riemannian inner product Re <delta1, delta2> at W.

    Raises:
        UnsupportedMetricError: If ``metric`` is not ``"euclidean"``.
        BasePointMismatchError: If the vectors have different base points.
    """
    validate_metric(metric)
    if delta1 is delta2:
        return delta1.norm() ** 2
    return jnp.real(delta1.dot(delta2))


def project(X: AmbientArray, W: BasePoint | IsometryArray, *, metric: str = Defaults.METRIC) -> UnitaryTangent:
    """Project an ambient direction X onto the tangent space at W.

    The generator is the anti-Hermitian part of W^H X. Raw arrays for ``W`` are
    wrapped as a new base point.

    Raises:
        UnsupportedMetricError: If ``metric`` is not ``"euclidean"``.
        DimensionError: If X and W have different shapes.
    """
    validate_metric(metric)
    W = as_base_point(W)
    X = jnp.asarray(X)
    validate_dimensions_match(W.array, X, "project")

    P = linalg.adjoint(W.matrix) @ jnp.reshape(X, (W.codomain_dim, W.domain_dim))
    return UnitaryTangent(W, linalg.project_antihermitian(P))


def project_(X: AmbientArray, W: BasePoint | IsometryArray, *, metric: str = Defaults.METRIC) -> UnitaryTangent:
    """Project consuming ``X``; JAX arrays are immutable, so X is left unchanged."""
    return project(X, W, metric=metric)


# Retraction


def retract(
    W: BasePoint, delta: UnitaryTangent, alpha: float, *, method: str = Defaults.ISOMETRIC_METHOD
) -> tuple[BasePoint, UnitaryTangent]:
    """Geodesic retraction from W along delta with step alpha.

    Computes W' = project_isometric(W exp(alpha A)); the re-projection removes
    the drift from isometry introduced by the floating point exponential. The
    returned tangent vector carries a copy of the same generator at W'.

    Args:
        W: Base point of ``delta``.
        delta: Tangent vector at W.
        alpha: Step size.
        method: Isometric projection algorithm, see ``project_isometric``.

    Returns:
        Tuple (W', delta') with delta' = (W', A).

    Raises:
        InvalidTangentVectorError: If ``delta`` is not anchored at W.
    """
    if not isinstance(W, BasePoint) or W != delta.base:
        raise InvalidTangentVectorError("Not a valid tangent vector at base point", tangent_vector=delta, base_point=W)

    E = linalg.expm(alpha * delta.A)
    W_new = W.with_matrix(linalg.project_isometric(W.matrix @ E, method=method))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Retraction from base {W.token} to {W_new.token} with alpha={alpha}: "
            f"isometry error {float(linalg.isometry_error(W_new.matrix)):.3e}"
        )
    return W_new, UnitaryTangent(W_new, delta.generator.copy())


# Vector transport


def _check_transport(theta: UnitaryTangent, W: BasePoint, delta: UnitaryTangent, W_new: BasePoint | Array) -> BasePoint:
    """Check the transport arguments and return ``W_new`` as a base point.

    Called before theta is written.
    """
    if W != check_base(delta, theta):
        raise InvalidTangentVectorError("Not a valid tangent vector at base point", tangent_vector=theta, base_point=W)
    W_new = as_base_point(W_new)
    if W_new.domain_dim != W.domain_dim:
        raise DimensionError(
            "Transport target must have the domain of the base point",
            expected=W.domain_dim,
            actual=W_new.domain_dim,
        )
    return W_new


def transport_parallel_(
    theta: UnitaryTangent, W: BasePoint, delta: UnitaryTangent, alpha: float, W_new: BasePoint | Array
) -> UnitaryTangent:
    """Parallel transport of theta along the retraction of delta, writing into theta.

    The generator of ``theta`` is overwritten with E^H A E, E = exp(alpha A_delta / 2),
    re-projected onto the anti-Hermitian matrices. ``W``, ``delta`` and ``W_new``
    are only read.

    Returns:
        Tangent vector at W_new sharing the generator storage of ``theta``.
    """
    W_new = _check_transport(theta, W, delta, W_new)

    E = linalg.expm((alpha / 2) * delta.A)
    theta.generator.assign_(linalg.project_antihermitian(linalg.adjoint(E) @ theta.A @ E))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Parallel transport to base {W_new.token} with alpha={alpha}: "
            f"anti-Hermitian error {float(theta.generator.antihermitian_error()):.3e}"
        )
    return UnitaryTangent(W_new, theta.generator)


def transport_parallel(
    theta: UnitaryTangent, W: BasePoint, delta: UnitaryTangent, alpha: float, W_new: BasePoint | Array
) -> UnitaryTangent:
    """Parallel transport of theta; ``theta`` is left unchanged."""
    return transport_parallel_(theta.copy(), W, delta, alpha, W_new)


def transport_stiefel_(
    theta: UnitaryTangent, W: BasePoint, delta: UnitaryTangent, alpha: float, W_new: BasePoint | Array
) -> UnitaryTangent:
    """Stiefel-compatible transport: rebind the generator of theta to W_new.

    Returns:
        Tangent vector at W_new sharing the generator storage of ``theta``.
    """
    W_new = _check_transport(theta, W, delta, W_new)
    logger.debug(f"Stiefel transport to base {W_new.token} with alpha={alpha}")
    return UnitaryTangent(W_new, theta.generator)


def transport_stiefel(
    theta: UnitaryTangent, W: BasePoint, delta: UnitaryTangent, alpha: float, W_new: BasePoint | Array
) -> UnitaryTangent:
    """Stiefel-compatible transport; ``theta`` is left unchanged."""
    return transport_stiefel_(theta.copy(), W, delta, alpha, W_new)


def transport_(
    theta: UnitaryTangent,
    W: BasePoint,
    delta: UnitaryTangent,
    alpha: float,
    W_new: BasePoint | Array,
    *,
    alg: TransportAlgorithm | str = Defaults.TRANSPORT,
) -> UnitaryTangent:
    """Transport theta from W to W_new = retract(W, delta, alpha), writing into theta.

    Raises:
        UnknownAlgorithmError: If ``alg`` is not a transport algorithm; theta is
            not modified.
        BasePointMismatchError: If theta and delta have different base points.
        InvalidTangentVectorError: If they are not anchored at W.
        DimensionError: If W_new does not have the domain of W.
    """
    alg = TransportAlgorithm.resolve(alg)
    if alg is TransportAlgorithm.PARALLEL:
        return transport_parallel_(theta, W, delta, alpha, W_new)
    return transport_stiefel_(theta, W, delta, alpha, W_new)


def transport(
    theta: UnitaryTangent,
    W: BasePoint,
    delta: UnitaryTangent,
    alpha: float,
    W_new: BasePoint | Array,
    *,
    alg: TransportAlgorithm | str = Defaults.TRANSPORT,
) -> UnitaryTangent:
    """Transport theta from W to W_new; ``theta`` is left unchanged."""
    alg = TransportAlgorithm.resolve(alg)
    return transport_(theta.copy(), W, delta, alpha, W_new, alg=alg)


# Sampling


def random_isometry(key: PRNGKeyArray, shape: tuple[int, ...], *, domain_ndim: int = 1, dtype: Any = jnp.float64) -> BasePoint:
    """Random isometry via QR decomposition of a Gaussian tensor."""
    if domain_ndim < 1 or domain_ndim >= len(shape):
        raise DimensionError(
            f"domain_ndim must leave at least one codomain axis, got domain_ndim={domain_ndim}",
            expected=f"1 <= domain_ndim < {len(shape)}",
            actual=domain_ndim,
        )
    matrix_shape = (math.prod(shape[:-domain_ndim]), math.prod(shape[-domain_ndim:]))
    gaussian = jr.normal(key, matrix_shape, dtype=dtype)
    isometry = linalg.project_isometric(gaussian, method="qr")
    return BasePoint(jnp.reshape(isometry, shape), domain_ndim=domain_ndim)


def random_tangent(key: PRNGKeyArray, W: BasePoint) -> UnitaryTangent:
    """Random tangent vector at W by projecting a Gaussian direction."""
    return project(jr.normal(key, W.shape, dtype=W.dtype), W)


class Unitary:
    """Manifold of isometries W in K^(n x p), W^H W = I_p, with K real or complex.

    Bundles the functional operations of this module for optimizers that work
    with a manifold object. Tangent vectors are ``UnitaryTangent`` instances.
    """

    def __init__(self, n: int, p: int, *, dtype: Any = jnp.float64):
        """Initialize the manifold of n x p isometries.

        Raises:
            DimensionError: If p > n or a dimension is not positive.
        """
        if p > n:
            raise DimensionError(f"Frame dimension p={p} cannot exceed ambient dimension n={n}")
        if p <= 0 or n <= 0:
            raise DimensionError("Dimensions must be positive")

        self.n = n
        self.p = p
        self.dtype = jnp.dtype(dtype)

    @property
    def is_complex(self) -> bool:
        return bool(jnp.issubdtype(self.dtype, jnp.complexfloating))

    @property
    def dimension(self) -> int:
        """Real dimension: np - p(p+1)/2 for real, 2np - p^2 for complex isometries."""
        if self.is_complex:
            return 2 * self.n * self.p - self.p**2
        return self.n * self.p - self.p * (self.p + 1) // 2

    @property
    def ambient_dimension(self) -> int:
        """Real dimension of the ambient space K^(n x p)."""
        return (2 if self.is_complex else 1) * self.n * self.p

    def proj(self, x: BasePoint | Array, v: Array) -> UnitaryTangent:
        return project(v, x)

    def retract(self, x: BasePoint, v: UnitaryTangent, alpha: float = 1.0) -> tuple[BasePoint, UnitaryTangent]:
        return retract(x, v, alpha)

    def transp(
        self,
        v: UnitaryTangent,
        x: BasePoint,
        direction: UnitaryTangent,
        alpha: float,
        y: BasePoint,
        alg: TransportAlgorithm | str = Defaults.TRANSPORT,
    ) -> UnitaryTangent:
        return transport(v, x, direction, alpha, y, alg=alg)

    def inner(self, x: BasePoint, u: UnitaryTangent, v: UnitaryTangent) -> Array:
        return inner(x, u, v)

    def norm(self, x: BasePoint, v: UnitaryTangent) -> Array:
        return jnp.sqrt(inner(x, v, v))

    def zero_vector(self, x: BasePoint) -> UnitaryTangent:
        return UnitaryTangent(x, jnp.zeros((self.p, self.p), dtype=self.dtype))

    def random_point(self, key: PRNGKeyArray) -> BasePoint:
        return random_isometry(key, (self.n, self.p), dtype=self.dtype)

    def random_tangent(self, key: PRNGKeyArray, x: BasePoint) -> UnitaryTangent:
        return random_tangent(key, x)

    def validate_point(self, x: BasePoint | Array, atol: float = NumericalConstants.VALIDATION_TOLERANCE) -> bool:
        """Validate that x is an n x p matrix with orthonormal columns."""
        matrix = x.matrix if isinstance(x, BasePoint) else jnp.asarray(x)
        if matrix.shape != (self.n, self.p):
            return False
        try:
            validate_isometry(matrix, atol)
            return True
        except InvalidPointError:
            return False

    def validate_tangent(
        self, x: BasePoint, v: UnitaryTangent, atol: float = NumericalConstants.VALIDATION_TOLERANCE
    ) -> bool:
        """Validate that v is anchored at x and has an anti-Hermitian generator."""
        if not self.validate_point(x, atol) or v.base != x:
            return False
        try:
            validate_antihermitian(v.A, atol)
            return True
        except InvalidTangentVectorError:
            return False

    def __repr__(self) -> str:
        """Return string representation of the manifold."""
        return f"Unitary({self.n}, {self.p}, dtype={self.dtype})"
