"""UnitarAX: JAX-native tangent vectors on the manifold of isometries.

Tangent-space algebra, geodesic retraction and vector transport for isometric
(column-orthonormal, real or complex) linear maps, as needed by first- and
second-order Riemannian optimizers acting on isometric tensors.

A tangent vector at an isometry W is stored as W A with A anti-Hermitian. Base
points carry identity tokens, so tangent vectors are only combined when they
were produced at the same point.

Quick start:
    >>> import jax
    >>> jax.config.update("jax_enable_x64", True)
    >>> import unitarax as ux
    >>> key = jax.random.PRNGKey(0)
    >>> W = ux.random_isometry(key, (4, 2))
    >>> G = jax.random.normal(jax.random.PRNGKey(1), (4, 2))
    >>> delta = ux.project(G, W)              # Riemannian gradient direction
    >>> W_new, delta_new = ux.retract(W, delta, -0.1)
    >>> theta = ux.transport(delta, W, delta, -0.1, W_new, alg="parallel")
    >>> float(ux.isometry_error(W_new.matrix)) < 1e-10
    True
"""

__version__ = "0.1.0"

from .core.constants import Defaults, NumericalConstants
from .core.linalg import (
    adjoint,
    antihermitian_error,
    expm,
    inner_product,
    isometry_error,
    project_antihermitian,
    project_isometric,
)
from .errors import (
    BasePointMismatchError,
    DimensionError,
    InvalidPointError,
    InvalidTangentVectorError,
    ManifoldError,
    UnknownAlgorithmError,
    UnsupportedMetricError,
)
from .manifolds import (
    BasePoint,
    Generator,
    TransportAlgorithm,
    Unitary,
    UnitaryTangent,
    as_base_point,
    axpby_,
    axpy_,
    base,
    check_base,
    dot,
    inner,
    ldiv,
    norm,
    project,
    project_,
    random_isometry,
    random_tangent,
    retract,
    transport,
    transport_,
    transport_parallel,
    transport_parallel_,
    transport_stiefel,
    transport_stiefel_,
    zero,
)

__all__ = [
    "BasePoint",
    "BasePointMismatchError",
    "Defaults",
    "DimensionError",
    "Generator",
    "InvalidPointError",
    "InvalidTangentVectorError",
    "ManifoldError",
    "NumericalConstants",
    "TransportAlgorithm",
    "UnknownAlgorithmError",
    "Unitary",
    "UnitaryTangent",
    "UnsupportedMetricError",
    "adjoint",
    "antihermitian_error",
    "as_base_point",
    "axpby_",
    "axpy_",
    "base",
    "check_base",
    "dot",
    "expm",
    "inner",
    "inner_product",
    "isometry_error",
    "ldiv",
    "norm",
    "project",
    "project_",
    "project_antihermitian",
    "project_isometric",
    "random_isometry",
    "random_tangent",
    "retract",
    "transport",
    "transport_",
    "transport_parallel",
    "transport_parallel_",
    "transport_stiefel",
    "transport_stiefel_",
    "zero",
]
