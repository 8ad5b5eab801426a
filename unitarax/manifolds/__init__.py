"""Tangent vectors, retraction and vector transport on the manifold of isometries."""

from ..errors import (
    BasePointMismatchError,
    DimensionError,
    InvalidPointError,
    InvalidTangentVectorError,
    ManifoldError,
    UnknownAlgorithmError,
    UnsupportedMetricError,
)
from .base import BasePoint, as_base_point
from .generator import Generator
from .tangent import UnitaryTangent, axpby_, axpy_, base, check_base, dot, ldiv, norm, zero
from .unitary import (
    TransportAlgorithm,
    Unitary,
    inner,
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
)

__all__ = [
    # Core classes
    "BasePoint",
    "Generator",
    "TransportAlgorithm",
    "Unitary",
    "UnitaryTangent",
    # Exceptions
    "BasePointMismatchError",
    "DimensionError",
    "InvalidPointError",
    "InvalidTangentVectorError",
    "ManifoldError",
    "UnknownAlgorithmError",
    "UnsupportedMetricError",
    # Tangent vector algebra
    "as_base_point",
    "axpby_",
    "axpy_",
    "base",
    "check_base",
    "dot",
    "ldiv",
    "norm",
    "zero",
    # Manifold operations
    "inner",
    "project",
    "project_",
    "random_isometry",
    "random_tangent",
    "retract",
    "transport",
    "transport_",
    "transport_parallel",
    "transport_parallel_",
    "transport_stiefel",
    "transport_stiefel_",
]
