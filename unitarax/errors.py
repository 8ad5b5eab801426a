"""Manifold error hierarchy and validation helpers.

This module provides the exceptions raised by tangent-vector bookkeeping on the
manifold of isometries, together with validation utilities that check the
isometry and anti-Hermitian constraints before an operation mutates anything.
"""

from collections.abc import Iterable, Sequence
from typing import Any

import jax.numpy as jnp
from jaxtyping import Array

from .core.constants import Defaults, NumericalConstants


class ManifoldError(Exception):
    """Base exception for manifold-related errors."""

    pass


class DimensionError(ManifoldError):
    """Exception for dimension mismatches in manifold operations."""

    def __init__(self, message: str, expected: int | tuple | None = None, actual: int | tuple | None = None):
        """Initialize DimensionError with dimension information."""
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        """Return string representation with dimension information."""
        base_msg = super().__str__()
        if self.expected is not None and self.actual is not None:
            return f"{base_msg} (expected={self.expected}, actual={self.actual})"
        return base_msg


class BasePointMismatchError(ManifoldError):
    """Exception for tangent vectors combined across different base points."""

    def __init__(self, message: str, first: int | None = None, second: int | None = None):
        """Initialize BasePointMismatchError with the identity tokens involved."""
        super().__init__(message)
        self.first = first
        self.second = second


class InvalidPointError(ManifoldError):
    """Exception for points that do not lie on the manifold."""

    def __init__(
        self,
        message: str,
        point: Array | None = None,
        violated_constraint: str | None = None,
        constraint_value: float | None = None,
    ):
        """Initialize InvalidPointError with constraint violation information."""
        super().__init__(message)
        self.point = point
        self.violated_constraint = violated_constraint
        self.constraint_value = constraint_value


class InvalidTangentVectorError(ManifoldError):
    """Exception for tangent vectors that are not anchored where they are used."""

    def __init__(
        self,
        message: str,
        tangent_vector: Any = None,
        base_point: Any = None,
        constraint_value: float | None = None,
    ):
        """Initialize InvalidTangentVectorError with tangent space violation information."""
        super().__init__(message)
        self.tangent_vector = tangent_vector
        self.base_point = base_point
        self.constraint_value = constraint_value


class UnsupportedMetricError(ManifoldError, ValueError):
    """Exception for Riemannian metrics the manifold does not implement."""

    def __init__(self, message: str, metric: Any = None, supported: Sequence[str] = ()):
        """Initialize UnsupportedMetricError with the requested and supported metrics."""
        super().__init__(message)
        self.metric = metric
        self.supported = tuple(supported)


class UnknownAlgorithmError(ManifoldError, ValueError):
    """Exception for unrecognized algorithm selectors."""

    def __init__(self, message: str, algorithm: Any = None, supported: Sequence[str] = ()):
        """Initialize UnknownAlgorithmError with the requested and supported algorithms."""
        super().__init__(message)
        self.algorithm = algorithm
        self.supported = tuple(supported)


def validate_metric(metric: Any, supported: Iterable[str] = Defaults.SUPPORTED_METRICS) -> str:
    """Check that a metric name is supported and return it.

    Args:
        metric: Requested metric name
        supported: Metric names the caller implements

    Raises:
        UnsupportedMetricError: If the metric is not in ``supported``
    """
    supported = tuple(supported)
    if metric not in supported:
        raise UnsupportedMetricError(
            f"Unsupported metric {metric!r}; supported metrics: {', '.join(supported)}",
            metric=metric,
            supported=supported,
        )
    return str(metric)


def validate_isometry(point: Array, tolerance: float = NumericalConstants.VALIDATION_TOLERANCE) -> None:
    """Validate that a matrix has orthonormal columns.

    Args:
        point: Matrix view of the isometry, shape (n, p)
        tolerance: Tolerance on ||W^H W - I||_F

    Raises:
        InvalidPointError: If the matrix is not tall or not an isometry
    """
    if point.ndim != 2 or point.shape[0] < point.shape[1]:
        raise InvalidPointError(
            f"Isometry must be a tall matrix, got shape {point.shape}",
            point=point,
            violated_constraint="shape",
        )

    gram = jnp.conj(point).T @ point
    error = float(jnp.linalg.norm(gram - jnp.eye(point.shape[1], dtype=gram.dtype)))
    if error > tolerance:
        raise InvalidPointError(
            "Matrix does not have orthonormal columns",
            point=point,
            violated_constraint="isometry",
            constraint_value=error,
        )


def validate_antihermitian(generator: Array, tolerance: float = NumericalConstants.VALIDATION_TOLERANCE) -> None:
    """Validate that a square matrix is anti-Hermitian.

    Args:
        generator: Square matrix
        tolerance: Tolerance on ||A + A^H||_F

    Raises:
        InvalidTangentVectorError: If the matrix is not anti-Hermitian
    """
    if generator.ndim != 2 or generator.shape[0] != generator.shape[1]:
        raise InvalidTangentVectorError(
            f"Generator must be a square matrix, got shape {generator.shape}",
            tangent_vector=generator,
        )

    error = float(jnp.linalg.norm(generator + jnp.conj(generator).T))
    if error > tolerance:
        raise InvalidTangentVectorError(
            "Generator is not anti-Hermitian",
            tangent_vector=generator,
            constraint_value=error,
        )


def validate_dimensions_match(reference: Array, other: Array, operation: str) -> None:
    """Check that ``other`` has the shape of ``reference``.

    Raises:
        DimensionError: If the shapes differ; ``expected`` is the reference shape.
    """
    expected, actual = tuple(reference.shape), tuple(other.shape)
    if expected != actual:
        raise DimensionError(f"Shape mismatch in {operation}", expected=expected, actual=actual)
