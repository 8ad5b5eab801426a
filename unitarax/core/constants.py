"""Configuration constants for UnitarAX library.

This module defines numerical constants and default algorithm choices used
throughout the library to ensure consistent behavior and eliminate magic numbers.
"""


class NumericalConstants:
    """Numerical constants for stability and tolerance in manifold operations.

    These constants are used throughout the library for numerical comparisons,
    convergence criteria, and validation of isometries and generators.
    """

    VALIDATION_TOLERANCE: float = 1e-6
    """Tolerance for validating isometries and anti-Hermitian generators."""

    POLAR_TOLERANCE: float = 1e-12
    """Stopping tolerance on ||X^H X - I|| for the polar Newton iteration."""

    POLAR_MAX_ITERATIONS: int = 50
    """Iteration cap for the polar Newton iteration."""


class Defaults:
    """Default keyword values for the public manifold operations."""

    METRIC: str = "euclidean"
    """Riemannian metric used by ``inner`` and ``project``."""

    SUPPORTED_METRICS: tuple[str, ...] = ("euclidean",)
    """Metrics accepted by ``inner`` and ``project``."""

    TRANSPORT: str = "stiefel"
    """Vector transport algorithm used by ``transport``."""

    ISOMETRIC_METHOD: str = "svd"
    """Decomposition used to project onto the isometric manifold after retraction."""
