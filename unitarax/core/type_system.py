"""Type system for UnitarAX library with JAX array validation.

This module provides type aliases and validation utilities for JAX arrays
used by the isometric manifold operations.
"""

from typing import Any

import jax.numpy as jnp
from jaxtyping import Array, Inexact

# Type aliases for common manifold objects
IsometryArray = Inexact[Array, "..."]
"""Type alias for (possibly tensor-indexed) isometric linear maps."""

IsometryMatrix = Inexact[Array, "n p"]
"""Type alias for the matrix view of an isometry, with n >= p."""

GeneratorArray = Inexact[Array, "p p"]
"""Type alias for anti-Hermitian generators of tangent directions."""

AmbientArray = Inexact[Array, "..."]
"""Type alias for arbitrary directions in the ambient space."""


def is_real_scalar(value: Any) -> bool:
    """Return True for real Python, NumPy or zero-rank JAX scalars.

    Complex numbers and arrays of non-zero rank are rejected.

    Examples:
        >>> is_real_scalar(0.5)
        True
        >>> is_real_scalar(1 + 2j)
        False
        >>> is_real_scalar(jnp.ones(2))
        False
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return True
    dtype = getattr(value, "dtype", None)
    if dtype is None or getattr(value, "ndim", None) != 0:
        return False
    return bool(jnp.issubdtype(dtype, jnp.integer) or jnp.issubdtype(dtype, jnp.floating))
