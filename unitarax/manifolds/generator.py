"""Generator algebra for tangent vectors on the manifold of isometries.

A tangent vector at an isometry W is stored as W A, where the generator A is a
square anti-Hermitian matrix acting on the domain of W. ``Generator`` is the
mutable container for A: JAX arrays are immutable, so the in-place methods
(trailing underscore) rebind the stored array and return the container itself.
Every in-place method mutates ``self`` only and reads its other arguments.
"""

from typing import Any

import jax.numpy as jnp
from jax import Array

from ..core import linalg
from ..core.type_system import GeneratorArray, is_real_scalar
from ..errors import DimensionError, validate_dimensions_match


def _check_scalar(alpha: Any) -> None:
    if not is_real_scalar(alpha):
        raise TypeError(f"Expected a real scalar, got {type(alpha).__name__}")


class Generator:
    """Square matrix A representing a tangent direction in the local frame.

    The anti-Hermitian property A^H = -A is not enforced on construction;
    numerical drift is corrected by the re-projection steps of retraction and
    parallel transport.
    """

    __slots__ = ("_array",)

    def __init__(self, array: GeneratorArray):
        array = jnp.asarray(array)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise DimensionError(
                "Generator must be a square matrix",
                expected="(p, p)",
                actual=tuple(array.shape),
            )
        self._array = array

    @property
    def array(self) -> GeneratorArray:
        return self._array

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._array.shape)

    @property
    def dtype(self) -> jnp.dtype:
        return self._array.dtype

    def copy(self) -> "Generator":
        """Return an independent container holding the same values."""
        return Generator(jnp.array(self._array, copy=True))

    def zeros_like(self) -> "Generator":
        return Generator(jnp.zeros_like(self._array))

    def _check_shape(self, other: "Generator", operation: str) -> None:
        validate_dimensions_match(self._array, other._array, operation)

    # In-place operations: mutate self

    def assign_(self, array: GeneratorArray) -> "Generator":
        """Overwrite the stored matrix with ``array`` of the same shape."""
        array = jnp.asarray(array)
        validate_dimensions_match(self._array, array, "assign_")
        self._array = array
        return self

    def rmul_(self, alpha: float) -> "Generator":
        """A <- A * alpha."""
        _check_scalar(alpha)
        self._array = self._array * alpha
        return self

    def lmul_(self, alpha: float) -> "Generator":
        """A <- alpha * A."""
        _check_scalar(alpha)
        self._array = alpha * self._array
        return self

    def axpy_(self, alpha: float, x: "Generator") -> "Generator":
        """A <- A + alpha * X."""
        _check_scalar(alpha)
        self._check_shape(x, "axpy_")
        self._array = self._array + alpha * x._array
        return self

    def axpby_(self, alpha: float, x: "Generator", beta: float) -> "Generator":
        """A <- alpha * X + beta * A."""
        _check_scalar(alpha)
        _check_scalar(beta)
        self._check_shape(x, "axpby_")
        self._array = alpha * x._array + beta * self._array
        return self

    # Out-of-place operations

    def __add__(self, other: "Generator") -> "Generator":
        self._check_shape(other, "addition")
        return Generator(self._array + other._array)

    def __sub__(self, other: "Generator") -> "Generator":
        self._check_shape(other, "subtraction")
        return Generator(self._array - other._array)

    def __neg__(self) -> "Generator":
        return Generator(-self._array)

    def dot(self, other: "Generator") -> Array:
        """Frobenius inner product <self, other>, conjugate-linear in self."""
        self._check_shape(other, "dot")
        return linalg.inner_product(self._array, other._array)

    def norm(self, p: float = 2) -> Array:
        return linalg.norm(self._array, p)

    def antihermitian_error(self) -> Array:
        """Deviation ||A + A^H||_F from the anti-Hermitian matrices."""
        return linalg.antihermitian_error(self._array)

    def __repr__(self) -> str:
        """Return string representation of the generator."""
        return f"Generator(shape={self.shape}, dtype={self.dtype})"
