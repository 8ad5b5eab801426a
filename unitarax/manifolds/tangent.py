"""Tangent vectors on the manifold of isometries.

A tangent vector at base point W is represented as Delta = W A, with A an
anti-Hermitian generator on the domain of W. ``UnitaryTangent`` pairs a shared,
read-only ``BasePoint`` with an exclusively owned ``Generator`` and provides the
vector-space structure of the tangent space. Vectors are only combined when
they are anchored at the same base point (identity-token equality).
"""

import jax.numpy as jnp
from jax import Array

from ..core.type_system import AmbientArray, GeneratorArray, IsometryArray, is_real_scalar
from ..errors import BasePointMismatchError, DimensionError
from .base import BasePoint, as_base_point
from .generator import Generator


def _reciprocal(alpha: float) -> float:
    """1 / alpha for a nonzero real scalar."""
    if not is_real_scalar(alpha):
        raise TypeError(f"Expected a real scalar, got {type(alpha).__name__}")
    if alpha == 0:
        raise ZeroDivisionError("Cannot divide a tangent vector by zero")
    return 1 / alpha


class UnitaryTangent:
    """Tangent vector W A at an isometric base point W."""

    __slots__ = ("_base", "_generator")

    def __init__(self, base: BasePoint | IsometryArray, generator: Generator | GeneratorArray):
        """Pair a base point with a generator.

        Args:
            base: Base point; raw arrays are wrapped with a fresh identity token.
            generator: Square generator on the domain of ``base``. A
                ``Generator`` instance is adopted as-is (not copied).

        Raises:
            DimensionError: If the generator does not act on the domain of ``base``.
        """
        base = as_base_point(base)
        if not isinstance(generator, Generator):
            generator = Generator(generator)

        expected = (base.domain_dim, base.domain_dim)
        if generator.shape != expected:
            raise DimensionError("Generator does not act on the base point domain", expected=expected, actual=generator.shape)

        self._base = base
        self._generator = generator

    @property
    def base(self) -> BasePoint:
        return self._base

    @property
    def generator(self) -> Generator:
        return self._generator

    @property
    def A(self) -> GeneratorArray:
        """Generator matrix."""
        return self._generator.array

    @property
    def W(self) -> BasePoint:
        return self._base

    def copy(self) -> "UnitaryTangent":
        """Same base point reference, independent copy of the generator."""
        return UnitaryTangent(self._base, self._generator.copy())

    def zero(self) -> "UnitaryTangent":
        return UnitaryTangent(self._base, self._generator.zeros_like())

    def materialize(self) -> AmbientArray:
        """Ambient representative W A, shaped like the base point array."""
        ambient = self._base.matrix @ self._generator.array
        return jnp.reshape(ambient, self._base.shape)

    @property
    def ambient(self) -> AmbientArray:
        return self.materialize()

    # Vector space structure

    def __add__(self, other: "UnitaryTangent") -> "UnitaryTangent":
        if not isinstance(other, UnitaryTangent):
            return NotImplemented
        return UnitaryTangent(check_base(self, other), self._generator + other._generator)

    def __sub__(self, other: "UnitaryTangent") -> "UnitaryTangent":
        if not isinstance(other, UnitaryTangent):
            return NotImplemented
        return UnitaryTangent(check_base(self, other), self._generator - other._generator)

    def __neg__(self) -> "UnitaryTangent":
        return (-1) * self

    def __mul__(self, alpha: float) -> "UnitaryTangent":
        return self.copy().rmul_(alpha)

    def __rmul__(self, alpha: float) -> "UnitaryTangent":
        return self.copy().lmul_(alpha)

    def __truediv__(self, alpha: float) -> "UnitaryTangent":
        """Scale by 1 / alpha; a zero scalar raises ZeroDivisionError."""
        return self.copy().rmul_(_reciprocal(alpha))

    # In-place operations: mutate self only

    def rmul_(self, alpha: float) -> "UnitaryTangent":
        """Scale the generator of this vector in place."""
        self._generator.rmul_(alpha)
        return self

    def lmul_(self, alpha: float) -> "UnitaryTangent":
        """Scale the generator of this vector in place."""
        self._generator.lmul_(alpha)
        return self

    def axpy_(self, alpha: float, x: "UnitaryTangent") -> "UnitaryTangent":
        """self <- self + alpha * x; reads x."""
        check_base(x, self)
        self._generator.axpy_(alpha, x._generator)
        return self

    def axpby_(self, alpha: float, x: "UnitaryTangent", beta: float) -> "UnitaryTangent":
        """self <- alpha * x + beta * self; reads x."""
        check_base(x, self)
        self._generator.axpby_(alpha, x._generator, beta)
        return self

    def dot(self, other: "UnitaryTangent") -> Array:
        return dot(self, other)

    def norm(self, p: float = 2) -> Array:
        return self._generator.norm(p)

    def __repr__(self) -> str:
        """Return string representation of the tangent vector."""
        return f"UnitaryTangent(base={self._base.token}, generator_shape={self._generator.shape}, dtype={self._generator.dtype})"


def base(delta: UnitaryTangent) -> BasePoint:
    """Base point of a tangent vector."""
    return delta.base


def check_base(delta1: UnitaryTangent, delta2: UnitaryTangent) -> BasePoint:
    """Return the common base point of two tangent vectors.

    Raises:
        BasePointMismatchError: If the vectors are anchored at different base points.
    """
    if delta1.base != delta2.base:
        raise BasePointMismatchError(
            "Tangent vectors with different base points",
            first=delta1.base.token,
            second=delta2.base.token,
        )
    return delta1.base


def zero(delta: UnitaryTangent) -> UnitaryTangent:
    """Zero tangent vector at the base point of ``delta``."""
    return delta.zero()


def ldiv(alpha: float, delta: UnitaryTangent) -> UnitaryTangent:
    """Left scalar division alpha \\ delta, i.e. delta scaled by 1 / alpha.

    Raises:
        ZeroDivisionError: If ``alpha`` is zero.
    """
    return delta.copy().lmul_(_reciprocal(alpha))


def dot(delta1: UnitaryTangent, delta2: UnitaryTangent) -> Array:
    """Frobenius inner product of the generators, conjugate-linear in ``delta1``."""
    check_base(delta1, delta2)
    return delta1.generator.dot(delta2.generator)


def norm(delta: UnitaryTangent, p: float = 2) -> Array:
    return delta.norm(p)


def axpy_(alpha: float, dx: UnitaryTangent, dy: UnitaryTangent) -> UnitaryTangent:
    """dy <- dy + alpha * dx; mutates and returns ``dy``."""
    return dy.axpy_(alpha, dx)


def axpby_(alpha: float, dx: UnitaryTangent, beta: float, dy: UnitaryTangent) -> UnitaryTangent:
    """dy <- alpha * dx + beta * dy; mutates and returns ``dy``."""
    return dy.axpby_(alpha, dx, beta)
