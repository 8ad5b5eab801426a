"""Base points of the manifold of isometries.

A base point wraps an isometric linear map ``W`` together with a lightweight
identity token. Tangent vectors compare base points through this token, so two
numerically equal but independently produced isometries are distinct points
and base-point checks never compare tensor contents.
"""

import itertools
import math
from typing import Any

import jax.numpy as jnp

from ..core.type_system import IsometryArray, IsometryMatrix
from ..errors import DimensionError

_token_counter = itertools.count()


class BasePoint:
    """Isometric linear map with an identity token.

    The trailing ``domain_ndim`` axes of ``array`` form the domain and the
    leading axes the codomain, so a tensor of shape (d1, d2, p) with
    ``domain_ndim=1`` is the isometry from C^p into C^(d1 d2). All linear
    algebra acts on the matrix view of shape (prod(codomain), prod(domain)),
    on which W^H W = I.
    """

    __slots__ = ("_array", "_domain_ndim", "_token")

    def __init__(self, array: IsometryArray, domain_ndim: int = 1):
        """Wrap an isometry and issue a fresh identity token.

        Args:
            array: Array holding the isometry.
            domain_ndim: Number of trailing axes forming the domain.

        Raises:
            DimensionError: If the axis split is invalid or the domain is
                larger than the codomain.
        """
        array = jnp.asarray(array)
        if domain_ndim < 1 or domain_ndim >= array.ndim:
            raise DimensionError(
                f"domain_ndim must leave at least one codomain axis, got domain_ndim={domain_ndim}",
                expected=f"1 <= domain_ndim < {array.ndim}",
                actual=domain_ndim,
            )
        codomain_dim = math.prod(array.shape[:-domain_ndim])
        domain_dim = math.prod(array.shape[-domain_ndim:])
        if domain_dim > codomain_dim:
            raise DimensionError(
                "Isometry domain cannot exceed its codomain",
                expected=f"domain dimension <= {codomain_dim}",
                actual=domain_dim,
            )

        self._array = array
        self._domain_ndim = domain_ndim
        self._token = next(_token_counter)

    @classmethod
    def wrap(cls, point: Any, domain_ndim: int = 1) -> "BasePoint":
        """Return ``point`` if it is a BasePoint, otherwise wrap it as a new one."""
        if isinstance(point, cls):
            return point
        return cls(point, domain_ndim=domain_ndim)

    def with_matrix(self, matrix: IsometryMatrix) -> "BasePoint":
        """Create a new base point with this tensor structure from a matrix view."""
        if matrix.shape != (self.codomain_dim, self.domain_dim):
            raise DimensionError(
                "Matrix view does not match base point structure",
                expected=(self.codomain_dim, self.domain_dim),
                actual=tuple(matrix.shape),
            )
        return BasePoint(jnp.reshape(matrix, self.shape), domain_ndim=self._domain_ndim)

    @property
    def token(self) -> int:
        """Identity token issued at construction."""
        return self._token

    @property
    def array(self) -> IsometryArray:
        return self._array

    @property
    def matrix(self) -> IsometryMatrix:
        """Matrix view of shape (codomain_dim, domain_dim)."""
        return jnp.reshape(self._array, (self.codomain_dim, self.domain_dim))

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._array.shape)

    @property
    def dtype(self) -> jnp.dtype:
        return self._array.dtype

    @property
    def domain_ndim(self) -> int:
        return self._domain_ndim

    @property
    def domain_shape(self) -> tuple[int, ...]:
        return self.shape[-self._domain_ndim :]

    @property
    def codomain_shape(self) -> tuple[int, ...]:
        return self.shape[: -self._domain_ndim]

    @property
    def domain_dim(self) -> int:
        return math.prod(self.domain_shape)

    @property
    def codomain_dim(self) -> int:
        return math.prod(self.codomain_shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BasePoint):
            return NotImplemented
        return self._token == other._token

    def __hash__(self) -> int:
        return hash(self._token)

    def __repr__(self) -> str:
        """Return string representation of the base point."""
        return f"BasePoint(token={self._token}, shape={self.shape}, domain_ndim={self._domain_ndim}, dtype={self.dtype})"


def as_base_point(point: Any, domain_ndim: int = 1) -> BasePoint:
    """Return ``point`` as a BasePoint, wrapping raw arrays with a fresh token."""
    return BasePoint.wrap(point, domain_ndim=domain_ndim)
