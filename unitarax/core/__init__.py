"""UnitarAX core module: numerical constants, array types and linear-algebra kernels."""

from .constants import Defaults, NumericalConstants
from .linalg import (
    adjoint,
    antihermitian_error,
    expm,
    inner_product,
    isometry_error,
    norm,
    project_antihermitian,
    project_isometric,
)

__all__ = [
    "Defaults",
    "NumericalConstants",
    "adjoint",
    "antihermitian_error",
    "expm",
    "inner_product",
    "isometry_error",
    "norm",
    "project_antihermitian",
    "project_isometric",
]
