"""pydmvnorm: multivariate normal density gradients via Cholesky factorization."""

from pydmvnorm._exceptions import (
    BigMatrixError,
    DimensionMismatch,
    InvalidCovariance,
    PyDMVNormError,
)
from pydmvnorm.dmvnorm import DMVNormControl, compute_density_gradient, dmvnorm

__version__ = "0.1.0"

__all__ = [
    "compute_density_gradient",
    "dmvnorm",
    "DMVNormControl",
    "PyDMVNormError",
    "InvalidCovariance",
    "DimensionMismatch",
    "BigMatrixError",
]
