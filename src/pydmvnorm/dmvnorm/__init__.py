"""Multivariate normal density and its gradient."""

from pydmvnorm._exceptions import DimensionMismatch, InvalidCovariance
from pydmvnorm.dmvnorm._control import DMVNormControl
from pydmvnorm.dmvnorm._density import dmvnorm
from pydmvnorm.dmvnorm._deriv import compute_density_gradient
from pydmvnorm.dmvnorm._factor import LOG_2PI, CholeskyFactor, cholesky_factor
from pydmvnorm.dmvnorm._reference import density_gradient_reference, dmvnorm_reference

__all__ = [
    "compute_density_gradient",
    "dmvnorm",
    "cholesky_factor",
    "CholeskyFactor",
    "DMVNormControl",
    "LOG_2PI",
    "density_gradient_reference",
    "dmvnorm_reference",
    "InvalidCovariance",
    "DimensionMismatch",
]
