"""Cholesky factorization cache for multivariate normal evaluation.

The covariance is factored once per call as Sigma = R^T R (R upper
triangular). Everything the per-point evaluation needs is derived from R:

    root_inverse = (R^{-1})^T           lower triangular
    log_root_sum = sum(log(diag(root_inverse))) = -0.5 * log|Sigma|
    base_constant = -(d / 2) * log(2 * pi)

so that for a centered point c, z = root_inverse @ c satisfies
z^T z = c^T Sigma^{-1} c and

    log f(x) = base_constant - 0.5 * z^T z + log_root_sum.

This costs O(d^3) once instead of a determinant and inverse per point.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from numpy.typing import NDArray

from pydmvnorm._exceptions import InvalidCovariance
from pydmvnorm.backend._array_api import array_namespace
from pydmvnorm.utils._validation import check_square, check_symmetric

LOG_2PI = math.log(2.0 * math.pi)


@dataclass(frozen=True)
class CholeskyFactor:
    """Read-only factorization of a covariance matrix.

    Attributes
    ----------
    root : ndarray, shape (d, d)
        Upper Cholesky factor R, R^T R = Sigma.
    root_inverse : ndarray, shape (d, d)
        (R^{-1})^T, lower triangular.
    log_root_sum : float
        Sum of log diagonal of root_inverse.
    base_constant : float
        -(d/2) log(2 pi).
    dim : int
        Dimension d.
    """

    root: NDArray
    root_inverse: NDArray
    log_root_sum: float
    base_constant: float
    dim: int


def cholesky_factor(
    covariance: NDArray,
    *,
    check_symmetry: bool = True,
    symmetry_tol: float = 1e-10,
    xp=None,
) -> CholeskyFactor:
    """Factor a covariance matrix for repeated density evaluation.

    Parameters
    ----------
    covariance : ndarray, shape (d, d)
        Symmetric positive-definite covariance matrix.
    check_symmetry : bool
        Reject matrices that are not symmetric within ``symmetry_tol``.
        The factorization itself only reads the upper triangle.
    symmetry_tol : float
        Absolute tolerance for the symmetry check.
    xp : backend, optional

    Returns
    -------
    factor : CholeskyFactor

    Raises
    ------
    DimensionMismatch
        If ``covariance`` is not a square 2-D matrix.
    InvalidCovariance
        If ``covariance`` has non-finite entries, is asymmetric, or is not
        positive definite.
    """
    if xp is None:
        xp = array_namespace(covariance)

    covariance = xp.array(covariance, dtype=xp.float64)
    check_square(covariance, "covariance")
    d = covariance.shape[0]

    if not xp.all_finite(covariance):
        raise InvalidCovariance("covariance contains non-finite entries")
    if check_symmetry and not check_symmetric(xp.to_numpy(covariance), tol=symmetry_tol):
        raise InvalidCovariance("covariance is not symmetric")

    try:
        root = xp.cholesky_upper(covariance)
    except xp.LinAlgError as err:
        raise InvalidCovariance(f"covariance is not positive definite: {err}") from err

    root_inverse = xp.transpose(
        xp.solve_triangular(root, xp.eye(d, dtype=xp.float64), lower=False)
    )
    log_root_sum = xp.sum(xp.log(xp.diagonal(root_inverse)))

    return CholeskyFactor(
        root=root,
        root_inverse=root_inverse,
        log_root_sum=log_root_sum,
        base_constant=-0.5 * d * LOG_2PI,
        dim=d,
    )
