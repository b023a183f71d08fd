"""Direct-formula reference implementations.

These evaluate the textbook expressions point by point, recomputing the
determinant and inverse of the covariance every time:

    f(x)      = (2 pi)^{-d/2} |Sigma|^{-1/2} exp(-0.5 c^T Sigma^{-1} c)
    grad f(x) = -f(x) Sigma^{-1} c,            c = x - mu

They are O(n d^3) and exist as an oracle for the factorized kernel and as
the baseline in benchmarks.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pydmvnorm._exceptions import InvalidCovariance
from pydmvnorm.backend._array_api import get_backend
from pydmvnorm.dmvnorm._control import DMVNormControl
from pydmvnorm.utils._validation import as_points, check_dims, check_square, check_symmetric


def _reference_inputs(points, mean, covariance, control):
    xp = get_backend("numpy")
    if control is None:
        control = DMVNormControl()
    x = as_points(points, xp=xp, dim=control.dim_hint(mean, covariance))
    mean, covariance = control.resolve(x.shape[1], mean, covariance, xp=xp)
    check_square(covariance, "covariance")
    check_dims(x, mean, covariance)

    if not np.all(np.isfinite(covariance)):
        raise InvalidCovariance("covariance contains non-finite entries")
    if control.check_symmetry and not check_symmetric(covariance, tol=control.symmetry_tol):
        raise InvalidCovariance("covariance is not symmetric")
    # The direct formula only needs a positive determinant, so test definiteness
    # explicitly to fail on the same inputs as the factorized kernel.
    if np.any(np.linalg.eigvalsh(covariance, UPLO="U") <= 0):
        raise InvalidCovariance("covariance is not positive definite")
    return x, mean, covariance


def _density_at(c: NDArray, covariance: NDArray) -> float:
    d = c.shape[0]
    det = np.linalg.det(covariance)
    inv = np.linalg.inv(covariance)
    quad = float(c @ inv @ c)
    return float((2.0 * np.pi) ** (-0.5 * d) * det ** -0.5 * np.exp(-0.5 * quad))


def dmvnorm_reference(
    points: NDArray,
    mean: NDArray | None = None,
    covariance: NDArray | None = None,
    *,
    log: bool = False,
    control: DMVNormControl | None = None,
) -> NDArray:
    """Multivariate normal density by the direct formula (slow)."""
    x, mean, covariance = _reference_inputs(points, mean, covariance, control)
    out = np.array([_density_at(row - mean, covariance) for row in x], dtype=np.float64)
    return np.log(out) if log else out


def density_gradient_reference(
    points: NDArray,
    mean: NDArray | None = None,
    covariance: NDArray | None = None,
    *,
    control: DMVNormControl | None = None,
) -> NDArray:
    """Gradient of the multivariate normal density by the direct formula (slow)."""
    x, mean, covariance = _reference_inputs(points, mean, covariance, control)
    n, d = x.shape
    gradient = np.zeros((n, d), dtype=np.float64)
    for i in range(n):
        c = x[i] - mean
        gradient[i] = -_density_at(c, covariance) * (np.linalg.inv(covariance) @ c)
    return gradient
