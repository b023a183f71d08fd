"""Multivariate normal density via a shared Cholesky factor."""

from __future__ import annotations

from numpy.typing import NDArray

from pydmvnorm.backend._array_api import array_namespace
from pydmvnorm.dmvnorm._control import DMVNormControl
from pydmvnorm.dmvnorm._factor import CholeskyFactor, cholesky_factor
from pydmvnorm.utils._validation import as_points, check_dims, check_square


def _prepare(points, mean, covariance, control, xp):
    """Validate inputs and factor the covariance.

    Returns
    -------
    centered : ndarray, shape (n, d)
    factor : CholeskyFactor
    """
    x = as_points(points, xp=xp, dim=control.dim_hint(mean, covariance))
    d = x.shape[1]
    mean, covariance = control.resolve(d, mean, covariance, xp=xp)
    check_square(covariance, "covariance")
    check_dims(x, mean, covariance)

    factor = cholesky_factor(
        covariance,
        check_symmetry=control.check_symmetry,
        symmetry_tol=control.symmetry_tol,
        xp=xp,
    )
    return x - mean, factor


def _log_density_rows(centered: NDArray, factor: CholeskyFactor, method: str, xp) -> NDArray:
    """Log density for each centered row."""
    n = centered.shape[0]
    const = factor.base_constant + factor.log_root_sum

    if method == "loop":
        out = xp.zeros((n,), dtype=xp.float64)
        for i in range(n):
            z = xp.matmul(factor.root_inverse, centered[i])
            out[i] = const - 0.5 * xp.sum(z * z)
        return out

    z = xp.matmul(centered, xp.transpose(factor.root_inverse))
    return const - 0.5 * xp.sum(z * z, axis=1)


def dmvnorm(
    points: NDArray,
    mean: NDArray | None = None,
    covariance: NDArray | None = None,
    *,
    log: bool = False,
    control: DMVNormControl | None = None,
    xp=None,
) -> NDArray:
    """Evaluate the multivariate normal density at each point.

    Parameters
    ----------
    points : ndarray, shape (n, d) or (d,)
        Evaluation points, one per row. A 1-D input is a single point.
    mean : ndarray, shape (d,), optional
        Mean vector. Defaults to ``control.mean``, then to zeros.
    covariance : ndarray, shape (d, d), optional
        Covariance matrix. Defaults to ``control.covariance``, then to the
        identity.
    log : bool
        Return the log density instead of the density.
    control : DMVNormControl, optional
    xp : backend, optional

    Returns
    -------
    density : ndarray, shape (n,)
    """
    if control is None:
        control = DMVNormControl()
    if xp is None:
        xp = array_namespace(points, mean, covariance)

    centered, factor = _prepare(points, mean, covariance, control, xp)
    if centered.shape[0] == 0:
        return xp.zeros((0,), dtype=xp.float64)

    log_density = _log_density_rows(centered, factor, control.method, xp)
    if log:
        return log_density
    return xp.exp(log_density)
