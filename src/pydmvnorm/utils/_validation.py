"""Input validation utilities."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pydmvnorm._exceptions import DimensionMismatch


def check_symmetric(A: NDArray, tol: float = 1e-10) -> bool:
    """Check if a matrix is symmetric within tolerance."""
    A = np.asarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return False
    return bool(np.allclose(A, A.T, rtol=0.0, atol=tol))


def check_2d(A: NDArray, name: str = "A") -> None:
    """Raise DimensionMismatch if A is not 2-dimensional."""
    if A.ndim != 2:
        raise DimensionMismatch(f"{name} must be 2-dimensional, got shape {tuple(A.shape)}")


def check_square(A: NDArray, name: str = "A") -> None:
    """Raise DimensionMismatch if A is not square."""
    check_2d(A, name)
    if A.shape[0] != A.shape[1]:
        raise DimensionMismatch(f"{name} must be square, got shape {tuple(A.shape)}")


def as_points(x: NDArray, name: str = "points", *, xp, dim: int | None = None) -> NDArray:
    """Coerce a point batch to a float64 (n, d) array.

    A 1-D input is a single point, as in R's ``dmvnorm``, unless ``dim`` is 1:
    then it is a batch of univariate points, one per row.
    """
    x = xp.array(x, dtype=xp.float64)
    if x.ndim == 1:
        if dim == 1:
            x = xp.reshape(x, (x.shape[0], 1))
        else:
            x = xp.reshape(x, (1, x.shape[0]))
    check_2d(x, name)
    if x.shape[1] < 1:
        raise DimensionMismatch(f"{name} must have at least one column, got shape {tuple(x.shape)}")
    return x


def check_dims(points: NDArray, mean: NDArray, covariance: NDArray) -> int:
    """Return the shared dimension d, raising DimensionMismatch on disagreement."""
    d = points.shape[1]
    if mean.shape[0] != d:
        raise DimensionMismatch(
            f"mean has length {mean.shape[0]} but points have {d} columns"
        )
    if covariance.shape[0] != d:
        raise DimensionMismatch(
            f"covariance is {covariance.shape[0]}x{covariance.shape[1]} "
            f"but points have {d} columns"
        )
    return d
