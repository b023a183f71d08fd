"""Density evaluation control structure.

Holds the default parameters that R's ``dmvnorm`` bakes into its signature
(zero mean, identity covariance) as explicit configuration, together with
the evaluation options of the kernel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray

Method = Literal["vectorized", "loop"]

_METHODS = ("vectorized", "loop")


@dataclass
class DMVNormControl:
    """Control structure for density and density-gradient evaluation.

    Attributes
    ----------
    mean : NDArray or None
        Default mean vector. None means the zero vector of the points'
        dimension.
    covariance : NDArray or None
        Default covariance matrix. None means the identity matrix.
    method : {"vectorized", "loop"}
        "vectorized" evaluates all points with batched matrix products;
        "loop" evaluates one point at a time. Results are identical.
    check_symmetry : bool
        If True, reject covariance matrices that are not symmetric.
    symmetry_tol : float
        Absolute tolerance for the symmetry check.
    """

    mean: NDArray | None = None
    covariance: NDArray | None = None
    method: Method = "vectorized"
    check_symmetry: bool = True
    symmetry_tol: float = 1e-10

    def __post_init__(self):
        if self.method not in _METHODS:
            raise ValueError(
                f"Unknown method: {self.method!r}. Use 'vectorized' or 'loop'."
            )

    def dim_hint(self, mean=None, covariance=None) -> int | None:
        """Dimension fixed by the covariance or mean, None if both default."""
        if covariance is None:
            covariance = self.covariance
        if mean is None:
            mean = self.mean

        if covariance is not None:
            shape = tuple(covariance.shape) if hasattr(covariance, "shape") else np.shape(covariance)
            if len(shape) == 2:
                return int(shape[0])
        if mean is not None:
            shape = tuple(mean.shape) if hasattr(mean, "shape") else np.shape(mean)
            return int(np.prod(shape))
        return None

    def resolve(self, d: int, mean=None, covariance=None, *, xp):
        """Return (mean, covariance) for dimension d.

        Explicit arguments win over the control defaults; missing values fall
        back to the zero vector and the identity matrix.
        """
        if mean is None:
            mean = self.mean
        if covariance is None:
            covariance = self.covariance

        if mean is None:
            mean = xp.zeros((d,), dtype=xp.float64)
        else:
            mean = xp.reshape(xp.array(mean, dtype=xp.float64), (-1,))

        if covariance is None:
            covariance = xp.eye(d, dtype=xp.float64)
        else:
            covariance = xp.array(covariance, dtype=xp.float64)

        return mean, covariance
