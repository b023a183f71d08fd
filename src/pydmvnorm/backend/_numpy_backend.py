"""NumPy + SciPy backend implementation."""

from __future__ import annotations

import numpy as np
import scipy.linalg


class NumpyBackend:
    """Backend wrapping NumPy + SciPy LAPACK routines."""

    name = "numpy"
    float64 = np.float64
    LinAlgError = np.linalg.LinAlgError

    # --- Array creation ---
    @staticmethod
    def array(data, dtype=None):
        return np.asarray(data, dtype=dtype)

    @staticmethod
    def zeros(shape, dtype=np.float64):
        return np.zeros(shape, dtype=dtype)

    @staticmethod
    def eye(n, dtype=np.float64):
        return np.eye(n, dtype=dtype)

    # --- Array manipulation ---
    @staticmethod
    def reshape(a, shape):
        return np.reshape(a, shape)

    @staticmethod
    def diagonal(a, offset=0):
        return np.diagonal(a, offset=offset)

    @staticmethod
    def transpose(a):
        return a.T

    # --- Math operations ---
    @staticmethod
    def exp(x):
        return np.exp(x)

    @staticmethod
    def log(x):
        return np.log(x)

    @staticmethod
    def sum(a, axis=None):
        return np.sum(a, axis=axis)

    @staticmethod
    def all_finite(a):
        return bool(np.all(np.isfinite(a)))

    # --- Linear algebra ---
    @staticmethod
    def matmul(a, b):
        return a @ b

    @staticmethod
    def cholesky_upper(A):
        """Upper Cholesky factor R with R^T R = A."""
        return scipy.linalg.cholesky(A, lower=False)

    @staticmethod
    def solve_triangular(R, b, lower=False):
        return scipy.linalg.solve_triangular(R, b, lower=lower)

    @staticmethod
    def cho_solve(R, b):
        """Solve (R^T R) x = b given the upper factor R."""
        return scipy.linalg.cho_solve((R, False), b)

    # --- Type checking ---
    @staticmethod
    def to_numpy(x):
        return np.asarray(x)
