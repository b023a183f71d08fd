"""Shared test fixtures for pydmvnorm."""

from __future__ import annotations

import numpy as np
import pytest

from pydmvnorm.backend import get_backend


@pytest.fixture
def xp_numpy():
    """NumPy backend fixture."""
    return get_backend("numpy")


@pytest.fixture
def xp_torch():
    """PyTorch backend fixture (skips if torch not installed)."""
    pytest.importorskip("torch")
    return get_backend("torch")


@pytest.fixture(params=["vectorized", "loop"])
def method(request):
    """Both evaluation strategies of the density kernel."""
    return request.param


@pytest.fixture
def pd_3x3():
    """3x3 positive-definite symmetric matrix."""
    return np.array([[4.0, 2.0, 1.0],
                     [2.0, 5.0, 3.0],
                     [1.0, 3.0, 6.0]])


@pytest.fixture
def cov_2x2():
    """2x2 covariance with unequal variances and positive correlation."""
    return np.array([[2.0, 0.6],
                     [0.6, 1.0]])


@pytest.fixture
def cov_3x3():
    """3x3 covariance matrix with known std devs and correlations."""
    # Sigma = omega * R * omega
    # omega = diag(1.0, 1.5, 2.0)
    # R = [[1, 0.6, 0.3], [0.6, 1, 0.5], [0.3, 0.5, 1]]
    omega = np.diag([1.0, 1.5, 2.0])
    corr = np.array([[1.0, 0.6, 0.3],
                     [0.6, 1.0, 0.5],
                     [0.3, 0.5, 1.0]])
    return omega @ corr @ omega


@pytest.fixture
def points_3d():
    """Eight fixed points around (0.5, -1, 2)."""
    rng = np.random.default_rng(20130901)
    return np.array([0.5, -1.0, 2.0]) + rng.normal(scale=1.5, size=(8, 3))


def numerical_gradient(f, x, eps=1e-6):
    """Compute numerical gradient via central finite differences.

    Parameters
    ----------
    f : callable
        Scalar-valued function f(x).
    x : ndarray
        Point at which to evaluate the gradient.
    eps : float
        Perturbation size.

    Returns
    -------
    grad : ndarray
        Numerical gradient, same shape as x.
    """
    x = np.asarray(x, dtype=np.float64)
    grad = np.zeros_like(x)
    for i in range(x.size):
        x_plus = x.copy()
        x_minus = x.copy()
        x_plus.flat[i] += eps
        x_minus.flat[i] -= eps
        grad.flat[i] = (f(x_plus) - f(x_minus)) / (2 * eps)
    return grad
