"""Tests for backend abstraction."""

from __future__ import annotations

import numpy as np
import pytest

from pydmvnorm.backend import array_namespace, get_backend, set_backend
from pydmvnorm.bigmatrix import as_big_matrix


class TestGetBackend:
    def test_numpy_backend(self):
        xp = get_backend("numpy")
        assert xp.name == "numpy"

    def test_default_is_numpy(self):
        xp = get_backend()
        assert xp.name == "numpy"

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            get_backend("invalid")

    def test_set_invalid_backend(self):
        with pytest.raises(ValueError):
            set_backend("jax")

    def test_cached(self):
        assert get_backend("numpy") is get_backend("numpy")


class TestArrayNamespace:
    def test_infer_numpy(self):
        xp = array_namespace(np.array([1.0]))
        assert xp.name == "numpy"

    def test_infer_none_returns_default(self):
        xp = array_namespace(None)
        assert xp.name == "numpy"

    def test_big_matrix_uses_default(self):
        xp = array_namespace(as_big_matrix(np.eye(2)))
        assert xp.name == "numpy"


@pytest.fixture
def torch_default():
    """Make torch the global default for one test, restoring numpy afterwards."""
    set_backend("torch")
    yield
    set_backend("numpy")


class TestArrayProtocolInputs:
    def test_memmap_uses_numpy(self, tmp_path):
        path = tmp_path / "m.bin"
        np.zeros(4).tofile(path)
        mm = np.memmap(path, dtype=np.float64, mode="r", shape=(4,))
        assert array_namespace(None, mm).name == "numpy"

    def test_big_matrix_ignores_torch_default(self, torch_default):
        assert array_namespace(as_big_matrix(np.eye(2))).name == "numpy"

    def test_gradient_of_big_matrix_with_torch_default(self, torch_default, points_3d, cov_3x3):
        from pydmvnorm.dmvnorm import compute_density_gradient

        mean = np.array([0.5, -1.0, 2.0])
        grad = compute_density_gradient(as_big_matrix(points_3d), mean, cov_3x3)
        assert isinstance(grad, np.ndarray)
        np.testing.assert_allclose(grad, compute_density_gradient(points_3d, mean, cov_3x3))

    def test_big_matrix_on_explicit_torch_backend(self, xp_torch, points_3d, cov_3x3):
        from pydmvnorm.dmvnorm import compute_density_gradient

        mean = np.array([0.5, -1.0, 2.0])
        grad = compute_density_gradient(as_big_matrix(points_3d), mean, cov_3x3, xp=xp_torch)
        np.testing.assert_allclose(
            xp_torch.to_numpy(grad), compute_density_gradient(points_3d, mean, cov_3x3), rtol=1e-10
        )


class TestNumpyBackendOps:
    def test_cholesky_upper(self, xp_numpy, pd_3x3):
        R = xp_numpy.cholesky_upper(pd_3x3)
        np.testing.assert_allclose(R.T @ R, pd_3x3, atol=1e-10)
        np.testing.assert_array_equal(np.tril(R, -1), np.zeros((3, 3)))

    def test_cholesky_failure_type(self, xp_numpy):
        with pytest.raises(xp_numpy.LinAlgError):
            xp_numpy.cholesky_upper(np.array([[1.0, 3.0], [3.0, 1.0]]))

    def test_solve_triangular(self, xp_numpy, pd_3x3):
        R = xp_numpy.cholesky_upper(pd_3x3)
        b = np.array([1.0, 2.0, 3.0])
        x = xp_numpy.solve_triangular(R, b)
        np.testing.assert_allclose(R @ x, b, atol=1e-12)

    def test_cho_solve(self, xp_numpy, pd_3x3):
        R = xp_numpy.cholesky_upper(pd_3x3)
        b = np.array([[1.0, 0.0], [2.0, 1.0], [3.0, -1.0]])
        x = xp_numpy.cho_solve(R, b)
        np.testing.assert_allclose(pd_3x3 @ x, b, atol=1e-12)

    def test_all_finite(self, xp_numpy):
        assert xp_numpy.all_finite(np.ones(3))
        assert not xp_numpy.all_finite(np.array([1.0, np.nan]))


class TestTorchBackend:
    def test_matches_numpy(self, xp_torch, points_3d, cov_3x3):
        import torch

        from pydmvnorm.dmvnorm import compute_density_gradient

        mean = np.array([0.5, -1.0, 2.0])
        g_np = compute_density_gradient(points_3d, mean, cov_3x3)
        g_t = compute_density_gradient(torch.tensor(points_3d), mean, cov_3x3)
        assert isinstance(g_t, torch.Tensor)
        np.testing.assert_allclose(g_t.numpy(), g_np, rtol=1e-10)

    def test_loop_method(self, xp_torch, points_3d, cov_3x3):
        import torch

        from pydmvnorm.dmvnorm import DMVNormControl, compute_density_gradient

        mean = np.array([0.5, -1.0, 2.0])
        g_np = compute_density_gradient(points_3d, mean, cov_3x3)
        g_t = compute_density_gradient(
            torch.tensor(points_3d), mean, cov_3x3,
            control=DMVNormControl(method="loop"),
        )
        np.testing.assert_allclose(g_t.numpy(), g_np, rtol=1e-10)

    def test_agrees_with_autograd(self, xp_torch, points_3d, cov_3x3):
        import torch

        from pydmvnorm.dmvnorm import compute_density_gradient, dmvnorm

        mean = np.array([0.5, -1.0, 2.0])
        x = torch.tensor(points_3d, requires_grad=True)
        (auto,) = torch.autograd.grad(dmvnorm(x, mean, cov_3x3).sum(), x)
        analytic = compute_density_gradient(points_3d, mean, cov_3x3)
        np.testing.assert_allclose(auto.numpy(), analytic, rtol=1e-10)

    def test_invalid_covariance(self, xp_torch):
        import torch

        from pydmvnorm.dmvnorm import InvalidCovariance, compute_density_gradient

        with pytest.raises(InvalidCovariance):
            compute_density_gradient(
                torch.ones((2, 2), dtype=torch.float64),
                np.zeros(2),
                np.array([[1.0, 0.0], [0.0, -1.0]]),
            )
