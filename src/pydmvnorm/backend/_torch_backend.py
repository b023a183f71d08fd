"""PyTorch backend implementation (optional dependency)."""

from __future__ import annotations

from typing import Any


def _import_torch():
    """Lazy import of torch."""
    try:
        import torch
        return torch
    except ImportError as e:
        raise ImportError(
            "PyTorch is required for the torch backend. "
            "Install it with: pip install pydmvnorm[torch]"
        ) from e


class TorchBackend:
    """Backend wrapping torch.linalg, usable on CPU or GPU and under autograd."""

    name = "torch"

    def __init__(self, device: str = "cpu", dtype: Any = None):
        self._torch = _import_torch()
        self.device = device
        self.float64 = self._torch.float64
        self.LinAlgError = self._torch.linalg.LinAlgError
        self._default_dtype = dtype or self._torch.float64

    # --- Array creation ---
    def array(self, data, dtype=None):
        dtype = dtype or self._default_dtype
        if isinstance(data, self._torch.Tensor):
            return data.to(device=self.device, dtype=dtype)
        if hasattr(data, "__array__"):
            # BigMatrix handles and memmaps: go through their NumPy view
            import numpy as np
            data = np.asarray(data)
        return self._torch.as_tensor(data, dtype=dtype, device=self.device)

    def zeros(self, shape, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.zeros(shape, dtype=dtype, device=self.device)

    def eye(self, n, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.eye(n, dtype=dtype, device=self.device)

    # --- Array manipulation ---
    def reshape(self, a, shape):
        return a.reshape(shape)

    def diagonal(self, a, offset=0):
        return self._torch.diagonal(a, offset=offset)

    def transpose(self, a):
        if a.dim() < 2:
            return a
        return a.T

    # --- Math operations ---
    def exp(self, x):
        return self._torch.exp(x)

    def log(self, x):
        return self._torch.log(x)

    def sum(self, a, axis=None):
        if axis is None:
            return a.sum()
        return a.sum(dim=axis)

    def all_finite(self, a):
        return bool(self._torch.isfinite(a).all())

    # --- Linear algebra ---
    def matmul(self, a, b):
        return a @ b

    def cholesky_upper(self, A):
        """Upper Cholesky factor R with R^T R = A."""
        return self._torch.linalg.cholesky(A, upper=True)

    def solve_triangular(self, R, b, lower=False):
        return self._torch.linalg.solve_triangular(R, b, upper=not lower)

    def cho_solve(self, R, b):
        """Solve (R^T R) x = b given the upper factor R."""
        return self._torch.cholesky_solve(b, R, upper=True)

    # --- Type checking ---
    def to_numpy(self, x):
        if isinstance(x, self._torch.Tensor):
            return x.detach().cpu().numpy()
        import numpy as np
        return np.asarray(x)
