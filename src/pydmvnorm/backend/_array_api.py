"""Backend selection for the density kernel.

Two backends supply the linear-algebra primitives the kernel needs
(Cholesky factor, triangular solve, Cholesky solve):

* "numpy": NumPy arrays, SciPy LAPACK routines. Default.
* "torch": torch tensors, ``torch.linalg``; keeps autograd graphs intact.

Inputs pick the backend: a torch tensor anywhere means torch. Objects that
only expose the NumPy array protocol (``BigMatrix`` handles, memmaps, pandas
frames) are read as zero-copy NumPy views, so they always resolve to the
NumPy backend whatever the global default is.
"""

from __future__ import annotations

from typing import Any, Callable, Literal

import numpy as np

BackendName = Literal["numpy", "torch"]


def _load_numpy():
    from pydmvnorm.backend._numpy_backend import NumpyBackend
    return NumpyBackend()


def _load_torch():
    from pydmvnorm.backend._torch_backend import TorchBackend
    return TorchBackend()


_LOADERS: dict[str, Callable[[], Any]] = {"numpy": _load_numpy, "torch": _load_torch}

_default_name: BackendName = "numpy"

# Instantiated on first use; the torch backend imports torch lazily.
_instances: dict[str, Any] = {}


def _check_name(name: str) -> None:
    if name not in _LOADERS:
        raise ValueError(f"Unknown backend: {name!r}. Use 'numpy' or 'torch'.")


def get_backend(name: BackendName | None = None) -> Any:
    """Return the named backend, or the current default.

    Raises
    ------
    ValueError
        For names other than "numpy" and "torch".
    ImportError
        For "torch" when PyTorch is not installed.
    """
    if name is None:
        name = _default_name
    _check_name(name)
    if name not in _instances:
        _instances[name] = _LOADERS[name]()
    return _instances[name]


def set_backend(name: BackendName) -> None:
    """Change the backend used for inputs that do not select one themselves."""
    global _default_name
    _check_name(name)
    _default_name = name


def _is_tensor(obj: Any) -> bool:
    return type(obj).__module__.split(".")[0] == "torch"


def array_namespace(*arrays: Any) -> Any:
    """Backend for a call's points, mean and covariance.

    The first argument that decides wins: a torch tensor selects torch; an
    ndarray or any other object with ``__array__`` selects NumPy. Plain
    sequences and None defer to the default backend.
    """
    for arr in arrays:
        if arr is None:
            continue
        if _is_tensor(arr):
            return get_backend("torch")
        if isinstance(arr, np.ndarray) or hasattr(arr, "__array__"):
            return get_backend("numpy")

    return get_backend()
