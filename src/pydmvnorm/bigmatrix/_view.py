"""Typed matrix views over externally-owned buffers.

A ``BigMatrix`` describes memory it does not own: a contiguous buffer holding
``nrow * ncol`` elements in column-major order, plus a tag giving the element
width. ``to_array`` reinterprets that memory as a NumPy array without copying,
so linear algebra can run directly on data allocated elsewhere (a
memory-mapped file, a shared-memory segment, a bytearray filled by another
library).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from pydmvnorm._exceptions import BigMatrixError, BufferSizeError
from pydmvnorm.bigmatrix._types import MatrixType


@dataclass
class BigMatrix:
    """Handle over an external column-major matrix buffer.

    Attributes
    ----------
    buffer : object
        Anything exposing the buffer protocol (bytes, bytearray, mmap,
        numpy.memmap, multiprocessing.shared_memory buffers).
    nrow, ncol : int
        Matrix shape.
    matrix_type : MatrixType or int or str
        Element type tag; normalized to ``MatrixType``.
    backingfile : Path or None
        File the buffer is mapped from, if any.
    colnames : tuple of str or None
    """

    buffer: Any
    nrow: int
    ncol: int
    matrix_type: MatrixType = MatrixType.DOUBLE
    backingfile: Path | None = None
    colnames: tuple[str, ...] | None = None

    def __post_init__(self):
        self.matrix_type = MatrixType.from_code(self.matrix_type)
        self.nrow = int(self.nrow)
        self.ncol = int(self.ncol)
        if self.nrow < 0 or self.ncol < 0:
            raise BigMatrixError(f"Invalid matrix shape ({self.nrow}, {self.ncol})")

        try:
            view = memoryview(self.buffer)
        except TypeError as err:
            raise BigMatrixError(
                f"{type(self.buffer).__name__} does not expose the buffer protocol"
            ) from err
        if not view.contiguous:
            raise BigMatrixError("buffer must be contiguous")

        needed = self.nrow * self.ncol * self.matrix_type.itemsize
        if view.nbytes < needed:
            raise BufferSizeError(
                f"buffer holds {view.nbytes} bytes, a {self.nrow}x{self.ncol} "
                f"{self.matrix_type.name} matrix needs {needed}"
            )
        if self.colnames is not None:
            self.colnames = tuple(str(c) for c in self.colnames)
            if len(self.colnames) != self.ncol:
                raise BigMatrixError(
                    f"{len(self.colnames)} column names for {self.ncol} columns"
                )

    @property
    def shape(self) -> tuple[int, int]:
        return (self.nrow, self.ncol)

    @property
    def dtype(self) -> np.dtype:
        return self.matrix_type.dtype

    def to_array(self) -> NDArray:
        """Zero-copy (nrow, ncol) view of the buffer in Fortran order.

        Writes through the view land in the external buffer. Read-only
        buffers give read-only views.
        """
        count = self.nrow * self.ncol
        if count == 0:
            return np.empty(self.shape, dtype=self.dtype, order="F")
        flat = np.frombuffer(self.buffer, dtype=self.dtype, count=count)
        return flat.reshape(self.shape, order="F")

    def __array__(self, dtype=None, copy=None):
        arr = self.to_array()
        if dtype is not None and arr.dtype != np.dtype(dtype):
            return arr.astype(dtype)
        if copy:
            return arr.copy()
        return arr

    def flush(self) -> None:
        """Write pending changes of a memory-mapped buffer to disk."""
        flush = getattr(self.buffer, "flush", None)
        if flush is not None:
            flush()


def as_big_matrix(data, matrix_type=MatrixType.DOUBLE, *, colnames=None) -> BigMatrix:
    """Copy an array-like into a new in-memory column-major buffer.

    Parameters
    ----------
    data : array-like, shape (nrow, ncol) or (nrow,)
        A 1-D input becomes a single column.
    matrix_type : MatrixType or int or str
        Values are cast to the tag's dtype.
    colnames : sequence of str, optional

    Returns
    -------
    big : BigMatrix
    """
    matrix_type = MatrixType.from_code(matrix_type)
    arr = np.asarray(data)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise BigMatrixError(f"data must be 1- or 2-dimensional, got shape {arr.shape}")

    buf = bytearray(arr.astype(matrix_type.dtype).tobytes(order="F"))
    return BigMatrix(buf, arr.shape[0], arr.shape[1], matrix_type, colnames=colnames)


def attach_big_matrix(
    path: str | Path,
    nrow: int,
    ncol: int,
    matrix_type=MatrixType.DOUBLE,
    *,
    mode: str = "r",
) -> BigMatrix:
    """Map an existing binary backing file as a matrix.

    Parameters
    ----------
    path : str or Path
        Raw column-major element data, no header.
    nrow, ncol : int
    matrix_type : MatrixType or int or str
    mode : {"r", "r+", "c"}
        ``numpy.memmap`` access mode; "r" gives a read-only view.

    Returns
    -------
    big : BigMatrix
    """
    path = Path(path)
    matrix_type = MatrixType.from_code(matrix_type)

    if not path.exists():
        raise FileNotFoundError(f"Backing file not found: {path}")
    if mode not in ("r", "r+", "c"):
        raise ValueError(f"Unknown mode: {mode!r}. Use 'r', 'r+' or 'c'.")

    count = int(nrow) * int(ncol)
    if count <= 0:
        raise BigMatrixError("Cannot map an empty matrix")
    needed = count * matrix_type.itemsize
    size = path.stat().st_size
    if size < needed:
        raise BufferSizeError(
            f"{path} holds {size} bytes, a {nrow}x{ncol} "
            f"{matrix_type.name} matrix needs {needed}"
        )

    mm = np.memmap(path, dtype=matrix_type.dtype, mode=mode, shape=(count,))
    return BigMatrix(mm, nrow, ncol, matrix_type, backingfile=path)


def apply_typed(func: Callable[..., Any], big: BigMatrix, *args, **kwargs) -> Any:
    """Call ``func`` on the typed view of ``big``.

    No dispatch happens here: the view's dtype comes from the handle's tag,
    which ``BigMatrix`` already validated when the handle was built.
    """
    return func(big.to_array(), *args, **kwargs)
