"""Typed views over externally-owned column-major matrix buffers."""

from pydmvnorm._exceptions import BigMatrixError, BufferSizeError, UnknownMatrixType
from pydmvnorm.bigmatrix._io import read_big_matrix
from pydmvnorm.bigmatrix._types import MatrixType
from pydmvnorm.bigmatrix._view import (
    BigMatrix,
    apply_typed,
    as_big_matrix,
    attach_big_matrix,
)

__all__ = [
    "BigMatrix",
    "MatrixType",
    "as_big_matrix",
    "attach_big_matrix",
    "read_big_matrix",
    "apply_typed",
    "BigMatrixError",
    "BufferSizeError",
    "UnknownMatrixType",
]
