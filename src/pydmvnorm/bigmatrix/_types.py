"""Element type tags for external matrices.

Codes are the ``matrix_type()`` values used by R's bigmemory package, so a
handle described by another process maps onto the same element width.
"""

from __future__ import annotations

from enum import IntEnum

import numpy as np

from pydmvnorm._exceptions import UnknownMatrixType


class MatrixType(IntEnum):
    CHAR = 1
    SHORT = 2
    INTEGER = 4
    FLOAT = 6
    DOUBLE = 8

    @classmethod
    def from_code(cls, code) -> "MatrixType":
        """Look up a tag by its integer code or name."""
        if isinstance(code, str):
            try:
                return cls[code.upper()]
            except KeyError:
                raise UnknownMatrixType(f"Undefined type for matrix: {code!r}") from None
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            raise UnknownMatrixType(f"Undefined type for matrix: {code!r}") from None

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(_DTYPES[self])

    @property
    def itemsize(self) -> int:
        return self.dtype.itemsize


_DTYPES = {
    MatrixType.CHAR: np.int8,
    MatrixType.SHORT: np.int16,
    MatrixType.INTEGER: np.int32,
    MatrixType.FLOAT: np.float32,
    MatrixType.DOUBLE: np.float64,
}
