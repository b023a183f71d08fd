"""Import delimited text files into file-backed matrices."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from pydmvnorm._exceptions import BigMatrixError
from pydmvnorm.bigmatrix._types import MatrixType
from pydmvnorm.bigmatrix._view import BigMatrix, as_big_matrix


def _read_table(path: Path, header: bool, file_type: str | None) -> pd.DataFrame:
    if file_type is None:
        file_type = path.suffix.lower().lstrip(".")

    header_row = 0 if header else None
    if file_type in ("dat", "txt"):
        return pd.read_csv(path, sep=r"\s+", header=header_row)
    return pd.read_csv(path, header=header_row)


def read_big_matrix(
    path: str | Path,
    *,
    backingfile: str | Path | None = None,
    matrix_type=MatrixType.DOUBLE,
    header: bool = True,
    file_type: str | None = None,
) -> BigMatrix:
    """Read a numeric CSV/DAT file into a matrix.

    Parameters
    ----------
    path : str or Path
        Delimited text file. ".dat"/".txt" files are whitespace-delimited,
        everything else comma-delimited.
    backingfile : str or Path, optional
        If given, the matrix is written to this raw binary file and
        memory-mapped from it; otherwise it lives in memory.
    matrix_type : MatrixType or int or str
    header : bool
        Whether the first line holds column names.
    file_type : str or None
        Force "csv", "dat" or "txt". Auto-detected from the suffix if None.

    Returns
    -------
    big : BigMatrix
    """
    path = Path(path)
    matrix_type = MatrixType.from_code(matrix_type)

    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = _read_table(path, header, file_type)
    non_numeric = [c for c in df.columns if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise BigMatrixError(f"Non-numeric columns in {path.name}: {non_numeric}")
    if matrix_type.dtype.kind == "i" and df.isna().to_numpy().any():
        raise BigMatrixError(
            f"Missing values cannot be stored in a {matrix_type.name} matrix"
        )

    values = df.to_numpy(dtype=np.float64)
    colnames = [str(c) for c in df.columns] if header else None

    if backingfile is None:
        return as_big_matrix(values, matrix_type, colnames=colnames)

    backingfile = Path(backingfile)
    nrow, ncol = values.shape
    if nrow * ncol == 0:
        raise BigMatrixError(f"{path.name} holds no data to back a file with")

    mm = np.memmap(backingfile, dtype=matrix_type.dtype, mode="w+", shape=(nrow * ncol,))
    mm[:] = values.ravel(order="F").astype(matrix_type.dtype)
    mm.flush()
    return BigMatrix(
        mm, nrow, ncol, matrix_type, backingfile=backingfile, colnames=colnames
    )
