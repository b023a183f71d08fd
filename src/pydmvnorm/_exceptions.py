"""Exception hierarchy.

All errors derive from ``ValueError`` so callers that already guard numeric
input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class PyDMVNormError(ValueError):
    """Base class for pydmvnorm errors."""


class InvalidCovariance(PyDMVNormError):
    """Covariance matrix is not finite, not symmetric, or not positive definite."""


class DimensionMismatch(PyDMVNormError):
    """Shapes of points, mean and covariance disagree."""


class BigMatrixError(PyDMVNormError):
    """Invalid external matrix handle."""


class UnknownMatrixType(BigMatrixError):
    """Element type tag has no registered width."""


class BufferSizeError(BigMatrixError):
    """Buffer is too small for the declared matrix shape."""
