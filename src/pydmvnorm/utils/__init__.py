"""Utility functions."""

from pydmvnorm.utils._validation import (
    as_points,
    check_2d,
    check_dims,
    check_square,
    check_symmetric,
)

__all__ = ["as_points", "check_2d", "check_dims", "check_square", "check_symmetric"]
