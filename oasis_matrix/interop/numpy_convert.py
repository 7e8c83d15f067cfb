################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Conversion between matrix containers and NumPy arrays."""

from __future__ import annotations

import numpy as np

from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixTypeError
from oasis_matrix.core.vector import Vector


def _numpy_dtype(dtype: type) -> type:
    return np.int64 if dtype is int else np.float64


def _element_type(array: np.ndarray) -> type:
    if np.issubdtype(array.dtype, np.bool_):
        raise MatrixTypeError("boolean arrays are not supported")
    if np.issubdtype(array.dtype, np.integer):
        return int
    if np.issubdtype(array.dtype, np.floating):
        if not np.all(np.isfinite(array)):
            raise MatrixTypeError("array must be finite")
        return float
    raise MatrixTypeError(f"unsupported array dtype: {array.dtype}")


def to_numpy(a: Matrix) -> np.ndarray:
    """Return a copy of ``a`` as an array of shape (rows, cols)."""
    array: np.ndarray = np.array(a.buffer, dtype=_numpy_dtype(a.dtype))
    return array.reshape(a.rows(), a.cols())


def from_numpy(array: np.ndarray) -> Matrix:
    """Build a matrix from a 2-D integer or floating-point array.

    Raises:
        MatrixDimensionError: If the array is not 2-D or has a single zero
            dimension
        MatrixTypeError: If the array dtype is unsupported or a float array
            holds non-finite values
    """
    values: np.ndarray = np.asarray(array)
    if values.ndim != 2:
        raise MatrixDimensionError(f"array must be 2-D, got {values.ndim}-D")
    dtype: type = _element_type(values)
    rows: int = int(values.shape[0])
    cols: int = int(values.shape[1])
    return Matrix.from_array(rows, cols, values.ravel().tolist(), dtype=dtype)


def vector_to_numpy(v: Vector) -> np.ndarray:
    """Return a copy of ``v`` as a 1-D array."""
    return np.array(v.data, dtype=_numpy_dtype(v.dtype))


def vector_from_numpy(array: np.ndarray) -> Vector:
    """Build a vector from a 1-D integer or floating-point array."""
    values: np.ndarray = np.asarray(array)
    if values.ndim != 1:
        raise MatrixDimensionError(f"array must be 1-D, got {values.ndim}-D")
    dtype: type = _element_type(values)
    return Vector.from_values(values.tolist(), dtype=dtype)
