################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Shape-changing helpers and scalar reductions over matrices."""

from __future__ import annotations

import math
from typing import Optional

from oasis_matrix.core.element_types import Scalar
from oasis_matrix.core.element_types import resolve_dtype
from oasis_matrix.core.element_types import scalar_dtype
from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.vector import Vector


def transpose(a: Matrix) -> Matrix:
    """Return ``A^T`` as a new matrix with the shape swapped."""
    rows: int = a.rows()
    cols: int = a.cols()
    out: Matrix = Matrix(cols, rows, dtype=a.dtype)
    src: list[Scalar] = a.buffer
    dst: list[Scalar] = out.buffer
    for i in range(rows):
        base: int = i * cols
        for j in range(cols):
            dst[j * rows + i] = src[base + j]
    return out


def diag(a: Matrix) -> Vector:
    """Return the main diagonal as a vector of length ``min(rows, cols)``."""
    count: int = min(a.rows(), a.cols())
    stride: int = a.cols() + 1
    return Vector.from_values(
        [a.buffer[i * stride] for i in range(count)], dtype=a.dtype
    )


def trace(a: Matrix) -> Scalar:
    """Return the sum of the main diagonal in the matrix element type."""
    total: Scalar = a.dtype(0)
    for value in diag(a):
        total += value
    return total


def eye(n: int, x: Scalar = 1, dtype: Optional[type] = None) -> Matrix:
    """Return an ``n x n`` matrix with ``x`` on the diagonal and zeros elsewhere.

    Args:
        n: Order of the matrix, 0 gives the empty matrix
        x: Diagonal value
        dtype: Element type, taken from ``x`` when omitted

    Raises:
        MatrixDimensionError: If ``n`` is negative
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise MatrixDimensionError("eye order must be an int")
    if n < 0:
        raise MatrixDimensionError("eye order must be non-negative")
    element_type: type = resolve_dtype(dtype if dtype is not None else scalar_dtype(x))
    out: Matrix = Matrix(n, n, dtype=element_type)
    for i in range(1, n + 1):
        out.set1(i, i, x)
    return out


def norm(a: Matrix) -> Scalar:
    """Return the Frobenius norm ``sqrt(sum(a_ij^2))``.

    The sum of squares is accumulated in the element type. For an int
    matrix the square root is truncated back to an int.
    """
    total: Scalar = a.dtype(0)
    for i in range(1, a.rows() + 1):
        for j in range(1, a.cols() + 1):
            value: Scalar = a(i, j)
            total += value * value
    root: float = math.sqrt(total)
    if a.dtype is int:
        return int(root)
    return root
