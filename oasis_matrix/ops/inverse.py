################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Matrix inverse by Gauss-Jordan elimination with partial pivoting

The inverse is built in place on a float working copy of ``A``; no identity
matrix is appended. For each step ``k``:

    1. Pick the row p >= k with the largest |w[p][k]|. The search is seeded
       with |w[k][k]| and only strictly larger candidates replace it, so ties
       keep the earliest row.
    2. Stop with a singular result if that magnitude is below the tolerance.
    3. Swap rows k and p.
    4. Update, in this order:
         w[k][k] = 1 / w[k][k]
         w[i][k] = -w[k][k] * w[i][k]             for i != k
         w[i][j] += w[i][k] * w[k][j]             for i != k, j != k
         w[k][j] *= w[k][k]                       for j != k

Each sub-step reads values written by the one before it. When all steps are
done, the row exchanges are undone by swapping columns k and p[k], walking k
from n - 1 down to 0. The stored column k holds the inverse column that the
exchanges moved, so the column swaps must be applied in the reverse of the
order in which the row swaps happened.

The singularity tolerance scales with the input:

    tol = max(singular_atol, singular_rtol * max|a_ij|)

Cost is O(n^3) time and O(n) extra space for the pivot record.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from oasis_matrix.config.matrix_config import get_params
from oasis_matrix.config.matrix_params import MatrixParams
from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixTypeError
from oasis_matrix.core.matrix_errors import SingularMatrixError


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InverseResult:
    """Outcome of a matrix inversion.

    Attributes:
        matrix: The inverse, or None when the input is singular
        singular: True when no usable pivot was found
        pivot_rows: Pivot row chosen at each completed elimination step
        failed_step: Step at which elimination stopped, None on success
        pivot_magnitude: Best pivot magnitude at the failed step
        tolerance: Pivot tolerance used for the singularity test
    """

    matrix: Optional[Matrix]
    singular: bool
    pivot_rows: tuple[int, ...]
    failed_step: Optional[int]
    pivot_magnitude: Optional[float]
    tolerance: float

    def __post_init__(self) -> None:
        """Validate that the status and payload agree."""
        if self.singular and self.matrix is not None:
            raise ValueError("singular result must not carry a matrix")
        if not self.singular and self.matrix is None:
            raise ValueError("successful result must carry a matrix")

    @property
    def ok(self) -> bool:
        return not self.singular

    def unwrap(self) -> Matrix:
        """Return the inverse or raise SingularMatrixError."""
        if self.matrix is None:
            raise SingularMatrixError(
                f"matrix is singular: pivot {self.pivot_magnitude!r} at step "
                f"{self.failed_step} is below tolerance {self.tolerance!r}",
                step=self.failed_step,
                pivot_magnitude=self.pivot_magnitude,
                tolerance=self.tolerance,
            )
        return self.matrix


def inverse(a: Matrix, params: Optional[MatrixParams] = None) -> InverseResult:
    """Invert a square matrix.

    Args:
        a: Square matrix to invert, left unmodified
        params: Parameters supplying the singularity tolerance, defaults to
            the active parameters

    Returns:
        InverseResult carrying the inverse, or the singular status

    Raises:
        MatrixDimensionError: If ``a`` is not square
        MatrixTypeError: If ``a`` is not a Matrix or holds a non-finite value
    """
    if not isinstance(a, Matrix):
        raise MatrixTypeError("inverse requires a Matrix")
    if not a.is_square():
        raise MatrixDimensionError(
            f"inverse requires a square matrix, got {a.rows()}x{a.cols()}"
        )
    if not all(math.isfinite(value) for value in a.buffer):
        raise MatrixTypeError("inverse requires finite elements")
    if params is None:
        params = get_params()

    n: int = a.rows()
    max_abs: float = max((abs(value) for value in a.buffer), default=0.0)
    tol: float = params.pivot_tolerance(float(max_abs))

    work: Matrix = Matrix(n, n, dtype=float)
    work.buffer[:] = [float(value) for value in a.buffer]
    w: list[float] = work.buffer  # type: ignore[assignment]
    offsets: list[int] = work.row_offsets()
    pivot_rows: list[int] = [0] * n

    for k in range(n):
        row_k: int = offsets[k]

        # Pivot search
        pivot_row: int = k
        pivot_mag: float = abs(w[row_k + k])
        for i in range(k + 1, n):
            candidate: float = abs(w[offsets[i] + k])
            if candidate > pivot_mag:
                pivot_mag = candidate
                pivot_row = i
        pivot_rows[k] = pivot_row

        # A NaN pivot from overflow during elimination also fails here
        if not pivot_mag >= tol:
            if params.log_singular:
                _LOG.info(
                    "Matrix is singular, pivot %g at step %d below tolerance %g",
                    pivot_mag,
                    k,
                    tol,
                )
            return InverseResult(
                matrix=None,
                singular=True,
                pivot_rows=tuple(pivot_rows[:k]),
                failed_step=k,
                pivot_magnitude=pivot_mag,
                tolerance=tol,
            )

        # Row exchange
        if pivot_row != k:
            row_p: int = offsets[pivot_row]
            for j in range(n):
                w[row_k + j], w[row_p + j] = w[row_p + j], w[row_k + j]

        # Pivot reciprocal
        w[row_k + k] = 1.0 / w[row_k + k]
        pivot: float = w[row_k + k]

        # Column k
        for i in range(n):
            if i != k:
                w[offsets[i] + k] = -pivot * w[offsets[i] + k]

        # Everything outside row k and column k
        for i in range(n):
            if i == k:
                continue
            row_i: int = offsets[i]
            factor: float = w[row_i + k]
            for j in range(n):
                if j != k:
                    w[row_i + j] += factor * w[row_k + j]

        # Row k
        for j in range(n):
            if j != k:
                w[row_k + j] *= pivot

    # Undo the row exchanges as column exchanges, last exchange first
    for k in range(n - 1, -1, -1):
        p: int = pivot_rows[k]
        if p != k:
            for i in range(n):
                row_i = offsets[i]
                w[row_i + k], w[row_i + p] = w[row_i + p], w[row_i + k]

    return InverseResult(
        matrix=work,
        singular=False,
        pivot_rows=tuple(pivot_rows),
        failed_step=None,
        pivot_magnitude=None,
        tolerance=tol,
    )


def inv(a: Matrix, params: Optional[MatrixParams] = None) -> Matrix:
    """Return the inverse of ``a`` or raise SingularMatrixError."""
    return inverse(a, params).unwrap()
