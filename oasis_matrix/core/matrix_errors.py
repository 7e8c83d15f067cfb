################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Exception types raised by the dense matrix core."""

from __future__ import annotations


class MatrixError(Exception):
    """Base class for all matrix errors."""


class MatrixDimensionError(MatrixError, ValueError):
    """Raised when operand shapes are incompatible or invalid."""


class MatrixIndexError(MatrixError, IndexError):
    """Raised when an element index is out of range."""


class MatrixTypeError(MatrixError, TypeError):
    """Raised when an operand or element type is not supported."""


class SingularMatrixError(MatrixError, ArithmeticError):
    """Raised when an inverse is requested from a singular matrix.

    Attributes:
        step: Elimination step at which no usable pivot was found
        pivot_magnitude: Magnitude of the best pivot candidate at that step
        tolerance: Pivot tolerance that the candidate failed to reach
    """

    def __init__(
        self,
        message: str,
        step: int | None = None,
        pivot_magnitude: float | None = None,
        tolerance: float | None = None,
    ) -> None:
        super().__init__(message)
        self.step: int | None = step
        self.pivot_magnitude: float | None = pivot_magnitude
        self.tolerance: float | None = tolerance


class MatrixFormatError(MatrixError, ValueError):
    """Raised when matrix text cannot be parsed."""


class MatrixParamsError(MatrixError, ValueError):
    """Raised when matrix parameter validation fails."""


class MatrixConfigError(MatrixError):
    """Raised when a matrix configuration file cannot be loaded."""


class MatrixPersistenceError(MatrixError):
    """Raised when loading or saving matrix files fails."""
