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
Elementwise matrix arithmetic

Every operation walks the flat row-major buffer once. Matrix-matrix forms
require identical shapes and raise MatrixDimensionError otherwise; this
check is unconditional.

Out-of-place forms return a new matrix whose element type is ``float`` if
either operand is a float or the operation is a true division, and ``int``
otherwise. In-place forms mutate and return the left operand, keeping its
element type, so in-place arithmetic that would turn an int matrix into
floats raises MatrixTypeError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from oasis_matrix.core.element_types import Scalar
from oasis_matrix.core.element_types import coerce
from oasis_matrix.core.element_types import result_dtype
from oasis_matrix.core.element_types import scalar_dtype
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixTypeError


if TYPE_CHECKING:
    from oasis_matrix.core.matrix import Matrix


def _require_same_shape(a: Matrix, b: Matrix, name: str) -> None:
    if a.shape != b.shape:
        raise MatrixDimensionError(
            f"{name} requires equal shapes, got {a.rows()}x{a.cols()} "
            f"and {b.rows()}x{b.cols()}"
        )


def _require_in_place(a: Matrix, other_dtype: type, name: str) -> None:
    if a.dtype is int and other_dtype is float:
        raise MatrixTypeError(f"{name} would store floats in an int matrix")


def _operand(x: Scalar) -> Scalar:
    # Numpy scalars become builtin int or float before any arithmetic
    return coerce(x, scalar_dtype(x))


def _store(out: Matrix, values: list[Scalar]) -> Matrix:
    out.buffer[:] = values
    return out


################################################################################
# Unary
################################################################################


def negate(a: Matrix) -> Matrix:
    """Return ``-A``."""
    return _store(a.like(), [-ai for ai in a.buffer])


################################################################################
# Matrix-scalar
################################################################################


def add_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Return ``A + x``. Also serves ``x + A``."""
    x = _operand(x)
    out: Matrix = a.like(result_dtype(a.dtype, scalar_dtype(x)))
    return _store(out, [ai + x for ai in a.buffer])


def sub_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Return ``A - x``."""
    x = _operand(x)
    out: Matrix = a.like(result_dtype(a.dtype, scalar_dtype(x)))
    return _store(out, [ai - x for ai in a.buffer])


def scalar_sub(x: Scalar, a: Matrix) -> Matrix:
    """Return ``x - A``, evaluated element by element as ``x - a_ij``."""
    x = _operand(x)
    out: Matrix = a.like(result_dtype(a.dtype, scalar_dtype(x)))
    return _store(out, [x - ai for ai in a.buffer])


def mul_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Return ``A * x``. Also serves ``x * A``."""
    x = _operand(x)
    out: Matrix = a.like(result_dtype(a.dtype, scalar_dtype(x)))
    return _store(out, [ai * x for ai in a.buffer])


def div_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Return ``A / x``.

    Raises:
        ZeroDivisionError: If ``x`` is zero
    """
    x = _operand(x)
    return _store(a.like(float), [ai / x for ai in a.buffer])


def scalar_div(x: Scalar, a: Matrix) -> Matrix:
    """Return ``x / A``, evaluated element by element as ``x / a_ij``.

    Raises:
        ZeroDivisionError: If any element of ``A`` is zero
    """
    x = _operand(x)
    return _store(a.like(float), [x / ai for ai in a.buffer])


def iadd_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Add ``x`` to every element of ``A`` in place and return ``A``."""
    x = _operand(x)
    _require_in_place(a, scalar_dtype(x), "iadd_scalar")
    return _store(a, [ai + x for ai in a.buffer])


def isub_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Subtract ``x`` from every element of ``A`` in place and return ``A``."""
    x = _operand(x)
    _require_in_place(a, scalar_dtype(x), "isub_scalar")
    return _store(a, [ai - x for ai in a.buffer])


def imul_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Scale ``A`` by ``x`` in place and return ``A``."""
    x = _operand(x)
    _require_in_place(a, scalar_dtype(x), "imul_scalar")
    return _store(a, [ai * x for ai in a.buffer])


def idiv_scalar(a: Matrix, x: Scalar) -> Matrix:
    """Divide every element of ``A`` by ``x`` in place and return ``A``."""
    x = _operand(x)
    _require_in_place(a, float, "idiv_scalar")
    return _store(a, [ai / x for ai in a.buffer])


################################################################################
# Matrix-matrix
################################################################################


def add(a: Matrix, b: Matrix) -> Matrix:
    """Return the elementwise sum ``A + B``."""
    _require_same_shape(a, b, "add")
    out: Matrix = a.like(result_dtype(a.dtype, b.dtype))
    return _store(out, [ai + bi for ai, bi in zip(a.buffer, b.buffer, strict=True)])


def sub(a: Matrix, b: Matrix) -> Matrix:
    """Return the elementwise difference ``A - B``."""
    _require_same_shape(a, b, "sub")
    out: Matrix = a.like(result_dtype(a.dtype, b.dtype))
    return _store(out, [ai - bi for ai, bi in zip(a.buffer, b.buffer, strict=True)])


def mul(a: Matrix, b: Matrix) -> Matrix:
    """Return the elementwise (Hadamard) product of ``A`` and ``B``."""
    _require_same_shape(a, b, "mul")
    out: Matrix = a.like(result_dtype(a.dtype, b.dtype))
    return _store(out, [ai * bi for ai, bi in zip(a.buffer, b.buffer, strict=True)])


def div(a: Matrix, b: Matrix) -> Matrix:
    """Return the elementwise quotient ``a_ij / b_ij``."""
    _require_same_shape(a, b, "div")
    return _store(
        a.like(float), [ai / bi for ai, bi in zip(a.buffer, b.buffer, strict=True)]
    )


def iadd(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "iadd")
    _require_in_place(a, b.dtype, "iadd")
    return _store(a, [ai + bi for ai, bi in zip(a.buffer, b.buffer, strict=True)])


def isub(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "isub")
    _require_in_place(a, b.dtype, "isub")
    return _store(a, [ai - bi for ai, bi in zip(a.buffer, b.buffer, strict=True)])


def imul(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "imul")
    _require_in_place(a, b.dtype, "imul")
    return _store(a, [ai * bi for ai, bi in zip(a.buffer, b.buffer, strict=True)])


def idiv(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "idiv")
    _require_in_place(a, float, "idiv")
    return _store(a, [ai / bi for ai, bi in zip(a.buffer, b.buffer, strict=True)])
