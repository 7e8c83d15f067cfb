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
Matrix and vector product kernels

The kernels read the flat row-major buffers directly. For ``C = A B`` each
output cell is a strided dot product: one offset starts at the head of row
``i`` of ``A`` and steps by 1, the other starts at column ``j`` of ``B`` and
steps by ``B.cols()``:

    p_row = row_offsets0_A[i]
    p_col = j
    for k in range(K):
        acc += a[p_row] * b[p_col]
        p_row += 1
        p_col += N

Accumulators start at the result element type's zero and terms are summed
strictly in increasing ``k``, so results are reproducible for fixed inputs.

``prod(A, B, out)`` writes into a caller-owned destination and only
reallocates it when its shape differs from the result shape, which avoids a
fresh allocation per call inside loops.
"""

from __future__ import annotations

from typing import Optional
from typing import Union
from typing import overload

from oasis_matrix.core.element_types import Scalar
from oasis_matrix.core.element_types import result_dtype
from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixError
from oasis_matrix.core.matrix_errors import MatrixTypeError
from oasis_matrix.core.vector import Vector


@overload
def prod(a: Matrix, b: Matrix, out: Optional[Matrix] = None) -> Matrix: ...


@overload
def prod(a: Matrix, b: Vector, out: Optional[Vector] = None) -> Vector: ...


def prod(
    a: Matrix,
    b: Union[Matrix, Vector],
    out: Optional[Union[Matrix, Vector]] = None,
) -> Union[Matrix, Vector]:
    """Return the product ``A B`` for a matrix or vector right operand.

    Args:
        a: Left matrix with shape (M, K)
        b: Right matrix with shape (K, N), or vector with length K
        out: Optional destination, resized to the result shape when needed.
            Must not be ``a`` or ``b``.

    Returns:
        ``out`` (or a new container) holding the product

    Raises:
        MatrixDimensionError: If the inner dimensions do not match
        MatrixTypeError: If the operands are not a Matrix and a Matrix/Vector
        MatrixError: If ``out`` aliases an operand
    """
    if not isinstance(a, Matrix):
        raise MatrixTypeError("prod requires a Matrix left operand")
    if isinstance(b, Matrix):
        if out is not None and not isinstance(out, Matrix):
            raise MatrixTypeError("prod of two matrices requires a Matrix out")
        return _prod_matrix(a, b, out)
    if isinstance(b, Vector):
        if out is not None and not isinstance(out, Vector):
            raise MatrixTypeError("prod of a matrix and vector requires a Vector out")
        return _prod_vector(a, b, out)
    raise MatrixTypeError("prod requires a Matrix or Vector right operand")


def _prod_matrix(a: Matrix, b: Matrix, out: Optional[Matrix]) -> Matrix:
    m: int = a.rows()
    n: int = b.cols()
    k_count: int = a.cols()
    if b.rows() != k_count:
        raise MatrixDimensionError(
            f"prod inner dimensions differ: {m}x{k_count} times "
            f"{b.rows()}x{n}"
        )
    if out is a or out is b:
        raise MatrixError("prod destination must not alias an operand")

    dtype: type = result_dtype(a.dtype, b.dtype)
    if out is None:
        out = Matrix(m, n, dtype=dtype)
    else:
        # The destination takes the result element type
        out.resize(m, n, dtype)

    a_buf: list[Scalar] = a.buffer
    b_buf: list[Scalar] = b.buffer
    c_buf: list[Scalar] = out.buffer
    a_rows: list[int] = a.row_offsets()
    c_rows: list[int] = out.row_offsets()
    zero: Scalar = dtype(0)

    for i in range(m):
        row_start: int = a_rows[i]
        c_start: int = c_rows[i]
        for j in range(n):
            p_row: int = row_start
            p_col: int = j
            acc: Scalar = zero
            for _ in range(k_count):
                acc += a_buf[p_row] * b_buf[p_col]
                p_row += 1
                p_col += n
            c_buf[c_start + j] = acc
    return out


def _prod_vector(a: Matrix, b: Vector, out: Optional[Vector]) -> Vector:
    m: int = a.rows()
    n: int = a.cols()
    if b.size() != n:
        raise MatrixDimensionError(
            f"prod requires a vector of length {n}, got {b.size()}"
        )
    if out is b:
        raise MatrixError("prod destination must not alias an operand")

    dtype: type = result_dtype(a.dtype, b.dtype)
    if out is None:
        out = Vector(m, dtype=dtype)
    else:
        out.resize(m, dtype)

    a_buf: list[Scalar] = a.buffer
    b_buf: list[Scalar] = b.data
    c_buf: list[Scalar] = out.data
    a_rows: list[int] = a.row_offsets()
    zero: Scalar = dtype(0)

    for i in range(m):
        p_row: int = a_rows[i]
        p_col: int = 0
        acc: Scalar = zero
        for _ in range(n):
            acc += a_buf[p_row] * b_buf[p_col]
            p_row += 1
            p_col += 1
        c_buf[i] = acc
    return out


@overload
def tran_prod(a: Matrix, b: Matrix) -> Matrix: ...


@overload
def tran_prod(a: Matrix, b: Vector) -> Vector: ...


@overload
def tran_prod(a: Vector, b: Vector) -> Matrix: ...


def tran_prod(
    a: Union[Matrix, Vector], b: Union[Matrix, Vector]
) -> Union[Matrix, Vector]:
    """Return ``transpose(a) b`` without forming the transpose.

    Supported operand pairs:
        - Matrix (K, M), Matrix (K, N): matrix (M, N)
        - Matrix (K, M), Vector (K): vector (M)
        - Vector (M), Vector (N): outer product matrix (M, N)

    Raises:
        MatrixDimensionError: If the shared dimension does not match
        MatrixTypeError: If the operand pair is not supported
    """
    if isinstance(a, Matrix) and isinstance(b, Matrix):
        return _tran_prod_matrix(a, b)
    if isinstance(a, Matrix) and isinstance(b, Vector):
        return _tran_prod_vector(a, b)
    if isinstance(a, Vector) and isinstance(b, Vector):
        return _outer(a, b)
    raise MatrixTypeError(
        "tran_prod operands must be Matrix/Matrix, Matrix/Vector or Vector/Vector"
    )


def _tran_prod_matrix(a: Matrix, b: Matrix) -> Matrix:
    k_count: int = a.rows()
    m: int = a.cols()
    n: int = b.cols()
    if b.rows() != k_count:
        raise MatrixDimensionError(
            f"tran_prod requires equal row counts, got {k_count} and {b.rows()}"
        )

    dtype: type = result_dtype(a.dtype, b.dtype)
    out: Matrix = Matrix(m, n, dtype=dtype)
    a_buf: list[Scalar] = a.buffer
    b_buf: list[Scalar] = b.buffer
    c_buf: list[Scalar] = out.buffer
    zero: Scalar = dtype(0)

    # Column i of A and column j of B both advance by their row stride
    for i in range(m):
        for j in range(n):
            p_a: int = i
            p_b: int = j
            acc: Scalar = zero
            for _ in range(k_count):
                acc += a_buf[p_a] * b_buf[p_b]
                p_a += m
                p_b += n
            c_buf[i * n + j] = acc
    return out


def _tran_prod_vector(a: Matrix, v: Vector) -> Vector:
    k_count: int = a.rows()
    m: int = a.cols()
    if v.size() != k_count:
        raise MatrixDimensionError(
            f"tran_prod requires a vector of length {k_count}, got {v.size()}"
        )

    dtype: type = result_dtype(a.dtype, v.dtype)
    out: Vector = Vector(m, dtype=dtype)
    a_buf: list[Scalar] = a.buffer
    v_buf: list[Scalar] = v.data
    c_buf: list[Scalar] = out.data
    zero: Scalar = dtype(0)

    for i in range(m):
        p_a: int = i
        acc: Scalar = zero
        for k in range(k_count):
            acc += a_buf[p_a] * v_buf[k]
            p_a += m
        c_buf[i] = acc
    return out


def _outer(a: Vector, b: Vector) -> Matrix:
    m: int = a.size()
    n: int = b.size()
    dtype: type = result_dtype(a.dtype, b.dtype)
    if m == 0 or n == 0:
        return Matrix(dtype=dtype)
    out: Matrix = Matrix(m, n, dtype=dtype)
    a_buf: list[Scalar] = a.data
    b_buf: list[Scalar] = b.data
    c_buf: list[Scalar] = out.buffer
    for i in range(m):
        ai: Scalar = a_buf[i]
        base: int = i * n
        for j in range(n):
            c_buf[base + j] = ai * b_buf[j]
    return out
