################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for matrix and vector products."""

from __future__ import annotations

import numpy as np
import pytest

from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixError
from oasis_matrix.core.matrix_errors import MatrixTypeError
from oasis_matrix.core.vector import Vector
from oasis_matrix.interop.numpy_convert import from_numpy
from oasis_matrix.interop.numpy_convert import to_numpy
from oasis_matrix.interop.numpy_convert import vector_from_numpy
from oasis_matrix.interop.numpy_convert import vector_to_numpy
from oasis_matrix.ops.products import prod
from oasis_matrix.ops.products import tran_prod
from oasis_matrix.ops.reductions import eye
from oasis_matrix.ops.reductions import transpose


def test_prod_small_ints() -> None:
    a: Matrix = Matrix.from_rows([[1, 2], [3, 4]])
    b: Matrix = Matrix.from_rows([[5, 6], [7, 8]])

    c: Matrix = prod(a, b)

    assert c.to_list() == [[19, 22], [43, 50]]
    assert c.dtype is int
    assert a @ b == c


def test_prod_matches_numpy(rng: np.random.Generator) -> None:
    x: np.ndarray = rng.normal(size=(4, 3))
    y: np.ndarray = rng.normal(size=(3, 5))

    c: Matrix = prod(from_numpy(x), from_numpy(y))

    assert c.shape == (4, 5)
    assert np.allclose(to_numpy(c), x @ y)


def test_prod_identity() -> None:
    a: Matrix = Matrix.from_rows([[2.0, -1.0, 3.0], [0.5, 4.0, 2.0]])

    assert prod(a, eye(3, 1.0)) == a
    assert prod(eye(2, 1.0), a) == a


def test_prod_is_associative(rng: np.random.Generator) -> None:
    a: Matrix = from_numpy(rng.normal(size=(2, 3)))
    b: Matrix = from_numpy(rng.normal(size=(3, 4)))
    c: Matrix = from_numpy(rng.normal(size=(4, 2)))

    left: Matrix = prod(prod(a, b), c)
    right: Matrix = prod(a, prod(b, c))

    assert np.allclose(to_numpy(left), to_numpy(right))


def test_prod_inner_dimension_mismatch() -> None:
    with pytest.raises(MatrixDimensionError):
        prod(Matrix(2, 3), Matrix(2, 3))
    with pytest.raises(MatrixDimensionError):
        prod(Matrix(2, 3), Vector(2))


def test_prod_reuses_destination() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
    out: Matrix = Matrix(2, 2)
    buffer_before: list[float] = out.buffer

    result: Matrix = prod(a, a, out)

    assert result is out
    assert out.buffer is buffer_before
    assert out.to_list() == [[7.0, 10.0], [15.0, 22.0]]


def test_prod_resizes_destination() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0, 3.0]])
    b: Matrix = Matrix.from_rows([[1.0], [1.0], [1.0]])
    out: Matrix = Matrix(3, 3)

    prod(a, b, out)

    assert out.shape == (1, 1)
    assert out(1, 1) == 6.0


def test_prod_destination_takes_result_dtype() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
    out: Matrix = Matrix(2, 2, dtype=int)

    result: Matrix = prod(a, a, out)

    assert result is out
    assert out.dtype is float
    assert out.to_list() == [[7.0, 10.0], [15.0, 22.0]]


def test_prod_vector_destination_takes_result_dtype() -> None:
    a: Matrix = Matrix.from_rows([[1, 2], [3, 4]])
    out: Vector = Vector(2, dtype=float)

    prod(a, Vector.from_values([1, 1]), out)

    assert out.dtype is int
    assert out.to_list() == [3, 7]


def test_prod_rejects_aliased_destination() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])

    with pytest.raises(MatrixError):
        prod(a, a, a)


def test_prod_matrix_vector(rng: np.random.Generator) -> None:
    x: np.ndarray = rng.normal(size=(3, 4))
    v: np.ndarray = rng.normal(size=4)

    y: Vector = prod(from_numpy(x), vector_from_numpy(v))

    assert y.size() == 3
    assert np.allclose(vector_to_numpy(y), x @ v)


def test_prod_matrix_vector_into_destination() -> None:
    a: Matrix = Matrix.from_rows([[1, 2], [3, 4]])
    out: Vector = Vector(2, dtype=int)

    result: Vector = prod(a, Vector.from_values([1, 1]), out)

    assert result is out
    assert out.to_list() == [3, 7]


def test_prod_rejects_bad_operands() -> None:
    with pytest.raises(MatrixTypeError):
        prod(Vector(2), Matrix(2, 2))  # type: ignore[call-overload]
    with pytest.raises(MatrixTypeError):
        prod(Matrix(2, 2), Matrix(2, 2), Vector(2))  # type: ignore[call-overload]


def test_tran_prod_matches_transpose_product(rng: np.random.Generator) -> None:
    a: Matrix = from_numpy(rng.normal(size=(4, 3)))
    b: Matrix = from_numpy(rng.normal(size=(4, 2)))

    c: Matrix = tran_prod(a, b)

    assert c.shape == (3, 2)
    assert np.allclose(to_numpy(c), to_numpy(prod(transpose(a), b)))


def test_tran_prod_matrix_vector(rng: np.random.Generator) -> None:
    x: np.ndarray = rng.normal(size=(4, 3))
    v: np.ndarray = rng.normal(size=4)

    y: Vector = tran_prod(from_numpy(x), vector_from_numpy(v))

    assert y.size() == 3
    assert np.allclose(vector_to_numpy(y), x.T @ v)


def test_tran_prod_outer_product() -> None:
    u: Vector = Vector.from_values([1, 2, 3])
    v: Vector = Vector.from_values([4, 5])

    c: Matrix = tran_prod(u, v)

    assert c.to_list() == [[4, 5], [8, 10], [12, 15]]


def test_tran_prod_outer_product_of_empty_vector() -> None:
    assert tran_prod(Vector(), Vector.from_values([1.0])).is_empty()


def test_tran_prod_dimension_mismatch() -> None:
    with pytest.raises(MatrixDimensionError):
        tran_prod(Matrix(3, 2), Matrix(2, 2))
    with pytest.raises(MatrixDimensionError):
        tran_prod(Matrix(3, 2), Vector(2))
    with pytest.raises(MatrixTypeError):
        tran_prod(Vector(2), Matrix(2, 2))  # type: ignore[call-overload]
