################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

import numpy as np
import pytest

from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixTypeError
from oasis_matrix.core.vector import Vector
from oasis_matrix.interop.numpy_convert import from_numpy
from oasis_matrix.interop.numpy_convert import to_numpy
from oasis_matrix.interop.numpy_convert import vector_from_numpy
from oasis_matrix.interop.numpy_convert import vector_to_numpy


def test_to_numpy_shape_and_dtype() -> None:
    floats: np.ndarray = to_numpy(Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]))
    ints: np.ndarray = to_numpy(Matrix.from_rows([[1, 2], [3, 4]]))

    assert floats.shape == (2, 3)
    assert floats.dtype == np.float64
    assert floats[1, 2] == 6.0
    assert ints.dtype == np.int64
    assert ints.tolist() == [[1, 2], [3, 4]]


def test_to_numpy_returns_a_copy() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0]])

    array: np.ndarray = to_numpy(a)
    array[0, 0] = 10.0

    assert a(1, 1) == 1.0


def test_from_numpy_preserves_layout() -> None:
    x: np.ndarray = np.arange(6, dtype=np.float64).reshape(2, 3)

    a: Matrix = from_numpy(x)

    assert a.shape == (2, 3)
    assert a.dtype is float
    assert a(2, 1) == 3.0
    assert isinstance(a(2, 1), float)


def test_from_numpy_integer_array() -> None:
    a: Matrix = from_numpy(np.array([[1, 2], [3, 4]], dtype=np.int32))

    assert a.dtype is int
    assert a.to_list() == [[1, 2], [3, 4]]


def test_from_numpy_empty_array() -> None:
    assert from_numpy(np.zeros((0, 0))).is_empty()
    with pytest.raises(MatrixDimensionError):
        from_numpy(np.zeros((0, 3)))


def test_from_numpy_rejects_bad_arrays() -> None:
    with pytest.raises(MatrixDimensionError):
        from_numpy(np.zeros(3))
    with pytest.raises(MatrixDimensionError):
        from_numpy(np.zeros((2, 2, 2)))
    with pytest.raises(MatrixTypeError):
        from_numpy(np.array([[1.0, np.nan]]))
    with pytest.raises(MatrixTypeError):
        from_numpy(np.array([[True, False]]))
    with pytest.raises(MatrixTypeError):
        from_numpy(np.array([[1 + 2j]]))


def test_vector_conversions() -> None:
    v: Vector = vector_from_numpy(np.array([1.5, -2.0]))

    assert v.dtype is float
    assert v.to_list() == [1.5, -2.0]
    assert vector_to_numpy(v).tolist() == [1.5, -2.0]
    assert vector_to_numpy(Vector.from_values([1, 2])).dtype == np.int64
    with pytest.raises(MatrixDimensionError):
        vector_from_numpy(np.zeros((2, 2)))
