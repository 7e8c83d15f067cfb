################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for Gauss-Jordan matrix inversion."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from oasis_matrix.config.matrix_config import params_override
from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixTypeError
from oasis_matrix.core.matrix_errors import SingularMatrixError
from oasis_matrix.interop.numpy_convert import from_numpy
from oasis_matrix.interop.numpy_convert import to_numpy
from oasis_matrix.ops.inverse import InverseResult
from oasis_matrix.ops.inverse import inv
from oasis_matrix.ops.inverse import inverse
from oasis_matrix.ops.products import prod
from oasis_matrix.ops.reductions import eye


def test_inverse_2x2_with_row_exchange() -> None:
    a: Matrix = Matrix.from_rows([[4.0, 3.0], [6.0, 3.0]])

    result: InverseResult = inverse(a)

    assert result.ok
    assert not result.singular
    assert result.pivot_rows == (1, 1)
    assert result.failed_step is None
    assert np.allclose(
        to_numpy(result.unwrap()), [[-0.5, 0.5], [1.0, -2.0 / 3.0]]
    )


def test_inverse_round_trip() -> None:
    a: Matrix = Matrix.from_rows([[4.0, 3.0], [6.0, 3.0]])

    a_inv: Matrix = inv(a)

    assert np.allclose(to_numpy(prod(a, a_inv)), np.eye(2))
    assert np.allclose(to_numpy(prod(a_inv, a)), np.eye(2))


def test_inverse_of_cyclic_permutation() -> None:
    """Two successive row exchanges must be undone in reverse order."""
    a: Matrix = Matrix.from_rows([[0, 0, 1], [1, 0, 0], [0, 1, 0]])

    result: InverseResult = inverse(a)

    assert result.pivot_rows == (1, 2, 2)
    assert result.unwrap().to_list() == [
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 0.0, 0.0],
    ]


def test_pivot_ties_keep_earliest_row() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0], [-1.0, 3.0]])

    result: InverseResult = inverse(a)

    assert result.pivot_rows == (0, 1)
    assert np.allclose(to_numpy(result.unwrap()), np.linalg.inv(to_numpy(a)))


def test_pivot_search_compares_magnitudes() -> None:
    """A large negative diagonal keeps its row over a smaller positive one."""
    a: Matrix = Matrix.from_rows([[-5.0, 1.0], [1.0, 1.0]])

    result: InverseResult = inverse(a)

    assert result.pivot_rows == (0, 1)
    assert np.allclose(to_numpy(result.unwrap()), np.linalg.inv(to_numpy(a)))


def test_inverse_matches_numpy(rng: np.random.Generator) -> None:
    x: np.ndarray = rng.normal(size=(6, 6)) + 6.0 * np.eye(6)

    a_inv: Matrix = inv(from_numpy(x))

    assert np.allclose(to_numpy(a_inv), np.linalg.inv(x))


def test_inverse_of_shuffled_matrix(rng: np.random.Generator) -> None:
    x: np.ndarray = rng.normal(size=(5, 5)) + 5.0 * np.eye(5)
    x = x[rng.permutation(5)]

    a_inv: Matrix = inv(from_numpy(x))

    assert np.allclose(to_numpy(a_inv) @ x, np.eye(5))


def test_inverse_leaves_input_unchanged() -> None:
    a: Matrix = Matrix.from_rows([[4.0, 3.0], [6.0, 3.0]])
    before: Matrix = a.copy()

    inverse(a)

    assert a == before


def test_inverse_of_int_matrix_is_float() -> None:
    a: Matrix = Matrix.from_rows([[2, 0], [0, 4]])

    a_inv: Matrix = inv(a)

    assert a_inv.dtype is float
    assert a_inv.to_list() == [[0.5, 0.0], [0.0, 0.25]]


def test_inverse_of_identity() -> None:
    assert inv(eye(4, 1.0)) == eye(4, 1.0)


def test_inverse_of_empty_matrix() -> None:
    result: InverseResult = inverse(Matrix())

    assert result.ok
    assert result.unwrap().is_empty()


def test_rank_deficient_matrix_is_singular() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]])

    result: InverseResult = inverse(a)

    assert result.singular
    assert not result.ok
    assert result.matrix is None
    assert result.failed_step == 1
    assert result.pivot_rows == (1,)
    assert result.pivot_magnitude == pytest.approx(0.0, abs=1e-15)


def test_zero_column_is_singular_at_first_step() -> None:
    a: Matrix = Matrix.from_rows([[0.0, 1.0], [0.0, 2.0]])

    result: InverseResult = inverse(a)

    assert result.singular
    assert result.failed_step == 0
    assert result.pivot_rows == ()


def test_unwrap_raises_for_singular() -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]])

    with pytest.raises(SingularMatrixError) as excinfo:
        inv(a)

    assert excinfo.value.step == 1
    assert excinfo.value.tolerance == pytest.approx(4e-12)


def test_relative_tolerance_scales_with_matrix() -> None:
    a: Matrix = Matrix.from_rows([[1.0e6, 0.0], [0.0, 1.0e-7]])

    assert inverse(a).singular
    with params_override(singular_rtol=0.0):
        assert inverse(a).ok


def test_absolute_tolerance_floor() -> None:
    a: Matrix = eye(2, 1.0e-20)

    assert inverse(a).singular
    with params_override(singular_atol=0.0):
        a_inv: Matrix = inv(a)
    assert a_inv(1, 1) == pytest.approx(1.0e20)


def test_singular_result_logged(caplog: pytest.LogCaptureFixture) -> None:
    a: Matrix = Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]])

    with caplog.at_level(logging.INFO, logger="oasis_matrix.ops.inverse"):
        inverse(a)
    assert "singular" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="oasis_matrix.ops.inverse"):
        with params_override(log_singular=False):
            inverse(a)
    assert caplog.text == ""


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_elements_rejected(value: float) -> None:
    a: Matrix = Matrix.from_rows([[value, 1.0], [1.0, 1.0]])

    with pytest.raises(MatrixTypeError):
        inverse(a)


def test_non_square_rejected() -> None:
    with pytest.raises(MatrixDimensionError):
        inverse(Matrix(2, 3))
    with pytest.raises(MatrixTypeError):
        inverse([[1.0]])  # type: ignore[arg-type]


def test_result_consistency_checked() -> None:
    with pytest.raises(ValueError):
        InverseResult(
            matrix=None,
            singular=False,
            pivot_rows=(),
            failed_step=None,
            pivot_magnitude=None,
            tolerance=1e-12,
        )
