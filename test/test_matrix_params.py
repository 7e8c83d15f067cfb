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

import unittest
from typing import Dict

from oasis_matrix.config.matrix_params import MatrixParams


class TestMatrixParams(unittest.TestCase):
    """Tests for the MatrixParams container."""

    def test_defaults_validate(self) -> None:
        """Defaults produce a valid configuration."""
        params: MatrixParams = MatrixParams.defaults()
        params.validate()
        self.assertTrue(params.bounds_check)
        self.assertEqual(params.singular_atol, 1.0e-12)
        self.assertEqual(params.singular_rtol, 1.0e-12)
        self.assertIs(params.dtype(), float)

    def test_from_dict_rejects_unknown_key(self) -> None:
        """from_dict rejects unknown parameters deterministically."""
        params: Dict[str, object] = {
            "bounds_check": False,
            "zeta": 1,
            "alpha": 2,
        }
        with self.assertRaises(ValueError) as context:
            MatrixParams.from_dict(params)
        self.assertEqual(str(context.exception), "unknown parameter: alpha")

    def test_from_dict_fills_defaults(self) -> None:
        """Missing keys keep their default values."""
        params: MatrixParams = MatrixParams.from_dict({"default_dtype": "int"})
        self.assertIs(params.dtype(), int)
        self.assertEqual(params.singular_atol, 1.0e-12)

    def test_from_dict_accepts_int_tolerance(self) -> None:
        """Integer tolerances are converted to floats."""
        params: MatrixParams = MatrixParams.from_dict({"singular_atol": 0})
        self.assertIsInstance(params.singular_atol, float)

    def test_validate_rejects_negative_tolerance(self) -> None:
        """Validate rejects negative tolerances."""
        params: MatrixParams = MatrixParams(
            **{**MatrixParams.defaults().as_dict(), "singular_atol": -1.0}
        )
        with self.assertRaises(ValueError) as context:
            params.validate()
        self.assertEqual(str(context.exception), "singular_atol must be >= 0")

    def test_validate_rejects_non_finite_tolerance(self) -> None:
        """Validate rejects infinite tolerances."""
        params: MatrixParams = MatrixParams(
            **{**MatrixParams.defaults().as_dict(), "singular_rtol": float("inf")}
        )
        with self.assertRaises(ValueError) as context:
            params.validate()
        self.assertEqual(str(context.exception), "singular_rtol must be finite")

    def test_validate_rejects_unknown_dtype(self) -> None:
        """Only float and int element types are supported."""
        with self.assertRaises(ValueError) as context:
            MatrixParams.from_dict({"default_dtype": "complex"})
        self.assertEqual(
            str(context.exception), "default_dtype must be 'float' or 'int'"
        )

    def test_from_dict_rejects_wrong_types(self) -> None:
        """Flags must be bools and tolerances numbers."""
        with self.assertRaises(ValueError):
            MatrixParams.from_dict({"bounds_check": 1})
        with self.assertRaises(ValueError):
            MatrixParams.from_dict({"singular_atol": "small"})

    def test_pivot_tolerance(self) -> None:
        """Tolerance is the larger of the floor and the scaled bound."""
        params: MatrixParams = MatrixParams.from_dict(
            {"singular_atol": 1.0e-9, "singular_rtol": 1.0e-6}
        )
        self.assertEqual(params.pivot_tolerance(1.0e-6), 1.0e-9)
        self.assertAlmostEqual(params.pivot_tolerance(10.0), 1.0e-5, places=15)

    def test_as_dict_round_trip(self) -> None:
        """as_dict feeds back into from_dict unchanged."""
        params: MatrixParams = MatrixParams.from_dict({"log_singular": False})
        self.assertEqual(MatrixParams.from_dict(params.as_dict()), params)


if __name__ == "__main__":
    unittest.main()
