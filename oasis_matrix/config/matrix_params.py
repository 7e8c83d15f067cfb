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

import math
from dataclasses import dataclass
from typing import Mapping

from oasis_matrix.core.matrix_errors import MatrixParamsError


# Validate indices on every element access
BOUNDS_CHECK: bool = True

# Absolute floor for an acceptable inverse pivot magnitude
SINGULAR_ATOL: float = 1.0e-12

# Pivot tolerance relative to the largest absolute element of the input
SINGULAR_RTOL: float = 1.0e-12

# Element type used when none is given explicitly
DEFAULT_DTYPE: str = "float"

# Emit an INFO record when an inverse fails on a singular input
LOG_SINGULAR: bool = True

# Names accepted for default_dtype
DTYPE_NAMES: frozenset[str] = frozenset({"float", "int"})


@dataclass(frozen=True, slots=True)
class MatrixParams:
    """Tunable parameters for the dense matrix core.

    Responsibility:
        Collect the knobs that change matrix behavior without changing
        results for well-formed inputs: index validation, the singularity
        tolerance for inverses, and the default element type.

    Data contract:
        - bounds_check: validate indices on element access. Shape checks on
          operators are always performed regardless of this flag.
        - singular_atol: absolute pivot floor, >= 0.
        - singular_rtol: pivot tolerance relative to max |a_ij|, >= 0.
          The effective tolerance is max(singular_atol, singular_rtol * m).
        - default_dtype: "float" or "int".
        - log_singular: log failed inverses at INFO level.

    Determinism and edge cases:
        - Parameters are explicit values; nothing is read from the
          environment.
        - validate() rejects negative or non-finite tolerances.
    """

    bounds_check: bool
    singular_atol: float
    singular_rtol: float
    default_dtype: str
    log_singular: bool

    @staticmethod
    def defaults() -> MatrixParams:
        """Return a stable default parameter set."""
        params: MatrixParams = MatrixParams(
            bounds_check=BOUNDS_CHECK,
            singular_atol=SINGULAR_ATOL,
            singular_rtol=SINGULAR_RTOL,
            default_dtype=DEFAULT_DTYPE,
            log_singular=LOG_SINGULAR,
        )
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> MatrixParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise MatrixParamsError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise MatrixParamsError(f"unknown parameter: {unknown_keys[0]}")
        defaults: MatrixParams = cls.defaults()
        result: MatrixParams = cls(
            bounds_check=cls._as_bool(
                "bounds_check", params.get("bounds_check", defaults.bounds_check)
            ),
            singular_atol=cls._as_float(
                "singular_atol", params.get("singular_atol", defaults.singular_atol)
            ),
            singular_rtol=cls._as_float(
                "singular_rtol", params.get("singular_rtol", defaults.singular_rtol)
            ),
            default_dtype=cls._as_str(
                "default_dtype", params.get("default_dtype", defaults.default_dtype)
            ),
            log_singular=cls._as_bool(
                "log_singular", params.get("log_singular", defaults.log_singular)
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameters and raise MatrixParamsError on failure."""
        if not isinstance(self.bounds_check, bool):
            raise MatrixParamsError("bounds_check must be a bool")
        if not isinstance(self.log_singular, bool):
            raise MatrixParamsError("log_singular must be a bool")
        self._validate_tolerance("singular_atol", self.singular_atol)
        self._validate_tolerance("singular_rtol", self.singular_rtol)
        if self.default_dtype not in DTYPE_NAMES:
            raise MatrixParamsError("default_dtype must be 'float' or 'int'")

    def as_dict(self) -> dict[str, object]:
        """Return a YAML-serializable dict representation."""
        return {
            "bounds_check": self.bounds_check,
            "singular_atol": self.singular_atol,
            "singular_rtol": self.singular_rtol,
            "default_dtype": self.default_dtype,
            "log_singular": self.log_singular,
        }

    def dtype(self) -> type:
        """Return the Python type named by default_dtype."""
        return int if self.default_dtype == "int" else float

    def pivot_tolerance(self, max_abs: float) -> float:
        """Return the singularity tolerance for a matrix scale.

        Args:
            max_abs: Largest absolute element of the matrix being inverted

        Returns:
            Pivot magnitudes strictly below this value count as singular
        """
        return max(self.singular_atol, self.singular_rtol * max_abs)

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MatrixParamsError(f"{name} must be a float")
        return float(value)

    @staticmethod
    def _as_bool(name: str, value: object) -> bool:
        if not isinstance(value, bool):
            raise MatrixParamsError(f"{name} must be a bool")
        return value

    @staticmethod
    def _as_str(name: str, value: object) -> str:
        if not isinstance(value, str):
            raise MatrixParamsError(f"{name} must be a string")
        return value

    @staticmethod
    def _validate_tolerance(name: str, value: float) -> None:
        if not math.isfinite(value):
            raise MatrixParamsError(f"{name} must be finite")
        if value < 0.0:
            raise MatrixParamsError(f"{name} must be >= 0")

    @staticmethod
    def _field_order() -> list[str]:
        return [
            "bounds_check",
            "singular_atol",
            "singular_rtol",
            "default_dtype",
            "log_singular",
        ]
