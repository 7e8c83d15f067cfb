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
Element type helpers shared by vectors and matrices

Containers hold either Python ints or Python floats. The element type is
carried explicitly as ``dtype`` so that accumulators can start at the
element type's zero and results keep the operand's type.
"""

from __future__ import annotations

import numbers
from typing import Iterable
from typing import Optional
from typing import Union

from oasis_matrix.config.matrix_config import get_params
from oasis_matrix.core.matrix_errors import MatrixTypeError


Scalar = Union[int, float]

SUPPORTED_DTYPES: tuple[type, ...] = (int, float)


def resolve_dtype(dtype: Optional[type]) -> type:
    """Return a supported element type, defaulting to the active parameter."""
    if dtype is None:
        return get_params().dtype()
    if dtype not in SUPPORTED_DTYPES:
        raise MatrixTypeError(f"unsupported dtype: {dtype!r}")
    return dtype


def is_scalar(value: object) -> bool:
    """Return True for real numbers accepted as container elements."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def coerce(value: object, dtype: type) -> Scalar:
    """Convert a scalar to the given element type.

    Floats are only narrowed to ``int`` when they hold an integral value so
    that storing 2.5 into an int container is an error rather than a silent
    truncation.
    """
    if not is_scalar(value):
        raise MatrixTypeError(f"element must be a real number, got {value!r}")
    if dtype is int:
        if isinstance(value, numbers.Integral):
            return int(value)
        as_float: float = float(value)  # type: ignore[arg-type]
        if not as_float.is_integer():
            raise MatrixTypeError(f"cannot store {value!r} in an int container")
        return int(as_float)
    return float(value)  # type: ignore[arg-type]


def infer_dtype(values: Iterable[object]) -> type:
    """Return ``int`` when every value is integral, else ``float``."""
    for value in values:
        if not is_scalar(value):
            raise MatrixTypeError(f"element must be a real number, got {value!r}")
        if not isinstance(value, numbers.Integral):
            return float
    return int


def result_dtype(left: type, right: type) -> type:
    """Return the element type produced by combining two element types."""
    if left is float or right is float:
        return float
    return int


def scalar_dtype(value: Scalar) -> type:
    """Return the element type of a scalar operand."""
    return int if isinstance(value, numbers.Integral) else float
