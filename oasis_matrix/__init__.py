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
Dense matrices and vectors with 0-based and 1-based access, elementwise
arithmetic, products and Gauss-Jordan inversion
"""

from __future__ import annotations

from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix import MatrixRow
from oasis_matrix.core.vector import Vector
from oasis_matrix.config.matrix_config import MatrixConfig
from oasis_matrix.config.matrix_config import get_params
from oasis_matrix.config.matrix_config import params_override
from oasis_matrix.config.matrix_config import reset_params
from oasis_matrix.config.matrix_config import set_params
from oasis_matrix.config.matrix_params import MatrixParams
from oasis_matrix.core.matrix_errors import MatrixConfigError
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixError
from oasis_matrix.core.matrix_errors import MatrixFormatError
from oasis_matrix.core.matrix_errors import MatrixIndexError
from oasis_matrix.core.matrix_errors import MatrixParamsError
from oasis_matrix.core.matrix_errors import MatrixPersistenceError
from oasis_matrix.core.matrix_errors import MatrixTypeError
from oasis_matrix.core.matrix_errors import SingularMatrixError
from oasis_matrix.ops.inverse import InverseResult
from oasis_matrix.ops.inverse import inv
from oasis_matrix.ops.inverse import inverse
from oasis_matrix.ops.products import prod
from oasis_matrix.ops.products import tran_prod
from oasis_matrix.ops.reductions import diag
from oasis_matrix.ops.reductions import eye
from oasis_matrix.ops.reductions import norm
from oasis_matrix.ops.reductions import trace
from oasis_matrix.ops.reductions import transpose
from oasis_matrix.storage.text_format import format_matrix
from oasis_matrix.storage.text_format import load_matrix
from oasis_matrix.storage.text_format import read_matrix
from oasis_matrix.storage.text_format import save_matrix
from oasis_matrix.storage.text_format import write_matrix


__version__: str = "0.1.0"

__all__ = [
    "InverseResult",
    "Matrix",
    "MatrixConfig",
    "MatrixConfigError",
    "MatrixDimensionError",
    "MatrixError",
    "MatrixFormatError",
    "MatrixIndexError",
    "MatrixParams",
    "MatrixParamsError",
    "MatrixPersistenceError",
    "MatrixRow",
    "MatrixTypeError",
    "SingularMatrixError",
    "Vector",
    "diag",
    "eye",
    "format_matrix",
    "get_params",
    "inv",
    "inverse",
    "load_matrix",
    "norm",
    "params_override",
    "prod",
    "read_matrix",
    "reset_params",
    "save_matrix",
    "set_params",
    "tran_prod",
    "trace",
    "transpose",
    "write_matrix",
]
