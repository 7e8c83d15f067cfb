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
Dense row-major matrix storage

A matrix owns one flat list holding ``rows * cols`` elements in row-major
order. Two row-offset tables map row indices to positions in that list:

    row_offsets0[i] = i * cols              0-based row i, 0-based column j
                                            lives at row_offsets0[i] + j
    row_offsets1[i] = (i - 1) * cols - 1    1-based row i, 1-based column j
                                            lives at row_offsets1[i] + j

``row_offsets1`` has ``rows + 1`` entries so that it is indexed directly by
the 1-based row; slot 0 is never read. Both conventions therefore cost one
table lookup and one add per element, with no per-access index shifting.

The only empty shape is 0x0. Whenever the buffer is non-empty both tables
are consistent with ``rows`` and ``cols``.
"""

from __future__ import annotations

import logging
from typing import Any
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Sequence
from typing import Union

from oasis_matrix.config.matrix_config import get_params
from oasis_matrix.core.element_types import Scalar
from oasis_matrix.core.element_types import coerce
from oasis_matrix.core.element_types import infer_dtype
from oasis_matrix.core.element_types import is_scalar
from oasis_matrix.core.element_types import resolve_dtype
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixError
from oasis_matrix.core.matrix_errors import MatrixIndexError
from oasis_matrix.core.vector import Vector
from oasis_matrix.ops import elementwise


_LOG: logging.Logger = logging.getLogger(__name__)


def _validate_shape(rows: int, cols: int) -> None:
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise MatrixDimensionError(f"{name} must be an int")
        if value < 0:
            raise MatrixDimensionError(f"{name} must be non-negative")
    if (rows == 0) != (cols == 0):
        raise MatrixDimensionError(
            f"invalid shape {rows}x{cols}: only 0x0 may be empty"
        )


class MatrixRow:
    """Live view of one matrix row, addressed with 0-based columns.

    A row view stays bound to the storage it was created from. After the
    matrix is resized to a different shape the view refers to the released
    storage and no longer tracks the matrix.
    """

    __slots__ = ("_buffer", "_offset", "_cols", "_dtype", "_bounds_check")

    def __init__(
        self,
        buffer: list[Scalar],
        offset: int,
        cols: int,
        dtype: type,
        bounds_check: bool,
    ) -> None:
        self._buffer: list[Scalar] = buffer
        self._offset: int = offset
        self._cols: int = cols
        self._dtype: type = dtype
        self._bounds_check: bool = bounds_check

    def __getitem__(self, j: int) -> Scalar:
        if self._bounds_check:
            self._check(j)
        return self._buffer[self._offset + j]

    def __setitem__(self, j: int, value: Scalar) -> None:
        if self._bounds_check:
            self._check(j)
        self._buffer[self._offset + j] = coerce(value, self._dtype)

    def __len__(self) -> int:
        return self._cols

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self._buffer[self._offset : self._offset + self._cols])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (MatrixRow, Vector)):
            return list(self) == list(other)
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MatrixRow({list(self)!r})"

    def _check(self, j: int) -> None:
        if isinstance(j, bool) or not isinstance(j, int):
            raise MatrixIndexError("column index must be an int")
        if j < 0 or j >= self._cols:
            raise MatrixIndexError(
                f"column {j} out of range for {self._cols} columns"
            )


class Matrix:
    """Dense matrix with 0-based row access and 1-based element access.

    Indexing:
        - ``A[i][j]`` and ``A[i, j]``: 0-based row and column
        - ``A(i, j)``: 1-based row and column, read-only
        - ``A.set1(i, j, x)``: 1-based write

    Ownership:
        Every matrix owns its buffer. Copy construction, ``copy()`` and
        ``assign()`` always copy element values into separate storage.

    Index validation follows the ``bounds_check`` parameter that was active
    when the storage was allocated. Shape checks in operators are always
    performed.
    """

    __slots__ = (
        "_buffer",
        "_row_offsets0",
        "_row_offsets1",
        "_rows",
        "_cols",
        "_total",
        "_dtype",
        "_bounds_check",
    )

    def __init__(
        self,
        rows: Union[int, Matrix] = 0,
        cols: int = 0,
        value: Scalar = 0,
        dtype: Optional[type] = None,
    ) -> None:
        self._buffer: list[Scalar] = []
        self._row_offsets0: list[int] = []
        self._row_offsets1: list[int] = []
        self._rows: int = 0
        self._cols: int = 0
        self._total: int = 0
        self._bounds_check: bool = get_params().bounds_check

        if isinstance(rows, Matrix):
            # Copy construction
            source: Matrix = rows
            self._dtype: type = source._dtype
            self.init(source._rows, source._cols)
            self._buffer[:] = source._buffer
            return

        self._dtype = resolve_dtype(dtype)
        _validate_shape(rows, cols)
        if rows == 0:
            return
        self.init(rows, cols)
        fill: Scalar = coerce(value, self._dtype)
        if fill != 0:
            self._buffer[:] = [fill] * self._total

    ############################################################################
    # Construction helpers
    ############################################################################

    @classmethod
    def from_array(
        cls,
        rows: int,
        cols: int,
        data: Iterable[Scalar],
        dtype: Optional[type] = None,
    ) -> Matrix:
        """Build a matrix from a flat row-major sequence.

        Args:
            rows: Number of rows
            cols: Number of columns
            data: ``rows * cols`` values in row-major order
            dtype: Element type, inferred from ``data`` when omitted

        Returns:
            New matrix holding a copy of ``data``

        Raises:
            MatrixDimensionError: If the data length does not match the shape
        """
        values: list[Scalar] = list(data)
        _validate_shape(rows, cols)
        if len(values) != rows * cols:
            raise MatrixDimensionError(
                f"data must have length {rows * cols} for {rows}x{cols}"
            )
        element_type: Optional[type] = dtype
        if dtype is None and values:
            element_type = infer_dtype(values)
        matrix: Matrix = cls(rows, cols, dtype=element_type)
        matrix._buffer[:] = [coerce(item, matrix._dtype) for item in values]
        return matrix

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[Scalar]], dtype: Optional[type] = None
    ) -> Matrix:
        """Build a matrix from a sequence of equal-length rows."""
        nested: list[list[Scalar]] = [list(row) for row in rows]
        row_count: int = len(nested)
        col_count: int = len(nested[0]) if nested else 0
        for row in nested:
            if len(row) != col_count:
                raise MatrixDimensionError("rows must all have the same length")
        flat: list[Scalar] = [item for row in nested for item in row]
        return cls.from_array(row_count, col_count, flat, dtype=dtype)

    ############################################################################
    # Storage lifecycle
    ############################################################################

    def init(self, rows: int, cols: int) -> None:
        """Allocate zeroed storage and both row-offset tables.

        Raises:
            MatrixError: If the matrix already holds live storage
            MatrixDimensionError: If the shape is invalid
        """
        if self._total != 0:
            raise MatrixError("init requires an empty matrix, call destroy first")
        _validate_shape(rows, cols)

        self._rows = rows
        self._cols = cols
        self._total = rows * cols
        self._bounds_check = get_params().bounds_check

        zero: Scalar = self._dtype(0)
        self._buffer = [zero] * self._total
        self._row_offsets0 = [i * cols for i in range(rows)]
        self._row_offsets1 = [(i - 1) * cols - 1 for i in range(rows + 1)]

    def destroy(self) -> None:
        """Release storage and return to the 0x0 state. Safe to repeat."""
        self._buffer = []
        self._row_offsets0 = []
        self._row_offsets1 = []
        self._rows = 0
        self._cols = 0
        self._total = 0

    def resize(self, rows: int, cols: int, dtype: Optional[type] = None) -> Matrix:
        """Reallocate to ``rows x cols`` unless the shape already matches.

        Contents are preserved only when the shape and element type are
        unchanged; otherwise the new storage is zero-filled. Passing
        ``dtype`` switches the element type in the same reallocation.
        """
        element_type: type = self._dtype if dtype is None else resolve_dtype(dtype)
        if rows == self._rows and cols == self._cols and element_type is self._dtype:
            return self
        _validate_shape(rows, cols)
        _LOG.debug(
            "Reallocating matrix from %dx%d to %dx%d",
            self._rows,
            self._cols,
            rows,
            cols,
        )
        self.destroy()
        self._dtype = element_type
        self.init(rows, cols)
        return self

    def assign(self, other: Matrix) -> Matrix:
        """Copy the values of ``other`` into this matrix.

        Storage is reused when the shapes match. Assigning a matrix to
        itself is a no-op.
        """
        if other is self:
            return self
        if not isinstance(other, Matrix):
            raise MatrixError("assign requires a Matrix")
        self._dtype = other._dtype
        if other._rows != self._rows or other._cols != self._cols:
            self.destroy()
            self.init(other._rows, other._cols)
        self._buffer[:] = other._buffer
        return self

    def fill(self, value: Scalar) -> Matrix:
        """Set every element to ``value``."""
        fill: Scalar = coerce(value, self._dtype)
        self._buffer[:] = [fill] * self._total
        return self

    def copy(self) -> Matrix:
        """Return a deep copy with its own buffer."""
        return Matrix(self)

    def like(self, dtype: Optional[type] = None) -> Matrix:
        """Return a zeroed matrix with this shape."""
        return Matrix(self._rows, self._cols, dtype=dtype or self._dtype)

    def __copy__(self) -> Matrix:
        return Matrix(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        return Matrix(self)

    ############################################################################
    # Shape
    ############################################################################

    @property
    def dtype(self) -> type:
        return self._dtype

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def buffer(self) -> list[Scalar]:
        """Flat row-major storage, exposed for stride-walking kernels."""
        return self._buffer

    def rows(self) -> int:
        return self._rows

    def cols(self) -> int:
        return self._cols

    def size(self) -> int:
        """Return the total number of elements."""
        return self._total

    def dim(self, dimension: int) -> int:
        """Return the row count for dimension 1 or the column count for 2."""
        if dimension == 1:
            return self._rows
        if dimension == 2:
            return self._cols
        raise MatrixDimensionError("dimension must be 1 or 2")

    def is_empty(self) -> bool:
        return self._total == 0

    def is_square(self) -> bool:
        return self._rows == self._cols

    def row_offsets(self) -> list[int]:
        """Return the 0-based row-offset table. Callers must not modify it."""
        return self._row_offsets0

    ############################################################################
    # Element access
    ############################################################################

    def at0(self, i: int, j: int) -> Scalar:
        """Return the element at 0-based ``(i, j)``."""
        if self._bounds_check:
            self._check_index0(i, j)
        return self._buffer[self._row_offsets0[i] + j]

    def set0(self, i: int, j: int, value: Scalar) -> None:
        """Set the element at 0-based ``(i, j)``."""
        if self._bounds_check:
            self._check_index0(i, j)
        self._buffer[self._row_offsets0[i] + j] = coerce(value, self._dtype)

    def at1(self, i: int, j: int) -> Scalar:
        """Return the element at 1-based ``(i, j)``."""
        if self._bounds_check:
            self._check_index1(i, j)
        return self._buffer[self._row_offsets1[i] + j]

    def set1(self, i: int, j: int, value: Scalar) -> None:
        """Set the element at 1-based ``(i, j)``."""
        if self._bounds_check:
            self._check_index1(i, j)
        self._buffer[self._row_offsets1[i] + j] = coerce(value, self._dtype)

    def __call__(self, i: int, j: int) -> Scalar:
        if self._bounds_check:
            self._check_index1(i, j)
        return self._buffer[self._row_offsets1[i] + j]

    def __getitem__(self, key: Union[int, tuple[int, int]]) -> Any:
        if isinstance(key, tuple):
            i, j = key
            return self.at0(i, j)
        if self._bounds_check:
            self._check_row0(key)
        return MatrixRow(
            self._buffer,
            self._row_offsets0[key],
            self._cols,
            self._dtype,
            self._bounds_check,
        )

    def __setitem__(
        self,
        key: Union[int, tuple[int, int]],
        value: Union[Scalar, Sequence[Scalar], Vector],
    ) -> None:
        if isinstance(key, tuple):
            i, j = key
            self.set0(i, j, value)  # type: ignore[arg-type]
            return
        self._check_row0(key)
        values: list[Scalar] = list(value)  # type: ignore[arg-type]
        if len(values) != self._cols:
            raise MatrixDimensionError(f"row must have length {self._cols}")
        start: int = self._row_offsets0[key]
        self._buffer[start : start + self._cols] = [
            coerce(item, self._dtype) for item in values
        ]

    def __iter__(self) -> Iterator[MatrixRow]:
        for i in range(self._rows):
            yield MatrixRow(
                self._buffer,
                self._row_offsets0[i],
                self._cols,
                self._dtype,
                self._bounds_check,
            )

    def __len__(self) -> int:
        return self._rows

    ############################################################################
    # Rows and columns (1-based)
    ############################################################################

    def get_row(self, row: int) -> Vector:
        """Return a copy of 1-based row ``row`` as a vector of length cols."""
        self._check_row1(row)
        start: int = self._row_offsets1[row] + 1
        return Vector.from_values(
            self._buffer[start : start + self._cols], dtype=self._dtype
        )

    def get_column(self, column: int) -> Vector:
        """Return a copy of 1-based column ``column`` as a vector of length rows."""
        self._check_column1(column)
        return Vector.from_values(
            self._buffer[column - 1 :: self._cols],
            dtype=self._dtype,
        )

    def set_row(self, v: Union[Vector, Sequence[Scalar]], row: int) -> None:
        """Overwrite 1-based row ``row`` with the values of ``v``."""
        self._check_row1(row)
        if len(v) != self._cols:
            raise MatrixDimensionError(
                f"row vector has length {len(v)}, expected {self._cols}"
            )
        base: int = self._row_offsets1[row]
        for j in range(1, self._cols + 1):
            self._buffer[base + j] = coerce(v[j - 1], self._dtype)

    def set_column(self, v: Union[Vector, Sequence[Scalar]], column: int) -> None:
        """Overwrite 1-based column ``column`` with the values of ``v``."""
        self._check_column1(column)
        if len(v) != self._rows:
            raise MatrixDimensionError(
                f"column vector has length {len(v)}, expected {self._rows}"
            )
        for i in range(1, self._rows + 1):
            self._buffer[self._row_offsets1[i] + column] = coerce(
                v[i - 1], self._dtype
            )

    ############################################################################
    # Conversion
    ############################################################################

    def to_list(self) -> list[list[Scalar]]:
        """Return the elements as a list of row lists."""
        return [
            self._buffer[start : start + self._cols] for start in self._row_offsets0
        ]

    def flat(self) -> list[Scalar]:
        """Return a copy of the row-major buffer."""
        return list(self._buffer)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._buffer == other._buffer

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r}, dtype={self._dtype.__name__})"

    def __str__(self) -> str:
        from oasis_matrix.storage.text_format import format_matrix

        return format_matrix(self)

    ############################################################################
    # Operators
    ############################################################################

    def __neg__(self) -> Matrix:
        return elementwise.negate(self)

    def __pos__(self) -> Matrix:
        return Matrix(self)

    def __add__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.add(self, other)
        if is_scalar(other):
            return elementwise.add_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __radd__(self, other: object) -> Matrix:
        if is_scalar(other):
            return elementwise.add_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __iadd__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.iadd(self, other)
        if is_scalar(other):
            return elementwise.iadd_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __sub__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.sub(self, other)
        if is_scalar(other):
            return elementwise.sub_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __rsub__(self, other: object) -> Matrix:
        if is_scalar(other):
            return elementwise.scalar_sub(other, self)  # type: ignore[arg-type]
        return NotImplemented

    def __isub__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.isub(self, other)
        if is_scalar(other):
            return elementwise.isub_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __mul__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.mul(self, other)
        if is_scalar(other):
            return elementwise.mul_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __rmul__(self, other: object) -> Matrix:
        if is_scalar(other):
            return elementwise.mul_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __imul__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.imul(self, other)
        if is_scalar(other):
            return elementwise.imul_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __truediv__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.div(self, other)
        if is_scalar(other):
            return elementwise.div_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __rtruediv__(self, other: object) -> Matrix:
        if is_scalar(other):
            return elementwise.scalar_div(other, self)  # type: ignore[arg-type]
        return NotImplemented

    def __itruediv__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return elementwise.idiv(self, other)
        if is_scalar(other):
            return elementwise.idiv_scalar(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __matmul__(self, other: object) -> Any:
        from oasis_matrix.ops.products import prod

        if isinstance(other, (Matrix, Vector)):
            return prod(self, other)
        return NotImplemented

    ############################################################################
    # Index validation
    ############################################################################

    def _check_row0(self, i: int) -> None:
        if isinstance(i, bool) or not isinstance(i, int):
            raise MatrixIndexError("row index must be an int")
        if i < 0 or i >= self._rows:
            raise MatrixIndexError(f"row {i} out of range for {self._rows} rows")

    def _check_index0(self, i: int, j: int) -> None:
        self._check_row0(i)
        if isinstance(j, bool) or not isinstance(j, int):
            raise MatrixIndexError("column index must be an int")
        if j < 0 or j >= self._cols:
            raise MatrixIndexError(
                f"column {j} out of range for {self._cols} columns"
            )

    def _check_row1(self, i: int) -> None:
        if isinstance(i, bool) or not isinstance(i, int):
            raise MatrixIndexError("row index must be an int")
        if i < 1 or i > self._rows:
            raise MatrixIndexError(
                f"row {i} out of range for 1-based access to {self._rows} rows"
            )

    def _check_column1(self, j: int) -> None:
        if isinstance(j, bool) or not isinstance(j, int):
            raise MatrixIndexError("column index must be an int")
        if j < 1 or j > self._cols:
            raise MatrixIndexError(
                f"column {j} out of range for 1-based access to {self._cols} columns"
            )

    def _check_index1(self, i: int, j: int) -> None:
        self._check_row1(i)
        self._check_column1(j)
