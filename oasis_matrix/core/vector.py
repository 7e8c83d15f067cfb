################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""One-dimensional owned container used alongside Matrix."""

from __future__ import annotations

from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Sequence

from oasis_matrix.config.matrix_config import get_params
from oasis_matrix.core.element_types import Scalar
from oasis_matrix.core.element_types import coerce
from oasis_matrix.core.element_types import infer_dtype
from oasis_matrix.core.element_types import resolve_dtype
from oasis_matrix.core.matrix_errors import MatrixDimensionError
from oasis_matrix.core.matrix_errors import MatrixIndexError


class Vector:
    """Resizable vector with both 0-based and 1-based element access.

    ``v[i]`` addresses element ``i`` counting from 0 and ``v(i)`` addresses
    the same storage counting from 1, so ``v[i] == v(i + 1)``. Every vector
    owns its buffer; copies never share storage.

    Index validation follows the ``bounds_check`` parameter that was active
    when the storage was allocated.
    """

    __slots__ = ("_data", "_dtype", "_bounds_check")

    def __init__(
        self,
        size: int = 0,
        value: Scalar = 0,
        dtype: Optional[type] = None,
    ) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise MatrixDimensionError("vector size must be an int")
        if size < 0:
            raise MatrixDimensionError("vector size must be non-negative")
        self._dtype: type = resolve_dtype(dtype)
        self._bounds_check: bool = get_params().bounds_check
        fill: Scalar = coerce(value, self._dtype)
        self._data: list[Scalar] = [fill] * size

    @classmethod
    def from_values(
        cls, values: Iterable[Scalar], dtype: Optional[type] = None
    ) -> Vector:
        """Build a vector holding a copy of ``values``."""
        items: list[Scalar] = list(values)
        element_type: Optional[type] = dtype
        if dtype is None and items:
            element_type = infer_dtype(items)
        vector: Vector = cls(0, dtype=element_type)
        vector._data = [coerce(item, vector._dtype) for item in items]
        return vector

    @property
    def dtype(self) -> type:
        return self._dtype

    @property
    def data(self) -> list[Scalar]:
        """Underlying storage, exposed for stride-walking kernels."""
        return self._data

    def size(self) -> int:
        return len(self._data)

    def dim(self) -> int:
        return len(self._data)

    def resize(self, size: int, dtype: Optional[type] = None) -> Vector:
        """Reallocate to ``size`` zeros unless the size already matches.

        Contents are preserved only when the size and element type are
        unchanged.
        """
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise MatrixDimensionError("vector size must be a non-negative int")
        element_type: type = self._dtype if dtype is None else resolve_dtype(dtype)
        if size == len(self._data) and element_type is self._dtype:
            return self
        self._dtype = element_type
        self._bounds_check = get_params().bounds_check
        self._data = [self._dtype(0)] * size
        return self

    def assign(self, other: Vector) -> Vector:
        """Copy the values of ``other`` into this vector."""
        if other is self:
            return self
        self._dtype = other._dtype
        self._data = list(other._data)
        return self

    def fill(self, value: Scalar) -> Vector:
        fill: Scalar = coerce(value, self._dtype)
        for i in range(len(self._data)):
            self._data[i] = fill
        return self

    def copy(self) -> Vector:
        """Return a deep copy with its own buffer."""
        clone: Vector = Vector(0, dtype=self._dtype)
        clone._data = list(self._data)
        clone._bounds_check = self._bounds_check
        return clone

    def __copy__(self) -> Vector:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> Vector:
        return self.copy()

    def set1(self, i: int, value: Scalar) -> None:
        """Set the element at 1-based index ``i``."""
        if self._bounds_check:
            self._check_index1(i)
        self._data[i - 1] = coerce(value, self._dtype)

    def to_list(self) -> list[Scalar]:
        return list(self._data)

    def __call__(self, i: int) -> Scalar:
        if self._bounds_check:
            self._check_index1(i)
        return self._data[i - 1]

    def __getitem__(self, i: int) -> Scalar:
        if self._bounds_check:
            self._check_index0(i)
        return self._data[i]

    def __setitem__(self, i: int, value: Scalar) -> None:
        if self._bounds_check:
            self._check_index0(i)
        self._data[i] = coerce(value, self._dtype)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vector):
            return self._data == other._data
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return self._data == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector({self._data!r}, dtype={self._dtype.__name__})"

    def __str__(self) -> str:
        lines: list[str] = [f"size: {len(self._data)} by 1\n"]
        for value in self._data:
            lines.append(f"{value}\n")
        return "".join(lines)

    def _check_index0(self, i: int) -> None:
        if isinstance(i, bool) or not isinstance(i, int):
            raise MatrixIndexError("vector index must be an int")
        if i < 0 or i >= len(self._data):
            raise MatrixIndexError(
                f"index {i} out of range for vector of size {len(self._data)}"
            )

    def _check_index1(self, i: int) -> None:
        if isinstance(i, bool) or not isinstance(i, int):
            raise MatrixIndexError("vector index must be an int")
        if i < 1 or i > len(self._data):
            raise MatrixIndexError(
                f"index {i} out of range for 1-based vector of size "
                f"{len(self._data)}"
            )
