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
Plain-text matrix format

Layout written by ``format_matrix``:

    size: 2 by 3
    1.0 2.0 3.0
    4.0 5.0 6.0

Each element is followed by one space and each row ends with a newline.

``read_matrix`` is whitespace driven. It reads the row and column counts,
then ``rows * cols`` elements in row-major order. The ``size:`` prefix and
the ``by`` token are optional, so both the header above and a bare
``2 3`` header are accepted.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Optional
from typing import TextIO
from typing import Union

from oasis_matrix.core.element_types import Scalar
from oasis_matrix.core.element_types import coerce
from oasis_matrix.core.element_types import resolve_dtype
from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixError
from oasis_matrix.core.matrix_errors import MatrixFormatError
from oasis_matrix.core.matrix_errors import MatrixPersistenceError


SIZE_PREFIX: str = "size:"
BY_TOKEN: str = "by"


def format_matrix(a: Matrix) -> str:
    """Return the text representation of ``a``."""
    lines: list[str] = [f"size: {a.rows()} by {a.cols()}\n"]
    for row in a.to_list():
        lines.append("".join(f"{value} " for value in row) + "\n")
    return "".join(lines)


def write_matrix(a: Matrix, stream: TextIO) -> None:
    """Write the text representation of ``a`` to ``stream``."""
    stream.write(format_matrix(a))


def read_matrix(
    source: Union[str, TextIO],
    into: Optional[Matrix] = None,
    dtype: Optional[type] = float,
) -> Matrix:
    """Parse a matrix from text or a text stream.

    Args:
        source: Text, or a stream read to its end
        into: Optional destination, resized only when its shape differs
        dtype: Element type for a new matrix. Ignored when ``into`` is given.

    Returns:
        ``into`` (or a new matrix) holding the parsed values

    Raises:
        MatrixFormatError: If the header or any element is missing or invalid
    """
    text: str = source if isinstance(source, str) else source.read()
    tokens: list[str] = text.split()
    pos: int = 0

    if tokens and tokens[0] == SIZE_PREFIX:
        pos += 1
    rows: int = _read_count(tokens, pos, "row count")
    pos += 1
    if pos < len(tokens) and tokens[pos] == BY_TOKEN:
        pos += 1
    cols: int = _read_count(tokens, pos, "column count")
    pos += 1

    element_type: type = into.dtype if into is not None else resolve_dtype(dtype)
    if (rows == 0) != (cols == 0):
        raise MatrixFormatError(
            f"invalid shape {rows}x{cols}: only 0x0 may be empty"
        )

    total: int = rows * cols
    if len(tokens) - pos < total:
        raise MatrixFormatError(
            f"expected {total} elements for {rows}x{cols}, "
            f"found {len(tokens) - pos}"
        )

    values: list[Scalar] = []
    for index in range(total):
        token: str = tokens[pos + index]
        values.append(_parse_element(token, element_type, index))

    if into is None:
        into = Matrix(rows, cols, dtype=element_type)
    else:
        into.resize(rows, cols)
    into.buffer[:] = values
    return into


def _read_count(tokens: list[str], pos: int, name: str) -> int:
    if pos >= len(tokens):
        raise MatrixFormatError(f"missing {name}")
    token: str = tokens[pos]
    try:
        count: int = int(token)
    except ValueError as exc:
        raise MatrixFormatError(f"invalid {name}: {token!r}") from exc
    if count < 0:
        raise MatrixFormatError(f"{name} must be non-negative, got {count}")
    return count


def _parse_element(token: str, dtype: type, index: int) -> Scalar:
    if dtype is int:
        try:
            return int(token)
        except ValueError:
            pass
    try:
        value: float = float(token)
    except ValueError as exc:
        raise MatrixFormatError(f"invalid element {index}: {token!r}") from exc
    if dtype is int:
        try:
            return coerce(value, int)
        except MatrixError as exc:
            raise MatrixFormatError(
                f"element {index} is not an integer: {token!r}"
            ) from exc
    return value


################################################################################
# Files
################################################################################


def save_matrix(
    a: Matrix,
    path: str | os.PathLike[str],
    *,
    atomic_write: bool = True,
) -> None:
    """Save ``a`` to a text file.

    Raises:
        MatrixPersistenceError: If the file cannot be written
    """
    path_obj: Path = Path(os.fspath(path))
    try:
        path_obj.parent.mkdir(parents=True, exist_ok=True)
        text: str = format_matrix(a)
        if atomic_write:
            tmp_name: str = f".{path_obj.name}.tmp.{os.getpid()}"
            tmp_path: Path = path_obj.with_name(tmp_name)
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path_obj)
        else:
            path_obj.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise MatrixPersistenceError(f"Failed to save matrix to {path_obj}") from exc


def load_matrix(
    path: str | os.PathLike[str], dtype: Optional[type] = float
) -> Matrix:
    """Load a matrix from a text file.

    Raises:
        MatrixPersistenceError: If the file cannot be read
        MatrixFormatError: If the contents are malformed
    """
    path_obj: Path = Path(os.fspath(path))
    try:
        text: str = path_obj.read_text(encoding="utf-8")
    except OSError as exc:
        raise MatrixPersistenceError(
            f"Failed to load matrix from {path_obj}"
        ) from exc
    return read_matrix(io.StringIO(text), dtype=dtype)
