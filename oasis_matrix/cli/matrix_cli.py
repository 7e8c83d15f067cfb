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
Command line entry point for inverting, transposing and measuring matrices
stored in the plain-text matrix format.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional
from typing import Sequence

from oasis_matrix.config.matrix_config import MatrixConfig
from oasis_matrix.config.matrix_config import get_params
from oasis_matrix.config.matrix_config import set_params
from oasis_matrix.config.matrix_params import MatrixParams
from oasis_matrix.core.matrix import Matrix
from oasis_matrix.core.matrix_errors import MatrixError
from oasis_matrix.ops.inverse import InverseResult
from oasis_matrix.ops.inverse import inverse
from oasis_matrix.ops.reductions import norm
from oasis_matrix.ops.reductions import transpose
from oasis_matrix.storage.text_format import load_matrix
from oasis_matrix.storage.text_format import read_matrix
from oasis_matrix.storage.text_format import write_matrix


_LOG: logging.Logger = logging.getLogger(__name__)


################################################################################
# Entry point
################################################################################


def _parse_args(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="oasis_matrix", description="Operate on text-format matrices"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with matrix parameters",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("inverse", "Print the inverse of a square matrix"),
        ("transpose", "Print the transpose of a matrix"),
        ("norm", "Print the Frobenius norm of a matrix"),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument(
            "input",
            nargs="?",
            default="-",
            help="Matrix file, or - to read standard input",
        )

    return parser.parse_args(args=args)


def _read_input(source: str) -> Matrix:
    if source == "-":
        return read_matrix(sys.stdin, dtype=get_params().dtype())
    return load_matrix(source, dtype=get_params().dtype())


def main(argv: Optional[Sequence[str]] = None) -> int:
    options = _parse_args(args=argv)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    previous: MatrixParams = get_params()
    try:
        if options.config is not None:
            MatrixConfig.from_yaml(options.config).activate()

        matrix: Matrix = _read_input(options.input)

        if options.command == "inverse":
            result: InverseResult = inverse(matrix)
            if not result.ok:
                print(
                    f"error: matrix is singular at step {result.failed_step}",
                    file=sys.stderr,
                )
                return 1
            write_matrix(result.unwrap(), sys.stdout)
        elif options.command == "transpose":
            write_matrix(transpose(matrix), sys.stdout)
        else:
            print(norm(matrix))
    except MatrixError as exc:
        _LOG.debug("Command %s failed", options.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        set_params(previous)

    return 0


if __name__ == "__main__":
    sys.exit(main())
