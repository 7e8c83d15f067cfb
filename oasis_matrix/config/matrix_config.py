################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Configuration loading and the active matrix parameters.

The active parameters are a process-wide default plus an optional
thread-local override installed by ``params_override``.
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import replace
from pathlib import Path
from typing import Any
from typing import Iterator

import yaml

from oasis_matrix.config.matrix_params import MatrixParams
from oasis_matrix.core.matrix_errors import MatrixConfigError
from oasis_matrix.core.matrix_errors import MatrixParamsError


_LOG: logging.Logger = logging.getLogger(__name__)

# Top-level YAML key holding the parameter mapping
YAML_ROOT_KEY: str = "oasis_matrix"


@dataclass(frozen=True)
class MatrixConfig:
    """Convenience wrapper around matrix parameters."""

    params: MatrixParams

    def __init__(self, params: MatrixParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    def validate(self) -> None:
        """Validate parameter invariants."""
        try:
            self.params.validate()
        except MatrixParamsError as exc:
            raise MatrixConfigError(str(exc)) from exc

    @classmethod
    def from_yaml(cls, path: str | os.PathLike[str]) -> MatrixConfig:
        """Load parameters from a YAML file.

        The file holds either a flat mapping of parameters or a mapping with
        a single ``oasis_matrix`` key whose value is that flat mapping. Keys
        that are not present keep their default values.

        Args:
            path: Path to the YAML file

        Returns:
            Validated configuration

        Raises:
            MatrixConfigError: If the file cannot be read or is invalid
        """
        path_obj: Path = Path(os.fspath(path))
        try:
            text: str = path_obj.read_text(encoding="utf-8")
            data: Any = yaml.safe_load(text)
        except (OSError, yaml.YAMLError) as exc:
            raise MatrixConfigError(f"Failed to load config from {path_obj}") from exc

        if data is None:
            _LOG.warning("Config file %s is empty, using defaults", path_obj)
            data = {}
        if isinstance(data, dict) and YAML_ROOT_KEY in data:
            data = data[YAML_ROOT_KEY]
        if not isinstance(data, dict):
            raise MatrixConfigError("config must be a mapping")

        try:
            params: MatrixParams = MatrixParams.from_dict(data)
        except MatrixParamsError as exc:
            raise MatrixConfigError(str(exc)) from exc
        return cls(params)

    def to_yaml(self) -> str:
        """Return the configuration as a YAML document."""
        return yaml.safe_dump(
            {YAML_ROOT_KEY: self.params.as_dict()},
            sort_keys=False,
        )

    def activate(self) -> MatrixParams:
        """Install these parameters as the active set and return the old set."""
        return set_params(self.params)


_active_params: MatrixParams = MatrixParams.defaults()

# Thread-local storage for context overrides
_local: threading.local = threading.local()


def get_params() -> MatrixParams:
    """Return the calling thread's override, or the process-wide default."""
    override: MatrixParams | None = getattr(_local, "params", None)
    if override is not None:
        return override
    return _active_params


def set_params(params: MatrixParams) -> MatrixParams:
    """Install new process-wide default parameters.

    Threads inside ``params_override`` keep seeing their override until it
    exits.

    Args:
        params: Parameters to activate, validated before use

    Returns:
        The previously active parameters
    """
    global _active_params

    params.validate()
    previous: MatrixParams = _active_params
    _active_params = params
    return previous


def reset_params() -> None:
    """Restore the default parameters."""
    set_params(MatrixParams.defaults())


@contextmanager
def params_override(**changes: Any) -> Iterator[MatrixParams]:
    """Temporarily replace selected parameters in the calling thread only.

    Example:
        with params_override(bounds_check=False):
            ...
    """
    unknown: list[str] = sorted(set(changes) - set(MatrixParams._field_order()))
    if unknown:
        raise MatrixParamsError(f"unknown parameter: {unknown[0]}")
    updated: MatrixParams = replace(get_params(), **changes)
    updated.validate()
    previous: MatrixParams | None = getattr(_local, "params", None)
    _local.params = updated
    try:
        yield updated
    finally:
        _local.params = previous
