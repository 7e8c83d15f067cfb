################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Shared fixtures for matrix tests."""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from oasis_matrix.config.matrix_config import reset_params


@pytest.fixture(autouse=True)
def default_params() -> Iterator[None]:
    """Run every test against the default parameters."""
    reset_params()
    yield
    reset_params()


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible random matrices."""
    return np.random.default_rng(20260101)
