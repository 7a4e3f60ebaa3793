r"""Provide test configuration for block backends etc.

Fixtures
--------

=============================  ======================  ===========================================
Fixture                        Depends on / # cases    Description
=============================  ======================  ===========================================
np_random                      -                       A numpy random Generator. Use this for
                                                       reproducibility.
-----------------------------  ----------------------  -------------------------------------------
block_backend                  Generates ~2 cases      Goes over all block backends, as str
                                                       descriptions, valid for
                                                       ``get_block_backend``.
-----------------------------  ----------------------  -------------------------------------------
make_tensor                    block_backend           RNG for tensors with ``block_backend``.
                               np_random               ``make(dims, labels=None, real=False)``
-----------------------------  ----------------------  -------------------------------------------
store_labels                   -                       Sets ``config.store_labels = True`` for the
                                                       duration of a test.
=============================  ======================  ===========================================


Marks
-----
Note: a list of marks should also be maintained in ``pyproject.toml``.

- ``blas``: marks tests that use the scipy BLAS block backend.
- ``numpy``: marks tests that use the numpy block backend.

"""

# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

import numpy as np
import pytest

from dtensor import config, tensors
from dtensor.testing import random_tensor

# OVERRIDE pytest routines


def pytest_addoption(parser):
    parser.addoption('--block-backends', action='store', default='blas,numpy',
                     help='Comma separated block-backend names')
    parser.addoption('--rng-seed', action='store', default=12345, type=int, help='The rng seed')


def pytest_generate_tests(metafunc):
    if 'block_backend' in metafunc.fixturenames:
        block_backends = metafunc.config.getoption('--block-backends').split(',')
        assert all(b in _block_backend_params for b in block_backends), str(block_backends)
        metafunc.parametrize('block_backend', [_block_backend_params[b] for b in block_backends],
                             indirect=True)


# QUICK CONFIGURATION

_block_backend_params = dict(
    blas=pytest.param('blas', marks=pytest.mark.blas),
    numpy=pytest.param('numpy', marks=pytest.mark.numpy),
)


@pytest.fixture
def np_random(request) -> np.random.Generator:
    return np.random.default_rng(seed=request.config.getoption('--rng-seed'))


@pytest.fixture  # values defined during `pytest_generate_tests`
def block_backend(request) -> str:
    return request.param


@pytest.fixture
def make_tensor(block_backend, np_random):
    def make(dims: tuple[int, ...] | int, labels: list[str | None] = None, real: bool = False
             ) -> tensors.DenseTensor:
        return random_tensor(dims, labels=labels, backend=block_backend, real=real, np_random=np_random)

    return make


@pytest.fixture
def store_labels():
    old = config.store_labels
    config.store_labels = True
    yield
    config.store_labels = old
