"""A collection of tests for the index arithmetic in dtensor.tensors."""
# Copyright (C) TeNPy Developers, Apache license
import itertools

import numpy as np
import numpy.testing as npt
import pytest

from dtensor.tensors import next_index, num_elements, offset_of
from dtensor.tools.misc import make_stride


@pytest.mark.parametrize('dims', [(), (4,), (2, 3), (3, 1, 4), (2, 3, 2, 5)])
def test_num_elements(dims):
    assert num_elements(dims) == int(np.prod(dims))
    assert num_elements(list(dims)) == num_elements(dims)


@pytest.mark.parametrize('dims', [(4,), (2, 3), (3, 1, 4), (2, 3, 2, 5)])
def test_offset_of(dims):
    stride = make_stride(dims, cstyle=False)
    x = np.zeros(dims, order='F')
    for idx in itertools.product(*[range(d) for d in dims]):
        offset = offset_of(dims, idx)
        assert offset == np.sum(np.array(idx) * stride)
        # agrees with numpy in Fortran order
        assert offset == np.ravel_multi_index(idx, dims, order='F')
    npt.assert_array_equal(make_stride(dims, cstyle=False), np.array(x.strides) // x.itemsize)


def test_offset_of_scalar():
    assert offset_of((), ()) == 0


def test_offset_of_check():
    dims = (2, 3)
    assert offset_of(dims, (1, 2), check=True) == 5
    for idx in [(2, 0), (0, 3), (-1, 0)]:
        with pytest.raises(IndexError):
            _ = offset_of(dims, idx, check=True)
    with pytest.raises(IndexError):
        _ = offset_of(dims, (0,))


@pytest.mark.parametrize('dims', [(4,), (2, 3), (3, 1, 4), (2, 3, 2, 2)])
def test_next_index(dims):
    index = [0] * len(dims)
    N = num_elements(dims)
    for expect_offset in range(N):
        assert offset_of(dims, index) == expect_offset
        next_index(dims, index)
    # odometer wraps around
    assert index == [0] * len(dims)


def test_next_index_carry():
    dims = (2, 3, 2)
    index = [1, 2, 0]
    next_index(dims, index)
    assert index == [0, 0, 1]
    index = [1, 2, 1]
    next_index(dims, index)
    assert index == [0, 0, 0]


def test_next_index_start():
    dims = (2, 3, 2)
    index = [1, 0, 0]
    visited = []
    for _ in range(6):
        visited.append(tuple(index))
        next_index(dims, index, start=1)
    assert visited == [(1, j, k) for k in range(2) for j in range(3)]
    assert index == [1, 0, 0]
