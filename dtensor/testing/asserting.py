"""Assertion wrappers for testing."""

# Copyright (C) TeNPy Developers, Apache license
import numpy.testing as npt

from ..tensors import DenseTensor

__all__ = ['assert_tensors_almost_equal']


def assert_tensors_almost_equal(a: DenseTensor, expect: DenseTensor, rtol: float = 1e-12,
                                atol: float = 1e-12):
    """Verify two tensors have the same dims and almost equal numerical entries."""
    assert a.dims == expect.dims, f'{a.dims} != {expect.dims}'
    npt.assert_allclose(a.data, expect.data, rtol=rtol, atol=atol)
