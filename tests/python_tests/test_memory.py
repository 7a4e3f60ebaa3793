"""A collection of tests for dtensor.memory."""
# Copyright (C) TeNPy Developers, Apache license
import numpy as np
import numpy.testing as npt
import pytest

from dtensor import config, memory
from dtensor.errors import AllocationError


@pytest.mark.parametrize('n', [1, 3, 17, 1000])
@pytest.mark.parametrize('alignment', [16, 32, 64, 256])
def test_aligned_zeros(n, alignment):
    buf = memory.aligned_zeros(n, alignment)
    assert buf.dtype == np.complex128
    assert buf.shape == (n,)
    assert buf.flags['C_CONTIGUOUS']
    assert buf.flags['WRITEABLE']
    assert memory.is_aligned(buf, alignment)
    npt.assert_array_equal(buf, 0)


def test_default_alignment():
    buf = memory.aligned_empty(5)
    assert buf.ctypes.data % config.alignment == 0
    assert memory.is_aligned(buf)


def test_invalid_requests():
    for alignment in [0, 8, 24, 100]:
        with pytest.raises(ValueError):
            _ = memory.aligned_empty(4, alignment)
    with pytest.raises(ValueError):
        _ = memory.aligned_empty(0)


def test_allocation_failure(monkeypatch):

    def fail(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(memory.np, 'empty', fail)
    with pytest.raises(AllocationError) as excinfo:
        _ = memory.aligned_zeros(10)
    assert isinstance(excinfo.value, MemoryError)
    assert isinstance(excinfo.value.__cause__, MemoryError)
