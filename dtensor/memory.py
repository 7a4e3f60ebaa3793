"""Aligned allocation of the complex data buffers of tensors.

The buffers are plain 1D numpy arrays of dtype ``complex128``, obtained as a view into a
slightly larger byte buffer such that the first element sits on an address which is a multiple
of :attr:`~dtensor.dummy_config.config.alignment`. The view keeps the underlying byte buffer
alive, so freeing a buffer simply means dropping the last reference to it.
"""
# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

import logging

import numpy as np

from .dummy_config import config
from .errors import AllocationError

__all__ = ['DTYPE', 'ITEMSIZE', 'aligned_empty', 'aligned_zeros', 'is_aligned']

logger = logging.getLogger(__name__)

DTYPE = np.complex128
ITEMSIZE = np.dtype(DTYPE).itemsize


def _check_alignment(alignment: int | None) -> int:
    if alignment is None:
        alignment = config.alignment
    if alignment < ITEMSIZE or alignment & (alignment - 1) != 0:
        raise ValueError(f'alignment must be a power of two >= {ITEMSIZE}. Got {alignment}')
    return alignment


def aligned_empty(n: int, alignment: int = None) -> np.ndarray:
    """Allocate an uninitialized buffer for `n` complex numbers.

    Parameters
    ----------
    n : int
        Number of elements, must be positive.
    alignment : int, optional
        Required alignment of the first element in bytes. Defaults to ``config.alignment``.

    Raises
    ------
    AllocationError
        If the memory can not be allocated.

    """
    alignment = _check_alignment(alignment)
    if n <= 0:
        raise ValueError(f'Can not allocate a buffer of {n} elements')
    nbytes = n * ITEMSIZE
    try:
        raw = np.empty(nbytes + alignment, dtype=np.uint8)
    except MemoryError as e:
        raise AllocationError(f'Failed to allocate {nbytes} bytes') from e
    start = -raw.ctypes.data % alignment
    buf = raw[start:start + nbytes].view(DTYPE)
    assert buf.ctypes.data % alignment == 0
    logger.debug('allocated %d bytes with alignment %d', nbytes, alignment)
    return buf


def aligned_zeros(n: int, alignment: int = None) -> np.ndarray:
    """Like :func:`aligned_empty`, but the buffer is initialized with zeros."""
    buf = aligned_empty(n, alignment)
    buf[:] = 0
    return buf


def is_aligned(buf: np.ndarray, alignment: int = None) -> bool:
    """If the first element of `buf` is aligned to `alignment` bytes."""
    alignment = _check_alignment(alignment)
    return buf.ctypes.data % alignment == 0
