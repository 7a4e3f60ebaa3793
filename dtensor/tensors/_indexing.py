"""Index arithmetic for column-major (F-style) tensors.

A multi-index ``(i_0, ..., i_{r-1})`` into a tensor with dimensions ``(d_0, ..., d_{r-1})`` is
stored at the offset ``sum_k i_k * prod_{j<k} d_j``, i.e. axis 0 varies fastest.
"""
# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

from collections.abc import MutableSequence, Sequence

__all__ = ['num_elements', 'offset_of', 'next_index']


def num_elements(dims: Sequence[int]) -> int:
    """Number of elements of a tensor with the given `dims`. One for a scalar, ``dims=()``."""
    n = 1
    for d in dims:
        n *= int(d)
    return n


def offset_of(dims: Sequence[int], index: Sequence[int], check: bool = False) -> int:
    """Convert a multi-index to the offset into the data of a column-major tensor.

    Parameters
    ----------
    dims : sequence of int
        The dimensions of the tensor.
    index : sequence of int
        One coordinate per axis, each in ``range(dims[a])``.
    check : bool
        If the coordinates should be checked to be in range. Raises an :class:`IndexError`
        if not. Without the check, out of range coordinates give meaningless offsets.

    """
    if len(index) != len(dims):
        raise IndexError(f'Expected {len(dims)} indices, got {len(index)}')
    offset = 0
    dimfac = 1
    for a, (i, d) in enumerate(zip(index, dims)):
        if check and not 0 <= i < d:
            raise IndexError(f'Index {i} out of bounds for axis {a} with dimension {d}')
        offset += dimfac * i
        dimfac *= d
    return offset


def next_index(dims: Sequence[int], index: MutableSequence[int], start: int = 0):
    """Advance `index` in place to its lexicographic successor, with axis `start` fastest.

    Works like an odometer: increment axis `start`; if it reaches its dimension, reset it to zero
    and carry into the next axis, and so on. Axes before `start` are not touched.
    The successor of the last index is the zero index.
    """
    for a in range(start, len(dims)):
        index[a] += 1
        if index[a] < dims[a]:
            return
        index[a] = 0
