"""Miscellaneous tools, somewhat random mix yet often helpful."""
# Copyright (C) TeNPy Developers, Apache license

from collections.abc import Sequence

import numpy as np

__all__ = [
    'is_iterable',
    'to_iterable',
    'is_permutation',
    'inverse_permutation',
    'compose_permutations',
    'make_stride',
]

_MAX_INT = np.iinfo(np.intp).max


def is_iterable(a):
    """If the given object is iterable."""
    try:
        iter(a)
    except TypeError:
        return False
    return True


def to_iterable(a):
    """If `a` is a not iterable or a string, return ``[a]``, else return ``a``."""
    if type(a) is str:
        return [a]
    if is_iterable(a):
        return a
    return [a]


def is_permutation(perm: Sequence[int], n: int = None) -> bool:
    """If `perm` is a bijection on ``range(n)``, with ``n = len(perm)`` per default."""
    if n is None:
        n = len(perm)
    if len(perm) != n:
        return False
    return sorted(int(p) for p in perm) == list(range(n))


def inverse_permutation(perm) -> list[int]:
    """The permutation undoing `perm`, i.e. ``inv[perm[k]] == k`` for all ``k``.

    With the axis convention of :func:`dtensor.tensors.transpose`, where axis ``k`` goes to
    position ``perm[k]``, the axis ending up at position ``j`` is ``inv[j]``.
    """
    inv = [0] * len(perm)
    for k, p in enumerate(perm):
        inv[int(p)] = k
    return inv


def compose_permutations(q: Sequence[int], p: Sequence[int]) -> list[int]:
    """The axis permutation of applying first `p`, then `q`.

    Both are understood in the convention of :func:`dtensor.tensors.transpose`, where axis ``k``
    is sent to position ``perm[k]``. Hence ``transpose(q, transpose(p, t))`` equals
    ``transpose(compose_permutations(q, p), t)`` and the result is ``[q[p[k]] for k]``.
    """
    if len(q) != len(p):
        raise ValueError(f'Can not compose permutations of length {len(q)} and {len(p)}')
    return [int(q[p_k]) for p_k in p]


def make_stride(shape, cstyle=True):
    """The offset between neighbouring entries along each axis of a contiguous array.

    Same as ``np.array(x.strides) // x.itemsize`` for ``x = np.zeros(shape, order=...)``.
    The tensors of :mod:`dtensor` are F-style, use ``cstyle=False`` for them.
    """
    strides = []
    stride = 1
    axes = reversed(shape) if cstyle else shape
    for d in axes:
        strides.append(stride)
        stride *= int(d)
    assert stride < _MAX_INT
    if cstyle:
        strides.reverse()
    return np.array(strides, dtype=np.intp)
