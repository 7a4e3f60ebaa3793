"""Block-backends implement the dense linear algebra on the data buffers of tensors.

The buffers are flat, contiguous ``complex128`` numpy arrays as returned by
:func:`~dtensor.memory.aligned_zeros`. Where a buffer is interpreted as a matrix, it is stored
column-major (F-style), with the number of rows as leading dimension. The routines mirror the
complex double precision BLAS routines ``zdscal``, ``zaxpy``, ``zdotu``, ``zgemv``, ``zgemm``
and ``zgeru``. Routines with an output buffer write into it in place and return nothing.
"""

# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import TypeVar

import numpy as np

from ..memory import aligned_empty, aligned_zeros

__all__ = ['Block', 'BlockBackend']

# placeholder for the type of the data buffers
Block = TypeVar('Block')


class BlockBackend(metaclass=ABCMeta):
    """Abstract base class that defines the operations on data buffers."""

    name: str = None  # to be set by subclass; the key for :func:`get_block_backend`

    def __repr__(self):
        return f'{type(self).__name__}()'

    def __str__(self):
        return f'{type(self).__name__}()'

    def as_matrix(self, a: Block, m: int, n: int) -> np.ndarray:
        """View a flat buffer of ``m * n`` elements as an F-style ``(m, n)`` matrix, without copy"""
        return a.reshape((m, n), order='F')

    def empty(self, n: int) -> Block:
        """An uninitialized, aligned buffer of `n` elements"""
        return aligned_empty(n)

    def zeros(self, n: int) -> Block:
        """An aligned buffer of `n` zeros"""
        return aligned_zeros(n)

    def copy_block(self, a: Block) -> Block:
        """Create a new, independent and aligned buffer with the same data"""
        res = self.empty(a.size)
        res[:] = a
        return res

    def conj(self, a: Block):
        """Complex conjugate of a buffer, in place"""
        np.conjugate(a, out=a)

    @abstractmethod
    def scale_real(self, alpha: float, x: Block):
        """``x <- alpha * x`` for a real scalar `alpha`, in place (``zdscal``)"""
        ...

    @abstractmethod
    def axpy(self, alpha: complex, x: Block, y: Block):
        """``y <- alpha * x + y``, in place (``zaxpy``). Both buffers have the same size."""
        ...

    @abstractmethod
    def dotu(self, x: Block, y: Block) -> complex:
        """Unconjugated inner product ``sum_i x[i] * y[i]`` (``zdotu``)"""
        ...

    @abstractmethod
    def gemv(self, a: Block, x: Block, y: Block, m: int, n: int, trans: bool = False):
        """Matrix-vector product (``zgemv``).

        Parameters
        ----------
        a : Block
            Buffer of an ``(m, n)`` column-major matrix ``A``.
        x : Block
            Input vector, ``n`` elements if not `trans`, else ``m`` elements.
        y : Block
            Output vector, overwritten with ``A @ x``, or ``A.T @ x`` if `trans`.
        m, n : int
            Shape of ``A``.
        trans : bool
            Whether to multiply with the (non-conjugated) transpose of ``A``.

        """
        ...

    @abstractmethod
    def gemm(self, a: Block, b: Block, c: Block, m: int, n: int, k: int):
        """Matrix-matrix product ``C <- A @ B`` (``zgemm``).

        ``A`` is ``(m, k)``, ``B`` is ``(k, n)`` and the output ``C`` is ``(m, n)``, all
        column-major with leading dimensions ``m``, ``k`` and ``m`` respectively.
        """
        ...

    @abstractmethod
    def geru(self, alpha: complex, x: Block, y: Block, a: Block, m: int, n: int):
        """Rank-1 update ``A <- alpha * outer(x, y) + A`` without conjugation (``zgeru``).

        ``x`` has ``m`` and ``y`` has ``n`` elements; ``A`` is the ``(m, n)`` column-major output.
        """
        ...
