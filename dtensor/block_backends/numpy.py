"""A block backend using plain numpy operations. Serves as reference for other backends."""
# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

import numpy as np

from ._block_backend import Block, BlockBackend

__all__ = ['NumpyBlockBackend']


class NumpyBlockBackend(BlockBackend):
    """A block backend using numpy."""

    name = 'numpy'

    def scale_real(self, alpha: float, x: Block):
        x *= float(alpha)

    def axpy(self, alpha: complex, x: Block, y: Block):
        assert x.size == y.size
        y += complex(alpha) * x

    def dotu(self, x: Block, y: Block) -> complex:
        assert x.size == y.size
        return complex(np.dot(x, y))

    def gemv(self, a: Block, x: Block, y: Block, m: int, n: int, trans: bool = False):
        A = self.as_matrix(a, m, n)
        if trans:
            A = A.T
        y[:] = np.dot(A, x)

    def gemm(self, a: Block, b: Block, c: Block, m: int, n: int, k: int):
        C = self.as_matrix(c, m, n)
        C[...] = np.dot(self.as_matrix(a, m, k), self.as_matrix(b, k, n))

    def geru(self, alpha: complex, x: Block, y: Block, a: Block, m: int, n: int):
        A = self.as_matrix(a, m, n)
        A += complex(alpha) * np.outer(x, y)
