"""A block backend calling the BLAS routines exposed by scipy."""
# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

import numpy as np
from scipy.linalg import blas

from ._block_backend import Block, BlockBackend

__all__ = ['BlasBlockBackend']


def _store(res: np.ndarray, out: np.ndarray):
    # the f2py wrappers work in place if possible, but may return a copy otherwise
    if res is not out:
        out[...] = res


class BlasBlockBackend(BlockBackend):
    """A block backend using the complex double precision routines of :mod:`scipy.linalg.blas`."""

    name = 'blas'

    def scale_real(self, alpha: float, x: Block):
        _store(blas.zdscal(float(alpha), x), x)

    def axpy(self, alpha: complex, x: Block, y: Block):
        assert x.size == y.size
        _store(blas.zaxpy(x, y, n=x.size, a=complex(alpha)), y)

    def dotu(self, x: Block, y: Block) -> complex:
        assert x.size == y.size
        return complex(blas.zdotu(x, y))

    def gemv(self, a: Block, x: Block, y: Block, m: int, n: int, trans: bool = False):
        A = self.as_matrix(a, m, n)
        res = blas.zgemv(1., A, x, beta=0., y=y, trans=int(trans), overwrite_y=True)
        _store(res, y)

    def gemm(self, a: Block, b: Block, c: Block, m: int, n: int, k: int):
        A = self.as_matrix(a, m, k)
        B = self.as_matrix(b, k, n)
        C = self.as_matrix(c, m, n)
        res = blas.zgemm(1., A, B, beta=0., c=C, overwrite_c=True)
        _store(res, C)

    def geru(self, alpha: complex, x: Block, y: Block, a: Block, m: int, n: int):
        A = self.as_matrix(a, m, n)
        res = blas.zgeru(complex(alpha), x, y, a=A, overwrite_x=False, overwrite_y=False,
                         overwrite_a=True)
        _store(res, A)
