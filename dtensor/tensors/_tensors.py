"""Implements the dense tensor class and the operations on it."""
# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

import numpy as np

from ..block_backends import BlockBackend, get_block_backend
from ..dummy_config import config, printoptions
from ..errors import DegenerateDimensionError, InvalidPermutationError, ShapeMismatchError
from ..memory import DTYPE, is_aligned
from ..profiling import std_profiler
from ..tools.misc import inverse_permutation, is_permutation, make_stride, to_iterable
from ..tools.string import format_like_list
from ._indexing import next_index, num_elements, offset_of

__all__ = [
    'DenseTensor',
    'ContractionKind',
    'allocate_tensor',
    'copy_tensor',
    'move_tensor_data',
    'reshape',
    'transpose',
    'conj_transpose',
    'conjugate',
    'sub_tensor',
    'set_identity',
    'trace',
    'scale',
    'scaled_accumulate',
    'contraction_kind',
    'contract',
    'kron',
    'almost_equal',
]


def _parse_dims(dims) -> tuple[int, ...]:
    res = []
    for a, d in enumerate(to_iterable(dims)):
        if int(d) != d:
            raise TypeError(f'Dimension {d!r} of axis {a} is not an integer')
        if d <= 0:
            raise DegenerateDimensionError(f'Dimension {d} of axis {a} is not positive')
        res.append(int(d))
    return tuple(res)


def _parse_labels(labels, ndim: int) -> list[str | None] | None:
    if labels is None:
        if config.store_labels:
            return [None] * ndim
        return None
    labels = list(labels)
    if len(labels) != ndim:
        raise ValueError(f'Expected {ndim} labels, got {len(labels)}')
    return labels


class DenseTensor:
    """A dense tensor of complex double precision numbers in column-major storage.

    Parameters
    ----------
    dims : sequence of int
        The dimension of each axis. All must be positive. An empty sequence gives a scalar.
    labels : list of {str | None}, optional
        A label per axis. Labels serve diagnostics only and have no effect on any numerics.
        If not given, the tensor stores ``[None] * ndim`` if ``config.store_labels``,
        otherwise no labels at all.
    backend : str | BlockBackend, optional
        The block backend for the linear algebra, see :func:`get_block_backend`.

    Attributes
    ----------
    ndim : int
        The number of axes. Zero for scalars and released tensors.
    dims : tuple of int
        The dimensions. Axis 0 varies fastest in memory.
    data : 1D numpy array of complex128 | None
        The entries, ``data[offset_of(dims, idx)] == self[idx]``. ``None`` after :meth:`release`.
    labels : list of {str | None} | None
        The labels of the axes, if stored.
    backend : BlockBackend
        The block backend.

    """

    def __init__(self, dims: Sequence[int] = (), labels: list[str | None] = None,
                 backend: str | BlockBackend = None):
        self.dims = _parse_dims(dims)
        self.ndim = len(self.dims)
        self.labels = _parse_labels(labels, self.ndim)
        self.backend = get_block_backend(backend)
        with std_profiler.region('allocate_tensor'):
            self.data = self.backend.zeros(num_elements(self.dims))

    @classmethod
    def from_numpy(cls, a, labels: list[str | None] = None, backend: str | BlockBackend = None
                   ) -> DenseTensor:
        """Create a tensor from an n-dimensional array, e.g. a numpy array or nested lists.

        The entries are copied, ``res[idx] == a[idx]`` for every multi-index ``idx``.
        """
        a = np.asarray(a, dtype=DTYPE)
        res = cls(a.shape, labels=labels, backend=backend)
        res.data[:] = a.ravel(order='F')
        return res

    @property
    def size(self) -> int:
        """The number of elements, zero for a released tensor."""
        if self.data is None:
            return 0
        return self.data.size

    @property
    def is_released(self) -> bool:
        return self.data is None

    def copy(self) -> DenseTensor:
        """Deep copy with fresh storage. Labels are copied too."""
        res = DenseTensor.__new__(DenseTensor)
        res.ndim = self.ndim
        res.dims = self.dims
        res.labels = None if self.labels is None else list(self.labels)
        res.backend = self.backend
        with std_profiler.region('allocate_tensor'):
            res.data = self.backend.copy_block(self.data)
        return res

    def release(self):
        """Drop the data and reset to a rank 0 tensor without data. Safe to call repeatedly."""
        self.ndim = 0
        self.dims = ()
        self.data = None
        self.labels = None

    def item(self) -> complex:
        """The single entry of a tensor with one element, e.g. a scalar."""
        if self.size != 1:
            raise ValueError(f'Not a scalar: tensor has {self.size} elements')
        return complex(self.data[0])

    def to_numpy(self) -> np.ndarray:
        """An independent n-dimensional numpy array with the entries, ``shape == dims``."""
        return self.data.reshape(self.dims, order='F').copy(order='F')

    def set_labels(self, labels: list[str | None] | None):
        """Replace the labels. ``None`` drops them."""
        if labels is None:
            self.labels = None
        else:
            self.labels = _parse_labels(labels, self.ndim)

    def test_sanity(self):
        if self.data is None:
            assert self.ndim == 0
            assert self.dims == ()
            assert self.labels is None
            return
        assert self.ndim == len(self.dims)
        assert all(isinstance(d, int) and d > 0 for d in self.dims)
        assert isinstance(self.data, np.ndarray)
        assert self.data.dtype == DTYPE
        assert self.data.ndim == 1
        assert self.data.flags['C_CONTIGUOUS']
        assert self.data.size == num_elements(self.dims)
        assert is_aligned(self.data)
        if self.labels is not None:
            assert len(self.labels) == self.ndim
        assert isinstance(self.backend, BlockBackend)

    def __getitem__(self, idx) -> complex:
        idx = tuple(to_iterable(idx))
        return complex(self.data[offset_of(self.dims, idx, check=True)])

    def __setitem__(self, idx, value):
        idx = tuple(to_iterable(idx))
        self.data[offset_of(self.dims, idx, check=True)] = value

    def __repr__(self):
        if self.data is None:
            return f'<{type(self).__name__} (released)>'
        lines = [f'<{type(self).__name__}', f'  dims: {format_like_list(self.dims)}']
        if self.labels is not None:
            lines.append(f'  labels: {format_like_list(self.labels)}')
        lines.append(f'  backend: {self.backend!s}')
        if not printoptions.skip_data:
            data_str = np.array2string(self.to_numpy(), precision=printoptions.precision,
                                       max_line_width=printoptions.linewidth)
            data_lines = [f'    {line}' for line in data_str.split('\n')]
            max_lines = printoptions.maxlines_tensors
            if len(data_lines) > max_lines:
                first = (max_lines - 1) // 2
                last = max_lines - 1 - first
                data_lines = data_lines[:first] + ['    ...'] + data_lines[-last:]
            lines.append('  data:')
            lines.extend(data_lines)
        lines.append('>')
        return '\n'.join(lines)


# LIFECYCLE


def allocate_tensor(dims: Sequence[int], labels: list[str | None] = None,
                    backend: str | BlockBackend = None) -> DenseTensor:
    """A new tensor with zero entries. Same as ``DenseTensor(dims, labels, backend)``."""
    return DenseTensor(dims, labels=labels, backend=backend)


def copy_tensor(t: DenseTensor) -> DenseTensor:
    """A deep copy of `t`, see :meth:`DenseTensor.copy`."""
    return t.copy()


def move_tensor_data(src: DenseTensor, dst: DenseTensor) -> DenseTensor:
    """Transfer the data of `src` to `dst` without copying.

    Whatever `dst` held before is dropped. Afterwards, `src` is released, see
    :meth:`DenseTensor.release`. Returns `dst`.
    """
    if src is dst:
        return dst
    dst.ndim = src.ndim
    dst.dims = src.dims
    dst.data = src.data
    dst.labels = src.labels
    dst.backend = src.backend
    src.release()
    return dst


# STRUCTURAL TRANSFORMS


def reshape(dims: Sequence[int], t: DenseTensor):
    """Interpret `t` as a tensor with different `dims` but the same number of elements, in place.

    The data is not touched, so entries keep their position in memory (column-major order).
    Stored labels are reset to ``None``, since the axes change their meaning.
    """
    dims = _parse_dims(dims)
    if num_elements(dims) != t.size:
        msg = f'Can not reshape {t.size} elements to dims {format_like_list(dims)}'
        raise ShapeMismatchError(msg)
    t.dims = dims
    t.ndim = len(dims)
    if t.labels is not None:
        t.labels = [None] * t.ndim


def transpose(perm: Sequence[int], t: DenseTensor) -> DenseTensor:
    """Generalized transpose, such that axis ``k`` of `t` is axis ``perm[k]`` of the result.

    Parameters
    ----------
    perm : sequence of int
        A permutation of ``range(t.ndim)``.
    t : DenseTensor
        The tensor to transpose. Not modified.

    Returns
    -------
    DenseTensor
        A new tensor with ``res.dims[perm[k]] == t.dims[k]`` and
        ``res[idx_r] == t[idx_t]`` where ``idx_r[perm[k]] == idx_t[k]``.

    """
    perm = [int(p) for p in perm]
    if not is_permutation(perm, t.ndim):
        msg = f'{format_like_list(perm)} is not a permutation of the {t.ndim} axes'
        raise InvalidPermutationError(msg)
    with std_profiler.region('transpose_tensor'):
        if t.ndim == 0:
            return t.copy()
        inv_perm = inverse_permutation(perm)
        r_dims = [t.dims[k] for k in inv_perm]
        r_labels = None if t.labels is None else [t.labels[k] for k in inv_perm]
        r = DenseTensor(r_dims, labels=r_labels, backend=t.backend)

        # offset in `r` between successive entries along the first axis of `t`
        stride = int(make_stride(r.dims, cstyle=False)[perm[0]])
        n = t.dims[0]
        index_t = [0] * t.ndim
        index_r = [0] * t.ndim
        for ot in range(0, t.size, n):
            for k, p in enumerate(perm):
                index_r[p] = index_t[k]
            or_ = offset_of(r.dims, index_r)
            r.data[or_:or_ + (n - 1) * stride + 1:stride] = t.data[ot:ot + n]
            # advance all but the first axis; the first is covered by the slice
            next_index(t.dims, index_t, start=1)
    return r


def conj_transpose(perm: Sequence[int], t: DenseTensor) -> DenseTensor:
    """Like :func:`transpose`, followed by complex conjugation of the result."""
    r = transpose(perm, t)
    conjugate(r)
    return r


def conjugate(t: DenseTensor):
    """Complex conjugate all entries of `t`, in place."""
    t.backend.conj(t.data)


def _check_index_maps(t: DenseTensor, sub_dims: tuple[int, ...], idx_maps: list[np.ndarray]):
    for a, (idx, sub_d, d) in enumerate(zip(idx_maps, sub_dims, t.dims)):
        if idx.ndim != 1 or len(idx) < sub_d:
            raise IndexError(f'Index map for axis {a} needs {sub_d} entries, got shape {idx.shape}')
        idx = idx[:sub_d]
        if np.any(idx < 0) or np.any(idx >= d):
            raise IndexError(f'Index map for axis {a} out of bounds for dimension {d}')


def sub_tensor(t: DenseTensor, sub_dims: Sequence[int], idx_maps: Sequence[Sequence[int]]
               ) -> DenseTensor:
    """Gather a sub-tensor, selecting entries along each axis.

    Parameters
    ----------
    t : DenseTensor
        The source tensor.
    sub_dims : sequence of int
        The dimensions of the result, one per axis of `t`.
    idx_maps : sequence of sequence of int
        For each axis ``a``, the coordinates in `t` of the entries to select;
        only the first ``sub_dims[a]`` entries are used.

    Returns
    -------
    DenseTensor
        The sub-tensor ``s`` of the same rank as `t` with
        ``s[j_0, ..., j_r] == t[idx_maps[0][j_0], ..., idx_maps[r][j_r]]``.

    """
    sub_dims = _parse_dims(sub_dims)
    if len(sub_dims) != t.ndim:
        raise ShapeMismatchError(f'Expected {t.ndim} sub dims, got {len(sub_dims)}')
    if len(idx_maps) != t.ndim:
        raise ShapeMismatchError(f'Expected {t.ndim} index maps, got {len(idx_maps)}')
    idx_maps = [np.asarray(idx, dtype=np.intp) for idx in idx_maps]
    if config.check_index_maps:
        _check_index_maps(t, sub_dims, idx_maps)
    labels = None if t.labels is None else list(t.labels)
    s = DenseTensor(sub_dims, labels=labels, backend=t.backend)
    if t.ndim == 0:
        s.data[0] = t.data[0]
        return s

    n = sub_dims[0]
    idx0 = idx_maps[0][:n]
    index_s = [0] * s.ndim
    # the coordinate on the first axis is handled by the gather below
    index_t = [0] + [int(idx[0]) for idx in idx_maps[1:]]
    ot = offset_of(t.dims, index_t)
    for os_ in range(0, s.size, n):
        s.data[os_:os_ + n] = t.data[ot + idx0]
        next_index(s.dims, index_s, start=1)
        for a in range(1, t.ndim):
            index_t[a] = int(idx_maps[a][index_s[a]])
        ot = offset_of(t.dims, index_t)
    return s


def _diagonal_stride(t: DenseTensor) -> tuple[int, int]:
    """For a tensor with all dims equal to ``n``, return ``n`` and the offset between diagonal
    entries ``(j, j, ..., j)`` and ``(j + 1, j + 1, ..., j + 1)``."""
    if t.ndim < 1:
        raise ShapeMismatchError('Need a tensor with at least one axis')
    n = t.dims[0]
    if any(d != n for d in t.dims):
        raise ShapeMismatchError(f'All dims must agree, got {format_like_list(t.dims)}')
    # 1 + n + n**2 + ...
    stride = int(np.sum(make_stride(t.dims, cstyle=False)))
    return n, stride


def set_identity(t: DenseTensor):
    """Set `t` to the identity, in place: one on the diagonal ``(j, j, ..., j)``, zero elsewhere.

    All dims of `t` must agree.
    """
    n, stride = _diagonal_stride(t)
    t.data[:] = 0
    t.data[0:(n - 1) * stride + 1:stride] = 1


def trace(t: DenseTensor) -> complex:
    """Sum of the diagonal entries ``t[j, j, ..., j]``, generalizing the matrix trace.

    All dims of `t` must agree.
    """
    n, stride = _diagonal_stride(t)
    return complex(np.sum(t.data[0:(n - 1) * stride + 1:stride]))


# ALGEBRA


def scale(alpha: float, t: DenseTensor):
    """Multiply `t` by a real number, in place."""
    t.backend.scale_real(alpha, t.data)


def scaled_accumulate(alpha: complex, s: DenseTensor, t: DenseTensor):
    """``t <- alpha * s + t``, in place. The dims of `s` and `t` must agree."""
    if s.dims != t.dims:
        msg = f'Mismatching dims {format_like_list(s.dims)} and {format_like_list(t.dims)}'
        raise ShapeMismatchError(msg)
    t.backend.axpy(alpha, s.data, t.data)


class ContractionKind(Enum):
    """The shape category of a contraction, with both operands seen as matrices.

    ``s`` is ``(lds, ldt)`` and ``t`` is ``(ldt, tdt)``; each category is handled by the
    cheapest applicable BLAS routine.
    """

    INNER = 'inner'  # lds == 1, tdt == 1 -> zdotu
    VECTOR_MATRIX = 'vector_matrix'  # lds == 1, tdt > 1 -> zgemv, transposed
    MATRIX_VECTOR = 'matrix_vector'  # lds > 1, tdt == 1 -> zgemv
    MATRIX_MATRIX = 'matrix_matrix'  # lds > 1, tdt > 1 -> zgemm


def contraction_kind(lds: int, tdt: int) -> ContractionKind:
    """The :class:`ContractionKind` for the given number of rows of ``s`` and columns of ``t``."""
    assert lds > 0 and tdt > 0
    if lds == 1:
        if tdt == 1:
            return ContractionKind.INNER
        return ContractionKind.VECTOR_MATRIX
    if tdt == 1:
        return ContractionKind.MATRIX_VECTOR
    return ContractionKind.MATRIX_MATRIX


def contract(s: DenseTensor, t: DenseTensor, ndim_mult: int) -> DenseTensor:
    """Contract the last `ndim_mult` axes of `s` with the first `ndim_mult` axes of `t`.

    Parameters
    ----------
    s, t : DenseTensor
        The tensors to contract. The dims of the contracted axes must agree pairwise.
    ndim_mult : int
        Number of contracted axes, at least one and at most the rank of either tensor.

    Returns
    -------
    DenseTensor
        The result with dims ``s.dims[:-ndim_mult] + t.dims[ndim_mult:]``, i.e.
        ``res[i, j] = sum_k s[i, k] * t[k, j]`` for multi-indices ``i, k, j``.
        Labels of the remaining axes are carried over.

    """
    if not 1 <= ndim_mult <= min(s.ndim, t.ndim):
        msg = f'Can not contract {ndim_mult} axes of tensors with {s.ndim} and {t.ndim} axes'
        raise ShapeMismatchError(msg)
    num_s = s.ndim - ndim_mult
    contracted = s.dims[num_s:]
    if contracted != t.dims[:ndim_mult]:
        msg = (f'Contracted dims do not agree: {format_like_list(contracted)} != '
               f'{format_like_list(t.dims[:ndim_mult])}')
        raise ShapeMismatchError(msg)

    with std_profiler.region('multiply_tensor'):
        r_dims = s.dims[:num_s] + t.dims[ndim_mult:]
        if s.labels is None and t.labels is None:
            r_labels = None
        else:
            s_labels = [None] * s.ndim if s.labels is None else s.labels
            t_labels = [None] * t.ndim if t.labels is None else t.labels
            r_labels = s_labels[:num_s] + t_labels[ndim_mult:]
        r = DenseTensor(r_dims, labels=r_labels, backend=s.backend)

        ldt = num_elements(contracted)  # s as (lds, ldt) matrix
        lds = s.size // ldt
        tdt = t.size // ldt  # t as (ldt, tdt) matrix
        kind = contraction_kind(lds, tdt)
        block_backend = s.backend
        if kind is ContractionKind.INNER:
            assert s.size == t.size and r.size == 1
            r.data[0] = block_backend.dotu(s.data, t.data)
        elif kind is ContractionKind.VECTOR_MATRIX:
            # (t^T s)^T
            block_backend.gemv(t.data, s.data, r.data, ldt, tdt, trans=True)
        elif kind is ContractionKind.MATRIX_VECTOR:
            block_backend.gemv(s.data, t.data, r.data, lds, ldt)
        elif kind is ContractionKind.MATRIX_MATRIX:
            block_backend.gemm(s.data, t.data, r.data, lds, tdt, ldt)
        else:
            raise RuntimeError(f'Unknown contraction kind {kind}')
    return r


def kron(s: DenseTensor, t: DenseTensor) -> DenseTensor:
    """Kronecker product of two tensors with the same number of axes.

    Axis ``k`` of the result has dimension ``s.dims[k] * t.dims[k]`` and combines the axes ``k``
    of `s` and `t`, with the index of `s` varying fastest (column-major)::

        res[i_0 + s.dims[0] * j_0, ..., i_r + s.dims[r] * j_r] == s[i_0, ..., i_r] * t[j_0, ..., j_r]

    The result has no information about labels.
    """
    if s.ndim != t.ndim:
        raise ShapeMismatchError(f'Need the same number of axes, got {s.ndim} and {t.ndim}')
    ndim = s.ndim
    u = DenseTensor(s.dims + t.dims, backend=s.backend)
    m = s.size
    n = t.size
    assert u.size == m * n
    # outer product; u.data is initialized with zeros
    s.backend.geru(1., s.data, t.data, u.data, m, n)
    # interleave the axes of s and t
    perm = [2 * i for i in range(ndim)] + [2 * i + 1 for i in range(ndim)]
    r = transpose(perm, u)
    u.release()
    r_dims = [ds * dt for ds, dt in zip(s.dims, t.dims)]
    reshape(r_dims, r)
    return r


def almost_equal(a: DenseTensor, b: DenseTensor, rtol: float = 1e-5, atol: float = 1e-8) -> bool:
    """If `a` and `b` have the same dims and entries that agree up to tolerances.

    Uses ``abs(a - b) <= atol + rtol * abs(b)`` elementwise, like :func:`numpy.allclose`.
    """
    if a.dims != b.dims:
        return False
    return bool(np.allclose(a.data, b.data, rtol=rtol, atol=atol))
