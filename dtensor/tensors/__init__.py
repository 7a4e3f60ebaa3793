r"""Dense tensors with column-major storage and the operations on them.

.. _memory_layout:

Memory layout
-------------
A :class:`DenseTensor` with dims ``(d_0, ..., d_{r-1})`` stores its entries in a flat, aligned
buffer of ``d_0 * ... * d_{r-1}`` complex numbers. The entry with multi-index
``(i_0, ..., i_{r-1})`` is at the offset

.. math ::
    \sum_k i_k \prod_{j < k} d_j

i.e. axis 0 varies fastest (F-style). See :func:`offset_of` and :func:`next_index`.
A tensor with zero axes is a scalar and stores a single number.


.. _ownership:

Ownership
---------
Each tensor exclusively owns its buffer. :func:`copy_tensor` allocates new storage, while
:func:`move_tensor_data` hands the buffer over to another tensor and leaves the source
released, see :meth:`DenseTensor.release`.
Operations either modify a tensor in place (:func:`reshape`, :func:`conjugate`,
:func:`set_identity`, :func:`scale`, :func:`scaled_accumulate`) or return a new one
(:func:`transpose`, :func:`conj_transpose`, :func:`sub_tensor`, :func:`contract`, :func:`kron`).


.. _contraction_dispatch:

Contractions
------------
:func:`contract` views both operands as matrices and calls the cheapest BLAS routine for the
resulting :class:`ContractionKind`:

    =================  ========  ========  ==============================
    kind               rows s    cols t    routine
    =================  ========  ========  ==============================
    INNER              1         1         ``zdotu``
    -----------------  --------  --------  ------------------------------
    VECTOR_MATRIX      1         > 1       ``zgemv`` with transposed ``t``
    -----------------  --------  --------  ------------------------------
    MATRIX_VECTOR      > 1       1         ``zgemv``
    -----------------  --------  --------  ------------------------------
    MATRIX_MATRIX      > 1       > 1       ``zgemm``
    =================  ========  ========  ==============================

"""
# Copyright (C) TeNPy Developers, Apache license

from ._indexing import next_index, num_elements, offset_of
from ._tensors import (
    ContractionKind,
    DenseTensor,
    allocate_tensor,
    almost_equal,
    conj_transpose,
    conjugate,
    contract,
    contraction_kind,
    copy_tensor,
    kron,
    move_tensor_data,
    reshape,
    scale,
    scaled_accumulate,
    set_identity,
    sub_tensor,
    trace,
    transpose,
)
