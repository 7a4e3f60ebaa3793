r"""dtensor library - dense tensors for tensor network algorithms.

Provides a dense, complex double precision tensor with column-major storage, whose contractions
are carried out by BLAS routines through an exchangeable block backend.

"""
# Copyright (C) TeNPy Developers, Apache license

# note: order matters!
from . import (
    dummy_config,
    errors,
    memory,
    profiling,
    tools,
    block_backends,
    tensors,
    testing,
    version,
)

# subpackages
from .block_backends import BlockBackend, get_block_backend

# modules under dtensor
from .dummy_config import config
from .errors import (
    AllocationError,
    DegenerateDimensionError,
    InvalidPermutationError,
    ShapeMismatchError,
    TensorError,
)
from .profiling import Profiler, std_profiler
from .tensors import (
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
    next_index,
    num_elements,
    offset_of,
    reshape,
    scale,
    scaled_accumulate,
    set_identity,
    sub_tensor,
    trace,
    transpose,
)
from .version import full_version as __full_version__
from .version import version as __version__


def show_config():
    """Print information about the version of dtensor and used libraries.

    The information printed is :attr:`dtensor.version.version_summary`.
    """
    print(version.version_summary)
