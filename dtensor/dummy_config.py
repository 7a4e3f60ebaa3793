"""Temporary solution for global config options."""
# Copyright (C) TeNPy Developers, Apache license

__all__ = ['printoptions', 'config']


class printoptions:
    """A collection of global config options. The class is used as a namespace"""

    linewidth: int = 100
    precision: int = 8  # #digits
    maxlines_tensors: int = 30
    skip_data: bool = False  # skip Data section in Tensor prints


class config:
    """A collection of global config options. The class is used as a namespace"""
    printoptions = printoptions
    store_labels = False  # If new tensors keep a label per axis. Read at construction time.
    check_index_maps = True  # If sub_tensor validates its index maps before gathering
    enable_profiling = False  # If the named regions of ``profiling.std_profiler`` record timings
    alignment = 64  # in bytes, for the data buffers of tensors. Must be a power of two.
    default_block_backend = 'blas'
