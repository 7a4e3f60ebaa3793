"""Exceptions raised by the tensor engine when a precondition is violated.

None of these are caught inside :mod:`dtensor`; they signal programming errors of the caller,
e.g. contracting axes of different dimension.
"""
# Copyright (C) TeNPy Developers, Apache license

__all__ = [
    'TensorError',
    'ShapeMismatchError',
    'InvalidPermutationError',
    'AllocationError',
    'DegenerateDimensionError',
]


class TensorError(Exception):
    """Base class for all errors of the tensor engine."""


class ShapeMismatchError(TensorError, ValueError):
    """The dimensions of the operands are structurally incompatible."""


class InvalidPermutationError(TensorError, ValueError):
    """A permutation is not a bijection on the axes of a tensor."""


class AllocationError(TensorError, MemoryError):
    """The allocator could not provide a buffer of the requested size."""


class DegenerateDimensionError(TensorError, ValueError):
    """A dimension is not strictly positive."""
