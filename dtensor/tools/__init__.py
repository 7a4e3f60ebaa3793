"""Miscellaneous helper functions used throughout the library."""
# Copyright (C) TeNPy Developers, Apache license

from . import misc, string
from .misc import (
    compose_permutations,
    inverse_permutation,
    is_iterable,
    is_permutation,
    make_stride,
    to_iterable,
)
from .string import format_like_list
