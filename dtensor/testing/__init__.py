"""Tools for testing."""
# Copyright (C) TeNPy Developers, Apache license
from . import random_generation
from .asserting import assert_tensors_almost_equal
from .random_generation import random_dims, random_permutation, random_tensor
