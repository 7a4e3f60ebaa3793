"""Block-backends implement the dense linear algebra on the data buffers of tensors"""
# Copyright (C) TeNPy Developers, Apache license

from ._block_backend import Block, BlockBackend
from .backend_factory import get_block_backend
from .blas import BlasBlockBackend
from .numpy import NumpyBlockBackend
