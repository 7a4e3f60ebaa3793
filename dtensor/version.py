"""Access to version of this library.

The version is provided in the standard python format ``major.minor.revision`` as string.
Use ``pkg_resources.parse_version`` before comparing versions.

.. autodata :: version
.. autodata :: full_version
.. autodata :: version_summary
"""
# Copyright (C) TeNPy Developers, Apache license

import sys

import numpy
import scipy

__all__ = ['version', 'full_version', 'version_summary']

#: current release version as a string
version = '0.1.0'

#: same as version, no git revision is tracked for source installs
full_version = version

#: summary of the versions of the python interpreter and the libraries used for numerics
version_summary = (
    f'dtensor {full_version},\n'
    f'python {sys.version}\n'
    f'numpy {numpy.__version__}, scipy {scipy.__version__}'
)
