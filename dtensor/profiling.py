"""Lightweight profiling of named code regions.

The engine wraps allocation, transposition and contraction of tensors in named regions of the
module-level :data:`std_profiler`. Recording is switched on by
:attr:`~dtensor.dummy_config.config.enable_profiling`; if it is off, starting and stopping a
region does nothing, and the results of all operations are unaffected either way.

Example
-------
>>> from dtensor import config
>>> from dtensor.profiling import std_profiler
>>> config.enable_profiling = True
>>> with std_profiler.region('my_block'):
...     pass
>>> std_profiler.calls['my_block']
1
"""
# Copyright (C) TeNPy Developers, Apache license
from __future__ import annotations

import logging
import time
import warnings
from contextlib import contextmanager

from .dummy_config import config

__all__ = ['Profiler', 'std_profiler']

logger = logging.getLogger(__name__)


class Profiler:
    """Accumulate wall time and number of calls per named region.

    Parameters
    ----------
    enabled : bool, optional
        If given, overrides :attr:`~dtensor.dummy_config.config.enable_profiling` for this
        profiler.

    Attributes
    ----------
    total_time : dict
        Accumulated wall time in seconds, keys are the region names.
    calls : dict
        Number of completed start/stop pairs, keys are the region names.

    """

    def __init__(self, enabled: bool = None):
        self._enabled = enabled
        self.total_time = {}
        self.calls = {}
        self._started = {}

    @property
    def enabled(self) -> bool:
        if self._enabled is None:
            return config.enable_profiling
        return self._enabled

    def start(self, name: str):
        """Start timing the region `name`."""
        if not self.enabled:
            return
        self._started[name] = time.perf_counter()

    def stop(self, name: str):
        """Stop timing the region `name` and add the elapsed time."""
        if not self.enabled:
            return
        t0 = self._started.pop(name, None)
        if t0 is None:
            warnings.warn(f'Profiling region {name!r} stopped without being started', stacklevel=2)
            return
        self.total_time[name] = self.total_time.get(name, 0.) + time.perf_counter() - t0
        self.calls[name] = self.calls.get(name, 0) + 1

    @contextmanager
    def region(self, name: str):
        """Context manager wrapping :meth:`start` and :meth:`stop`."""
        self.start(name)
        try:
            yield self
        finally:
            self.stop(name)

    def reset(self):
        """Forget all recorded timings."""
        self.total_time.clear()
        self.calls.clear()
        self._started.clear()

    def summary(self) -> str:
        """A table of the recorded regions, sorted by total time."""
        lines = [f'{"region":<24} {"calls":>8} {"total [s]":>12} {"per call [s]":>14}']
        for name in sorted(self.total_time, key=self.total_time.get, reverse=True):
            total = self.total_time[name]
            calls = self.calls[name]
            lines.append(f'{name:<24} {calls:>8d} {total:>12.6f} {total / calls:>14.3e}')
        return '\n'.join(lines)

    def log_summary(self, level: int = logging.INFO):
        """Write the :meth:`summary` to the logger of this module."""
        logger.log(level, 'profiling summary\n%s', self.summary())


#: The profiler used by the tensor engine.
std_profiler = Profiler()
