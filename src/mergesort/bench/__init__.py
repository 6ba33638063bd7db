"""
Benchmark harness.

`measure` has no heavy dependencies; `runner` pulls in pandas/psutil/yaml and
is imported on demand.
"""

from .measure import time_sort_call

__all__ = ["time_sort_call"]
