"""
Exceptions raised by the sorter and the console wrapper.

Both subclass ValueError so callers that already guard against bad values
keep working without importing anything from this package.
"""

from __future__ import annotations

__all__ = ["InvalidArgument", "MalformedInput"]


class InvalidArgument(ValueError):
    """A call precondition was violated; raised before any element is moved."""


class MalformedInput(ValueError):
    """User-typed text could not be turned into a list of integers."""
