"""Error taxonomy shared by every *tensormap* module.

All errors are raised synchronously at the call site and are never retried.
Each class also derives from the closest builtin so callers catching
``ValueError``/``IndexError``/``RuntimeError`` keep working.
"""

from __future__ import annotations

__all__ = [
    "TensorError",
    "InvalidArgumentError",
    "IllegalStateError",
    "OutOfBoundsError",
    "IndexCollisionWarning",
]


class TensorError(Exception):
    """Base class for all tensormap errors."""


class InvalidArgumentError(TensorError, ValueError):
    """A caller supplied a negative coordinate, mismatched order or bad parameter."""


class IllegalStateError(TensorError, RuntimeError):
    """A tensor was viewed as a scalar/vector/matrix of the wrong order."""


class OutOfBoundsError(TensorError, IndexError):
    """An axis beyond the current order was addressed."""


class IndexCollisionWarning(RuntimeWarning):
    """Several source entries were re-indexed onto the same coordinate."""
