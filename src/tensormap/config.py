"""Global configuration for *tensormap*.

This module centralises project-wide knobs so they can be tweaked from a
single location.  Every knob is a plain module attribute with a validating
setter next to it; library code always reads the attribute at call time so a
change takes effect immediately.

Placeholder
-----------
Sparse holes have no stored value, so the text renderers substitute a
placeholder.  The canonical form uses a single space which keeps the
column layout of dense rows intact.

Chunked reduction
-----------------
`Tensor.reduce` accepts an optional *combiner*.  When `REDUCE_CHUNK_SIZE` is
set, every reduction group is folded in consecutive chunks of that many
elements (each seeded with the identity) and the partial results are merged
with the combiner.  The combiner must therefore be associative and the identity
must be neutral for it.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_PLACEHOLDER",
    "REDUCE_CHUNK_SIZE",
    "WARN_ON_INDEX_COLLISION",
    "set_default_placeholder",
    "set_reduce_chunk_size",
    "set_warn_on_index_collision",
]

# -----------------------------------------------------------------------------
# Public constants
# -----------------------------------------------------------------------------

DEFAULT_PLACEHOLDER: str = " "  # rendered in place of sparse holes

REDUCE_CHUNK_SIZE: int | None = None  # None -> one partial fold per group

WARN_ON_INDEX_COLLISION: bool = False

# -----------------------------------------------------------------------------
# Setters
# -----------------------------------------------------------------------------

def set_default_placeholder(placeholder: str):
    """Change the text rendered for sparse holes."""
    global DEFAULT_PLACEHOLDER
    if not isinstance(placeholder, str):
        raise TypeError("Placeholder must be a string.")
    DEFAULT_PLACEHOLDER = placeholder


def set_reduce_chunk_size(size: int | None):
    """Change the chunk size used by combiner-based reductions.

    Parameters
    ----------
    size:
        Positive number of elements folded per partial result, or ``None`` to
        fold each group in one pass.
    """
    global REDUCE_CHUNK_SIZE
    if size is not None and size <= 0:
        raise ValueError("Chunk size must be positive.")
    REDUCE_CHUNK_SIZE = size


def set_warn_on_index_collision(enabled: bool):
    """Toggle `IndexCollisionWarning` for re-indexing transforms."""
    global WARN_ON_INDEX_COLLISION
    WARN_ON_INDEX_COLLISION = bool(enabled)
