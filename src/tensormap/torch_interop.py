"""Conversion between sparse tensors and PyTorch / NumPy arrays.

Axis convention
---------------
tensormap enumerates coordinates with axis 0 varying fastest, exactly like the
*last* dimension of a row-major array.  Conversions therefore reverse the
axes: array dimension ``k`` corresponds to tensormap axis ``order - 1 - k``.
A matrix built with ``Tensor.of([[1, 2], [3, 4], [5, 6]])`` becomes a
``3 x 2`` array that prints the same nested list back.

Dense exports materialise the whole bounding box, filling holes with a caller
supplied default.  :func:`to_sparse_coo` keeps only stored entries.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

import numpy as np
import torch

from .errors import InvalidArgumentError
from .index import Index
from .tensor import Tensor, _as_tensor

if TYPE_CHECKING:  # pragma: no cover
    from .view import TensorView

__all__ = [
    "is_array",
    "is_torch_tensor",
    "to_numpy",
    "to_torch",
    "to_sparse_coo",
    "from_numpy",
    "from_torch",
]


# -----------------------------------------------------------------------------
# Type probes
# -----------------------------------------------------------------------------

def is_array(value: Any) -> bool:
    return isinstance(value, np.ndarray)


def is_torch_tensor(value: Any) -> bool:
    return isinstance(value, torch.Tensor)


def _array_position(index: Index) -> tuple[int, ...]:
    return tuple(reversed(index.coordinates))


def _dense_grid(tensor: Tensor, default: Any) -> np.ndarray:
    """Object array of the bounding box with holes set to *default*."""
    grid = np.full(tuple(reversed(tensor.dimensions())), default, dtype=object)
    for index, value in tensor.items():
        grid[_array_position(index)] = value
    return grid


# -----------------------------------------------------------------------------
# Export
# -----------------------------------------------------------------------------

def to_numpy(tensor: "Tensor | TensorView", default: Any = 0, dtype: Any = None) -> np.ndarray:
    """Dense NumPy array of the bounding box.

    An empty tensor yields an array of shape ``(0,)``, an order-0 tensor a
    0-d array.  Without *dtype* NumPy infers one from the values.
    """
    tensor = _as_tensor(tensor)
    if tensor.is_empty():
        return np.empty((0,), dtype=dtype if dtype is not None else float)
    if tensor.order == 0:
        return np.array(tensor.get(), dtype=dtype)
    return np.array(_dense_grid(tensor, default).tolist(), dtype=dtype)


def to_torch(tensor: "Tensor | TensorView", default: Any = 0, dtype: torch.dtype | None = None) -> torch.Tensor:
    """Dense ``torch.Tensor`` of the bounding box, holes filled with *default*.

    Parameters
    ----------
    tensor:
        Source tensor (or view).  Elements must be numbers or booleans.
    default:
        Value for sparse holes.
    dtype:
        Target dtype; inferred by :func:`torch.tensor` when omitted.
    """
    tensor = _as_tensor(tensor)
    if tensor.is_empty():
        return torch.empty((0,), dtype=dtype)
    if tensor.order == 0:
        return torch.tensor(tensor.get(), dtype=dtype)
    return torch.tensor(_dense_grid(tensor, default).tolist(), dtype=dtype)


def to_sparse_coo(tensor: "Tensor | TensorView", dtype: torch.dtype | None = None) -> torch.Tensor:
    """Coalesced ``torch.sparse_coo_tensor`` holding only the stored entries."""
    tensor = _as_tensor(tensor)
    if tensor.is_empty():
        return torch.sparse_coo_tensor(
            torch.empty((1, 0), dtype=torch.long),
            torch.empty((0,), dtype=dtype),
            size=(0,),
        ).coalesce()
    if tensor.order == 0:
        raise InvalidArgumentError("A sparse COO tensor needs at least one axis")

    entries = tensor.items()
    positions = torch.tensor([_array_position(index) for index, _ in entries], dtype=torch.long)
    values = torch.tensor([value for _, value in entries], dtype=dtype)
    shape = tuple(reversed(tensor.dimensions()))
    return torch.sparse_coo_tensor(positions.t(), values, size=shape).coalesce()


# -----------------------------------------------------------------------------
# Import
# -----------------------------------------------------------------------------

def from_numpy(array: np.ndarray) -> Tensor:
    """Every cell of *array* becomes a stored entry (Python scalars via ``item``)."""
    array = np.asarray(array)
    if array.ndim == 0:
        return Tensor.from_mapping({Index(): array.item()})
    if array.size == 0:
        return Tensor.empty()
    return Tensor.from_mapping({
        Index(reversed(position)): array.item(position)
        for position in np.ndindex(array.shape)
    })


def from_torch(source: torch.Tensor) -> Tensor:
    """Convert a dense or sparse COO torch tensor.

    Dense tensors contribute every cell.  Sparse tensors contribute their
    stored entries only, so their implicit zeros stay sparse holes.
    """
    if not isinstance(source, torch.Tensor):
        raise InvalidArgumentError(f"Expected a torch.Tensor, got {type(source).__name__}")
    if source.is_sparse:
        source = source.detach().cpu().coalesce()
        positions = source.indices().t().tolist()
        values = source.values().tolist()
        return Tensor.from_mapping({
            Index(reversed(position)): value for position, value in zip(positions, values)
        })
    return from_numpy(source.detach().cpu().numpy())
