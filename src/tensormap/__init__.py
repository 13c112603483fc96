# SPDX-License-Identifier: MIT
"""tensormap: sparse N-dimensional tensors over arbitrary element types.

A :class:`Tensor` maps integer coordinates (:class:`Index`) to values of any
type.  Shape is the bounding box of the stored coordinates, so ragged and
holey data costs nothing for the missing cells.  :class:`Scalar`,
:class:`Vector` and :class:`Matrix` are order-checked views sharing storage
with the tensor they wrap, and :mod:`tensormap.torch_interop` converts to and
from PyTorch / NumPy arrays.
"""

from __future__ import annotations

from . import config
from .errors import (
    IllegalStateError,
    IndexCollisionWarning,
    InvalidArgumentError,
    OutOfBoundsError,
    TensorError,
)
from .index import Index
from .tensor import Tensor
from .view import TensorView
from .scalar import Scalar
from .vector import Vector
from .matrix import Matrix
from .torch_interop import from_numpy, from_torch, to_numpy, to_sparse_coo, to_torch

__all__ = [
    "config",
    "Index",
    "Tensor",
    "TensorView",
    "Scalar",
    "Vector",
    "Matrix",
    "TensorError",
    "InvalidArgumentError",
    "IllegalStateError",
    "OutOfBoundsError",
    "IndexCollisionWarning",
    "from_numpy",
    "from_torch",
    "to_numpy",
    "to_sparse_coo",
    "to_torch",
]

__version__ = "0.1.0"
