"""Tests for PyTorch / NumPy conversion."""

from __future__ import annotations

import numpy as np
import pytest
import torch
from hypothesis import given, strategies as st
from hypothesis.extra.numpy import arrays

from tensormap import (
    InvalidArgumentError,
    Matrix,
    Tensor,
    from_numpy,
    from_torch,
    to_numpy,
    to_sparse_coo,
    to_torch,
)


def _matrix() -> Tensor:
    return Tensor.of([[1, 2], [3, 4], [5, 6]])


# -----------------------------------------------------------------------------
# Dense export
# -----------------------------------------------------------------------------

def test_to_torch_keeps_row_major_layout():
    dense = to_torch(_matrix())
    assert dense.shape == (3, 2)
    assert dense.tolist() == [[1, 2], [3, 4], [5, 6]]


def test_to_torch_fills_holes():
    tensor = _matrix()
    tensor.remove(1, 1)
    dense = tensor.to_torch(default=-1, dtype=torch.float64)
    assert dense.dtype == torch.float64
    assert dense[1, 1].item() == -1.0


def test_to_torch_edge_orders():
    assert to_torch(Tensor.of([2.5])).dim() == 0
    assert to_torch(Tensor.of([2.5])).item() == 2.5
    assert to_torch(Tensor.empty()).shape == (0,)


def test_to_numpy_accepts_views():
    array = to_numpy(Matrix.of([[1, 2], [3, 4]]))
    assert array.shape == (2, 2)
    assert array.tolist() == [[1, 2], [3, 4]]
    assert Tensor.of([1, 2]).to_numpy().tolist() == [1, 2]


# -----------------------------------------------------------------------------
# Sparse export
# -----------------------------------------------------------------------------

def test_to_sparse_coo_keeps_only_stored_entries():
    tensor = Tensor.from_mapping({(0, 0): 1.0, (2, 1): 5.0})
    sparse = to_sparse_coo(tensor)
    assert sparse.is_sparse
    assert sparse.shape == (2, 3)
    assert sparse._nnz() == 2
    assert sparse.to_dense().tolist() == [[1.0, 0.0, 0.0], [0.0, 0.0, 5.0]]


def test_to_sparse_coo_edge_cases():
    assert to_sparse_coo(Tensor.empty()).shape == (0,)
    with pytest.raises(InvalidArgumentError):
        to_sparse_coo(Tensor.of([1]))


# -----------------------------------------------------------------------------
# Import
# -----------------------------------------------------------------------------

def test_from_torch_dense():
    tensor = from_torch(torch.tensor([[1, 2], [3, 4], [5, 6]]))
    assert tensor == _matrix()
    assert isinstance(tensor.get(0, 0), int)


def test_from_torch_sparse_keeps_holes():
    source = torch.sparse_coo_tensor(torch.tensor([[0, 1], [2, 0]]), torch.tensor([7.0, 8.0]), size=(2, 3))
    tensor = Tensor.from_torch(source)
    assert len(tensor) == 2
    assert tensor.get(2, 0) == 7.0
    assert tensor.get(0, 1) == 8.0
    assert not tensor.has(1, 1)


def test_from_torch_rejects_other_types():
    with pytest.raises(InvalidArgumentError):
        from_torch([1, 2])  # type: ignore[arg-type]


def test_of_accepts_arrays():
    assert Tensor.of(np.array([[1, 2], [3, 4], [5, 6]])) == _matrix()
    assert Tensor.of(torch.tensor([1, 2])) == Tensor.of([1, 2])
    assert Tensor.of([np.array([1, 2]), np.array([3, 4])]) == Tensor.of([[1, 2], [3, 4]])


def test_from_numpy_edge_shapes():
    assert from_numpy(np.array(3)).get() == 3
    assert from_numpy(np.zeros((0, 2))).is_empty()


@given(arrays(dtype=np.int64, shape=st.tuples(st.integers(1, 4), st.integers(1, 4), st.integers(1, 3)),
              elements=st.integers(-1000, 1000)))
def test_dense_round_trip(array):
    tensor = from_numpy(array)
    assert tensor.dimensions() == list(reversed(array.shape))
    np.testing.assert_array_equal(to_torch(tensor).numpy(), array)
