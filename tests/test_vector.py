"""Tests for the order-1 view and its stack/queue helpers."""

from __future__ import annotations

import dataclasses

import pytest

from tensormap import (
    IllegalStateError,
    InvalidArgumentError,
    Matrix,
    Tensor,
    Vector,
)


def _sparse(*removed: int) -> Vector:
    vector = Vector.of(1, 2, 3, 10, 20, 30)
    for coordinate in removed:
        vector.remove(coordinate)
    return vector


# -----------------------------------------------------------------------------
# Construction
# -----------------------------------------------------------------------------

def test_of_and_fill():
    assert Vector.of(1, 2, 3).elements() == [1, 2, 3]
    assert Vector.of(1).order == 1
    assert Vector.fill(0, 3).to_list() == [0, 0, 0]
    assert Vector.empty().is_empty()
    with pytest.raises(InvalidArgumentError):
        Vector.fill(0, -1)


def test_wrap_checks_order():
    with pytest.raises(IllegalStateError):
        Vector(Tensor.of([[1, 2], [3, 4]]))
    with pytest.raises(InvalidArgumentError):
        Vector([1, 2])  # type: ignore[arg-type]


def test_view_is_frozen():
    vector = Vector.of(1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        vector.tensor = Tensor.empty()  # type: ignore[misc]


def test_set_checks_coordinate_count():
    vector = Vector.of(1, 2)
    vector[1] = 5
    assert vector.get(1) == 5
    with pytest.raises(InvalidArgumentError):
        vector.set(3, 0, 0)
    del vector[1]
    assert vector.elements() == [1]


# -----------------------------------------------------------------------------
# Stack / queue operations
# -----------------------------------------------------------------------------

def test_push_on_sparse_vector():
    vector = _sparse(0, 2, 3)
    vector.push(100)
    assert repr(vector) == "Vector([ ,2, , ,20,30,100])"


def test_push_on_empty_vector():
    vector = Vector.empty()
    vector.push("a")
    assert vector.get(0) == "a"


def test_pop():
    vector = _sparse(0, 2, 4)
    assert vector.pop() == 30
    assert repr(vector) == "Vector([ ,2, ,10])"
    assert Vector.empty().pop() is None


def test_shift_does_not_renumber():
    vector = Vector.of(1, 2, 3, 10, 20, 30)
    assert vector.shift() == 1
    assert repr(vector) == "Vector([ ,2,3,10,20,30])"

    sparse = _sparse(0, 2, 4)
    assert sparse.shift() == 2
    assert repr(sparse) == "Vector([ , , ,10, ,30])"

    assert Vector.empty().shift() is None


def test_shift_leaves_leading_holes():
    vector = _sparse(0, 2, 3)
    assert vector.shift() == 2
    assert str(vector) == "        20 30"


def test_unshift_moves_every_entry_up():
    vector = _sparse(0, 2, 3)
    vector.unshift(100)
    assert repr(vector) == "Vector([100, ,2, , ,20,30])"

    empty = Vector.empty()
    empty.unshift(1)
    assert empty == Vector.of(1)


# -----------------------------------------------------------------------------
# Transforms
# -----------------------------------------------------------------------------

def test_transforms_keep_view_type():
    vector = Vector.of(1, 2, 3)
    assert isinstance(vector.compute(lambda value: value + 1), Vector)
    assert vector.transpose() == vector
    assert isinstance(vector.extrude(2), Matrix)
    assert vector.extrude(2).dimensions() == [3, 2]


def test_equality_with_tensor_is_symmetric():
    assert Vector.of(1, 2) == Tensor.of([1, 2])
    assert Tensor.of([1, 2]) == Vector.of(1, 2)
    assert Vector.of(1, 2) != Vector.of(2, 1)


def test_backfill_returns_view():
    vector = _sparse(1)
    assert vector.backfill(0) is vector
    assert vector.to_list() == [1, 0, 3, 10, 20, 30]
