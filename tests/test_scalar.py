import pytest

from tensormap import IllegalStateError, InvalidArgumentError, Scalar, Tensor, Vector


def test_of_and_get():
    scalar = Scalar.of(6)
    assert scalar.get() == 6
    assert scalar.value == 6
    assert scalar.order == 0
    assert scalar == Tensor.of([6])


def test_set_replaces_value():
    scalar = Scalar.of("123")
    scalar.set("456")
    assert scalar.get() == "456"
    with pytest.raises(InvalidArgumentError):
        scalar.set("456", 0)


def test_empty_scalar():
    scalar = Scalar.empty()
    assert scalar.is_empty()
    assert scalar.get() is None
    scalar.set(1)
    assert scalar.get() == 1


def test_wrong_order_rejected():
    with pytest.raises(IllegalStateError):
        Scalar(Tensor.of([1, 2]))


def test_rendering():
    assert str(Scalar.of("abc")) == "abc"
    assert repr(Scalar.of(5)) == "Scalar(5)"


def test_extrude_and_compute():
    assert Scalar.of(2).extrude(3) == Vector.of(2, 2, 2)
    assert Scalar.of(2).compute(lambda value: value * 5) == Scalar.of(10)
    assert Scalar.of(2) != Scalar.of(3)
