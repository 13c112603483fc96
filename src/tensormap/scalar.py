"""Order-0 view: a tensor holding at most one element at the empty index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar, TYPE_CHECKING

from .index import Index
from .tensor import Tensor
from .view import TensorView

if TYPE_CHECKING:  # pragma: no cover
    from .vector import Vector

__all__ = ["Scalar"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Scalar(TensorView[T]):
    ORDER: ClassVar[int] = 0

    @classmethod
    def of(cls, value: T) -> "Scalar[T]":
        return cls(Tensor.from_mapping({Index(): value}))

    @classmethod
    def empty(cls) -> "Scalar[Any]":
        return cls(Tensor.empty())

    @property
    def value(self) -> T | None:
        """Shorthand for :meth:`get`."""
        return self.tensor.get()

    def extrude(self, size: int) -> "Vector[T]":
        """Repeat the element *size* times along a new axis."""
        from .vector import Vector

        return Vector(self.tensor.extrude(size))
