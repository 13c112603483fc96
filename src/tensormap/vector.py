"""Order-1 view with stack/queue style helpers.

``push``/``pop`` work at the high end of the vector and ``unshift``/``shift``
at the low end.  Note the asymmetry kept from the sparse model: ``shift``
removes the lowest stored entry but does **not** renumber the remaining ones,
whereas ``unshift`` moves every entry up by one before writing coordinate 0.

  ```python
  v = Vector.of(1, 2, 3)
  v.shift()       # 1
  str(v)          # "  2 3"
  v.unshift(0)
  str(v)          # "0   2 3"
  ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, TypeVar, TYPE_CHECKING

from .errors import InvalidArgumentError
from .index import Index
from .scalar import Scalar
from .tensor import Tensor
from .view import TensorView

if TYPE_CHECKING:  # pragma: no cover
    from .matrix import Matrix

__all__ = ["Vector"]

T = TypeVar("T")
S = TypeVar("S")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Vector(TensorView[T]):
    ORDER: ClassVar[int] = 1

    # ------------------------------------------------------------------
    # Smart constructors
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, *elements: T) -> "Vector[T]":
        return cls(Tensor.from_mapping({Index((position,)): value for position, value in enumerate(elements)}))

    @classmethod
    def empty(cls) -> "Vector[Any]":
        return cls(Tensor.empty())

    @classmethod
    def fill(cls, value: T, size: int) -> "Vector[T]":
        if size < 0:
            raise InvalidArgumentError("Vector size cannot be negative")
        return cls(Tensor.fill(value, size))

    # ------------------------------------------------------------------
    # Stack / queue operations
    # ------------------------------------------------------------------

    def push(self, value: T):
        """Append *value* just past the highest stored coordinate."""
        self.tensor.set(value, self.size(0))

    def pop(self) -> T | None:
        """Remove and return the entry with the highest coordinate."""
        if self.is_empty():
            return None
        return self.tensor.remove(self.tensor.keys()[-1])

    def shift(self) -> T | None:
        """Remove and return the entry with the lowest coordinate."""
        if self.is_empty():
            return None
        return self.tensor.remove(self.tensor.keys()[0])

    def unshift(self, value: T):
        """Move every entry up by one and write *value* at coordinate 0."""
        self.tensor._reindex(lambda index: index.shift(1), {Index((0,)): value})

    # ------------------------------------------------------------------
    # Order-changing transforms
    # ------------------------------------------------------------------

    def reduce(
        self,
        identity: S,
        accumulator: Callable[[S, T], S],
        axis: int = 0,
        combiner: Callable[[S, S], S] | None = None,
    ) -> Scalar[S]:
        return Scalar(self.tensor.reduce(identity, accumulator, axis, combiner))

    def extrude(self, size: int) -> "Matrix[T]":
        from .matrix import Matrix

        return Matrix(self.tensor.extrude(size))

    def to_list(self) -> list[T]:
        """Stored values in coordinate order (holes skipped)."""
        return self.elements()
