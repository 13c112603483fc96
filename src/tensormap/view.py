"""Shared machinery for the order-typed views.

A view is a frozen wrapper around a :class:`~tensormap.tensor.Tensor`.  It
holds a reference, never a copy, so writes through the view are visible in the
tensor and vice versa.  The order is checked once at wrap time and again on
every coordinate written through the view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, Iterator, TypeVar

from .errors import IllegalStateError, InvalidArgumentError
from .index import Index
from .tensor import Tensor

__all__ = ["TensorView"]

T = TypeVar("T")
V = TypeVar("V", bound="TensorView")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class TensorView(Generic[T]):
    tensor: Tensor[T]

    ORDER: ClassVar[int] = -1

    def __post_init__(self):
        if not isinstance(self.tensor, Tensor):
            raise InvalidArgumentError(
                f"{type(self).__name__} wraps a Tensor, got {type(self.tensor).__name__}"
            )
        if not self.tensor.is_empty() and self.tensor.order != self.ORDER:
            raise IllegalStateError(
                f"Tensor must have an order of {self.ORDER} to be converted to a "
                f"{type(self).__name__}, got order {self.tensor.order}"
            )

    def _checked(self, coordinates: tuple) -> Index:
        index = Index.of(*coordinates)
        if index.order != self.ORDER:
            raise InvalidArgumentError(
                f"{type(self).__name__} elements are addressed by {self.ORDER} coordinates, "
                f"got {index.order}"
            )
        return index

    # ------------------------------------------------------------------
    # Delegated read API
    # ------------------------------------------------------------------

    def get(self, *coordinates: int | Index) -> T | None:
        return self.tensor.get(*coordinates)

    def get_or_default(self, default: T, *coordinates: int | Index) -> T:
        return self.tensor.get_or_default(default, *coordinates)

    def has(self, *coordinates: int | Index) -> bool:
        return self.tensor.has(*coordinates)

    @property
    def order(self) -> int:
        return self.tensor.order

    def size(self, axis: int) -> int:
        return self.tensor.size(axis)

    def dimensions(self) -> list[int]:
        return self.tensor.dimensions()

    def indices(self) -> list[Index]:
        return self.tensor.indices()

    def keys(self) -> list[Index]:
        return self.tensor.keys()

    def items(self) -> list[tuple[Index, T]]:
        return self.tensor.items()

    def elements(self) -> list[T]:
        return self.tensor.elements()

    def contains(self, value: Any) -> bool:
        return self.tensor.contains(value)

    def is_empty(self) -> bool:
        return self.tensor.is_empty()

    def __len__(self) -> int:
        return len(self.tensor)

    def __iter__(self) -> Iterator[Index]:
        return iter(self.tensor)

    def __getitem__(self, key: Any) -> T | None:
        return self.tensor[key]

    # ------------------------------------------------------------------
    # Order-checked mutation
    # ------------------------------------------------------------------

    def set(self, value: T, *coordinates: int | Index):
        self.tensor.set(value, self._checked(coordinates))

    def set_if_absent(self, value: T, *coordinates: int | Index):
        self.tensor.set_if_absent(value, self._checked(coordinates))

    def remove(self, *coordinates: int | Index) -> T | None:
        return self.tensor.remove(self._checked(coordinates))

    def __setitem__(self, key: Any, value: T):
        self.set(value, *(key if isinstance(key, tuple) else (key,)))

    def __delitem__(self, key: Any):
        self.remove(*(key if isinstance(key, tuple) else (key,)))

    def backfill(self: V, value: T) -> V:
        self.tensor.backfill(value)
        return self

    # ------------------------------------------------------------------
    # Order-preserving transforms
    # ------------------------------------------------------------------

    def compute(self: V, fn: Callable[[T], Any]) -> V:
        return type(self)(self.tensor.compute(fn))

    def compute_with_indices(self: V, fn: Callable[[Index, T], Any]) -> V:
        return type(self)(self.tensor.compute_with_indices(fn))

    def compute_and_update_indices(self, fn: Callable[[Index, T], Any]) -> Tensor[Any]:
        """Re-indexing may change the order, so the result is a plain tensor."""
        return self.tensor.compute_and_update_indices(fn)

    def transpose(self: V) -> V:
        return type(self)(self.tensor.transpose())

    def mask(self: V, mask: Any, masked_value: T) -> V:
        return type(self)(self.tensor.mask(mask, masked_value))

    def piecewise(self: V, fn: Callable[[T, Any], Any], other: Any) -> V:
        return type(self)(self.tensor.piecewise(fn, other))

    def slice(self, constraints: dict[int, int]) -> Tensor[T]:
        return self.tensor.slice(constraints)

    def extract(self: V, min_index: Index, max_index: Index) -> V:
        return type(self)(self.tensor.extract(min_index, max_index))

    def expect(self: V, type_: type) -> V:
        self.tensor.expect(type_)
        return self

    def flatten(self, default: T):
        return self.tensor.flatten(default)

    def copy(self: V) -> V:
        return type(self)(self.tensor.copy())

    def to_tensor(self) -> Tensor[T]:
        """The wrapped tensor itself (no copy)."""
        return self.tensor

    def to_torch(self, default: Any = 0, dtype: Any = None):
        return self.tensor.to_torch(default=default, dtype=dtype)

    # ------------------------------------------------------------------
    # Rendering & equality
    # ------------------------------------------------------------------

    def format(self, open_: str, close: str, separator: str, delineator: str,
               default: str, repeat_delineator: bool) -> str:
        return self.tensor.format(open_, close, separator, delineator, default, repeat_delineator)

    def to_string(self, default: str | None = None) -> str:
        return self.tensor.to_string(default)

    def to_formatted_string(self, default: str = ".") -> str:
        return self.tensor.to_formatted_string(default)

    def __str__(self) -> str:
        return self.tensor.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tensor._bracketed()})"

    def __eq__(self, other: object):  # type: ignore[override]
        if isinstance(other, TensorView):
            other = other.tensor
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.tensor == other

    __hash__ = None  # type: ignore[assignment]
