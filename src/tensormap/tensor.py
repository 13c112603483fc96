"""Generic multi-dimensional sparse tensor.

A :class:`Tensor` is a mapping from :class:`~tensormap.index.Index` to an
arbitrary element.  Nothing is pre-allocated: the shape is derived from the
populated keys (the *bounding box*), so it grows and shrinks as entries are
set and removed.  A coordinate inside the bounding box without a stored value
is a *sparse hole*; it is absent from :meth:`Tensor.elements` but present in
:meth:`Tensor.indices` and in every text rendering.

Only a handful of methods mutate the tensor in place (``set``, ``remove``,
``backfill`` and friends).  Every transform returns a **new** tensor that owns
its own dict, so results never alias the source storage.

Order-typed views (:class:`~tensormap.scalar.Scalar`,
:class:`~tensormap.vector.Vector`, :class:`~tensormap.matrix.Matrix`) wrap a
tensor without copying it; obtain them via :meth:`Tensor.to_scalar` and
friends.
"""

from __future__ import annotations

from functools import reduce as _fold
from operator import itemgetter
from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, TypeVar, TYPE_CHECKING
import re
import warnings

from . import config
from .errors import IndexCollisionWarning, InvalidArgumentError, OutOfBoundsError
from .index import Index

if TYPE_CHECKING:  # pragma: no cover
    import numpy as np
    import torch

    from .matrix import Matrix
    from .scalar import Scalar
    from .vector import Vector

__all__ = ["Tensor"]

T = TypeVar("T")
S = TypeVar("S")
U = TypeVar("U")

# delineators written as " x " keep their surrounding blanks when repeated
_PADDED_DELINEATOR = re.compile(r" . ")


# -----------------------------------------------------------------------------
# Helper utilities
# -----------------------------------------------------------------------------

def _as_tensor(candidate: Any) -> "Tensor":
    """Accept a tensor or any order-typed view wrapping one."""
    if isinstance(candidate, Tensor):
        return candidate
    wrapped = getattr(candidate, "tensor", None)
    if isinstance(wrapped, Tensor):
        return wrapped
    raise InvalidArgumentError(f"Expected a Tensor, got {type(candidate).__name__}")


def _fold_group(values: list, identity, accumulator, combiner, chunk_size: int | None):
    if combiner is None or chunk_size is None:
        return _fold(accumulator, values, identity)
    partials = [
        _fold(accumulator, values[start:start + chunk_size], identity)
        for start in range(0, len(values), chunk_size)
    ]
    return _fold(combiner, partials)


# -----------------------------------------------------------------------------
# Main class
# -----------------------------------------------------------------------------


class Tensor(Generic[T]):
    """Sparse map from coordinates to elements of type ``T``.

    Invariant: once non-empty, every key has the same order.  The order of an
    empty tensor is reported as 0.
    """

    __slots__ = ("_map",)

    def __init__(self, mapping: Mapping[Any, T] | None = None):
        self._map: dict[Index, T] = {}
        for key, value in (mapping or {}).items():
            self.set(value, key)

    @classmethod
    def _adopt(cls, mapping: dict[Index, S]) -> "Tensor[S]":
        """Wrap an already validated dict without copying it."""
        tensor = Tensor.__new__(Tensor)
        tensor._map = mapping
        return tensor

    # ------------------------------------------------------------------
    # Smart constructors
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Tensor[Any]":
        return cls._adopt({})

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, T]) -> "Tensor[T]":
        """Build a tensor from ``{index_or_tuple: value}`` pairs."""
        return cls(mapping)

    @classmethod
    def fill(cls, value: T, *dimensions: int) -> "Tensor[T]":
        """Tensor with *value* at every coordinate of the given shape.

        A zero-sized dimension is clamped to one element and no dimensions at
        all yields a scalar.
        """
        bound = Index.of(*dimensions).compute(lambda size: max(size - 1, 0))
        return cls.generate_bounded(lambda _: value, bound)

    @classmethod
    def generate(cls, generator: Callable[[Index], T], *dimensions: int) -> "Tensor[T]":
        """Tensor whose element at each index of the given shape is ``generator(index)``."""
        if not callable(generator):
            raise InvalidArgumentError("Generator function must be callable")
        bound = Index.of(*dimensions).compute(lambda size: size - 1)
        return cls.generate_bounded(generator, bound)

    @classmethod
    def generate_bounded(cls, generator: Callable[[Index], T], max_index: Index) -> "Tensor[T]":
        """Like :meth:`generate` but bounded by an inclusive maximum index."""
        if not callable(generator):
            raise InvalidArgumentError("Generator function must be callable")
        max_index = Index.of(max_index)
        if max_index.is_empty():
            return cls._adopt({Index(): generator(Index())})
        return cls._adopt({index: generator(index) for index in Index.range(max_index)})

    @classmethod
    def identity(cls, max_index: Index) -> "Tensor[int]":
        """1 on the main diagonal, 0 elsewhere, up to *max_index* inclusive."""
        return cls.generate_bounded(lambda index: 1 if index.is_identity() else 0, max_index)

    @classmethod
    def of(cls, data: Any) -> "Tensor[Any]":
        """Build a tensor from nested lists/tuples or from a numpy/torch array.

        For nested sequences the innermost level becomes axis 0 and each outer
        level adds one axis, so ``Tensor.of([[1, 2], [3, 4], [5, 6]])`` has
        dimensions ``[2, 3]``.  A flat sequence with a single element yields a
        scalar, a longer one a vector.
        """
        from .torch_interop import from_numpy, from_torch, is_array, is_torch_tensor

        if is_torch_tensor(data):
            return from_torch(data)
        if is_array(data):
            return from_numpy(data)
        if not isinstance(data, (list, tuple)):
            raise InvalidArgumentError(f"Cannot build a tensor from {type(data).__name__}")
        if not data:
            return cls.empty()
        nested = [isinstance(item, (list, tuple)) or is_array(item) for item in data]
        if all(nested):
            return cls.combine([cls.of(item) for item in data])
        if any(nested):
            raise InvalidArgumentError("Cannot mix nested sequences and elements on one level")
        if len(data) == 1:
            return cls._adopt({Index(): data[0]})
        return cls._adopt({Index((position,)): item for position, item in enumerate(data)})

    @classmethod
    def combine(cls, tensors: Iterable[Any]) -> "Tensor[Any]":
        """Stack equal-order tensors along a new trailing axis.

        Tensor ``i`` becomes slice ``i`` of the result, so the result has order
        one higher than its inputs; an empty input list yields an empty tensor.
        """
        slices = [_as_tensor(tensor) for tensor in tensors]
        orders = {tensor.order for tensor in slices if not tensor.is_empty()}
        if len(orders) > 1:
            raise InvalidArgumentError(f"Cannot combine tensors of different orders {sorted(orders)}")
        combined: dict[Index, Any] = {}
        for position, tensor in enumerate(slices):
            for index, value in tensor._map.items():
                combined[index.extrude(position)] = value
        return cls._adopt(combined)

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def get(self, *coordinates: int | Index) -> T | None:
        """Value at the given coordinates (or single :class:`Index`), ``None`` if absent."""
        return self._map.get(Index.of(*coordinates))

    def get_or_default(self, default: T, *coordinates: int | Index) -> T:
        return self._map.get(Index.of(*coordinates), default)

    def has(self, *coordinates: int | Index) -> bool:
        """True when a value is stored at the coordinates."""
        return Index.of(*coordinates) in self._map

    def _checked_index(self, coordinates: tuple) -> Index:
        index = Index.of(*coordinates)
        if self._map and self.order != index.order:
            raise InvalidArgumentError(
                f"Index order [{index.order}] should be equal to tensor order [{self.order}]"
            )
        return index

    def set(self, value: T, *coordinates: int | Index):
        """Store *value*; the coordinate order must match a non-empty tensor."""
        self._map[self._checked_index(coordinates)] = value

    def set_if_absent(self, value: T, *coordinates: int | Index):
        self._map.setdefault(self._checked_index(coordinates), value)

    def remove(self, *coordinates: int | Index) -> T | None:
        """Drop the entry at the coordinates and return it (no-op when absent)."""
        return self._map.pop(Index.of(*coordinates), None)

    def _reindex(self, fn: Callable[[Index], Index], updates: Mapping[Index, T] | None = None):
        """Re-key every entry in place, then apply *updates*.

        The new dict is fully built and validated before the owned one is
        touched, so a failure leaves the tensor unchanged.
        """
        rekeyed = {fn(index): value for index, value in self._map.items()}
        rekeyed.update(updates or {})
        if len({index.order for index in rekeyed}) > 1:
            raise InvalidArgumentError("Index order should be equal to tensor order")
        self._map.clear()
        self._map.update(rekeyed)

    @staticmethod
    def _key(key: Any) -> Index:
        if isinstance(key, tuple):
            return Index.of(*key)
        return Index.of(key)

    def __getitem__(self, key: Any) -> T | None:
        return self._map.get(self._key(key))

    def __setitem__(self, key: Any, value: T):
        self.set(value, self._key(key))

    def __delitem__(self, key: Any):
        self._map.pop(self._key(key), None)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def order(self) -> int:
        """Number of axes; 0 for an empty tensor."""
        return next(iter(self._map)).order if self._map else 0

    def size(self, axis: int) -> int:
        """Bounding-box size along *axis*; 0 beyond the order."""
        if axis < 0:
            raise OutOfBoundsError(f"Axis [{axis}] cannot be negative")
        return max((index.coordinates[axis] for index in self._map if index.order > axis), default=-1) + 1

    def dimensions(self) -> list[int]:
        """Bounding-box size of every axis."""
        if not self._map:
            return []
        return [max(column) + 1 for column in zip(*(index.coordinates for index in self._map))]

    def indices(self) -> list[Index]:
        """Every coordinate of the bounding box, holes included, in index order."""
        return Index.range(Index(max(size - 1, 0) for size in self.dimensions()))

    def keys(self) -> list[Index]:
        """Stored coordinates in index order."""
        return sorted(self._map)

    def items(self) -> list[tuple[Index, T]]:
        """Stored ``(index, value)`` pairs in index order."""
        return sorted(self._map.items(), key=itemgetter(0))

    def elements(self) -> list[T]:
        """Stored values in index order."""
        return [value for _, value in self.items()]

    def contains(self, value: Any) -> bool:
        return value in self._map.values()

    def is_empty(self) -> bool:
        return not self._map

    def is_scalar(self) -> bool:
        return self.order == 0

    def is_vector(self) -> bool:
        return self.order == 1

    def is_matrix(self) -> bool:
        return self.order == 2

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[Index]:
        return iter(self.keys())

    # ------------------------------------------------------------------
    # Value transforms
    # ------------------------------------------------------------------

    def compute(self, fn: Callable[[T], S]) -> "Tensor[S]":
        return Tensor._adopt({index: fn(value) for index, value in self._map.items()})

    def compute_with_indices(self, fn: Callable[[Index, T], S]) -> "Tensor[S]":
        return Tensor._adopt({index: fn(index, value) for index, value in self._map.items()})

    def compute_and_update_indices(
        self, fn: Callable[[Index, T], tuple[Any, S] | None]
    ) -> "Tensor[S]":
        """Map every entry to a new ``(index, value)`` pair.

        Entries mapped to ``None`` are dropped.  Sources are visited in index
        order and the last write wins when several land on one coordinate, so
        the entry with the highest source index survives.
        """
        updated: dict[Index, S] = {}
        collisions = 0
        for index, value in self.items():
            result = fn(index, value)
            if result is None:
                continue
            key, new_value = result
            key = Index.of(key)
            if updated and next(iter(updated)).order != key.order:
                raise InvalidArgumentError("Computed indices must all have the same order")
            if key in updated:
                collisions += 1
            updated[key] = new_value
        if collisions and config.WARN_ON_INDEX_COLLISION:
            warnings.warn(
                f"{collisions} entries were re-indexed onto an occupied coordinate; "
                "the entry with the highest source index was kept.",
                IndexCollisionWarning,
                stacklevel=2,
            )
        return Tensor._adopt(updated)

    # ------------------------------------------------------------------
    # Structural transforms
    # ------------------------------------------------------------------

    def transpose(self) -> "Tensor[T]":
        """Reverse the axis order of every key."""
        return Tensor._adopt({index.transpose(): value for index, value in self._map.items()})

    def reorder(self, *mapping: int) -> "Tensor[T]":
        """Permute axes: new axis ``d`` takes old axis ``mapping[d]``."""
        if not self._map:
            return Tensor.empty()
        return Tensor._adopt({index.reorder(*mapping): value for index, value in self._map.items()})

    def slice(self, constraints: Mapping[int, int]) -> "Tensor[T]":
        """Keep entries matching every ``axis -> coordinate`` constraint and drop those axes."""
        axes = tuple(constraints)
        return Tensor._adopt({
            index.constrain(*axes): value
            for index, value in self._map.items()
            if index.has_coordinates(constraints)
        })

    def extract(self, min_index: Index, max_index: Index) -> "Tensor[T]":
        """Sub-tensor within ``[min_index, max_index]`` inclusive, re-based at the origin."""
        min_index, max_index = Index.of(min_index), Index.of(max_index)
        if min_index.order != max_index.order:
            raise InvalidArgumentError("Min and max must have the same number of dimensions.")
        if not min_index.is_within_bounds(max_index):
            raise InvalidArgumentError("Min must be bounded by max")
        if self._map and self.order != min_index.order:
            raise InvalidArgumentError("Bounds must have the same order as the tensor")
        return Tensor._adopt({
            index.subtract(min_index): value
            for index, value in self._map.items()
            if index.is_within_bounds(min_index, max_index)
        })

    def extrude(self, size: int) -> "Tensor[T]":
        """Repeat every entry *size* times along one new trailing axis."""
        if size < 0:
            raise InvalidArgumentError("Extrusion size cannot be negative")
        return Tensor._adopt({
            index.extrude(coordinate): value
            for index, value in self._map.items()
            for coordinate in range(size)
        })

    # ------------------------------------------------------------------
    # Reduction & element-wise combination
    # ------------------------------------------------------------------

    def reduce(
        self,
        identity: S,
        accumulator: Callable[[S, T], S],
        axis: int,
        combiner: Callable[[S, S], S] | None = None,
    ) -> "Tensor[S]":
        """Fold values along *axis*, producing a tensor of order one lower.

        Entries are grouped by their index with *axis* removed and each group
        is folded in ascending order of the removed coordinate, seeded with
        *identity*.  When *combiner* is given and ``config.REDUCE_CHUNK_SIZE``
        is set, groups are folded in chunks whose partial results are merged
        by *combiner*; it must be associative.
        """
        if not 0 <= axis < self.order:
            raise OutOfBoundsError(f"Axis [{axis}] is outside tensor order [{self.order}]")
        if combiner is not None and not callable(combiner):
            raise InvalidArgumentError("Combiner must be callable")
        groups: dict[Index, list[T]] = {}
        for index, value in self.items():
            groups.setdefault(index.constrain(axis), []).append(value)
        chunk_size = config.REDUCE_CHUNK_SIZE
        return Tensor._adopt({
            key: _fold_group(values, identity, accumulator, combiner, chunk_size)
            for key, values in groups.items()
        })

    def piecewise(self, fn: Callable[[T, U], S], other: Any) -> "Tensor[S]":
        """Apply *fn* to the values of both tensors at each shared coordinate.

        Dimensions must match exactly.  Coordinates stored in only one operand
        are skipped.
        """
        if other is None:
            raise InvalidArgumentError("Tensor dimensions must match")
        other = _as_tensor(other)
        if self.dimensions() != other.dimensions():
            raise InvalidArgumentError(
                f"Tensor dimensions must match: {self.dimensions()} != {other.dimensions()}"
            )
        return Tensor._adopt({
            index: fn(value, other._map[index])
            for index, value in self._map.items()
            if index in other._map
        })

    def mask(self, mask: Any, masked_value: T) -> "Tensor[T]":
        """Keep values where *mask* is true, substitute *masked_value* elsewhere."""
        if mask is None:
            raise InvalidArgumentError("Mask must be a tensor")
        return self.piecewise(lambda value, keep: value if keep else masked_value, mask)

    def expect(self, type_: type) -> "Tensor[Any]":
        """Assert every element is an instance of *type_*."""
        if not all(isinstance(value, type_) for value in self._map.values()):
            raise InvalidArgumentError(f"Tensor cannot be expected to be of type {type_.__name__}")
        return self

    # ------------------------------------------------------------------
    # In-place presentation helpers
    # ------------------------------------------------------------------

    def backfill(self, value: T) -> "Tensor[T]":
        """Store *value* at every hole of the bounding box; existing entries stay."""
        for index in self.indices():
            self._map.setdefault(index, value)
        return self

    def flatten(self, default: T) -> "Vector[T]":
        """Backfilled copy of the elements laid out as a vector."""
        from .vector import Vector

        return Vector.of(*self.copy().backfill(default).elements())

    # ------------------------------------------------------------------
    # String representation
    # ------------------------------------------------------------------

    def format(
        self,
        open_: str,
        close: str,
        separator: str,
        delineator: str,
        default: str,
        repeat_delineator: bool,
    ) -> str:
        """Render every bounding-box coordinate in index order.

        Parameters
        ----------
        open_, close:
            Bracketing symbols, repeated once per nesting level.
        separator:
            Placed between neighbours along axis 0.
        delineator:
            Placed where a higher axis changes.  With *repeat_delineator* it is
            repeated once per crossed axis (``"|"`` for axis 1, ``"||"`` for
            axis 2, ...).
        default:
            Text for sparse holes.
        """
        if not self._map:
            return ""
        if self.order == 0:
            return str(self._map[Index()])

        ordered = self.indices()
        depth = ordered[-1].highest_order_difference(ordered[0])
        last_column = ordered[-1].get(0)
        padding = " " if _PADDED_DELINEATOR.fullmatch(delineator) else ""
        marker = delineator.strip() or delineator

        parts = [open_ * depth]
        previous: Index | None = None
        for current in ordered:
            if previous is not None:
                if previous.get(0) != last_column:
                    parts.append(separator)
                crossed = previous.highest_order_difference(current) - 1
                if crossed > 0:
                    boundary = marker * crossed if repeat_delineator else delineator
                    parts.append(close * crossed + padding + boundary + padding + open_ * crossed)
            value = self._map.get(current)
            parts.append(default if value is None else str(value))
            previous = current
        parts.append(close * depth)
        return "".join(parts)

    def to_string(self, default: str | None = None) -> str:
        """Canonical form: ``"1 3 5 | 2 4 6"``; holes render as *default*."""
        if default is None:
            default = config.DEFAULT_PLACEHOLDER
        return self.format("", "", " ", " | ", default, True)

    def to_formatted_string(self, default: str = ".") -> str:
        """Tab separated rows, one per line, blank line between matrices."""
        return self.format("", "", "\t", "\n", default, True)

    def _bracketed(self) -> str:
        return self.format("[", "]", ",", "", config.DEFAULT_PLACEHOLDER, False)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Tensor({self._bracketed()})"

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def copy(self) -> "Tensor[T]":
        """Independent tensor holding the same entries."""
        return Tensor._adopt(dict(self._map))

    def to_scalar(self) -> "Scalar[T]":
        from .scalar import Scalar

        return Scalar(self)

    def to_vector(self) -> "Vector[T]":
        from .vector import Vector

        return Vector(self)

    def to_matrix(self) -> "Matrix[T]":
        from .matrix import Matrix

        return Matrix(self)

    def to_torch(self, default: Any = 0, dtype: "torch.dtype | None" = None) -> "torch.Tensor":
        from .torch_interop import to_torch

        return to_torch(self, default=default, dtype=dtype)

    def to_numpy(self, default: Any = 0, dtype: Any = None) -> "np.ndarray":
        from .torch_interop import to_numpy

        return to_numpy(self, default=default, dtype=dtype)

    @classmethod
    def from_torch(cls, source: "torch.Tensor") -> "Tensor[Any]":
        from .torch_interop import from_torch

        return from_torch(source)

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def __eq__(self, other: object):  # type: ignore[override]
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._map == other._map

    __hash__ = None  # type: ignore[assignment]
