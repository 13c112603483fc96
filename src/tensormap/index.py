"""Immutable integer coordinates for sparse tensors.

An :class:`Index` is an ordered tuple of non-negative integers.  Its *order* is
the number of axes.  Indices of equal order form a total order in which the
**last** axis is the most significant one, so sorting a list of indices walks
a tensor with axis 0 varying fastest:

  ```python
  sorted([Index.of(1, 0), Index.of(0, 1), Index.of(0, 0)])
  # [(0, 0), (1, 0), (0, 1)]
  ```

That ordering drives element enumeration, `Tensor.backfill` and every text
renderer, which is why the comparison operators refuse indices of different
order instead of silently falling back to tuple comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterable, Mapping
import math
import operator

from .errors import InvalidArgumentError, OutOfBoundsError

__all__ = ["Index"]


def _as_coordinates(values: Iterable[int]) -> tuple[int, ...]:
    try:
        coordinates = tuple(operator.index(value) for value in values)
    except TypeError as exc:
        raise InvalidArgumentError(f"Coordinates must be integers: {exc}") from exc
    if any(coordinate < 0 for coordinate in coordinates):
        raise InvalidArgumentError("Coordinates cannot be negative")
    return coordinates


@dataclass(frozen=True, slots=True, repr=False)
class Index:
    """Dimension-invariant coordinate.

    The length of *coordinates* is the order of the index.  Construction
    validates every coordinate so an existing ``Index`` is always well formed.
    """

    coordinates: tuple[int, ...] = ()

    # the dataclass is frozen, normalising must go through object.__setattr__
    def __post_init__(self):
        object.__setattr__(self, "coordinates", _as_coordinates(self.coordinates))

    # ------------------------------------------------------------------
    # Smart constructors
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, *coordinates: int | Iterable[int]) -> "Index":
        """Build an index from varargs or from a single iterable.

        ``Index.of(1, 2)`` and ``Index.of([1, 2])`` are equivalent.
        """
        if len(coordinates) == 1 and not isinstance(coordinates[0], int):
            candidate = coordinates[0]
            if isinstance(candidate, Index):
                return candidate
            if isinstance(candidate, Iterable):
                return cls(tuple(candidate))
        return cls(coordinates)  # type: ignore[arg-type]

    @classmethod
    def range(cls, max_index: "Index | None") -> list["Index"]:
        """Enumerate every index between the origin and *max_index* inclusive.

        Per-axis ranges are cross-joined with :meth:`combine` and the result is
        sorted, so axis 0 varies fastest and the highest axis slowest.  A
        zero-order bound yields an empty list rather than the single
        zero-length index.
        """
        if max_index is None or max_index.is_empty():
            return []
        per_axis = [
            [cls((coordinate,)) for coordinate in range(bound + 1)]
            for bound in max_index.coordinates
        ]

        def cross_join(first: list[Index], second: list[Index]) -> list[Index]:
            return [a.combine(b) for a in first for b in second]

        return sorted(reduce(cross_join, per_axis))

    # ------------------------------------------------------------------
    # Basic accessors
    # ------------------------------------------------------------------

    @property
    def order(self) -> int:
        """Number of axes."""
        return len(self.coordinates)

    def get(self, axis: int) -> int:
        if not 0 <= axis < self.order:
            raise OutOfBoundsError(f"Given axis [{axis}] is outside Index order [{self.order}]")
        return self.coordinates[axis]

    def is_empty(self) -> bool:
        return not self.coordinates

    def is_zero(self) -> bool:
        """True when every coordinate is 0 (vacuously true for order 0)."""
        return all(coordinate == 0 for coordinate in self.coordinates)

    def is_identity(self) -> bool:
        """True when all coordinates are equal, i.e. the index lies on the main diagonal."""
        return len(set(self.coordinates)) <= 1

    def is_similar(self, other: "Index | None") -> bool:
        """True when *other* has the same order."""
        return other is not None and other.order == self.order

    def _assert_similar(self, other: "Index | None"):
        if not self.is_similar(other):
            raise InvalidArgumentError("Indices must have the same order")

    def has_coordinate(self, axis: int, coordinate: int) -> bool:
        return 0 <= axis < self.order and self.coordinates[axis] == coordinate

    def has_coordinates(self, constraints: Mapping[int, int]) -> bool:
        """True when every ``axis -> coordinate`` constraint holds."""
        return all(self.has_coordinate(axis, coordinate) for axis, coordinate in constraints.items())

    def is_within_bounds(self, lower: "Index", upper: "Index | None" = None) -> bool:
        """Inclusive per-axis bound check.

        With a single argument the index is tested against ``[origin, lower]``;
        with two, against ``[lower, upper]``.
        """
        if upper is None:
            lower, upper = Index((0,) * self.order), lower
        self._assert_similar(lower)
        self._assert_similar(upper)
        return all(
            lo <= coordinate <= hi
            for lo, coordinate, hi in zip(lower.coordinates, self.coordinates, upper.coordinates)
        )

    # ------------------------------------------------------------------
    # Axis algebra
    # ------------------------------------------------------------------

    def combine(self, other: "Index") -> "Index":
        """Concatenate *other* after this index."""
        return Index(self.coordinates + other.coordinates)

    def constrain(self, *axes: int) -> "Index":
        """Drop the given axes."""
        dropped = set(axes)
        return Index(
            coordinate for axis, coordinate in enumerate(self.coordinates) if axis not in dropped
        )

    def reorder(self, *mapping: int | Iterable[int]) -> "Index":
        """Permute axes so that new axis ``d`` holds old axis ``mapping[d]``."""
        if len(mapping) == 1 and not isinstance(mapping[0], int):
            mapping = tuple(mapping[0])  # type: ignore[arg-type]
        if len(mapping) != self.order:
            raise InvalidArgumentError(
                f"Mapping size [{len(mapping)}] is not equal to index order [{self.order}]"
            )
        if sorted(mapping) != list(range(self.order)):  # type: ignore[type-var]
            raise InvalidArgumentError(f"Mapping {tuple(mapping)} is not a permutation of the index axes")
        return Index(self.coordinates[axis] for axis in mapping)  # type: ignore[index]

    def transpose(self) -> "Index":
        """Reverse the axis order."""
        return Index(self.coordinates[::-1])

    def compute(self, fn: Callable[[int], int]) -> "Index":
        """Apply *fn* to every coordinate; the result is validated again."""
        return Index(fn(coordinate) for coordinate in self.coordinates)

    def extrude(self, coordinate: int) -> "Index":
        """Append one trailing axis at *coordinate*."""
        return self.expand(self.order + 1, coordinate)

    def expand(self, new_order: int, fill: int = 0) -> "Index":
        if new_order < self.order:
            raise InvalidArgumentError("New order must be greater than or equal to current order")
        return Index(self.coordinates + (fill,) * (new_order - self.order))

    def scale(self, factor: int) -> "Index":
        if factor < 0:
            raise InvalidArgumentError("Scale factor cannot be negative")
        return self.compute(lambda coordinate: coordinate * factor)

    def shift(self, offset: int) -> "Index":
        return self.compute(lambda coordinate: coordinate + offset)

    def clamp(self, minimum: int, maximum: int) -> "Index":
        if minimum > maximum:
            raise InvalidArgumentError("Minimum cannot be greater than maximum")
        return self.compute(lambda coordinate: min(maximum, max(minimum, coordinate)))

    def modulo(self, divisor: int) -> "Index":
        if divisor <= 0:
            raise InvalidArgumentError("Modulo divisor must be greater than 0")
        return self.compute(lambda coordinate: coordinate % divisor)

    def subtract(self, other: "Index") -> "Index":
        """Element-wise difference; a negative result is rejected."""
        self._assert_similar(other)
        return Index(a - b for a, b in zip(self.coordinates, other.coordinates))

    # ------------------------------------------------------------------
    # Metrics (equal order only)
    # ------------------------------------------------------------------

    def _differences(self, other: "Index") -> list[int]:
        self._assert_similar(other)
        return [a - b for a, b in zip(self.coordinates, other.coordinates)]

    def dot_product(self, other: "Index") -> int:
        self._assert_similar(other)
        return sum(a * b for a, b in zip(self.coordinates, other.coordinates))

    def euclidean_distance(self, other: "Index") -> float:
        """Straight line distance between the two indices."""
        return math.sqrt(sum(difference ** 2 for difference in self._differences(other)))

    def manhattan_distance(self, other: "Index") -> int:
        return sum(abs(difference) for difference in self._differences(other))

    def chebyshev_distance(self, other: "Index") -> int:
        return max((abs(difference) for difference in self._differences(other)), default=0)

    def minkowski_distance(self, other: "Index", power: float) -> float:
        if power <= 0:
            raise InvalidArgumentError("Power must be greater than 0")
        total = sum(abs(difference) ** power for difference in self._differences(other))
        return total ** (1.0 / power)

    def orthogonal_distance(self, other: "Index") -> int:
        """Number of axes on which the two indices disagree."""
        return sum(1 for difference in self._differences(other) if difference != 0)

    hamming_distance = orthogonal_distance

    def highest_order_difference(self, other: "Index") -> int:
        """1-based position of the most significant differing axis, 0 if identical."""
        self._assert_similar(other)
        for axis in reversed(range(self.order)):
            if self.coordinates[axis] != other.coordinates[axis]:
                return axis + 1
        return 0

    # ------------------------------------------------------------------
    # Ordering (last axis most significant)
    # ------------------------------------------------------------------

    def compare_to(self, other: "Index") -> int:
        """Return -1, 0 or 1 comparing from the highest axis down."""
        self._assert_similar(other)
        mine, theirs = self.coordinates[::-1], other.coordinates[::-1]
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: "Index") -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: "Index") -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: "Index") -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: "Index") -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self.compare_to(other) >= 0

    # ------------------------------------------------------------------
    # Container protocol & string representation
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.order

    def __iter__(self):
        return iter(self.coordinates)

    def __str__(self) -> str:
        return "(" + ", ".join(str(coordinate) for coordinate in self.coordinates) + ")"

    def __repr__(self) -> str:
        return f"Index{str(self)}"
